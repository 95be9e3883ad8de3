from .xml_meta import XmlMetaModel
from .uml_meta import UmlMetaModel
from .default_model import DEFAULT_META, MetaBundle

__all__ = [
    "XmlMetaModel",
    "UmlMetaModel",
    "MetaBundle",
    "DEFAULT_META",
]
