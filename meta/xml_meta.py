
from dataclasses import dataclass
from typing import Optional

from uml_types import AttributeName, Namespace


@dataclass
class XmlMetaModel:
    xmi_ns: Namespace = "http://schema.omg.org/spec/XMI/2.1"
    uml_ns: Namespace = "http://schema.omg.org/spec/UML/2.1"
    profile_ns: Namespace = "http://www.sparxsystems.com/profiles/thecustomprofile/1.0"
    input_encoding: str = "windows-1252"

    @property
    def xmi_id(self) -> AttributeName:
        return f"{{{self.xmi_ns}}}id"

    @property
    def xmi_idref(self) -> AttributeName:
        return f"{{{self.xmi_ns}}}idref"

    @property
    def xmi_type(self) -> AttributeName:
        return f"{{{self.xmi_ns}}}type"

    @staticmethod
    def split_tag(tag: str) -> tuple[Optional[Namespace], str]:
        """Split an lxml ``{ns}local`` tag into its namespace and local name."""
        if tag.startswith("{"):
            ns, _, local = tag[1:].partition("}")
            return ns, local
        return None, tag
