"""
Streaming extractor for Enterprise Architect XMI 2.1 exports.

A single forward pass over lxml ``iterparse`` events populates a UmlModel in
document order. The UML section (``packagedElement`` and friends) provides
classes, properties, associations, packages and primitive types; the EA
extension section (``element``, ``attribute``, ``connector``) adds
documentation, deprecation tags, role names and bounds. Unknown elements are
ignored.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Callable, Dict, List, Optional, Union

from lxml import etree

from adapters.ea_xmi.scope import ParseScope, ScopeKind, ScopeStack
from core.errors import MalformedInputError
from core.resolver import resolve
from core.uml_model import UmlAssociation, UmlClass, UmlModel, UmlProperty
from meta import DEFAULT_META, MetaBundle
from uml_types import ConnectorSide, ElementName, PackagePath, TypeName, XmiId
from utils.values import PARAGRAPH_SEPARATOR, is_blank, set_if_absent
from utils.xml import non_blank_attrs, prefixed_attrs

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", BinaryIO]


@dataclass
class _PackagedFrame:
    xmi_type: str
    xmi_id: Optional[XmiId] = None
    opened_package: bool = False


class _Extraction:
    """State of one extraction run. Not reusable."""

    def __init__(self, meta: MetaBundle, skipped_package_names: frozenset[str]) -> None:
        self.xml = meta.xml
        self.uml = meta.uml
        self.skipped_package_names = skipped_package_names
        self.model = UmlModel()

        self.packaged: List[_PackagedFrame] = []
        self.package_paths: List[PackagePath] = []
        self.current_property: Optional[UmlProperty] = None

        self.comment_open = False
        self.comment_body: Optional[str] = None
        self.comment_target: Optional[str] = None
        self.pending_comments: Dict[str, List[str]] = {}

        self.scopes = ScopeStack()
        self.connector_is_association = False
        self.connector_side: Optional[ConnectorSide] = None

        self._start: Dict[str, Callable[[etree._Element], None]] = {
            "packagedElement": self.start_packaged_element,
            "ownedAttribute": self.start_owned_attribute,
            "ownedEnd": self.start_owned_end,
            "memberEnd": self.start_member_end,
            "type": self.start_type,
            "lowerValue": self.start_lower_value,
            "upperValue": self.start_upper_value,
            "generalization": self.start_generalization,
            "ownedComment": self.start_owned_comment,
            "annotatedElement": self.start_annotated_element,
            "connector": self.start_connector,
            "source": self.start_source,
            "target": self.start_target,
            "role": self.start_role,
            "tags": self.start_tags,
            "tag": self.start_tag,
            "element": self.start_element,
            "properties": self.start_properties,
            "project": self.start_project,
            "extendedProperties": self.start_extended_properties,
            "attribute": self.start_attribute,
            "documentation": self.start_documentation,
            "bounds": self.start_bounds,
            "stereotype": self.start_stereotype,
        }
        self._end: Dict[str, Callable[[], None]] = {
            "packagedElement": self.end_packaged_element,
            "ownedAttribute": self.end_property,
            "ownedEnd": self.end_property,
            "ownedComment": self.end_owned_comment,
            "connector": self.end_connector,
            "source": self.end_side,
            "target": self.end_side,
            "tags": self.scopes.close_tags,
            "element": self.end_scope,
            "attribute": self.end_scope,
        }

    # ---------- dispatch ----------

    def start(self, el: etree._Element) -> None:
        ns, local = self.xml.split_tag(el.tag)
        handler = self._start.get(local)
        if handler is not None:
            handler(el)
        elif ns == self.xml.profile_ns:
            self.apply_stereotype(local, el)

    def end(self, el: etree._Element) -> None:
        _, local = self.xml.split_tag(el.tag)
        handler = self._end.get(local)
        if handler is not None:
            handler()

    # ---------- UML section ----------

    def _innermost(self, xmi_type: str) -> Optional[XmiId]:
        for frame in reversed(self.packaged):
            if frame.xmi_type == xmi_type:
                return frame.xmi_id
        return None

    @property
    def current_class(self) -> Optional[UmlClass]:
        class_id = self._innermost(self.uml.class_type)
        return self.model.classes.get(class_id) if class_id else None

    @property
    def current_association(self) -> Optional[UmlAssociation]:
        association_id = self._innermost(self.uml.association_type)
        return self.model.associations.get(association_id) if association_id else None

    def start_packaged_element(self, el: etree._Element) -> None:
        xmi_type = el.get(self.xml.xmi_type) or ""
        xmi_id = el.get(self.xml.xmi_id)
        name = el.get("name")
        frame = _PackagedFrame(xmi_type=xmi_type, xmi_id=XmiId(xmi_id) if not is_blank(xmi_id) else None)
        self.packaged.append(frame)
        if frame.xmi_id is None:
            return

        if xmi_type == self.uml.package_type:
            path = self._package_path(name)
            self.package_paths.append(path)
            frame.opened_package = True
            self.model.packages[frame.xmi_id] = path
        elif xmi_type == self.uml.class_type:
            self.model.classes[frame.xmi_id] = UmlClass(
                id=frame.xmi_id,
                name=ElementName(name if not is_blank(name) else self.uml.unnamed_class),
                package_path=list(self.package_paths[-1]) if self.package_paths else [],
                abstract=el.get("isAbstract") == "true",
            )
        elif xmi_type == self.uml.association_type:
            self.model.associations[frame.xmi_id] = UmlAssociation(id=frame.xmi_id, name=name)
        elif xmi_type in self.uml.type_table_kinds and not is_blank(name):
            self.model.types[frame.xmi_id] = TypeName(name)

    def _package_path(self, name: Optional[str]) -> PackagePath:
        parent = self.package_paths[-1] if self.package_paths else []
        if is_blank(name) or name in self.skipped_package_names:
            return list(parent)
        return parent + [name]

    def end_packaged_element(self) -> None:
        if not self.packaged:
            return
        frame = self.packaged.pop()
        if frame.opened_package:
            self.package_paths.pop()

    def _read_property(self, el: etree._Element) -> UmlProperty:
        prop = UmlProperty(
            id=XmiId(el.get(self.xml.xmi_id) or "unknown"),
            name=el.get("name"),
            association_id=el.get("association"),
            aggregation=el.get("aggregation"),
        )
        prop.metadata.update(non_blank_attrs(self.uml.property_flag_prefix, el, self.uml.property_flag_attributes))
        self.model.properties[prop.id] = prop
        self.current_property = prop
        return prop

    def start_owned_attribute(self, el: etree._Element) -> None:
        umlclass = self.current_class
        if umlclass is not None:
            umlclass.properties.append(self._read_property(el))

    def start_owned_end(self, el: etree._Element) -> None:
        association = self.current_association
        if association is not None:
            association.owned_end_ids.append(self._read_property(el).id)

    def end_property(self) -> None:
        self.current_property = None

    def start_member_end(self, el: etree._Element) -> None:
        association = self.current_association
        ref = el.get(self.xml.xmi_idref)
        if association is not None and not is_blank(ref):
            association.member_end_ids.append(XmiId(ref))

    def start_type(self, el: etree._Element) -> None:
        prop = self.current_property
        if prop is None:
            return
        ref = el.get(self.xml.xmi_idref)
        if not is_blank(ref):
            prop.type_id = XmiId(ref)
        href = el.get("href")
        if not is_blank(href) and is_blank(prop.type_id):
            prop.href_type = href.rsplit(self.uml.href_fragment_separator, 1)[-1]

    def start_lower_value(self, el: etree._Element) -> None:
        if self.current_property is not None:
            self.current_property.lower = el.get("value")

    def start_upper_value(self, el: etree._Element) -> None:
        if self.current_property is not None:
            self.current_property.upper = el.get("value")

    def start_generalization(self, el: etree._Element) -> None:
        umlclass = self.current_class
        if umlclass is not None:
            set_if_absent(umlclass, "generalization_id", el.get("general"))

    def start_owned_comment(self, el: etree._Element) -> None:
        self.comment_open = True
        self.comment_body = el.get("body")
        self.comment_target = None

    def start_annotated_element(self, el: etree._Element) -> None:
        if self.comment_open:
            self.comment_target = el.get(self.xml.xmi_idref)

    def end_owned_comment(self) -> None:
        target = self.comment_target
        if is_blank(target):
            target = self._innermost(self.uml.class_type)
        if not is_blank(target) and not is_blank(self.comment_body):
            self.pending_comments.setdefault(target, []).append(self.comment_body)
        self.comment_open = False
        self.comment_body = None
        self.comment_target = None

    # ---------- EA extension section ----------

    @property
    def scope(self) -> ParseScope:
        return self.scopes.current

    def _scoped_class(self) -> Optional[UmlClass]:
        if self.scope.is_(ScopeKind.ELEMENT):
            return self.model.classes.get(self.scope.ref)
        return None

    def _scoped_property(self) -> Optional[UmlProperty]:
        if self.scope.is_(ScopeKind.ATTRIBUTE):
            return self.model.properties.get(self.scope.ref)
        return None

    def _scoped_association(self) -> Optional[UmlAssociation]:
        if self.scope.is_(ScopeKind.CONNECTOR):
            return self.model.associations.get(self.scope.ref)
        return None

    def start_connector(self, el: etree._Element) -> None:
        self.scopes.push(ParseScope.open(ScopeKind.CONNECTOR, el.get(self.xml.xmi_idref)))
        self.connector_is_association = self._scoped_association() is not None
        self.connector_side = None

    def end_connector(self) -> None:
        self.scopes.pop()
        self.connector_is_association = False
        self.connector_side = None

    def start_source(self, el: etree._Element) -> None:
        if self.scope.is_(ScopeKind.CONNECTOR):
            self.connector_side = ConnectorSide.SOURCE

    def start_target(self, el: etree._Element) -> None:
        if self.scope.is_(ScopeKind.CONNECTOR):
            self.connector_side = ConnectorSide.TARGET

    def end_side(self) -> None:
        self.connector_side = None

    def start_role(self, el: etree._Element) -> None:
        if not self.connector_is_association:
            return
        association = self._scoped_association()
        if association is None:
            return
        if self.connector_side is ConnectorSide.SOURCE:
            association.source_role_name = el.get("name")
        elif self.connector_side is ConnectorSide.TARGET:
            association.target_role_name = el.get("name")

    def start_element(self, el: etree._Element) -> None:
        self.scopes.push(ParseScope.open(ScopeKind.ELEMENT, el.get(self.xml.xmi_idref)))

    def start_attribute(self, el: etree._Element) -> None:
        self.scopes.push(ParseScope.open(ScopeKind.ATTRIBUTE, el.get(self.xml.xmi_idref)))

    def end_scope(self) -> None:
        self.scopes.pop()

    def start_tags(self, el: etree._Element) -> None:
        self.scopes.open_tags()

    def start_tag(self, el: etree._Element) -> None:
        if not self.scopes.in_tags() or el.get("name") != self.uml.deprecated_tag:
            return
        target: Union[UmlAssociation, UmlClass, UmlProperty, None] = (
            self._scoped_association() or self._scoped_class() or self._scoped_property()
        )
        if target is not None:
            target.deprecated = True
            target.deprecation_message = el.get("value")

    def start_properties(self, el: etree._Element) -> None:
        kind = self.scope.kind
        if kind is ScopeKind.CONNECTOR:
            if el.get("ea_type") == self.uml.association_connector_type:
                self.connector_is_association = True
                association = self._scoped_association()
                if association is not None:
                    association.bidirectional = el.get("direction") == self.uml.bidirectional_direction
        elif kind is ScopeKind.ATTRIBUTE:
            prop = self._scoped_property()
            if prop is not None:
                prop.metadata.update(prefixed_attrs(self.uml.ea_properties_prefix, el))
        elif kind is ScopeKind.ELEMENT:
            umlclass = self._scoped_class()
            if umlclass is not None:
                umlclass.add_documentation(el.get("documentation"))
                umlclass.metadata.update(prefixed_attrs(self.uml.ea_properties_prefix, el))

    def start_project(self, el: etree._Element) -> None:
        umlclass = self._scoped_class()
        if umlclass is not None:
            umlclass.metadata.update(prefixed_attrs(self.uml.ea_project_prefix, el))

    def start_extended_properties(self, el: etree._Element) -> None:
        umlclass = self._scoped_class()
        if umlclass is not None:
            umlclass.metadata.update(prefixed_attrs(self.uml.ea_extended_prefix, el))

    def start_documentation(self, el: etree._Element) -> None:
        text = el.get("value")
        prop = self._scoped_property()
        if prop is not None:
            prop.add_documentation(text)
            return
        if not self.connector_is_association:
            return
        association = self._scoped_association()
        if association is None:
            return
        if self.connector_side is ConnectorSide.SOURCE:
            association.add_source_documentation(text)
        elif self.connector_side is ConnectorSide.TARGET:
            association.add_target_documentation(text)

    def start_bounds(self, el: etree._Element) -> None:
        prop = self._scoped_property()
        if prop is not None:
            set_if_absent(prop, "lower", el.get("lower"))
            set_if_absent(prop, "upper", el.get("upper"))

    def start_stereotype(self, el: etree._Element) -> None:
        prop = self._scoped_property()
        stereotype = el.get("stereotype")
        if prop is not None and not is_blank(stereotype):
            prop.stereotypes.add(stereotype)

    def apply_stereotype(self, stereotype: str, el: etree._Element) -> None:
        class_id = el.get("base_Class")
        property_id = el.get("base_Property")
        if not is_blank(class_id) and class_id in self.model.classes:
            self.model.classes[class_id].stereotypes.add(stereotype)
        if not is_blank(property_id) and property_id in self.model.properties:
            self.model.properties[property_id].stereotypes.add(stereotype)

    # ---------- completion ----------

    def finish(self) -> UmlModel:
        for target_id, bodies in self.pending_comments.items():
            text = PARAGRAPH_SEPARATOR.join(bodies)
            if target_id in self.model.classes:
                self.model.classes[target_id].add_documentation(text)
            if target_id in self.model.properties:
                self.model.properties[target_id].add_documentation(text)
        return self.model


def _reject_doctype(el: etree._Element) -> None:
    """Refuse documents carrying a DOCTYPE; internal subsets would still expand entities."""
    docinfo = el.getroottree().docinfo
    if docinfo.doctype or docinfo.internalDTD is not None or docinfo.externalDTD is not None:
        raise MalformedInputError("DTD is not allowed in XMI input")


class EaXmiParser:
    """Extracts a UmlModel from an Enterprise Architect XMI 2.1 export."""

    def __init__(self, meta: Optional[MetaBundle] = None, encoding: Optional[str] = None,
                 skipped_package_names: Optional[frozenset[str]] = None) -> None:
        self.meta: MetaBundle = meta or DEFAULT_META
        self.encoding: str = encoding or self.meta.xml.input_encoding
        if skipped_package_names is None:
            skipped_package_names = self.meta.uml.skipped_package_names
        self.skipped_package_names = frozenset(skipped_package_names)

    def parse(self, source: Source, resolve_model: bool = True) -> UmlModel:
        """Extract (and by default resolve) the model in ``source``.

        ``source`` is a filesystem path or a binary file object.
        """
        if isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as f:
                return self.parse(f, resolve_model=resolve_model)

        extraction = _Extraction(self.meta, self.skipped_package_names)
        checked_doctype = False
        try:
            for event, el in etree.iterparse(
                source,
                events=("start", "end"),
                encoding=self.encoding,
                resolve_entities=False,
                load_dtd=False,
                no_network=True,
            ):
                if not checked_doctype:
                    _reject_doctype(el)
                    checked_doctype = True
                if not isinstance(el.tag, str):
                    continue
                if event == "start":
                    extraction.start(el)
                else:
                    extraction.end(el)
                    el.clear(keep_tail=True)
        except etree.XMLSyntaxError as e:
            raise MalformedInputError(f"Failed to parse XMI input: {e}") from e

        model = extraction.finish()
        logger.info(
            "Extracted %d classes, %d properties, %d associations",
            len(model.classes), len(model.properties), len(model.associations),
        )
        if resolve_model:
            resolve(model)
        return model


__all__ = ["EaXmiParser"]
