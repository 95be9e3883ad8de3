from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from core.errors import InheritanceCycleError
from meta import DEFAULT_META
from uml_types import ElementName, Metadata, MultiplicityValue, PackagePath, TypeName, XmiId
from utils.values import append_paragraph, join_paragraphs

# Fields filled by the extractor are "raw"; fields marked "derived" are owned
# by core.resolver and recomputed from the raw fields on every resolution run.


# ---------- Property structure ----------
@dataclass
class UmlProperty:
    id: XmiId
    name: Optional[str] = None
    type_id: Optional[XmiId] = None
    href_type: Optional[str] = None
    association_id: Optional[XmiId] = None
    aggregation: Optional[str] = None
    lower: Optional[MultiplicityValue] = None
    upper: Optional[MultiplicityValue] = None
    deprecated: bool = False
    deprecation_message: Optional[str] = None
    documentation: Optional[str] = None
    stereotypes: Set[str] = field(default_factory=set)
    metadata: Metadata = field(default_factory=dict)
    # derived
    type: Optional["UmlClass"] = field(default=None, repr=False, compare=False)
    primitive_type: Optional[TypeName] = field(default=None, compare=False)
    association: Optional["UmlAssociation"] = field(default=None, repr=False, compare=False)
    inverse: Optional["UmlProperty"] = field(default=None, repr=False, compare=False)
    association_documentation: Optional[str] = field(default=None, compare=False)

    def add_documentation(self, value: Optional[str]) -> None:
        self.documentation = append_paragraph(self.documentation, value)

    @property
    def full_documentation(self) -> Optional[str]:
        return join_paragraphs(self.documentation, self.association_documentation)

    def is_many(self) -> bool:
        return DEFAULT_META.uml.is_unbounded(self.upper)

    def is_required(self) -> bool:
        return self.lower == DEFAULT_META.uml.required_lower

    def is_nullable(self) -> bool:
        return not self.is_many() and not self.is_required()

    def sort_key(self) -> tuple[str, str]:
        return (self.name or self.id, self.id)


# ---------- Class structure ----------
@dataclass
class UmlClass:
    id: XmiId
    name: ElementName
    package_path: PackagePath = field(default_factory=list)
    abstract: bool = False
    deprecated: bool = False
    deprecation_message: Optional[str] = None
    properties: List[UmlProperty] = field(default_factory=list)
    generalization_id: Optional[XmiId] = None
    documentation: Optional[str] = None
    stereotypes: Set[str] = field(default_factory=set)
    metadata: Metadata = field(default_factory=dict)
    # derived
    generalization: Optional["UmlClass"] = field(default=None, repr=False, compare=False)

    def add_documentation(self, value: Optional[str]) -> None:
        self.documentation = append_paragraph(self.documentation, value)

    def is_complex_datatype(self, root_stereotype: str) -> bool:
        """Value types are neither abstract nor stereotyped as root entities."""
        return root_stereotype not in self.stereotypes and not self.abstract

    def sorted_properties(self) -> List[UmlProperty]:
        return sorted(self.properties, key=UmlProperty.sort_key)

    def sort_key(self) -> tuple[str, str]:
        return (self.name, self.id)


# ---------- Association structure ----------
@dataclass
class UmlAssociation:
    id: XmiId
    name: Optional[str] = None
    member_end_ids: List[XmiId] = field(default_factory=list)
    owned_end_ids: List[XmiId] = field(default_factory=list)
    bidirectional: bool = False
    deprecated: bool = False
    deprecation_message: Optional[str] = None
    source_role_name: Optional[str] = None
    target_role_name: Optional[str] = None
    source_documentation: Optional[str] = None
    target_documentation: Optional[str] = None
    metadata: Metadata = field(default_factory=dict)

    def add_source_documentation(self, value: Optional[str]) -> None:
        self.source_documentation = append_paragraph(self.source_documentation, value)

    def add_target_documentation(self, value: Optional[str]) -> None:
        self.target_documentation = append_paragraph(self.target_documentation, value)

    @property
    def end_ids(self) -> List[XmiId]:
        return self.member_end_ids + self.owned_end_ids


# ---------- Model returned by the extractor ----------
@dataclass
class UmlModel:
    classes: Dict[XmiId, UmlClass] = field(default_factory=dict)
    properties: Dict[XmiId, UmlProperty] = field(default_factory=dict)
    associations: Dict[XmiId, UmlAssociation] = field(default_factory=dict)
    packages: Dict[XmiId, PackagePath] = field(default_factory=dict)
    types: Dict[XmiId, TypeName] = field(default_factory=dict)

    def get_class_by_name(self, name: str) -> Optional[UmlClass]:
        """First class (in sorted order) carrying the given display name."""
        for umlclass in self.sorted_classes():
            if umlclass.name == name:
                return umlclass
        return None

    def sorted_classes(self) -> List[UmlClass]:
        return sorted(self.classes.values(), key=UmlClass.sort_key)

    def get_inheritance_hierarchy(self, umlclass: UmlClass) -> List[UmlClass]:
        """Ancestors of ``umlclass``, ancestor-most first, excluding the class itself.

        Raises InheritanceCycleError when the resolved generalization chain loops.
        """
        chain: List[UmlClass] = []
        seen: Set[XmiId] = {umlclass.id}
        current = umlclass.generalization
        while current is not None:
            if current.id in seen:
                names = [umlclass.name] + [c.name for c in chain] + [current.name]
                raise InheritanceCycleError(names)
            seen.add(current.id)
            chain.append(current)
            current = current.generalization
        chain.reverse()
        return chain

    def statistics(self) -> Dict[str, int]:
        return {
            'classes': len(self.classes),
            'properties': len(self.properties),
            'associations': len(self.associations),
            'packages': len(self.packages),
            'types': len(self.types),
        }
