from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

ElementType = str


@dataclass
class UmlMetaModel:
    class_type: ElementType = "uml:Class"
    enum_type: ElementType = "uml:Enumeration"
    datatype_type: ElementType = "uml:DataType"
    primitive_type: ElementType = "uml:PrimitiveType"
    association_type: ElementType = "uml:Association"
    package_type: ElementType = "uml:Package"

    unlimited_multiplicity: Tuple[str, ...] = ("*", "-1")
    required_lower: str = "1"

    # Enterprise Architect extension vocabulary
    deprecated_tag: str = "DEPRECATED"
    association_connector_type: str = "Association"
    bidirectional_direction: str = "Bi-Directional"
    href_fragment_separator: str = "#"

    property_flag_attributes: Tuple[str, ...] = (
        "visibility", "isStatic", "isReadOnly", "isDerived",
        "isOrdered", "isUnique", "isDerivedUnion",
    )
    property_flag_prefix: str = "uml."
    ea_properties_prefix: str = "ea.properties."
    ea_project_prefix: str = "ea.project."
    ea_extended_prefix: str = "ea.extended."

    skipped_package_names: FrozenSet[str] = field(default_factory=lambda: frozenset({"Model", "FINT"}))
    unnamed_class: str = "Unnamed"

    @property
    def type_table_kinds(self) -> FrozenSet[ElementType]:
        return frozenset({self.primitive_type, self.datatype_type, self.enum_type})

    def is_unbounded(self, upper: str | None) -> bool:
        return upper in self.unlimited_multiplicity
