#!/usr/bin/env python3
"""
Kotlin domain class generator.

Consumes a resolved UmlModel and writes one source file per class:
<output>/<package as directories>/<ClassName><extension>.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set

from app.config import MarkerConfig
from core.uml_model import UmlClass, UmlModel, UmlProperty
from gen.kotlin.naming import KotlinNaming, deprecation_message
from gen.kotlin.writer import KotlinClass, KotlinParameter, KotlinWriter, write_source
from types_profiles import TargetProfile, load_profiles
from uml_types import XmiId

logger = logging.getLogger(__name__)

KOTLIN_PACKAGE = "kotlin"
KOTLIN_COLLECTIONS_PACKAGE = "kotlin.collections"


def builtin_types(profile: TargetProfile) -> Dict[str, str]:
    """Simple names the profile emits without an import, mapped to their Kotlin package."""
    builtins: Dict[str, str] = {}
    for name in list(profile.primitives.values()) + [profile.default_type]:
        if "." not in name:
            builtins[name] = KOTLIN_PACKAGE
    for props in profile.collections.values():
        builtins[props.type] = KOTLIN_COLLECTIONS_PACKAGE
    return builtins


class ImportScope:
    """Type references of one source file.

    A simple name is bound to the first fully qualified name that uses it;
    later references to a different class with the same simple name stay
    fully qualified. The file's own class is bound first, then ``builtins``
    (simple name -> package), which never produce imports.
    """

    def __init__(self, package: str, class_name: str,
                 builtins: Optional[Dict[str, str]] = None) -> None:
        self.package = package
        self._bound: Dict[str, str] = {class_name: f"{package}.{class_name}"}
        for name, builtin_package in (builtins or {}).items():
            self._bound.setdefault(name, f"{builtin_package}.{name}")
        self._imports: List[str] = []

    def reference(self, package: str, name: str) -> str:
        fqn = f"{package}.{name}" if package else name
        bound = self._bound.get(name)
        if bound is None:
            self._bound[name] = fqn
            if package and package != self.package:
                self._imports.append(fqn)
            return name
        return name if bound == fqn else fqn

    @property
    def imports(self) -> List[str]:
        return sorted(set(self._imports))


@dataclass
class GeneratedFile:
    path: str
    content: str


class DomainClassGenerator:
    def __init__(self, model: UmlModel, package_name: str,
                 profile: Optional[TargetProfile] = None,
                 markers: Optional[MarkerConfig] = None) -> None:
        self.model = model
        self.package_name = package_name
        self.profile: TargetProfile = profile or load_profiles()
        self.markers: MarkerConfig = markers or MarkerConfig()
        self.naming = KotlinNaming(self.profile)
        self.builtins = builtin_types(self.profile)

        self.class_name_by_id: Dict[XmiId, str] = {
            c.id: self.naming.class_name(c.name) for c in model.classes.values()
        }
        self.package_by_id: Dict[XmiId, str] = {
            c.id: self.naming.class_package(package_name, c.package_path) for c in model.classes.values()
        }

    # ---------- planning ----------

    def is_complex_datatype(self, umlclass: UmlClass) -> bool:
        return umlclass.is_complex_datatype(self.markers.root_entity_stereotype)

    def _builtin_reference(self, scope: ImportScope, name: str) -> str:
        package = self.builtins.get(name)
        return scope.reference(package, name) if package else name

    def _field_type(self, prop: UmlProperty, owner: UmlClass, scope: ImportScope) -> tuple[str, Optional[str]]:
        """Kotlin type and default value expression for ``prop`` declared on ``owner``."""
        if prop.type is not None:
            base = scope.reference(self.package_by_id[prop.type.id], self.class_name_by_id[prop.type.id])
        else:
            base = self._builtin_reference(scope, self.profile.primitive(prop.primitive_type))
        if prop.is_many():
            collection = self.profile.collection(ordered=self.is_complex_datatype(owner))
            collection_type = self._builtin_reference(scope, collection.type)
            return f"{collection_type}<{base}>", collection.empty
        if prop.is_required():
            return base, None
        return f"{base}?", "null"

    def _parameter(self, prop: UmlProperty, owner: UmlClass, scope: ImportScope, inherited: bool) -> KotlinParameter:
        type_name, default = self._field_type(prop, owner, scope)
        if inherited:
            return KotlinParameter(
                name=self.naming.property_name(prop.name),
                type=type_name,
                default=default,
                is_property=False,
            )
        return KotlinParameter(
            name=self.naming.property_name(prop.name),
            type=type_name,
            default=default,
            documentation=prop.full_documentation,
            deprecation=deprecation_message(prop.deprecation_message) if prop.deprecated else None,
        )

    def plan(self, umlclass: UmlClass) -> KotlinClass:
        package = self.package_by_id[umlclass.id]
        name = self.class_name_by_id[umlclass.id]
        scope = ImportScope(package, name, self.builtins)

        inherited: List[KotlinParameter] = []
        for ancestor in self.model.get_inheritance_hierarchy(umlclass):
            for prop in ancestor.sorted_properties():
                inherited.append(self._parameter(prop, ancestor, scope, inherited=True))
        own = [self._parameter(p, umlclass, scope, inherited=False) for p in umlclass.sorted_properties()]

        superclass: Optional[str] = None
        interfaces: List[str] = []
        if umlclass.generalization is not None:
            parent = umlclass.generalization
            superclass = scope.reference(self.package_by_id[parent.id], self.class_name_by_id[parent.id])
        else:
            interfaces.append(scope.reference(self.markers.package, self.markers.root_entity))
        if self.is_complex_datatype(umlclass):
            interfaces.append(scope.reference(self.markers.package, self.markers.complex_datatype))

        return KotlinClass(
            package=package,
            name=name,
            abstract=umlclass.abstract,
            parameters=inherited + own,
            superclass=superclass,
            superclass_arguments=[p.name for p in inherited],
            interfaces=interfaces,
            imports=scope.imports,
            documentation=umlclass.documentation,
            deprecation=deprecation_message(umlclass.deprecation_message) if umlclass.deprecated else None,
        )

    # ---------- rendering ----------

    def render(self, umlclass: UmlClass) -> str:
        writer = KotlinWriter()
        writer.write_class(self.plan(umlclass))
        return writer.getvalue()

    def source_path(self, output_directory: str, umlclass: UmlClass) -> str:
        package_dir = os.path.join(output_directory, *self.package_by_id[umlclass.id].split("."))
        return os.path.join(package_dir, self.class_name_by_id[umlclass.id] + self.profile.file_extension)

    def iter_files(self, output_directory: str) -> Iterator[GeneratedFile]:
        for umlclass in self.model.sorted_classes():
            yield GeneratedFile(
                path=self.source_path(output_directory, umlclass),
                content=self.render(umlclass),
            )

    def generate(self, output_directory: str) -> int:
        written: Set[str] = set()
        count = 0
        for generated in self.iter_files(output_directory):
            if generated.path in written:
                logger.warning("Overwriting %s: two classes share the generated name", generated.path)
            write_source(generated.path, generated.content)
            written.add(generated.path)
            count += 1
        logger.info("Generated %d domain classes in %s", count, output_directory)
        return count


__all__ = ["DomainClassGenerator", "ImportScope", "GeneratedFile", "builtin_types"]
