from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, List, Tuple

from core.errors import ConfigurationError
from meta import DEFAULT_META


@dataclass
class MarkerConfig:
    package: str = "no.fint.model"
    root_entity: str = "FintModelObject"          # supertype of every class without a superclass
    complex_datatype: str = "FintComplexDatatypeObject"
    root_entity_stereotype: str = "hovedklasse"   # classes with this stereotype are not value types


@dataclass
class GeneratorConfig:
    # ===== REQUIRED INPUTS =====
    input_path: Optional[str] = None
    output_directory: Optional[str] = None
    package_name: Optional[str] = None

    # ===== PARSING =====
    input_encoding: str = DEFAULT_META.xml.input_encoding
    skipped_package_names: Tuple[str, ...] = tuple(sorted(DEFAULT_META.uml.skipped_package_names))

    # ===== GENERATION =====
    markers: MarkerConfig = field(default_factory=MarkerConfig)
    types_profiles: Optional[List[str]] = None    # extra target profiles (JSON/YAML) merged over kotlin.json

    def validate(self) -> None:
        """Check required inputs before any generation work; raise ConfigurationError on the first problem."""
        if self.input_path is None or not str(self.input_path).strip():
            raise ConfigurationError("generateDomainClasses: input file is required.")
        if not os.path.isfile(self.input_path):
            raise ConfigurationError(f"generateDomainClasses: input file does not exist: {self.input_path}")
        if self.output_directory is None or not str(self.output_directory).strip():
            raise ConfigurationError("generateDomainClasses: output directory is required.")
        if self.package_name is None or not self.package_name.strip():
            raise ConfigurationError("generateDomainClasses: package namespace is required.")
        self.package_name = self.package_name.strip()
        try:
            os.makedirs(self.output_directory, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"generateDomainClasses: failed to create output dir: {self.output_directory}"
            ) from e


__all__ = [
    "MarkerConfig",
    "GeneratorConfig",
]
