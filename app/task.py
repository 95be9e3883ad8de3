"""
generateDomainClasses: the single invocation surface of the pipeline.

input XMI path + output directory + root package -> one Kotlin file per class.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from adapters.ea_xmi import EaXmiParser
from app.config import GeneratorConfig
from gen.kotlin.generator import DomainClassGenerator
from types_profiles import load_profiles

logger = logging.getLogger(__name__)


def run(config: GeneratorConfig) -> int:
    """Run the pipeline on a copy of ``config``; the caller's object is left untouched."""
    config = replace(config)
    config.validate()
    profile = load_profiles(config.types_profiles)
    logger.info("Generating %s domain classes from %s into package %s",
                profile.name, config.input_path, config.package_name)
    parser = EaXmiParser(
        encoding=config.input_encoding,
        skipped_package_names=frozenset(config.skipped_package_names),
    )
    model = parser.parse(config.input_path)
    generator = DomainClassGenerator(model, config.package_name, profile=profile, markers=config.markers)
    return generator.generate(config.output_directory)


def generate_domain_classes(input_path: Optional[str], output_directory: Optional[str],
                            package_name: Optional[str],
                            config: Optional[GeneratorConfig] = None) -> int:
    """Generate domain classes and return how many were written.

    Raises ConfigurationError for missing or invalid inputs before any file is
    written, MalformedInputError for unparsable input and GenerationIOError
    when a file cannot be written.
    """
    cfg = replace(
        config or GeneratorConfig(),
        input_path=input_path,
        output_directory=output_directory,
        package_name=package_name,
    )
    return run(cfg)


__all__ = ["run", "generate_domain_classes"]
