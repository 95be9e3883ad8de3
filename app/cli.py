#!/usr/bin/env python3
"""
CLI entrypoint for xmi2kotlin.

Usage:
  python -m app.cli --input model.xml --output build/generated --package no.fint.model [flags]

Flags:
  --types-profile PATH   (repeatable)
  --encoding ENC
  --verbose / --quiet
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from app.config import GeneratorConfig
from app.task import run
from core.errors import UmlCodegenError
from utils.logging_config import configure_logging, level_for

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xmi2kotlin",
        description="Generate Kotlin domain classes from an Enterprise Architect XMI export.",
    )
    parser.add_argument('--input', dest='input_path', help='Path to UML XMI input file.')
    parser.add_argument('--output', dest='output_directory', help='Output directory for generated Kotlin sources.')
    parser.add_argument('--package', dest='package_name', help='Kotlin package namespace for generated sources.')
    parser.add_argument('--types-profile', action='append', default=[],
                        help='Extra target profile (JSON or YAML), merged over the bundled Kotlin profile')
    parser.add_argument('--encoding', default=None, help='Input encoding override (default windows-1252)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.add_argument('--quiet', '-q', action='store_true', help='Warnings and errors only')
    return parser


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    cfg = GeneratorConfig(
        input_path=args.input_path,
        output_directory=args.output_directory,
        package_name=args.package_name,
        types_profiles=list(args.types_profile) or None,
    )
    if args.encoding:
        cfg.input_encoding = args.encoding
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(level_for(verbose=args.verbose, quiet=args.quiet))

    try:
        count = run(config_from_args(args))
    except UmlCodegenError as e:
        logger.error("%s", e)
        return 1
    print(f"Generated {count} domain classes in {args.output_directory}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
