#!/usr/bin/env python3
"""
Error taxonomy for the xmi2kotlin pipeline.

Every error is fatal: the pipeline never retries and never rolls back files
that were already written.
"""

from __future__ import annotations

from typing import Iterable


class UmlCodegenError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(UmlCodegenError, ValueError):
    """A required parameter is missing or invalid."""


class MalformedInputError(UmlCodegenError):
    """The input document is not well-formed XML."""


class GenerationIOError(UmlCodegenError, OSError):
    """A directory or file could not be written during generation."""


class InheritanceCycleError(UmlCodegenError):
    """A generalization chain loops back on itself."""

    def __init__(self, chain: Iterable[str]) -> None:
        self.chain = list(chain)
        super().__init__("Cyclic generalization: " + " -> ".join(self.chain))


__all__ = [
    "UmlCodegenError",
    "ConfigurationError",
    "MalformedInputError",
    "GenerationIOError",
    "InheritanceCycleError",
]
