#!/usr/bin/env python3
"""
Core module: the in-memory UML model, its reference resolver and the error taxonomy.
"""

from .errors import (
    UmlCodegenError, ConfigurationError, MalformedInputError,
    GenerationIOError, InheritanceCycleError
)
from .uml_model import UmlModel, UmlClass, UmlProperty, UmlAssociation
from .resolver import resolve, resolve_references, apply_association_deprecations

__all__ = [
    'UmlModel', 'UmlClass', 'UmlProperty', 'UmlAssociation',
    'resolve', 'resolve_references', 'apply_association_deprecations',
    'UmlCodegenError', 'ConfigurationError', 'MalformedInputError',
    'GenerationIOError', 'InheritanceCycleError',
]
