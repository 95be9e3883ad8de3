#!/usr/bin/env python3
"""
Types module for the xmi2kotlin project.
Centralized type definitions organized by domain.
"""

# Public types export
from .base import (
    XmlValue, Metadata, PackagePath
)

from .uml import (
    XmiId, ElementName, TypeName, MultiplicityValue,
    ConnectorSide
)

from .xml import (
    ElementAttributes, Namespace, AttributeName
)

__all__ = [
    # Base types
    'XmlValue', 'Metadata', 'PackagePath',

    # UML types
    'XmiId', 'ElementName', 'TypeName', 'MultiplicityValue',
    'ConnectorSide',

    # XML types
    'ElementAttributes', 'Namespace', 'AttributeName',
]
