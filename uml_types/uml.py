#!/usr/bin/env python3
"""
UML-specific types and enums for the xmi2kotlin project.
"""

from typing import NewType
from enum import Enum

# ---------- Type aliases for UML elements ----------
XmiId = NewType('XmiId', str)
ElementName = NewType('ElementName', str)
TypeName = NewType('TypeName', str)
MultiplicityValue = NewType('MultiplicityValue', str)

# ---------- Enums for UML elements ----------
class ConnectorSide(Enum):
    """Which end of an EA connector is currently open."""
    SOURCE = "source"
    TARGET = "target"
