#!/usr/bin/env python3
"""
XML/XMI types for the xmi2kotlin project.
"""

from typing import Dict, NewType

# ---------- Type aliases for XML/XMI ----------
ElementAttributes = Dict[str, str]
Namespace = NewType('Namespace', str)
AttributeName = NewType('AttributeName', str)
