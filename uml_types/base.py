#!/usr/bin/env python3
"""
Base types shared across the xmi2kotlin project.
"""

from typing import Dict, List, Union

# ---------- Common type aliases ----------
XmlValue = Union[str, int, float, bool, None]
Metadata = Dict[str, str]
PackagePath = List[str]
