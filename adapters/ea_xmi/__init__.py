"""
Enterprise Architect XMI adapter.

Exposes a stable import path for the extractor:
adapters.ea_xmi.EaXmiParser
"""
from .parser import EaXmiParser
from .scope import ParseScope, ScopeKind

__all__ = ["EaXmiParser", "ParseScope", "ScopeKind"]
