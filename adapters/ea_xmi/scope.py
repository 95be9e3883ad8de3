"""
Parse scope for the Enterprise Architect extension section.

Generic extension tags (``tags``/``tag``, ``properties``, ``documentation``,
``bounds``, ``stereotype``) mean different things depending on which of the
``connector``, ``element`` or ``attribute`` constructs encloses them. Exactly
one scope is current at a time; nested constructs shadow their parent until
they close.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from uml_types import XmiId


class ScopeKind(Enum):
    NONE = "none"
    CONNECTOR = "connector"
    ELEMENT = "element"
    ATTRIBUTE = "attribute"


@dataclass(frozen=True)
class ParseScope:
    kind: ScopeKind = ScopeKind.NONE
    ref: Optional[XmiId] = None

    @classmethod
    def open(cls, kind: ScopeKind, ref: Optional[str]) -> "ParseScope":
        # An unreferenced construct (e.g. a diagram element) is inert.
        if not ref or not ref.strip():
            return NO_SCOPE
        return cls(kind=kind, ref=XmiId(ref))

    def is_(self, kind: ScopeKind) -> bool:
        return self.kind is kind and self.ref is not None


NO_SCOPE = ParseScope()


class ScopeStack:
    def __init__(self) -> None:
        self._stack: List[ParseScope] = []
        # Scope whose ``tags`` container is currently open.
        self._tags_owner: Optional[ParseScope] = None
        self._tags_depth: Optional[int] = None

    @property
    def current(self) -> ParseScope:
        return self._stack[-1] if self._stack else NO_SCOPE

    def push(self, scope: ParseScope) -> None:
        self._stack.append(scope)

    def pop(self) -> ParseScope:
        scope = self._stack.pop() if self._stack else NO_SCOPE
        if self._tags_depth is not None and len(self._stack) < self._tags_depth:
            self.close_tags()
        return scope

    def open_tags(self) -> None:
        self._tags_owner = self.current
        self._tags_depth = len(self._stack)

    def close_tags(self) -> None:
        self._tags_owner = None
        self._tags_depth = None

    def in_tags(self) -> bool:
        """True when a ``tags`` container belongs to the current scope."""
        return (
            self._tags_owner is not None
            and self._tags_depth == len(self._stack)
            and self._tags_owner == self.current
        )


__all__ = ["ScopeKind", "ParseScope", "NO_SCOPE", "ScopeStack"]
