"""
Identifier sanitization for generated Kotlin sources.

The algorithms are target-neutral; the reserved word set comes from the
target profile.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional

from types_profiles import TargetProfile

TRANSLITERATIONS = {
    "æ": "ae", "Æ": "Ae",
    "ø": "o", "Ø": "O",
    "å": "a", "Å": "A",
    "é": "e", "É": "E",
    "è": "e", "È": "E",
    "ü": "u", "Ü": "U",
    "ö": "o", "Ö": "O",
    "ä": "a", "Ä": "A",
}
_TRANSLITERATION_TABLE = str.maketrans(TRANSLITERATIONS)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")

UNNAMED_CLASS = "Unnamed"
UNNAMED_PROPERTY = "unnamed"
DEFAULT_PACKAGE_SEGMENT = "model"
DEFAULT_DEPRECATION_MESSAGE = "Deprecated"


def transliterate(value: str) -> str:
    return value.translate(_TRANSLITERATION_TABLE)


def _tokens(value: Optional[str]) -> List[str]:
    raw = transliterate((value or "").strip())
    return _NON_ALNUM.sub(" ", raw).split()


def _capitalize(token: str) -> str:
    lower = token.lower()
    return lower[:1].upper() + lower[1:]


class KotlinNaming:
    def __init__(self, profile: TargetProfile) -> None:
        self.profile = profile

    def class_name(self, name: Optional[str]) -> str:
        base = "".join(_capitalize(t) for t in _tokens(name)) or UNNAMED_CLASS
        safe = f"C{base}" if base[0].isdigit() else base
        return f"{safe}Type" if self.profile.is_reserved(safe) else safe

    def property_name(self, name: Optional[str]) -> str:
        tokens = _tokens(name)
        base = "".join(
            t.lower() if i == 0 else _capitalize(t) for i, t in enumerate(tokens)
        ) or UNNAMED_PROPERTY
        safe = f"_{base}" if base[0].isdigit() else base
        return f"`{safe}`" if self.profile.is_reserved(safe) else safe

    def package_segment(self, value: str) -> str:
        cleaned = _NON_ALNUM.sub("_", transliterate(value.strip())).strip("_").lower()
        if not cleaned:
            return DEFAULT_PACKAGE_SEGMENT
        safe = f"p{cleaned}" if cleaned[0].isdigit() else cleaned
        return f"{safe}_pkg" if self.profile.is_reserved(safe) else safe

    def class_package(self, base_package: str, package_path: Iterable[str]) -> str:
        segments = [self.package_segment(p) for p in package_path]
        if not segments:
            return base_package
        return ".".join([base_package] + segments)


def escape_string_literal(value: str) -> str:
    return (
        value
        .replace("\\", "\\\\")
        .replace("\"", "\\\"")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("$", "\\$")
    )


def deprecation_message(message: Optional[str]) -> str:
    text = (message or "").strip() or DEFAULT_DEPRECATION_MESSAGE
    if text.endswith("."):
        text = text[:-1]
    return escape_string_literal(text)


def escape_comment(text: str) -> str:
    """Break up sequences that would open or close a block comment early."""
    return text.replace("*/", "*&#47;").replace("/*", "&#47;*")


__all__ = [
    "KotlinNaming",
    "transliterate",
    "escape_string_literal",
    "deprecation_message",
    "escape_comment",
]
