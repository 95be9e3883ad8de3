

from __future__ import annotations

from typing import Any, Optional

PARAGRAPH_SEPARATOR = "\n\n"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def set_if_absent(target: Any, attr: str, value: Optional[str]) -> bool:
    """Set ``target.attr`` to ``value`` unless it already holds a non-blank value.

    First non-blank writer wins. Returns True when the attribute was written.
    """
    if is_blank(value):
        return False
    if not is_blank(getattr(target, attr)):
        return False
    setattr(target, attr, value)
    return True


def append_paragraph(existing: Optional[str], value: Optional[str]) -> Optional[str]:
    if is_blank(value):
        return existing
    if is_blank(existing):
        return value
    return f"{existing}{PARAGRAPH_SEPARATOR}{value}"


def join_paragraphs(*values: Optional[str]) -> Optional[str]:
    joined: Optional[str] = None
    for value in values:
        joined = append_paragraph(joined, value)
    return joined


__all__ = ["PARAGRAPH_SEPARATOR", "is_blank", "set_if_absent", "append_paragraph", "join_paragraphs"]
