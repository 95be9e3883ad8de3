from __future__ import annotations

from typing import Iterable

from lxml import etree

from uml_types import ElementAttributes, XmlValue


def xml_text(v: XmlValue) -> str:
    return "" if v is None else str(v)


def local_attrs(el: etree._Element) -> Iterable[tuple[str, str]]:
    for key, value in el.attrib.items():
        key = str(key)
        if key.startswith("{"):
            key = key.split("}", 1)[1]
        yield key, xml_text(value)


def prefixed_attrs(prefix: str, el: etree._Element) -> ElementAttributes:
    """All attributes of ``el`` keyed by ``prefix`` + local attribute name."""
    return {f"{prefix}{key}": value for key, value in local_attrs(el)}


def non_blank_attrs(prefix: str, el: etree._Element, names: Iterable[str]) -> ElementAttributes:
    attrs: ElementAttributes = {}
    for name in names:
        value = el.get(name)
        if value is not None and value.strip():
            attrs[f"{prefix}{name}"] = value
    return attrs


__all__ = ["xml_text", "local_attrs", "prefixed_attrs", "non_blank_attrs"]
