from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from core.errors import GenerationIOError
from gen.kotlin.naming import escape_comment

logger = logging.getLogger(__name__)

INDENT = "    "


@dataclass
class KotlinParameter:
    name: str
    type: str
    default: Optional[str] = None
    is_property: bool = True
    documentation: Optional[str] = None
    deprecation: Optional[str] = None

    def declaration(self) -> str:
        keyword = "val " if self.is_property else ""
        default = f" = {self.default}" if self.default is not None else ""
        return f"{keyword}{self.name}: {self.type}{default}"


@dataclass
class KotlinClass:
    package: str
    name: str
    abstract: bool = False
    parameters: List[KotlinParameter] = field(default_factory=list)
    superclass: Optional[str] = None
    superclass_arguments: List[str] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    documentation: Optional[str] = None
    deprecation: Optional[str] = None


class KotlinWriter:
    """Renders a KotlinClass as source text."""

    def __init__(self) -> None:
        self._lines: List[str] = []

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n"

    def write_package(self, name: str) -> None:
        self._lines.append(f"package {name}")
        self._lines.append("")

    def write_imports(self, imports: Iterable[str]) -> None:
        ordered = sorted(set(imports))
        if not ordered:
            return
        for imp in ordered:
            self._lines.append(f"import {imp}")
        self._lines.append("")

    def write_doc(self, text: Optional[str], indent: str = "") -> None:
        if text is None or not text.strip():
            return
        self._lines.append(f"{indent}/**")
        for line in escape_comment(text.strip()).splitlines():
            line = line.rstrip()
            self._lines.append(f"{indent} * {line}" if line else f"{indent} *")
        self._lines.append(f"{indent} */")

    def write_deprecation(self, message: Optional[str], indent: str = "") -> None:
        if message is not None:
            self._lines.append(f"{indent}@Deprecated(\"{message}\")")

    def write_class(self, cls: KotlinClass) -> None:
        self.write_package(cls.package)
        self.write_imports(cls.imports)
        self.write_doc(cls.documentation)
        self.write_deprecation(cls.deprecation)

        modifier = "abstract" if cls.abstract else "open"
        header = f"{modifier} class {cls.name}"
        if cls.parameters:
            self._lines.append(f"{header}(")
            last = len(cls.parameters) - 1
            for i, param in enumerate(cls.parameters):
                self.write_doc(param.documentation, INDENT)
                self.write_deprecation(param.deprecation, INDENT)
                self._lines.append(f"{INDENT}{param.declaration()}{',' if i < last else ''}")
            header = ")"
        supertypes = self._supertypes(cls)
        self._lines.append(f"{header} : {', '.join(supertypes)}" if supertypes else header)

    @staticmethod
    def _supertypes(cls: KotlinClass) -> List[str]:
        supertypes: List[str] = []
        if cls.superclass is not None:
            args = ", ".join(f"{a} = {a}" for a in cls.superclass_arguments)
            supertypes.append(f"{cls.superclass}({args})")
        supertypes.extend(cls.interfaces)
        return supertypes


def write_source(path: str, content: str) -> None:
    directory = os.path.dirname(path)
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise GenerationIOError(f"generateDomainClasses: failed to create output dir: {directory}") from e
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        raise GenerationIOError(f"generateDomainClasses: failed to write {path}: {e}") from e
    logger.debug("Wrote %s", path)


__all__ = ["KotlinParameter", "KotlinClass", "KotlinWriter", "write_source", "INDENT"]
