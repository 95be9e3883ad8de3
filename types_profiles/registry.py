from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, FrozenSet
import os

import orjson
import yaml

from core.errors import ConfigurationError

ORDERED = "ordered"
UNIQUE = "unique"


@dataclass
class CollectionProps:
    type: str
    empty: str


@dataclass
class TargetProfile:
    """Per-target naming and type tables. Later profiles override earlier ones."""
    name: str = "kotlin"
    file_extension: str = ".kt"
    default_type: str = "String"
    primitives: Dict[str, str] = field(default_factory=dict)
    collections: Dict[str, CollectionProps] = field(default_factory=dict)
    reserved_words: FrozenSet[str] = frozenset()

    def merge(self, profile: Dict[str, Any]) -> None:
        self.name = profile.get("name", self.name)
        self.file_extension = profile.get("file_extension", self.file_extension)
        self.default_type = profile.get("default_type", self.default_type)
        for key, value in profile.get("primitives", {}).items():
            self.primitives[key.strip().lower()] = value
        for kind, props in profile.get("collections", {}).items():
            self.collections[kind] = CollectionProps(
                type=props.get("type", "List"),
                empty=props.get("empty", "emptyList()"),
            )
        self.reserved_words = self.reserved_words | frozenset(profile.get("reserved_words", []))

    def primitive(self, raw: Optional[str]) -> str:
        if raw is None:
            return self.default_type
        return self.primitives.get(raw.strip().lower(), self.default_type)

    def collection(self, ordered: bool) -> CollectionProps:
        kind = ORDERED if ordered else UNIQUE
        if kind not in self.collections:
            raise ConfigurationError(f"Target profile '{self.name}' defines no '{kind}' collection")
        return self.collections[kind]

    def is_reserved(self, word: str) -> bool:
        return word in self.reserved_words


def default_profile_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "kotlin.json")


def _load_single_profile(path: str) -> Dict[str, Any]:
    if path.lower().endswith(('.yml', '.yaml')):
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    with open(path, 'rb') as f:
        return orjson.loads(f.read())


def load_profiles(paths: Optional[List[str]] = None, include_default: bool = True) -> TargetProfile:
    profile = TargetProfile()
    all_paths: List[str] = [default_profile_path()] if include_default else []
    all_paths.extend(paths or [])
    for p in all_paths:
        if not p:
            continue
        if not os.path.isfile(p):
            raise ConfigurationError(f"Type profile file not found: {p}")
        profile.merge(_load_single_profile(p))
    return profile
