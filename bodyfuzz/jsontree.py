"""
JSON value model — type classification, field paths, cloning and deep writes.

Request bodies are plain Python JSON values (dict, list, str, int, float,
bool, None). The one addition is UNDEFINED, an explicit "undefined array
element" marker that renders as null on the wire.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class JsonType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


class _Undefined:
    """Singleton marker for an undefined array slot."""

    _instance: "_Undefined | None" = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNDEFINED = _Undefined()


def json_type(value: Any) -> JsonType:
    """Classify a JSON value. bool is checked before numbers (bool subclasses int)."""
    if value is None or value is UNDEFINED:
        return JsonType.NULL
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, list):
        return JsonType.ARRAY
    if isinstance(value, dict):
        return JsonType.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


# ── Field paths ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Key:
    name: str


@dataclass(frozen=True)
class Index:
    position: int


Segment = Union[Key, Index]

_PLAIN_KEY = re.compile(r"[^.\[\]\"]+")


@dataclass(frozen=True)
class FieldPath:
    """Location inside a JSON tree, e.g. ``user.emails[0]`` or ``meta["a.b"]``."""
    segments: tuple[Segment, ...] = ()

    def key(self, name: str) -> FieldPath:
        return FieldPath(self.segments + (Key(name),))

    def index(self, position: int) -> FieldPath:
        return FieldPath(self.segments + (Index(position),))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __str__(self) -> str:
        out = ""
        for seg in self.segments:
            if isinstance(seg, Index):
                out += f"[{seg.position}]"
            elif _PLAIN_KEY.fullmatch(seg.name) is None:
                # quoted so "a.b" and a -> b never render alike
                out += f"[{json.dumps(seg.name)}]"
            elif out:
                out += f".{seg.name}"
            else:
                out = seg.name
        return out


ROOT = FieldPath()


# ── Cloning and writes ───────────────────────────────────────────────────────

def clone(value: Any) -> Any:
    """Structural deep clone. Scalars and UNDEFINED are immutable and shared."""
    if isinstance(value, dict):
        return {k: clone(v) for k, v in value.items()}
    if isinstance(value, list):
        return [clone(v) for v in value]
    return value


def set_at_path(root: Any, path: FieldPath, replacement: Any) -> Any:
    """
    Return a deep clone of root with the location at path replaced.

    Intermediate segments missing on the clone are created as empty objects.
    The replacement is cloned too, so the result shares nothing with either input.
    """
    if path.is_root:
        return clone(replacement)

    result = clone(root)
    current = result
    for seg in path.segments[:-1]:
        current = _descend(current, seg)

    last = path.segments[-1]
    if isinstance(last, Index) and isinstance(current, list):
        while len(current) <= last.position:
            current.append(None)
        current[last.position] = clone(replacement)
    else:
        current[_key_of(last)] = clone(replacement)
    return result


def _key_of(seg: Segment) -> str:
    return seg.name if isinstance(seg, Key) else str(seg.position)


def _descend(container: Any, seg: Segment) -> Any:
    if isinstance(seg, Index) and isinstance(container, list):
        while len(container) <= seg.position:
            container.append({})
        if not isinstance(container[seg.position], (dict, list)):
            container[seg.position] = {}
        return container[seg.position]

    key = _key_of(seg)
    child = container.get(key)
    if not isinstance(child, (dict, list)):
        child = {}
        container[key] = child
    return child


def to_jsonable(value: Any) -> Any:
    """Copy of value with UNDEFINED rendered as None, ready for json.dumps."""
    if value is UNDEFINED:
        return None
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value
