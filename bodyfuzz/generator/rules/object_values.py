"""Object fields — empty/null objects and whole-object field rewrites."""

from typing import Any, Optional

from bodyfuzz.generator.base import Mutation
from bodyfuzz.jsontree import JsonType, json_type

PREFIX = None  # labels stand alone


def applies(key: Optional[str], value: Any) -> bool:
    return json_type(value) == JsonType.OBJECT


def _flip(v: Any) -> Any:
    return 123 if isinstance(v, str) else "invalid"


def mutations(value: dict) -> list[Mutation]:
    return [
        Mutation("Empty Object", {}, "empty object"),
        Mutation("Null Object", None, "null"),
        # same body as Empty Object, reported separately
        Mutation("Object with Missing Required Fields", {},
                 "object missing required fields"),
        Mutation("Object with Additional Unknown Fields",
                 {**value, "unknownField": "unexpected"},
                 "object containing unknown fields"),
        Mutation("Object with Null Fields", {k: None for k in value},
                 "object having some fields set to null"),
        Mutation("Object with Empty String Fields", {k: "" for k in value},
                 "object having some fields set to empty strings"),
        Mutation("Object with Incorrect Field Types", {k: _flip(v) for k, v in value.items()},
                 "object having incorrect field types"),
    ]
