"""Boolean fields — empty/null plus values that merely look boolean."""

from typing import Any, Optional

from bodyfuzz.generator.base import Mutation, prefixed
from bodyfuzz.jsontree import JsonType, json_type

PREFIX = "Invalid Boolean"

INVALID_BOOLEANS = [
    ("Number 0", 0),
    ("Number 1", 1),
    ("Number 2", 2),
    ("String 'true'", "true"),
    ("String 'false'", "false"),
    ("String 'yes'", "yes"),
    ("String 'no'", "no"),
    ("Empty Array", []),
    ("Empty Object", {}),
]


def applies(key: Optional[str], value: Any) -> bool:
    return json_type(value) == JsonType.BOOLEAN


def mutations(value: Any) -> list[Mutation]:
    return [
        Mutation("Empty Value", "", "empty value"),
        Mutation("Null Value", None, "null"),
    ] + prefixed(PREFIX, INVALID_BOOLEANS)
