"""Empty/null replacements for string and number fields."""

from typing import Any, Optional

from bodyfuzz.generator.base import Mutation
from bodyfuzz.jsontree import JsonType, json_type

PREFIX = None  # labels stand alone


def applies(key: Optional[str], value: Any) -> bool:
    return json_type(value) in (JsonType.STRING, JsonType.NUMBER)


def mutations(value: Any) -> list[Mutation]:
    return [
        Mutation("Empty Value", "", "empty value"),
        Mutation("Null Value", None, "null"),
    ]
