"""Array fields — emptiness, element types, duplicates and length limits."""

from typing import Any, Optional

from bodyfuzz.generator.base import Mutation
from bodyfuzz.jsontree import UNDEFINED, JsonType, json_type

PREFIX = None  # labels stand alone

MAX_LENGTH = 100


def applies(key: Optional[str], value: Any) -> bool:
    return json_type(value) == JsonType.ARRAY


def mutations(value: list) -> list[Mutation]:
    first = value[:1]
    filler = value[0] if value else None

    return [
        Mutation("Empty Array", [], "empty array"),
        Mutation("Null Array", None, "null"),
        Mutation("Array with Undefined Element", [UNDEFINED],
                 "an array containing undefined"),
        Mutation("Array with Invalid Element Type", ["string", 123, True],
                 "array containing invalid element types"),
        Mutation("Array with Duplicate Elements", first * 2,
                 "array containing duplicates"),
        Mutation("Array Exceeding Max Length", [filler] * (MAX_LENGTH + 1),
                 f"array exceeding max length ({MAX_LENGTH})"),
        Mutation("Array with Mixed Valid and Invalid Elements", first + [None, "", 123],
                 "array containing mixed valid and invalid elements"),
    ]
