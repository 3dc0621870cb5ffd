"""UUID-valued strings — triggered by the value, not the key."""

import re
from typing import Any, Optional

from bodyfuzz.generator.base import Mutation, prefixed

PREFIX = "Invalid UUID"

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

INVALID_UUIDS = [
    ("Empty String", ""),
    ("Too Short", "123"),
    ("Bad Format", "bad-uuid"),
    ("Number Instead", 123),
    ("Empty Array", []),
    ("Empty Object", {}),
    ("Null", None),
]


def is_uuid(value: Any) -> bool:
    return isinstance(value, str) and UUID_RE.fullmatch(value) is not None


def applies(key: Optional[str], value: Any) -> bool:
    return is_uuid(value)


def mutations(value: Any) -> list[Mutation]:
    return prefixed(PREFIX, INVALID_UUIDS)
