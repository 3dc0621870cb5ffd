"""Date fields — key contains "date" and the value is an ISO-8601 date."""

import re
from typing import Any, Optional

from bodyfuzz.generator.base import Mutation, prefixed

PREFIX = "Invalid Date"

ISO_DATE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?)?$"
)

INVALID_DATES = [
    ("Empty String", ""),
    ("Not a Date", "not-a-date"),
    ("Invalid Format", "32/13/2024"),
    ("Wrong Format", "2024-13-01"),
    ("Number Instead", 12345),
    ("Empty Array", []),
    ("Empty Object", {}),
    ("Null", None),
    ("Boolean True", True),
    ("Boolean False", False),
    ("Whitespace String", "   "),
    ("Invalid ISO Date", "2024-02-30T00:00:00Z"),  # Feb 30
]


def is_iso_date(value: Any) -> bool:
    return isinstance(value, str) and ISO_DATE_RE.fullmatch(value) is not None


def applies(key: Optional[str], value: Any) -> bool:
    return key is not None and "date" in key.lower() and is_iso_date(value)


def mutations(value: Any) -> list[Mutation]:
    return prefixed(PREFIX, INVALID_DATES)
