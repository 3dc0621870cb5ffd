import json
from dataclasses import dataclass
from typing import Any, NamedTuple

from bodyfuzz.jsontree import UNDEFINED


@dataclass(frozen=True)
class TestCase:
    """A single generated request-body test case."""
    name: str               # "<path> - <scenario>"
    description: str        # What this tests
    body: Any               # Full request body with one field mutated
    expected_status: int = 400

    __test__ = False  # not a pytest class


class Mutation(NamedTuple):
    """One row of a rule table: scenario label and replacement value."""
    label: str
    value: Any
    description: str = ""


def describe_value(value: Any) -> str:
    """Render a replacement value for a description line."""
    if isinstance(value, str):
        return value
    if value is UNDEFINED:
        return "undefined"
    return json.dumps(value)


def prefixed(prefix: str, rows: list[tuple[str, Any]]) -> list[Mutation]:
    """Turn (label, value) rows into "<prefix> (<label>)" mutations."""
    return [
        Mutation(f"{prefix} ({label})", val, f"{prefix.lower()}: {describe_value(val)}")
        for label, val in rows
    ]
