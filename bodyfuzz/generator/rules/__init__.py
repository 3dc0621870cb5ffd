"""
Mutation rule sets.

Each rule module exposes ``applies(key, value)`` and ``mutations(value)``.
Type rules are keyed by JSON type; domain rules run in list order on top of
the type rules for any field whose key/value satisfies their predicate.
"""

from bodyfuzz.generator.rules import (
    array_values,
    boolean_values,
    date_values,
    email_values,
    object_values,
    scalar_values,
    uuid_values,
)
from bodyfuzz.jsontree import JsonType

TYPE_RULES = {
    JsonType.STRING: scalar_values,
    JsonType.NUMBER: scalar_values,
    JsonType.BOOLEAN: boolean_values,
    JsonType.ARRAY: array_values,
    JsonType.OBJECT: object_values,
}

DOMAIN_RULES = {
    "email": email_values,
    "uuid": uuid_values,
    "date": date_values,
}

__all__ = [
    "TYPE_RULES",
    "DOMAIN_RULES",
    "array_values",
    "boolean_values",
    "date_values",
    "email_values",
    "object_values",
    "scalar_values",
    "uuid_values",
]
