"""
Walk a request body and emit one negative test case per (field, mutation).

Fields are visited in document order. For each field the type rules run
first, then the walker descends into nested objects (and object elements of
arrays), then the domain rules (email, UUID, date) run on the field itself.
Every case body is an independent deep clone of the root with exactly one
location replaced.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from bodyfuzz.generator.base import Mutation, TestCase
from bodyfuzz.generator.rules import DOMAIN_RULES, TYPE_RULES
from bodyfuzz.jsontree import ROOT, FieldPath, JsonType, json_type, set_at_path

logger = logging.getLogger(__name__)


def generate(root: Any) -> list[TestCase]:
    """
    Generate negative test cases for a JSON request body.

    Object roots walk their keys. Array roots walk their elements as
    top-level fields addressed ``[i]``; those have no key, so key-based
    rules never fire for them. Scalar and null roots yield no cases.
    """
    cases: list[TestCase] = []

    if isinstance(root, dict):
        _walk_object(root, ROOT, root, cases)
    elif isinstance(root, list):
        for i, item in enumerate(root):
            _visit(None, item, ROOT.index(i), root, cases)

    logger.debug("Generated %d test cases", len(cases))
    return cases


def _walk_object(obj: dict, parent: FieldPath, root: Any, cases: list[TestCase]):
    for key, value in obj.items():
        _visit(key, value, parent.key(key), root, cases)


def _visit(key: Optional[str], value: Any, path: FieldPath, root: Any, cases: list[TestCase]):
    vtype = json_type(value)

    type_rule = TYPE_RULES.get(vtype)
    if type_rule is not None and type_rule.applies(key, value):
        _emit(type_rule.mutations(value), path, root, cases)

    if vtype == JsonType.ARRAY:
        for i, item in enumerate(value):
            if isinstance(item, dict):
                _walk_object(item, path.index(i), root, cases)
    elif vtype == JsonType.OBJECT:
        _walk_object(value, path, root, cases)

    for rule in DOMAIN_RULES.values():
        if rule.applies(key, value):
            _emit(rule.mutations(value), path, root, cases)


def _emit(mutations: list[Mutation], path: FieldPath, root: Any, cases: list[TestCase]):
    for m in mutations:
        cases.append(TestCase(
            name=f"{path} - {m.label}",
            description=f"Testing {path} with {m.description}",
            body=set_at_path(root, path, m.value),
        ))
