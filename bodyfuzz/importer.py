"""
Bulk import — merge externally authored test cases into a base request body.

Input is a JSON array of objects shaped like::

    {"name": "...", "description": "...", "fields": {...},
     "expectedResponse": {"status": 400}}

Each entry's ``fields`` are shallow-merged over a deep clone of the base body.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from bodyfuzz.generator.base import TestCase
from bodyfuzz.jsontree import clone

logger = logging.getLogger(__name__)


class BulkImportError(ValueError):
    """Import text or base body can't be used. Message is user-facing."""


def parse_body(text: str | None) -> dict:
    """Parse the base request body; empty text means an empty object."""
    if not text or not text.strip():
        return {}
    try:
        body = json.loads(text)
    except json.JSONDecodeError as e:
        raise BulkImportError(f"Current request body is not valid JSON: {e.msg}") from e
    if not isinstance(body, dict):
        raise BulkImportError("Current request body must be a JSON object")
    return body


def import_cases(text: str, base_body: dict, default_status: int = 400) -> list[TestCase]:
    """Parse a JSON array of test cases and merge each over base_body."""
    try:
        imported = json.loads(text)
    except json.JSONDecodeError as e:
        raise BulkImportError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e

    if not isinstance(imported, list):
        raise BulkImportError("The imported data must be an array of test cases")
    if not isinstance(base_body, dict):
        raise BulkImportError("Current request body must be a JSON object")

    cases: list[TestCase] = []
    for index, entry in enumerate(imported):
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.debug("Skipping import entry %d: no name", index)
            continue

        body = clone(base_body)
        fields = entry.get("fields")
        if isinstance(fields, dict):
            body.update(clone(fields))

        cases.append(TestCase(
            name=str(entry["name"]),
            description=str(entry.get("description") or ""),
            body=body,
            expected_status=_expected_status(entry, default_status),
        ))

    logger.debug("Imported %d of %d entries", len(cases), len(imported))
    return cases


def _expected_status(entry: dict, default: int) -> int:
    expected = entry.get("expectedResponse")
    if isinstance(expected, dict):
        status = expected.get("status")
        if isinstance(status, int) and not isinstance(status, bool):
            return status
    return default


def sample_import(base_body: Any) -> str:
    """A two-entry import document built from the current body."""
    sample = [
        {
            "name": "Register - Valid User",
            "description": "Register with valid data",
            "fields": clone(base_body),
            "expectedResponse": {"status": 200},
        },
        {
            "name": "Register - Empty Fields",
            "description": "Test with empty fields",
            "fields": clone(base_body),
        },
    ]
    return json.dumps(sample, indent=2)
