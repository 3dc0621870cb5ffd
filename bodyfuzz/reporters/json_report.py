"""
JSON Reporter — writes run reports and generated cases as JSON.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from bodyfuzz import __version__
from bodyfuzz.generator.base import TestCase
from bodyfuzz.jsontree import to_jsonable
from bodyfuzz.models import RunReport


def cases_to_json(cases: list[TestCase]) -> list[dict]:
    """Serializable form of generated cases (undefined elements become null)."""
    return [
        {
            "name": case.name,
            "description": case.description,
            "body": to_jsonable(case.body),
            "expectedStatus": case.expected_status,
        }
        for case in cases
    ]


def save_cases(cases: list[TestCase], output_path: str) -> None:
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(json.dumps(cases_to_json(cases), indent=2), encoding="utf-8")


def generate_json_report(report: RunReport, output_path: str) -> bool:
    """
    Write a RunReport to output_path.

    Returns:
        True if successful, False otherwise
    """
    try:
        report_data = report.model_dump(mode="json")
        report_data["summary"] = {
            "total": report.total_count,
            "passed": report.passed_count,
            "failed": report.failed_count,
            "errors": report.error_count,
        }
        report_data["report_generated_at"] = datetime.now(timezone.utc).isoformat()
        report_data["version"] = __version__

        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(report_data, f, indent=2)

        return True
    except (OSError, TypeError, ValueError):
        # caller reports the failure
        return False
