"""Tests for JSON output of cases and run reports."""
import json

from bodyfuzz.generator import generate
from bodyfuzz.models import RunReport, RunResult
from bodyfuzz.reporters import cases_to_json, generate_json_report, save_cases


def _report() -> RunReport:
    report = RunReport(run_id="abc123", url="http://api.test/users")
    report.results = [
        RunResult(name="a - Empty Value", status=400, response={"error": "bad"}),
        RunResult(name="a - Null Value", status=201, ok=True),
        RunResult(name="b - Empty Value", error="HTTP Timeout"),
    ]
    report.mark_complete()
    return report


def test_cases_to_json_shape():
    data = cases_to_json(generate({"tags": ["x"]}))
    undefined_case = next(c for c in data if c["name"] == "tags - Array with Undefined Element")
    assert undefined_case["body"] == {"tags": [None]}
    assert undefined_case["expectedStatus"] == 400
    assert set(undefined_case) == {"name", "description", "body", "expectedStatus"}
    json.dumps(data)


def test_save_cases(tmp_path):
    out = tmp_path / "nested" / "cases.json"
    save_cases(generate({"name": "Alice"}), str(out))
    data = json.loads(out.read_text())
    assert [c["name"] for c in data] == ["name - Empty Value", "name - Null Value"]


def test_json_report(tmp_path):
    out = tmp_path / "report.json"
    assert generate_json_report(_report(), str(out))

    data = json.loads(out.read_text())
    assert data["run_id"] == "abc123"
    assert data["summary"] == {"total": 3, "passed": 1, "failed": 1, "errors": 1}
    assert data["results"][0]["response"] == {"error": "bad"}
    assert data["version"]
    assert data["completed_at"]


def test_json_report_unwritable_path(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    assert generate_json_report(_report(), str(blocker / "report.json")) is False
