"""Tests for the bodyfuzz CLI."""
import json

import httpx
import pytest
from typer.testing import CliRunner

import bodyfuzz.runner
from bodyfuzz import __version__
from bodyfuzz.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_generate_writes_cases(tmp_path):
    out = tmp_path / "cases.json"
    result = runner.invoke(app, ["generate", "--body", '{"name": "Alice", "active": true}', "-o", str(out)])
    assert result.exit_code == 0, result.output
    cases = json.loads(out.read_text())
    assert len(cases) == 13
    assert cases[0]["name"] == "name - Empty Value"


def test_generate_from_file(tmp_path):
    body = tmp_path / "body.json"
    body.write_text(json.dumps({"userEmail": "a@b.com"}))
    result = runner.invoke(app, ["generate", "--file", str(body)])
    assert result.exit_code == 0, result.output
    assert "Total:" in result.output


def test_generate_rejects_bad_json():
    result = runner.invoke(app, ["generate", "--body", "{nope"])
    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_generate_needs_a_body():
    result = runner.invoke(app, ["generate"])
    assert result.exit_code == 1


def test_import_sample():
    result = runner.invoke(app, ["import", "--sample", "--body", '{"email": "a@b.com"}'])
    assert result.exit_code == 0, result.output
    assert "Register - Valid User" in result.output


def test_import_merges_cases(tmp_path):
    cases_file = tmp_path / "cases.json"
    cases_file.write_text(json.dumps([{"name": "Blank email", "fields": {"email": ""}}]))
    out = tmp_path / "merged.json"
    result = runner.invoke(app, [
        "import", str(cases_file), "--body", '{"email": "a@b.com", "name": "A"}', "-o", str(out),
    ])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text())[0]["body"] == {"email": "", "name": "A"}


def test_import_rejects_non_array(tmp_path):
    cases_file = tmp_path / "cases.json"
    cases_file.write_text(json.dumps({"name": "x"}))
    result = runner.invoke(app, ["import", str(cases_file)])
    assert result.exit_code == 1
    assert "must be an array" in result.output


def test_list_rules():
    result = runner.invoke(app, ["list-rules"])
    assert result.exit_code == 0
    assert "email_values" in result.output
    assert "Invalid Email" in result.output
    assert "Invalid UUID" in result.output


@pytest.fixture
def mock_endpoint(monkeypatch):
    """Route HttpRunner through a handler that rejects everything with 400."""
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(json.loads(request.content))
        return httpx.Response(400, json={"error": "invalid"})

    class MockRunner(bodyfuzz.runner.HttpRunner):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(bodyfuzz.runner, "HttpRunner", MockRunner)
    return sent


def test_run_against_endpoint(tmp_path, mock_endpoint):
    out = tmp_path / "report.json"
    result = runner.invoke(app, [
        "run", "--url", "http://api.test/users", "--body", '{"name": "Alice"}',
        "-H", "X-Env: test", "-o", str(out),
    ])
    assert result.exit_code == 0, result.output
    assert mock_endpoint == [{"name": ""}, {"name": None}]
    assert json.loads(out.read_text())["summary"]["passed"] == 2


def test_run_with_import_only(tmp_path, mock_endpoint):
    cases_file = tmp_path / "cases.json"
    cases_file.write_text(json.dumps([{"name": "Too long", "fields": {"name": "x" * 300}}]))
    result = runner.invoke(app, [
        "run", "--url", "http://api.test/users", "--body", '{"name": "Alice"}',
        "--import", str(cases_file), "--no-generated",
    ])
    assert result.exit_code == 0, result.output
    assert mock_endpoint == [{"name": "x" * 300}]
