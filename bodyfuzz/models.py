"""
Result models for executed test cases.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Outcome(str, Enum):
    PASSED = "passed"      # got the expected status
    FAILED = "failed"      # got some other status
    ERROR = "error"        # no HTTP response at all


class RunResult(BaseModel):
    """Outcome of sending one test case body to the target."""
    name: str
    description: str = ""
    expected_status: int = 400
    status: int | None = None
    ok: bool = False
    response: Any = None
    elapsed_ms: float = 0.0
    error: str = ""

    @property
    def outcome(self) -> Outcome:
        if self.status is None:
            return Outcome.ERROR
        if self.status == self.expected_status:
            return Outcome.PASSED
        return Outcome.FAILED

    @property
    def passed(self) -> bool:
        return self.outcome == Outcome.PASSED

    def short_str(self) -> str:
        got = self.status if self.status is not None else "error"
        return f"[{self.outcome.value.upper()}] {self.name} (expected={self.expected_status}, got={got})"


class RunReport(BaseModel):
    """Complete run against one endpoint."""
    run_id: str = ""
    url: str = ""
    method: str = "POST"
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None
    results: list[RunResult] = Field(default_factory=list)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.outcome == Outcome.PASSED)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if r.outcome == Outcome.FAILED)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if r.outcome == Outcome.ERROR)

    @property
    def total_count(self) -> int:
        return len(self.results)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent)

    def mark_complete(self):
        self.completed_at = datetime.now(timezone.utc)
