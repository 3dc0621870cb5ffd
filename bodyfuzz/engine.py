"""
Run engine — executes test cases against an endpoint and collects results.
"""

from __future__ import annotations

import logging
import uuid

from rich.markup import escape

from bodyfuzz.generator.base import TestCase
from bodyfuzz.models import RunReport
from bodyfuzz.runner.http_runner import HttpRunner
from bodyfuzz.ui import console, get_progress, print_result, print_section, print_summary

logger = logging.getLogger(__name__)


def run_cases(
    cases: list[TestCase],
    runner: HttpRunner,
    verbose: bool = False,
    show_progress: bool = True,
) -> RunReport:
    """Run every case in order and return a report."""
    report = RunReport(
        run_id=str(uuid.uuid4())[:8],
        url=runner.url,
        method=runner.method,
    )

    if show_progress:
        print_section("Running Test Cases", "⚡")
        console.print(f"  [accent]Test cases:[/accent] {len(cases)}")

        with get_progress() as progress:
            task = progress.add_task("Running...", total=len(cases))
            for case in cases:
                progress.update(task, description=f"[cyan]{escape(case.name[:40])}[/cyan]")
                report.results.append(runner.run(case))
                progress.advance(task)
    else:
        report.results.extend(runner.run_all(cases))

    report.mark_complete()
    logger.debug(
        "Run %s: %d passed, %d failed, %d errors",
        report.run_id, report.passed_count, report.failed_count, report.error_count,
    )

    if show_progress:
        if verbose or report.failed_count or report.error_count:
            print_section("Results", "🔍")
            for result in report.results:
                if verbose or not result.passed:
                    print_result(result)

        print_section("Summary", "📊")
        print_summary(
            total=report.total_count,
            passed=report.passed_count,
            failed=report.failed_count,
            errors=report.error_count,
        )

    return report
