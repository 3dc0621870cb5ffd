"""
bodyfuzz terminal UI theme.
"""

import json

from rich.console import Console
from rich.panel import Panel
from rich.theme import Theme
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich import box
from rich.markup import escape

from bodyfuzz import __version__
from bodyfuzz.jsontree import to_jsonable

# ── Custom Theme ─────────────────────────────────────────────────────────────

BODYFUZZ_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "danger": "red bold",
    "success": "green bold",
    "muted": "dim white",
    "accent": "bold cyan",
    "outcome.passed": "green",
    "outcome.failed": "bold red",
    "outcome.error": "yellow",
    "path": "bold magenta",
    "value": "green",
})

console = Console(theme=BODYFUZZ_THEME)

# ── Banner ───────────────────────────────────────────────────────────────────

BANNER = rf"""[cyan]
  _               _        __
 | |__   ___   __| |_   _ / _|_   _ ________
 | '_ \ / _ \ / _` | | | | |_| | | |_  /_  /
 | |_) | (_) | (_| | |_| |  _| |_| |/ / / /
 |_.__/ \___/ \__,_|\__, |_|  \__,_/___/___|
                    |___/
[/cyan][dim white]  ──── Request Body Test Generator ── v{__version__} ────[/dim white]
"""

SMALL_BANNER = f"[bold cyan]⚡ bodyfuzz[/bold cyan] [dim]v{__version__}[/dim]"


def print_banner(small: bool = False):
    """Print the bodyfuzz banner."""
    if small:
        console.print(SMALL_BANNER)
    else:
        console.print(BANNER)


def print_target_info(url: str, method: str, headers: dict | None = None):
    """Print target endpoint info box."""
    table = Table(box=box.SIMPLE_HEAVY, show_header=False, padding=(0, 2))
    table.add_column("key", style="muted", width=12)
    table.add_column("value", style="value")
    table.add_row("TARGET", url)
    table.add_row("METHOD", method)
    if headers:
        table.add_row("HEADERS", ", ".join(headers.keys()))
    console.print(Panel(
        table,
        title="[bold cyan]◉ Target[/bold cyan]",
        border_style="cyan",
        padding=(1, 2),
    ))


def print_section(title: str, icon: str = "─"):
    """Print a section divider."""
    console.print()
    console.rule(f"[bold cyan] {icon} {title} [/bold cyan]", style="dim cyan")
    console.print()


def print_cases_table(cases, show_body: bool = False):
    """Print generated test cases as a table."""
    table = Table(box=box.SIMPLE_HEAVY, border_style="cyan")
    table.add_column("#", style="muted", justify="right")
    table.add_column("Name", style="path")
    table.add_column("Expect", justify="right")
    if show_body:
        table.add_column("Body", style="muted", overflow="fold")

    for i, case in enumerate(cases, 1):
        row = [str(i), escape(case.name), str(case.expected_status)]
        if show_body:
            body = json.dumps(to_jsonable(case.body))
            row.append(escape(body[:200] + "..." if len(body) > 200 else body))
        table.add_row(*row)

    console.print(table)


def print_result(result):
    """Print one executed test case."""
    outcome = result.outcome.value
    icon = {"passed": "✔", "failed": "✗", "error": "⚠"}[outcome]
    got = result.status if result.status is not None else "error"
    console.print(
        f"  [outcome.{outcome}]{icon} {outcome.upper():<6}[/outcome.{outcome}] "
        f"{escape(result.name)}  [muted](expected={result.expected_status} got={got})[/muted]"
    )
    if result.error:
        console.print(f"           [muted]{escape(result.error[:120])}[/muted]")


def print_summary(total: int, passed: int, failed: int, errors: int):
    """Print run summary."""
    console.print()
    table = Table(
        box=box.DOUBLE_EDGE,
        title="[bold white]Run Summary[/bold white]",
        border_style="cyan",
        padding=(0, 2),
    )
    table.add_column("Outcome", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("[outcome.passed]PASSED[/outcome.passed]", f"[outcome.passed]{passed}[/outcome.passed]")
    if failed > 0:
        table.add_row("[outcome.failed]FAILED[/outcome.failed]", f"[outcome.failed]{failed}[/outcome.failed]")
    if errors > 0:
        table.add_row("[outcome.error]ERROR[/outcome.error]", f"[outcome.error]{errors}[/outcome.error]")

    table.add_section()
    table.add_row("[bold white]TOTAL[/bold white]", f"[bold white]{total}[/bold white]")

    console.print(table)

    if failed > 0:
        console.print("\n  [danger]⚠  Endpoint accepted or mishandled invalid input.[/danger]")
    elif errors > 0:
        console.print("\n  [warning]⚡ Some requests never got a response.[/warning]")
    elif total:
        console.print("\n  [success]✔  Every invalid body was rejected as expected.[/success]")
    console.print()


def get_progress() -> Progress:
    """Get a styled progress bar."""
    return Progress(
        SpinnerColumn("dots", style="cyan"),
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(bar_width=30, style="dim cyan", complete_style="cyan"),
        TextColumn("[muted]{task.percentage:>3.0f}%[/muted]"),
        TimeElapsedColumn(),
        console=console,
    )
