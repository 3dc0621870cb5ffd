"""
bodyfuzz CLI — the main entry point.

Usage:
    bodyfuzz generate --body '{"email": "a@b.com", "active": true}'
    bodyfuzz run --url http://localhost:8000/users --file body.json
    bodyfuzz import cases.json --file body.json
    bodyfuzz ai --file body.json -o cases.json
    bodyfuzz list-rules
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.table import Table
from rich import box

from bodyfuzz import __version__
from bodyfuzz.config import DEFAULT_METHOD, get_timeout
from bodyfuzz.ui import (
    console,
    print_banner,
    print_cases_table,
    print_section,
    print_target_info,
)

app = typer.Typer(
    name="bodyfuzz",
    help="⚡ Generate and run negative test cases for JSON request bodies.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def _run_async(coro):
    """Run an async function from sync context."""
    return asyncio.run(coro)


def _parse_headers(header_list: list[str]) -> dict[str, str]:
    """Parse list of 'Key: Value' strings into a dictionary."""
    headers = {}
    for h in header_list:
        if ":" in h:
            key, value = h.split(":", 1)
            headers[key.strip()] = value.strip()
        else:
            console.print(
                f"[yellow]Warning: Invalid header format '{h}', expected 'Key: Value'[/yellow]"
            )
    return headers


def _read_text(body: Optional[str], file: Optional[Path]) -> str:
    """Request body text from --body or --file."""
    if body is not None:
        return body
    if file is not None:
        try:
            return file.read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[danger]Error: Cannot read {file}: {e.strerror}[/danger]")
            raise typer.Exit(1)
    console.print("[danger]Error: Specify either --body or --file[/danger]")
    raise typer.Exit(1)


def _load_body(body: Optional[str], file: Optional[Path]) -> Any:
    """Parse the request body, exiting with a message on bad JSON."""
    text = _read_text(body, file)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        console.print(f"[danger]Error: Request body is not valid JSON: {e.msg} (line {e.lineno})[/danger]")
        raise typer.Exit(1)


def _version_callback(value: bool):
    if value:
        console.print(f"bodyfuzz v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-V", help="Show version and exit.", callback=_version_callback, is_eager=True),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
):
    """bodyfuzz — negative test cases for JSON request bodies."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        print_banner()


# ─── GENERATE COMMAND ────────────────────────────────────────────────────────

@app.command()
def generate(
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Request body as inline JSON"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Request body JSON file"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write generated cases to a JSON file"),
    show_body: bool = typer.Option(False, "--show-body", help="Include each mutated body in the table"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner, no table"),
):
    """
    🧪 Generate negative test cases from an example request body.

    Every field gets empty/null/wrong-type mutations for its JSON type, plus
    email, UUID and date variants where the key or value calls for them.
    Each case expects HTTP 400.
    """
    from bodyfuzz.generator import generate as generate_cases
    from bodyfuzz.reporters import save_cases

    root = _load_body(body, file)
    cases = generate_cases(root)

    if not quiet:
        print_banner(small=True)
        print_section("Generated Test Cases", "🧪")
        print_cases_table(cases, show_body=show_body)
        console.print(f"  [accent]Total:[/accent] {len(cases)}")

    if output:
        save_cases(cases, output)
        console.print(f"  [success]✔ {len(cases)} cases saved to {output}[/success]")


# ─── RUN COMMAND ─────────────────────────────────────────────────────────────

@app.command()
def run(
    url: str = typer.Option(..., "--url", "-u", help="Endpoint to send test bodies to"),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Request body as inline JSON"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Request body JSON file"),
    import_file: Optional[Path] = typer.Option(None, "--import", "-i", help="Also run cases from a bulk-import JSON file"),
    generated: bool = typer.Option(True, "--generated/--no-generated", help="Include generated negative cases"),
    method: str = typer.Option(DEFAULT_METHOD, "--method", "-X", help="HTTP method"),
    header: list[str] = typer.Option([], "--header", "-H", help="HTTP header in 'Key: Value' format"),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Bearer token"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every result, not just failures"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Save JSON report"),
):
    """
    🔥 Generate test cases and send each one to a live endpoint.

    A case passes when the endpoint answers with its expected status
    (400 for generated cases).
    """
    from bodyfuzz.engine import run_cases
    from bodyfuzz.generator import generate as generate_cases
    from bodyfuzz.importer import BulkImportError, import_cases
    from bodyfuzz.reporters import generate_json_report
    from bodyfuzz.runner import HttpRunner

    root = _load_body(body, file)
    parsed_headers = _parse_headers(header)

    cases = generate_cases(root) if generated else []
    if import_file is not None:
        try:
            cases.extend(import_cases(_read_text(None, import_file), root))
        except BulkImportError as e:
            console.print(f"[danger]Error: {e}[/danger]")
            raise typer.Exit(1)

    if not cases:
        console.print("[warning]No test cases to run.[/warning]")
        raise typer.Exit(0)

    print_banner()
    print_target_info(url, method.upper(), parsed_headers)

    runner = HttpRunner(
        url,
        method=method,
        timeout=timeout if timeout is not None else get_timeout(),
        headers=parsed_headers,
        token=token,
    )
    report = run_cases(cases, runner, verbose=verbose)

    if output:
        if generate_json_report(report, output):
            console.print(f"  [success]✔ Report saved to {output}[/success]")
        else:
            console.print("  [danger]✗ Failed to save report[/danger]")


# ─── IMPORT COMMAND ──────────────────────────────────────────────────────────

@app.command("import")
def import_command(
    cases_file: Optional[Path] = typer.Argument(None, help="JSON array of test cases"),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Base request body as inline JSON"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Base request body JSON file"),
    sample: bool = typer.Option(False, "--sample", help="Print a sample import document and exit"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write merged cases to a JSON file"),
):
    """
    📥 Merge externally written test cases into a base request body.

    Each entry's "fields" are laid over the base body. Entries without a
    name are skipped.
    """
    from bodyfuzz.importer import BulkImportError, import_cases, parse_body, sample_import
    from bodyfuzz.reporters import save_cases

    base_text = "" if body is None and file is None else _read_text(body, file)
    try:
        base_body = parse_body(base_text)
    except BulkImportError as e:
        console.print(f"[danger]Error: {e}[/danger]")
        raise typer.Exit(1)

    if sample:
        console.print_json(sample_import(base_body))
        return

    if cases_file is None:
        console.print("[danger]Error: Specify a cases file (or --sample)[/danger]")
        raise typer.Exit(1)

    try:
        cases = import_cases(_read_text(None, cases_file), base_body)
    except BulkImportError as e:
        console.print(f"[danger]Error: {e}[/danger]")
        raise typer.Exit(1)

    print_section("Imported Test Cases", "📥")
    print_cases_table(cases, show_body=True)
    console.print(f"  [accent]Imported:[/accent] {len(cases)}")

    if output:
        save_cases(cases, output)
        console.print(f"  [success]✔ Saved to {output}[/success]")


# ─── AI COMMAND ──────────────────────────────────────────────────────────────

@app.command()
def ai(
    body: Optional[str] = typer.Option(None, "--body", "-b", help="Request body as inline JSON"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Request body JSON file"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write cases as a bulk-import JSON file"),
):
    """
    🧠 Ask an LLM to write test cases for a request body.

    The result is a bulk-import document; feed it to `bodyfuzz import` or
    `bodyfuzz run --import`.
    """
    from bodyfuzz.ai import AICaseGenerator, AIGenerationError, summarize_categories

    text = _read_text(body, file)
    generator = AICaseGenerator()

    console.print(f"  [accent]🧠 AI:[/accent] asking {generator.client.provider or 'no provider'}...")
    try:
        cases = _run_async(generator.generate(text))
    except AIGenerationError as e:
        console.print(f"[danger]Error: {e}[/danger]")
        raise typer.Exit(1)

    summary = summarize_categories(cases)
    console.print(f"  [success]✔ Generated {len(cases)} unique test cases[/success]")
    console.print("  " + "  ".join(f"[muted]{cat}:[/muted] {n}" for cat, n in summary.items()))

    document = json.dumps(cases, indent=2)
    if output:
        Path(output).write_text(document, encoding="utf-8")
        console.print(f"  [success]✔ Saved to {output}[/success]")
    else:
        console.print_json(document)


# ─── LIST RULES ──────────────────────────────────────────────────────────────

@app.command("list-rules")
def list_rules():
    """List the mutation rule sets."""
    from bodyfuzz.generator.rules import DOMAIN_RULES, TYPE_RULES

    print_banner(small=True)
    table = Table(box=box.SIMPLE_HEAVY, border_style="cyan")
    table.add_column("Rule set", style="bold cyan", no_wrap=True)
    table.add_column("Applies to", no_wrap=True)
    table.add_column("Label prefix", style="warning", no_wrap=True)
    table.add_column("Description", style="muted")

    for jtype, module in TYPE_RULES.items():
        table.add_row(module.__name__.rsplit(".", 1)[-1], f"{jtype.value} fields", module.PREFIX or "-", (module.__doc__ or "").strip())
    for name, module in DOMAIN_RULES.items():
        table.add_row(module.__name__.rsplit(".", 1)[-1], name, module.PREFIX or "-", (module.__doc__ or "").strip())

    console.print(table)


# ─── SETUP ───────────────────────────────────────────────────────────────────

@app.command()
def setup():
    """
    🧠 Configure the AI provider used by `bodyfuzz ai`.

    Saves config to ~/.bodyfuzz/config.json.
    """
    from bodyfuzz.config import PROVIDERS, save_config

    print_banner(small=True)
    console.print()
    console.print("  Select AI provider:")
    console.print()

    provider_list = list(PROVIDERS.items())
    for i, (pid, info) in enumerate(provider_list, 1):
        console.print(f"  [bold][{i}][/bold] {info.name:<12} ({info.note})")
    console.print(f"  [bold][{len(provider_list) + 1}][/bold] Skip        (no AI features)")
    console.print()

    try:
        choice = typer.prompt("  > Enter choice", type=int)
    except (KeyboardInterrupt, typer.Abort):
        console.print("\n  [muted]Setup cancelled.[/muted]")
        raise typer.Exit(0)

    if choice < 1 or choice > len(provider_list) + 1:
        console.print("  [danger]Invalid choice.[/danger]")
        raise typer.Exit(1)

    if choice == len(provider_list) + 1:
        console.print("  [muted]Skipped. AI features disabled.[/muted]")
        raise typer.Exit(0)

    provider_id, provider_info = provider_list[choice - 1]

    api_key = ""
    if provider_info.env_var:  # Ollama doesn't need a key
        console.print(f"\n  Get your key at: [link]{provider_info.key_url}[/link]")
        try:
            api_key = typer.prompt("  > Enter API key", hide_input=True)
        except (KeyboardInterrupt, typer.Abort):
            console.print("\n  [muted]Setup cancelled.[/muted]")
            raise typer.Exit(0)

    save_config(provider_id, api_key)
    console.print("\n  [success]✔ Saved to ~/.bodyfuzz/config.json[/success]")
    console.print(f"  AI features enabled ({provider_info.name}, {provider_info.model}).")
    console.print()


if __name__ == "__main__":
    app()
