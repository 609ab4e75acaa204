"""puppetcore run / validate — Execute or check a YAML macro.

``validate`` parses the macro and reports issues without launching a
browser. ``run`` opens the URL in Chromium and executes every step.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from puppetcore.browser import BrowserSession
from puppetcore.cli._errors import print_error
from puppetcore.config import PuppetConfigError, load_config
from puppetcore.engine.errors import MacroError, PuppetCoreError
from puppetcore.engine.session import Session
from puppetcore.macro import load_macro, run_macro, validate_macro

logger = logging.getLogger("puppetcore.cli.run")

console = Console(stderr=True)
output_console = Console()

_SEVERITY_ORDER = {"error": 0, "warning": 1, "info": 2}


def _sev_style(severity: str) -> str:
    return {"error": "bold red", "warning": "yellow", "info": "dim"}.get(severity, "")


def run(
    macro_path: Path = typer.Argument(..., help="Macro YAML file."),
    url: str = typer.Option(..., "--url", "-u", help="Page to open before the first step."),
    headless: Optional[bool] = typer.Option(None, "--headless/--headed", help="Override the configured mode."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to a config.yaml."),
) -> None:
    """Run every step of a macro against URL."""
    try:
        macro = load_macro(macro_path)
    except MacroError as exc:
        print_error(console, exc, title="Macro Error")
        raise typer.Exit(code=2)

    try:
        config = load_config(config_path)
    except PuppetConfigError as exc:
        print_error(console, exc, title="Config Error")
        raise typer.Exit(code=2)
    if headless is not None:
        config.headless = headless

    try:
        with BrowserSession(config) as browser:
            browser.goto(url)
            session = Session.from_config(config, browser.handle)
            result = run_macro(macro, session)
    except PuppetCoreError as exc:
        print_error(console, exc)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Macro interrupted by user.[/yellow]")
        raise typer.Exit(code=1)
    except Exception as exc:
        logger.exception("Unexpected error during macro run")
        print_error(
            console,
            f"Unexpected error: {exc}\n\nRun with --verbose for full traceback.",
            "Infrastructure Error",
        )
        raise typer.Exit(code=3)

    table = Table(title=f"Macro: {escape(result.name)}", border_style="cyan")
    table.add_column("#", style="dim")
    table.add_column("Target")
    table.add_column("Clicked")
    table.add_column("Tier")
    for i, outcome in enumerate(result.outcomes, start=1):
        table.add_row(
            str(i),
            escape(outcome.criteria.describe()),
            escape(outcome.candidate.summary()),
            outcome.tier,
        )
    output_console.print(table)
    console.print(f"[green]Done[/green]: {result.steps_run} step(s) in {result.duration_seconds:.2f}s")


def validate(
    macro_path: Path = typer.Argument(..., help="Macro YAML file."),
) -> None:
    """Check a macro file for errors. Exits 1 when any error is found."""
    if not macro_path.is_file():
        print_error(console, MacroError(f"Macro file not found: {macro_path}"), title="Macro Error")
        raise typer.Exit(code=2)

    try:
        with open(macro_path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        print_error(console, exc, title="YAML Error")
        raise typer.Exit(code=1)

    issues = sorted(validate_macro(data), key=lambda i: _SEVERITY_ORDER.get(i["severity"], 9))
    if not issues:
        console.print(f"[green]OK[/green] {escape(str(macro_path))}")
        return

    for issue in issues:
        style = _sev_style(issue["severity"])
        console.print(
            f"[{style}]{issue['severity'].upper():7}[/{style}] "
            f"{escape(issue['field'])}: {escape(issue['message'])}"
        )

    if any(issue["severity"] == "error" for issue in issues):
        raise typer.Exit(code=1)
