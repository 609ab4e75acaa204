"""puppetcore click — Open a page and click one element.

Exactly one addressing mode is accepted per invocation: --text, --name,
--selector (with optional --index) or --checkbox.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from puppetcore.browser import BrowserSession
from puppetcore.cli._errors import print_error
from puppetcore.config import PuppetConfigError, load_config
from puppetcore.engine.criteria import (
    AttributeEquals,
    MatchCriteria,
    SelectorIndex,
    TextContains,
    TextContainsCheckbox,
    attribute_selector,
)
from puppetcore.engine.errors import PuppetCoreError
from puppetcore.engine.session import Session

logger = logging.getLogger("puppetcore.cli.click")

console = Console(stderr=True)


def build_criteria(
    text: str | None,
    name: str | None,
    selector: str | None,
    index: int,
    checkbox: str | None,
) -> MatchCriteria:
    """Turn the mutually exclusive CLI options into a criteria object."""
    given = [opt for opt in (text, name, selector, checkbox) if opt is not None]
    if len(given) != 1:
        raise typer.BadParameter("Pass exactly one of --text, --name, --selector or --checkbox")

    if text is not None:
        return TextContains(text)
    if checkbox is not None:
        return TextContainsCheckbox(checkbox)
    if name is not None:
        if index > 1:
            return SelectorIndex(attribute_selector("name", name), index)
        return AttributeEquals("name", name)
    return SelectorIndex(selector, index)


def click(
    url: str = typer.Argument(..., help="Page to open before clicking."),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Visible text to look for (case-insensitive)."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Value of the element's name attribute."),
    selector: Optional[str] = typer.Option(None, "--selector", "-s", help="CSS selector (see --index)."),
    index: int = typer.Option(1, "--index", "-i", help="1-based position among --selector / --name matches."),
    checkbox: Optional[str] = typer.Option(None, "--checkbox", "-c", help="Text next to the checkbox to tick."),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Lookup timeout in milliseconds."),
    headless: Optional[bool] = typer.Option(None, "--headless/--headed", help="Override the configured mode."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to a config.yaml."),
) -> None:
    """Open URL in Chromium and click the element described by the options."""
    try:
        criteria = build_criteria(text, name, selector, index, checkbox)
    except ValueError as exc:
        print_error(console, exc, title="Invalid Target")
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
            outcome = session.click(criteria, timeout_ms=timeout)
    except PuppetCoreError as exc:
        print_error(console, exc)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Click interrupted by user.[/yellow]")
        raise typer.Exit(code=1)
    except Exception as exc:
        logger.exception("Unexpected error during click")
        print_error(
            console,
            f"Unexpected error: {exc}\n\nRun with --verbose for full traceback.",
            "Infrastructure Error",
        )
        raise typer.Exit(code=3)

    console.print(
        f"[green]Clicked[/green] {escape(outcome.candidate.summary())} "
        f"[dim]({outcome.tier} click, {outcome.duration_ms:.0f}ms)[/dim]"
    )
