"""Rich rendering of PuppetCore errors for the CLI commands."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from puppetcore.engine.errors import (
    CheckboxNotFoundError,
    ElementNotFoundError,
    InteractionFailedError,
    NoPageBoundError,
    PuppetCoreError,
)

_TITLES = {
    NoPageBoundError: "No Page Bound",
    ElementNotFoundError: "Element Not Found",
    CheckboxNotFoundError: "Checkbox Not Found",
    InteractionFailedError: "Click Failed",
}


def print_error(console: Console, exc: Exception | str, title: str | None = None) -> None:
    """Print ``exc`` (an exception or a message) as a red panel."""
    if title is None:
        title = _TITLES.get(type(exc), "Error" if not isinstance(exc, PuppetCoreError) else "PuppetCore Error")
    console.print(Panel(f"[red]{escape(str(exc))}[/red]", title=f"[red]{title}[/red]", border_style="red"))
