"""PuppetCore CLI — Main Typer entry point.

Registers all subcommands and provides --version / --verbose global options.
"""

from __future__ import annotations

import typer
from rich.console import Console

from puppetcore import __version__
from puppetcore.log import configure_logging

TAGLINE = "Find it, wait for it, click it."

console = Console()

# ── Version callback ──────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print("PuppetCore", style="bold cyan")
        console.print(f"  {TAGLINE}", style="dim")
        console.print(f"  v{__version__}\n", style="bold")
        raise typer.Exit()


# ── Main app ──────────────────────────────────────────────────────────────

app = typer.Typer(
    name="puppetcore",
    help=f"PuppetCore -- {TAGLINE}",
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show PuppetCore version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every poll and settle delay.",
    ),
) -> None:
    """PuppetCore -- reliable clicking on live, script-mutated pages."""
    configure_logging(verbose)


# ── Register subcommands ──────────────────────────────────────────────────

from puppetcore.cli.click_cmd import click  # noqa: E402
from puppetcore.cli.config_cmd import config_app  # noqa: E402
from puppetcore.cli.run_cmd import run, validate  # noqa: E402

app.command(name="click", help="Open a page and click one element.")(click)
app.command(name="run", help="Run a YAML macro against a page.")(run)
app.command(name="validate", help="Validate a macro file without opening a browser.")(validate)
app.add_typer(config_app, name="config", help="View PuppetCore configuration.")
