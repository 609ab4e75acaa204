"""puppetcore config — View PuppetCore configuration.

Subcommands: show.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from puppetcore.cli._errors import print_error
from puppetcore.config import PuppetConfig, PuppetConfigError, find_project_dir

console = Console()

config_app = typer.Typer(
    name="config",
    help="View PuppetCore configuration.",
    no_args_is_help=True,
)


@config_app.command(name="show")
def config_show(
    dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Path to .puppetcore/ directory.",
    ),
) -> None:
    """Show the resolved configuration, merging config.yaml with defaults."""
    project_dir = dir or find_project_dir()
    config_path = project_dir / "config.yaml"

    try:
        if config_path.is_file():
            config = PuppetConfig.from_file(config_path)
            source = str(config_path)
        else:
            config = PuppetConfig.default(project_dir)
            source = "default"
    except PuppetConfigError as exc:
        print_error(console, exc, title="Config Error")
        raise typer.Exit(code=2)

    table = Table(title="PuppetCore Configuration", border_style="cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    rows = [
        ("timeout_ms", str(config.timeout_ms)),
        ("poll_interval_ms", str(config.poll_interval_ms)),
        ("settle_delay_ms", str(config.settle_delay_ms)),
        ("click_timeout_ms", str(config.click_timeout_ms)),
        ("headless", str(config.headless)),
        ("viewport", f"{config.viewport[0]}x{config.viewport[1]}"),
        ("window_size", f"{config.window_size[0]}x{config.window_size[1]}"),
        ("user_data_dir", str(config.user_data_dir)),
        ("chrome_path", config.chrome_path or "-"),
    ]
    for setting, value in rows:
        table.add_row(setting, value, source)

    console.print(table)
