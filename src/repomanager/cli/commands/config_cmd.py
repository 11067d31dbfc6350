"""Top-level ``repomanager config`` command.

Shows the effective scaffolding configuration and where each value was
resolved from (default, config file, environment variable).
"""

from __future__ import annotations

import typer
from rich.table import Table

from repomanager.cli.commands.init import report_error
from repomanager.cli.helpers import console
from repomanager.core.config import CONFIG_FILE_NAME, get_config_home, load_config
from repomanager.core.errors import ConfigError


def config() -> None:
    """Display the effective configuration and its origins."""
    try:
        effective = load_config()
    except ConfigError as exc:
        report_error(exc)
        raise typer.Exit(exc.exit_code)

    table = Table(title="Effective Configuration", show_lines=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="bold")
    table.add_column("Origin")

    for key, value in effective.to_dict().items():
        table.add_row(key, str(value), _format_origin(effective.origin_of(key)))

    console.print(table)
    console.print(f"[dim]Config file: {get_config_home() / CONFIG_FILE_NAME}[/dim]")


def _format_origin(origin: str) -> str:
    """Format an origin label for display with color coding."""
    if origin == "default":
        return "[dim]default[/dim]"
    if origin.startswith("REPOMANAGER_"):
        return f"[yellow]{origin}[/yellow]"
    return f"[green]{origin}[/green]"


__all__ = ["config"]
