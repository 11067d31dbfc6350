"""``identity`` command: show what the current repository resolves to."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from repomanager.cli.commands.init import report_error
from repomanager.cli.helpers import console
from repomanager.core.config import load_config
from repomanager.core.errors import ScaffoldError
from repomanager.core.identity import read_remote_url, parse_remote_url


def identity(
    remote: Optional[str] = typer.Option(None, "--remote", help="Remote to read the URL from"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Display the repository identity used to replace the placeholder."""
    try:
        remote_name = remote or load_config().remote
        url = read_remote_url(Path.cwd(), remote_name)
        resolved = parse_remote_url(url)
    except ScaffoldError as exc:
        if json_output:
            print(json.dumps({"error": exc.message}))
        else:
            report_error(exc)
        raise typer.Exit(exc.exit_code)

    if json_output:
        print(json.dumps({"remote": remote_name, "url": url, **resolved.to_dict()}, indent=2))
        return

    table = Table(title="Repository Identity", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Remote", f"{remote_name} ({url})")
    table.add_row("Host", resolved.host)
    table.add_row("Organization", resolved.organization)
    table.add_row("Name", resolved.name)
    table.add_row("Full name", resolved.full_name)
    console.print(table)


__all__ = ["identity"]
