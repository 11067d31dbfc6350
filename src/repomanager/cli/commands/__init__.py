"""CLI command modules for repomanager."""

from __future__ import annotations

import typer

from .config_cmd import config
from .identity import identity
from .init import bootstrap, init


def register_commands(app: typer.Typer) -> None:
    """Attach every command to the top-level Typer app."""
    app.command()(init)
    app.command()(bootstrap)
    app.command()(identity)
    app.command()(config)


__all__ = ["bootstrap", "config", "identity", "init", "register_commands"]
