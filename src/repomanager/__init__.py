"""
repomanager - bootstrap a repository from a remote template.

Usage:
    repomanager init <template>
    repomanager bootstrap
    repomanager identity
"""

from __future__ import annotations

import logging
import sys
from importlib.metadata import PackageNotFoundError, version as _pkg_version

import typer
from rich.align import Align
from typer.core import TyperGroup

from repomanager.cli.commands import register_commands
from repomanager.cli.helpers import console, show_banner

try:
    __version__ = _pkg_version("repomanager")
except PackageNotFoundError:
    __version__ = "0.0.0"


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="repomanager",
    help="Bootstrap a repository from a sub-directory of a template repository",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"repomanager {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Show banner when no subcommand is provided."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        show_banner()
        console.print(Align.center("[dim]Run 'repomanager --help' for usage information[/dim]"))
        console.print()


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
