"""Shared console, banner and usage text for CLI commands."""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.text import Text

from repomanager.core.config import ScaffoldConfig

console = Console()

BANNER = r"""
 ____  ____  ____   __   _  _   __   __ _   __    ___  ____  ____
(  _ \(  __)(  _ \ /  \ ( \/ ) / _\ (  ( \ / _\  / __)(  __)(  _ \
 )   / ) _)  ) __/(  O )/ \/ \/    \/    //    \( (_ \ ) _)  )   /
(__\_)(____)(__)   \__/ \_)(_/\_/\_/\_)__)\_/\_/ \___/(____)(__\_)
"""

TAGLINE = "repomanager - bootstrap repositories from a remote template"


def show_banner() -> None:
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip("\n").split("\n")
    colors = ["bright_blue", "blue", "cyan", "bright_cyan"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        styled_banner.append(line + "\n", style=colors[i % len(colors)])

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


def usage_text(config: ScaffoldConfig) -> str:
    """Usage for ``repomanager init``, naming the configured template source."""
    return (
        "Usage: repomanager init TEMPLATE\n"
        "\n"
        f'Initialize a git repository from a template, that is a sub-directory of "{config.template_root}" '
        f"from {config.source_url}\n"
        "\n"
        "EXAMPLES:\n"
        '    repomanager init "mytemplate"\n'
    )


def print_usage(config: ScaffoldConfig) -> None:
    console.print(usage_text(config), markup=False, highlight=False, soft_wrap=True)


__all__ = ["BANNER", "TAGLINE", "console", "print_usage", "show_banner", "usage_text"]
