"""``init`` and ``bootstrap`` commands: scaffold the current repository."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.markup import escape

from repomanager.cli import StepTracker
from repomanager.cli.helpers import console, print_usage
from repomanager.core.config import ScaffoldConfig, load_config
from repomanager.core.errors import ConfigError, ScaffoldError, TemplateNotFound
from repomanager.core.identity import SubstitutionValue
from repomanager.core.locator import TemplateReference, locate_fixed, locate_named
from repomanager.core.pipeline import STEPS, scaffold


def _load_config_or_exit(**overrides) -> ScaffoldConfig:
    try:
        return load_config().with_overrides(**overrides)
    except ConfigError as exc:
        report_error(exc)
        raise typer.Exit(exc.exit_code)


def report_error(exc: ScaffoldError) -> None:
    """Print a runtime error and its remediation hint."""
    console.print(f"[red]Error:[/red] {escape(exc.message)}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def _run_scaffold(
    locate: Callable[[], TemplateReference],
    config: ScaffoldConfig,
    *,
    title: str,
    value: SubstitutionValue,
    rename_paths: bool,
) -> None:
    tracker = StepTracker(title)
    for key, label in STEPS:
        tracker.add(key, label)

    cwd = Path.cwd()
    outcome = scaffold(
        locate,
        repo_root=cwd,
        destination=cwd,
        config=config,
        value_kind=value,
        rename_paths=rename_paths,
        on_step=tracker.update,
    )

    if outcome.error is not None:
        tracker.skip_pending()
        console.print(tracker.render())
        console.print()
        if isinstance(outcome.error, TemplateNotFound):
            console.print(f"[red]{escape(outcome.error.message)}[/red]")
            print_usage(config)
        else:
            report_error(outcome.error)
        raise typer.Exit(outcome.exit_code)

    console.print(tracker.render())
    console.print()
    console.print(
        f"[bold green]Initialized {escape(outcome.identity.full_name)} "
        f"from {escape(outcome.reference.subdirectory)}[/bold green]"
    )


def init(
    template: Optional[str] = typer.Argument(
        None,
        help="Template name (a sub-directory of the template root)",
        show_default=False,
    ),
    source_url: Optional[str] = typer.Option(None, "--source-url", help="Template repository URL"),
    template_root: Optional[str] = typer.Option(
        None, "--template-root", help="Directory holding templates in the template repository"
    ),
    value: SubstitutionValue = typer.Option(
        SubstitutionValue.FULL,
        "--value",
        case_sensitive=False,
        help="Replace the placeholder with the full repository path (host/org/name) or the bare name",
    ),
    token: Optional[str] = typer.Option(None, "--token", help="Placeholder token to replace"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds allowed for each git network operation"
    ),
    rename_paths: bool = typer.Option(
        False, "--rename-paths", help="Also rename files and directories whose names contain the token"
    ),
) -> None:
    """Initialize the current repository from a named template."""
    config = _load_config_or_exit(
        source_url=source_url,
        template_root=template_root,
        placeholder=token,
        fetch_timeout=timeout,
    )
    if template is None or not template.strip():
        print_usage(config)
        raise typer.Exit(1)

    _run_scaffold(
        partial(locate_named, config.source_url, config.template_root, template),
        config,
        title=f"Initialize from template '{template}'",
        value=value,
        rename_paths=rename_paths,
    )


def bootstrap(
    subdirectory: Optional[str] = typer.Option(
        None, "--subdirectory", help="Template path inside the template repository"
    ),
    source_url: Optional[str] = typer.Option(None, "--source-url", help="Template repository URL"),
    value: SubstitutionValue = typer.Option(
        SubstitutionValue.FULL,
        "--value",
        case_sensitive=False,
        help="Replace the placeholder with the full repository path (host/org/name) or the bare name",
    ),
    token: Optional[str] = typer.Option(None, "--token", help="Placeholder token to replace"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds allowed for each git network operation"
    ),
    rename_paths: bool = typer.Option(
        False, "--rename-paths", help="Also rename files and directories whose names contain the token"
    ),
) -> None:
    """Initialize the current repository from the preconfigured template."""
    config = _load_config_or_exit(
        source_url=source_url,
        fixed_subdirectory=subdirectory,
        placeholder=token,
        fetch_timeout=timeout,
    )
    _run_scaffold(
        partial(locate_fixed, config.source_url, config.fixed_subdirectory),
        config,
        title="Initialize from default template",
        value=value,
        rename_paths=rename_paths,
    )


__all__ = ["bootstrap", "init", "report_error"]
