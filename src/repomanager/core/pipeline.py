"""Scaffolding orchestrator.

Runs the stages strictly in order and stops at the first failure:

    identity -> locate -> fetch -> materialize -> substitute

Stages raise :class:`ScaffoldError`; ``scaffold`` converts the first one into
the returned :class:`ScaffoldOutcome` so callers check a single value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from .config import ScaffoldConfig
from .errors import ScaffoldError
from .fetcher import ScratchWorkspace, fetch_template
from .identity import RepoIdentity, SubstitutionValue, resolve_identity
from .locator import TemplateReference
from .materialize import materialize
from .substitute import SubstitutionReport, substitute_tokens

logger = logging.getLogger(__name__)

STEPS: list[tuple[str, str]] = [
    ("identity", "Resolve repository identity"),
    ("locate", "Locate template"),
    ("fetch", "Fetch template"),
    ("materialize", "Copy template files"),
    ("substitute", "Replace placeholder token"),
]

StepCallback = Callable[[str, str, str], None]


@dataclass
class ScaffoldOutcome:
    """Result envelope for one scaffolding run."""

    identity: RepoIdentity | None = None
    reference: TemplateReference | None = None
    copied: list[Path] = field(default_factory=list)
    substitution: SubstitutionReport | None = None
    error: ScaffoldError | None = None
    failed_step: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.error is None else self.error.exit_code


def _noop(key: str, status: str, detail: str) -> None:
    return None


def scaffold(
    locate: Callable[[], TemplateReference],
    *,
    repo_root: Path,
    destination: Path,
    config: ScaffoldConfig,
    value_kind: SubstitutionValue = SubstitutionValue.FULL,
    rename_paths: bool = False,
    on_step: Optional[StepCallback] = None,
) -> ScaffoldOutcome:
    """Scaffold ``destination`` from the template returned by ``locate``.

    Args:
        locate: Builds the TemplateReference (may raise UsageError)
        repo_root: Working tree whose remote gives the identity
        destination: Directory the template is copied into
        config: Effective configuration (token, timeout, remote)
        value_kind: Whether the token becomes the full name or the bare name
        rename_paths: Also rename paths containing the token
        on_step: Progress callback ``(step, status, detail)``

    Returns:
        ScaffoldOutcome; ``error`` holds the first failure, if any
    """
    report = on_step or _noop
    outcome = ScaffoldOutcome()
    step = STEPS[0][0]

    try:
        step = "identity"
        report(step, "running", config.remote)
        outcome.identity = resolve_identity(repo_root, config.remote)
        report(step, "done", outcome.identity.full_name)

        step = "locate"
        report(step, "running", "")
        outcome.reference = locate()
        report(step, "done", outcome.reference.subdirectory)

        with ScratchWorkspace() as workspace:
            step = "fetch"
            report(step, "running", outcome.reference.source_url)
            fetched = fetch_template(
                outcome.reference, workspace, timeout=config.fetch_timeout
            )
            report(step, "done", outcome.reference.subdirectory)

            step = "materialize"
            report(step, "running", "")
            outcome.copied = materialize(fetched, destination)
            report(step, "done", f"{len(outcome.copied)} file(s)")

        step = "substitute"
        value = outcome.identity.value_for(value_kind)
        report(step, "running", f"{config.placeholder} -> {value}")
        outcome.substitution = substitute_tokens(
            destination, config.placeholder, value, rename_paths=rename_paths
        )
        report(step, "done", outcome.substitution.summary())
    except ScaffoldError as exc:
        logger.debug("Step %s failed: %s", step, exc)
        outcome.error = exc
        outcome.failed_step = step
        report(step, "error", exc.message)

    return outcome


__all__ = ["STEPS", "ScaffoldOutcome", "StepCallback", "scaffold"]
