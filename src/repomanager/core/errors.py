"""Exception hierarchy for the scaffolding pipeline.

Every stage raises a subclass of :class:`ScaffoldError`. The orchestrator
stops at the first one and the CLI turns ``exit_code`` into the process
exit status.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base exception for scaffolding failures."""

    exit_code: int = 1

    def __init__(self, message: str, *, hint: str | None = None):
        self.message = message
        self.hint = hint
        super().__init__(message)


class UsageError(ScaffoldError):
    """A required command-line argument is missing or empty."""


class ConfigError(ScaffoldError):
    """The configuration file or an override holds an invalid value."""


class RemoteNotConfigured(ScaffoldError):
    """The working tree has no readable remote URL."""

    def __init__(self, remote: str, detail: str = ""):
        self.remote = remote
        message = f"Unable to read URL of remote '{remote}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(
            message,
            hint=f"Run from a git working tree with a configured '{remote}' remote.",
        )


class MalformedRemoteURL(ScaffoldError):
    """The remote URL does not have a ``host/organization/name`` shape."""

    def __init__(self, url: str, missing: str):
        self.url = url
        self.missing = missing
        super().__init__(
            f"Malformed remote URL {url!r}: missing {missing}",
            hint="Expected a URL like https://host/organization/name(.git)",
        )


class TemplateNotFound(ScaffoldError):
    """The requested subdirectory is absent from the template source."""

    def __init__(self, subdirectory: str, source_url: str):
        self.subdirectory = subdirectory
        self.source_url = source_url
        super().__init__(f"{subdirectory} does not exist in remote")


class FetchFailure(ScaffoldError):
    """Cloning or sparse-checkout of the template source failed."""


class CopyFailure(ScaffoldError):
    """Copying the fetched template into the working tree failed."""


class SubstitutionFailure(ScaffoldError):
    """Rewriting placeholder tokens in the working tree failed."""


__all__ = [
    "ConfigError",
    "CopyFailure",
    "FetchFailure",
    "MalformedRemoteURL",
    "RemoteNotConfigured",
    "ScaffoldError",
    "SubstitutionFailure",
    "TemplateNotFound",
    "UsageError",
]
