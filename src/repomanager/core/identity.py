"""Repository identity resolution from the configured git remote.

Provides:
- RepoIdentity frozen dataclass ({host, organization, name})
- parse_remote_url(): explicit three-capture parser for remote URLs
- resolve_identity(): reads the remote URL via git and parses it
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .constants import DEFAULT_REMOTE
from .errors import MalformedRemoteURL, RemoteNotConfigured
from .git import run_git

logger = logging.getLogger(__name__)

VCS_SUFFIX = ".git"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
# git@host:org/name.git
_SCP_LIKE_REMOTE_RE = re.compile(r"^(?:[^@/\s]+@)?(?P<host>[^:/\s]+):(?P<path>[^/\s].*)$")

# Each capture is anchored at the start of the scheme-stripped URL.
# host: a run of characters that are neither "/" nor whitespace
_HOST_RE = re.compile(r"^([^/\s]+)")
# organization: the same character class, immediately after "host/"
_ORG_RE = re.compile(r"^[^/\s]+/([^/\s]+)")
# name: after "host/organization/", up to the next "/" or end of string
_NAME_RE = re.compile(r"^[^/\s]+/[^/\s]+/([^/\s]+)")


class SubstitutionValue(str, Enum):
    """Which identity value replaces the placeholder token."""

    FULL = "full"
    NAME = "name"


@dataclass(frozen=True)
class RepoIdentity:
    """Identity of the repository being scaffolded. Immutable once resolved."""

    host: str
    organization: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.host}/{self.organization}/{self.name}"

    def value_for(self, kind: SubstitutionValue) -> str:
        """Return the string substituted for the placeholder token."""
        if kind is SubstitutionValue.NAME:
            return self.name
        return self.full_name

    def to_dict(self) -> dict[str, str]:
        return {
            "host": self.host,
            "organization": self.organization,
            "name": self.name,
            "full_name": self.full_name,
        }


def strip_scheme(url: str) -> str:
    """Drop the scheme and userinfo, normalizing SCP-like SSH remotes.

    ``https://github.com/acme/widgets.git`` and
    ``git@github.com:acme/widgets.git`` both become
    ``github.com/acme/widgets.git``.
    """
    cleaned = url.strip()
    scheme = _SCHEME_RE.match(cleaned)
    if scheme:
        cleaned = cleaned[scheme.end():]
        authority, sep, path = cleaned.partition("/")
        if "@" in authority:
            authority = authority.rsplit("@", 1)[1]
        return f"{authority}{sep}{path}"

    scp = _SCP_LIKE_REMOTE_RE.match(cleaned)
    if scp:
        return f"{scp.group('host')}/{scp.group('path')}"
    return cleaned


def capture_host(stripped: str) -> str:
    match = _HOST_RE.match(stripped)
    return match.group(1) if match else ""


def capture_organization(stripped: str) -> str:
    match = _ORG_RE.match(stripped)
    return match.group(1) if match else ""


def capture_name(stripped: str) -> str:
    """Capture the repository name, without a trailing ``.git``."""
    match = _NAME_RE.match(stripped)
    if not match:
        return ""
    name = match.group(1)
    if name.endswith(VCS_SUFFIX):
        name = name[: -len(VCS_SUFFIX)]
    return name


def parse_remote_url(url: str) -> RepoIdentity:
    """Parse ``host/organization/name`` out of a remote URL.

    Args:
        url: Remote URL, e.g. ``https://github.com/acme/widgets.git``

    Returns:
        RepoIdentity with all three fields populated

    Raises:
        MalformedRemoteURL: If any of the three captures is empty
    """
    stripped = strip_scheme(url)

    host = capture_host(stripped)
    if not host:
        raise MalformedRemoteURL(url, "host")
    organization = capture_organization(stripped)
    if not organization:
        raise MalformedRemoteURL(url, "organization")
    name = capture_name(stripped)
    if not name:
        raise MalformedRemoteURL(url, "name")

    return RepoIdentity(host=host, organization=organization, name=name)


def read_remote_url(repo_root: Path, remote: str = DEFAULT_REMOTE) -> str:
    """Return the URL configured for ``remote`` in the repository at ``repo_root``."""
    result = run_git(["remote", "get-url", remote], cwd=repo_root)
    if not result.ok:
        raise RemoteNotConfigured(remote, result.error_detail())
    return result.stdout.strip()


def resolve_identity(repo_root: Path, remote: str = DEFAULT_REMOTE) -> RepoIdentity:
    """Resolve the identity of the repository at ``repo_root`` from its remote."""
    url = read_remote_url(repo_root, remote)
    identity = parse_remote_url(url)
    logger.debug("Resolved identity %s from %s", identity.full_name, url)
    return identity


__all__ = [
    "RepoIdentity",
    "SubstitutionValue",
    "capture_host",
    "capture_name",
    "capture_organization",
    "parse_remote_url",
    "read_remote_url",
    "resolve_identity",
    "strip_scheme",
]
