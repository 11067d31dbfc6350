"""Thin subprocess wrapper around the git executable."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_NOT_FOUND = 127
GIT_TIMED_OUT = 124

__all__ = [
    "GIT_NOT_FOUND",
    "GIT_TIMED_OUT",
    "GitCommandResult",
    "first_line",
    "is_git_available",
    "run_git",
]


@dataclass
class GitCommandResult:
    """Normalized outcome of one git invocation."""

    args: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def timed_out(self) -> bool:
        return self.returncode == GIT_TIMED_OUT

    def error_detail(self, default: str = "") -> str:
        return first_line(self.stderr) or default


def run_git(
    args: list[str],
    *,
    cwd: Path | None = None,
    timeout: float | None = 15,
) -> GitCommandResult:
    """Run git and normalize failure shape for deterministic handling.

    Never raises for git failures: a missing executable maps to returncode
    127 and an expired timeout to 124, mirroring the shell conventions.
    """
    logger.debug("git %s (cwd=%s, timeout=%s)", " ".join(args), cwd, timeout)
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
        return GitCommandResult(
            args=list(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
    except FileNotFoundError:
        return GitCommandResult(
            args=list(args),
            returncode=GIT_NOT_FOUND,
            stdout="",
            stderr="git executable not found on PATH",
        )
    except subprocess.TimeoutExpired:
        return GitCommandResult(
            args=list(args),
            returncode=GIT_TIMED_OUT,
            stdout="",
            stderr=f"git command timed out after {timeout}s: git {' '.join(args)}",
        )


@lru_cache(maxsize=1)
def is_git_available() -> bool:
    """
    Check if git is installed and working.

    Returns:
        True if git is installed and responds to --version, False otherwise.
    """
    if shutil.which("git") is None:
        return False
    try:
        result = subprocess.run(
            ["git", "--version"],
            capture_output=True,
            timeout=5,
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, OSError):
        return False


def first_line(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""
