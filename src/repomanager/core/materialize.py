"""Copy a fetched template subtree into the working directory."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .errors import CopyFailure
from .fetcher import FetchedTemplate

logger = logging.getLogger(__name__)


def _clear_target(target: Path) -> None:
    """Remove a file or link at ``target`` so it can be recreated."""
    if target.is_symlink() or (target.exists() and not target.is_dir()):
        target.unlink()


def materialize(fetched: FetchedTemplate, destination: Path) -> list[Path]:
    """Copy every entry under ``fetched.root`` into ``destination``.

    Relative paths and file modes are preserved. Existing files and links at
    the same relative path are overwritten without confirmation. Symbolic
    links are recreated as links, never followed. The copy is not
    transactional: a failure part-way leaves the files copied so far.

    Args:
        fetched: Template subtree produced by the fetch stage
        destination: Directory receiving the files (usually the cwd)

    Returns:
        Relative paths of the copied files, in copy order

    Raises:
        CopyFailure: If any filesystem operation fails
    """
    copied: list[Path] = []
    directories: list[tuple[Path, Path]] = []

    try:
        destination.mkdir(parents=True, exist_ok=True)
        for dirpath, dirnames, filenames in os.walk(fetched.root, followlinks=False):
            current = Path(dirpath)
            target_dir = destination / current.relative_to(fetched.root)
            if current != fetched.root:
                if target_dir.is_symlink():
                    target_dir.unlink()
                target_dir.mkdir(exist_ok=True)
                directories.append((current, target_dir))

            # os.walk lists links to directories as directories.
            linked = [name for name in dirnames if (current / name).is_symlink()]
            dirnames[:] = sorted(name for name in dirnames if name not in linked)

            for name in sorted([*filenames, *linked]):
                source = current / name
                target = target_dir / name
                _clear_target(target)
                shutil.copy2(source, target, follow_symlinks=False)
                copied.append(source.relative_to(fetched.root))

        # Directory modes are applied once their contents are written.
        for source_dir, target_dir in reversed(directories):
            shutil.copystat(source_dir, target_dir)
    except OSError as e:
        raise CopyFailure(f"Failed to copy template into {destination}: {e}") from e

    logger.debug("Copied %d files into %s", len(copied), destination)
    return copied


__all__ = ["materialize"]
