"""Placeholder token substitution across a directory tree."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .constants import GIT_DIR_NAME
from .errors import SubstitutionFailure

logger = logging.getLogger(__name__)


@dataclass
class SubstitutionReport:
    """What a substitution pass touched."""

    files_scanned: int = 0
    files_changed: list[Path] = field(default_factory=list)
    replacements: int = 0
    renamed_paths: list[tuple[Path, Path]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.files_changed or self.renamed_paths)

    def summary(self) -> str:
        text = f"{self.replacements} replacement(s) in {len(self.files_changed)} file(s)"
        if self.renamed_paths:
            text += f", {len(self.renamed_paths)} path(s) renamed"
        return text


def _walk(root: Path, skip_dirs: tuple[str, ...], topdown: bool = True):
    for dirpath, dirnames, filenames in os.walk(root, topdown=topdown, followlinks=False):
        current = Path(dirpath)
        if topdown:
            dirnames[:] = [d for d in dirnames if d not in skip_dirs]
        elif any(part in skip_dirs for part in current.relative_to(root).parts):
            continue
        yield current, dirnames, filenames


def replace_in_file(path: Path, token: bytes, value: bytes) -> int:
    """Replace every literal ``token`` in ``path``; return the occurrence count.

    The file is only rewritten when it contains the token.
    """
    data = path.read_bytes()
    count = data.count(token)
    if count:
        path.write_bytes(data.replace(token, value))
    return count


def substitute_tokens(
    root: Path,
    token: str,
    value: str,
    *,
    rename_paths: bool = False,
    skip_dirs: tuple[str, ...] = (GIT_DIR_NAME,),
) -> SubstitutionReport:
    """Replace ``token`` with ``value`` in every regular file under ``root``.

    Matching is exact and byte-level; file syntax is not parsed and binary
    files are not detected. Symbolic links are neither followed nor
    rewritten. When ``rename_paths`` is set, files and directories whose
    name contains the token are renamed afterwards, deepest first.

    Raises:
        SubstitutionFailure: If reading, writing or renaming fails
        ValueError: If ``token`` is empty
    """
    if not token:
        raise ValueError("Placeholder token must not be empty")

    token_bytes = token.encode("utf-8")
    value_bytes = value.encode("utf-8")
    report = SubstitutionReport()

    try:
        for current, _dirnames, filenames in _walk(root, skip_dirs):
            for filename in filenames:
                path = current / filename
                if path.is_symlink() or not path.is_file():
                    continue
                report.files_scanned += 1
                count = replace_in_file(path, token_bytes, value_bytes)
                if count:
                    report.replacements += count
                    report.files_changed.append(path.relative_to(root))
        if rename_paths:
            report.renamed_paths = _rename_paths(root, token, value, skip_dirs)
    except OSError as e:
        raise SubstitutionFailure(f"Failed to substitute {token!r} under {root}: {e}") from e

    logger.debug("Substitution under %s: %s", root, report.summary())
    return report


def _rename_paths(
    root: Path, token: str, value: str, skip_dirs: tuple[str, ...]
) -> list[tuple[Path, Path]]:
    renamed: list[tuple[Path, Path]] = []
    # Bottom-up so children are renamed before their parent directory moves.
    for current, dirnames, filenames in _walk(root, skip_dirs, topdown=False):
        for name in [*filenames, *dirnames]:
            if token not in name or name in skip_dirs:
                continue
            source = current / name
            target = current / name.replace(token, value)
            if target == source:
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if source.is_dir() and not source.is_symlink() and target.is_dir():
                shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
                shutil.rmtree(source)
            else:
                os.replace(source, target)
            renamed.append((source.relative_to(root), target.relative_to(root)))
    return renamed


__all__ = ["SubstitutionReport", "replace_in_file", "substitute_tokens"]
