"""Minimal-footprint fetch of a single template subdirectory.

The template source is cloned with blob content deferred and a sparse
checkout restricted to the template subdirectory, so neither the full
history nor sibling templates are transferred. The clone's ``.git``
directory is removed afterwards so the fetched tree is plain files.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from .constants import DEFAULT_FETCH_TIMEOUT, GIT_DIR_NAME, SCRATCH_PREFIX
from .errors import FetchFailure, TemplateNotFound
from .git import is_git_available, run_git
from .locator import TemplateReference

logger = logging.getLogger(__name__)

CHECKOUT_DIR_NAME = "checkout"


class ScratchWorkspace:
    """Uniquely named temporary directory owned by a single run.

    Use as a context manager; the directory is removed on exit whether the
    run succeeded or not.
    """

    def __init__(self, prefix: str = SCRATCH_PREFIX, base_dir: Path | None = None) -> None:
        self.prefix = prefix
        self.base_dir = base_dir
        self._path: Path | None = None

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("ScratchWorkspace is not active")
        return self._path

    def __enter__(self) -> ScratchWorkspace:
        self._path = Path(tempfile.mkdtemp(prefix=self.prefix, dir=self.base_dir))
        logger.debug("Created scratch workspace %s", self._path)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        if self._path is None:
            return
        try:
            shutil.rmtree(self._path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove scratch workspace {self._path}: {e}")
        self._path = None


@dataclass(frozen=True)
class FetchedTemplate:
    """A template subtree fetched into a scratch workspace."""

    reference: TemplateReference
    root: Path


def fetch_template(
    reference: TemplateReference,
    workspace: ScratchWorkspace,
    *,
    timeout: float | None = DEFAULT_FETCH_TIMEOUT,
) -> FetchedTemplate:
    """Fetch ``reference.subdirectory`` from ``reference.source_url``.

    Args:
        reference: Template source URL and subdirectory
        workspace: Active scratch workspace receiving the clone
        timeout: Seconds allowed for each git network operation (None waits forever)

    Returns:
        FetchedTemplate pointing at the fetched subtree

    Raises:
        FetchFailure: If git is missing, the clone fails or times out
        TemplateNotFound: If the subdirectory does not exist in the source
    """
    if not is_git_available():
        raise FetchFailure("git executable not found on PATH", hint="Install git and retry.")

    checkout = workspace.path / CHECKOUT_DIR_NAME

    clone = run_git(
        [
            "clone",
            "--quiet",
            "--depth=1",
            "--filter=blob:none",
            "--sparse",
            "--",
            reference.source_url,
            str(checkout),
        ],
        timeout=timeout,
    )
    if not clone.ok:
        raise FetchFailure(
            f"Failed to clone {reference.source_url}: {clone.error_detail('git clone failed')}"
        )

    sparse = run_git(
        ["-C", str(checkout), "sparse-checkout", "set", reference.subdirectory],
        timeout=timeout,
    )
    if not sparse.ok:
        raise FetchFailure(
            f"Failed to check out {reference.subdirectory}: "
            f"{sparse.error_detail('git sparse-checkout failed')}"
        )

    _strip_git_metadata(checkout)

    template_root = checkout / reference.subdirectory
    if not template_root.is_dir():
        raise TemplateNotFound(reference.subdirectory, reference.source_url)

    logger.debug("Fetched %s into %s", reference.subdirectory, template_root)
    return FetchedTemplate(reference=reference, root=template_root)


def _strip_git_metadata(checkout: Path) -> None:
    git_dir = checkout / GIT_DIR_NAME
    try:
        if git_dir.is_dir():
            shutil.rmtree(git_dir)
        elif git_dir.exists():
            git_dir.unlink()
    except OSError as e:
        raise FetchFailure(f"Failed to remove {git_dir}: {e}") from e


__all__ = ["FetchedTemplate", "ScratchWorkspace", "fetch_template"]
