from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Iterator

import pytest

REMOTE_URL = "https://github.com/acme/widgets.git"
TOKEN = "REPONAMETMPL"

GIT_AVAILABLE = shutil.which("git") is not None


TEMPLATE_FILES: dict[str, str] = {
    "template/go-app/cmd/REPONAMETMPL/main.go": (
        'package main\n\nconst packageName = "REPONAMETMPL/cmd/REPONAMETMPL"\n'
    ),
    "template/go-app/web/embed.go": "package web\n",
    "template/go-app/README.md": "# REPONAMETMPL\n\nGenerated project.\n",
    "template/go-app/config/.keep": "",
    "template/other/README.md": "other template\n",
    "README.md": "template repository\n",
}

GIT_ENV_KEYS = ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE")

def run(cmd: list[str], cwd: Path) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True)

def git_commit_all(repo: Path, message: str = "Initial commit") -> None:
    run(["git", "add", "."], cwd=repo)
    run(
        [
            "git",
            "-c",
            "user.name=Repo Manager",
            "-c",
            "user.email=repo@example.com",
            "-c",
            "commit.gpgsign=false",
            "commit",
            "-q",
            "-m",
            message,
        ],
        cwd=repo,
    )

@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point configuration at an empty home and clear REPOMANAGER_* overrides."""
    home = tmp_path / "repomanager-home"
    for key in list(os.environ):
        if key.startswith("REPOMANAGER_"):
            monkeypatch.delenv(key, raising=False)
    for key in GIT_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("REPOMANAGER_HOME", str(home))
    return home

@pytest.fixture()
def temp_repo(tmp_path: Path) -> Iterator[Path]:
    """Fresh working tree whose origin is https://github.com/acme/widgets.git."""
    if not GIT_AVAILABLE:
        pytest.skip("git not installed")
    repo_dir = tmp_path / "widgets"
    repo_dir.mkdir()
    run(["git", "init", "-q"], cwd=repo_dir)
    run(["git", "remote", "add", "origin", REMOTE_URL], cwd=repo_dir)
    yield repo_dir

@pytest.fixture()
def template_source(tmp_path: Path) -> str:
    """Local template repository; returns its file:// URL."""
    if not GIT_AVAILABLE:
        pytest.skip("git not installed")
    source = tmp_path / "repo-tmpl"
    source.mkdir()
    run(["git", "init", "-q"], cwd=source)
    run(["git", "config", "uploadpack.allowFilter", "true"], cwd=source)
    run(["git", "config", "uploadpack.allowAnySHA1InWant", "true"], cwd=source)
    for rel_path, content in TEMPLATE_FILES.items():
        target = source / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    entrypoint = source / "template/go-app/tool/dev/docker-entrypoint.sh"
    entrypoint.parent.mkdir(parents=True, exist_ok=True)
    entrypoint.write_text("#!/bin/sh\nexec /app/REPONAMETMPL\n", encoding="utf-8")
    entrypoint.chmod(0o755)
    git_commit_all(source)
    return source.resolve().as_uri()

def snapshot(root: Path) -> dict[str, bytes]:
    """Map of relative path -> content for every file outside .git."""
    files: dict[str, bytes] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root)
        if rel.parts and rel.parts[0] == ".git":
            continue
        if path.is_file():
            files[rel.as_posix()] = path.read_bytes()
    return files

@pytest.fixture()
def tree_snapshot():
    return snapshot
