"""Tests for the scaffolding orchestrator."""

from __future__ import annotations

import os
import stat
import subprocess
from functools import partial
from pathlib import Path
from unittest.mock import patch

import pytest

from repomanager.core.config import ScaffoldConfig
from repomanager.core.errors import MalformedRemoteURL, TemplateNotFound, UsageError
from repomanager.core.identity import RepoIdentity, SubstitutionValue
from repomanager.core.locator import locate_fixed, locate_named
from repomanager.core.pipeline import STEPS, ScaffoldOutcome, scaffold


def _run(repo: Path, locate, config: ScaffoldConfig, **kwargs) -> tuple[ScaffoldOutcome, list[tuple[str, str]]]:
    events: list[tuple[str, str]] = []
    outcome = scaffold(
        locate,
        repo_root=repo,
        destination=repo,
        config=config,
        on_step=lambda key, status, detail: events.append((key, status)),
        **kwargs,
    )
    return outcome, events


def test_outcome_defaults():
    outcome = ScaffoldOutcome()
    assert outcome.ok
    assert outcome.exit_code == 0


def test_scaffolds_fixed_template(temp_repo: Path, template_source: str):
    config = ScaffoldConfig(source_url=template_source)
    outcome, events = _run(temp_repo, partial(locate_fixed, template_source, "template/go-app"), config)

    assert outcome.ok, outcome.error
    assert outcome.identity == RepoIdentity("github.com", "acme", "widgets")
    assert outcome.reference.subdirectory == "template/go-app"

    main_go = temp_repo / "cmd" / "REPONAMETMPL" / "main.go"
    assert main_go.read_text(encoding="utf-8") == (
        'package main\n\nconst packageName = "github.com/acme/widgets/cmd/github.com/acme/widgets"\n'
    )
    assert not (temp_repo / "cmd" / "github.com").exists()
    assert not outcome.substitution.renamed_paths
    assert (temp_repo / "README.md").read_text(encoding="utf-8").startswith(
        "# github.com/acme/widgets"
    )
    assert (temp_repo / "web" / "embed.go").read_text(encoding="utf-8") == "package web\n"
    assert (temp_repo / "config" / ".keep").read_bytes() == b""
    assert not (temp_repo / "template").exists()
    assert not (temp_repo / "other").exists()
    assert [key for key, status in events if status == "done"] == [key for key, _ in STEPS]


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_preserves_executable_bit(temp_repo: Path, template_source: str):
    config = ScaffoldConfig(source_url=template_source)
    outcome, _ = _run(temp_repo, partial(locate_fixed, template_source, "template/go-app"), config)
    assert outcome.ok, outcome.error
    entrypoint = temp_repo / "tool" / "dev" / "docker-entrypoint.sh"
    assert stat.S_IMODE(entrypoint.stat().st_mode) & stat.S_IXUSR


def test_name_value(temp_repo: Path, template_source: str):
    config = ScaffoldConfig(source_url=template_source)
    outcome, _ = _run(
        temp_repo,
        partial(locate_named, template_source, "template", "go-app"),
        config,
        value_kind=SubstitutionValue.NAME,
    )
    assert outcome.ok, outcome.error
    main_go = temp_repo / "cmd" / "REPONAMETMPL" / "main.go"
    assert 'packageName = "widgets/cmd/widgets"' in main_go.read_text(encoding="utf-8")


def test_with_path_renaming(temp_repo: Path, template_source: str):
    config = ScaffoldConfig(source_url=template_source)
    outcome, _ = _run(
        temp_repo,
        partial(locate_fixed, template_source, "template/go-app"),
        config,
        rename_paths=True,
    )
    assert outcome.ok, outcome.error
    assert not (temp_repo / "cmd" / "REPONAMETMPL").exists()
    main_go = temp_repo / "cmd" / "github.com" / "acme" / "widgets" / "main.go"
    assert "github.com/acme/widgets/cmd/github.com/acme/widgets" in main_go.read_text(encoding="utf-8")
    assert (Path("cmd") / "REPONAMETMPL", Path("cmd") / "github.com/acme/widgets") in (
        outcome.substitution.renamed_paths
    )


def test_git_metadata_of_target_untouched(temp_repo: Path, template_source: str):
    config_before = (temp_repo / ".git" / "config").read_bytes()
    config = ScaffoldConfig(source_url=template_source)
    outcome, _ = _run(temp_repo, partial(locate_fixed, template_source, "template/go-app"), config)
    assert outcome.ok, outcome.error
    assert (temp_repo / ".git" / "config").read_bytes() == config_before


def test_unknown_template(temp_repo: Path, template_source: str, tree_snapshot):
    before = tree_snapshot(temp_repo)
    config = ScaffoldConfig(source_url=template_source)
    outcome, events = _run(temp_repo, partial(locate_named, template_source, "template", "nope"), config)

    assert isinstance(outcome.error, TemplateNotFound)
    assert outcome.failed_step == "fetch"
    assert outcome.exit_code == 1
    assert ("fetch", "error") in events
    assert ("materialize", "running") not in events
    assert tree_snapshot(temp_repo) == before


def test_malformed_remote_stops_before_fetch(temp_repo: Path, tree_snapshot):
    subprocess.run(
        ["git", "remote", "set-url", "origin", "https://github.com/acme"],
        cwd=temp_repo,
        check=True,
    )
    before = tree_snapshot(temp_repo)
    with patch("repomanager.core.pipeline.fetch_template") as mock_fetch:
        outcome, _ = _run(
            temp_repo,
            partial(locate_fixed, "https://example.invalid/tmpl", "template/go-app"),
            ScaffoldConfig(),
        )
    assert isinstance(outcome.error, MalformedRemoteURL)
    assert outcome.failed_step == "identity"
    assert outcome.exit_code == 1
    mock_fetch.assert_not_called()
    assert tree_snapshot(temp_repo) == before


def test_blank_template_name(temp_repo: Path):
    with patch("repomanager.core.pipeline.fetch_template") as mock_fetch:
        outcome, _ = _run(
            temp_repo,
            partial(locate_named, "https://example.invalid/tmpl", "template", "  "),
            ScaffoldConfig(),
        )
    assert isinstance(outcome.error, UsageError)
    assert outcome.failed_step == "locate"
    mock_fetch.assert_not_called()


def test_scratch_workspace_removed(temp_repo: Path, template_source: str, tmp_path: Path, monkeypatch):
    scratch_parent = tmp_path / "scratch"
    scratch_parent.mkdir()
    monkeypatch.setattr("tempfile.tempdir", str(scratch_parent))
    config = ScaffoldConfig(source_url=template_source)
    outcome, _ = _run(temp_repo, partial(locate_fixed, template_source, "template/go-app"), config)
    assert outcome.ok, outcome.error
    assert list(scratch_parent.iterdir()) == []
