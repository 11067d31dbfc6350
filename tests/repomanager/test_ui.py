"""Tests for the StepTracker renderer."""

from __future__ import annotations

import io

from rich.console import Console

from repomanager.cli.ui import StepTracker


def _render(tracker: StepTracker) -> str:
    console = Console(file=io.StringIO(), force_terminal=False, width=120)
    console.print(tracker.render())
    return console.file.getvalue()


def test_add_is_idempotent():
    tracker = StepTracker("Init")
    tracker.add("fetch", "Fetch template")
    tracker.add("fetch", "Fetch again")
    assert len(tracker.steps) == 1
    assert tracker.status_of("fetch") == "pending"


def test_update_sets_status_and_detail():
    tracker = StepTracker("Init")
    tracker.add("fetch", "Fetch template")
    tracker.update("fetch", "done", "template/go-app")
    assert tracker.status_of("fetch") == "done"
    assert "Fetch template (template/go-app)" in _render(tracker)


def test_update_unknown_key_appends():
    tracker = StepTracker("Init")
    tracker.update("extra", "error", "boom")
    assert tracker.status_of("extra") == "error"


def test_skip_pending():
    tracker = StepTracker("Init")
    tracker.add("fetch", "Fetch template")
    tracker.add("materialize", "Copy template files")
    tracker.update("fetch", "error", "failed")
    tracker.skip_pending()
    assert tracker.status_of("fetch") == "error"
    assert tracker.status_of("materialize") == "skipped"


def test_markup_in_detail_is_escaped():
    tracker = StepTracker("Init")
    tracker.add("config", "Load config")
    tracker.update("config", "error", "Invalid [template] section")
    assert "[template]" in _render(tracker)
