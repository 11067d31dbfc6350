"""Reusable UI helpers for repomanager CLI output."""

from __future__ import annotations

from dataclasses import dataclass

from rich.markup import escape
from rich.tree import Tree

_SYMBOLS = {
    "done": "[green]●[/green]",
    "pending": "[green dim]○[/green dim]",
    "running": "[cyan]○[/cyan]",
    "error": "[red]●[/red]",
    "skipped": "[yellow]○[/yellow]",
}


@dataclass
class _Step:
    key: str
    label: str
    status: str = "pending"
    detail: str = ""


class StepTracker:
    """Track pipeline steps and render them as a Rich tree.

    ``update`` matches the pipeline's progress callback signature, so a
    tracker can be passed straight to ``scaffold(on_step=...)``.
    """

    def __init__(self, title: str):
        self.title = title
        self.steps: list[_Step] = []

    def add(self, key: str, label: str) -> None:
        if all(step.key != key for step in self.steps):
            self.steps.append(_Step(key=key, label=label))

    def update(self, key: str, status: str, detail: str = "") -> None:
        for step in self.steps:
            if step.key == key:
                step.status = status
                if detail:
                    step.detail = detail
                return
        self.steps.append(_Step(key=key, label=key, status=status, detail=detail))

    def status_of(self, key: str) -> str | None:
        for step in self.steps:
            if step.key == key:
                return step.status
        return None

    def skip_pending(self, detail: str = "") -> None:
        for step in self.steps:
            if step.status == "pending":
                step.status = "skipped"
                step.detail = detail or step.detail

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step.status, " ")
            label = escape(step.label)
            detail_text = escape(step.detail.strip())
            if step.status == "pending":
                if detail_text:
                    line = f"{symbol} [bright_black]{label} ({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [bright_black]{label}[/bright_black]"
            elif detail_text:
                line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
            else:
                line = f"{symbol} [white]{label}[/white]"
            tree.add(line)
        return tree
