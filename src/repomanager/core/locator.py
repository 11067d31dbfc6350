"""Locate the template subdirectory to fetch from the template source."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import UsageError


@dataclass(frozen=True)
class TemplateReference:
    """Where a template lives: a repository URL and a path inside it."""

    source_url: str
    subdirectory: str


def _normalize(path: str) -> str:
    return path.strip().strip("/")


def _reference(source_url: str, subdirectory: str) -> TemplateReference:
    # Both values reach git as positional arguments.
    if source_url.strip().startswith("-"):
        raise UsageError(f"Invalid template source URL: {source_url!r}")
    if subdirectory.startswith("-"):
        raise UsageError(f"Invalid template path: {subdirectory!r}")
    return TemplateReference(source_url=source_url.strip(), subdirectory=subdirectory)


def locate_fixed(source_url: str, subdirectory: str) -> TemplateReference:
    """Reference a single, preconfigured template.

    Raises:
        UsageError: If the URL or the path would be read by git as an option
    """
    return _reference(source_url, _normalize(subdirectory))


def locate_named(source_url: str, template_root: str, name: str | None) -> TemplateReference:
    """Reference ``<template_root>/<name>`` in the template source.

    The name is not validated beyond being present; an unknown template is
    reported by the fetch stage.

    Raises:
        UsageError: If no template name was supplied, or the resulting path
            would be read by git as an option
    """
    if name is None or not name.strip():
        raise UsageError("Missing required argument: TEMPLATE")
    root = _normalize(template_root)
    subdirectory = f"{root}/{name.strip()}" if root else name.strip()
    return _reference(source_url, subdirectory)


__all__ = ["TemplateReference", "locate_fixed", "locate_named"]
