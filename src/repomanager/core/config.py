"""Scaffolding configuration management.

Values are resolved in this order, later sources winning:

1. Built-in defaults (``core.constants``)
2. ``[template]`` section of ``~/.repomanager/config.toml``
3. ``REPOMANAGER_*`` environment variables
4. Command-line flags (``ScaffoldConfig.with_overrides``)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import toml  # type: ignore[import-untyped]

from .constants import (
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_FIXED_SUBDIRECTORY,
    DEFAULT_PLACEHOLDER,
    DEFAULT_REMOTE,
    DEFAULT_TEMPLATE_ROOT,
    DEFAULT_TEMPLATE_URL,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.toml"
CONFIG_SECTION = "template"
HOME_ENV = "REPOMANAGER_HOME"

ENV_OVERRIDES = {
    "source_url": "REPOMANAGER_SOURCE_URL",
    "template_root": "REPOMANAGER_TEMPLATE_ROOT",
    "fetch_timeout": "REPOMANAGER_FETCH_TIMEOUT",
}

_STRING_KEYS = ("source_url", "template_root", "fixed_subdirectory", "placeholder", "remote")


def get_config_home(environ: Mapping[str, str] | None = None) -> Path:
    """Return the directory holding ``config.toml``."""
    env = os.environ if environ is None else environ
    if env_home := env.get(HOME_ENV):
        return Path(env_home).expanduser()
    return Path.home() / ".repomanager"


def parse_timeout(raw: Any, source: str) -> float:
    """Validate a fetch timeout in seconds; it must be a positive number."""
    if isinstance(raw, bool):
        raise ConfigError(f"Invalid fetch_timeout from {source}: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid fetch_timeout from {source}: {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"fetch_timeout from {source} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class ScaffoldConfig:
    """Effective settings for one scaffolding run."""

    source_url: str = DEFAULT_TEMPLATE_URL
    template_root: str = DEFAULT_TEMPLATE_ROOT
    fixed_subdirectory: str = DEFAULT_FIXED_SUBDIRECTORY
    placeholder: str = DEFAULT_PLACEHOLDER
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    remote: str = DEFAULT_REMOTE
    origins: dict[str, str] = field(default_factory=dict, compare=False)

    def origin_of(self, key: str) -> str:
        return self.origins.get(key, "default")

    def with_overrides(self, **overrides: Any) -> ScaffoldConfig:
        """Return a copy with every non-None override applied (origin ``cli``)."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        for key in _STRING_KEYS:
            if key in values and not str(values[key]).strip():
                raise ConfigError(f"Empty value for {key}")
        if "fetch_timeout" in values:
            values["fetch_timeout"] = parse_timeout(values["fetch_timeout"], "--timeout")
        origins = dict(self.origins)
        origins.update({key: "cli" for key in values})
        return replace(self, origins=origins, **values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_url": self.source_url,
            "template_root": self.template_root,
            "fixed_subdirectory": self.fixed_subdirectory,
            "placeholder": self.placeholder,
            "fetch_timeout": self.fetch_timeout,
            "remote": self.remote,
        }


def _read_config_file(config_file: Path) -> dict[str, Any]:
    if not config_file.exists():
        return {}
    try:
        data: dict[str, Any] = toml.load(config_file)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Unable to read {config_file}: {e}") from e
    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid [{CONFIG_SECTION}] section in {config_file}")
    return section


def load_config(
    config_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ScaffoldConfig:
    """Load configuration from file and environment on top of the defaults."""
    env = os.environ if environ is None else environ
    if config_file is None:
        config_file = get_config_home(env) / CONFIG_FILE_NAME

    values: dict[str, Any] = {}
    origins: dict[str, str] = {}

    section = _read_config_file(config_file)
    for key in _STRING_KEYS:
        raw = section.get(key)
        if raw is None:
            continue
        if not isinstance(raw, str) or not raw.strip():
            raise ConfigError(f"Invalid {key} in {config_file}: {raw!r}")
        values[key] = raw.strip()
        origins[key] = str(config_file)
    if "fetch_timeout" in section:
        values["fetch_timeout"] = parse_timeout(section["fetch_timeout"], str(config_file))
        origins["fetch_timeout"] = str(config_file)

    for key, env_name in ENV_OVERRIDES.items():
        raw = env.get(env_name)
        if not raw:
            continue
        if key == "fetch_timeout":
            values[key] = parse_timeout(raw, env_name)
        else:
            values[key] = raw.strip()
        origins[key] = env_name

    if origins:
        logger.debug("Configuration overrides: %s", origins)
    return ScaffoldConfig(origins=origins, **values)


__all__ = [
    "CONFIG_FILE_NAME",
    "ScaffoldConfig",
    "get_config_home",
    "load_config",
    "parse_timeout",
]
