"""Scaffolding pipeline: identity, locate, fetch, materialize, substitute."""

from .config import ScaffoldConfig, load_config
from .errors import (
    ConfigError,
    CopyFailure,
    FetchFailure,
    MalformedRemoteURL,
    RemoteNotConfigured,
    ScaffoldError,
    SubstitutionFailure,
    TemplateNotFound,
    UsageError,
)
from .fetcher import FetchedTemplate, ScratchWorkspace, fetch_template
from .identity import RepoIdentity, SubstitutionValue, parse_remote_url, resolve_identity
from .locator import TemplateReference, locate_fixed, locate_named
from .materialize import materialize
from .pipeline import STEPS, ScaffoldOutcome, scaffold
from .substitute import SubstitutionReport, substitute_tokens

__all__ = [
    "ConfigError",
    "CopyFailure",
    "FetchFailure",
    "FetchedTemplate",
    "MalformedRemoteURL",
    "RemoteNotConfigured",
    "RepoIdentity",
    "STEPS",
    "ScaffoldConfig",
    "ScaffoldError",
    "ScaffoldOutcome",
    "ScratchWorkspace",
    "SubstitutionFailure",
    "SubstitutionReport",
    "SubstitutionValue",
    "TemplateNotFound",
    "TemplateReference",
    "UsageError",
    "fetch_template",
    "load_config",
    "locate_fixed",
    "locate_named",
    "materialize",
    "parse_remote_url",
    "resolve_identity",
    "scaffold",
    "substitute_tokens",
]
