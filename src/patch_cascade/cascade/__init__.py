"""Cascade module — resolve explicit and transitive patch updates."""

from patch_cascade.cascade.errors import (
    MissingBaselineError,
    ResolutionError,
    UnknownDependencyError,
    UnknownSourceProjectError,
)
from patch_cascade.cascade.resolver import CascadeResult, resolve_updates, validate_requests

__all__ = [
    "MissingBaselineError",
    "ResolutionError",
    "UnknownDependencyError",
    "UnknownSourceProjectError",
    "CascadeResult",
    "resolve_updates",
    "validate_requests",
]
