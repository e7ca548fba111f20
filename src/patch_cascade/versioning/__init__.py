"""Versioning module — semantic version parsing and patch arithmetic."""

from patch_cascade.versioning.arithmetic import (
    MalformedVersionError,
    bump_patch,
    increment_patch,
    normalize_version,
    parse_version,
)

__all__ = [
    "MalformedVersionError",
    "bump_patch",
    "increment_patch",
    "normalize_version",
    "parse_version",
]
