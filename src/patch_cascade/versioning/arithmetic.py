"""Patch-level version arithmetic on semantic versions."""

from __future__ import annotations

import semantic_version


class MalformedVersionError(ValueError):
    """A version string does not parse as a semantic version."""

    def __init__(self, text: object, reason: str = "") -> None:
        self.text = text
        message = f"Malformed version '{text}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


def parse_version(text: str) -> semantic_version.Version:
    """Parse a strict semantic version string.

    Args:
        text: Version string, e.g. "2.1.0" or "2.1.0-rtm-3042".

    Returns:
        Parsed version.

    Raises:
        MalformedVersionError: If the string is not a valid semantic version.
    """
    if not isinstance(text, str):
        raise MalformedVersionError(text, "not a string")
    try:
        return semantic_version.Version(text.strip())
    except ValueError as e:
        raise MalformedVersionError(text, str(e)) from e


def increment_patch(version: semantic_version.Version) -> semantic_version.Version:
    """Return the next patch version, keeping major, minor and pre-release.

    Build metadata is not carried over.
    """
    return semantic_version.Version(
        major=version.major,
        minor=version.minor,
        patch=version.patch + 1,
        prerelease=version.prerelease,
    )


def normalize_version(text: str) -> str:
    """Render a version string in normalized form (no build metadata)."""
    return str(parse_version(text).truncate("prerelease"))


def bump_patch(text: str) -> str:
    """Parse a version string and return the next patch version as a string."""
    return str(increment_patch(parse_version(text)))
