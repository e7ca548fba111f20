"""Release path resolution.

Resolves canonical paths to the inputs and outputs of a patch release. Uses
environment variables when available, falls back to conventional defaults.

Environment variables:
    PATCH_CASCADE_RELEASE_DIR — release directory (default: current directory)
"""

from __future__ import annotations

import os
from pathlib import Path

GRAPH_FILENAME = "build-graph.yaml"
BASELINE_FILENAME = "patch-packages.yaml"
REQUESTS_FILENAME = "release-updates.yaml"
PATCH_UPDATES_FILENAME = "patch-updates.xml"


def release_dir() -> Path:
    """Return the release directory."""
    env = os.environ.get("PATCH_CASCADE_RELEASE_DIR")
    if env:
        return Path(env).expanduser()
    return Path.cwd()


def graph_path() -> Path:
    """Return the path to the build graph description."""
    return release_dir() / GRAPH_FILENAME


def baseline_path() -> Path:
    """Return the path to the patch baseline table."""
    return release_dir() / BASELINE_FILENAME


def requests_path() -> Path:
    """Return the path to the explicit update requests."""
    return release_dir() / REQUESTS_FILENAME


def patch_updates_path() -> Path:
    """Return the path the patch-update manifest is written to."""
    return release_dir() / PATCH_UPDATES_FILENAME
