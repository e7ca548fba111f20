"""Updates module — update intents, patch baselines, and their loaders."""

from patch_cascade.updates.intent import (
    PatchBaseline,
    UpdateIntent,
    UpdateSet,
    find_baseline,
    normalize_dependency_update,
    normalize_source_update,
)
from patch_cascade.updates.loader import ReleaseRequests, load_baseline, load_requests

__all__ = [
    "PatchBaseline",
    "UpdateIntent",
    "UpdateSet",
    "find_baseline",
    "normalize_dependency_update",
    "normalize_source_update",
    "ReleaseRequests",
    "load_baseline",
    "load_requests",
]
