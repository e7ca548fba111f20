"""Read explicit update requests and the patch baseline table from YAML."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from patch_cascade.updates.intent import PatchBaseline, UpdateIntent


@dataclass
class ReleaseRequests:
    """Explicit update requests for a release."""

    source_updates: list[UpdateIntent] = field(default_factory=list)
    dependency_updates: list[UpdateIntent] = field(default_factory=list)


def _read_mapping(path: Path | str) -> dict:
    yaml_path = Path(path)
    with open(yaml_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{yaml_path} is not a YAML mapping")
    return data


def parse_update_entries(entries, section: str, require_version: bool = True) -> list[UpdateIntent]:
    """Turn a YAML list of {name, version} items (or a name: version map) into intents."""
    if not entries:
        return []
    if isinstance(entries, dict):
        entries = [{"name": k, "version": v} for k, v in entries.items()]
    if not isinstance(entries, list):
        raise ValueError(f"'{section}' must be a list or a mapping")

    intents = []
    for entry in entries:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ValueError(f"'{section}' entry has no name: {entry!r}")
        version = entry.get("version")
        if version is None:
            if require_version:
                raise ValueError(f"'{section}' entry '{entry['name']}' has no version")
            version = ""
        intents.append(UpdateIntent(name=str(entry["name"]), version=str(version)))
    return intents


def load_requests(path: Path | str) -> ReleaseRequests:
    """Load source and dependency update requests.

    Source updates may omit the version; their target is always derived
    from the baseline.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If an entry is missing a name or required version.
    """
    data = _read_mapping(path)
    return ReleaseRequests(
        source_updates=parse_update_entries(
            data.get("source_updates"), "source_updates", require_version=False,
        ),
        dependency_updates=parse_update_entries(
            data.get("dependency_updates"), "dependency_updates",
        ),
    )


def load_baseline(path: Path | str) -> list[PatchBaseline]:
    """Load the patch baseline table.

    Each ``patch_packages`` entry has ``name`` and ``version``;
    ``new_version`` defaults to ``version`` (no patch planned yet).
    """
    data = _read_mapping(path)
    baselines = []
    for entry in data.get("patch_packages", []) or []:
        if not isinstance(entry, dict) or not entry.get("name") or entry.get("version") is None:
            raise ValueError(f"{path}: patch_packages entry needs name and version: {entry!r}")
        current = str(entry["version"])
        baselines.append(PatchBaseline(
            name=str(entry["name"]),
            current_version=current,
            new_version=str(entry.get("new_version") or current),
        ))
    return baselines
