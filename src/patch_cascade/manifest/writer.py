"""Write and re-read the patch-update manifest.

XML layout (default)::

    <Project>
      <ItemGroup>
        <PatchUpdate Include="Package.Name" CurrentVersion="1.2.4" />
      </ItemGroup>
    </Project>

A path ending in ``.json`` gets a list of ``{"name", "version"}`` objects instead.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable

from patch_cascade.updates.intent import UpdateIntent

ITEM_TAG = "PatchUpdate"
NAME_ATTR = "Include"
VERSION_ATTR = "CurrentVersion"


def _is_json(path: Path) -> bool:
    return path.suffix.lower() == ".json"


def write_patch_updates(updates: Iterable[UpdateIntent], path: Path | str) -> Path:
    """Persist updates in iteration order.

    Args:
        updates: Intents to write.
        path: Output file; format chosen by extension.

    Returns:
        The path written.
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    updates = list(updates)

    if _is_json(out_path):
        with open(out_path, "w") as f:
            json.dump([{"name": u.name, "version": u.version} for u in updates], f, indent=2)
            f.write("\n")
        return out_path

    project = ET.Element("Project")
    group = ET.SubElement(project, "ItemGroup")
    for update in updates:
        ET.SubElement(group, ITEM_TAG, {NAME_ATTR: update.name, VERSION_ATTR: update.version})
    ET.indent(project, space="  ")
    ET.ElementTree(project).write(out_path, encoding="utf-8", xml_declaration=False)
    return out_path


def read_patch_updates(path: Path | str) -> list[UpdateIntent]:
    """Read a manifest written by write_patch_updates, preserving order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If an entry lacks a name or version.
    """
    in_path = Path(path)

    if _is_json(in_path):
        with open(in_path) as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{in_path} is not a JSON list")
        pairs = [
            (entry.get("name"), entry.get("version")) if isinstance(entry, dict) else (None, None)
            for entry in data
        ]
    else:
        root = ET.parse(in_path).getroot()
        pairs = [(el.get(NAME_ATTR), el.get(VERSION_ATTR)) for el in root.iter(ITEM_TAG)]

    intents = []
    for name, version in pairs:
        if not name or not version:
            raise ValueError(f"{in_path}: patch update entry needs a name and a version")
        intents.append(UpdateIntent(name=name, version=version))
    return intents
