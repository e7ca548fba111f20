"""Load a build graph description (build-graph.yaml)."""

from __future__ import annotations

from pathlib import Path

import yaml

from patch_cascade.graph.model import ProjectRef, Repository


def _project_ref(entry: dict, repo_name: str) -> ProjectRef:
    if not isinstance(entry, dict):
        raise ValueError(f"Project entry in repository '{repo_name}' is not a mapping: {entry!r}")
    name = entry.get("name")
    if not name:
        raise ValueError(f"Project without a name in repository '{repo_name}'")
    refs = list(entry.get("references", []) or []) + list(entry.get("tools", []) or [])
    return ProjectRef(name=str(name), package_references=frozenset(str(r) for r in refs))


def released_packages(artifacts: list[dict]) -> dict[str, set[str]]:
    """Map repository name (casefolded) to the package ids it ships.

    Symbols artifacts never mark a project as released.
    """
    if not isinstance(artifacts, list):
        raise ValueError("'artifacts' must be a list")
    shipped: dict[str, set[str]] = {}
    for artifact in artifacts:
        if not isinstance(artifact, dict):
            raise ValueError(f"Artifact entry is not a mapping: {artifact!r}")
        if artifact.get("symbols"):
            continue
        repo = str(artifact.get("repo", "")).casefold()
        package = artifact.get("package")
        if repo and package:
            shipped.setdefault(repo, set()).add(str(package))
    return shipped


def repositories_from_dict(data: dict) -> list[Repository]:
    """Build repositories from a parsed build graph description.

    When an ``artifacts`` list is present, a project is released only if an
    artifact of its repository names its package id. Otherwise each
    project's ``released`` flag decides (default: released).
    """
    artifacts = data.get("artifacts")
    shipped = released_packages(artifacts) if artifacts is not None else None

    repositories = []
    for entry in data.get("repositories", []) or []:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ValueError(f"Repository entry has no name: {entry!r}")
        repo = Repository(name=str(entry["name"]))
        for proj in entry.get("projects", []) or []:
            ref = _project_ref(proj, repo.name)
            if shipped is not None:
                released = ref.name in shipped.get(repo.name.casefold(), set())
            else:
                released = bool(proj.get("released", True))
            (repo.projects if released else repo.support_projects).append(ref)
        repositories.append(repo)
    return repositories


def load_graph(path: Path | str) -> list[Repository]:
    """Read build-graph.yaml and return its repositories.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the file or one of its entries is malformed or unnamed.
    """
    graph_path = Path(path)
    with open(graph_path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{graph_path} is not a YAML mapping")

    return repositories_from_dict(data)
