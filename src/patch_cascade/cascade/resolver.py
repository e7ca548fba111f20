"""Cascade resolution — which packages need a new patch version.

Explicit dependency bumps and source fixes seed the update set. Repositories
are then visited once, dependencies first: a repository whose released
projects reference anything already being updated gets every released
project without a pending patch bumped as well.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from patch_cascade.cascade.errors import (
    MissingBaselineError,
    ResolutionError,
    UnknownDependencyError,
    UnknownSourceProjectError,
)
from patch_cascade.graph.model import DependencyOrderProvider, Repository
from patch_cascade.updates.intent import (
    PatchBaseline,
    UpdateIntent,
    UpdateSet,
    find_baseline,
    normalize_dependency_update,
    normalize_source_update,
)
from patch_cascade.versioning.arithmetic import increment_patch, parse_version


@dataclass
class CascadeResult:
    """Result of resolving a release's updates.

    The update set is only trustworthy when ``passed`` is true.
    """

    updates: UpdateSet = field(default_factory=UpdateSet)
    errors: list[ResolutionError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    seeded: int = 0
    cascaded: list[str] = field(default_factory=list)
    passes: int = 0

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    @property
    def conflicts(self) -> dict[str, list[str]]:
        """Names that ended up with more than one target version."""
        seen: dict[str, list[str]] = {}
        for intent in self.updates:
            seen.setdefault(intent.name.casefold(), []).append(intent.version)
        return {name: versions for name, versions in seen.items() if len(versions) > 1}

    def summary(self) -> str:
        lines = [
            f"Patch Updates: {len(self.updates)} packages "
            f"({self.seeded} requested, {len(self.updates) - self.seeded} cascaded)",
        ]
        for intent in self.updates:
            lines.append(f"  Updates required: {intent}")
        if self.cascaded:
            lines.append(f"Cascaded through: {', '.join(self.cascaded)}")
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  {w}")
        return "\n".join(lines)


def validate_requests(
    dependency_updates: Iterable[UpdateIntent],
    source_updates: Iterable[UpdateIntent],
    graph: DependencyOrderProvider,
) -> list[ResolutionError]:
    """Check explicit requests against the graph without resolving anything."""
    repos = graph.ordered_repositories()
    projects = graph.all_projects()
    errors: list[ResolutionError] = []

    for update in dependency_updates:
        if not any(p.references(update.name) for p in projects):
            errors.append(UnknownDependencyError(update.name))

    for update in source_updates:
        if not any(repo.has_released_project(update.name) for repo in repos):
            errors.append(UnknownSourceProjectError(update.name))

    return errors


def _repo_is_affected(repo: Repository, updates: UpdateSet) -> bool:
    return any(
        updates.has_name(ref)
        for project in repo.projects
        for ref in project.package_references
    )


def _cascade_pass(
    repos: list[Repository],
    updates: UpdateSet,
    baselines: list[PatchBaseline],
    result: CascadeResult,
) -> int:
    added = 0
    for repo in repos:
        if not _repo_is_affected(repo, updates):
            continue

        derived = []
        for project in repo.projects:
            baseline = find_baseline(baselines, project.name)
            if baseline is None:
                warning = f"{repo.name}: released project {project.name} has no patch baseline entry"
                if warning not in result.warnings:
                    result.warnings.append(warning)
                continue
            if baseline.has_pending_patch:
                continue
            next_version = increment_patch(parse_version(baseline.new_version))
            derived.append(UpdateIntent(name=baseline.name, version=str(next_version)))

        new = updates.merge(derived)
        if new and repo.name not in result.cascaded:
            result.cascaded.append(repo.name)
        added += new
    return added


def resolve_updates(
    dependency_updates: Iterable[UpdateIntent],
    source_updates: Iterable[UpdateIntent],
    graph: DependencyOrderProvider,
    baselines: Iterable[PatchBaseline],
    fixed_point: bool = False,
) -> CascadeResult:
    """Compute every package that needs a new patch version.

    Args:
        dependency_updates: Third-party bumps; target versions are trusted as given.
        source_updates: Source fixes; target versions are derived from the baseline.
        graph: Repositories in dependency order.
        baselines: Current and planned versions of tracked projects.
        fixed_point: Repeat the cascade pass until nothing new is added instead
            of relying on a single pass over the order.

    Returns:
        CascadeResult with the update set and all accumulated errors.

    Raises:
        MalformedVersionError: If a baseline version needed for the run is malformed.
    """
    dependency_updates = list(dependency_updates)
    source_updates = list(source_updates)
    baselines = list(baselines)

    result = CascadeResult()
    result.errors.extend(validate_requests(dependency_updates, source_updates, graph))

    for update in dependency_updates:
        result.updates.add(normalize_dependency_update(update.name, update.version))

    for update in source_updates:
        baseline = find_baseline(baselines, update.name)
        if baseline is None:
            result.errors.append(MissingBaselineError(update.name))
            continue
        result.updates.add(normalize_source_update(update.name, baseline))

    result.seeded = len(result.updates)

    repos = graph.ordered_repositories()
    while True:
        result.passes += 1
        added = _cascade_pass(repos, result.updates, baselines, result)
        if not fixed_point or added == 0:
            break

    return result
