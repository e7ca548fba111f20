"""Repository dependency graph and its topological order.

Edges are inferred from package references: when a project in repository A
references a package produced by a released project of repository B, A
depends on B and B is ordered before A.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Protocol


@dataclass(frozen=True)
class ProjectRef:
    """A project and the package names it references."""

    name: str
    package_references: frozenset[str] = frozenset()

    def references(self, package_name: str) -> bool:
        folded = package_name.casefold()
        return any(ref.casefold() == folded for ref in self.package_references)


@dataclass
class Repository:
    """A repository with released projects and build-only support projects."""

    name: str
    projects: list[ProjectRef] = field(default_factory=list)
    support_projects: list[ProjectRef] = field(default_factory=list)

    @property
    def all_projects(self) -> list[ProjectRef]:
        return self.projects + self.support_projects

    def has_released_project(self, name: str) -> bool:
        folded = name.casefold()
        return any(p.name.casefold() == folded for p in self.projects)


@dataclass
class RepositoryNode:
    repository: Repository
    incoming: set[str] = field(default_factory=set)
    outgoing: set[str] = field(default_factory=set)
    order: int = -1


class GraphCycleError(ValueError):
    """The repositories cannot be ordered because their dependencies form a cycle."""

    def __init__(self, members: list[str]) -> None:
        self.members = members
        super().__init__(f"Dependency cycle among repositories: {', '.join(members)}")


class DependencyOrderProvider(Protocol):
    """What the cascade resolver needs from a dependency graph."""

    def ordered_repositories(self) -> list[Repository]:
        """Repositories with every dependency before its dependents."""
        ...

    def find_repository(self, name: str) -> Repository | None:
        ...

    def all_projects(self) -> list[ProjectRef]:
        """Released and support projects of every repository."""
        ...


def producers_by_package(repositories: Iterable[Repository]) -> dict[str, list[str]]:
    """Map each released package id (casefolded) to the repositories producing it."""
    producers: dict[str, list[str]] = {}
    for repo in repositories:
        for project in repo.projects:
            repos = producers.setdefault(project.name.casefold(), [])
            if repo.name not in repos:
                repos.append(repo.name)
    return producers


def cycle_members(nodes: dict[str, RepositoryNode], unordered: set[str]) -> list[str]:
    """Names of the unordered repositories that can reach themselves.

    Repositories left over only because they depend on a cycle are excluded.
    """
    members = []
    for start in unordered:
        seen: set[str] = set()
        stack = [k for k in nodes[start].outgoing if k in unordered]
        while stack:
            key = stack.pop()
            if key == start:
                members.append(nodes[start].repository.name)
                break
            if key in seen:
                continue
            seen.add(key)
            stack.extend(k for k in nodes[key].outgoing if k in unordered)
    return sorted(members)


def dependency_edges(repositories: Iterable[Repository]) -> Iterator[tuple[str, str, str]]:
    """Yield (consumer repo, producer repo, package) for every cross-repo reference."""
    repos = list(repositories)
    producers = producers_by_package(repos)
    for repo in repos:
        for project in repo.all_projects:
            for ref in sorted(project.package_references):
                for producer in producers.get(ref.casefold(), []):
                    if producer.casefold() != repo.name.casefold():
                        yield repo.name, producer, ref


class DependencyGraph:
    """Immutable repository graph with a deterministic topological order."""

    def __init__(self, nodes: dict[str, RepositoryNode], order: list[str]) -> None:
        self._nodes = nodes
        self._order = order

    @classmethod
    def build(cls, repositories: Iterable[Repository]) -> "DependencyGraph":
        """Infer edges between repositories and order them dependencies-first.

        Ties are broken by repository name so the order is stable.

        Raises:
            GraphCycleError: If no topological order exists.
            ValueError: If two repositories share a name.
        """
        repos = list(repositories)
        nodes: dict[str, RepositoryNode] = {}
        for repo in repos:
            key = repo.name.casefold()
            if key in nodes:
                raise ValueError(f"Duplicate repository '{repo.name}'")
            nodes[key] = RepositoryNode(repository=repo)

        for consumer, producer, _package in dependency_edges(repos):
            nodes[consumer.casefold()].outgoing.add(producer.casefold())
            nodes[producer.casefold()].incoming.add(consumer.casefold())

        # Kahn's algorithm
        remaining = {key: len(node.outgoing) for key, node in nodes.items()}
        ready = [key for key, count in remaining.items() if count == 0]
        heapq.heapify(ready)
        order: list[str] = []
        while ready:
            key = heapq.heappop(ready)
            nodes[key].order = len(order)
            order.append(key)
            for dependent in nodes[key].incoming:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    heapq.heappush(ready, dependent)

        if len(order) < len(nodes):
            raise GraphCycleError(cycle_members(nodes, set(nodes) - set(order)))

        return cls(nodes, order)

    def all_projects(self) -> list[ProjectRef]:
        return [p for key in self._order for p in self._nodes[key].repository.all_projects]

    def ordered_repositories(self) -> list[Repository]:
        return [self._nodes[key].repository for key in self._order]

    def find_repository(self, name: str) -> Repository | None:
        node = self._nodes.get(name.casefold())
        return node.repository if node else None

    def node(self, name: str) -> RepositoryNode | None:
        return self._nodes.get(name.casefold())

    def dependencies_of(self, name: str) -> list[str]:
        """Names of repositories that ``name`` consumes packages from."""
        node = self._nodes[name.casefold()]
        return sorted(self._nodes[k].repository.name for k in node.outgoing)

    def dependents_of(self, name: str) -> list[str]:
        """Names of repositories that consume packages from ``name``."""
        node = self._nodes[name.casefold()]
        return sorted(self._nodes[k].repository.name for k in node.incoming)

    def __iter__(self) -> Iterator[RepositoryNode]:
        return (self._nodes[key] for key in self._order)

    def __len__(self) -> int:
        return len(self._nodes)
