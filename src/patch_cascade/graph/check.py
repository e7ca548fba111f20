"""Build graph validation — cycle detection, duplicate packages, external references."""

from collections import defaultdict
from dataclasses import dataclass, field

from patch_cascade.graph.model import Repository, dependency_edges, producers_by_package


@dataclass
class GraphCheckResult:
    """Result of build graph validation."""

    total_repos: int = 0
    total_edges: int = 0
    duplicate_packages: dict[str, list[str]] = field(default_factory=dict)
    cycles: list[list[str]] = field(default_factory=list)
    external_references: dict[str, int] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return len(self.duplicate_packages) == 0 and len(self.cycles) == 0

    @property
    def violations(self) -> list[str]:
        v = []
        for package, repos in sorted(self.duplicate_packages.items()):
            v.append(f"Package {package} released by several repos: {', '.join(repos)}")
        for c in self.cycles:
            v.append(f"Cycle: {' -> '.join(c)}")
        return v

    def summary(self) -> str:
        lines = [
            f"Build Graph: {self.total_repos} repos, {self.total_edges} edges",
            f"  External packages referenced: {len(self.external_references)}",
        ]
        if self.violations:
            lines.append(f"ERRORS ({len(self.violations)}):")
            for v in self.violations:
                lines.append(f"  {v}")
        lines.append(f"Result: {'PASS' if self.passed else 'FAIL'}")
        return "\n".join(lines)


def check_graph(repositories: list[Repository]) -> GraphCheckResult:
    """Validate a set of repositories before ordering them.

    Checks:
    1. No package id is released by more than one repository
    2. No circular dependencies between repositories

    Also counts references to packages no repository releases.
    """
    result = GraphCheckResult(total_repos=len(repositories))

    producers = producers_by_package(repositories)
    for package, repos in producers.items():
        if len(repos) > 1:
            result.duplicate_packages[package] = repos

    external: dict[str, int] = defaultdict(int)
    for repo in repositories:
        for project in repo.all_projects:
            for ref in project.package_references:
                if ref.casefold() not in producers:
                    external[ref] += 1
    result.external_references = dict(external)

    adj: dict[str, set[str]] = defaultdict(set)
    for consumer, producer, _package in dependency_edges(repositories):
        if producer not in adj[consumer]:
            adj[consumer].add(producer)
            result.total_edges += 1

    # DFS with coloring
    WHITE, GRAY, BLACK = 0, 1, 2
    color: dict[str, int] = defaultdict(lambda: WHITE)

    def dfs(node: str, path: list[str]) -> None:
        color[node] = GRAY
        path.append(node)
        for neighbor in sorted(adj[node]):
            if color[neighbor] == GRAY:
                cycle_start = path.index(neighbor)
                result.cycles.append(path[cycle_start:] + [neighbor])
            elif color[neighbor] == WHITE:
                dfs(neighbor, path)
        path.pop()
        color[node] = BLACK

    for repo in repositories:
        if color[repo.name] == WHITE:
            dfs(repo.name, [])

    return result
