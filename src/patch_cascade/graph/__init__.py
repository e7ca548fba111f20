"""Graph module — repositories, dependency order, and build graph validation."""

from patch_cascade.graph.model import (
    DependencyGraph,
    DependencyOrderProvider,
    GraphCycleError,
    ProjectRef,
    Repository,
    RepositoryNode,
)
from patch_cascade.graph.check import check_graph, GraphCheckResult
from patch_cascade.graph.loader import load_graph, repositories_from_dict

__all__ = [
    "DependencyGraph",
    "DependencyOrderProvider",
    "GraphCycleError",
    "ProjectRef",
    "Repository",
    "RepositoryNode",
    "check_graph",
    "GraphCheckResult",
    "load_graph",
    "repositories_from_dict",
]
