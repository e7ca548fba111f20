"""Shared test fixtures for patch-cascade."""

from pathlib import Path

import pytest

from patch_cascade.graph.loader import load_graph
from patch_cascade.graph.model import DependencyGraph, ProjectRef, Repository
from patch_cascade.updates.loader import load_baseline

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def make_repo():
    """Factory building a Repository from {project: [references]} mappings."""

    def _make(name, released=None, support=None):
        return Repository(
            name=name,
            projects=[ProjectRef(p, frozenset(refs)) for p, refs in (released or {}).items()],
            support_projects=[
                ProjectRef(p, frozenset(refs)) for p, refs in (support or {}).items()
            ],
        )

    return _make


@pytest.fixture
def repositories():
    return load_graph(FIXTURES / "build-graph.yaml")


@pytest.fixture
def graph(repositories):
    return DependencyGraph.build(repositories)


@pytest.fixture
def baselines():
    return load_baseline(FIXTURES / "patch-packages.yaml")
