"""Tests for the cascade resolver."""

import pytest

from patch_cascade.cascade.errors import (
    MissingBaselineError,
    UnknownDependencyError,
    UnknownSourceProjectError,
)
from patch_cascade.cascade.resolver import resolve_updates, validate_requests
from patch_cascade.graph.model import DependencyGraph
from patch_cascade.updates.intent import PatchBaseline, UpdateIntent, UpdateSet
from patch_cascade.versioning.arithmetic import MalformedVersionError


def dep(name, version):
    return UpdateIntent(name, version)


def src(name):
    return UpdateIntent(name, "")


class FixedOrder:
    """Order provider that returns repositories exactly as given."""

    def __init__(self, repositories):
        self.repositories = repositories

    def ordered_repositories(self):
        return list(self.repositories)

    def find_repository(self, name):
        return next((r for r in self.repositories if r.name.lower() == name.lower()), None)

    def all_projects(self):
        return [p for r in self.repositories for p in r.all_projects]


class TestFixtureRelease:
    def test_dependency_bump_cascades(self, graph, baselines):
        result = resolve_updates([dep("Newtonsoft.Json", "13.0.3")], [], graph, baselines)
        assert result.passed
        assert list(result.updates) == [
            UpdateIntent("Newtonsoft.Json", "13.0.3"),
            UpdateIntent("Common.Util", "2.1.1"),
            UpdateIntent("Data.Core", "2.1.1"),
            UpdateIntent("Web.Host", "2.1.4"),
        ]
        assert result.seeded == 1
        assert result.cascaded == ["RepoCommon", "RepoData", "RepoWeb"]

    def test_already_pending_project_untouched(self, graph, baselines):
        result = resolve_updates([dep("Newtonsoft.Json", "13.0.3")], [], graph, baselines)
        assert not result.updates.has_name("Data.Sql")

    def test_source_fix_cascades_downstream_only(self, graph, baselines):
        result = resolve_updates([], [src("Data.Core")], graph, baselines)
        assert result.passed
        assert list(result.updates) == [
            UpdateIntent("Data.Core", "2.1.1"),
            UpdateIntent("Web.Host", "2.1.4"),
        ]
        assert not result.updates.has_name("Common.Util")

    def test_support_only_reference_does_not_cascade(self, graph, baselines):
        result = resolve_updates([dep("xunit", "2.9.0")], [], graph, baselines)
        assert result.passed
        assert list(result.updates) == [UpdateIntent("xunit", "2.9.0")]

    def test_prerelease_label_kept(self, graph, baselines):
        result = resolve_updates([dep("Serilog", "4.0.0")], [], graph, baselines)
        assert UpdateIntent("Isolated.Lib", "1.0.1-rtm-1042") in result.updates


class TestScenarios:
    def test_a_dependency_update(self, make_repo):
        graph = DependencyGraph.build([
            make_repo("RepoFoo", released={"ProjectA": ["PackageX"]}),
            make_repo("RepoBar", released={"ProjectC": ["ProjectA"]}),
        ])
        baselines = [
            PatchBaseline("ProjectA", "3.0.0", "3.0.0"),
            PatchBaseline("ProjectC", "1.2.0", "1.2.0"),
        ]
        result = resolve_updates([dep("PackageX", "2.3.1")], [], graph, baselines)
        assert result.passed
        assert UpdateIntent("PackageX", "2.3.1") in result.updates
        assert UpdateIntent("ProjectA", "3.0.1") in result.updates
        assert UpdateIntent("ProjectC", "1.2.1") in result.updates

    def test_b_source_update_forces_patch(self, make_repo):
        graph = DependencyGraph.build([make_repo("RepoB", released={"ProjectB": []})])
        baselines = [PatchBaseline("ProjectB", "1.4.2", "1.4.2")]
        result = resolve_updates([], [UpdateIntent("ProjectB", "7.0.0")], graph, baselines)
        assert result.passed
        assert list(result.updates) == [UpdateIntent("ProjectB", "1.4.3")]

    def test_c_unknown_dependency(self, make_repo):
        graph = DependencyGraph.build([make_repo("RepoB", released={"ProjectB": ["Known"]})])
        result = resolve_updates([dep("Nobody.Uses.This", "1.0.0")], [], graph, [])
        assert not result.passed
        assert result.errors == [UnknownDependencyError("Nobody.Uses.This")]
        assert UpdateIntent("Nobody.Uses.This", "1.0.0") in result.updates

    def test_d_cascade_follows_order(self, make_repo):
        graph = DependencyGraph.build([
            make_repo("RepoA", released={"A.Lib": ["B.Lib"]}),
            make_repo("RepoB", released={"B.Lib": ["Ext"]}),
        ])
        baselines = [
            PatchBaseline("A.Lib", "1.0.0", "1.0.0"),
            PatchBaseline("B.Lib", "1.0.0", "1.0.0"),
        ]
        result = resolve_updates([], [src("B.Lib")], graph, baselines)
        assert result.passed
        assert UpdateIntent("A.Lib", "1.0.1") in result.updates

    def test_e_unrelated_repos_untouched(self, make_repo):
        graph = DependencyGraph.build([
            make_repo("RepoOne", released={"One": ["Ext1"]}),
            make_repo("RepoTwo", released={"Two": ["Ext2"]}),
        ])
        baselines = [
            PatchBaseline("One", "1.0.0", "1.0.0"),
            PatchBaseline("Two", "1.0.0", "1.0.0"),
        ]
        result = resolve_updates([dep("Ext1", "2.0.0")], [], graph, baselines)
        assert not result.updates.has_name("Two")
        assert result.updates.has_name("One")


class TestErrors:
    def test_unknown_source_project(self, graph, baselines):
        baselines = baselines + [PatchBaseline("Ghost.Lib", "1.0.0", "1.0.0")]
        result = resolve_updates([], [src("Ghost.Lib")], graph, baselines)
        assert result.errors == [UnknownSourceProjectError("Ghost.Lib")]
        assert UpdateIntent("Ghost.Lib", "1.0.1") in result.updates

    def test_support_project_is_not_a_source_target(self, graph, baselines):
        result = resolve_updates([], [src("Common.Tests")], graph, baselines)
        assert UnknownSourceProjectError("Common.Tests") in result.errors

    def test_missing_baseline(self, graph):
        result = resolve_updates([], [src("Data.Core")], graph, [])
        assert result.errors == [MissingBaselineError("Data.Core")]
        assert len(result.updates) == 0

    def test_errors_accumulate(self, graph):
        result = resolve_updates(
            [dep("Missing.One", "1.0.0"), dep("Missing.Two", "1.0.0")],
            [src("Ghost.Lib")],
            graph,
            [],
        )
        assert [type(e) for e in result.errors] == [
            UnknownDependencyError,
            UnknownDependencyError,
            UnknownSourceProjectError,
            MissingBaselineError,
        ]
        assert "ERRORS (4)" in result.summary()

    def test_validation_is_idempotent(self, graph):
        deps = [dep("Missing.One", "1.0.0"), dep("Npgsql", "8.0.1")]
        sources = [src("Ghost.Lib"), src("Data.Core")]
        assert validate_requests(deps, sources, graph) == validate_requests(deps, sources, graph)

    def test_support_project_reference_is_known(self, graph):
        errors = validate_requests([dep("xunit", "2.9.0")], [], graph)
        assert errors == []

    def test_malformed_baseline_is_fatal(self, make_repo):
        graph = DependencyGraph.build([make_repo("RepoB", released={"ProjectB": []})])
        with pytest.raises(MalformedVersionError):
            resolve_updates([], [src("ProjectB")], graph, [PatchBaseline("ProjectB", "1.4", "1.4")])

    def test_affected_project_without_baseline_warns(self, make_repo):
        graph = DependencyGraph.build([
            make_repo("Repo", released={"Tracked": ["Ext"], "Untracked": ["Ext"]}),
        ])
        result = resolve_updates(
            [dep("Ext", "2.0.0")], [], graph, [PatchBaseline("Tracked", "1.0.0", "1.0.0")],
        )
        assert result.passed
        assert not result.updates.has_name("Untracked")
        assert result.warnings == ["Repo: released project Untracked has no patch baseline entry"]


class TestProperties:
    def test_monotonic(self, graph, baselines):
        seeds = [dep("Newtonsoft.Json", "13.0.3"), dep("Serilog", "4.0.0")]
        before = UpdateSet(seeds)
        result = resolve_updates(seeds, [], graph, baselines)
        assert all(intent in result.updates for intent in before)
        assert len(result.updates) >= len(before)

    def test_deterministic(self, graph, baselines):
        args = ([dep("Npgsql", "8.0.1")], [src("Common.Util")], graph, baselines)
        first = resolve_updates(*args)
        second = resolve_updates(*args)
        assert set(first.updates) == set(second.updates)

    def test_conflicting_targets_both_survive(self, graph, baselines):
        result = resolve_updates(
            [dep("Npgsql", "8.0.1"), dep("npgsql", "8.0.2")], [], graph, baselines,
        )
        assert result.passed
        assert result.updates.versions_of("Npgsql") == ["8.0.1", "8.0.2"]
        assert result.conflicts == {"npgsql": ["8.0.1", "8.0.2"]}

    def test_baselines_not_mutated(self, graph, baselines):
        snapshot = list(baselines)
        resolve_updates([dep("Newtonsoft.Json", "13.0.3")], [src("Data.Core")], graph, baselines)
        assert baselines == snapshot


class TestOrdering:
    def _repos(self, make_repo):
        return [
            make_repo("RepoA", released={"A.Lib": ["B.Lib"]}),
            make_repo("RepoB", released={"B.Lib": ["Ext"]}),
        ]

    def _baselines(self):
        return [
            PatchBaseline("A.Lib", "1.0.0", "1.0.0"),
            PatchBaseline("B.Lib", "1.0.0", "1.0.0"),
        ]

    def test_single_pass_misses_cascade_on_bad_order(self, make_repo):
        result = resolve_updates(
            [dep("Ext", "5.0.0")], [], FixedOrder(self._repos(make_repo)), self._baselines(),
        )
        assert UpdateIntent("B.Lib", "1.0.1") in result.updates
        assert not result.updates.has_name("A.Lib")
        assert result.passes == 1

    def test_fixed_point_recovers_on_bad_order(self, make_repo):
        result = resolve_updates(
            [dep("Ext", "5.0.0")], [], FixedOrder(self._repos(make_repo)), self._baselines(),
            fixed_point=True,
        )
        assert UpdateIntent("A.Lib", "1.0.1") in result.updates
        assert result.passes == 3
