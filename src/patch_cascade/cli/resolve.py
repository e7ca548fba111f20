"""Resolve CLI command."""

import argparse
from pathlib import Path

import yaml

from patch_cascade import paths
from patch_cascade.updates.intent import UpdateIntent
from patch_cascade.updates.loader import ReleaseRequests


def _collect_requests(args: argparse.Namespace) -> ReleaseRequests:
    from patch_cascade.updates.loader import load_requests

    requests_file = args.requests
    if requests_file is None and paths.requests_path().is_file():
        requests_file = paths.requests_path()
    requests = load_requests(requests_file) if requests_file else ReleaseRequests()

    for name in args.source or []:
        requests.source_updates.append(UpdateIntent(name=name, version=""))
    for spec in args.dependency or []:
        name, sep, version = spec.partition("=")
        if not sep or not name or not version:
            raise ValueError(f"--dependency expects NAME=VERSION, got '{spec}'")
        requests.dependency_updates.append(UpdateIntent(name=name, version=version))
    return requests


def cmd_resolve(args: argparse.Namespace) -> int:
    from patch_cascade.cascade.resolver import resolve_updates
    from patch_cascade.graph.loader import load_graph
    from patch_cascade.graph.model import DependencyGraph
    from patch_cascade.manifest.writer import write_patch_updates
    from patch_cascade.updates.loader import load_baseline

    try:
        requests = _collect_requests(args)
        graph = DependencyGraph.build(load_graph(args.graph or paths.graph_path()))
        baselines = load_baseline(args.baseline or paths.baseline_path())
        result = resolve_updates(
            requests.dependency_updates,
            requests.source_updates,
            graph,
            baselines,
            fixed_point=args.fixed_point,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    print(result.summary())
    for name, versions in sorted(result.conflicts.items()):
        print(f"  Conflicting targets for {name}: {', '.join(versions)}")

    if not result.passed:
        print(f"\n  Result: FAIL ({len(result.errors)} error(s)); manifest not written")
        return 1

    if args.dry_run:
        print("\n  Result: PASS (dry run, nothing written)")
        return 0

    out = write_patch_updates(result.updates, Path(args.output) if args.output else paths.patch_updates_path())
    print(f"\n  Result: PASS, wrote {out}")
    return 0
