"""Build graph CLI commands."""

import argparse

import yaml

from patch_cascade import paths


def cmd_graph_order(args: argparse.Namespace) -> int:
    from patch_cascade.graph.loader import load_graph
    from patch_cascade.graph.model import DependencyGraph

    try:
        graph = DependencyGraph.build(load_graph(args.graph or paths.graph_path()))
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Build order ({len(graph)} repos):\n")
    for node in graph:
        repo = node.repository
        deps = graph.dependencies_of(repo.name)
        after = f"  (after {', '.join(deps)})" if deps else ""
        print(f"  {node.order + 1:>3}. {repo.name}{after}")
    return 0


def cmd_graph_check(args: argparse.Namespace) -> int:
    from patch_cascade.graph.check import check_graph
    from patch_cascade.graph.loader import load_graph

    try:
        repositories = load_graph(args.graph or paths.graph_path())
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    result = check_graph(repositories)
    print(result.summary())
    return 0 if result.passed else 1
