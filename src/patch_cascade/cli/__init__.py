"""Command-line interface for patch-cascade.

Usage:
    patch-cascade resolve [--graph P] [--baseline P] [--requests P]
                          [--source NAME]... [--dependency NAME=VERSION]...
                          [--output P] [--fixed-point] [--dry-run]
    patch-cascade graph order [--graph P]
    patch-cascade graph check [--graph P]
    patch-cascade manifest show <file>

Default file locations come from PATCH_CASCADE_RELEASE_DIR (see paths.py).
"""

import argparse
import sys

from patch_cascade.cli.graph import cmd_graph_check, cmd_graph_order
from patch_cascade.cli.manifest import cmd_manifest_show
from patch_cascade.cli.resolve import cmd_resolve


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patch-cascade",
        description="Compute the packages a multi-repo patch release must rebuild",
    )
    sub = parser.add_subparsers(dest="command")

    # resolve
    res = sub.add_parser("resolve", help="Resolve explicit and cascaded patch updates")
    res.add_argument("--graph", default=None, help="Path to build-graph.yaml")
    res.add_argument("--baseline", default=None, help="Path to patch-packages.yaml")
    res.add_argument("--requests", default=None, help="Path to release-updates.yaml")
    res.add_argument(
        "--source", action="append", default=None, metavar="NAME",
        help="Project with a source fix (repeatable)",
    )
    res.add_argument(
        "--dependency", action="append", default=None, metavar="NAME=VERSION",
        help="Dependency bump (repeatable)",
    )
    res.add_argument("--output", default=None, help="Patch-update manifest to write")
    res.add_argument(
        "--fixed-point", action="store_true",
        help="Repeat the cascade pass until no new updates appear",
    )
    res.add_argument(
        "--dry-run", action="store_true",
        help="Report updates without writing the manifest",
    )

    # graph
    gr = sub.add_parser("graph", help="Build graph operations")
    gr.add_argument("--graph", default=None, help="Path to build-graph.yaml")
    gr_sub = gr.add_subparsers(dest="subcommand")
    gr_sub.add_parser("order", help="Show repositories in build order")
    gr_sub.add_parser("check", help="Validate the build graph")

    # manifest
    man = sub.add_parser("manifest", help="Patch-update manifest operations")
    man_sub = man.add_subparsers(dest="subcommand")
    show = man_sub.add_parser("show", help="Show a patch-update manifest")
    show.add_argument("file")

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        ("graph", "order"): cmd_graph_order,
        ("graph", "check"): cmd_graph_check,
        ("manifest", "show"): cmd_manifest_show,
    }

    # Handle top-level commands (no subcommand)
    if args.command == "resolve":
        return cmd_resolve(args)

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
