"""Manifest CLI commands."""

import argparse
import xml.etree.ElementTree as ET


def cmd_manifest_show(args: argparse.Namespace) -> int:
    from patch_cascade.manifest.writer import read_patch_updates

    try:
        updates = read_patch_updates(args.file)
    except (OSError, ValueError, ET.ParseError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"{args.file}: {len(updates)} patch update(s)\n")
    for update in updates:
        print(f"  {update.name:<50} {update.version}")
    return 0
