"""Manifest module — persist resolved patch updates."""

from patch_cascade.manifest.writer import read_patch_updates, write_patch_updates

__all__ = ["read_patch_updates", "write_patch_updates"]
