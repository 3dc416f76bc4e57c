"""Snapshot reference storage and comparison."""

from .store import (
    Attachment,
    SnapshotOutcome,
    SnapshotStatus,
    SnapshotStore,
    images_are_equal,
    normalize_png,
    sanitize_path_component,
)

__all__ = [
    "Attachment",
    "SnapshotOutcome",
    "SnapshotStatus",
    "SnapshotStore",
    "images_are_equal",
    "normalize_png",
    "sanitize_path_component",
]
