"""pytest integration: ``SnapshotTest`` base class and the collection plugin.

Importing this package imports pytest but not PyQt6.
"""

from .snapshot_test import PreviewBaseTest, PreviewCase, SnapshotTest, snapshot_preview

__all__ = ["PreviewBaseTest", "PreviewCase", "SnapshotTest", "snapshot_preview"]
