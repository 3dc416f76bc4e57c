"""Exception types raised by the snapshot preview engine.

Discovery and extraction problems are normally logged and skipped rather
than raised; these types exist for the places where a single preview has to
fail loudly (render, file I/O, reference comparison).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

__all__ = [
    "SnapshotPreviewsError",
    "PreviewNotFoundError",
    "PreviewExtractionError",
    "RenderError",
    "SnapshotIOError",
    "SnapshotRecordedError",
    "SnapshotMismatchError",
]


class SnapshotPreviewsError(RuntimeError):
    """Base class for all snapshot preview failures."""


class PreviewNotFoundError(SnapshotPreviewsError, KeyError):
    """Raised when a discovered preview identity no longer resolves."""

    def __str__(self) -> str:  # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else "Preview not found"


class PreviewExtractionError(SnapshotPreviewsError):
    """Raised when a declaration's previews cannot be materialized."""


class RenderError(SnapshotPreviewsError):
    """Raised by a rendering backend when content could not be captured."""


class SnapshotIOError(SnapshotPreviewsError):
    """Wraps an ``OSError`` raised while reading or writing snapshot files."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class SnapshotRecordedError(SnapshotPreviewsError):
    """Signals that a new reference image was written instead of compared."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Recorded snapshot at {path}, re-run the test to assert against reference."
        )
        self.path = path


class SnapshotMismatchError(SnapshotPreviewsError):
    """Signals that a freshly rendered image differs from its reference."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Snapshot does not match reference {path}. See attachments for details."
        )
        self.path = path
