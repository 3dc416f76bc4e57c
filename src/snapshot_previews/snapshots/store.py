"""Reference image storage and the record / compare state machine.

Layout:
  <test-file-directory>/snapshots/<sanitized-display-name>.png

For each preview:
 - no reference file          -> write it, status RECORDED (reported as failure)
 - recording forced           -> overwrite, status RECORDED
 - reference exists           -> compare, status MATCHED or MISMATCHED

Comparison is exact equality of encoded PNG bytes after both images went
through the same decode / encode round trip (Pillow), so encoder settings
or metadata chunks of the stored file cannot cause false mismatches while
any pixel change still does. There is no perceptual tolerance.

Directory listing is the source of truth; no manifest is written.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, UnidentifiedImageError

from ..config import settings
from ..errors import (
    SnapshotIOError,
    SnapshotMismatchError,
    SnapshotPreviewsError,
    SnapshotRecordedError,
)

__all__ = [
    "sanitize_path_component",
    "normalize_png",
    "images_are_equal",
    "SnapshotStatus",
    "Attachment",
    "SnapshotOutcome",
    "SnapshotStore",
]

_logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"\W+")
_EDGE_HYPHENS = re.compile(r"^-|-$")


def sanitize_path_component(value: str) -> str:
    """Lowercase, collapse non-word runs to ``-`` and trim edge hyphens.

    >>> sanitize_path_component("Home Screen!")
    'home-screen'
    """
    return _EDGE_HYPHENS.sub("", _NON_WORD.sub("-", value.lower()))


def normalize_png(data: bytes) -> bytes:
    """Decode and re-encode ``data`` as PNG with a fixed encoder configuration."""
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        out = io.BytesIO()
        img.save(out, format="PNG")
    return out.getvalue()


def images_are_equal(first: bytes, second: bytes) -> bool:
    if first == second:
        return True
    try:
        return normalize_png(first) == normalize_png(second)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        _logger.debug("Image comparison could not decode input: %s", exc)
        return False


class SnapshotStatus(str, Enum):
    RECORDED = "recorded"
    MATCHED = "matched"
    MISMATCHED = "mismatched"


@dataclass(frozen=True)
class Attachment:
    name: str
    data: bytes
    media_type: str = "image/png"


@dataclass
class SnapshotOutcome:
    status: SnapshotStatus
    path: Path
    snapshot: bytes
    reference: Optional[bytes] = None
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status is SnapshotStatus.MATCHED

    def error(self) -> Optional[SnapshotPreviewsError]:
        if self.status is SnapshotStatus.RECORDED:
            return SnapshotRecordedError(self.path)
        if self.status is SnapshotStatus.MISMATCHED:
            return SnapshotMismatchError(self.path)
        return None

    @property
    def message(self) -> str:
        error = self.error()
        return str(error) if error is not None else f"Snapshot matches reference {self.path}"

    def raise_for_status(self) -> None:
        error = self.error()
        if error is not None:
            raise error


class SnapshotStore:
    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    @classmethod
    def for_test_file(cls, file_path: Union[str, Path]) -> "SnapshotStore":
        return cls(Path(file_path).resolve().parent / settings.SNAPSHOT_DIR_NAME)

    def path_for(self, name: str) -> Path:
        stem = sanitize_path_component(name)
        if not stem:
            raise ValueError(f"Display name {name!r} has no usable characters for a file name")
        return self.directory / f"{stem}{settings.SNAPSHOT_EXTENSION}"

    def ensure_directory(self) -> Path:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SnapshotIOError(f"Cannot create snapshot directory: {exc}", self.directory) from exc
        return self.directory

    def record(self, name: str, image: bytes) -> SnapshotOutcome:
        path = self.path_for(name)
        self.ensure_directory()
        try:
            path.write_bytes(image)
        except OSError as exc:
            raise SnapshotIOError(f"Cannot write snapshot {path}: {exc}", path) from exc
        _logger.info("Recorded snapshot %s", path)
        return SnapshotOutcome(SnapshotStatus.RECORDED, path, image)

    def compare(self, name: str, image: bytes) -> SnapshotOutcome:
        path = self.path_for(name)
        try:
            reference = path.read_bytes()
        except OSError as exc:
            raise SnapshotIOError(f"Cannot read reference {path}: {exc}", path) from exc
        status = (
            SnapshotStatus.MATCHED if images_are_equal(image, reference) else SnapshotStatus.MISMATCHED
        )
        attachments = [
            Attachment(settings.SNAPSHOT_ATTACHMENT_NAME, image),
            Attachment(settings.REFERENCE_ATTACHMENT_NAME, reference),
        ]
        return SnapshotOutcome(status, path, image, reference, attachments)

    def record_or_compare(self, name: str, image: bytes, *, recording: bool = False) -> SnapshotOutcome:
        path = self.path_for(name)
        if recording or not path.exists():
            return self.record(name, image)
        return self.compare(name, image)

    def list_snapshots(self) -> List[Path]:
        if not self.directory.is_dir():
            return []
        return sorted(self.directory.glob(f"*{settings.SNAPSHOT_EXTENSION}"))
