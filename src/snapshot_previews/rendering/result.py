"""Outcome of a single render attempt."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import RenderError

__all__ = ["FailureKind", "SnapshotResult"]


class FailureKind(str, Enum):
    RENDER_ERROR = "render_error"
    TIMEOUT = "timeout"
    MISSING_CONTENT = "missing_content"


@dataclass(frozen=True)
class SnapshotResult:
    """Encoded PNG on success; ``failure`` + ``message`` otherwise."""

    image: Optional[bytes] = None
    width: int = 0  # pixels
    height: int = 0
    scale: float = 1.0
    failure: Optional[FailureKind] = None
    message: str = ""

    @classmethod
    def success(cls, image: bytes, width: int, height: int, scale: float) -> "SnapshotResult":
        return cls(image=image, width=width, height=height, scale=scale)

    @classmethod
    def failed(cls, kind: FailureKind, message: str) -> "SnapshotResult":
        return cls(failure=kind, message=message)

    @classmethod
    def timed_out(cls, timeout: float) -> "SnapshotResult":
        return cls.failed(FailureKind.TIMEOUT, f"Did not render within {timeout:g}s")

    @property
    def ok(self) -> bool:
        return self.failure is None and self.image is not None

    def get(self) -> bytes:
        """Return the PNG bytes or raise ``RenderError`` describing the failure."""
        if self.failure is not None:
            raise RenderError(f"{self.failure.value}: {self.message}")
        if self.image is None:
            raise RenderError(f"{FailureKind.MISSING_CONTENT.value}: no image captured")
        return self.image
