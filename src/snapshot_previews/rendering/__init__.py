"""Rendering backends that turn previews into PNG bytes.

Importing this package does not import PyQt6; the strategies import it when
instantiated.
"""

from .base import RenderingStrategy, ensure_application, wait_for_render
from .foreground import ForegroundRenderingStrategy
from .headless import HeadlessRenderingStrategy
from .image_renderer import ImageRendererStrategy
from .result import FailureKind, SnapshotResult
from .selection import select_rendering_strategy

__all__ = [
    "RenderingStrategy",
    "ensure_application",
    "wait_for_render",
    "ForegroundRenderingStrategy",
    "HeadlessRenderingStrategy",
    "ImageRendererStrategy",
    "FailureKind",
    "SnapshotResult",
    "select_rendering_strategy",
]
