"""Preview gallery (internal QA tool).

Purpose:
 - List every discovered preview type with a ``TitleSubtitleRow``.
 - Render the selected preview on demand for a quick visual check without
   running the snapshot suite.

Design Constraints:
 - Label helpers are pure functions (no Qt) for testability.
 - The window itself imports PyQt6 lazily.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..core.extraction import PreviewType
from ..core.session import DiscoverySession
from .title_subtitle_row import TitleSubtitleRow

__all__ = [
    "TitleSubtitleRow",
    "row_title",
    "row_subtitle",
    "gallery_rows",
    "build_gallery_window",
]

_logger = logging.getLogger(__name__)


def row_title(preview_type: PreviewType) -> str:
    return preview_type.display_name or preview_type.type_name


def row_subtitle(preview_type: PreviewType) -> str:
    count = len(preview_type.previews)
    noun = "preview" if count == 1 else "previews"
    return f"{count} {noun} · {preview_type.module}"


def gallery_rows(preview_types: List[PreviewType]) -> List[TitleSubtitleRow]:
    ordered = sorted(preview_types, key=lambda t: (row_title(t).lower(), t.type_name))
    return [TitleSubtitleRow(row_title(t), row_subtitle(t)) for t in ordered]


def build_gallery_window(session: DiscoverySession, parent=None):
    """Window listing preview types; selecting a preview renders it below."""
    from PyQt6.QtCore import Qt
    from PyQt6.QtGui import QPixmap
    from PyQt6.QtWidgets import (
        QLabel,
        QListWidget,
        QListWidgetItem,
        QSplitter,
        QVBoxLayout,
        QWidget,
    )

    from ..rendering.base import wait_for_render
    from ..rendering.image_renderer import ImageRendererStrategy

    root = QWidget(parent)
    root.setWindowTitle("Preview Gallery")
    layout = QVBoxLayout(root)
    splitter = QSplitter(Qt.Orientation.Vertical)
    list_widget = QListWidget()
    list_widget.setObjectName("galleryList")
    detail = QLabel("Select a preview")
    detail.setObjectName("galleryDetail")
    detail.setAlignment(Qt.AlignmentFlag.AlignCenter)
    splitter.addWidget(list_widget)
    splitter.addWidget(detail)
    layout.addWidget(splitter)

    preview_types = sorted(session.preview_types, key=lambda t: (row_title(t).lower(), t.type_name))
    for preview_type in preview_types:
        for index in range(len(preview_type.previews)):
            row = TitleSubtitleRow(preview_type.snapshot_name(index), row_title(preview_type))
            item = QListWidgetItem()
            item.setData(Qt.ItemDataRole.UserRole, (preview_type.type_name, index))
            item.setToolTip(row_subtitle(preview_type))
            row_widget = row.build()
            item.setSizeHint(row_widget.sizeHint())
            list_widget.addItem(item)
            list_widget.setItemWidget(item, row_widget)

    strategy: Optional[ImageRendererStrategy] = None

    def on_current_changed() -> None:
        nonlocal strategy
        item = list_widget.currentItem()
        if item is None:
            return
        type_name, index = item.data(Qt.ItemDataRole.UserRole)
        preview_type = next(t for t in preview_types if t.type_name == type_name)
        strategy = strategy or ImageRendererStrategy()
        result = wait_for_render(strategy, preview_type.previews[index], 5.0)
        if not result.ok:
            _logger.warning("Gallery render of %s failed: %s", preview_type.snapshot_name(index), result.message)
            detail.setText(f"Failed to render {preview_type.snapshot_name(index)}: {result.message}")
            return
        pixmap = QPixmap()
        pixmap.loadFromData(result.get(), "PNG")
        pixmap.setDevicePixelRatio(result.scale)
        detail.setPixmap(pixmap)

    list_widget.currentItemChanged.connect(lambda *_: on_current_changed())
    return root
