"""Rendering inside a real, visible top-level window."""

from __future__ import annotations

from typing import Tuple

from ..core.traits import ColorScheme
from .base import RenderingStrategy

__all__ = ["ForegroundRenderingStrategy"]


class ForegroundRenderingStrategy(RenderingStrategy):
    """Shows content in an on-screen window, raised above other windows.

    Needs a windowing Qt platform (xcb, wayland, cocoa, windows). The window
    is reused across renders and hidden between them.
    """

    name = "foreground"

    def __init__(self) -> None:
        super().__init__()
        from PyQt6.QtCore import Qt
        from PyQt6.QtWidgets import QVBoxLayout, QWidget

        window = QWidget(None, Qt.WindowType.Window | Qt.WindowType.WindowStaysOnTopHint)
        window.setObjectName("SnapshotPreviewsWindow")
        window.setWindowTitle("Snapshot Previews")
        layout = QVBoxLayout(window)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.window = window

    def attach(self, content, size: Tuple[int, int], scheme: ColorScheme):
        self._style_host(self.window, size, scheme)
        self.window.layout().addWidget(content)
        self.window.show()
        self.window.raise_()
        self.window.activateWindow()
        return self.window

    def detach(self, host, content) -> None:
        host.layout().removeWidget(content)
        content.setParent(None)
        content.deleteLater()
        host.hide()
