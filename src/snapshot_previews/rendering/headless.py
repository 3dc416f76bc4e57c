"""Off-screen rendering into a reused, never-shown host window."""

from __future__ import annotations

from typing import Tuple

from ..core.traits import ColorScheme
from .base import RenderingStrategy

__all__ = ["HeadlessRenderingStrategy"]


class HeadlessRenderingStrategy(RenderingStrategy):
    """Hosts content in one off-screen window reused for every render.

    The window carries ``WA_DontShowOnScreen`` so it is polished and laid out
    like a visible top-level window without ever reaching the display.
    Renders are serial; the host is emptied and hidden after each capture so
    every render goes through the same show sequence.
    """

    name = "headless"
    headless = True

    def __init__(self) -> None:
        super().__init__()
        from PyQt6.QtCore import Qt
        from PyQt6.QtWidgets import QVBoxLayout, QWidget

        window = QWidget()
        window.setObjectName("SnapshotPreviewsHeadlessHost")
        window.setAttribute(Qt.WidgetAttribute.WA_DontShowOnScreen, True)
        window.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)
        layout = QVBoxLayout(window)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.window = window

    def attach(self, content, size: Tuple[int, int], scheme: ColorScheme):
        self._style_host(self.window, size, scheme)
        self.window.layout().addWidget(content)
        self.window.show()
        return self.window

    def detach(self, host, content) -> None:
        host.layout().removeWidget(content)
        content.setParent(None)
        content.deleteLater()
        host.hide()
