"""Window-less rendering straight into an image.

The declarative-engine path: no host window is created or shown. Content
is parented to a plain container, sized by its own layout (size hints for
``SIZE_THAT_FITS``), and painted directly with ``QWidget.render``. Used when
the Qt platform cannot present windows and headless hosting was not asked
for.
"""

from __future__ import annotations

from typing import Tuple

from ..core.traits import ColorScheme
from .base import RenderingStrategy

__all__ = ["ImageRendererStrategy"]


class ImageRendererStrategy(RenderingStrategy):
    name = "image_renderer"
    headless = True

    def attach(self, content, size: Tuple[int, int], scheme: ColorScheme):
        from PyQt6.QtWidgets import QVBoxLayout, QWidget

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(content)
        self._style_host(container, size, scheme)
        container.ensurePolished()
        container.resize(*size)
        return container

    def detach(self, host, content) -> None:
        host.deleteLater()
