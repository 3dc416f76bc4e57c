"""Rendering strategy base class and shared Qt capture helpers.

A strategy turns a ``Preview`` into PNG bytes asynchronously:
``render(preview, completion)`` returns immediately and ``completion`` is
called later from the Qt event loop with a ``SnapshotResult``. Callers that
need a blocking answer use ``wait_for_render`` which bounds the wait with a
``QTimer`` so a render that never completes surfaces as a timeout instead of
hanging the test run.

Every strategy follows the same sequence:

 1. disable animations / UI effects
 2. build the preview's view tree into a ``QWidget`` (content invoked once)
 3. host it (strategy specific) at the layout size with the color scheme
 4. wait one event loop tick and flush posted events so layout settles
 5. paint the host into a ``QImage`` at the capture scale and encode PNG

Qt is imported lazily so the pure discovery layer stays importable without
PyQt6.
"""

from __future__ import annotations

import logging
import math
import os
import sys
from abc import ABC, abstractmethod
from typing import Callable, Tuple

from ..core.devices import frame_size
from ..core.extraction import Preview
from ..core.traits import ColorScheme, LayoutKind
from ..core.views import color_scheme_palette
from .animations import disable_animations
from .result import FailureKind, SnapshotResult

__all__ = [
    "Completion",
    "RenderingStrategy",
    "ensure_application",
    "layout_size",
    "capture_scale",
    "encode_png",
    "paint_widget",
    "settle_layout",
    "wait_for_render",
]

_logger = logging.getLogger(__name__)

Completion = Callable[[SnapshotResult], None]

_app = None  # keeps a QApplication created here alive for the process


def _require_qt():
    try:  # pragma: no cover - import guard logic trivial
        from PyQt6 import QtCore, QtGui, QtWidgets
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError("PyQt6 required for preview rendering") from exc
    return QtCore, QtGui, QtWidgets


def ensure_application(headless: bool = False):
    """Return the running ``QApplication``, creating one if needed.

    When ``headless`` and no application exists yet the ``offscreen`` Qt
    platform is selected so no display server is required.
    """
    global _app
    _, _, QtWidgets = _require_qt()
    app = QtWidgets.QApplication.instance()
    if app is None:
        if headless:
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        app = QtWidgets.QApplication(sys.argv[:1])
        app.setStyle("Fusion")
        _app = app
        _logger.debug("Created QApplication on platform %s", app.platformName())
    return app


def settle_layout(widget=None) -> None:
    """Activate layouts (parents first) and flush posted events.

    Hidden widgets never receive the resize events that would activate their
    nested layouts, so every layout in the tree is activated explicitly.
    """
    QtCore, _, QtWidgets = _require_qt()
    if widget is not None:
        for node in [widget, *widget.findChildren(QtWidgets.QWidget)]:
            if node.layout() is not None:
                node.layout().activate()
    QtCore.QCoreApplication.sendPostedEvents()
    app = QtWidgets.QApplication.instance()
    if app is not None:
        app.processEvents()


def layout_size(preview: Preview, widget) -> Tuple[int, int]:
    """Logical size the content is laid out at before capture."""
    frame_w, frame_h = frame_size(preview.device, preview.orientation)
    layout = preview.layout
    if layout.kind is LayoutKind.FIXED:
        return int(layout.width), int(layout.height)  # type: ignore[arg-type]
    if layout.kind is LayoutKind.SIZE_THAT_FITS:
        hint = widget.sizeHint()
        minimum = widget.minimumSizeHint()
        # widgets without a layout report no hint; fall back to their minimum size
        width = max(hint.width(), minimum.width(), widget.minimumWidth(), 1)
        height = max(hint.height(), minimum.height(), widget.minimumHeight(), 1)
        return min(width, frame_w), min(height, frame_h)
    return frame_w, frame_h


def capture_scale(preview: Preview) -> float:
    """Device scale, or the primary screen's pixel ratio when no device is set."""
    if preview.device is not None:
        return float(preview.device.scale)
    _, QtGui, _ = _require_qt()
    screen = QtGui.QGuiApplication.primaryScreen()
    if screen is None:  # pragma: no cover - no screen on exotic platforms
        return 1.0
    return float(screen.devicePixelRatio()) or 1.0


def paint_widget(widget, scale: float):
    """Paint ``widget`` into a new ``QImage`` at ``scale``."""
    QtCore, QtGui, _ = _require_qt()
    width = max(1, math.ceil(widget.width() * scale))
    height = max(1, math.ceil(widget.height() * scale))
    image = QtGui.QImage(width, height, QtGui.QImage.Format.Format_ARGB32_Premultiplied)
    image.setDevicePixelRatio(scale)
    image.fill(widget.palette().color(QtGui.QPalette.ColorRole.Window))
    widget.render(image)
    return image


def encode_png(image) -> bytes:
    QtCore, _, _ = _require_qt()
    buff = QtCore.QBuffer()
    buff.open(QtCore.QIODevice.OpenModeFlag.ReadWrite)
    if not image.save(buff, "PNG"):
        buff.close()
        raise ValueError("Qt failed to encode PNG")
    data: bytes = bytes(buff.data())
    buff.close()
    return data


class RenderingStrategy(ABC):
    """Base for rendering backends.

    Subclasses decide where the content widget lives while it is captured
    (``attach``) and how it is released afterwards (``detach``). ``attach``
    returns the widget to paint, normally the host that owns the content.
    """

    name: str = "base"
    headless: bool = False

    def __init__(self) -> None:
        self._app = ensure_application(self.headless)

    @abstractmethod
    def attach(self, content, size: Tuple[int, int], scheme: ColorScheme):
        ...

    @abstractmethod
    def detach(self, host, content) -> None:
        ...

    def render(self, preview: Preview, completion: Completion) -> None:
        disable_animations()
        try:
            view = preview.view()
        except Exception as exc:  # noqa: BLE001 - reported through the completion
            completion(SnapshotResult.failed(FailureKind.MISSING_CONTENT, f"Preview content failed: {exc}"))
            return
        try:
            content = view.build()
            content.ensurePolished()
            size = layout_size(preview, content)
            scheme = preview.color_scheme() or ColorScheme.LIGHT
            host = self.attach(content, size, scheme)
            settle_layout(host)
        except Exception as exc:  # noqa: BLE001
            _logger.debug("Render setup failed for %s", preview.display_name, exc_info=True)
            completion(SnapshotResult.failed(FailureKind.RENDER_ERROR, f"{type(exc).__name__}: {exc}"))
            return
        scale = capture_scale(preview)
        QtCore, _, _ = _require_qt()
        QtCore.QTimer.singleShot(0, lambda: self._capture(preview, host, content, scale, completion))

    def _capture(self, preview: Preview, host, content, scale: float, completion: Completion) -> None:
        try:
            # no focus rings in captures
            focused = host.focusWidget()
            if focused is not None:
                focused.clearFocus()
            settle_layout(host)
            image = paint_widget(host, scale)
            data = encode_png(image)
            result = SnapshotResult.success(data, image.width(), image.height(), scale)
        except Exception as exc:  # noqa: BLE001
            _logger.debug("Capture failed for %s", preview.display_name, exc_info=True)
            result = SnapshotResult.failed(FailureKind.RENDER_ERROR, f"{type(exc).__name__}: {exc}")
        finally:
            self.detach(host, content)
        completion(result)

    # Shared host helpers ---------------------------------------------
    @staticmethod
    def _style_host(host, size: Tuple[int, int], scheme: ColorScheme) -> None:
        host.setPalette(color_scheme_palette(scheme))
        host.setAutoFillBackground(True)
        host.setFixedSize(*size)


def wait_for_render(strategy: RenderingStrategy, preview: Preview, timeout: float) -> SnapshotResult:
    """Run ``strategy.render`` and block in a nested event loop up to ``timeout`` seconds.

    The bound covers the synchronous setup inside ``render`` as well, so a
    completion that arrives after ``timeout`` still counts as a timeout.
    """
    QtCore, _, _ = _require_qt()
    loop = QtCore.QEventLoop()
    results: list = []
    limit_ms = max(0, int(timeout * 1000))

    def on_complete(result: SnapshotResult) -> None:
        if not results:
            results.append(result)
        loop.quit()

    clock = QtCore.QElapsedTimer()
    clock.start()
    timer = QtCore.QTimer()
    timer.setSingleShot(True)
    timer.timeout.connect(loop.quit)
    timer.start(limit_ms)
    strategy.render(preview, on_complete)
    if not results and clock.elapsed() <= limit_ms:
        loop.exec()
    timer.stop()
    if not results or clock.elapsed() > limit_ms:
        _logger.debug("Render of %s timed out after %ss", preview.display_name, timeout)
        return SnapshotResult.timed_out(timeout)
    return results[0]
