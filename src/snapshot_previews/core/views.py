"""Declarative view tree used as preview content.

Preview content is described with small immutable nodes (``Text``,
``VStack``, ``Group`` ...) decorated with modifiers, and only turned into a
``QWidget`` when a rendering strategy calls ``build()``. Keeping the tree
separate from Qt lets discovery, extraction and color-scheme probing run
without a ``QApplication``.

Design Constraints:
 - Pure-Python at import time (PyQt6 is imported lazily inside ``build``).
 - Structure is explicit: ``ModifiedView`` exposes ``content``/``view_modifier``
   and ``Group`` exposes ``children`` so inspection never has to guess.
 - Native widgets and windows enter the tree through ``WidgetAdapter`` and
   ``WindowAdapter``; their factories run only at build time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Union

from .devices import PreviewDevice, get_device
from .traits import ColorScheme, InterfaceOrientation, PreviewLayout

__all__ = [
    "View",
    "AnyView",
    "Group",
    "ModifiedView",
    "Text",
    "VStack",
    "HStack",
    "Spacer",
    "ColorView",
    "WidgetAdapter",
    "WindowAdapter",
    "ViewModifier",
    "Padding",
    "Background",
    "Foreground",
    "Font",
    "Frame",
    "PreferredColorScheme",
    "PreviewTraitModifier",
    "PreviewDisplayName",
    "PreviewLayoutModifier",
    "PreviewDeviceModifier",
    "PreviewOrientationModifier",
    "color_scheme_palette",
]


def _require_qt():
    try:  # pragma: no cover - import guard logic trivial
        from PyQt6 import QtCore, QtGui, QtWidgets
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError("PyQt6 required to build preview content") from exc
    return QtCore, QtGui, QtWidgets


# Semantic colors per scheme (window, text, secondary text, base)
_SCHEME_COLORS = {
    ColorScheme.LIGHT: ("#ffffff", "#1c1c1e", "#6c6c70", "#ffffff"),
    ColorScheme.DARK: ("#1c1c1e", "#f2f2f7", "#aeaeb2", "#2c2c2e"),
}


def color_scheme_palette(scheme: ColorScheme):
    """Return a ``QPalette`` for the given scheme (requires PyQt6)."""
    _, QtGui, _ = _require_qt()
    window, text, secondary, base = _SCHEME_COLORS[scheme]
    palette = QtGui.QPalette()
    role = QtGui.QPalette.ColorRole
    palette.setColor(role.Window, QtGui.QColor(window))
    palette.setColor(role.WindowText, QtGui.QColor(text))
    palette.setColor(role.Base, QtGui.QColor(base))
    palette.setColor(role.AlternateBase, QtGui.QColor(window))
    palette.setColor(role.Text, QtGui.QColor(text))
    palette.setColor(role.Button, QtGui.QColor(base))
    palette.setColor(role.ButtonText, QtGui.QColor(text))
    palette.setColor(role.PlaceholderText, QtGui.QColor(secondary))
    palette.setColor(role.ToolTipText, QtGui.QColor(secondary))
    return palette


# ----------------------------------------------------------------- Views


class View:
    """Base node. Subclasses implement ``build`` and ``describe``."""

    def build(self):  # -> QWidget
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__

    # Modifier helpers ------------------------------------------------
    def modifier(self, modifier: "ViewModifier") -> "ModifiedView":
        return ModifiedView(self, modifier)

    def padding(self, amount: int = 8) -> "ModifiedView":
        return self.modifier(Padding(amount))

    def background(self, color: str) -> "ModifiedView":
        return self.modifier(Background(color))

    def foreground(self, color: str) -> "ModifiedView":
        return self.modifier(Foreground(color))

    def font(self, point_size: Optional[float] = None, *, bold: bool = False) -> "ModifiedView":
        return self.modifier(Font(point_size, bold))

    def frame(self, width: Optional[int] = None, height: Optional[int] = None) -> "ModifiedView":
        return self.modifier(Frame(width, height))

    def preferred_color_scheme(self, scheme: Optional[ColorScheme]) -> "ModifiedView":
        return self.modifier(PreferredColorScheme(scheme))

    def preview_display_name(self, name: str) -> "ModifiedView":
        return self.modifier(PreviewDisplayName(name))

    def preview_layout(self, layout: PreviewLayout) -> "ModifiedView":
        return self.modifier(PreviewLayoutModifier(layout))

    def preview_device(self, device: Union[PreviewDevice, str]) -> "ModifiedView":
        if isinstance(device, str):
            device = get_device(device)
        return self.modifier(PreviewDeviceModifier(device))

    def preview_interface_orientation(self, orientation: InterfaceOrientation) -> "ModifiedView":
        return self.modifier(PreviewOrientationModifier(orientation))


class AnyView(View):
    """Type-erased wrapper; builds and describes as its content."""

    def __init__(self, content: View) -> None:
        while isinstance(content, AnyView):
            content = content.content
        self.content = content

    def build(self):
        return self.content.build()

    def describe(self) -> str:
        return self.content.describe()


class Group(View):
    """Container whose children are individual previews when used at top level."""

    def __init__(self, *children: View) -> None:
        self.children: Tuple[View, ...] = tuple(children)

    def build(self):
        return VStack(*self.children).build()

    def describe(self) -> str:
        return "Group(" + ", ".join(c.describe() for c in self.children) + ")"


class ModifiedView(View):
    def __init__(self, content: View, modifier: "ViewModifier") -> None:
        self.content = content
        self.view_modifier = modifier

    def build(self):
        return self.view_modifier.apply(self.content.build())

    def describe(self) -> str:
        return f"{self.view_modifier.describe()}({self.content.describe()})"


class Text(View):
    def __init__(self, text: str) -> None:
        self.text = text

    def build(self):
        _, _, QtWidgets = _require_qt()
        label = QtWidgets.QLabel(self.text)
        label.setObjectName("Text")
        return label

    def describe(self) -> str:
        return f"Text({self.text!r})"


class Spacer(View):
    def build(self):
        _, _, QtWidgets = _require_qt()
        w = QtWidgets.QWidget()
        policy = QtWidgets.QSizePolicy.Policy.Expanding
        w.setSizePolicy(policy, policy)
        return w


class _Stack(View):
    _vertical = True

    def __init__(self, *children: View, spacing: int = 8, leading: bool = True) -> None:
        self.children: Tuple[View, ...] = tuple(children)
        self.spacing = spacing
        self.leading = leading

    def build(self):
        QtCore, _, QtWidgets = _require_qt()
        container = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(container) if self._vertical else QtWidgets.QHBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(self.spacing)
        align = QtCore.Qt.AlignmentFlag
        for child in self.children:
            if isinstance(child, Spacer):
                layout.addStretch(1)
                continue
            widget = child.build()
            if self._vertical and self.leading:
                layout.addWidget(widget, 0, align.AlignLeft)
            else:
                layout.addWidget(widget)
        return container

    def describe(self) -> str:
        return f"{type(self).__name__}(" + ", ".join(c.describe() for c in self.children) + ")"


class VStack(_Stack):
    _vertical = True


class HStack(_Stack):
    _vertical = False


class ColorView(View):
    def __init__(self, color: str, width: Optional[int] = None, height: Optional[int] = None) -> None:
        self.color = color
        self.width = width
        self.height = height

    def build(self):
        _, QtGui, QtWidgets = _require_qt()
        w = QtWidgets.QWidget()
        w.setAutoFillBackground(True)
        palette = w.palette()
        palette.setColor(QtGui.QPalette.ColorRole.Window, QtGui.QColor(self.color))
        w.setPalette(palette)
        if self.width is not None:
            w.setFixedWidth(self.width)
        if self.height is not None:
            w.setFixedHeight(self.height)
        return w

    def describe(self) -> str:
        return f"ColorView({self.color!r})"


class WidgetAdapter(View):
    """Wraps a factory returning a native ``QWidget``."""

    def __init__(self, make_widget: Callable[[], Any]) -> None:
        self.make_widget = make_widget

    def build(self):
        _, _, QtWidgets = _require_qt()
        widget = self.make_widget()
        if not isinstance(widget, QtWidgets.QWidget):
            raise TypeError(f"Widget factory returned {type(widget).__name__}, expected QWidget")
        return widget


class WindowAdapter(View):
    """Wraps a factory returning a ``QMainWindow`` and embeds it as a plain widget."""

    def __init__(self, make_window: Callable[[], Any]) -> None:
        self.make_window = make_window

    def build(self):
        QtCore, _, QtWidgets = _require_qt()
        window = self.make_window()
        if not isinstance(window, QtWidgets.QMainWindow):
            raise TypeError(f"Window factory returned {type(window).__name__}, expected QMainWindow")
        window.setWindowFlags(QtCore.Qt.WindowType.Widget)
        return window


# ------------------------------------------------------------- Modifiers


class ViewModifier:
    """Transforms a built widget. ``apply`` may mutate or wrap it."""

    def apply(self, widget):
        return widget

    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Padding(ViewModifier):
    amount: int = 8

    def apply(self, widget):
        _, _, QtWidgets = _require_qt()
        container = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(container)
        layout.setContentsMargins(self.amount, self.amount, self.amount, self.amount)
        layout.addWidget(widget)
        return container


@dataclass(frozen=True)
class Background(ViewModifier):
    color: str

    def apply(self, widget):
        _, QtGui, _ = _require_qt()
        widget.setAutoFillBackground(True)
        palette = widget.palette()
        palette.setColor(QtGui.QPalette.ColorRole.Window, QtGui.QColor(self.color))
        widget.setPalette(palette)
        return widget


@dataclass(frozen=True)
class Foreground(ViewModifier):
    color: str

    def apply(self, widget):
        _, QtGui, _ = _require_qt()
        palette = widget.palette()
        color = QtGui.QColor(self.color)
        palette.setColor(QtGui.QPalette.ColorRole.WindowText, color)
        palette.setColor(QtGui.QPalette.ColorRole.Text, color)
        widget.setPalette(palette)
        return widget


@dataclass(frozen=True)
class Font(ViewModifier):
    point_size: Optional[float] = None
    bold: bool = False

    def apply(self, widget):
        font = widget.font()
        if self.point_size is not None:
            font.setPointSizeF(float(self.point_size))
        font.setBold(self.bold)
        widget.setFont(font)
        return widget


@dataclass(frozen=True)
class Frame(ViewModifier):
    width: Optional[int] = None
    height: Optional[int] = None

    def apply(self, widget):
        if self.width is not None:
            widget.setFixedWidth(self.width)
        if self.height is not None:
            widget.setFixedHeight(self.height)
        return widget


@dataclass(frozen=True)
class PreferredColorScheme(ViewModifier):
    scheme: Optional[ColorScheme]

    def apply(self, widget):
        if self.scheme is not None:
            widget.setPalette(color_scheme_palette(self.scheme))
            widget.setAutoFillBackground(True)
        return widget


@dataclass(frozen=True)
class PreviewTraitModifier(ViewModifier):
    """Metadata-only modifier read during extraction; a no-op when built."""

    value: Any = field(default=None)


@dataclass(frozen=True)
class PreviewDisplayName(PreviewTraitModifier):
    value: str = ""


@dataclass(frozen=True)
class PreviewLayoutModifier(PreviewTraitModifier):
    value: PreviewLayout = PreviewLayout.DEVICE


@dataclass(frozen=True)
class PreviewDeviceModifier(PreviewTraitModifier):
    value: Optional[PreviewDevice] = None


@dataclass(frozen=True)
class PreviewOrientationModifier(PreviewTraitModifier):
    value: Optional[InterfaceOrientation] = None
