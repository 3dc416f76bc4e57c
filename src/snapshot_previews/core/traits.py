"""Preview configuration values: layout, color scheme, orientation, platform.

These are plain value objects attached to previews either through view
modifiers (``preview_layout`` etc.) or through the ``traits`` of a
registry-style preview. All of them are hashable and immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional

__all__ = [
    "LayoutKind",
    "PreviewLayout",
    "ColorScheme",
    "InterfaceOrientation",
    "PreviewPlatform",
    "PreviewTrait",
]


class LayoutKind(str, Enum):
    DEVICE = "device"
    FIXED = "fixed"
    SIZE_THAT_FITS = "size_that_fits"


@dataclass(frozen=True)
class PreviewLayout:
    """How a preview is sized before capture.

    ``DEVICE`` uses the device profile frame, ``fixed(w, h)`` an exact size
    and ``SIZE_THAT_FITS`` the content's own size hint.
    """

    kind: LayoutKind
    width: Optional[int] = None
    height: Optional[int] = None

    DEVICE: ClassVar["PreviewLayout"]
    SIZE_THAT_FITS: ClassVar["PreviewLayout"]

    def __post_init__(self) -> None:
        if self.kind is LayoutKind.FIXED:
            if self.width is None or self.height is None:
                raise ValueError("Fixed layout requires width and height")
            if self.width <= 0 or self.height <= 0:
                raise ValueError(f"Fixed layout size must be positive: {self.width}x{self.height}")

    @classmethod
    def fixed(cls, width: int, height: int) -> "PreviewLayout":
        return cls(LayoutKind.FIXED, int(width), int(height))

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.kind is LayoutKind.FIXED:
            return f"fixed({self.width}x{self.height})"
        return self.kind.value


PreviewLayout.DEVICE = PreviewLayout(LayoutKind.DEVICE)
PreviewLayout.SIZE_THAT_FITS = PreviewLayout(LayoutKind.SIZE_THAT_FITS)


class ColorScheme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class InterfaceOrientation(str, Enum):
    PORTRAIT = "portrait"
    PORTRAIT_UPSIDE_DOWN = "portrait_upside_down"
    LANDSCAPE_LEFT = "landscape_left"
    LANDSCAPE_RIGHT = "landscape_right"

    @property
    def is_landscape(self) -> bool:
        return self in (InterfaceOrientation.LANDSCAPE_LEFT, InterfaceOrientation.LANDSCAPE_RIGHT)


class PreviewPlatform(str, Enum):
    DESKTOP = "desktop"
    TABLET = "tablet"
    PHONE = "phone"


@dataclass(frozen=True)
class PreviewTrait:
    """A single configuration trait of a registry preview (``value`` is opaque)."""

    value: Any

    @classmethod
    def layout(cls, layout: PreviewLayout) -> "PreviewTrait":
        return cls(layout)

    @classmethod
    def fixed_layout(cls, width: int, height: int) -> "PreviewTrait":
        return cls(PreviewLayout.fixed(width, height))

    @classmethod
    def size_that_fits_layout(cls) -> "PreviewTrait":
        return cls(PreviewLayout.SIZE_THAT_FITS)

    @classmethod
    def orientation(cls, orientation: InterfaceOrientation) -> "PreviewTrait":
        return cls(orientation)
