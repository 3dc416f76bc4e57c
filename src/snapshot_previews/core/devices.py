"""Device profiles used to size ``PreviewLayout.DEVICE`` previews."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .traits import InterfaceOrientation, PreviewPlatform

__all__ = [
    "PreviewDevice",
    "DEVICE_PROFILES",
    "DEFAULT_DEVICE",
    "get_device",
    "register_device",
    "frame_size",
]


@dataclass(frozen=True)
class PreviewDevice:
    name: str
    width: int  # logical pixels, portrait
    height: int
    scale: float = 1.0
    platform: PreviewPlatform = PreviewPlatform.DESKTOP

    def size_for(self, orientation: Optional[InterfaceOrientation]) -> Tuple[int, int]:
        if orientation is not None and orientation.is_landscape:
            return self.height, self.width
        return self.width, self.height


DEVICE_PROFILES: Dict[str, PreviewDevice] = {
    d.name: d
    for d in (
        PreviewDevice("Desktop", 1280, 800, 1.0, PreviewPlatform.DESKTOP),
        PreviewDevice("Desktop HiDPI", 1440, 900, 2.0, PreviewPlatform.DESKTOP),
        PreviewDevice("Tablet", 820, 1180, 2.0, PreviewPlatform.TABLET),
        PreviewDevice("Phone", 390, 844, 3.0, PreviewPlatform.PHONE),
        PreviewDevice("Phone Compact", 375, 667, 2.0, PreviewPlatform.PHONE),
    )
}

# Frame used when a DEVICE layout preview names no device. Its scale is not
# used; such previews capture at the primary screen's device pixel ratio.
DEFAULT_DEVICE = PreviewDevice("Default", 800, 600, 1.0, PreviewPlatform.DESKTOP)


def get_device(name: str) -> PreviewDevice:
    try:
        return DEVICE_PROFILES[name]
    except KeyError:
        raise KeyError(f"Unknown device profile: {name}") from None


def register_device(device: PreviewDevice, *, override: bool = False) -> None:
    if device.name in DEVICE_PROFILES and not override:
        raise KeyError(f"Device profile already registered: {device.name}")
    DEVICE_PROFILES[device.name] = device


def frame_size(
    device: Optional[PreviewDevice], orientation: Optional[InterfaceOrientation]
) -> Tuple[int, int]:
    return (device or DEFAULT_DEVICE).size_for(orientation)
