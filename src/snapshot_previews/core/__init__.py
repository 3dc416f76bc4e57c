"""Preview discovery and extraction (pure Python; no Qt import required)."""

from .declarations import (
    DeveloperPreview,
    PreviewProvider,
    PreviewRegistry,
    ViewPreviewSource,
    WidgetPreviewSource,
    WindowPreviewSource,
    preview,
    widget_preview,
    window_preview,
)
from .devices import DEVICE_PROFILES, PreviewDevice, get_device
from .filters import PreviewFilter
from .extraction import Preview, PreviewType, synthesize_display_name
from .scanner import ModuleWalkRegistry, StaticRegistry, SubclassRegistry
from .session import DiscoveredPreview, DiscoveredPreviewAndIndex, DiscoverySession, find_previews
from .traits import ColorScheme, InterfaceOrientation, PreviewLayout, PreviewPlatform, PreviewTrait

__all__ = [
    "DeveloperPreview",
    "PreviewProvider",
    "PreviewRegistry",
    "ViewPreviewSource",
    "WidgetPreviewSource",
    "WindowPreviewSource",
    "preview",
    "widget_preview",
    "window_preview",
    "DEVICE_PROFILES",
    "PreviewDevice",
    "get_device",
    "PreviewFilter",
    "Preview",
    "PreviewType",
    "synthesize_display_name",
    "ModuleWalkRegistry",
    "StaticRegistry",
    "SubclassRegistry",
    "DiscoveredPreview",
    "DiscoveredPreviewAndIndex",
    "DiscoverySession",
    "find_previews",
    "ColorScheme",
    "InterfaceOrientation",
    "PreviewLayout",
    "PreviewPlatform",
    "PreviewTrait",
]
