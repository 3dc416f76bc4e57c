"""Preview discovery and snapshot testing for PyQt6 user interfaces.

Declare previews next to your widgets (``PreviewProvider`` subclasses or
``@preview`` functions), then subclass ``SnapshotTest`` in a pytest module to
render every preview and compare it against a reference PNG.

Only the pure discovery layer is imported here; rendering and the pytest
scaffolding live in ``snapshot_previews.rendering`` and
``snapshot_previews.testing``.
"""

from .core import (
    ColorScheme,
    DeveloperPreview,
    DiscoverySession,
    InterfaceOrientation,
    Preview,
    PreviewDevice,
    PreviewFilter,
    PreviewLayout,
    PreviewPlatform,
    PreviewProvider,
    PreviewRegistry,
    PreviewTrait,
    PreviewType,
    find_previews,
    preview,
    widget_preview,
    window_preview,
)
from .core.views import AnyView, ColorView, Group, HStack, Spacer, Text, View, VStack, WidgetAdapter, WindowAdapter
from .errors import (
    PreviewNotFoundError,
    RenderError,
    SnapshotIOError,
    SnapshotMismatchError,
    SnapshotPreviewsError,
    SnapshotRecordedError,
)

__all__ = [
    "ColorScheme",
    "DeveloperPreview",
    "DiscoverySession",
    "InterfaceOrientation",
    "Preview",
    "PreviewDevice",
    "PreviewFilter",
    "PreviewLayout",
    "PreviewPlatform",
    "PreviewProvider",
    "PreviewRegistry",
    "PreviewTrait",
    "PreviewType",
    "find_previews",
    "preview",
    "widget_preview",
    "window_preview",
    "AnyView",
    "ColorView",
    "Group",
    "HStack",
    "Spacer",
    "Text",
    "View",
    "VStack",
    "WidgetAdapter",
    "WindowAdapter",
    "PreviewNotFoundError",
    "RenderError",
    "SnapshotIOError",
    "SnapshotMismatchError",
    "SnapshotPreviewsError",
    "SnapshotRecordedError",
]

__version__ = "0.1.0"
