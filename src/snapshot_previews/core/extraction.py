"""Preview records and extraction from discovered declarations.

``Preview`` is one renderable configuration: layout, device, orientation,
an optional display name, a deferred content constructor and a lazily
probed color scheme. ``PreviewType`` groups the previews of one declaration
and supplies the human readable group name used for reporting.

Extraction never raises for a single bad declaration: an unrecognized
registry source or a failing ``make_preview()`` produces ``None`` and is
logged, so one broken preview cannot abort discovery of the others.
"""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..errors import PreviewExtractionError
from .declarations import (
    DeveloperPreview,
    PreviewDescriptor,
    PreviewProvider,
    PreviewRegistry,
    PreviewSourceKind,
)
from .deferred import Deferred, Lazy
from .devices import PreviewDevice
from .inspection import children, compose, preferred_color_scheme
from .traits import ColorScheme, InterfaceOrientation, PreviewLayout, PreviewPlatform
from .views import AnyView, WidgetAdapter, WindowAdapter

__all__ = [
    "Preview",
    "PreviewType",
    "synthesize_display_name",
    "preview_from_descriptor",
    "preview_from_registry",
    "preview_type_from_provider",
    "preview_type_from_registry",
]

_logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?=[A-Z])")


def synthesize_display_name(type_name: str, module: Optional[str] = None) -> str:
    """Human readable name for a declaration type.

    ``module`` is the prefix to drop; by default the first dotted component.
    ``"Module.HomeScreen_Previews"`` becomes ``"Home Screen"``.
    """
    if module and type_name.startswith(module + "."):
        segments = type_name[len(module) + 1 :].split(".")
    else:
        segments = type_name.split(".")[1:]
    words: List[str] = []
    for segment in segments:
        for part in segment.split("_"):
            for fragment in _CAMEL_BOUNDARY.split(part):
                fragment = fragment.strip()
                if fragment:
                    words.append(fragment)
    if words and words[-1] == "Previews":
        words = words[:-1]
    return " ".join(words)


@dataclass(eq=False)
class Preview:
    preview_id: str
    layout: PreviewLayout
    content: Deferred[AnyView]
    display_name: Optional[str] = None
    device: Optional[PreviewDevice] = None
    orientation: Optional[InterfaceOrientation] = None
    _color_scheme: Optional[Lazy[Optional[ColorScheme]]] = field(default=None, repr=False)
    uid: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        if self._color_scheme is None:
            content = self.content
            self._color_scheme = Lazy(lambda: preferred_color_scheme(content.probe()))

    def view(self) -> AnyView:
        """Build the abstract view tree; call once per render attempt."""
        return self.content()

    def color_scheme(self) -> Optional[ColorScheme]:
        return self._color_scheme()  # type: ignore[misc]


def preview_from_descriptor(descriptor: PreviewDescriptor, provider: type) -> Preview:
    index = descriptor.id

    def make_view() -> AnyView:
        base, modifiers = children(provider.previews())[index]
        return compose(base, modifiers)

    return Preview(
        preview_id=str(index),
        layout=descriptor.layout,
        content=Deferred(make_view),
        display_name=descriptor.display_name,
        device=descriptor.device,
        orientation=descriptor.orientation,
    )


def _content_for_source(source: object) -> Optional[Callable[[], AnyView]]:
    kind = getattr(type(source), "kind", None)
    if kind is PreviewSourceKind.VIEW:
        make_view = source.make_view  # type: ignore[attr-defined]
        return lambda: AnyView(make_view())
    if kind is PreviewSourceKind.WIDGET:
        make_widget = source.make_widget  # type: ignore[attr-defined]
        return lambda: AnyView(WidgetAdapter(make_widget))
    if kind is PreviewSourceKind.WINDOW:
        make_window = source.make_window  # type: ignore[attr-defined]
        return lambda: AnyView(WindowAdapter(make_window))
    return None


def preview_from_registry(preview: DeveloperPreview) -> Optional[Preview]:
    make_view = _content_for_source(preview.source)
    if make_view is None:
        _logger.debug("Skipping preview with unrecognized source %s", type(preview.source).__name__)
        return None
    layout = PreviewLayout.DEVICE
    orientation: Optional[InterfaceOrientation] = None
    device: Optional[PreviewDevice] = None
    for trait in preview.traits:
        value = getattr(trait, "value", None)
        if isinstance(value, PreviewLayout):
            layout = value
        elif isinstance(value, InterfaceOrientation):
            orientation = value
        elif isinstance(value, PreviewDevice):
            device = value
    return Preview(
        preview_id="",
        layout=layout,
        content=Deferred(make_view),
        display_name=preview.display_name,
        device=device,
        orientation=orientation,
    )


@dataclass(eq=False)
class PreviewType:
    type_name: str
    previews: List[Preview]
    module_name: Optional[str] = None
    file_id: Optional[str] = None
    platform: Optional[PreviewPlatform] = None
    uid: uuid.UUID = field(default_factory=uuid.uuid4)

    def __hash__(self) -> int:
        return hash(self.type_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreviewType):
            return NotImplemented
        return self.type_name == other.type_name

    @property
    def module(self) -> str:
        return (self.module_name or self.type_name).split(".")[0]

    @property
    def display_name(self) -> str:
        if self.file_id:
            return self.file_id.split("/")[-1].split(".")[0]
        return synthesize_display_name(self.type_name, self.module_name)

    def snapshot_name(self, index: int) -> str:
        """Name used for the snapshot file of ``previews[index]``."""
        preview = self.previews[index]
        if preview.display_name:
            return preview.display_name
        if self.file_id:
            # Every registry preview of a file shares the file-stem group name
            return synthesize_display_name(self.type_name, self.module_name) or self.display_name
        if len(self.previews) == 1:
            return self.display_name
        return f"{self.display_name} {index}"


def preview_type_from_provider(type_name: str, provider: type) -> PreviewType:
    if not issubclass(provider, PreviewProvider):
        raise TypeError(f"{type_name} is not a PreviewProvider")
    try:
        descriptors = provider.all_previews()
    except Exception as exc:  # noqa: BLE001 - user code
        raise PreviewExtractionError(f"{type_name}.previews() failed: {exc}") from exc
    previews = [preview_from_descriptor(d, provider) for d in descriptors]
    return PreviewType(
        type_name=type_name,
        previews=previews,
        module_name=provider.__module__,
        platform=provider.platform,
    )


def preview_type_from_registry(type_name: str, registry: type) -> Optional[PreviewType]:
    if not issubclass(registry, PreviewRegistry):
        raise TypeError(f"{type_name} is not a PreviewRegistry")
    try:
        internal = registry.make_preview()
    except Exception as exc:  # noqa: BLE001 - a throwing factory only drops this declaration
        _logger.debug("make_preview() failed for %s: %s", type_name, exc)
        return None
    preview = preview_from_registry(internal)
    if preview is None:
        return None
    return PreviewType(
        type_name=type_name,
        previews=[preview],
        module_name=registry.__module__,
        file_id=registry.file_id,
    )
