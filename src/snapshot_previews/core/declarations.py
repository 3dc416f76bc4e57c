"""Preview declaration shapes recognized by discovery.

Two shapes are supported:

``PreviewProvider``
    A class whose ``previews()`` classmethod returns one view, usually a
    ``Group`` of configured children. Each child becomes one preview; its
    configuration comes from ``preview_*`` modifiers.

``PreviewRegistry``
    A class describing exactly one preview through ``make_preview()``,
    which may raise. The returned ``DeveloperPreview`` carries a display
    name, a list of traits and a *source* adapter telling how content is
    produced (declarative view, native widget or native window). The
    ``preview`` / ``widget_preview`` / ``window_preview`` decorators
    synthesize such classes from plain functions.

Neither base class is discovered itself; intermediate base classes can opt
out of discovery with ``__preview_abstract__ = True``.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, ClassVar, List, Optional, Tuple, Type

from .devices import PreviewDevice
from .inspection import children, trait_value
from .traits import InterfaceOrientation, PreviewLayout, PreviewPlatform, PreviewTrait
from .views import (
    PreviewDeviceModifier,
    PreviewDisplayName,
    PreviewLayoutModifier,
    PreviewOrientationModifier,
    View,
)

__all__ = [
    "PreviewDescriptor",
    "PreviewProvider",
    "PreviewSourceKind",
    "ViewPreviewSource",
    "WidgetPreviewSource",
    "WindowPreviewSource",
    "DeveloperPreview",
    "PreviewRegistry",
    "preview",
    "widget_preview",
    "window_preview",
]


@dataclass(frozen=True)
class PreviewDescriptor:
    """Configuration of one child of a provider's ``previews()`` view."""

    id: int
    display_name: Optional[str] = None
    device: Optional[PreviewDevice] = None
    orientation: Optional[InterfaceOrientation] = None
    layout: PreviewLayout = PreviewLayout.DEVICE


class PreviewProvider:
    __preview_abstract__: ClassVar[bool] = True
    platform: ClassVar[Optional[PreviewPlatform]] = None

    @classmethod
    def previews(cls) -> View:
        raise NotImplementedError(f"{cls.__qualname__} must implement previews()")

    @classmethod
    def all_previews(cls) -> List[PreviewDescriptor]:
        descriptors: List[PreviewDescriptor] = []
        for index, (_, modifiers) in enumerate(children(cls.previews())):
            layout = trait_value(modifiers, PreviewLayoutModifier)
            descriptors.append(
                PreviewDescriptor(
                    id=index,
                    display_name=trait_value(modifiers, PreviewDisplayName),  # type: ignore[arg-type]
                    device=trait_value(modifiers, PreviewDeviceModifier),  # type: ignore[arg-type]
                    orientation=trait_value(modifiers, PreviewOrientationModifier),  # type: ignore[arg-type]
                    layout=layout if layout is not None else PreviewLayout.DEVICE,  # type: ignore[arg-type]
                )
            )
        return descriptors


# ---------------------------------------------------------- Registry shape


class PreviewSourceKind(str, Enum):
    VIEW = "view"
    WIDGET = "widget"
    WINDOW = "window"


@dataclass(frozen=True)
class ViewPreviewSource:
    make_view: Callable[[], View]
    kind: ClassVar[PreviewSourceKind] = PreviewSourceKind.VIEW


@dataclass(frozen=True)
class WidgetPreviewSource:
    make_widget: Callable[[], Any]  # -> QWidget
    kind: ClassVar[PreviewSourceKind] = PreviewSourceKind.WIDGET


@dataclass(frozen=True)
class WindowPreviewSource:
    make_window: Callable[[], Any]  # -> QMainWindow
    kind: ClassVar[PreviewSourceKind] = PreviewSourceKind.WINDOW


@dataclass(frozen=True)
class DeveloperPreview:
    source: Any
    display_name: Optional[str] = None
    traits: Tuple[PreviewTrait, ...] = field(default_factory=tuple)


class PreviewRegistry:
    __preview_abstract__: ClassVar[bool] = True
    file_id: ClassVar[Optional[str]] = None
    line: ClassVar[Optional[int]] = None

    @classmethod
    def make_preview(cls) -> DeveloperPreview:
        raise NotImplementedError(f"{cls.__qualname__} must implement make_preview()")


def _file_id(func: Callable[..., Any]) -> Optional[str]:
    module = sys.modules.get(func.__module__)
    filename = getattr(module, "__file__", None)
    if not filename:
        return None
    return f"{func.__module__.split('.')[0]}/{Path(filename).name}"


def _registry_decorator(source_factory: Callable[[Callable[[], Any]], Any]):
    def factory(name: Optional[str] = None, *traits: PreviewTrait):
        def decorate(func: Callable[[], Any]) -> Type[PreviewRegistry]:
            source = source_factory(func)

            def make_preview(cls) -> DeveloperPreview:
                return DeveloperPreview(source=source, display_name=name, traits=tuple(traits))

            code = getattr(func, "__code__", None)
            namespace = {
                "__module__": func.__module__,
                "__qualname__": func.__qualname__,
                "__doc__": func.__doc__,
                "__wrapped__": staticmethod(func),
                "file_id": _file_id(func),
                "line": code.co_firstlineno if code is not None else None,
                "make_preview": classmethod(make_preview),
            }
            return type(func.__name__, (PreviewRegistry,), namespace)

        return decorate

    return factory


preview = _registry_decorator(ViewPreviewSource)
preview.__doc__ = """Declare a registry preview from a function returning a ``View``.

    @preview("Login - Dark", PreviewTrait.size_that_fits_layout())
    def login_dark():
        return LoginForm().preferred_color_scheme(ColorScheme.DARK)
"""
widget_preview = _registry_decorator(WidgetPreviewSource)
window_preview = _registry_decorator(WindowPreviewSource)
