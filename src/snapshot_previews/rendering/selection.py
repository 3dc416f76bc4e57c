"""Capability based choice of a rendering strategy.

The choice is made once per process (per ``headless`` flag): the running
Qt platform is probed and the most faithful backend it supports is used.

 - headless requested            -> ``HeadlessRenderingStrategy``
 - platform can present windows  -> ``ForegroundRenderingStrategy``
 - otherwise                     -> ``ImageRendererStrategy``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from ..config import settings
from .base import RenderingStrategy, ensure_application
from .foreground import ForegroundRenderingStrategy
from .headless import HeadlessRenderingStrategy
from .image_renderer import ImageRendererStrategy

__all__ = [
    "RenderCapabilities",
    "probe_capabilities",
    "choose_strategy_class",
    "select_rendering_strategy",
]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderCapabilities:
    platform_name: str
    can_show_windows: bool


def probe_capabilities(headless: bool = False) -> RenderCapabilities:
    app = ensure_application(headless)
    platform = (app.platformName() or "").lower()
    return RenderCapabilities(platform, platform not in settings.HEADLESS_QT_PLATFORMS)


def choose_strategy_class(headless: bool, capabilities: RenderCapabilities) -> type:
    if headless:
        return HeadlessRenderingStrategy
    if capabilities.can_show_windows:
        return ForegroundRenderingStrategy
    return ImageRendererStrategy


@lru_cache(maxsize=None)
def select_rendering_strategy(headless: bool = False) -> RenderingStrategy:
    capabilities = probe_capabilities(headless)
    strategy_cls = choose_strategy_class(headless, capabilities)
    _logger.debug(
        "Using %s rendering on Qt platform %r", strategy_cls.__name__, capabilities.platform_name
    )
    return strategy_cls()
