"""Rendering strategies on the offscreen Qt platform."""

from __future__ import annotations

import io
import time

import pytest

pytest.importorskip("PyQt6.QtWidgets")

from PIL import Image  # noqa: E402

from snapshot_previews.core.declarations import DeveloperPreview, ViewPreviewSource, WidgetPreviewSource  # noqa: E402
from snapshot_previews.core.devices import get_device  # noqa: E402
from snapshot_previews.core.extraction import preview_from_registry  # noqa: E402
from snapshot_previews.core.traits import ColorScheme, PreviewTrait  # noqa: E402
from snapshot_previews.core.views import ColorView, Text, VStack  # noqa: E402
from snapshot_previews.errors import RenderError  # noqa: E402
from snapshot_previews.rendering import animations  # noqa: E402
from snapshot_previews.rendering.base import RenderingStrategy, wait_for_render  # noqa: E402
from snapshot_previews.rendering.headless import HeadlessRenderingStrategy  # noqa: E402
from snapshot_previews.rendering.image_renderer import ImageRendererStrategy  # noqa: E402
from snapshot_previews.rendering.result import FailureKind, SnapshotResult  # noqa: E402
from snapshot_previews.rendering.foreground import ForegroundRenderingStrategy  # noqa: E402
from snapshot_previews.rendering.selection import (  # noqa: E402
    RenderCapabilities,
    choose_strategy_class,
    select_rendering_strategy,
)

pytestmark = pytest.mark.gui


def _preview(make_view, *traits, name=None):
    return preview_from_registry(DeveloperPreview(ViewPreviewSource(make_view), name, tuple(traits)))


def _size(png: bytes):
    with Image.open(io.BytesIO(png)) as img:
        return img.size


@pytest.fixture(
    params=[HeadlessRenderingStrategy, ForegroundRenderingStrategy, ImageRendererStrategy],
    ids=["headless", "foreground", "image"],
)
def strategy(request, qt_app, restore_animations):
    return request.param()


def test_fixed_layout_renders_at_device_scale(strategy):
    p = _preview(
        lambda: Text("Hello").padding(4),
        PreviewTrait.fixed_layout(100, 40),
        PreviewTrait(get_device("Phone Compact")),
    )
    result = wait_for_render(strategy, p, 5.0)
    assert result.ok, result.message
    assert (result.width, result.height) == (200, 80)
    assert result.scale == 2.0
    assert _size(result.get()) == (200, 80)


def test_same_preview_renders_identical_bytes(strategy):
    p = _preview(lambda: VStack(Text("Title").font(12, bold=True), Text("Subtitle")), PreviewTrait.fixed_layout(160, 60))
    first = wait_for_render(strategy, p, 5.0)
    second = wait_for_render(strategy, p, 5.0)
    assert first.ok and second.ok
    assert first.get() == second.get()
    assert p.content.calls == 2


def test_color_scheme_changes_pixels(strategy):
    light = _preview(lambda: Text("Mode"), PreviewTrait.fixed_layout(80, 30))
    dark = _preview(lambda: Text("Mode").preferred_color_scheme(ColorScheme.DARK), PreviewTrait.fixed_layout(80, 30))
    assert dark.color_scheme() is ColorScheme.DARK
    a = wait_for_render(strategy, light, 5.0).get()
    b = wait_for_render(strategy, dark, 5.0).get()
    assert a != b
    with Image.open(io.BytesIO(b)) as img:
        r, g, bl = img.convert("RGB").getpixel((0, 0))
    assert max(r, g, bl) < 80  # dark window background


def test_size_that_fits_uses_content_size(strategy):
    p = _preview(lambda: ColorView("#ff0000", 30, 20), PreviewTrait.size_that_fits_layout(), PreviewTrait(get_device("Desktop")))
    result = wait_for_render(strategy, p, 5.0)
    assert result.ok, result.message
    assert (result.width, result.height) == (30, 20)


def test_device_layout_uses_frame(strategy):
    p = _preview(lambda: Text("Frame"), PreviewTrait(get_device("Phone Compact")))
    result = wait_for_render(strategy, p, 5.0)
    assert (result.width, result.height) == (750, 1334)


def test_render_disables_animations(strategy):
    animations.set_animations_enabled(True)
    wait_for_render(strategy, _preview(lambda: Text("x"), PreviewTrait.fixed_layout(10, 10)), 5.0)
    assert animations.animations_enabled() is False


def test_build_failure_is_render_error(strategy):
    p = preview_from_registry(DeveloperPreview(WidgetPreviewSource(lambda: "not a widget")))
    result = wait_for_render(strategy, p, 5.0)
    assert result.failure is FailureKind.RENDER_ERROR
    assert "TypeError" in result.message
    with pytest.raises(RenderError):
        result.get()


def test_content_failure_is_missing_content(strategy):
    def explode():
        raise RuntimeError("no content")

    result = wait_for_render(strategy, _preview(explode), 5.0)
    assert result.failure is FailureKind.MISSING_CONTENT
    assert "no content" in result.message


class _NeverCompletes(RenderingStrategy):
    name = "never"
    headless = True

    def attach(self, content, size, scheme):  # pragma: no cover - render never reaches attach
        raise AssertionError

    def detach(self, host, content):  # pragma: no cover
        raise AssertionError

    def render(self, preview, completion):
        pass


def test_timeout_when_completion_never_called(qt_app):
    result = wait_for_render(_NeverCompletes(), _preview(lambda: Text("x")), 0.05)
    assert result.failure is FailureKind.TIMEOUT
    assert result.message == "Did not render within 0.05s"


def test_completion_after_bound_is_timeout(qt_app, restore_animations):
    def slow():
        time.sleep(0.05)
        return Text("late")

    strategy = HeadlessRenderingStrategy()
    result = wait_for_render(strategy, _preview(slow, PreviewTrait.fixed_layout(20, 10)), 0.01)
    qt_app.processEvents()
    assert result.failure is FailureKind.TIMEOUT
    assert result.message == "Did not render within 0.01s"


def test_snapshot_result_helpers():
    ok = SnapshotResult.success(b"png", 2, 2, 1.0)
    assert ok.ok and ok.get() == b"png"
    assert not SnapshotResult.failed(FailureKind.RENDER_ERROR, "x").ok
    with pytest.raises(RenderError):
        SnapshotResult().get()


def test_strategy_choice_by_capabilities():
    windowed = RenderCapabilities("xcb", True)
    offscreen = RenderCapabilities("offscreen", False)
    assert choose_strategy_class(True, windowed) is HeadlessRenderingStrategy
    assert choose_strategy_class(False, windowed) is ForegroundRenderingStrategy
    assert choose_strategy_class(False, offscreen) is ImageRendererStrategy


def test_select_rendering_strategy_is_cached(qt_app):
    first = select_rendering_strategy(True)
    assert isinstance(first, HeadlessRenderingStrategy)
    assert select_rendering_strategy(True) is first
    assert isinstance(select_rendering_strategy(False), ImageRendererStrategy)
