"""Extraction of previews from both declaration shapes."""

from __future__ import annotations

import logging

import pytest

from snapshot_previews.core.declarations import (
    DeveloperPreview,
    PreviewProvider,
    PreviewRegistry,
    ViewPreviewSource,
    preview,
    widget_preview,
    window_preview,
)
from snapshot_previews.core.devices import get_device
from snapshot_previews.core.extraction import (
    preview_from_registry,
    preview_type_from_provider,
    preview_type_from_registry,
)
from snapshot_previews.core.inspection import children
from snapshot_previews.core.scanner import qualified_type_name
from snapshot_previews.core.traits import (
    ColorScheme,
    InterfaceOrientation,
    LayoutKind,
    PreviewLayout,
    PreviewPlatform,
    PreviewTrait,
)
from snapshot_previews.core.views import Group, Text, ViewModifier
from snapshot_previews.errors import PreviewExtractionError


class A(ViewModifier):
    pass


class B(ViewModifier):
    pass


def _provider(view_factory, platform=None):
    return type(
        "Sample_Previews",
        (PreviewProvider,),
        {"previews": classmethod(lambda cls: view_factory()), "platform": platform},
    )


def test_modifiers_reapplied_in_declaration_order():
    provider = _provider(lambda: Group(Text("x").modifier(A()).modifier(B())))
    ptype = preview_type_from_provider("app.Sample_Previews", provider)
    assert len(ptype.previews) == 1
    assert ptype.previews[0].view().describe() == "B(A(Text('x')))"


def test_children_lists_outermost_modifier_first():
    base, mods = children(Text("x").modifier(A()).modifier(B()))[0]
    assert base.describe() == "Text('x')"
    assert [type(m) for m in mods] == [B, A]


def test_group_children_become_previews_with_traits():
    provider = _provider(
        lambda: Group(
            Text("a").preview_display_name("First"),
            Text("b")
            .preview_device("Phone")
            .preview_interface_orientation(InterfaceOrientation.LANDSCAPE_LEFT),
        ).preview_layout(PreviewLayout.SIZE_THAT_FITS),
        platform=PreviewPlatform.PHONE,
    )
    ptype = preview_type_from_provider("app.Sample_Previews", provider)
    first, second = ptype.previews
    assert first.display_name == "First"
    assert second.display_name is None
    assert [p.layout for p in ptype.previews] == [PreviewLayout.SIZE_THAT_FITS] * 2
    assert second.device == get_device("Phone")
    assert second.orientation is InterfaceOrientation.LANDSCAPE_LEFT
    assert [p.preview_id for p in ptype.previews] == ["0", "1"]
    assert ptype.platform is PreviewPlatform.PHONE
    # Group level modifiers wrap each child
    assert first.view().describe() == "PreviewLayoutModifier(PreviewDisplayName(Text('a')))"


def test_outermost_display_name_wins():
    provider = _provider(lambda: Text("a").preview_display_name("inner").preview_display_name("outer"))
    (only,) = preview_type_from_provider("app.Sample_Previews", provider).previews
    assert only.display_name == "outer"


def test_provider_content_deferred_until_view():
    built = []

    def make():
        built.append(1)
        return Group(Text("a"), Text("b"))

    ptype = preview_type_from_provider("app.Sample_Previews", _provider(make))
    assert len(built) == 1  # enumeration only
    ptype.previews[1].view()
    assert len(built) == 2
    assert ptype.previews[1].content.calls == 1


def test_color_scheme_probe_is_lazy_and_memoized():
    calls = []

    def make():
        calls.append(1)
        return Text("a").preferred_color_scheme(ColorScheme.DARK)

    p = preview_from_registry(DeveloperPreview(ViewPreviewSource(make)))
    assert calls == []
    assert p.color_scheme() is ColorScheme.DARK
    assert p.color_scheme() is ColorScheme.DARK
    assert len(calls) == 1
    assert p.content.calls == 0


def test_color_scheme_absent_is_none():
    provider = _provider(lambda: Group(Text("a").padding(4)))
    (only,) = preview_type_from_provider("app.Sample_Previews", provider).previews
    assert only.color_scheme() is None


def test_registry_traits_last_wins():
    p = preview_from_registry(
        DeveloperPreview(
            ViewPreviewSource(lambda: Text("a")),
            "Named",
            (
                PreviewTrait.fixed_layout(10, 10),
                PreviewTrait.orientation(InterfaceOrientation.PORTRAIT),
                PreviewTrait.size_that_fits_layout(),
                PreviewTrait(get_device("Tablet")),
                PreviewTrait.orientation(InterfaceOrientation.LANDSCAPE_RIGHT),
            ),
        )
    )
    assert p.layout.kind is LayoutKind.SIZE_THAT_FITS
    assert p.orientation is InterfaceOrientation.LANDSCAPE_RIGHT
    assert p.device == get_device("Tablet")
    assert p.display_name == "Named"


def test_registry_without_traits_defaults_to_device_layout():
    p = preview_from_registry(DeveloperPreview(ViewPreviewSource(lambda: Text("a"))))
    assert p.layout == PreviewLayout.DEVICE
    assert p.device is None and p.orientation is None


def test_unknown_source_is_skipped(caplog):
    class Unknown:
        pass

    with caplog.at_level(logging.DEBUG, logger="snapshot_previews.core.extraction"):
        assert preview_from_registry(DeveloperPreview(Unknown())) is None
    assert any("unrecognized source" in r.getMessage() for r in caplog.records)


def test_throwing_make_preview_is_skipped():
    class Broken(PreviewRegistry):
        @classmethod
        def make_preview(cls):
            raise RuntimeError("boom")

    assert preview_type_from_registry("app.Broken", Broken) is None


def test_decorator_builds_registry_type():
    @preview("Login - Dark", PreviewTrait.size_that_fits_layout())
    def login_dark():
        return Text("login").preferred_color_scheme(ColorScheme.DARK)

    assert issubclass(login_dark, PreviewRegistry)
    assert login_dark.file_id.endswith("/test_extraction.py")
    assert isinstance(login_dark.line, int)
    assert login_dark.__wrapped__().describe() == "PreferredColorScheme(Text('login'))"

    ptype = preview_type_from_registry(qualified_type_name(login_dark), login_dark)
    (only,) = ptype.previews
    assert only.display_name == "Login - Dark"
    assert only.layout == PreviewLayout.SIZE_THAT_FITS
    assert only.color_scheme() is ColorScheme.DARK
    assert ptype.display_name == "test_extraction"


def test_native_sources_wrap_adapters():
    @widget_preview("Native")
    def native():
        raise AssertionError("factory must not run during extraction")

    @window_preview()
    def main_window():
        raise AssertionError("factory must not run during extraction")

    for registry in (native, main_window):
        ptype = preview_type_from_registry(qualified_type_name(registry), registry)
        assert ptype is not None and len(ptype.previews) == 1
    assert preview_type_from_registry(qualified_type_name(native), native).previews[0].view().describe() == (
        "WidgetAdapter"
    )


def test_provider_type_check():
    with pytest.raises(TypeError):
        preview_type_from_provider("app.Nope", object)


def test_failing_provider_raises_extraction_error():
    def explode():
        raise ValueError("bad group")

    with pytest.raises(PreviewExtractionError, match="app.Sample_Previews.previews\\(\\) failed: bad group"):
        preview_type_from_provider("app.Sample_Previews", _provider(explode))
