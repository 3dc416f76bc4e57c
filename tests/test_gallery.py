import pytest

from snapshot_previews.core.declarations import PreviewProvider
from snapshot_previews.core.extraction import preview_type_from_provider
from snapshot_previews.core.scanner import StaticRegistry, SubclassRegistry
from snapshot_previews.core.session import DiscoverySession
from snapshot_previews.core.traits import ColorScheme, LayoutKind, PreviewLayout
from snapshot_previews.core.views import Group, Text
from snapshot_previews.gallery import TitleSubtitleRow, gallery_rows, row_subtitle, row_title


class Zebra_Previews(PreviewProvider):
    @classmethod
    def previews(cls):
        return Text("z")


class Apple_Previews(PreviewProvider):
    @classmethod
    def previews(cls):
        return Group(Text("a"), Text("b"))


class TitleSubtitleRow_Previews(PreviewProvider):
    @classmethod
    def previews(cls):
        row = TitleSubtitleRow("Home Screen", "3 previews")
        return Group(
            row.preview_layout(PreviewLayout.fixed(320, 56)).preview_display_name("Row Light"),
            row.preferred_color_scheme(ColorScheme.DARK)
            .preview_layout(PreviewLayout.fixed(320, 56))
            .preview_display_name("Row Dark"),
        )


def _types():
    return DiscoverySession(StaticRegistry([Zebra_Previews, Apple_Previews])).preview_types


def test_row_labels():
    by_title = {row_title(t): t for t in _types()}
    assert set(by_title) == {"Zebra", "Apple"}
    assert row_subtitle(by_title["Apple"]).startswith("2 previews · ")
    assert row_subtitle(by_title["Zebra"]).startswith("1 preview · ")


def test_gallery_rows_sorted_by_title():
    rows = gallery_rows(_types())
    assert [r.title for r in rows] == ["Apple", "Zebra"]
    assert all(isinstance(r, TitleSubtitleRow) for r in rows)


def test_row_previews_declared():
    ptype = preview_type_from_provider("gallery.TitleSubtitleRow_Previews", TitleSubtitleRow_Previews)
    assert [ptype.snapshot_name(i) for i in range(2)] == ["Row Light", "Row Dark"]
    assert all(p.layout.kind is LayoutKind.FIXED for p in ptype.previews)
    assert [p.color_scheme() for p in ptype.previews] == [None, ColorScheme.DARK]
    assert ptype.previews[0].view().describe() == (
        "PreviewDisplayName(PreviewLayoutModifier(TitleSubtitleRow('Home Screen', '3 previews')))"
    )


@pytest.mark.gui
def test_gallery_window_lists_and_renders(qtbot, qt_app):
    from PyQt6.QtWidgets import QLabel, QListWidget

    from snapshot_previews.gallery import build_gallery_window

    window = build_gallery_window(DiscoverySession(StaticRegistry([TitleSubtitleRow_Previews])))
    qtbot.addWidget(window)
    list_widget = window.findChild(QListWidget, "galleryList")
    detail = window.findChild(QLabel, "galleryDetail")
    assert list_widget.count() == 2
    list_widget.setCurrentRow(1)
    pixmap = detail.pixmap()
    assert pixmap is not None and not pixmap.isNull()
    assert pixmap.width() == 320 * pixmap.devicePixelRatio()


def test_library_declares_no_previews():
    import snapshot_previews.gallery  # noqa: F401

    names = [c.name for c in SubclassRegistry().scan()]
    assert not [n for n in names if n.startswith("snapshot_previews.")]
