# Shared fixtures for the snapshot preview test-suite.
# Qt always runs on the offscreen platform here; set before any QApplication exists.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot(qt_app):  # type: ignore
        """Minimal stand-in for pytest-qt: closes added widgets on teardown."""
        widgets = []

        class _Bot:
            addWidget = staticmethod(widgets.append)

        yield _Bot()
        for widget in widgets:
            widget.close()


@pytest.fixture
def qt_app():
    """Running QApplication (Fusion style, offscreen platform)."""
    pytest.importorskip("PyQt6.QtWidgets")
    from snapshot_previews.rendering.base import ensure_application

    return ensure_application(headless=True)


@pytest.fixture
def restore_animations():
    from snapshot_previews.rendering import animations

    previous = animations.animations_enabled()
    yield animations
    animations.set_animations_enabled(previous)
