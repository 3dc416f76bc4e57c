import pytest


@pytest.fixture(autouse=True)
def rm(restore_animations):
    restore_animations.set_animations_enabled(True)
    return restore_animations


def test_toggle(rm):
    assert rm.animations_enabled() is True
    rm.disable_animations()
    assert rm.animations_enabled() is False
    rm.set_animations_enabled(1)
    assert rm.animations_enabled() is True


@pytest.mark.gui
def test_qt_effects_follow_flag(rm, qt_app):
    from PyQt6.QtCore import Qt
    from PyQt6.QtWidgets import QApplication

    rm.set_animations_enabled(False)
    assert not QApplication.isEffectEnabled(Qt.UIEffect.UI_AnimateCombo)
