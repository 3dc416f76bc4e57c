"""Animation suppression for deterministic captures.

Single source of truth for whether UI animations and transition effects are
allowed while previews render. Rendering strategies call
``disable_animations()`` before building content; it flips the module flag
and turns off Qt's UI effects on the running application so combo boxes,
tooltips and menus never capture mid-transition.
"""

from __future__ import annotations

__all__ = [
    "animations_enabled",
    "set_animations_enabled",
    "disable_animations",
]

_animations_enabled: bool = True

_QT_EFFECT_NAMES = (
    "UI_General",
    "UI_AnimateMenu",
    "UI_FadeMenu",
    "UI_AnimateCombo",
    "UI_AnimateTooltip",
    "UI_FadeTooltip",
    "UI_AnimateToolBox",
)


def _apply_qt_effects(enabled: bool) -> None:
    try:
        from PyQt6.QtCore import Qt
        from PyQt6.QtWidgets import QApplication
    except Exception:  # pragma: no cover - pure logic tests without PyQt6
        return
    if QApplication.instance() is None:
        return
    for name in _QT_EFFECT_NAMES:
        effect = getattr(Qt.UIEffect, name, None)
        if effect is not None:
            QApplication.setEffectEnabled(effect, enabled)


def animations_enabled() -> bool:
    return _animations_enabled


def set_animations_enabled(enabled: bool) -> None:
    """Set the global animation preference and mirror it onto Qt UI effects."""
    global _animations_enabled
    _animations_enabled = bool(enabled)
    _apply_qt_effects(_animations_enabled)


def disable_animations() -> None:
    set_animations_enabled(False)
