"""Structural inspection of preview view trees.

Provider-style declarations return a single view (usually a ``Group``)
whose children are the individual previews. ``children`` splits it into
``(base_view, modifiers)`` pairs so each preview can be rebuilt on its own.
Modifiers attached to the group apply to every child.

Modifier lists are ordered outermost first: for
``Text("a").modifier(A).modifier(B)`` the result is ``(Text("a"), [B, A])``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Type, TypeVar

from .traits import ColorScheme
from .views import (
    AnyView,
    Group,
    ModifiedView,
    PreferredColorScheme,
    PreviewTraitModifier,
    View,
    ViewModifier,
)

__all__ = [
    "children",
    "compose",
    "trait_value",
    "preferred_color_scheme",
]

M = TypeVar("M", bound=PreviewTraitModifier)

Child = Tuple[View, List[ViewModifier]]


def children(view: View) -> List[Child]:
    if isinstance(view, AnyView):
        return children(view.content)
    if isinstance(view, ModifiedView):
        return [(base, [view.view_modifier] + mods) for base, mods in children(view.content)]
    if isinstance(view, Group):
        result: List[Child] = []
        for child in view.children:
            result.extend(children(child))
        return result
    return [(view, [])]


def compose(base: View, modifiers: Iterable[ViewModifier]) -> AnyView:
    """Re-apply outermost-first ``modifiers`` so the last declared wraps outermost."""
    result = AnyView(base)
    for modifier in reversed(list(modifiers)):
        result = AnyView(result.modifier(modifier))
    return result


def trait_value(modifiers: Iterable[ViewModifier], kind: Type[M]) -> Optional[object]:
    """Value of the outermost (last declared) trait modifier of ``kind``."""
    for modifier in modifiers:
        if isinstance(modifier, kind):
            return modifier.value
    return None


def preferred_color_scheme(view: View) -> Optional[ColorScheme]:
    """Outermost ``PreferredColorScheme`` reachable through wrappers, if any.

    Only the wrapper chain is searched; schemes set on stack children do not
    describe the preview as a whole.
    """
    node: Optional[View] = view
    while node is not None:
        if isinstance(node, AnyView):
            node = node.content
        elif isinstance(node, ModifiedView):
            if isinstance(node.view_modifier, PreferredColorScheme):
                return node.view_modifier.scheme
            node = node.content
        else:
            node = None
    return None
