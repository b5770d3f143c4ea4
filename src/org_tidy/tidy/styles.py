"""
Decide how a drawer is decorated.

resolve_style() is a pure decision table; render_spec_for() turns its answer
into the render spec handed to the annotation host.
"""

from enum import Enum
from typing import NamedTuple

from org_tidy.schemas import (
    GeneralStyle,
    HideAsEmpty,
    RenderSpec,
    ReplaceWithGlyph,
    SideMarker,
    StyleConfig,
    TopStyle,
)


class StyleAction(Enum):
    HIDE_COMPLETELY = "hide-completely"
    NO_OP = "no-op"
    SHOW_INLINE_SYMBOL = "show-inline-symbol"
    SHOW_FRINGE_MARKER = "show-fringe-marker"


class StyleDecision(NamedTuple):
    action: StyleAction
    guard_boundaries: bool


_GENERAL_ACTIONS: dict[GeneralStyle, StyleAction] = {
    "invisible": StyleAction.HIDE_COMPLETELY,
    "inline-symbol": StyleAction.SHOW_INLINE_SYMBOL,
    "fringe-marker": StyleAction.SHOW_FRINGE_MARKER,
}


def resolve_style(
    is_topmost: bool, top_style: TopStyle, general_style: GeneralStyle
) -> StyleDecision:
    """
    Map a drawer position and the configured styles to a decoration.

    The topmost drawer is never guarded. Every other drawer is, even when it
    is hidden completely.

    >>> resolve_style(True, "invisible", "inline-symbol")
    StyleDecision(action=<StyleAction.HIDE_COMPLETELY: 'hide-completely'>, guard_boundaries=False)
    >>> resolve_style(False, "keep", "invisible").guard_boundaries
    True
    """
    if is_topmost:
        if top_style == "invisible":
            return StyleDecision(StyleAction.HIDE_COMPLETELY, False)
        if top_style == "keep":
            return StyleDecision(StyleAction.NO_OP, False)
        raise ValueError(f"Unknown top style {top_style!r}")
    try:
        return StyleDecision(_GENERAL_ACTIONS[general_style], True)
    except KeyError:
        raise ValueError(f"Unknown general style {general_style!r}") from None


def render_spec_for(action: StyleAction, config: StyleConfig) -> RenderSpec | None:
    """Render spec of the visual annotation for `action`, None for NO_OP."""
    if action is StyleAction.HIDE_COMPLETELY:
        return HideAsEmpty()
    if action is StyleAction.SHOW_INLINE_SYMBOL:
        return ReplaceWithGlyph(config.inline_symbol)
    if action is StyleAction.SHOW_FRINGE_MARKER:
        return SideMarker(config.fringe_bitmap)
    return None
