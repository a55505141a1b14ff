"""Legacy color normalization."""

from __future__ import annotations

from core.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FOREGROUND_COLOR,
    LEGACY_TRANSPARENT_COLOR,
    TRANSPARENT_COLOR,
)
from core.types import DesignBackground, LegacyBackground


def normalize_color(raw_color: object, default: str = DEFAULT_FOREGROUND_COLOR) -> str:
    """Normalize a legacy color value.

    Rules apply in order: missing values take ``default``; the legacy
    ``#0000`` sentinel becomes ``transparent``; ``rgba(...)`` and ``#``
    values pass through unchanged; anything else becomes black.

    Args:
        raw_color: Raw legacy color value.
        default: Context-dependent color for missing values.

    Returns:
        Normalized color string.
    """
    if raw_color is None or raw_color == "":
        return default
    if not isinstance(raw_color, str):
        return DEFAULT_FOREGROUND_COLOR
    if raw_color == LEGACY_TRANSPARENT_COLOR:
        return TRANSPARENT_COLOR
    if raw_color.startswith("rgba(") and raw_color.endswith(")"):
        return raw_color
    if raw_color.startswith("#"):
        return raw_color
    return DEFAULT_FOREGROUND_COLOR


def convert_background(background: LegacyBackground | None) -> DesignBackground:
    """Convert a legacy scene background into a solid design background.

    Background colors pass through literally except for the transparent
    sentinel; a missing background or color is white.
    """
    if background is None or background.color is None:
        return DesignBackground(type="solid", color=DEFAULT_BACKGROUND_COLOR)
    if background.color == LEGACY_TRANSPARENT_COLOR:
        return DesignBackground(type="solid", color=TRANSPARENT_COLOR)
    return DesignBackground(type="solid", color=background.color)
