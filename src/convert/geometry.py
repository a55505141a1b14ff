"""Coordinate conversion from legacy percentages to canvas pixels.

Legacy elements are positioned in percent of the canvas (0-100) with
opacity on a 0-10 scale. The helpers here convert those values into the
pixel space of the destination canvas.
"""

from __future__ import annotations

import math
import re
from typing import Mapping

from core.constants import LEGACY_OPACITY_SCALE
from core.types import Transform

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def is_number(value: object) -> bool:
    """Return whether a JSON value is a real number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def coerce_number(value: object) -> int | float | None:
    """Read a legacy numeric value that may be stored as a string.

    Returns:
        The number, or None when the value is neither a finite number nor
        a numeric string.
    """
    if is_number(value):
        return value  # type: ignore[return-value]
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def parse_leading_int(value: object) -> int | None:
    """Parse the leading integer of a value, ``"800px"`` -> 800.

    Returns:
        Parsed integer, or None when the value has no leading digits.
    """
    if is_number(value):
        return int(value)  # type: ignore[arg-type]
    if not isinstance(value, str):
        return None
    match = _LEADING_INT_PATTERN.match(value)
    return int(match.group(1)) if match else None


def parse_canvas_dimension(raw_value: str) -> int:
    """Parse a legacy canvas dimension; non-numeric input yields 0."""
    parsed = parse_leading_int(raw_value)
    return parsed if parsed is not None else 0


def percent_to_pixel(percent: object, canvas_size: int) -> int:
    """Convert a canvas percentage to pixels, rounding halves up.

    Args:
        percent: Legacy percentage value.
        canvas_size: Canvas dimension in pixels.

    Returns:
        Pixel value, or 0 when ``percent`` is not a number or the scaled
        value overflows.
    """
    if not is_number(percent):
        return 0
    try:
        scaled = percent / 100 * canvas_size + 0.5  # type: ignore[operator]
    except OverflowError:
        return 0
    if not math.isfinite(scaled):
        return 0
    return math.floor(scaled)


def convert_opacity(raw_opacity: object) -> float:
    """Convert legacy 0-10 opacity to 0-1; missing values are opaque.

    Numeric strings such as ``"5"`` are read as numbers.
    """
    opacity = coerce_number(raw_opacity)
    if opacity is None:
        opacity = LEGACY_OPACITY_SCALE
    return opacity / LEGACY_OPACITY_SCALE


def convert_transform(props: Mapping[str, object], canvas_width: int, canvas_height: int) -> Transform:
    """Build a pixel transform from legacy element properties.

    Args:
        props: Legacy element properties.
        canvas_width: Destination canvas width in pixels.
        canvas_height: Destination canvas height in pixels.

    Returns:
        Transform with neutral scale and skew.
    """
    rotation = props.get("r")
    return Transform(
        x=percent_to_pixel(props.get("left"), canvas_width),
        y=percent_to_pixel(props.get("top"), canvas_height),
        width=percent_to_pixel(props.get("w"), canvas_width),
        height=percent_to_pixel(props.get("h"), canvas_height),
        rotation=rotation if is_number(rotation) else 0,  # type: ignore[arg-type]
        opacity=convert_opacity(props.get("opacity")),
    )
