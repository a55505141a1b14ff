"""Unit tests for legacy coordinate conversion."""

from __future__ import annotations

from convert.geometry import (
    coerce_number,
    convert_opacity,
    convert_transform,
    parse_canvas_dimension,
    parse_leading_int,
    percent_to_pixel,
)


def test_percent_to_pixel_scales_by_canvas_size() -> None:
    """Percentages should map onto the given canvas dimension."""
    pixel = percent_to_pixel(50, 1920)

    assert pixel == 960


def test_percent_to_pixel_rounds_halves_up() -> None:
    """Half-pixel results should round up."""
    pixel = percent_to_pixel(12.5, 4)

    assert pixel == 1


def test_percent_to_pixel_treats_non_numbers_as_zero() -> None:
    """Missing and string percentages should yield zero pixels."""
    pixels = (percent_to_pixel(None, 1920), percent_to_pixel("50", 1920), percent_to_pixel(True, 100))

    assert pixels == (0, 0, 0)


def test_parse_leading_int_reads_unit_suffixed_values() -> None:
    """Values with trailing units should parse their leading digits."""
    parsed = parse_leading_int("800px")

    assert parsed == 800


def test_parse_canvas_dimension_defaults_to_zero() -> None:
    """Non-numeric canvas sizes should fall back to zero."""
    dimension = parse_canvas_dimension("abc")

    assert dimension == 0


def test_convert_opacity_scales_legacy_range() -> None:
    """Legacy 0-10 opacity should map onto 0-1 with missing as opaque."""
    values = (convert_opacity(10), convert_opacity(5), convert_opacity(None), convert_opacity(0))

    assert values == (1.0, 0.5, 1.0, 0.0)


def test_convert_transform_uses_width_and_height_axes() -> None:
    """Horizontal values should use width and vertical values use height."""
    props = {"left": 10, "top": 10, "w": 50, "h": 20, "r": 45, "opacity": 5}

    transform = convert_transform(props, 800, 600)

    assert (transform.x, transform.y, transform.width, transform.height) == (80, 60, 400, 120)
    assert transform.rotation == 45
    assert transform.opacity == 0.5
    assert (transform.scale_x, transform.scale_y, transform.skew_x, transform.skew_y) == (1, 1, 0, 0)


def test_convert_transform_defaults_missing_rotation() -> None:
    """Missing rotation should convert to zero."""
    transform = convert_transform({"r": "spin"}, 100, 100)

    assert transform.rotation == 0


def test_percent_to_pixel_returns_zero_on_overflow() -> None:
    """Finite percentages that overflow when scaled should yield zero."""
    pixels = (percent_to_pixel(1e308, 1920), percent_to_pixel(50, 10**400))

    assert pixels == (0, 0)


def test_convert_opacity_reads_numeric_strings() -> None:
    """String opacities should be read as numbers."""
    values = (convert_opacity("5"), convert_opacity(" 2.5 "), convert_opacity("dim"))

    assert values == (0.5, 0.25, 1.0)


def test_coerce_number_parses_numeric_strings() -> None:
    """Numeric strings should parse while other values stay unset."""
    values = (coerce_number("24"), coerce_number("1.5"), coerce_number("inf"), coerce_number(None))

    assert values == (24, 1.5, None, None)
