"""Unit tests for legacy template conversion."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from assets.asset_resolver import AssetResolver
from convert.template_converter import (
    TemplateConverter,
    build_description,
    parse_legacy_timestamp,
)
from core.errors import MalformedSourceError
from tests.fixture_paths import fixture_path
from tests.legacy_records import sample_template

_FIXED_NOW = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


def _sample_converter(asset_root: Path) -> TemplateConverter:
    resolver = AssetResolver(
        root_dir=asset_root,
        templates_dir=asset_root / "templates" / "all",
        cache_dir=asset_root / "cache",
        assets_dir=asset_root / "converted_assets",
    )
    return TemplateConverter(resolver, clock=lambda: _FIXED_NOW)


def test_convert_template_builds_basic_design(tmp_path) -> None:
    """A one-text-layer template should convert with pixel geometry."""
    converter = _sample_converter(tmp_path)

    design = converter.convert_template(sample_template())

    assert design.design_id == "abc123"
    assert (design.width, design.height) == (800, 600)
    assert design.data.background.color == "transparent"
    assert design.data.background_color == "#0000"
    assert design.description == "Tags: biz"
    assert design.is_public is True
    assert design.user_id == "legacy_import"
    assert design.thumbnail == "/cache/tpl/previews/abc123.jpg"
    assert design.created_at == datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert design.updated_at == design.created_at
    layer = design.layers[0]
    assert len(design.layers) == 1 and layer.type == "text"
    transform = layer.transform
    assert (transform.x, transform.y, transform.width, transform.height) == (80, 60, 400, 120)
    assert layer.properties.text == "Hi"  # type: ignore[union-attr]


def test_convert_template_falls_back_for_missing_identity(tmp_path) -> None:
    """Hashless, untitled templates should get derived ids and titles."""
    converter = _sample_converter(tmp_path)
    record = sample_template(template_id=9, hash=None, title=None, tags=None, is_public="0")

    design = converter.convert_template(record)

    assert design.design_id == "template_9"
    assert design.title == "Template 9" and design.name == "Template 9"
    assert design.description is None
    assert design.thumbnail is None
    assert design.is_public is False


def test_convert_template_uses_clock_without_timestamps(tmp_path) -> None:
    """Templates without timestamps should take the injected clock."""
    converter = _sample_converter(tmp_path)
    record = sample_template(created_at=None, modified_at=None)

    design = converter.convert_template(record)

    assert design.created_at == _FIXED_NOW and design.updated_at == _FIXED_NOW


def test_convert_template_prefers_modified_timestamp(tmp_path) -> None:
    """The update timestamp should come from the modified column when present."""
    converter = _sample_converter(tmp_path)
    record = sample_template(modified_at="2021-06-01 12:30:00")

    design = converter.convert_template(record)

    assert design.updated_at == datetime(2021, 6, 1, 12, 30, tzinfo=timezone.utc)


def test_convert_template_drops_unconvertible_elements(tmp_path) -> None:
    """Missing images and unknown kinds should be dropped from the layers."""
    logo_dir = tmp_path / "templates" / "all" / "abc123"
    logo_dir.mkdir(parents=True)
    (logo_dir / "logo.png").write_bytes(b"png")
    converter = _sample_converter(tmp_path)
    source_json = fixture_path("legacy/mixed_scene.json").read_text(encoding="utf-8")

    design = converter.convert_template(sample_template(source_json=source_json))

    assert [layer.type for layer in design.layers] == ["text", "shape", "image"]
    assert [layer.layer_id for layer in design.layers] == [7, 2, 9]
    headline = design.layers[0]
    assert (headline.transform.x, headline.transform.width) == (50, 900)
    assert headline.transform.opacity == 0.8
    assert headline.z_index == 3


def test_convert_template_keeps_legacy_labels(tmp_path) -> None:
    """Category, tags and size should be carried in custom properties."""
    converter = _sample_converter(tmp_path)
    record = sample_template(category="business", tags="card", size="A4")

    design = converter.convert_template(record)

    assert dict(design.data.custom_properties) == {
        "category": "business",
        "tags": "card",
        "size": "A4",
    }
    assert design.description == "Category: business | Tags: card"


def test_convert_template_is_deterministic(tmp_path) -> None:
    """Converting the same record twice should yield equal designs."""
    converter = _sample_converter(tmp_path)

    first = converter.convert_template(sample_template())
    second = converter.convert_template(sample_template())

    assert first == second


def test_convert_template_raises_for_malformed_source(tmp_path) -> None:
    """Invalid JSON should fail the record with its template id."""
    converter = _sample_converter(tmp_path)

    with pytest.raises(MalformedSourceError) as error_info:
        converter.convert_template(sample_template(template_id=5, source_json="{invalid"))

    assert error_info.value.template_id == 5


def test_parse_legacy_timestamp_rejects_invalid_values() -> None:
    """Non ISO-8601 timestamps should be reported as malformed."""
    with pytest.raises(MalformedSourceError):
        parse_legacy_timestamp("yesterday", 3)


def test_build_description_returns_none_without_labels() -> None:
    """Descriptions should be absent when neither label is set."""
    description = build_description(None, "")

    assert description is None
