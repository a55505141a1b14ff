"""Unit tests for legacy document parsing."""

from __future__ import annotations

import pytest

from convert.legacy_document import parse_legacy_scene
from core.errors import MalformedSourceError
from tests.fixture_paths import fixture_path
from tests.legacy_records import sample_template


def test_parse_legacy_scene_raises_for_invalid_json() -> None:
    """Invalid JSON should raise with the failing template id."""
    record = sample_template(template_id=42, source_json="{invalid")

    with pytest.raises(MalformedSourceError) as error_info:
        parse_legacy_scene(record)

    assert error_info.value.template_id == 42


def test_parse_legacy_scene_raises_for_missing_source() -> None:
    """A missing source should be reported as malformed."""
    record = sample_template(source_json=None)

    with pytest.raises(MalformedSourceError):
        parse_legacy_scene(record)


def test_parse_legacy_scene_raises_for_non_object_document() -> None:
    """A JSON array document should be rejected."""
    record = sample_template(source_json="[1, 2]")

    with pytest.raises(MalformedSourceError):
        parse_legacy_scene(record)


def test_parse_legacy_scene_defaults_canvas_size() -> None:
    """Documents without sz should use the default canvas."""
    record = sample_template(source_json='{"s": []}')

    scene = parse_legacy_scene(record)

    assert scene.canvas_size == ("1920", "1080")
    assert scene.background is None
    assert scene.elements == ()


def test_parse_legacy_scene_uses_first_scene_only() -> None:
    """Only elements of the first scene should be parsed."""
    source_json = fixture_path("legacy/mixed_scene.json").read_text(encoding="utf-8")
    record = sample_template(source_json=source_json)

    scene = parse_legacy_scene(record)

    assert scene.canvas_size == ("1000", "500")
    assert scene.background is not None and scene.background.color == "#336699"
    assert len(scene.elements) == 5


def test_parse_legacy_scene_keeps_non_mapping_elements_as_empty() -> None:
    """Non-object elements should parse without properties."""
    record = sample_template(source_json='{"s": [{"e": ["oops"]}]}')

    scene = parse_legacy_scene(record)

    assert scene.elements[0].props is None


def test_parse_legacy_scene_rejects_malformed_size() -> None:
    """A scalar canvas size should be rejected."""
    record = sample_template(source_json='{"sz": 800}')

    with pytest.raises(MalformedSourceError):
        parse_legacy_scene(record)
