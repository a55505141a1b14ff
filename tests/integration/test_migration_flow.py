"""Integration test for a convert then export migration run."""

from __future__ import annotations

import json

from core.config import MigrationConfig
from core.types import ConvertOptions, ExportOptions
from migrate.client import MigrationClient
from tests.fixture_paths import fixture_path
from tests.legacy_records import create_legacy_database, legacy_row


def test_convert_then_export_round_trip(tmp_path) -> None:
    """Converted designs should export with copied assets and a manifest."""
    asset_root = tmp_path / "assets"
    logo_path = asset_root / "templates" / "all" / "hash2" / "logo.png"
    logo_path.parent.mkdir(parents=True)
    logo_path.write_bytes(b"png")
    mixed_source = fixture_path("legacy/mixed_scene.json").read_text(encoding="utf-8")
    database_url = create_legacy_database(
        tmp_path / "legacy.db",
        [
            legacy_row(1, cat=None),
            legacy_row(2, src=mixed_source, public="0"),
            legacy_row(3, src="{invalid"),
        ],
    )
    config = MigrationConfig(
        source_url=database_url,
        target_url=database_url,
        asset_root=asset_root,
        export_dir=tmp_path / "export",
    )
    client = MigrationClient(config)

    conversion = client.convert(ConvertOptions())
    rerun = client.convert(ConvertOptions())
    export = client.export(ExportOptions())

    manifest = json.loads((tmp_path / "export" / "designs_manifest.json").read_text(encoding="utf-8"))
    mixed_design = json.loads((tmp_path / "export" / "hash2.json").read_text(encoding="utf-8"))
    image_layers = [layer for layer in mixed_design["layers"] if layer["type"] == "image"]
    assert (conversion.converted_count, conversion.error_count) == (2, 1)
    assert rerun.converted_count == 2
    assert export.exported_count == 2
    assert manifest["totalDesigns"] == 2
    assert [entry["id"] for entry in manifest["designs"]] == ["hash1", "hash2"]
    assert "category" not in manifest["designs"][0]
    assert manifest["designs"][1]["isPublic"] is False
    assert image_layers[0]["properties"]["src"] == "/converted_assets/hash2_logo.png"
    assert (asset_root / "converted_assets" / "hash2_logo.png").read_bytes() == b"png"
    assert mixed_design["width"] == 1000
