"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import build_parser, main
from tests.legacy_records import create_legacy_database, legacy_row


def _write_settings(tmp_path: Path, database_url: str) -> Path:
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text(
        "\n".join(
            [
                f"source_url: {database_url}",
                f"asset_root: {tmp_path / 'assets'}",
                f"export_dir: {tmp_path / 'export'}",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return settings_path


def test_cli_convert_prints_counts(tmp_path, capsys) -> None:
    """CLI convert should print converted and error counts."""
    database_url = create_legacy_database(
        tmp_path / "legacy.db", [legacy_row(1), legacy_row(2, src="{invalid")]
    )
    settings_path = _write_settings(tmp_path, database_url)

    exit_code = main(["--config", str(settings_path), "convert"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "converted_count=1" in output
    assert "error_count=1" in output
    assert "total_count=2" in output


def test_cli_export_writes_manifest(tmp_path, capsys) -> None:
    """CLI export should write the manifest after a conversion."""
    database_url = create_legacy_database(tmp_path / "legacy.db", [legacy_row(1)])
    settings_path = _write_settings(tmp_path, database_url)
    main(["--config", str(settings_path), "convert", "1"])

    exit_code = main(["--config", str(settings_path), "export"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "exported_count=1" in output
    assert (tmp_path / "export" / "designs_manifest.json").exists()


def test_cli_reports_domain_errors(tmp_path, capsys) -> None:
    """Domain errors should print a message and exit non-zero."""
    exit_code = main(["--config", str(tmp_path / "missing.yaml"), "convert"])
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "migration_error=" in output


def test_parser_rejects_non_positive_limit() -> None:
    """The convert limit should be a positive integer."""
    parser = build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["convert", "0"])
