"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import MigrationConfig
from core.errors import MigrationConfigError


def test_from_env_defaults_target_to_source(monkeypatch: pytest.MonkeyPatch) -> None:
    """The destination URL should default to the source URL."""
    monkeypatch.setenv("DESIGN_MIGRATE_SOURCE_URL", "sqlite:///legacy.db")
    monkeypatch.delenv("DESIGN_MIGRATE_TARGET_URL", raising=False)

    config = MigrationConfig.from_env()

    assert config.target_url == "sqlite:///legacy.db"


def test_from_env_resolves_asset_directories(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Asset subdirectories should derive from the asset root."""
    monkeypatch.setenv("DESIGN_MIGRATE_ASSET_ROOT", str(tmp_path))

    config = MigrationConfig.from_env()

    assert config.templates_dir == tmp_path.resolve() / "templates" / "all"
    assert config.cache_dir == tmp_path.resolve() / "cache"
    assert config.converted_assets_dir == tmp_path.resolve() / "converted_assets"


def test_from_env_raises_for_blank_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a blank database URL."""
    monkeypatch.setenv("DESIGN_MIGRATE_SOURCE_URL", "   ")

    with pytest.raises(MigrationConfigError):
        MigrationConfig.from_env()


def test_from_env_raises_for_invalid_table_name(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject table names that are not identifiers."""
    monkeypatch.setenv("DESIGN_MIGRATE_TARGET_TABLE", "designs; drop")

    with pytest.raises(MigrationConfigError):
        MigrationConfig.from_env()
