"""Runtime configuration model for the design migration.

This module owns all environment variable parsing and validation.
Row source, destination table, asset resolver and exporter consume a
typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    CACHE_DIR_NAME,
    CONVERTED_ASSETS_DIR_NAME,
    DEFAULT_ASSET_ROOT,
    DEFAULT_EXPORT_DIR_NAME,
    DEFAULT_SOURCE_URL,
    LEGACY_TABLE_NAME,
    TARGET_TABLE_NAME,
    TEMPLATES_DIR_PARTS,
)
from core.errors import MigrationConfigError


@dataclass(frozen=True)
class MigrationConfig:
    """Validated runtime configuration.

    Attributes:
        source_url: SQLAlchemy URL of the legacy template database.
        target_url: SQLAlchemy URL holding the converted designs table.
        asset_root: Root directory holding legacy and converted assets.
        export_dir: Directory that receives exported design files.
        legacy_table: Name of the legacy template table.
        target_table: Name of the converted designs table.
        s3_region: Optional default AWS region for S3 uploads.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    source_url: str
    target_url: str
    asset_root: Path
    export_dir: Path
    legacy_table: str = LEGACY_TABLE_NAME
    target_table: str = TARGET_TABLE_NAME
    s3_region: str | None = None
    s3_profile: str | None = None

    @classmethod
    def from_env(cls) -> "MigrationConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            MigrationConfigError: If environment values are invalid.
        """
        source_url = _parse_url("DESIGN_MIGRATE_SOURCE_URL", DEFAULT_SOURCE_URL)
        target_url = _parse_url("DESIGN_MIGRATE_TARGET_URL", source_url)
        asset_root_value = os.getenv("DESIGN_MIGRATE_ASSET_ROOT", str(DEFAULT_ASSET_ROOT))
        export_dir_value = os.getenv("DESIGN_MIGRATE_EXPORT_DIR", DEFAULT_EXPORT_DIR_NAME)
        return cls(
            source_url=source_url,
            target_url=target_url,
            asset_root=Path(asset_root_value).expanduser().resolve(),
            export_dir=Path(export_dir_value).expanduser().resolve(),
            legacy_table=_parse_table_name("DESIGN_MIGRATE_LEGACY_TABLE", LEGACY_TABLE_NAME),
            target_table=_parse_table_name("DESIGN_MIGRATE_TARGET_TABLE", TARGET_TABLE_NAME),
            s3_region=os.getenv("DESIGN_MIGRATE_S3_REGION"),
            s3_profile=os.getenv("DESIGN_MIGRATE_S3_PROFILE"),
        )

    @property
    def templates_dir(self) -> Path:
        """Base directory of legacy per-template assets."""
        return self.asset_root.joinpath(*TEMPLATES_DIR_PARTS)

    @property
    def cache_dir(self) -> Path:
        """Base directory of legacy cached assets."""
        return self.asset_root / CACHE_DIR_NAME

    @property
    def converted_assets_dir(self) -> Path:
        """Flat destination directory for copied assets."""
        return self.asset_root / CONVERTED_ASSETS_DIR_NAME


def _parse_url(env_name: str, default: str) -> str:
    """Read a database URL and reject blank values.

    Args:
        env_name: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        Database URL string.

    Raises:
        MigrationConfigError: If the variable is set but blank.
    """
    raw_value = os.getenv(env_name)
    if raw_value is None:
        return default
    if not raw_value.strip():
        raise MigrationConfigError(
            f"Invalid {env_name} value: expected a database URL, got an empty string. "
            f"Unset {env_name} or set it to a SQLAlchemy URL such as mysql+mysqlconnector://..."
        )
    return raw_value.strip()


def _parse_table_name(env_name: str, default: str) -> str:
    raw_value = os.getenv(env_name, default).strip()
    if not raw_value.replace("_", "").isalnum():
        raise MigrationConfigError(
            f"Invalid {env_name} value: expected an identifier, got '{raw_value}'. "
            "Use letters, digits and underscores only."
        )
    return raw_value
