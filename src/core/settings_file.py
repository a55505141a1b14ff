"""YAML settings overrides for migration runs.

This module loads a YAML settings file and applies its values on top of an
environment-derived ``MigrationConfig``. Unknown keys are rejected so typos
fail loudly instead of silently migrating against the wrong database.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.config import MigrationConfig
from core.errors import MigrationConfigError

_STRING_FIELDS = (
    "source_url",
    "target_url",
    "legacy_table",
    "target_table",
    "s3_region",
    "s3_profile",
)
_PATH_FIELDS = ("asset_root", "export_dir")
_OPTIONAL_FIELDS = ("s3_region", "s3_profile")


def load_settings_file(settings_path: str, config: MigrationConfig) -> MigrationConfig:
    """Apply a YAML settings file on top of an existing config.

    Args:
        settings_path: File path to a YAML mapping of config fields.
        config: Base configuration, usually from ``MigrationConfig.from_env``.

    Returns:
        Config with file values applied.

    Raises:
        MigrationConfigError: If the file is missing, invalid, or has unknown keys.
    """
    payload = _load_yaml_payload(settings_path)
    settings = _expect_mapping(payload, settings_path)
    _validate_keys(settings, settings_path)
    overrides: dict[str, object] = {}
    for field_name in _STRING_FIELDS:
        if field_name in settings:
            overrides[field_name] = _expect_string(settings, field_name)
    for field_name in _PATH_FIELDS:
        if field_name in settings:
            raw_path = cast(str, _expect_string(settings, field_name))
            overrides[field_name] = Path(raw_path).expanduser().resolve()
    return replace(config, **overrides)


def _load_yaml_payload(settings_path: str) -> object:
    settings_file = Path(settings_path).expanduser().resolve()
    if not settings_file.exists():
        raise MigrationConfigError(
            f"Settings file does not exist at {settings_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(settings_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise MigrationConfigError(
            f"Failed to read settings at {settings_file}: {error}. "
            "Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise MigrationConfigError(
            f"Failed to parse YAML settings at {settings_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    return payload


def _expect_mapping(value: object, settings_path: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        return cast(Mapping[str, object], value)
    raise MigrationConfigError(
        f"Invalid settings file {settings_path}: expected a mapping, got {type(value).__name__}."
    )


def _expect_string(settings: Mapping[str, object], field_name: str) -> str | None:
    raw_value = settings[field_name]
    if raw_value is None and field_name in _OPTIONAL_FIELDS:
        return None
    if isinstance(raw_value, str) and raw_value.strip():
        return raw_value.strip()
    raise MigrationConfigError(
        f"Settings field '{field_name}' must be a non-empty string when provided."
    )


def _validate_keys(settings: Mapping[str, object], settings_path: str) -> None:
    allowed_keys = set(_STRING_FIELDS) | set(_PATH_FIELDS)
    unknown_keys = sorted(str(key) for key in set(settings) - allowed_keys)
    if unknown_keys:
        raise MigrationConfigError(
            f"Settings file {settings_path} contains unknown fields: {', '.join(unknown_keys)}."
        )
