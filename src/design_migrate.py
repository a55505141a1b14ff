"""Public SDK surface for the design migration.

This module provides a stable import path for scripted migrations.
It re-exports the primary client, typed options, and conversion engine.
"""

from __future__ import annotations

from assets.asset_resolver import AssetResolver, ResolvedAsset
from convert.template_converter import TemplateConverter
from core.config import MigrationConfig
from core.types import (
    ConversionSummary,
    ConvertOptions,
    Design,
    ExportOptions,
    ExportSummary,
    LegacyTemplate,
)
from migrate.client import MigrationClient

__all__ = [
    "AssetResolver",
    "ConversionSummary",
    "ConvertOptions",
    "Design",
    "ExportOptions",
    "ExportSummary",
    "LegacyTemplate",
    "MigrationClient",
    "MigrationConfig",
    "ResolvedAsset",
    "TemplateConverter",
]
