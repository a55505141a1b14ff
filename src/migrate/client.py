"""Python SDK for migration runs.

This module exposes the convert and export workflows behind one client
bound to a runtime configuration.
"""

from __future__ import annotations

from core.config import MigrationConfig
from core.types import ConversionSummary, ConvertOptions, ExportOptions, ExportSummary
from migrate.pipeline import convert_templates, export_designs


class MigrationClient:
    """Primary SDK entry point for migration workflows."""

    def __init__(self, config: MigrationConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or MigrationConfig.from_env()

    @property
    def config(self) -> MigrationConfig:
        """Runtime configuration used by this client."""
        return self._config

    def convert(self, options: ConvertOptions | None = None) -> ConversionSummary:
        """Convert legacy templates into the designs table.

        Raises:
            MigrationStoreError: If the legacy source or destination table fails.
        """
        return convert_templates(options or ConvertOptions(), self._config)

    def export(self, options: ExportOptions | None = None) -> ExportSummary:
        """Export stored designs into JSON files and a manifest.

        Raises:
            MigrationStoreError: If the designs table cannot be read.
            MigrationExportError: If export files cannot be written or uploaded.
        """
        return export_designs(options or ExportOptions(), self._config)
