"""Design export helpers for stored designs.

This module writes one JSON file per stored design plus an aggregate
manifest and a README describing the export layout. A design that fails
to serialize is logged and skipped so the remaining designs still export.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Sequence

from core.constants import (
    EXPORT_PROGRESS_INTERVAL,
    MANIFEST_FILE_NAME,
    MANIFEST_VERSION,
    README_FILE_NAME,
)
from core.errors import MigrationExportError
from core.logging_config import get_logger
from core.types import DesignSummary, ExportSummary, StoredDesign
from store.design_payload import (
    build_design_summary,
    design_summary_to_payload,
    format_timestamp,
    stored_design_to_payload,
)

_LOGGER = get_logger(__name__)


def export_stored_designs(
    designs: Sequence[StoredDesign],
    export_dir: Path,
    exported_at: datetime | None = None,
) -> ExportSummary:
    """Export stored designs into individual files and a manifest.

    Args:
        designs: Stored designs in export order.
        export_dir: Destination directory, created when absent.
        exported_at: Export timestamp, defaults to now.

    Returns:
        Export summary with counts and manifest path.

    Raises:
        MigrationExportError: If the directory or manifest cannot be written.
    """
    export_time = exported_at or datetime.now(timezone.utc)
    _prepare_export_dir(export_dir)
    summaries: list[DesignSummary] = []
    failed_count = 0
    for design in designs:
        try:
            design_path = write_design_file(export_dir, design)
        except (OSError, TypeError, ValueError) as error:
            failed_count += 1
            _LOGGER.error("design_export_failed", design_id=design.design_id, error=str(error))
            continue
        summaries.append(build_design_summary(design, design_path.name))
        if len(summaries) % EXPORT_PROGRESS_INTERVAL == 0:
            _LOGGER.info("design_export_progress", exported_count=len(summaries))
    manifest_path = write_manifest(export_dir, summaries, export_time)
    write_readme(export_dir, len(summaries), export_time)
    _LOGGER.info(
        "designs_exported",
        export_dir=str(export_dir),
        exported_count=len(summaries),
        failed_count=failed_count,
    )
    return ExportSummary(
        export_dir=str(export_dir),
        manifest_path=str(manifest_path),
        exported_count=len(summaries),
        failed_count=failed_count,
    )


def write_design_file(export_dir: Path, design: StoredDesign) -> Path:
    """Write one design document to ``<id>.json``.

    Returns:
        Path of the written file.
    """
    design_path = export_dir / f"{design.design_id}.json"
    payload = stored_design_to_payload(design)
    design_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return design_path


def write_manifest(
    export_dir: Path,
    summaries: Sequence[DesignSummary],
    exported_at: datetime,
) -> Path:
    """Write the aggregate manifest of exported designs.

    Raises:
        MigrationExportError: If the manifest cannot be written.
    """
    manifest_payload = {
        "version": MANIFEST_VERSION,
        "exportDate": format_timestamp(exported_at),
        "totalDesigns": len(summaries),
        "designs": [design_summary_to_payload(summary) for summary in summaries],
    }
    manifest_path = export_dir / MANIFEST_FILE_NAME
    try:
        manifest_path.write_text(json.dumps(manifest_payload, indent=2) + "\n", encoding="utf-8")
    except OSError as error:
        raise MigrationExportError(
            f"Failed to write export manifest at {manifest_path}: {error}. "
            "Check directory permissions and retry export."
        ) from error
    return manifest_path


def write_readme(export_dir: Path, exported_count: int, exported_at: datetime) -> Path:
    """Write a README describing the export layout."""
    readme_path = export_dir / README_FILE_NAME
    readme_path.write_text(_render_readme(exported_count, exported_at), encoding="utf-8")
    return readme_path


def _prepare_export_dir(export_dir: Path) -> None:
    try:
        export_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise MigrationExportError(
            f"Failed to create export directory {export_dir}: {error}. "
            "Choose a writable --output-dir and retry export."
        ) from error


def _render_readme(exported_count: int, exported_at: datetime) -> str:
    return (
        "# Design Templates Export\n"
        "\n"
        f"This directory contains {exported_count} converted design templates.\n"
        "\n"
        "## Structure\n"
        "\n"
        f"- `{MANIFEST_FILE_NAME}` - Index of all exported designs\n"
        "- `{design-id}.json` - Individual design files\n"
        "\n"
        "Each design file holds the full design document: canvas data, ordered layers,\n"
        "dimensions, visibility, and ISO-8601 timestamps.\n"
        "\n"
        f"Generated on: {format_timestamp(exported_at)}\n"
    )
