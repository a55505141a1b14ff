"""Migration orchestration for convert and export runs.

This module wires the legacy row source, the conversion engine, the
destination table and the exporter. Records are processed one at a time;
per-record conversion failures are counted and the batch continues, while
store failures propagate and stop the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from assets.asset_resolver import AssetResolver
from convert.template_converter import TemplateConverter
from core.config import MigrationConfig
from core.errors import TemplateConversionError
from core.logging_config import get_logger
from core.s3_uri import parse_s3_uri
from core.types import (
    ConversionSummary,
    ConvertOptions,
    Design,
    ExportOptions,
    ExportSummary,
    LegacyTemplate,
)
from store.database import create_database_engine
from store.design_export import export_stored_designs
from store.design_table import DesignTable
from store.legacy_rows import LegacyTemplateSource
from store.s3_export import create_s3_client, upload_directory

_LOGGER = get_logger(__name__)


def process_template(converter: TemplateConverter, record: LegacyTemplate) -> Design | None:
    """Convert one record, returning None when its conversion fails.

    Args:
        converter: Template converter.
        record: Legacy template row.

    Returns:
        Converted design, or None after a logged per-record failure.
    """
    try:
        design = converter.convert_template(record)
    except TemplateConversionError as error:
        _LOGGER.error(
            "template_conversion_failed",
            template_id=record.template_id,
            error=str(error),
        )
        return None
    _LOGGER.info(
        "template_converted",
        template_id=record.template_id,
        design_id=design.design_id,
        title=record.title,
        layer_count=len(design.layers),
    )
    return design


def convert_batch(
    records: Sequence[LegacyTemplate],
    converter: TemplateConverter,
    table: DesignTable,
) -> ConversionSummary:
    """Convert and store records sequentially.

    Args:
        records: Legacy rows in processing order.
        converter: Template converter.
        table: Destination table, schema already ensured.

    Returns:
        Conversion counts for the batch.

    Raises:
        MigrationStoreError: If a converted design cannot be stored.
    """
    converted_count = 0
    failed_ids: list[int] = []
    for record in records:
        design = process_template(converter, record)
        if design is None:
            failed_ids.append(record.template_id)
            continue
        table.upsert(design, record.template_id)
        converted_count += 1
    return ConversionSummary(
        converted_count=converted_count,
        error_count=len(failed_ids),
        failed_template_ids=tuple(failed_ids),
    )


def convert_templates(options: ConvertOptions, config: MigrationConfig) -> ConversionSummary:
    """Run a full conversion from the legacy table into the designs table.

    Args:
        options: Convert options.
        config: Runtime configuration.

    Returns:
        Conversion counts.

    Raises:
        MigrationStoreError: If the legacy source or destination table fails.
    """
    source_engine = create_database_engine(config.source_url)
    target_engine = (
        source_engine
        if config.target_url == config.source_url
        else create_database_engine(config.target_url)
    )
    try:
        table = DesignTable(target_engine, config.target_table)
        table.ensure_schema()
        records = LegacyTemplateSource(source_engine, config.legacy_table).fetch_all(options.limit)
        _LOGGER.info("conversion_started", record_count=len(records), limit=options.limit)
        converter = TemplateConverter(AssetResolver.from_config(config))
        summary = convert_batch(records, converter, table)
    finally:
        source_engine.dispose()
        target_engine.dispose()
    _LOGGER.info(
        "conversion_completed",
        converted_count=summary.converted_count,
        error_count=summary.error_count,
        total_count=summary.total_count,
    )
    return summary


def export_designs(options: ExportOptions, config: MigrationConfig) -> ExportSummary:
    """Export stored designs to files and optionally upload them to S3.

    Args:
        options: Export options.
        config: Runtime configuration.

    Returns:
        Export summary.

    Raises:
        MigrationStoreError: If the designs table cannot be read.
        MigrationExportError: If files cannot be written or uploaded.
    """
    if options.output_uri:
        parse_s3_uri(options.output_uri)
    export_dir = (
        Path(options.output_dir).expanduser().resolve() if options.output_dir else config.export_dir
    )
    target_engine = create_database_engine(config.target_url)
    try:
        designs = DesignTable(target_engine, config.target_table).fetch_all()
    finally:
        target_engine.dispose()
    summary = export_stored_designs(designs, export_dir)
    if options.output_uri:
        _upload_export(export_dir, options.output_uri, config)
    return summary


def _upload_export(export_dir: Path, output_uri: str, config: MigrationConfig) -> None:
    location = parse_s3_uri(output_uri)
    s3_client = create_s3_client(config)
    uploaded_count = upload_directory(s3_client, export_dir, location.bucket, location.prefix)
    _LOGGER.info("export_uploaded", output_uri=output_uri, file_count=uploaded_count)
