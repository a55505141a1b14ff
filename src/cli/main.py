"""Design migration CLI entry points.
This module exposes the convert and export commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from core.config import MigrationConfig
from core.errors import DesignMigrateError
from core.settings_file import load_settings_file
from core.types import ConvertOptions, ExportOptions
from migrate.client import MigrationClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="design-migrate",
        description="Migrate legacy design templates into the Design schema",
    )
    parser.add_argument("--config", help="YAML settings file overriding environment values")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_convert_command(subparsers)
    _add_export_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the migration CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.config)
        if args.command == "convert":
            return _run_convert_command(client, args)
        if args.command == "export":
            return _run_export_command(client, args)
    except DesignMigrateError as error:
        print(f"migration_error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(config_path: str | None) -> MigrationClient:
    """Build SDK client with optional settings-file overrides.

    Args:
        config_path: Optional YAML settings path.

    Returns:
        Configured SDK client.
    """
    config = MigrationConfig.from_env()
    if config_path:
        config = load_settings_file(config_path, config)
    return MigrationClient(config)


def _run_convert_command(client: MigrationClient, args: argparse.Namespace) -> int:
    """Handle convert command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    summary = client.convert(ConvertOptions(limit=args.limit))
    print(f"converted_count={summary.converted_count}")
    print(f"error_count={summary.error_count}")
    print(f"total_count={summary.total_count}")
    return 0


def _run_export_command(client: MigrationClient, args: argparse.Namespace) -> int:
    """Handle export command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = ExportOptions(output_dir=args.output_dir, output_uri=args.output_uri)
    summary = client.export(options)
    print(f"exported_count={summary.exported_count}")
    print(f"failed_count={summary.failed_count}")
    print(f"manifest_path={summary.manifest_path}")
    return 0


def _add_convert_command(subparsers: Any) -> None:
    """Register convert subcommand."""
    parser = subparsers.add_parser("convert", help="Convert legacy templates into designs")
    parser.add_argument(
        "limit",
        nargs="?",
        type=_positive_int,
        help="Optional maximum number of legacy templates to convert",
    )


def _add_export_command(subparsers: Any) -> None:
    """Register export subcommand."""
    parser = subparsers.add_parser("export", help="Export stored designs to JSON files")
    parser.add_argument("--output-dir", help="Export directory, defaults to DESIGN_MIGRATE_EXPORT_DIR")
    parser.add_argument("--output-uri", help="Optional s3:// destination for the export")


def _positive_int(raw_value: str) -> int:
    try:
        value = int(raw_value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{raw_value}'") from error
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value
