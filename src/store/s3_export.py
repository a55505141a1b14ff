"""S3 upload helpers for design exports.

Design files upload before the manifest so readers polling the prefix
never see a manifest that lists files not yet present.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any

from core.config import MigrationConfig
from core.constants import MANIFEST_FILE_NAME
from core.errors import MigrationDependencyError, MigrationExportError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def create_s3_client(config: MigrationConfig) -> Any:
    """Create a boto3 S3 client for export uploads.

    Args:
        config: Runtime config with optional profile and region.

    Returns:
        Boto3 S3 client.

    Raises:
        MigrationDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise MigrationDependencyError(
            "S3 export requires boto3, but it is not installed. "
            "Install boto3 to upload exports to s3:// destinations."
        ) from error
    session = boto3.session.Session(
        profile_name=config.s3_profile or None,
        region_name=config.s3_region or None,
    )
    return session.client("s3")


def upload_directory(s3_client: Any, export_dir: Path, bucket: str, prefix: str) -> int:
    """Upload an export directory under an S3 prefix.

    Args:
        s3_client: Boto3 S3 client.
        export_dir: Local export directory.
        bucket: Destination bucket.
        prefix: Destination key prefix.

    Returns:
        Number of uploaded files.

    Raises:
        MigrationExportError: If an upload fails.
    """
    export_files = _ordered_export_files(export_dir)
    key_prefix = prefix.rstrip("/")
    for local_file in export_files:
        object_key = f"{key_prefix}/{local_file.relative_to(export_dir).as_posix()}"
        try:
            s3_client.upload_file(
                str(local_file),
                bucket,
                object_key,
                ExtraArgs={"ContentType": _content_type(local_file)},
            )
        except Exception as error:
            raise MigrationExportError(
                f"Failed to upload export file {local_file} to s3://{bucket}/{object_key}: "
                f"{error}. Check AWS credentials and retry export."
            ) from error
        _LOGGER.debug("export_file_uploaded", object_key=object_key)
    return len(export_files)


def _ordered_export_files(export_dir: Path) -> list[Path]:
    files = [path for path in sorted(export_dir.rglob("*")) if path.is_file()]
    return sorted(files, key=lambda path: path.name == MANIFEST_FILE_NAME)


def _content_type(local_file: Path) -> str:
    guessed_type, _ = mimetypes.guess_type(local_file.name)
    return guessed_type or "application/octet-stream"
