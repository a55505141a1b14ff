"""Design migration exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Per-record conversion failures derive from ``TemplateConversionError`` so
the batch driver can count them without stopping the run.
"""

from __future__ import annotations


class DesignMigrateError(Exception):
    """Base exception for all migration failures."""


class MigrationConfigError(DesignMigrateError):
    """Raised for invalid runtime configuration."""


class MigrationDependencyError(DesignMigrateError):
    """Raised when an optional runtime dependency is missing."""


class TemplateConversionError(DesignMigrateError):
    """Raised when one legacy template cannot be converted."""

    def __init__(self, message: str, template_id: int | None = None) -> None:
        super().__init__(message)
        self.template_id = template_id


class MalformedSourceError(TemplateConversionError):
    """Raised when a legacy template's source JSON cannot be parsed."""


class UnresolvableAssetError(DesignMigrateError):
    """Raised when a legacy asset reference cannot be located.

    Attributes:
        source_ref: Raw legacy asset reference.
        reason: Short machine-readable reason.
    """

    def __init__(self, source_ref: str | None, reason: str) -> None:
        super().__init__(f"Cannot resolve asset '{source_ref}': {reason}")
        self.source_ref = source_ref
        self.reason = reason


class AssetCopyError(DesignMigrateError):
    """Raised when copying a located asset into the asset store fails."""


class MigrationStoreError(DesignMigrateError):
    """Raised for legacy source and destination table failures."""


class MigrationExportError(DesignMigrateError):
    """Raised for design export failures."""
