"""Legacy template row source.

This module reads rows of the legacy template table in ascending id order
and maps them onto ``LegacyTemplate`` records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import Column, Engine, Integer, MetaData, String, Table, Text, select
from sqlalchemy.exc import SQLAlchemyError

from core.constants import LEGACY_TABLE_NAME
from core.errors import MigrationStoreError
from core.logging_config import get_logger
from core.types import LegacyTemplate

_LOGGER = get_logger(__name__)


def build_legacy_table(metadata: MetaData, table_name: str = LEGACY_TABLE_NAME) -> Table:
    """Describe the legacy template table.

    Args:
        metadata: Metadata collection to register the table in.
        table_name: Legacy table name.

    Returns:
        SQLAlchemy table definition.
    """
    return Table(
        table_name,
        metadata,
        Column("id", Integer, primary_key=True),
        Column("title", String(255)),
        Column("hash", String(255)),
        Column("size", String(64)),
        Column("cat", String(255)),
        Column("tags", Text),
        Column("src", Text),
        Column("created", String(64)),
        Column("modified", String(64)),
        Column("public", String(8)),
    )


class LegacyTemplateSource:
    """Read-only access to legacy template rows."""

    def __init__(self, engine: Engine, table_name: str = LEGACY_TABLE_NAME) -> None:
        self._engine = engine
        self._table = build_legacy_table(MetaData(), table_name)

    def fetch_all(self, limit: int | None = None) -> list[LegacyTemplate]:
        """Fetch legacy templates ordered by ascending id.

        Args:
            limit: Optional maximum number of rows.

        Returns:
            Legacy template records.

        Raises:
            MigrationStoreError: If the legacy database cannot be read.
        """
        statement = select(self._table).order_by(self._table.c.id)
        if limit is not None:
            statement = statement.limit(limit)
        try:
            with self._engine.connect() as connection:
                rows = connection.execute(statement).mappings().all()
        except SQLAlchemyError as error:
            raise MigrationStoreError(
                f"Failed to read legacy templates from '{self._table.name}': {error}. "
                "Check DESIGN_MIGRATE_SOURCE_URL and database availability."
            ) from error
        _LOGGER.info("legacy_templates_fetched", table=self._table.name, count=len(rows), limit=limit)
        return [legacy_template_from_row(row) for row in rows]


def legacy_template_from_row(row: Mapping[str, Any]) -> LegacyTemplate:
    """Map one legacy table row onto a ``LegacyTemplate``.

    Driver-native datetimes are rendered as ISO-8601 strings.
    """
    return LegacyTemplate(
        template_id=int(row["id"]),
        title=_optional_text(row.get("title")),
        hash=_optional_text(row.get("hash")),
        size=_optional_text(row.get("size")),
        category=_optional_text(row.get("cat")),
        tags=_optional_text(row.get("tags")),
        source_json=_optional_text(row.get("src")),
        created_at=_timestamp_text(row.get("created")),
        modified_at=_timestamp_text(row.get("modified")),
        is_public="" if row.get("public") is None else str(row.get("public")),
    )


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _timestamp_text(value: object) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return _optional_text(value)
