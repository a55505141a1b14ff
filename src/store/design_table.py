"""Destination table for converted designs.

This module creates the converted designs table on demand, upserts designs
by id, and reads stored designs back for export. Upserts use the database
dialect's native conflict clause so re-running a migration overwrites rows
instead of duplicating them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Engine,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    select,
)
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.base import Executable

from core.constants import TARGET_TABLE_NAME
from core.errors import MigrationStoreError
from core.logging_config import get_logger
from core.types import Design, StoredDesign
from store.design_payload import design_data_to_payload, layers_to_payload

_LOGGER = get_logger(__name__)
_PRESERVED_ON_CONFLICT = ("id", "createdAt")


def build_designs_table(metadata: MetaData, table_name: str = TARGET_TABLE_NAME) -> Table:
    """Describe the converted designs table.

    Args:
        metadata: Metadata collection to register the table in.
        table_name: Destination table name.

    Returns:
        SQLAlchemy table definition.
    """
    return Table(
        table_name,
        metadata,
        Column("id", String(255), primary_key=True),
        Column("name", String(255), nullable=False),
        Column("title", String(255), nullable=False),
        Column("description", Text),
        Column("data", JSON, nullable=False),
        Column("layers", JSON),
        Column("thumbnail", String(500)),
        Column("width", Integer, nullable=False),
        Column("height", Integer, nullable=False),
        Column("userId", String(255), nullable=False, index=True),
        Column("projectId", String(255)),
        Column("isPublic", Boolean, default=True, index=True),
        Column("createdAt", DateTime, nullable=False, index=True),
        Column("updatedAt", DateTime, nullable=False),
        Column("originalId", Integer),
    )


class DesignTable:
    """Read/write access to the converted designs table."""

    def __init__(self, engine: Engine, table_name: str = TARGET_TABLE_NAME) -> None:
        self._engine = engine
        self._metadata = MetaData()
        self._table = build_designs_table(self._metadata, table_name)

    def ensure_schema(self) -> None:
        """Create the table and its indexes if absent.

        Raises:
            MigrationStoreError: If the schema cannot be created.
        """
        try:
            self._metadata.create_all(self._engine, checkfirst=True)
        except SQLAlchemyError as error:
            raise MigrationStoreError(
                f"Failed to create table '{self._table.name}': {error}. "
                "Check DESIGN_MIGRATE_TARGET_URL and database permissions."
            ) from error
        _LOGGER.info("design_table_ready", table=self._table.name)

    def upsert(self, design: Design, original_id: int | None) -> None:
        """Insert a design or overwrite the stored row with the same id.

        The stored creation timestamp is kept on conflict.

        Args:
            design: Converted design.
            original_id: Legacy template id the design came from.

        Raises:
            MigrationStoreError: If the write fails.
        """
        statement = self._build_upsert(_design_row(design, original_id))
        try:
            with self._engine.begin() as connection:
                connection.execute(statement)
        except SQLAlchemyError as error:
            raise MigrationStoreError(
                f"Failed to save design '{design.design_id}' into '{self._table.name}': {error}."
            ) from error

    def fetch_all(self) -> list[StoredDesign]:
        """Read all stored designs ordered by id.

        Raises:
            MigrationStoreError: If the table cannot be read.
        """
        statement = select(self._table).order_by(self._table.c.id)
        try:
            with self._engine.connect() as connection:
                rows = connection.execute(statement).mappings().all()
        except SQLAlchemyError as error:
            raise MigrationStoreError(
                f"Failed to read designs from '{self._table.name}': {error}. "
                "Run the convert command before exporting."
            ) from error
        return [stored_design_from_row(row) for row in rows]

    def _build_upsert(self, values: Mapping[str, object]) -> Executable:
        update_columns = [name for name in values if name not in _PRESERVED_ON_CONFLICT]
        dialect_name = self._engine.dialect.name
        if dialect_name == "mysql":
            mysql_statement = mysql.insert(self._table).values(**values)
            return mysql_statement.on_duplicate_key_update(
                {name: mysql_statement.inserted[name] for name in update_columns}
            )
        if dialect_name == "postgresql":
            pg_statement = postgresql.insert(self._table).values(**values)
            return pg_statement.on_conflict_do_update(
                index_elements=[self._table.c.id],
                set_={name: pg_statement.excluded[name] for name in update_columns},
            )
        if dialect_name == "sqlite":
            sqlite_statement = sqlite.insert(self._table).values(**values)
            return sqlite_statement.on_conflict_do_update(
                index_elements=[self._table.c.id],
                set_={name: sqlite_statement.excluded[name] for name in update_columns},
            )
        raise MigrationStoreError(
            f"Unsupported database dialect '{dialect_name}' for design upserts. "
            "Use MySQL, PostgreSQL, or SQLite."
        )


def _design_row(design: Design, original_id: int | None) -> dict[str, object]:
    return {
        "id": design.design_id,
        "name": design.name,
        "title": design.title,
        "description": design.description,
        "data": design_data_to_payload(design.data),
        "layers": layers_to_payload(design.layers),
        "thumbnail": design.thumbnail,
        "width": design.width,
        "height": design.height,
        "userId": design.user_id,
        "projectId": design.project_id,
        "isPublic": design.is_public,
        "createdAt": _to_naive_utc(design.created_at),
        "updatedAt": _to_naive_utc(design.updated_at),
        "originalId": original_id,
    }


def stored_design_from_row(row: Mapping[str, Any]) -> StoredDesign:
    """Map one destination row onto a ``StoredDesign``."""
    data = row["data"]
    return StoredDesign(
        design_id=str(row["id"]),
        name=str(row["name"]),
        title=str(row["title"]),
        description=row["description"],
        data=data if isinstance(data, dict) else {},
        layers=row["layers"],
        thumbnail=row["thumbnail"],
        width=int(row["width"]),
        height=int(row["height"]),
        user_id=str(row["userId"]),
        project_id=row["projectId"],
        is_public=bool(row["isPublic"]),
        created_at=_to_aware_utc(row["createdAt"]),
        updated_at=_to_aware_utc(row["updatedAt"]),
        original_id=row["originalId"],
    )


def _to_naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _to_aware_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
