"""Unit tests for the legacy template row source."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import create_engine

from core.errors import MigrationStoreError
from store.legacy_rows import LegacyTemplateSource, legacy_template_from_row
from tests.legacy_records import create_legacy_database, legacy_row


def test_fetch_all_orders_by_id_and_applies_limit(tmp_path) -> None:
    """Rows should come back in ascending id order up to the limit."""
    database_url = create_legacy_database(
        tmp_path / "legacy.db", [legacy_row(3), legacy_row(1), legacy_row(2)]
    )
    source = LegacyTemplateSource(create_engine(database_url))

    records = source.fetch_all(limit=2)

    assert [record.template_id for record in records] == [1, 2]


def test_fetch_all_maps_legacy_columns(tmp_path) -> None:
    """Legacy column names should map onto record fields."""
    database_url = create_legacy_database(tmp_path / "legacy.db", [legacy_row(7)])
    source = LegacyTemplateSource(create_engine(database_url))

    record = source.fetch_all()[0]

    assert record.hash == "hash7"
    assert record.category == "business"
    assert record.tags == "card,print"
    assert record.is_public == "1"
    assert record.created_at == "2020-01-01 00:00:00"


def test_fetch_all_raises_for_missing_table(tmp_path) -> None:
    """A missing legacy table should surface as a store error."""
    source = LegacyTemplateSource(create_engine(f"sqlite:///{tmp_path / 'empty.db'}"))

    with pytest.raises(MigrationStoreError):
        source.fetch_all()


def test_legacy_template_from_row_renders_native_values() -> None:
    """Driver datetimes, bytes and integer flags should become text."""
    row = legacy_row(
        4,
        created=datetime(2019, 3, 4, 5, 6, 7),
        src=b'{"s": []}',
        public=1,
        title=None,
    )

    record = legacy_template_from_row(row)

    assert record.created_at == "2019-03-04T05:06:07"
    assert record.source_json == '{"s": []}'
    assert record.is_public == "1"
    assert record.title is None
