"""Legacy template to design conversion.

This module converts one legacy template row into a normalized ``Design``.
Conversion is deterministic for identical input and asset state; the clock
is only read for templates without legacy timestamps.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from assets.asset_resolver import AssetResolver
from convert.colors import convert_background
from convert.element_conversion import ElementConverter
from convert.geometry import parse_canvas_dimension
from convert.legacy_document import parse_legacy_scene
from core.constants import (
    DEFAULT_BACKGROUND_COLOR,
    LEGACY_IMPORT_USER_ID,
    LEGACY_PUBLIC_FLAG,
    THUMBNAIL_PATH_TEMPLATE,
)
from core.errors import MalformedSourceError, TemplateConversionError
from core.types import Design, DesignData, Layer, LegacyScene, LegacyTemplate


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TemplateConverter:
    """Convert legacy templates into designs.

    Image references are resolved through the injected ``AssetResolver``,
    exactly once per image element.
    """

    def __init__(
        self,
        resolver: AssetResolver,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._resolver = resolver
        self._clock = clock

    def convert_template(self, record: LegacyTemplate) -> Design:
        """Convert one legacy template.

        Args:
            record: Legacy template row.

        Returns:
            Converted design.

        Raises:
            MalformedSourceError: If the source JSON or a timestamp is invalid.
            TemplateConversionError: If any other value of the record cannot
                be converted.
        """
        try:
            return self._build_design(record)
        except (ArithmeticError, TypeError, ValueError) as error:
            raise TemplateConversionError(
                f"Failed to convert template {record.template_id}: "
                f"{type(error).__name__}: {error}",
                record.template_id,
            ) from error

    def _build_design(self, record: LegacyTemplate) -> Design:
        scene = parse_legacy_scene(record)
        width = parse_canvas_dimension(scene.canvas_size[0])
        height = parse_canvas_dimension(scene.canvas_size[1])
        created_at, updated_at = self._timestamps(record)
        title = record.title or f"Template {record.template_id}"
        return Design(
            design_id=record.hash or f"template_{record.template_id}",
            name=title,
            title=title,
            description=build_description(record.category, record.tags),
            data=_design_data(record, scene),
            layers=self._convert_layers(record, scene, width, height),
            thumbnail=_thumbnail_path(record.hash),
            width=width,
            height=height,
            user_id=LEGACY_IMPORT_USER_ID,
            project_id=None,
            is_public=record.is_public == LEGACY_PUBLIC_FLAG,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _convert_layers(
        self,
        record: LegacyTemplate,
        scene: LegacyScene,
        width: int,
        height: int,
    ) -> tuple[Layer, ...]:
        converter = ElementConverter(self._resolver, width, height, record.hash)
        layers: list[Layer] = []
        for index, element in enumerate(scene.elements):
            layer = converter.convert(element, index)
            if layer is not None:
                layers.append(layer)
        return tuple(layers)

    def _timestamps(self, record: LegacyTemplate) -> tuple[datetime, datetime]:
        legacy_created = parse_legacy_timestamp(record.created_at, record.template_id)
        legacy_modified = parse_legacy_timestamp(record.modified_at, record.template_id)
        now = self._clock()
        created_at = legacy_created or now
        updated_at = legacy_modified or legacy_created or now
        return created_at, updated_at


def build_description(category: str | None, tags: str | None) -> str | None:
    """Join category and tags into a description, None when both are absent."""
    parts: list[str] = []
    if category:
        parts.append(f"Category: {category}")
    if tags:
        parts.append(f"Tags: {tags}")
    return " | ".join(parts) or None


def parse_legacy_timestamp(raw_value: str | None, template_id: int) -> datetime | None:
    """Parse a legacy ISO-8601 timestamp into an aware UTC datetime.

    Naive values are treated as UTC.

    Raises:
        MalformedSourceError: If the value is not ISO-8601.
    """
    if not raw_value:
        return None
    try:
        parsed = datetime.fromisoformat(raw_value.strip())
    except ValueError as error:
        raise MalformedSourceError(
            f"Invalid timestamp '{raw_value}' for template {template_id}: expected ISO-8601",
            template_id,
        ) from error
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _design_data(record: LegacyTemplate, scene: LegacyScene) -> DesignData:
    raw_background = scene.background.color if scene.background else None
    return DesignData(
        background_color=raw_background or DEFAULT_BACKGROUND_COLOR,
        background=convert_background(scene.background),
        custom_properties=_custom_properties(record),
    )


def _custom_properties(record: LegacyTemplate) -> dict[str, str]:
    labels = {"category": record.category, "tags": record.tags, "size": record.size}
    return {key: value for key, value in labels.items() if value}


def _thumbnail_path(template_hash: str | None) -> str | None:
    if not template_hash:
        return None
    return THUMBNAIL_PATH_TEMPLATE.format(hash=template_hash)
