"""Legacy document parsing.

This module decodes a legacy template's serialized source into a typed
``LegacyScene``. Only the scene at ``LEGACY_SCENE_INDEX`` is converted;
later scenes are ignored.
"""

from __future__ import annotations

import json
from typing import Mapping, cast

from core.constants import DEFAULT_CANVAS_SIZE, LEGACY_SCENE_INDEX
from core.errors import MalformedSourceError
from core.types import LegacyBackground, LegacyElement, LegacyScene, LegacyTemplate


def parse_legacy_scene(record: LegacyTemplate) -> LegacyScene:
    """Parse a legacy record's source JSON into its first scene.

    Args:
        record: Legacy template row.

    Returns:
        First scene with canvas size, background and elements.

    Raises:
        MalformedSourceError: If the source is missing, not valid JSON, or
            structurally not a legacy document.
    """
    document = _load_document(record)
    canvas_size = _parse_canvas_size(document.get("sz"), record.template_id)
    scene = _select_scene(document.get("s"), record.template_id)
    return LegacyScene(
        canvas_size=canvas_size,
        background=_parse_background(scene.get("bg")),
        elements=_parse_elements(scene.get("e"), record.template_id),
    )


def _load_document(record: LegacyTemplate) -> Mapping[str, object]:
    if record.source_json is None:
        raise MalformedSourceError(
            f"Failed to parse JSON for template {record.template_id}: source is empty",
            record.template_id,
        )
    try:
        document = json.loads(record.source_json)
    except json.JSONDecodeError as error:
        raise MalformedSourceError(
            f"Failed to parse JSON for template {record.template_id}: {error.msg}",
            record.template_id,
        ) from error
    if not isinstance(document, dict):
        raise MalformedSourceError(
            f"Invalid source for template {record.template_id}: "
            f"expected a JSON object, got {type(document).__name__}",
            record.template_id,
        )
    return cast(Mapping[str, object], document)


def _parse_canvas_size(raw_size: object, template_id: int) -> tuple[str, str]:
    if raw_size is None:
        return DEFAULT_CANVAS_SIZE
    if isinstance(raw_size, list) and len(raw_size) >= 2:
        return str(raw_size[0]), str(raw_size[1])
    raise MalformedSourceError(
        f"Invalid canvas size for template {template_id}: expected [width, height], "
        f"got {raw_size!r}",
        template_id,
    )


def _select_scene(raw_scenes: object, template_id: int) -> Mapping[str, object]:
    if raw_scenes is None:
        return {}
    if not isinstance(raw_scenes, list):
        raise MalformedSourceError(
            f"Invalid scene list for template {template_id}: "
            f"expected a list, got {type(raw_scenes).__name__}",
            template_id,
        )
    if len(raw_scenes) <= LEGACY_SCENE_INDEX:
        return {}
    scene = raw_scenes[LEGACY_SCENE_INDEX]
    return cast(Mapping[str, object], scene) if isinstance(scene, dict) else {}


def _parse_background(raw_background: object) -> LegacyBackground | None:
    if not raw_background:
        return None
    color = raw_background.get("color") if isinstance(raw_background, dict) else None
    return LegacyBackground(color=color if isinstance(color, str) and color else None)


def _parse_elements(raw_elements: object, template_id: int) -> tuple[LegacyElement, ...]:
    if raw_elements is None:
        return ()
    if not isinstance(raw_elements, list):
        raise MalformedSourceError(
            f"Invalid element list for template {template_id}: "
            f"expected a list, got {type(raw_elements).__name__}",
            template_id,
        )
    return tuple(_parse_element(raw_element) for raw_element in raw_elements)


def _parse_element(raw_element: object) -> LegacyElement:
    if not isinstance(raw_element, dict):
        return LegacyElement(kind=None, element_id=None, name=None, props=None)
    props = raw_element.get("prop")
    return LegacyElement(
        kind=_optional_text(raw_element.get("alias")),
        element_id=_optional_text(raw_element.get("id")),
        name=_optional_text(raw_element.get("name")),
        props=cast(Mapping[str, object], props) if isinstance(props, dict) else None,
    )


def _optional_text(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
