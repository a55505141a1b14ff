"""Legacy element to layer conversion.

This module dispatches each legacy element on its kind. Shapes marked as
text become text layers, other shapes become rectangles, and images become
image layers once their source resolves. Unknown kinds and unresolvable
images are dropped with a warning so one bad element never fails a record.
"""

from __future__ import annotations

from typing import Literal, Mapping

from assets.asset_resolver import AssetResolver
from convert.colors import normalize_color
from convert.geometry import coerce_number, convert_transform, is_number, parse_leading_int
from core.constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_FOREGROUND_COLOR,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_TEXT_ALIGN,
)
from core.errors import UnresolvableAssetError
from core.logging_config import get_logger
from core.types import (
    ImageLayerProperties,
    Layer,
    LayerProperties,
    LayerType,
    LegacyElement,
    ShapeFill,
    ShapeLayerProperties,
    TextLayerProperties,
    Transform,
)

_LOGGER = get_logger(__name__)

ElementKind = Literal["text", "image", "shape", "unknown"]

LEGACY_SHAPE_ALIAS = "shape"
LEGACY_IMAGE_ALIAS = "images"
LEGACY_TEXT_MARKER = "text"
LEGACY_BOLD_MARKER = "bold"


def classify_element(element: LegacyElement) -> ElementKind:
    """Map a legacy element's ``alias``/``sym`` tags to a layer kind."""
    if element.kind == LEGACY_SHAPE_ALIAS:
        props = element.props or {}
        return "text" if props.get("sym") == LEGACY_TEXT_MARKER else "shape"
    if element.kind == LEGACY_IMAGE_ALIAS:
        return "image"
    return "unknown"


class ElementConverter:
    """Convert legacy elements of one template into layers."""

    def __init__(
        self,
        resolver: AssetResolver,
        canvas_width: int,
        canvas_height: int,
        template_hash: str | None,
    ) -> None:
        self._resolver = resolver
        self._canvas_width = canvas_width
        self._canvas_height = canvas_height
        self._template_hash = template_hash

    def convert(self, element: LegacyElement, index: int) -> Layer | None:
        """Convert one element at its position in the scene.

        Args:
            element: Parsed legacy element.
            index: Zero-based element position.

        Returns:
            Converted layer, or None when the element is dropped.
        """
        props = element.props
        if props is None:
            return None
        kind = classify_element(element)
        if kind == "text":
            return self._build_layer(element, props, index, "text", _text_properties(props))
        if kind == "shape":
            return self._build_layer(element, props, index, "shape", _shape_properties(props))
        if kind == "image":
            return self._convert_image(element, props, index)
        _LOGGER.warning(
            "element_kind_unknown",
            kind=element.kind,
            element_index=index,
            template_hash=self._template_hash,
        )
        return None

    def _convert_image(
        self,
        element: LegacyElement,
        props: Mapping[str, object],
        index: int,
    ) -> Layer | None:
        source_ref = props.get("src")
        try:
            resolved = self._resolver.resolve(
                source_ref if isinstance(source_ref, str) else None,
                self._template_hash,
            )
        except UnresolvableAssetError as error:
            _LOGGER.warning(
                "image_layer_skipped",
                source_ref=error.source_ref,
                reason=error.reason,
                element_index=index,
                template_hash=self._template_hash,
            )
            return None
        name = _layer_name(element, index)
        properties = ImageLayerProperties(src=resolved.public_path, alt=name)
        return self._build_layer(element, props, index, "image", properties)

    def _build_layer(
        self,
        element: LegacyElement,
        props: Mapping[str, object],
        index: int,
        layer_type: LayerType,
        properties: LayerProperties,
    ) -> Layer:
        return Layer(
            layer_id=_layer_id(props.get("uid"), index),
            type=layer_type,
            name=_layer_name(element, index),
            visible=props.get("noshow") != 1,
            locked=False,
            transform=self._transform(props),
            z_index=_z_index(props.get("z"), index),
            properties=properties,
        )

    def _transform(self, props: Mapping[str, object]) -> Transform:
        return convert_transform(props, self._canvas_width, self._canvas_height)


def _text_properties(props: Mapping[str, object]) -> TextLayerProperties:
    raw_text = props.get("text")
    font = props.get("font")
    align = props.get("align")
    size = coerce_number(props.get("size"))
    line = coerce_number(props.get("line"))
    spacing = coerce_number(props.get("spacing"))
    return TextLayerProperties(
        text="" if raw_text is None else str(raw_text),
        font_family=font if isinstance(font, str) and font else DEFAULT_FONT_FAMILY,
        font_size=size or DEFAULT_FONT_SIZE,
        font_weight="bold" if props.get("type") == LEGACY_BOLD_MARKER else "normal",
        text_align=align if isinstance(align, str) and align else DEFAULT_TEXT_ALIGN,
        color=normalize_color(props.get("color") or _nested_background_color(props)),
        line_height=line or DEFAULT_LINE_HEIGHT,
        letter_spacing=spacing or 0,
    )


def _shape_properties(props: Mapping[str, object]) -> ShapeLayerProperties:
    fill_color = normalize_color(_nested_background_color(props), DEFAULT_FOREGROUND_COLOR)
    return ShapeLayerProperties(fill=ShapeFill(color=fill_color))


def _nested_background_color(props: Mapping[str, object]) -> object:
    background = props.get("background")
    if isinstance(background, dict):
        return background.get("color")
    return None


def _layer_id(raw_uid: object, index: int) -> int:
    """Take the numeric suffix of a ``<prefix>_<number>`` uid."""
    if isinstance(raw_uid, str) and "_" in raw_uid:
        parsed = parse_leading_int(raw_uid.split("_")[1])
        if parsed is not None:
            return parsed
    return index + 1


def _layer_name(element: LegacyElement, index: int) -> str:
    return element.name or f"Layer {index + 1}"


def _z_index(raw_z: object, index: int) -> int:
    if is_number(raw_z) and raw_z:
        return int(raw_z)  # type: ignore[arg-type]
    return index
