"""Shared JSON serialization for design payloads.

This module centralizes the camelCase document layout of designs. It is
reused by the destination table for JSON columns and by the exporter for
design files and manifest entries.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.types import (
    DesignData,
    DesignSummary,
    ImageLayerProperties,
    Layer,
    LayerProperties,
    ShapeLayerProperties,
    StoredDesign,
    TextLayerProperties,
    Transform,
)


def design_data_to_payload(data: DesignData) -> dict[str, object]:
    """Serialize design data for the ``data`` JSON column."""
    background: dict[str, object] = {"type": data.background.type}
    if data.background.color is not None:
        background["color"] = data.background.color
    if data.background.gradient is not None:
        background["gradient"] = dict(data.background.gradient)
    grid = data.grid_settings
    viewport = data.viewport_settings
    return {
        "backgroundColor": data.background_color,
        "background": background,
        "gridSettings": {
            "gridSize": grid.grid_size,
            "showGrid": grid.show_grid,
            "snapToGrid": grid.snap_to_grid,
            "snapToObjects": grid.snap_to_objects,
            "snapTolerance": grid.snap_tolerance,
        },
        "viewportSettings": {
            "zoom": viewport.zoom,
            "panX": viewport.pan_x,
            "panY": viewport.pan_y,
        },
        "customProperties": dict(data.custom_properties),
    }


def layers_to_payload(layers: tuple[Layer, ...]) -> list[dict[str, object]]:
    """Serialize layers for the ``layers`` JSON column."""
    return [layer_to_payload(layer) for layer in layers]


def layer_to_payload(layer: Layer) -> dict[str, object]:
    """Serialize one layer with its variant properties."""
    return {
        "id": layer.layer_id,
        "type": layer.type,
        "name": layer.name,
        "visible": layer.visible,
        "locked": layer.locked,
        "transform": _transform_to_payload(layer.transform),
        "zIndex": layer.z_index,
        "properties": _properties_to_payload(layer.properties),
        "plugins": dict(layer.plugins),
    }


def _transform_to_payload(transform: Transform) -> dict[str, object]:
    return {
        "x": transform.x,
        "y": transform.y,
        "width": transform.width,
        "height": transform.height,
        "rotation": transform.rotation,
        "scaleX": transform.scale_x,
        "scaleY": transform.scale_y,
        "skewX": transform.skew_x,
        "skewY": transform.skew_y,
        "opacity": transform.opacity,
    }


def _properties_to_payload(properties: LayerProperties) -> dict[str, object]:
    if isinstance(properties, TextLayerProperties):
        return _text_properties_to_payload(properties)
    if isinstance(properties, ImageLayerProperties):
        return _image_properties_to_payload(properties)
    if isinstance(properties, ShapeLayerProperties):
        return _shape_properties_to_payload(properties)
    raise TypeError(f"Unsupported layer properties type: {type(properties).__name__}")


def _text_properties_to_payload(properties: TextLayerProperties) -> dict[str, object]:
    padding = properties.auto_resize.padding
    return {
        "text": properties.text,
        "fontFamily": properties.font_family,
        "fontSize": properties.font_size,
        "fontWeight": properties.font_weight,
        "fontStyle": properties.font_style,
        "textAlign": properties.text_align,
        "color": properties.color,
        "lineHeight": properties.line_height,
        "letterSpacing": properties.letter_spacing,
        "textDecoration": properties.text_decoration,
        "autoResize": {
            "enabled": properties.auto_resize.enabled,
            "mode": properties.auto_resize.mode,
            "padding": {
                "top": padding.top,
                "right": padding.right,
                "bottom": padding.bottom,
                "left": padding.left,
            },
        },
    }


def _image_properties_to_payload(properties: ImageLayerProperties) -> dict[str, object]:
    return {
        "src": properties.src,
        "alt": properties.alt,
        "objectPosition": properties.object_position,
        "preserveAspectRatio": properties.preserve_aspect_ratio,
        "quality": properties.quality,
        "scaleMode": properties.scale_mode,
        "blur": properties.blur,
        "brightness": properties.brightness,
        "contrast": properties.contrast,
        "saturation": properties.saturation,
        "hue": properties.hue,
        "sepia": properties.sepia,
        "grayscale": properties.grayscale,
        "invert": properties.invert,
        "shadow": {"enabled": properties.shadow_enabled},
        "flipX": properties.flip_x,
        "flipY": properties.flip_y,
    }


def _shape_properties_to_payload(properties: ShapeLayerProperties) -> dict[str, object]:
    return {
        "shapeType": properties.shape_type,
        "fill": {
            "type": properties.fill.type,
            "color": properties.fill.color,
            "opacity": properties.fill.opacity,
        },
        "stroke": properties.stroke,
        "strokeWidth": properties.stroke_width,
        "strokeOpacity": properties.stroke_opacity,
        "strokeLineCap": properties.stroke_line_cap,
        "strokeLineJoin": properties.stroke_line_join,
        "cornerRadius": properties.corner_radius,
        "sides": properties.sides,
        "points": properties.points,
        "innerRadius": properties.inner_radius,
        "x1": properties.x1,
        "y1": properties.y1,
        "x2": properties.x2,
        "y2": properties.y2,
    }


def stored_design_to_payload(design: StoredDesign) -> dict[str, object]:
    """Serialize a stored design row into its export document."""
    return {
        "id": design.design_id,
        "name": design.name,
        "title": design.title,
        "description": design.description,
        "data": dict(design.data),
        "layers": design.layers,
        "thumbnail": design.thumbnail,
        "width": design.width,
        "height": design.height,
        "userId": design.user_id,
        "projectId": design.project_id,
        "isPublic": design.is_public,
        "createdAt": format_timestamp(design.created_at),
        "updatedAt": format_timestamp(design.updated_at),
        "originalId": design.original_id,
    }


def build_design_summary(design: StoredDesign, file_name: str) -> DesignSummary:
    """Build a manifest entry, reading legacy labels from custom properties."""
    custom_properties = design.data.get("customProperties")
    labels = custom_properties if isinstance(custom_properties, dict) else {}
    return DesignSummary(
        design_id=design.design_id,
        name=design.name,
        title=design.title,
        category=_optional_label(labels.get("category")),
        tags=_optional_label(labels.get("tags")),
        width=design.width,
        height=design.height,
        thumbnail=design.thumbnail,
        is_public=design.is_public,
        file_name=file_name,
    )


def design_summary_to_payload(summary: DesignSummary) -> dict[str, object]:
    """Serialize a manifest entry, omitting absent category and tags."""
    payload: dict[str, object] = {
        "id": summary.design_id,
        "name": summary.name,
        "title": summary.title,
    }
    if summary.category is not None:
        payload["category"] = summary.category
    if summary.tags is not None:
        payload["tags"] = summary.tags
    payload.update(
        {
            "width": summary.width,
            "height": summary.height,
            "thumbnail": summary.thumbnail,
            "isPublic": summary.is_public,
            "file": summary.file_name,
        }
    )
    return payload


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _optional_label(value: object) -> str | None:
    return value if isinstance(value, str) and value else None
