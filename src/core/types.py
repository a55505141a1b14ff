"""Shared typed models.

This module defines immutable data models used by the row source,
conversion engine, destination table and exporter to keep interfaces
explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Mapping, Union

from core.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_FOREGROUND_COLOR,
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_TEXT_ALIGN,
)

LayerType = Literal["text", "image", "shape", "group", "video", "audio", "svg"]
BackgroundType = Literal["solid", "linear", "radial"]


@dataclass(frozen=True)
class LegacyTemplate:
    """One row of the legacy template table.

    Attributes:
        template_id: Legacy primary key.
        title: Optional display title.
        hash: Legacy content hash, used as the new design id.
        size: Optional legacy size label.
        category: Optional legacy category label.
        tags: Optional comma separated tag string.
        source_json: Serialized legacy document.
        created_at: Optional ISO-8601 creation timestamp.
        modified_at: Optional ISO-8601 modification timestamp.
        is_public: Legacy visibility flag, ``"1"`` when public.
    """

    template_id: int
    title: str | None
    hash: str | None
    size: str | None
    category: str | None
    tags: str | None
    source_json: str | None
    created_at: str | None
    modified_at: str | None
    is_public: str


@dataclass(frozen=True)
class LegacyBackground:
    """Legacy scene background."""

    color: str | None


@dataclass(frozen=True)
class LegacyElement:
    """One element of a legacy scene.

    Attributes:
        kind: Legacy ``alias`` tag such as ``shape`` or ``images``.
        element_id: Optional legacy element id.
        name: Optional display name.
        props: Raw legacy property mapping, ``None`` when missing.
    """

    kind: str | None
    element_id: str | None
    name: str | None
    props: Mapping[str, object] | None


@dataclass(frozen=True)
class LegacyScene:
    """First scene of a legacy document with its canvas size."""

    canvas_size: tuple[str, str]
    background: LegacyBackground | None
    elements: tuple[LegacyElement, ...]


@dataclass(frozen=True)
class Transform:
    """Layer placement in destination canvas pixels."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    rotation: float = 0
    scale_x: float = 1
    scale_y: float = 1
    skew_x: float = 0
    skew_y: float = 0
    opacity: float = 1.0


@dataclass(frozen=True)
class AutoResizePadding:
    """Padding applied around auto-resized text."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


@dataclass(frozen=True)
class AutoResizeConfig:
    """Text auto-resize behavior."""

    enabled: bool = True
    mode: Literal["width", "height", "both", "none"] = "both"
    padding: AutoResizePadding = field(default_factory=AutoResizePadding)


@dataclass(frozen=True)
class TextLayerProperties:
    """Typed properties of a text layer."""

    text: str = ""
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    font_weight: str = "normal"
    font_style: str = "normal"
    text_align: str = DEFAULT_TEXT_ALIGN
    color: str = DEFAULT_FOREGROUND_COLOR
    line_height: float = DEFAULT_LINE_HEIGHT
    letter_spacing: float = 0
    text_decoration: str = "none"
    auto_resize: AutoResizeConfig = field(default_factory=AutoResizeConfig)


@dataclass(frozen=True)
class ImageLayerProperties:
    """Typed properties of an image layer."""

    src: str
    alt: str
    object_position: str = "center"
    preserve_aspect_ratio: bool = True
    quality: int = DEFAULT_IMAGE_QUALITY
    scale_mode: Literal["fill", "fit", "stretch"] = "fill"
    blur: float = 0
    brightness: float = 1
    contrast: float = 1
    saturation: float = 1
    hue: float = 0
    sepia: float = 0
    grayscale: float = 0
    invert: float = 0
    shadow_enabled: bool = False
    flip_x: bool = False
    flip_y: bool = False


@dataclass(frozen=True)
class ShapeFill:
    """Solid fill of a shape layer."""

    color: str = DEFAULT_FOREGROUND_COLOR
    type: Literal["solid", "linear", "radial", "pattern"] = "solid"
    opacity: float = 1


@dataclass(frozen=True)
class ShapeLayerProperties:
    """Typed properties of a shape layer."""

    fill: ShapeFill = field(default_factory=ShapeFill)
    shape_type: Literal["rectangle", "circle", "ellipse", "polygon", "line"] = "rectangle"
    stroke: str = DEFAULT_FOREGROUND_COLOR
    stroke_width: float = 0
    stroke_opacity: float = 1
    stroke_line_cap: Literal["butt", "round", "square"] = "butt"
    stroke_line_join: Literal["miter", "round", "bevel"] = "miter"
    corner_radius: float = 0
    sides: int = 4
    points: int = 5
    inner_radius: float = 0.5
    x1: float = 0
    y1: float = 0
    x2: float = 100
    y2: float = 100


LayerProperties = Union[TextLayerProperties, ImageLayerProperties, ShapeLayerProperties]


@dataclass(frozen=True)
class Layer:
    """One positioned visual element of a design.

    Attributes:
        layer_id: Numeric layer id, unique within the design.
        type: Layer variant tag, always consistent with ``properties``.
        name: Display name.
        visible: Whether the layer is rendered.
        locked: Whether the layer is locked for editing.
        transform: Placement in destination canvas pixels.
        z_index: Stacking order.
        properties: Variant-specific typed properties.
        plugins: Plugin payloads, empty for converted layers.
    """

    layer_id: int
    type: LayerType
    name: str
    visible: bool
    locked: bool
    transform: Transform
    z_index: int
    properties: LayerProperties
    plugins: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class DesignBackground:
    """Background configuration of a design."""

    type: BackgroundType = "solid"
    color: str | None = DEFAULT_BACKGROUND_COLOR
    gradient: Mapping[str, object] | None = None


@dataclass(frozen=True)
class GridSettings:
    """Editor grid defaults."""

    grid_size: int = 20
    show_grid: bool = False
    snap_to_grid: bool = True
    snap_to_objects: bool = True
    snap_tolerance: int = 5


@dataclass(frozen=True)
class ViewportSettings:
    """Editor viewport defaults."""

    zoom: float = 1
    pan_x: float = 0
    pan_y: float = 0


@dataclass(frozen=True)
class DesignData:
    """Canvas-level data of a design.

    Attributes:
        background_color: Raw background color kept for older readers.
        background: Normalized background configuration.
        grid_settings: Fixed editor grid defaults.
        viewport_settings: Fixed editor viewport defaults.
        custom_properties: Legacy labels carried along for export.
    """

    background_color: str
    background: DesignBackground
    grid_settings: GridSettings = field(default_factory=GridSettings)
    viewport_settings: ViewportSettings = field(default_factory=ViewportSettings)
    custom_properties: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Design:
    """Normalized design document produced by conversion.

    Attributes:
        design_id: Non-empty id, unique across the destination table.
        name: Design name.
        title: Display title.
        description: Optional category and tags summary.
        data: Canvas-level data.
        layers: Ordered layers.
        thumbnail: Optional thumbnail public path.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        user_id: Owner id.
        project_id: Optional project id.
        is_public: Visibility flag.
        created_at: UTC creation timestamp.
        updated_at: UTC update timestamp.
    """

    design_id: str
    name: str
    title: str
    description: str | None
    data: DesignData
    layers: tuple[Layer, ...]
    thumbnail: str | None
    width: int
    height: int
    user_id: str
    project_id: str | None
    is_public: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ConversionSummary:
    """Outcome counts of one conversion batch.

    Attributes:
        converted_count: Records converted and stored.
        error_count: Records that failed conversion.
        failed_template_ids: Legacy ids of failed records in processing order.
    """

    converted_count: int = 0
    error_count: int = 0
    failed_template_ids: tuple[int, ...] = ()

    @property
    def total_count(self) -> int:
        """Number of records processed."""
        return self.converted_count + self.error_count


@dataclass(frozen=True)
class StoredDesign:
    """A design row read back from the destination table.

    ``data`` and ``layers`` hold the JSON payloads exactly as stored.
    """

    design_id: str
    name: str
    title: str
    description: str | None
    data: Mapping[str, object]
    layers: list[object] | None
    thumbnail: str | None
    width: int
    height: int
    user_id: str
    project_id: str | None
    is_public: bool
    created_at: datetime
    updated_at: datetime
    original_id: int | None


@dataclass(frozen=True)
class DesignSummary:
    """One manifest entry of an export."""

    design_id: str
    name: str
    title: str
    category: str | None
    tags: str | None
    width: int
    height: int
    thumbnail: str | None
    is_public: bool
    file_name: str


@dataclass(frozen=True)
class ExportSummary:
    """Outcome of one export run.

    Attributes:
        export_dir: Directory holding exported files.
        manifest_path: Path of the written manifest.
        exported_count: Designs written successfully.
        failed_count: Designs skipped after a write failure.
    """

    export_dir: str
    manifest_path: str
    exported_count: int
    failed_count: int


@dataclass(frozen=True)
class ConvertOptions:
    """Convert command options.

    Attributes:
        limit: Optional maximum number of legacy rows to convert.
    """

    limit: int | None = None


@dataclass(frozen=True)
class ExportOptions:
    """Export command options.

    Attributes:
        output_dir: Optional export directory overriding config.
        output_uri: Optional ``s3://`` destination for the finished export.
    """

    output_dir: str | None = None
    output_uri: str | None = None
