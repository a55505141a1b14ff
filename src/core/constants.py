"""Core constants used across migration modules.

This module centralizes legacy format markers and target schema defaults.
Keeping values here avoids magic literals in conversion logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_ASSET_ROOT = Path(".")
DEFAULT_SOURCE_URL = "sqlite:///design_templates.db"
DEFAULT_EXPORT_DIR_NAME = "exported_designs"
LEGACY_TABLE_NAME = "tpl"
TARGET_TABLE_NAME = "designs_converted"
TEMPLATES_DIR_PARTS = ("templates", "all")
CACHE_DIR_NAME = "cache"
CONVERTED_ASSETS_DIR_NAME = "converted_assets"
TEMPLATES_PATH_SEGMENT = "/templates/all/"
CACHE_PATH_SEGMENT = "/cache/"
CONVERTED_ASSETS_PUBLIC_PREFIX = "/converted_assets/"
SHARED_ASSET_PREFIX = "shared"
THUMBNAIL_PATH_TEMPLATE = "/cache/tpl/previews/{hash}.jpg"

LEGACY_SCENE_INDEX = 0
DEFAULT_CANVAS_SIZE = ("1920", "1080")
LEGACY_TRANSPARENT_COLOR = "#0000"
TRANSPARENT_COLOR = "transparent"
DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_FOREGROUND_COLOR = "#000000"
LEGACY_OPACITY_SCALE = 10
LEGACY_PUBLIC_FLAG = "1"
LEGACY_IMPORT_USER_ID = "legacy_import"

DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE = 16
DEFAULT_LINE_HEIGHT = 1.2
DEFAULT_TEXT_ALIGN = "left"
DEFAULT_IMAGE_QUALITY = 80

MANIFEST_VERSION = "1.0.0"
MANIFEST_FILE_NAME = "designs_manifest.json"
README_FILE_NAME = "README.md"
EXPORT_PROGRESS_INTERVAL = 50
