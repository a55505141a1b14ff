"""Asset resolver for legacy image references.

This module classifies a legacy image reference, confirms the referenced
file exists, and copies it into the flat converted-asset directory. Copies
are deduplicated by destination filename so repeated runs reuse assets
instead of duplicating them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
import shutil

from core.config import MigrationConfig
from core.constants import (
    CACHE_PATH_SEGMENT,
    CONVERTED_ASSETS_PUBLIC_PREFIX,
    SHARED_ASSET_PREFIX,
    TEMPLATES_PATH_SEGMENT,
)
from core.errors import AssetCopyError, UnresolvableAssetError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass(frozen=True)
class AssetLocation:
    """Classified legacy reference before existence checks.

    Attributes:
        source_path: Local file the reference points at.
        public_path: Public path implied by the legacy reference.
    """

    source_path: Path
    public_path: str


@dataclass(frozen=True)
class ResolvedAsset:
    """Successful resolution result.

    Attributes:
        public_path: Path to store in the converted design.
        source_path: Local file the reference resolved to.
        copied: Whether this call physically copied the file.
        degraded: Whether the copy failed and ``public_path`` is the
            unconverted legacy location.
    """

    public_path: str
    source_path: Path
    copied: bool
    degraded: bool = False


class AssetResolver:
    """Resolve legacy asset references against local directories.

    The resolver owns no state besides its directory layout, so a single
    instance can serve a whole migration run.
    """

    def __init__(
        self,
        root_dir: Path,
        templates_dir: Path,
        cache_dir: Path,
        assets_dir: Path,
    ) -> None:
        self._root_dir = root_dir
        self._templates_dir = templates_dir
        self._cache_dir = cache_dir
        self._assets_dir = assets_dir

    @classmethod
    def from_config(cls, config: MigrationConfig) -> "AssetResolver":
        """Build a resolver from the configured asset root."""
        return cls(
            root_dir=config.asset_root,
            templates_dir=config.templates_dir,
            cache_dir=config.cache_dir,
            assets_dir=config.converted_assets_dir,
        )

    def resolve(self, source_ref: str | None, template_identifier: str | None) -> ResolvedAsset:
        """Resolve a legacy reference and copy it into the asset store.

        Args:
            source_ref: Raw legacy ``src`` value.
            template_identifier: Legacy template hash, used for bare
                filenames and destination naming.

        Returns:
            Resolution result with the public path to persist.

        Raises:
            UnresolvableAssetError: If the reference cannot be classified
                or the referenced file does not exist.
        """
        location = self.classify(source_ref, template_identifier)
        if not location.source_path.is_file():
            _LOGGER.warning(
                "asset_not_found",
                source_ref=source_ref,
                source_path=str(location.source_path),
            )
            raise UnresolvableAssetError(source_ref, "not found")
        destination_name = build_destination_name(location.source_path, template_identifier)
        try:
            copied = self._copy_with_dedup(location.source_path, destination_name)
        except AssetCopyError as error:
            _LOGGER.warning(
                "asset_copy_failed",
                source_path=str(location.source_path),
                fallback_path=location.public_path,
                error=str(error),
            )
            return ResolvedAsset(
                public_path=location.public_path,
                source_path=location.source_path,
                copied=False,
                degraded=True,
            )
        return ResolvedAsset(
            public_path=f"{CONVERTED_ASSETS_PUBLIC_PREFIX}{destination_name}",
            source_path=location.source_path,
            copied=copied,
        )

    def classify(self, source_ref: str | None, template_identifier: str | None) -> AssetLocation:
        """Map a legacy reference onto a local source file and public path.

        Args:
            source_ref: Raw legacy ``src`` value.
            template_identifier: Legacy template hash for bare filenames.

        Returns:
            Classified location, not yet checked for existence.

        Raises:
            UnresolvableAssetError: If the reference is empty, external,
                or a bare filename without template context.
        """
        if not source_ref:
            raise UnresolvableAssetError(source_ref, "missing source")
        if TEMPLATES_PATH_SEGMENT in source_ref:
            suffix = _suffix_after(source_ref, TEMPLATES_PATH_SEGMENT)
            return AssetLocation(
                source_path=self._templates_dir / suffix,
                public_path=f"{TEMPLATES_PATH_SEGMENT}{suffix}",
            )
        if CACHE_PATH_SEGMENT in source_ref:
            suffix = _suffix_after(source_ref, CACHE_PATH_SEGMENT)
            return AssetLocation(
                source_path=self._cache_dir / suffix,
                public_path=f"{CACHE_PATH_SEGMENT}{suffix}",
            )
        if _is_bare_filename(source_ref):
            if not template_identifier:
                raise UnresolvableAssetError(source_ref, "no template context")
            return AssetLocation(
                source_path=self._templates_dir / template_identifier / source_ref,
                public_path=f"{TEMPLATES_PATH_SEGMENT}{template_identifier}/{source_ref}",
            )
        if source_ref.startswith("/"):
            return AssetLocation(
                source_path=self._root_dir / source_ref.lstrip("/"),
                public_path=source_ref,
            )
        _LOGGER.warning("asset_source_unsupported", source_ref=source_ref)
        raise UnresolvableAssetError(source_ref, "unsupported source")

    def _copy_with_dedup(self, source_path: Path, destination_name: str) -> bool:
        """Copy a file into the asset store unless the name is taken.

        Existing destination files are reused without comparing contents.
        New files are written to a temporary name first so an interrupted
        copy never leaves a partial file under the final name.

        Returns:
            True when bytes were copied, False when an existing file was reused.

        Raises:
            AssetCopyError: If the directory or file cannot be written.
        """
        destination_path = self._assets_dir / destination_name
        partial_path = destination_path.with_name(f".{destination_name}.partial")
        try:
            self._assets_dir.mkdir(parents=True, exist_ok=True)
            if destination_path.exists():
                _LOGGER.debug("asset_reused", destination_name=destination_name)
                return False
            shutil.copyfile(source_path, partial_path)
            partial_path.replace(destination_path)
        except OSError as error:
            _discard_partial(partial_path)
            raise AssetCopyError(
                f"Failed to copy asset {source_path} to {destination_path}: {error}"
            ) from error
        _LOGGER.info(
            "asset_copied",
            source_path=str(source_path),
            destination_name=destination_name,
        )
        return True


def build_destination_name(source_path: Path, template_identifier: str | None) -> str:
    """Build the flat asset-store filename for a source file.

    Args:
        source_path: Located legacy file.
        template_identifier: Legacy template hash, or None for hashless
            templates.

    Returns:
        ``<identifier>_<basename><extension>``.
    """
    prefix = template_identifier or SHARED_ASSET_PREFIX
    return f"{prefix}_{source_path.stem}{source_path.suffix}"


def _suffix_after(source_ref: str, segment: str) -> str:
    suffix = source_ref.split(segment, 1)[1]
    if not suffix:
        raise UnresolvableAssetError(source_ref, "not found")
    return suffix


def _is_bare_filename(source_ref: str) -> bool:
    """Return whether a reference has neither a scheme nor a leading slash."""
    return not source_ref.startswith("/") and _SCHEME_PATTERN.match(source_ref) is None


def _discard_partial(partial_path: Path) -> None:
    try:
        partial_path.unlink(missing_ok=True)
    except OSError as error:
        _LOGGER.warning("asset_partial_cleanup_failed", partial_path=str(partial_path), error=str(error))
