"""Color metadata inference for brand assets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from slide_catalog.brands.models import (
    BackgroundAffinity,
    BrandAssetType,
    ColorAssetType,
    ColorMetadata,
    ContrastNeeds,
)
from slide_catalog.config import Settings, get_settings
from slide_catalog.constants import RASTER_FORMATS, VECTOR_FORMATS, ColorThresholds

from .clustering import Cluster, center_variance, kmeans, luminance, rgb_to_hex
from .sampler import sample_pixels

logger = logging.getLogger(__name__)

_CATEGORY_TO_ASSET_TYPE: dict[str, ColorAssetType] = {
    "logo": "logo",
    "icon": "icon",
    "image": "photo",
}
MAX_DOMINANT_COLORS = 5


def map_asset_type(category: BrandAssetType | str) -> ColorAssetType:
    return _CATEGORY_TO_ASSET_TYPE.get(category, "photo")


def default_metadata(asset_type: ColorAssetType) -> ColorMetadata:
    return ColorMetadata(
        background_affinity="any",
        has_transparency=False,
        dominant_colors=[],
        contrast_needs="medium",
        asset_type=asset_type,
        manual_override=False,
    )


def affinity_from_filename(file_name: str) -> BackgroundAffinity:
    """Guess affinity for vector art from naming conventions (e.g. 'logo-white.svg')."""
    lower = file_name.lower()
    if "dark" in lower or "white" in lower or "light-bg" in lower:
        return "light"
    if "light" in lower or "black" in lower or "dark-bg" in lower:
        return "dark"
    return "any"


def infer_affinity(
    clusters: Sequence[Cluster], has_transparency: bool, transparency_ratio: float
) -> BackgroundAffinity:
    """Opaque images fit any background; transparent ones depend on content luminance."""
    if not has_transparency or transparency_ratio < ColorThresholds.OPAQUE_RATIO:
        return "any"
    total = sum(c.count for c in clusters)
    if not total:
        return "any"
    avg = sum(luminance(c.center) * c.count for c in clusters) / total
    if avg < ColorThresholds.DARK_LUMINANCE:
        return "light"
    if avg > ColorThresholds.LIGHT_LUMINANCE:
        return "dark"
    return "both"


def infer_contrast(clusters: Sequence[Cluster]) -> ContrastNeeds:
    """Diverse palettes carry their own contrast; uniform ones need it from the background."""
    if not clusters:
        return "medium"
    variance = center_variance(clusters)
    if variance > ColorThresholds.LOW_CONTRAST_VARIANCE:
        return "low"
    if variance > ColorThresholds.MEDIUM_CONTRAST_VARIANCE:
        return "medium"
    return "high"


class ColorAnalyzer:
    """Derives ColorMetadata from an image file. Never raises."""

    def __init__(self, log: logging.Logger | None = None, settings: Settings | None = None):
        self._log = log or logger
        self._settings = settings or get_settings()

    def analyze(self, image_path: Path, category: BrandAssetType | str = "image") -> ColorMetadata:
        file_name = image_path.name
        ext = image_path.suffix.lower().lstrip(".")
        asset_type = map_asset_type(category)

        if ext in VECTOR_FORMATS:
            affinity = affinity_from_filename(file_name)
            self._log.debug("SVG metadata for %s: affinity=%s", file_name, affinity)
            return ColorMetadata(
                background_affinity=affinity,
                has_transparency=True,
                dominant_colors=[],
                contrast_needs="medium",
                asset_type=asset_type,
            )
        if ext not in RASTER_FORMATS:
            self._log.debug("Unsupported format for %s, using defaults", file_name)
            return default_metadata(asset_type)

        try:
            sample = sample_pixels(image_path, self._settings.color_sample_size)
        except Exception as e:
            self._log.warning("Failed to decode %s: %s", file_name, e)
            return default_metadata(asset_type)

        clusters = kmeans(
            sample.colors,
            k=self._settings.color_clusters,
            iterations=self._settings.color_iterations,
        )
        metadata = ColorMetadata(
            background_affinity=infer_affinity(
                clusters, sample.has_transparency, sample.transparency_ratio
            ),
            has_transparency=sample.has_transparency,
            dominant_colors=[rgb_to_hex(c.center) for c in clusters[:MAX_DOMINANT_COLORS]],
            contrast_needs=infer_contrast(clusters),
            asset_type=asset_type,
        )
        self._log.info(
            "Analyzed %s: affinity=%s, colors=%d, transparent=%s",
            file_name,
            metadata.background_affinity,
            len(metadata.dominant_colors),
            metadata.has_transparency,
        )
        return metadata
