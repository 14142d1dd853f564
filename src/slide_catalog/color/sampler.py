"""Decode raster images with Pillow and down-sample their pixels."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from slide_catalog.constants import ColorThresholds

from .clustering import RGB


@dataclass
class PixelSample:
    """Down-sampled view of an image.

    `colors` holds the pixels opaque enough to cluster; `total` counts every
    sampled pixel including transparent ones.
    """

    colors: list[RGB] = field(default_factory=list)
    transparent: int = 0
    total: int = 0

    @property
    def has_transparency(self) -> bool:
        return self.transparent > 0

    @property
    def transparency_ratio(self) -> float:
        return self.transparent / self.total if self.total else 0.0


def sample_pixels(image_path: Path, sample_size: int = 100) -> PixelSample:
    """Sample an image on a grid with stride max(1, dim // sample_size) per axis.

    Raises:
        OSError: If the file cannot be opened or decoded.
    """
    with Image.open(image_path) as img:
        rgba = img.convert("RGBA")
    width, height = rgba.size
    step_x = max(1, width // sample_size)
    step_y = max(1, height // sample_size)
    px = rgba.load()

    sample = PixelSample()
    for y in range(0, height, step_y):
        for x in range(0, width, step_x):
            r, g, b, a = px[x, y]
            sample.total += 1
            if a < ColorThresholds.TRANSPARENT_ALPHA:
                sample.transparent += 1
            if a >= ColorThresholds.CLUSTER_MIN_ALPHA:
                sample.colors.append((r, g, b))
    return sample
