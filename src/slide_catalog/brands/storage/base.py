"""Brand asset directory layout and asset identity."""

from __future__ import annotations

from pathlib import Path

from slide_catalog.config import get_settings

from ..models import BrandAssetType

# Asset type -> subdirectory under brand-assets/
ASSET_SUBDIRS: dict[BrandAssetType, str] = {
    "icon": "icons",
    "logo": "logos",
    "image": "images",
}

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def get_brand_assets_dir() -> Path:
    """brand-assets/ under the configured catalog root."""
    return get_settings().brand_assets_dir


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    return "".join(reversed(digits))


def _string_hash32(value: str) -> int:
    """31-multiplier string hash over UTF-16 code units, wrapped to signed 32 bits."""
    h = 0
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def generate_asset_id(relative_path: str) -> str:
    """Stable asset id derived from the brand-assets relative path.

    Ids written by other tools sharing the same catalog use this exact hash,
    so it must not change. Collisions are possible (32-bit space).
    """
    return f"asset-{_to_base36(abs(_string_hash32(relative_path)))}"


def relative_asset_path(asset_type: BrandAssetType, file_name: str) -> str:
    return f"{ASSET_SUBDIRS[asset_type]}/{file_name}"
