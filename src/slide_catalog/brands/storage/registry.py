"""assets.json registry storage."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from slide_catalog.constants import ASSET_REGISTRY_FILE
from slide_catalog.utils.file_utils import write_atomically

from ..models import AssetRegistry, BrandAssetMetadata
from .base import generate_asset_id

logger = logging.getLogger(__name__)


def get_registry_path(brand_assets_dir: Path) -> Path:
    return brand_assets_dir / ASSET_REGISTRY_FILE


def load_registry(brand_assets_dir: Path) -> AssetRegistry:
    """Load assets.json. Returns an empty registry if missing or corrupted."""
    rp = get_registry_path(brand_assets_dir)
    if rp.exists():
        try:
            data = json.loads(rp.read_text(encoding="utf-8"))
            registry = AssetRegistry.model_validate(data)
            logger.debug("Loaded asset registry with %d entries", len(registry.assets))
            return registry
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON in %s: %s", ASSET_REGISTRY_FILE, e)
        except ValueError as e:
            logger.warning("Unexpected structure in %s: %s", ASSET_REGISTRY_FILE, e)
    return AssetRegistry()


def save_registry(brand_assets_dir: Path, registry: AssetRegistry) -> None:
    write_atomically(
        get_registry_path(brand_assets_dir),
        registry.model_dump_json(indent=2, exclude_none=True),
    )
    logger.debug("Saved asset registry with %d entries", len(registry.assets))


def append_registry_entries(
    brand_assets_dir: Path, entries: list[BrandAssetMetadata]
) -> int:
    """Append entries, skipping paths already registered. Returns number added."""
    registry = load_registry(brand_assets_dir)
    known = registry.paths()
    added = 0
    for entry in entries:
        if entry.path in known:
            continue
        registry.assets.append(entry)
        known.add(entry.path)
        added += 1
    save_registry(brand_assets_dir, registry)
    return added


def find_registry_entry(registry: AssetRegistry, asset_id: str) -> BrandAssetMetadata | None:
    for entry in registry.assets:
        if generate_asset_id(entry.path) == asset_id:
            return entry
    return None
