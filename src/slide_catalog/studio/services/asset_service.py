"""Brand asset service."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

from slide_catalog.brands.models import BrandAssetType

from ..state import CatalogState
from ..utils.bridge_types import bridge_error, bridge_ok

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], Awaitable[None]]


class BrandAssetService:
    """Brand asset listing, editing and color analysis."""

    def __init__(self, state: CatalogState):
        self._state = state

    def get_assets(self) -> dict:
        try:
            return bridge_ok({"assets": self._state.assets.scan()})
        except Exception as e:
            return bridge_error(str(e))

    def add_assets(
        self,
        paths: list[str],
        asset_type: BrandAssetType,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        try:
            added = self._state.assets.add_assets(
                [Path(p) for p in paths], asset_type, description, tags
            )
            return bridge_ok({"added": added})
        except Exception as e:
            return bridge_error(str(e))

    def update_asset(
        self,
        asset_id: str,
        name: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        try:
            entry = self._state.assets.update_asset(asset_id, name, description, tags)
            return bridge_ok({"entry": entry})
        except Exception as e:
            return bridge_error(str(e))

    def delete_asset(self, asset_id: str) -> dict:
        try:
            rel = self._state.assets.delete_asset(asset_id)
            return bridge_ok({"path": rel})
        except Exception as e:
            return bridge_error(str(e))

    def duplicate_asset(self, asset_id: str) -> dict:
        try:
            entry = self._state.assets.duplicate_asset(asset_id)
            return bridge_ok({"asset": entry})
        except Exception as e:
            return bridge_error(str(e))

    def update_color_metadata(self, asset_id: str, **changes) -> dict:
        """Manual color edit. The stored record becomes immune to batch analysis."""
        try:
            metadata = self._state.assets.update_color_metadata(asset_id, **changes)
            return bridge_ok({"color_metadata": metadata})
        except Exception as e:
            return bridge_error(str(e))

    async def analyze_asset(self, asset_id: str, force: bool = False) -> dict:
        """Analyze one asset now. Manual records are kept unless force is set."""
        try:
            store = self._state.assets
            f = await asyncio.to_thread(store.find_file, asset_id)
            metadata = await asyncio.to_thread(store.analyze_file, f, force)
            return bridge_ok({"asset_id": asset_id, "color_metadata": metadata})
        except Exception as e:
            return bridge_error(str(e))

    async def batch_analyze(self, on_progress: ProgressCallback | None = None) -> dict:
        """Analyze every asset missing color metadata, one at a time.

        on_progress is awaited with (current, total) before each asset.
        Assets with a manual override are never touched.
        """
        try:
            store = self._state.assets
            pending = await asyncio.to_thread(store.pending_analysis)
        except Exception as e:
            return bridge_error(str(e))

        total = len(pending)
        logger.info("Starting batch analysis of %d assets", total)
        results: list[dict] = []
        for i, f in enumerate(pending):
            if on_progress is not None:
                await on_progress(i + 1, total)
            try:
                metadata = await asyncio.to_thread(store.analyze_file, f)
                results.append({"asset_id": f.asset_id, "success": True, "error": None})
                logger.debug(
                    "Analyzed %s: %s, %d colors",
                    f.file_name,
                    metadata.background_affinity,
                    len(metadata.dominant_colors),
                )
            except Exception as e:
                results.append({"asset_id": f.asset_id, "success": False, "error": str(e)})
                logger.warning("Failed to analyze %s: %s", f.file_name, e)

        succeeded = sum(1 for r in results if r["success"])
        logger.info(
            "Batch analysis complete: %d succeeded, %d failed", succeeded, len(results) - succeeded
        )
        return bridge_ok({"results": results})
