"""Deck and folder service."""

from __future__ import annotations

import asyncio
import logging

from ..state import CatalogState
from ..utils.bridge_types import bridge_error, bridge_ok

logger = logging.getLogger(__name__)


class DeckService:
    """Catalog scans and deck/folder mutations."""

    def __init__(self, state: CatalogState):
        self._state = state

    async def scan(self) -> dict:
        """Full scan: decks (root and in folders) plus folders."""
        try:
            result = await asyncio.to_thread(self._state.reader.scan)
            return bridge_ok(result)
        except Exception as e:
            logger.exception("Catalog scan failed")
            return bridge_error(str(e))

    async def get_deck_detail(self, deck_id: str) -> dict:
        try:
            detail = await asyncio.to_thread(self._state.reader.get_deck_detail, deck_id)
            if detail is None:
                return bridge_error(f"Deck '{deck_id}' not found")
            return bridge_ok(detail)
        except Exception as e:
            return bridge_error(str(e))

    def list_decks(self) -> dict:
        """Root-level decks only."""
        try:
            return bridge_ok({"decks": self._state.reader.scan_decks()})
        except Exception as e:
            return bridge_error(str(e))

    def list_folders(self) -> dict:
        try:
            return bridge_ok({"folders": self._state.reader.scan_folders()})
        except Exception as e:
            return bridge_error(str(e))

    def create_folder(self, name: str) -> dict:
        try:
            path = self._state.mutator.create_folder(name)
            return bridge_ok({"folder_id": path.name})
        except Exception as e:
            return bridge_error(str(e))

    def rename_folder(self, folder_id: str, new_name: str) -> dict:
        try:
            path = self._state.mutator.rename_folder(folder_id, new_name)
            return bridge_ok({"folder_id": path.name})
        except Exception as e:
            return bridge_error(str(e))

    def delete_folder(self, folder_id: str) -> dict:
        try:
            self._state.mutator.delete_folder(folder_id)
            return bridge_ok()
        except Exception as e:
            return bridge_error(str(e))

    def create_deck(self, template_id: str, name: str) -> dict:
        """Create a root deck from a deck template."""
        try:
            template_dir = self._state.manifests.deck_template_dir(template_id)
            path = self._state.mutator.create_deck(template_dir, name)
            return bridge_ok({"deck_id": path.name})
        except Exception as e:
            return bridge_error(str(e))

    def rename_deck(
        self, deck_id: str, new_slug: str | None = None, new_name: str | None = None
    ) -> dict:
        """Rename the display name and/or the directory slug."""
        try:
            path = self._state.mutator.rename_deck(deck_id, new_slug, new_name)
            return bridge_ok({"deck_id": path.name, "name": new_name})
        except Exception as e:
            return bridge_error(str(e))

    def duplicate_deck(self, deck_id: str) -> dict:
        try:
            path = self._state.mutator.duplicate_deck(deck_id)
            return bridge_ok({"deck_id": path.name})
        except Exception as e:
            return bridge_error(str(e))

    def move_deck(self, deck_id: str, from_folder: str | None, to_folder: str | None) -> dict:
        try:
            path = self._state.mutator.move_deck(deck_id, from_folder, to_folder)
            return bridge_ok({"deck_id": deck_id, "folder_id": to_folder, "path": str(path)})
        except Exception as e:
            return bridge_error(str(e))

    def delete_deck(self, deck_id: str) -> dict:
        try:
            self._state.mutator.delete_deck(deck_id)
            return bridge_ok()
        except Exception as e:
            return bridge_error(str(e))
