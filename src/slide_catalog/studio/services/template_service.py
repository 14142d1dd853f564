"""Template catalog and scoring service."""

from __future__ import annotations

import asyncio

from slide_catalog.catalog.plan import load_plan, plan_slides
from slide_catalog.constants import PLAN_FILE
from slide_catalog.templates import (
    SlideTemplateSchema,
    TemplateMetadata,
    score_all,
    score_templates,
)

from ..state import CatalogState
from ..utils.bridge_types import bridge_error, bridge_ok


class TemplateService:
    """Deck/slide template manifests and slide-to-template scoring."""

    def __init__(self, state: CatalogState):
        self._state = state

    def get_deck_templates(self) -> dict:
        try:
            return bridge_ok({"templates": self._state.manifests.load_deck_templates()})
        except Exception as e:
            return bridge_error(str(e))

    def get_slide_templates(self) -> dict:
        try:
            return bridge_ok({"templates": self._state.manifests.load_slide_templates()})
        except Exception as e:
            return bridge_error(str(e))

    def get_template_metadata(self, template_id: str) -> dict:
        try:
            return bridge_ok(self._state.manifests.load_template_metadata(template_id))
        except Exception as e:
            return bridge_error(str(e))

    def save_template_metadata(self, template_id: str, metadata: dict) -> dict:
        try:
            model = TemplateMetadata.model_validate(metadata)
            self._state.manifests.save_template_metadata(template_id, model)
            return bridge_ok()
        except Exception as e:
            return bridge_error(str(e))

    def save_slide_template_schema(self, template_id: str, schema: dict) -> dict:
        try:
            model = SlideTemplateSchema.model_validate(schema)
            self._state.manifests.save_slide_template_schema(template_id, model)
            return bridge_ok()
        except Exception as e:
            return bridge_error(str(e))

    def delete_slide_template(self, template_id: str) -> dict:
        try:
            deleted = self._state.manifests.delete_slide_template(template_id)
            return bridge_ok({"deleted_file": deleted})
        except Exception as e:
            return bridge_error(str(e))

    def delete_deck_template(self, template_id: str) -> dict:
        try:
            folder = self._state.manifests.delete_deck_template(template_id)
            return bridge_ok({"deleted_folder": str(folder)})
        except Exception as e:
            return bridge_error(str(e))

    def reorder_slide_templates(self, template_ids: list[str]) -> dict:
        try:
            self._state.manifests.reorder_slide_templates(template_ids)
            return bridge_ok()
        except Exception as e:
            return bridge_error(str(e))

    def get_slide_template_html(self, template_id: str) -> dict:
        try:
            return bridge_ok({"html": self._state.manifests.get_slide_template_html(template_id)})
        except Exception as e:
            return bridge_error(str(e))

    def score_slide(self, slide: dict) -> dict:
        """Rank slide templates for one plan slide."""
        try:
            catalog = self._state.manifests.load_slide_templates()
            return bridge_ok({"scores": score_templates(slide, catalog)})
        except Exception as e:
            return bridge_error(str(e))

    def _score_deck(self, deck_id: str) -> dict:
        deck_dir = self._state.reader.find_deck_dir(deck_id)
        plan = load_plan(deck_dir / PLAN_FILE)
        slides = [s if isinstance(s, dict) else {} for s in plan_slides(plan)]
        catalog = self._state.manifests.load_slide_templates()
        return score_all(slides, catalog)

    async def score_deck(self, deck_id: str) -> dict:
        """Scores for every slide of a deck, keyed by slide number."""
        try:
            scores = await asyncio.to_thread(self._score_deck, deck_id)
            return bridge_ok({"scores": scores})
        except FileNotFoundError:
            return bridge_error(f"Deck '{deck_id}' not found")
        except Exception as e:
            return bridge_error(str(e))
