"""Tests for TemplateService."""

import json
from pathlib import Path

import pytest

from slide_catalog.config import Settings
from slide_catalog.studio.services import TemplateService
from slide_catalog.studio.state import CatalogState


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def service(settings: Settings) -> TemplateService:
    return TemplateService(CatalogState(settings=settings))


@pytest.fixture
def slide_templates(settings: Settings) -> Path:
    root = settings.catalog_root
    root.mkdir(parents=True)
    path = root / "slide-templates.json"
    path.write_text(
        json.dumps(
            [
                {"id": "agenda", "name": "Agenda", "use_cases": ["agenda"]},
                {
                    "id": "chart",
                    "name": "Chart",
                    "description": "quarterly revenue",
                    "use_cases": ["chart"],
                },
            ]
        )
    )
    (root / "slide-templates").mkdir()
    (root / "slide-templates" / "agenda.html").write_text("<section/>")
    return path


# =============================================================================
# manifest tests
# =============================================================================
class TestManifestMethods:
    """Tests for listing and editing methods."""

    def test_get_slide_templates(self, service: TemplateService, slide_templates):
        """Should list slide templates."""
        result = service.get_slide_templates()
        assert [t["id"] for t in result["data"]["templates"]] == ["agenda", "chart"]

    def test_get_deck_templates_empty(self, service: TemplateService):
        """Should return an empty list without a manifest."""
        assert service.get_deck_templates()["data"] == {"templates": []}

    def test_metadata_round_trip(self, service: TemplateService, slide_templates):
        """Should save and reload template metadata."""
        saved = service.save_template_metadata("agenda", {"ai_prompt": "Short bullets"})
        assert saved["success"]
        loaded = service.get_template_metadata("agenda")
        assert loaded["data"]["ai_prompt"] == "Short bullets"

    def test_save_schema_validates(self, service: TemplateService, slide_templates):
        """Should reject a schema without a name."""
        result = service.save_slide_template_schema("agenda", {"description": "no name"})
        assert not result["success"]

    def test_delete_and_reorder(self, service: TemplateService, slide_templates: Path):
        """Should delete one template and reorder the rest."""
        assert service.reorder_slide_templates(["chart", "agenda"])["success"]
        assert [t["id"] for t in json.loads(slide_templates.read_text())] == ["chart", "agenda"]
        deleted = service.delete_slide_template("chart")
        assert deleted["data"] == {"deleted_file": None}
        assert [t["id"] for t in json.loads(slide_templates.read_text())] == ["agenda"]

    def test_unknown_template(self, service: TemplateService, slide_templates):
        """Should report unknown ids."""
        assert service.delete_slide_template("ghost")["error"] == "Template not found: ghost"

    def test_get_html(self, service: TemplateService, slide_templates):
        """Should return template HTML."""
        assert service.get_slide_template_html("agenda")["data"] == {"html": "<section/>"}

    def test_delete_deck_template_missing(self, service: TemplateService, slide_templates):
        """Should report a missing deck template folder."""
        assert not service.delete_deck_template("ghost")["success"]


# =============================================================================
# scoring tests
# =============================================================================
class TestScoring:
    """Tests for score_slide and score_deck."""

    def test_score_slide(self, service: TemplateService, slide_templates):
        """Should rank templates for one slide."""
        result = service.score_slide({"description": "Agenda"})
        scores = result["data"]["scores"]
        assert scores[0]["template_id"] == "agenda"
        assert scores[0]["score"] == 100
        assert scores[0]["tier"] == "high"

    @pytest.mark.asyncio
    async def test_score_deck(self, service: TemplateService, slide_templates, make_deck):
        """Should score every slide of a deck keyed by slide number."""
        make_deck(
            "team/q3",
            slides=[
                {"number": 1, "description": "Agenda"},
                {"number": 2, "description": "Quarterly revenue chart"},
            ],
        )
        result = await service.score_deck("q3")
        assert result["success"]
        scores = result["data"]["scores"]
        assert set(scores) == {1, 2}
        assert scores[1][0]["template_id"] == "agenda"
        assert scores[2][0]["template_id"] == "chart"
        assert scores[2][0]["score"] == 100

    @pytest.mark.asyncio
    async def test_score_missing_deck(self, service: TemplateService, slide_templates):
        """Should report a missing deck."""
        result = await service.score_deck("ghost")
        assert result["error"] == "Deck 'ghost' not found"
