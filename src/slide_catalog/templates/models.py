"""Template catalog models."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

ScoreTier = Literal["high", "medium", "low"]


class TemplateCatalogEntry(BaseModel):
    """Fields the scorer matches slides against."""

    id: str
    name: str
    description: str = ""
    use_cases: List[str] = Field(default_factory=list)
    background_mode: str | None = Field(default=None, description="e.g. 'dark' or 'light'")
    category: str = "Content"


class SlideTemplate(TemplateCatalogEntry):
    """Entry from slide-templates.json."""

    file: str | None = Field(default=None, description="HTML path relative to the catalog dir")
    preview_uri: str | None = None


class DeckTemplate(BaseModel):
    """Entry from deck-templates.json."""

    id: str
    name: str
    description: str = ""
    path: str = Field(default="", description="Workspace-relative template folder")
    category: str = "General"
    slide_count: int = 0
    preview_uri: str | None = None


class TemplateMetadata(BaseModel):
    """Authoring guidance stored on a slide template entry."""

    ai_prompt: str = ""
    placeholder_guidance: str = ""
    style_rules: str = ""


class SlideTemplateSchema(BaseModel):
    """User-editable schema fields of a slide template."""

    name: str
    description: str = ""
    use_cases: List[str] = Field(default_factory=list)
    background_mode: str | None = None


class TemplateScore(BaseModel):
    """How well one template fits one slide."""

    template_id: str
    template_name: str
    score: int = Field(ge=0, le=100)
    tier: ScoreTier
    description: str = ""
