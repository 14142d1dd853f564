"""Deck, folder and slide models.

These are projections rebuilt on every scan; nothing here is persisted.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

DeckStatus = Literal["planned", "partial", "built", "error"]
SlideStatus = Literal["built", "planned"]


def compute_status(slide_count: int, built_slide_count: int) -> DeckStatus:
    """Derive deck status from planned vs built slide counts."""
    if built_slide_count == 0:
        return "planned"
    if built_slide_count < slide_count:
        return "partial"
    return "built"


class DeckInfo(BaseModel):
    """Deck card data for the catalog grid."""

    id: str = Field(description="Deck directory name")
    name: str = Field(description="deck_name from the plan, falls back to id")
    path: str = Field(description="Workspace-relative path, e.g. 'output/team/q3-review'")
    slide_count: int = Field(default=0, description="Number of planned slides")
    built_slide_count: int = Field(default=0, description="Number of rendered slide files")
    status: DeckStatus = Field(default="planned")
    last_modified: float = Field(description="Plan mtime in epoch milliseconds")
    audience: str | None = Field(default=None)
    folder_id: str | None = Field(default=None, description="Containing folder, None at root")
    first_slide_path: str | None = Field(
        default=None, description="Absolute path of the first built slide (thumbnail source)"
    )


class FolderInfo(BaseModel):
    """Grouping directory with no plan of its own."""

    id: str
    name: str
    path: str
    deck_count: int = 0
    last_modified: float = Field(description="Newest contained plan mtime in epoch milliseconds")


class SlideInfo(BaseModel):
    """Per-slide status inside a deck detail view."""

    number: int
    intent: str | None = None
    template: str | None = None
    status: SlideStatus = "planned"
    html_path: str | None = Field(default=None, description="Deck-relative path when built")


class DeckDetail(DeckInfo):
    """Deck with per-slide breakdown."""

    slides: List[SlideInfo] = Field(default_factory=list)
    plan_path: str = Field(description="Workspace-relative path to plan.yaml")


class ScanResult(BaseModel):
    """Output of a full catalog scan."""

    decks: List[DeckInfo] = Field(default_factory=list)
    folders: List[FolderInfo] = Field(default_factory=list)
