"""Deck and slide template catalogs and slide-to-template scoring."""

from .manifest import TemplateManifests
from .models import (
    DeckTemplate,
    SlideTemplate,
    SlideTemplateSchema,
    TemplateCatalogEntry,
    TemplateMetadata,
    TemplateScore,
)
from .scorer import score_all, score_templates, tokenize

__all__ = [
    "TemplateManifests",
    "DeckTemplate",
    "SlideTemplate",
    "SlideTemplateSchema",
    "TemplateCatalogEntry",
    "TemplateMetadata",
    "TemplateScore",
    "score_all",
    "score_templates",
    "tokenize",
]
