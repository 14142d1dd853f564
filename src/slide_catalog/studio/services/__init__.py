"""Catalog services.

Each method returns a bridge response dict ``{success, data, error}``.
"""

from .asset_service import BrandAssetService
from .deck_service import DeckService
from .template_service import TemplateService

__all__ = ["BrandAssetService", "DeckService", "TemplateService"]
