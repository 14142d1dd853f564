"""Shared workspace state for services."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cached_property

from slide_catalog.brands.assets import BrandAssetStore
from slide_catalog.catalog import CatalogMutator, CatalogReader
from slide_catalog.color import ColorAnalyzer
from slide_catalog.config import Settings, get_settings
from slide_catalog.templates import TemplateManifests


@dataclass
class CatalogState:
    """Workspace components wired from one Settings instance.

    Components are built on first use and shared by every service holding
    this state.
    """

    settings: Settings = field(default_factory=get_settings)
    log: logging.Logger | None = None

    @cached_property
    def reader(self) -> CatalogReader:
        return CatalogReader(self.settings.output_dir, self.log)

    @cached_property
    def mutator(self) -> CatalogMutator:
        return CatalogMutator(self.reader, self.log)

    @cached_property
    def analyzer(self) -> ColorAnalyzer:
        return ColorAnalyzer(self.log, self.settings)

    @cached_property
    def assets(self) -> BrandAssetStore:
        return BrandAssetStore(self.settings.brand_assets_dir, self.analyzer, self.log)

    @cached_property
    def manifests(self) -> TemplateManifests:
        return TemplateManifests(self.settings.catalog_root, self.settings.workspace_root, self.log)
