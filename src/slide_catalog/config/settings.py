"""Runtime settings loaded from environment variables and an optional .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from slide_catalog.constants import BRAND_ASSETS_DIR


class Settings(BaseSettings):
    """Workspace locations and analysis tuning.

    Every field can be overridden with a ``SLIDE_CATALOG_`` prefixed environment
    variable, e.g. ``SLIDE_CATALOG_WORKSPACE_ROOT=/path/to/workspace``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SLIDE_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    workspace_root: Path = Field(
        default_factory=Path.cwd, description="Workspace holding output/ and .slide-builder/"
    )
    output_dir_name: str = Field(default="output", description="Deck output directory name")
    catalog_dir: str = Field(
        default=".slide-builder/config/catalog",
        description="Catalog root relative to the workspace",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    color_sample_size: int = Field(default=100, ge=1, description="Max samples per image axis")
    color_clusters: int = Field(default=5, ge=1, description="k for dominant color k-means")
    color_iterations: int = Field(default=10, ge=1, description="k-means iteration count")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    @property
    def output_dir(self) -> Path:
        return self.workspace_root / self.output_dir_name

    @property
    def catalog_root(self) -> Path:
        return self.workspace_root / self.catalog_dir

    @property
    def brand_assets_dir(self) -> Path:
        return self.catalog_root / BRAND_ASSETS_DIR

    def to_dict(self) -> dict:
        """Return settings as a plain dict (paths as strings)."""
        return {k: str(v) if isinstance(v, Path) else v for k, v in self.model_dump().items()}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (tests, or after changing the environment)."""
    get_settings.cache_clear()
