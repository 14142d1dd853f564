"""Tests for settings and logging configuration."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError
from rich.logging import RichHandler

from slide_catalog.config import (
    Settings,
    clear_settings_cache,
    get_logger,
    get_settings,
    setup_logging,
)


class TestSettings:
    """Tests for Settings."""

    def test_derived_paths(self, tmp_path: Path):
        """Should derive output, catalog and brand asset locations from the workspace."""
        s = Settings(workspace_root=tmp_path)
        assert s.output_dir == tmp_path / "output"
        assert s.catalog_root == tmp_path / ".slide-builder" / "config" / "catalog"
        assert s.brand_assets_dir == s.catalog_root / "brand-assets"

    def test_env_prefix(self, tmp_path: Path, monkeypatch):
        """Should read SLIDE_CATALOG_ environment variables."""
        monkeypatch.setenv("SLIDE_CATALOG_WORKSPACE_ROOT", str(tmp_path))
        monkeypatch.setenv("SLIDE_CATALOG_COLOR_CLUSTERS", "3")
        monkeypatch.setenv("SLIDE_CATALOG_LOG_LEVEL", "debug")
        s = Settings()
        assert s.workspace_root == tmp_path
        assert s.color_clusters == 3
        assert s.log_level == "DEBUG"

    def test_rejects_non_positive_tuning(self, tmp_path: Path):
        """Should validate analysis tuning values."""
        with pytest.raises(ValidationError):
            Settings(workspace_root=tmp_path, color_sample_size=0)

    def test_to_dict(self, tmp_path: Path):
        """Should render paths as strings."""
        data = Settings(workspace_root=tmp_path).to_dict()
        assert data["workspace_root"] == str(tmp_path)
        assert data["color_iterations"] == 10

    def test_cached_until_cleared(self, tmp_path: Path, monkeypatch):
        """Should cache settings until the cache is cleared."""
        monkeypatch.setenv("SLIDE_CATALOG_WORKSPACE_ROOT", str(tmp_path / "one"))
        first = get_settings()
        monkeypatch.setenv("SLIDE_CATALOG_WORKSPACE_ROOT", str(tmp_path / "two"))
        assert get_settings() is first
        clear_settings_cache()
        assert get_settings().workspace_root == tmp_path / "two"


class TestLogging:
    """Tests for logging setup."""

    def test_single_rich_handler(self):
        """Should not stack handlers on repeated setup."""
        setup_logging("DEBUG")
        logger = setup_logging("WARNING")
        handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.WARNING

    def test_get_logger_namespace(self):
        """Should place loggers under the package namespace."""
        assert get_logger("cli").name == "slide_catalog.cli"
        assert get_logger("slide_catalog.catalog").name == "slide_catalog.catalog"
