"""Shared fixtures for building throwaway workspaces."""

from pathlib import Path

import pytest
import yaml
from PIL import Image

from slide_catalog.config import Settings, clear_settings_cache


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test sees settings built from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty workspace with an output/ directory."""
    (tmp_path / "output").mkdir()
    return tmp_path


@pytest.fixture
def settings(workspace: Path) -> Settings:
    return Settings(workspace_root=workspace)


@pytest.fixture
def make_deck(workspace: Path):
    """Create a deck: make_deck('team/q3', slides=3, built=[1], deck_name='Q3')."""

    def _make(rel: str, slides=0, built=(), **plan) -> Path:
        deck_dir = workspace / "output" / rel
        deck_dir.mkdir(parents=True, exist_ok=True)
        doc = dict(plan)
        if isinstance(slides, int):
            slides = [{"number": i + 1, "description": f"Slide {i + 1}"} for i in range(slides)]
        doc.setdefault("slides", slides)
        (deck_dir / "plan.yaml").write_text(yaml.safe_dump(doc), encoding="utf-8")
        if built:
            slides_dir = deck_dir / "slides"
            slides_dir.mkdir(exist_ok=True)
            for n in built:
                (slides_dir / f"slide-{n}.html").write_text(f"<html>{n}</html>", encoding="utf-8")
        return deck_dir

    return _make


@pytest.fixture
def brand_dir(settings: Settings) -> Path:
    """brand-assets/ with the three type subdirectories."""
    root = settings.brand_assets_dir
    for sub in ("icons", "logos", "images"):
        (root / sub).mkdir(parents=True, exist_ok=True)
    return root


def save_image(path: Path, size=(20, 20), color=(255, 0, 0, 255), mode="RGBA") -> Path:
    """Write a solid-color image with Pillow."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fill = color if mode == "RGBA" else color[:3]
    Image.new(mode, size, fill).save(path)
    return path
