"""Plan document parsing helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from slide_catalog.utils.file_utils import write_atomically


class PlanParseError(ValueError):
    """Raised when a plan document is unreadable or not a mapping."""


def load_plan(plan_path: Path) -> dict[str, Any]:
    """Read and parse a plan document.

    Raises:
        OSError: If the file cannot be read.
        PlanParseError: If the YAML is malformed or its root is not a mapping.
    """
    text = plan_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PlanParseError(f"Invalid YAML in {plan_path.name}: {e}") from e
    if not data or not isinstance(data, dict):
        raise PlanParseError(f"Invalid YAML in {plan_path.name}: not an object")
    return data


def save_plan(plan_path: Path, plan: dict[str, Any]) -> None:
    """Write a plan document back, keeping key order."""
    write_atomically(plan_path, yaml.safe_dump(plan, sort_keys=False, allow_unicode=True))


def plan_slides(plan: dict[str, Any]) -> list:
    """Return the plan's slide list, or [] when absent or malformed."""
    slides = plan.get("slides")
    return slides if isinstance(slides, list) else []


def extract_audience(plan: dict[str, Any]) -> str | None:
    """Audience may be a plain string or a mapping with a description."""
    raw = plan.get("audience")
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("description"), str):
        return raw["description"]
    return None


def deck_display_name(plan: dict[str, Any], fallback: str) -> str:
    name = plan.get("deck_name")
    return name if isinstance(name, str) and name else fallback


def slide_intent(slide: dict[str, Any]) -> str:
    """'description' is the current field; 'intent' is the legacy name."""
    value = slide.get("description") or slide.get("intent")
    return value if isinstance(value, str) else ""


def slide_template(slide: dict[str, Any]) -> str | None:
    value = slide.get("suggested_template") or slide.get("template")
    return value if isinstance(value, str) and value else None
