"""Deck and slide template manifests under the catalog directory.

Both manifests are either a bare JSON array or ``{"templates": [...]}``.
Writes keep whichever shape was read, along with every other field.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from slide_catalog.brands.storage import SidecarDocument
from slide_catalog.catalog.plan import PlanParseError, load_plan, plan_slides
from slide_catalog.constants import (
    DECK_TEMPLATES_DIR,
    DECK_TEMPLATES_FILE,
    PLAN_FILE,
    SLIDE_TEMPLATES_DIR,
    SLIDE_TEMPLATES_FILE,
)
from slide_catalog.exceptions import StorageError, TemplateNotFoundError
from slide_catalog.utils.file_utils import write_atomically
from slide_catalog.utils.path_utils import resolve_in_dir

from .models import DeckTemplate, SlideTemplate, SlideTemplateSchema, TemplateMetadata

logger = logging.getLogger(__name__)

TEMPLATES_KEY = "templates"


def _str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) and value else default


def _int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _preview_uri(item: dict[str, Any]) -> str | None:
    return _str(item.get("previewUri")) or _str(item.get("preview_uri")) or None


def _is_template_entry(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    return isinstance(item.get("id"), str) and isinstance(item.get("name"), str)


class TemplateManifests:
    """Read and edit deck-templates.json and slide-templates.json."""

    def __init__(
        self, catalog_root: Path, workspace_root: Path, log: logging.Logger | None = None
    ):
        self.catalog_root = catalog_root
        self.workspace_root = workspace_root
        self._log = log or logger

    @property
    def deck_manifest_path(self) -> Path:
        return self.catalog_root / DECK_TEMPLATES_FILE

    @property
    def slide_manifest_path(self) -> Path:
        return self.catalog_root / SLIDE_TEMPLATES_FILE

    # Document IO
    def _read(self, path: Path) -> SidecarDocument:
        """Load a manifest for editing. Missing or malformed raises StorageError."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return SidecarDocument.parse(data, TEMPLATES_KEY)
        except FileNotFoundError as e:
            raise StorageError(f"{path.name} not found") from e
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {path.name}", str(e)) from e

    def _read_for_listing(self, path: Path) -> list[dict[str, Any]]:
        try:
            return self._read(path).entries
        except StorageError as e:
            self._log.info("No usable %s: %s", path.name, e)
            return []

    def _write(self, path: Path, doc: SidecarDocument) -> None:
        write_atomically(path, json.dumps(doc.to_data(), indent=2))

    @staticmethod
    def _find(doc: SidecarDocument, template_id: str) -> dict[str, Any]:
        for entry in doc.entries:
            if entry.get("id") == template_id:
                return entry
        raise TemplateNotFoundError(f"Template not found: {template_id}")

    # Deck templates
    def _count_template_slides(self, rel_path: str) -> int:
        plan_dir, err = resolve_in_dir(self.workspace_root, rel_path)
        if err or plan_dir is None:
            return 0
        try:
            return len(plan_slides(load_plan(plan_dir / PLAN_FILE)))
        except (OSError, UnicodeDecodeError, PlanParseError):
            return 0

    def load_deck_templates(self) -> list[DeckTemplate]:
        """Deck templates with slide counts filled from their plans when absent."""
        templates = []
        for item in self._read_for_listing(self.deck_manifest_path):
            if not _is_template_entry(item):
                continue
            path = _str(item.get("path")) or _str(item.get("folder"))
            slide_count = _int(item.get("slideCount"))
            if slide_count is None:
                slide_count = _int(item.get("slide_count")) or 0
            if slide_count == 0 and path:
                slide_count = self._count_template_slides(path)
            templates.append(
                DeckTemplate(
                    id=item["id"],
                    name=item["name"],
                    description=_str(item.get("description")),
                    path=path,
                    category=_str(item.get("category"), "General"),
                    slide_count=slide_count,
                    preview_uri=_preview_uri(item),
                )
            )
        self._log.debug("Loaded %d deck templates", len(templates))
        return templates

    def deck_template_dir(self, template_id: str) -> Path:
        """Workspace folder a deck template copies from."""
        template = next((t for t in self.load_deck_templates() if t.id == template_id), None)
        if template is None or not template.path:
            raise TemplateNotFoundError(f"Template not found: {template_id}")
        folder, err = resolve_in_dir(self.workspace_root, template.path)
        if err or folder is None:
            raise TemplateNotFoundError(err or f"Template not found: {template_id}")
        return folder

    def delete_deck_template(self, template_id: str) -> Path:
        """Remove the template folder, then its manifest entry.

        Folder deletion errors propagate and leave the manifest untouched.
        """
        folder, err = resolve_in_dir(self.catalog_root / DECK_TEMPLATES_DIR, template_id)
        if err or folder is None:
            raise TemplateNotFoundError(err or f"Template not found: {template_id}")
        shutil.rmtree(folder)
        self._log.info("Deleted deck template folder %s", folder)

        doc = self._read(self.deck_manifest_path)
        doc.entries = [e for e in doc.entries if e.get("id") != template_id]
        self._write(self.deck_manifest_path, doc)
        self._log.info("Removed deck template %s from manifest", template_id)
        return folder

    # Slide templates
    def load_slide_templates(self) -> list[SlideTemplate]:
        templates = []
        for item in self._read_for_listing(self.slide_manifest_path):
            if not _is_template_entry(item):
                continue
            use_cases = item.get("use_cases")
            templates.append(
                SlideTemplate(
                    id=item["id"],
                    name=item["name"],
                    description=_str(item.get("description")),
                    use_cases=[str(u) for u in use_cases] if isinstance(use_cases, list) else [],
                    background_mode=_str(item.get("background_mode")) or None,
                    category=_str(item.get("category"), "Content"),
                    file=_str(item.get("file")) or None,
                    preview_uri=_preview_uri(item),
                )
            )
        self._log.debug("Loaded %d slide templates", len(templates))
        return templates

    def load_template_metadata(self, template_id: str) -> TemplateMetadata:
        """Authoring metadata for a slide template. Unknown ids give empty metadata."""
        for item in self._read_for_listing(self.slide_manifest_path):
            if item.get("id") == template_id:
                return TemplateMetadata(
                    ai_prompt=_str(item.get("ai_prompt")),
                    placeholder_guidance=_str(item.get("placeholder_guidance")),
                    style_rules=_str(item.get("style_rules")),
                )
        self._log.debug("Template not found for metadata load: %s", template_id)
        return TemplateMetadata()

    def save_template_metadata(self, template_id: str, metadata: TemplateMetadata) -> None:
        doc = self._read(self.slide_manifest_path)
        self._find(doc, template_id).update(metadata.model_dump())
        self._write(self.slide_manifest_path, doc)
        self._log.info("Saved template metadata for %s", template_id)

    def save_slide_template_schema(self, template_id: str, schema: SlideTemplateSchema) -> None:
        doc = self._read(self.slide_manifest_path)
        entry = self._find(doc, template_id)
        for key, value in schema.model_dump().items():
            if value is None:
                entry.pop(key, None)
            else:
                entry[key] = value
        self._write(self.slide_manifest_path, doc)
        self._log.info("Saved slide template schema for %s", template_id)

    def delete_slide_template(self, template_id: str) -> str | None:
        """Remove the manifest entry, then its HTML file if it has one.

        Returns the entry's file path. Failing to delete the file is only logged.
        """
        doc = self._read(self.slide_manifest_path)
        entry = self._find(doc, template_id)
        doc.entries.remove(entry)
        self._write(self.slide_manifest_path, doc)

        deleted_file = entry.get("file") if isinstance(entry.get("file"), str) else None
        if deleted_file:
            target, err = resolve_in_dir(self.catalog_root, deleted_file)
            if err or target is None:
                self._log.warning("Not deleting template file %s: %s", deleted_file, err)
            else:
                try:
                    target.unlink()
                except OSError as e:
                    self._log.warning("Could not delete template file %s: %s", deleted_file, e)
        self._log.info("Deleted slide template %s", template_id)
        return deleted_file

    def reorder_slide_templates(self, template_ids: list[str]) -> None:
        """Rewrite the manifest in the given order. Entries not listed are dropped."""
        doc = self._read(self.slide_manifest_path)
        by_id = {e["id"]: e for e in doc.entries if isinstance(e.get("id"), str)}
        doc.entries = [by_id[i] for i in template_ids if i in by_id]
        self._write(self.slide_manifest_path, doc)
        self._log.info("Reordered %d slide templates", len(doc.entries))

    def get_slide_template_html(self, template_id: str) -> str:
        path, err = resolve_in_dir(self.catalog_root / SLIDE_TEMPLATES_DIR, f"{template_id}.html")
        if err or path is None:
            raise TemplateNotFoundError(err or f"Template not found: {template_id}")
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TemplateNotFoundError(f"Slide template HTML not found: {template_id}") from e
