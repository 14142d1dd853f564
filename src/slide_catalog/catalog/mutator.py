"""Create, rename, move, duplicate and delete decks and folders."""

from __future__ import annotations

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path

from slide_catalog.constants import PLAN_FILE
from slide_catalog.exceptions import (
    DeckNotFoundError,
    DuplicateEntityError,
    FolderNotFoundError,
    StorageError,
    TemplateNotFoundError,
    ValidationError,
)
from slide_catalog.utils.file_utils import Found, NotFound, probe_path
from slide_catalog.utils.path_utils import validate_entry_name, validate_slug

from .plan import PlanParseError, load_plan, save_plan
from .reader import CatalogReader

logger = logging.getLogger(__name__)


class CatalogMutator:
    """Filesystem mutations over the deck hierarchy.

    Every operation checks its preconditions before touching the disk and
    never overwrites an existing directory.
    """

    def __init__(self, reader: CatalogReader, log: logging.Logger | None = None):
        self.reader = reader
        self._log = log or logger

    @property
    def output_dir(self) -> Path:
        return self.reader.output_dir

    def _ensure_free(self, target: Path, kind: str, name: str) -> None:
        """Raise unless nothing exists at target. A failed probe is a StorageError."""
        probe = probe_path(target)
        if isinstance(probe, NotFound):
            return
        if isinstance(probe, Found):
            raise DuplicateEntityError(f"A {kind} named '{name}' already exists")
        raise StorageError(
            f"Cannot check {kind} target '{name}'", str(probe.cause)
        ) from probe.cause

    def _folder_dir(self, folder_id: str) -> Path:
        folder_dir = self.output_dir / validate_entry_name(folder_id)
        if not isinstance(probe_path(folder_dir), Found):
            raise FolderNotFoundError(f"Folder '{folder_id}' not found")
        return folder_dir

    # Folders
    def create_folder(self, name: str) -> Path:
        """Create a grouping folder under the output directory. Existing is fine."""
        name = validate_entry_name(name)
        folder_dir = self.output_dir / name
        folder_dir.mkdir(parents=True, exist_ok=True)
        self._log.info("Created folder %s", name)
        return folder_dir

    def rename_folder(self, folder_id: str, new_name: str) -> Path:
        src = self._folder_dir(folder_id)
        new_name = validate_entry_name(new_name)
        if new_name == src.name:
            return src
        dst = self.output_dir / new_name
        self._ensure_free(dst, "folder", new_name)
        src.rename(dst)
        self._log.info("Renamed folder %s -> %s", folder_id, new_name)
        return dst

    def delete_folder(self, folder_id: str) -> None:
        """Delete a folder and every deck inside it."""
        folder_dir = self._folder_dir(folder_id)
        shutil.rmtree(folder_dir)
        self._log.info("Deleted folder %s", folder_id)

    # Decks
    def _deck_dir(self, deck_id: str) -> Path:
        deck_dir = self.reader.locate_deck(validate_slug(deck_id))
        if deck_dir is None:
            raise DeckNotFoundError(f"Deck '{deck_id}' not found")
        return deck_dir

    def _copy_tree(self, src: Path, dst: Path) -> None:
        """Copy a deck tree. A failed copy removes whatever reached dst."""
        try:
            shutil.copytree(src, dst)
        except OSError as e:
            shutil.rmtree(dst, ignore_errors=True)
            raise StorageError(f"Failed to copy '{src.name}' to '{dst.name}'", str(e)) from e

    def _read_plan(self, deck_dir: Path) -> dict:
        try:
            return load_plan(deck_dir / PLAN_FILE)
        except (OSError, UnicodeDecodeError, PlanParseError) as e:
            raise StorageError(f"Cannot read plan for deck '{deck_dir.name}'", str(e)) from e

    def create_deck(self, template_dir: Path, name: str) -> Path:
        """Create output/<name> as a copy of a deck template folder."""
        name = validate_slug(name)
        if not template_dir.is_dir():
            raise TemplateNotFoundError(f"Template folder not found: {template_dir.name}")
        dst = self.output_dir / name
        self._ensure_free(dst, "deck", name)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._copy_tree(template_dir, dst)
        self._log.info("Created deck %s from template %s", name, template_dir.name)
        return dst

    def rename_deck(
        self, deck_id: str, new_slug: str | None = None, new_name: str | None = None
    ) -> Path:
        """Change a deck's display name, its directory slug, or both.

        The display name is the plan's deck_name. A new slug moves the tree
        within the same parent by copying first and removing the source only
        once the copy has succeeded.
        """
        src = self._deck_dir(deck_id)
        dst = src
        if new_slug is not None:
            new_slug = validate_slug(new_slug)
            if new_slug != src.name:
                dst = src.parent / new_slug
                self._ensure_free(dst, "deck", new_slug)
        if new_name is not None:
            new_name = new_name.strip()
            if not new_name:
                raise ValidationError("Deck name cannot be empty")
            plan = self._read_plan(src)
            plan["deck_name"] = new_name
            plan["last_modified"] = datetime.now(timezone.utc).isoformat()
            save_plan(src / PLAN_FILE, plan)
            self._log.info("Renamed deck %s display name to '%s'", deck_id, new_name)
        if dst == src:
            return src
        self._copy_tree(src, dst)
        shutil.rmtree(src)
        self._log.info("Renamed deck %s -> %s", deck_id, dst.name)
        return dst

    def duplicate_deck(self, deck_id: str) -> Path:
        """Copy a deck beside itself as <id>-copy, <id>-copy-2, ...

        The copy's deck_name gets a matching " Copy" or " Copy N" suffix.
        Failing to update the copied plan is only logged.
        """
        src = self._deck_dir(deck_id)
        n = 1
        dst = src.parent / f"{src.name}-copy"
        while True:
            probe = probe_path(dst)
            if isinstance(probe, NotFound):
                break
            if not isinstance(probe, Found):
                raise StorageError(
                    f"Cannot check deck target '{dst.name}'", str(probe.cause)
                ) from probe.cause
            n += 1
            dst = src.parent / f"{src.name}-copy-{n}"
        self._copy_tree(src, dst)

        suffix = " Copy" if n == 1 else f" Copy {n}"
        try:
            plan = load_plan(dst / PLAN_FILE)
            if isinstance(plan.get("deck_name"), str):
                plan["deck_name"] += suffix
                save_plan(dst / PLAN_FILE, plan)
        except (OSError, UnicodeDecodeError, PlanParseError) as e:
            self._log.warning("Could not update plan for %s: %s", dst.name, e)
        self._log.info("Duplicated deck %s -> %s", deck_id, dst.name)
        return dst

    def _parent_dir(self, folder_id: str | None) -> Path:
        if not folder_id:
            return self.output_dir
        return self.output_dir / validate_entry_name(folder_id)

    def move_deck(self, deck_id: str, from_folder: str | None, to_folder: str | None) -> Path:
        """Move a deck between the root and folders (None means root)."""
        deck_id = validate_slug(deck_id)
        src_parent = self._parent_dir(from_folder)
        dst_parent = self._parent_dir(to_folder)
        src = src_parent / deck_id
        dst = dst_parent / deck_id
        if not isinstance(probe_path(src), Found):
            raise DeckNotFoundError(f"Deck '{deck_id}' not found")
        if src == dst:
            return src
        if to_folder and not isinstance(probe_path(dst_parent), Found):
            raise FolderNotFoundError(f"Folder '{to_folder}' not found")
        self._ensure_free(dst, "deck", deck_id)
        src.rename(dst)
        self._log.info(
            "Moved deck %s from %s to %s", deck_id, from_folder or "root", to_folder or "root"
        )
        return dst

    def delete_deck(self, deck_id: str) -> None:
        deck_dir = self._deck_dir(deck_id)
        shutil.rmtree(deck_dir)
        self._log.info("Deleted deck %s", deck_id)
