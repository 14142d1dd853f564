"""Catalog reader: discovers decks and folders under the output directory."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterator

from slide_catalog.constants import (
    BACKUP_MARKER,
    PLAN_FILE,
    SINGLES_DIR,
    SLIDE_ARTIFACT_EXT,
    SLIDES_DIR,
)
from slide_catalog.utils.file_utils import Found, NotFound, probe_path

from .models import DeckDetail, DeckInfo, FolderInfo, ScanResult, SlideInfo, compute_status
from .plan import (
    PlanParseError,
    deck_display_name,
    extract_audience,
    load_plan,
    plan_slides,
    slide_intent,
    slide_template,
)

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.time() * 1000


class CatalogReader:
    """Read-only view over ``<workspace>/output``.

    A directory holding plan.yaml is a deck. Any other directory is a folder
    whose immediate subdirectories may be decks (one level, no recursion).
    """

    def __init__(self, output_dir: Path, log: logging.Logger | None = None):
        self.output_dir = output_dir
        self._log = log or logger

    # Listing helpers
    def _relative(self, path: Path) -> str:
        """Workspace-relative POSIX path, e.g. 'output/team/deck'."""
        return path.relative_to(self.output_dir.parent).as_posix()

    def _iter_dirs(self, directory: Path) -> Iterator[Path]:
        """Yield child directories in name order. Missing directory yields nothing."""
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except FileNotFoundError:
            return
        except OSError as e:
            self._log.warning("Cannot list %s: %s", directory, e)
            return
        for child in children:
            if child.is_dir():
                yield child

    def _candidates(self) -> list[Path]:
        return [d for d in self._iter_dirs(self.output_dir) if d.name != SINGLES_DIR]

    def built_slides(self, deck_dir: Path) -> list[str]:
        """Sorted names of rendered slide files, backup copies excluded."""
        slides_dir = deck_dir / SLIDES_DIR
        try:
            entries = list(slides_dir.iterdir())
        except OSError:
            return []
        return sorted(
            p.name
            for p in entries
            if p.is_file() and p.name.endswith(SLIDE_ARTIFACT_EXT) and BACKUP_MARKER not in p.name
        )

    # Deck parsing
    def _error_deck(self, deck_dir: Path, folder_id: str | None) -> DeckInfo:
        return DeckInfo(
            id=deck_dir.name,
            name=deck_dir.name,
            path=self._relative(deck_dir),
            slide_count=0,
            built_slide_count=0,
            status="error",
            last_modified=_now_ms(),
            folder_id=folder_id,
        )

    def parse_deck(self, deck_dir: Path, folder_id: str | None = None) -> DeckInfo | None:
        """Build a DeckInfo from a deck directory.
        Returns None when plan.yaml is missing. Unreadable or malformed plans
        yield an error-status deck so one bad deck never aborts a scan.
        """
        plan_path = deck_dir / PLAN_FILE
        try:
            plan = load_plan(plan_path)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, PlanParseError) as e:
            self._log.warning("Error parsing %s/%s: %s", deck_dir.name, PLAN_FILE, e)
            return self._error_deck(deck_dir, folder_id)

        slide_count = len(plan_slides(plan))
        built = self.built_slides(deck_dir)
        probe = probe_path(plan_path)
        last_modified = probe.mtime_ms if isinstance(probe, Found) else _now_ms()
        first_slide = str(deck_dir / SLIDES_DIR / built[0]) if built else None
        return DeckInfo(
            id=deck_dir.name,
            name=deck_display_name(plan, deck_dir.name),
            path=self._relative(deck_dir),
            slide_count=slide_count,
            built_slide_count=len(built),
            status=compute_status(slide_count, len(built)),
            last_modified=last_modified,
            audience=extract_audience(plan),
            folder_id=folder_id,
            first_slide_path=first_slide,
        )

    def _is_deck(self, directory: Path) -> bool | None:
        """True/False for deck/folder, None when the check itself failed."""
        probe = probe_path(directory / PLAN_FILE)
        if isinstance(probe, Found):
            return True
        if isinstance(probe, NotFound):
            return False
        self._log.warning("Cannot check %s: %s", probe.path, probe.cause)
        return None

    def _scan_folder(self, folder_dir: Path) -> tuple[list[DeckInfo], FolderInfo, int]:
        """Scan a folder one level deep. Returns (decks, folder, subentry count)."""
        decks: list[DeckInfo] = []
        max_mtime = 0.0
        try:
            sub_count = sum(1 for _ in folder_dir.iterdir())
        except OSError as e:
            self._log.warning("Cannot read folder %s: %s", folder_dir.name, e)
            sub_count = 0
        for sub in self._iter_dirs(folder_dir):
            probe = probe_path(sub / PLAN_FILE)
            if isinstance(probe, NotFound):
                continue
            if not isinstance(probe, Found):
                self._log.warning("Cannot check %s: %s", probe.path, probe.cause)
                decks.append(self._error_deck(sub, folder_dir.name))
                continue
            deck = self.parse_deck(sub, folder_id=folder_dir.name)
            if deck is None:
                continue
            decks.append(deck)
            max_mtime = max(max_mtime, probe.mtime_ms)
        folder = FolderInfo(
            id=folder_dir.name,
            name=folder_dir.name,
            path=self._relative(folder_dir),
            deck_count=len(decks),
            last_modified=max_mtime or _now_ms(),
        )
        return decks, folder, sub_count

    # Public scans
    def scan(self) -> ScanResult:
        """Scan all decks, including those inside folders."""
        start = time.perf_counter()
        result = ScanResult()
        if not self.output_dir.is_dir():
            self._log.info("%s not found, returning empty", self.output_dir)
            return result
        for entry in self._candidates():
            is_deck = self._is_deck(entry)
            if is_deck is None:
                result.decks.append(self._error_deck(entry, None))
            elif is_deck:
                deck = self.parse_deck(entry)
                if deck is not None:
                    result.decks.append(deck)
            else:
                decks, folder, _ = self._scan_folder(entry)
                result.decks.extend(decks)
                result.folders.append(folder)
        self._log.debug(
            "Scanned %d decks and %d folders in %.0fms",
            len(result.decks),
            len(result.folders),
            (time.perf_counter() - start) * 1000,
        )
        return result

    def scan_decks(self) -> list[DeckInfo]:
        """Root-level decks only."""
        decks = []
        for entry in self._candidates():
            if self._is_deck(entry):
                deck = self.parse_deck(entry)
                if deck is not None:
                    decks.append(deck)
        return decks

    def scan_folders(self) -> list[FolderInfo]:
        """Folders holding at least one deck, plus empty folders."""
        folders = []
        for entry in self._candidates():
            if self._is_deck(entry) is not False:
                continue
            _, folder, sub_count = self._scan_folder(entry)
            if folder.deck_count > 0 or sub_count == 0:
                folders.append(folder)
        return folders

    # Location resolution
    def locate_deck(self, deck_id: str) -> Path | None:
        """Find a deck at root or one level inside a folder. None when absent."""
        root_dir = self.output_dir / deck_id
        if isinstance(probe_path(root_dir / PLAN_FILE), Found):
            return root_dir
        for folder in self._iter_dirs(self.output_dir):
            candidate = folder / deck_id
            if isinstance(probe_path(candidate / PLAN_FILE), Found):
                return candidate
        return None

    def find_deck_dir(self, deck_id: str) -> Path:
        """Like locate_deck, but defaults to the root location when not found."""
        return self.locate_deck(deck_id) or self.output_dir / deck_id

    def get_deck_detail(self, deck_id: str) -> DeckDetail | None:
        """Deck info plus per-slide built/planned status."""
        deck_dir = self.find_deck_dir(deck_id)
        plan_path = deck_dir / PLAN_FILE
        try:
            plan = load_plan(plan_path)
        except (OSError, UnicodeDecodeError, PlanParseError) as e:
            self._log.warning("Error loading deck detail for %s: %s", deck_id, e)
            return None

        raw_slides = plan_slides(plan)
        built = set(self.built_slides(deck_dir))
        slides: list[SlideInfo] = []
        for index, raw in enumerate(raw_slides):
            raw = raw if isinstance(raw, dict) else {}
            number = raw.get("number")
            if not isinstance(number, int) or isinstance(number, bool):
                number = index + 1
            html_file = f"slide-{number}{SLIDE_ARTIFACT_EXT}"
            is_built = html_file in built
            slides.append(
                SlideInfo(
                    number=number,
                    intent=slide_intent(raw) or None,
                    template=slide_template(raw),
                    status="built" if is_built else "planned",
                    html_path=f"{SLIDES_DIR}/{html_file}" if is_built else None,
                )
            )

        probe = probe_path(plan_path)
        rel = self._relative(deck_dir)
        folder_id = deck_dir.parent.name if deck_dir.parent != self.output_dir else None
        ordered = sorted(built)
        return DeckDetail(
            id=deck_id,
            name=deck_display_name(plan, deck_id),
            path=rel,
            slide_count=len(raw_slides),
            built_slide_count=len(built),
            status=compute_status(len(raw_slides), len(built)),
            last_modified=probe.mtime_ms if isinstance(probe, Found) else _now_ms(),
            audience=extract_audience(plan),
            folder_id=folder_id,
            first_slide_path=str(deck_dir / SLIDES_DIR / ordered[0]) if ordered else None,
            slides=slides,
            plan_path=f"{rel}/{PLAN_FILE}",
        )
