"""Per-type sidecar catalogs (icon-catalog.json, logo-catalog.json, images-catalog.json).

Each sidecar sits next to the asset files it describes. On disk it is either a
bare JSON array or an object holding the array under a type-specific key plus
arbitrary other keys. The shape found on load is the shape written back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from slide_catalog.exceptions import StorageError
from slide_catalog.utils.file_utils import write_atomically

from ..models import BrandAssetType
from .base import ASSET_SUBDIRS

logger = logging.getLogger(__name__)

Entry = dict[str, Any]


def _stem(file_name: str) -> str:
    return file_name.rsplit(".", 1)[0] if "." in file_name else file_name


class SidecarKind:
    """Layout and matching rules for one asset type's sidecar."""

    asset_type: BrandAssetType
    file_name: str
    array_key: str

    def matches(self, entry: Entry, file_name: str) -> bool:
        return entry.get("file") == file_name

    def new_entry(self, file_name: str) -> Entry:
        stem = _stem(file_name)
        return {"id": stem, "name": stem, "description": "", "file": file_name, "tags": []}

    def path_in(self, brand_assets_dir: Path) -> Path:
        return brand_assets_dir / ASSET_SUBDIRS[self.asset_type] / self.file_name


class IconSidecar(SidecarKind):
    asset_type = "icon"
    file_name = "icon-catalog.json"
    array_key = "icons"

    def new_entry(self, file_name: str) -> Entry:
        stem = _stem(file_name)
        return {
            "id": stem,
            "name": stem,
            "description": "",
            "file": file_name,
            "base_icon": stem,
            "size": 0,
            "backgroundAffinity": "any",
            "hasTransparency": False,
            "dominantColors": [],
            "contrastNeeds": "medium",
            "tags": [],
        }


class LogoSidecar(SidecarKind):
    """Logos group several files (variants) under one logical entry."""

    asset_type = "logo"
    file_name = "logo-catalog.json"
    array_key = "logos"

    def matches(self, entry: Entry, file_name: str) -> bool:
        variants = entry.get("variants")
        if not isinstance(variants, list):
            return False
        return any(isinstance(v, dict) and v.get("file") == file_name for v in variants)

    def new_entry(self, file_name: str) -> Entry:
        stem = _stem(file_name)
        return {
            "id": stem,
            "name": stem,
            "description": "",
            "variants": [{"variant_id": "default", "file": file_name}],
            "tags": [],
        }


class ImageSidecar(SidecarKind):
    asset_type = "image"
    file_name = "images-catalog.json"
    array_key = "images"


SIDECAR_KINDS: dict[BrandAssetType, SidecarKind] = {
    "icon": IconSidecar(),
    "logo": LogoSidecar(),
    "image": ImageSidecar(),
}


class SidecarDocument:
    """A sidecar normalized to an entry list, remembering its wrapper."""

    def __init__(self, entries: list[Entry], wrapper: dict[str, Any] | None, array_key: str):
        self.entries = entries
        self.wrapper = wrapper
        self.array_key = array_key

    @classmethod
    def empty(cls, array_key: str) -> SidecarDocument:
        return cls([], {"version": "1.0", array_key: []}, array_key)

    @classmethod
    def parse(cls, data: Any, array_key: str) -> SidecarDocument:
        """Normalize a decoded sidecar. Raises ValueError on an unknown shape."""
        if isinstance(data, list):
            return cls([e for e in data if isinstance(e, dict)], None, array_key)
        if isinstance(data, dict):
            items = data.get(array_key, [])
            if not isinstance(items, list):
                raise ValueError(f"'{array_key}' is not an array")
            return cls([e for e in items if isinstance(e, dict)], data, array_key)
        raise ValueError("expected an array or an object")

    def to_data(self) -> Any:
        if self.wrapper is None:
            return self.entries
        data = dict(self.wrapper)
        data[self.array_key] = self.entries
        return data


class SidecarCatalog:
    """Repository over one per-type sidecar file.

    Reads happen once on load; mutations stay in memory until save().
    """

    def __init__(self, kind: SidecarKind, path: Path, document: SidecarDocument):
        self.kind = kind
        self.path = path
        self.document = document

    @classmethod
    def load(cls, kind: SidecarKind, brand_assets_dir: Path) -> SidecarCatalog:
        """Load a sidecar. Missing file yields an empty wrapped document.

        Raises:
            StorageError: If the file exists but cannot be read or parsed.
        """
        path = kind.path_in(brand_assets_dir)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls(kind, path, SidecarDocument.empty(kind.array_key))
        except OSError as e:
            raise StorageError(f"Cannot read {kind.file_name}", str(e)) from e
        try:
            document = SidecarDocument.parse(json.loads(text), kind.array_key)
        except (json.JSONDecodeError, ValueError) as e:
            raise StorageError(f"Malformed {kind.file_name}", str(e)) from e
        logger.debug("Loaded %s with %d entries", kind.file_name, len(document.entries))
        return cls(kind, path, document)

    @classmethod
    def load_or_empty(cls, kind: SidecarKind, brand_assets_dir: Path) -> SidecarCatalog:
        """Like load(), but a broken sidecar reads as empty (for listing only)."""
        try:
            return cls.load(kind, brand_assets_dir)
        except StorageError as e:
            logger.warning("%s", e)
            return cls(kind, kind.path_in(brand_assets_dir), SidecarDocument.empty(kind.array_key))

    def list(self) -> list[Entry]:
        return list(self.document.entries)

    def find_by_key(self, file_name: str) -> Entry | None:
        for entry in self.document.entries:
            if self.kind.matches(entry, file_name):
                return entry
        return None

    def upsert(self, file_name: str, mutate: Callable[[Entry], None]) -> Entry:
        """Apply mutate to the entry for file_name, creating a minimal one first if needed."""
        entry = self.find_by_key(file_name)
        if entry is None:
            entry = self.kind.new_entry(file_name)
            self.document.entries.append(entry)
            logger.debug("Created %s entry for %s", self.kind.asset_type, file_name)
        mutate(entry)
        return entry

    def remove(self, file_name: str) -> bool:
        """Remove file_name from the sidecar.

        For logos only the matching variant is dropped; the entry goes when no
        variants remain.
        """
        entry = self.find_by_key(file_name)
        if entry is None:
            return False
        variants = entry.get("variants")
        if isinstance(variants, list):
            remaining = [
                v for v in variants if not (isinstance(v, dict) and v.get("file") == file_name)
            ]
            if remaining:
                entry["variants"] = remaining
                return True
        self.document.entries.remove(entry)
        return True

    def save(self) -> None:
        write_atomically(self.path, json.dumps(self.document.to_data(), indent=2))
        logger.debug("Saved %s with %d entries", self.kind.file_name, len(self.document.entries))
