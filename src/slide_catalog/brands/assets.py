"""Brand asset operations over files, sidecar catalogs and the registry."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

from slide_catalog.constants import SUPPORTED_IMAGE_FORMATS
from slide_catalog.exceptions import (
    AssetNotFoundError,
    ConfigurationError,
    DuplicateEntityError,
    StorageError,
)
from slide_catalog.utils.file_utils import Found, probe_path

from .models import BrandAsset, BrandAssetMetadata, BrandAssetType, ColorMetadata
from .storage import (
    ASSET_SUBDIRS,
    SIDECAR_KINDS,
    SidecarCatalog,
    append_registry_entries,
    find_registry_entry,
    generate_asset_id,
    load_registry,
    relative_asset_path,
    save_registry,
)

if TYPE_CHECKING:
    from slide_catalog.color.analyzer import ColorAnalyzer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetFile:
    """An asset file located on disk."""

    asset_id: str
    asset_type: BrandAssetType
    file_name: str
    path: Path

    @property
    def relative_path(self) -> str:
        return relative_asset_path(self.asset_type, self.file_name)


def _extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""


def _stem(file_name: str) -> str:
    return file_name.rsplit(".", 1)[0] if "." in file_name else file_name


def is_supported(file_name: str) -> bool:
    return _extension(file_name) in SUPPORTED_IMAGE_FORMATS


class BrandAssetStore:
    """Brand assets under ``<catalog>/brand-assets/{icons,logos,images}``.

    The asset files are the source of truth. Per-type sidecars carry names,
    descriptions, tags and color metadata; assets.json records what was added
    through this store.
    """

    def __init__(
        self,
        brand_assets_dir: Path,
        analyzer: ColorAnalyzer | None = None,
        log: logging.Logger | None = None,
    ):
        self.root = brand_assets_dir
        self.analyzer = analyzer
        self._log = log or logger

    # Lookup
    def iter_files(self) -> Iterator[AssetFile]:
        """Supported asset files, by type then file name."""
        for asset_type, subdir in ASSET_SUBDIRS.items():
            directory = self.root / subdir
            try:
                children = sorted(directory.iterdir(), key=lambda p: p.name)
            except FileNotFoundError:
                continue
            except OSError as e:
                self._log.warning("Cannot list %s: %s", directory, e)
                continue
            for child in children:
                if not child.is_file() or not is_supported(child.name):
                    continue
                yield AssetFile(
                    asset_id=generate_asset_id(f"{subdir}/{child.name}"),
                    asset_type=asset_type,
                    file_name=child.name,
                    path=child,
                )

    def find_file(self, asset_id: str) -> AssetFile:
        for f in self.iter_files():
            if f.asset_id == asset_id:
                return f
        raise AssetNotFoundError(f"Asset not found: {asset_id}")

    def sidecar(self, asset_type: BrandAssetType) -> SidecarCatalog:
        return SidecarCatalog.load(SIDECAR_KINDS[asset_type], self.root)

    # Scan
    def scan(self) -> list[BrandAsset]:
        """All supported asset files joined with their sidecar metadata."""
        start = time.perf_counter()
        sidecars = {
            t: SidecarCatalog.load_or_empty(kind, self.root) for t, kind in SIDECAR_KINDS.items()
        }
        assets: list[BrandAsset] = []
        for f in self.iter_files():
            probe = probe_path(f.path)
            size, mtime = (probe.size, probe.mtime_ms) if isinstance(probe, Found) else (0, 0.0)
            entry = sidecars[f.asset_type].find_by_key(f.file_name) or {}
            tags = entry.get("tags")
            assets.append(
                BrandAsset(
                    id=f.asset_id,
                    type=f.asset_type,
                    name=entry.get("name") or _stem(f.file_name),
                    path=str(f.path),
                    relative_path=f.relative_path,
                    description=entry.get("description") or "",
                    tags=list(tags) if isinstance(tags, list) else [],
                    file_size=size,
                    format=_extension(f.file_name),
                    last_modified=mtime or time.time() * 1000,
                    color_metadata=ColorMetadata.from_entry(entry),
                )
            )
        self._log.debug(
            "Scanned %d brand assets in %.0fms", len(assets), (time.perf_counter() - start) * 1000
        )
        return assets

    # Metadata
    def write_color_metadata(
        self, asset_type: BrandAssetType, file_name: str, metadata: ColorMetadata
    ) -> None:
        """Store color fields inside the file's sidecar entry."""
        catalog = self.sidecar(asset_type)
        fields = metadata.to_entry_fields()
        catalog.upsert(file_name, lambda entry: entry.update(fields))
        catalog.save()

    def read_color_metadata(
        self, asset_type: BrandAssetType, file_name: str
    ) -> ColorMetadata | None:
        kind = SIDECAR_KINDS[asset_type]
        entry = SidecarCatalog.load_or_empty(kind, self.root).find_by_key(file_name)
        return ColorMetadata.from_entry(entry) if entry else None

    def update_asset(
        self,
        asset_id: str,
        name: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        """Edit name/description/tags, creating the sidecar entry if needed."""
        f = self.find_file(asset_id)
        catalog = self.sidecar(f.asset_type)

        def apply(entry: dict[str, Any]) -> None:
            if name is not None:
                entry["name"] = name
            if description is not None:
                entry["description"] = description
            if tags is not None:
                entry["tags"] = list(tags)

        entry = catalog.upsert(f.file_name, apply)
        catalog.save()
        self._log.info("Updated asset metadata for %s (%s)", asset_id, f.relative_path)
        return entry

    def update_color_metadata(self, asset_id: str, **changes: Any) -> ColorMetadata:
        """Merge user-edited color fields and mark the record as manual.

        Dominant colors are measured, never edited, so existing values are kept.
        """
        f = self.find_file(asset_id)
        existing = self.read_color_metadata(f.asset_type, f.file_name)
        base = existing.model_dump() if existing else {}
        editable = ("background_affinity", "has_transparency", "contrast_needs", "asset_type")
        for key in editable:
            if changes.get(key) is not None:
                base[key] = changes[key]
        base["dominant_colors"] = existing.dominant_colors if existing else []
        base["manual_override"] = True
        merged = ColorMetadata.model_validate(base)
        self.write_color_metadata(f.asset_type, f.file_name, merged)
        self._log.info("Updated color metadata for %s (manual override)", asset_id)
        return merged

    # Analysis
    def pending_analysis(self) -> list[AssetFile]:
        """Files with no color metadata yet. Manually curated records are skipped."""
        sidecars = {
            t: SidecarCatalog.load_or_empty(kind, self.root) for t, kind in SIDECAR_KINDS.items()
        }
        pending = []
        for f in self.iter_files():
            entry = sidecars[f.asset_type].find_by_key(f.file_name) or {}
            if entry.get("manualOverride") is True:
                self._log.debug("Skipping %s: manual override", f.file_name)
                continue
            if ColorMetadata.from_entry(entry) is None:
                pending.append(f)
        return pending

    def analyze_file(self, f: AssetFile, force: bool = False) -> ColorMetadata:
        """Run automatic analysis and persist it. Result is never marked manual.

        A record with manualOverride set is returned as stored unless force
        is True.
        """
        if self.analyzer is None:
            raise ConfigurationError("No color analyzer configured")
        if not force:
            kind = SIDECAR_KINDS[f.asset_type]
            entry = SidecarCatalog.load_or_empty(kind, self.root).find_by_key(f.file_name) or {}
            if entry.get("manualOverride") is True:
                self._log.info("Keeping manual color metadata for %s", f.file_name)
                stored = ColorMetadata.from_entry(entry)
                return stored or ColorMetadata(manual_override=True)
        metadata = self.analyzer.analyze(f.path, f.asset_type)
        metadata = metadata.model_copy(update={"manual_override": False})
        self.write_color_metadata(f.asset_type, f.file_name, metadata)
        return metadata

    # Add / delete / duplicate
    def add_assets(
        self,
        paths: list[Path],
        asset_type: BrandAssetType,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> int:
        """Copy files into the asset directory. Per-file failures are logged and skipped."""
        target_dir = self.root / ASSET_SUBDIRS[asset_type]
        target_dir.mkdir(parents=True, exist_ok=True)
        added = 0
        new_entries: list[BrandAssetMetadata] = []
        for source in paths:
            source = Path(source)
            if not is_supported(source.name):
                self._log.info("Skipping unsupported format: %s", source.name)
                continue
            target = target_dir / source.name
            if target.exists():
                self._log.warning("Skipping %s: asset already exists", source.name)
                continue
            try:
                shutil.copy2(source, target)
            except OSError as e:
                self._log.warning("Failed to add asset %s: %s", source, e)
                continue
            new_entries.append(
                BrandAssetMetadata(
                    path=relative_asset_path(asset_type, source.name),
                    name=_stem(source.name),
                    type=asset_type,
                    description=description or "",
                    tags=list(tags or []),
                )
            )
            if self.analyzer is not None:
                try:
                    metadata = self.analyzer.analyze(target, asset_type)
                    self.write_color_metadata(asset_type, source.name, metadata)
                except (OSError, StorageError) as e:
                    self._log.warning("Color analysis failed for %s: %s", source.name, e)
            added += 1
            self._log.info("Added brand asset: %s", source.name)
        if new_entries:
            append_registry_entries(self.root, new_entries)
        return added

    def _locate(self, asset_id: str) -> tuple[BrandAssetMetadata | None, AssetFile | None]:
        registry = load_registry(self.root)
        entry = find_registry_entry(registry, asset_id)
        if entry is not None:
            return entry, None
        try:
            return None, self.find_file(asset_id)
        except AssetNotFoundError:
            return None, None

    def delete_asset(self, asset_id: str) -> str:
        """Delete the file, its registry record and its sidecar entry.

        Returns the relative path. A file that cannot be removed is logged and
        the metadata is removed anyway.
        """
        registry = load_registry(self.root)
        entry = find_registry_entry(registry, asset_id)
        if entry is not None:
            rel = entry.path
        else:
            rel = self.find_file(asset_id).relative_path
        file_path = self.root / rel
        try:
            file_path.unlink()
        except OSError as e:
            self._log.warning("Could not delete file %s: %s", rel, e)
        if entry is not None:
            registry.assets.remove(entry)
            save_registry(self.root, registry)

        subdir, _, file_name = rel.partition("/")
        asset_type = next((t for t, d in ASSET_SUBDIRS.items() if d == subdir), None)
        if asset_type is not None:
            try:
                catalog = self.sidecar(asset_type)
                if catalog.remove(file_name):
                    catalog.save()
            except StorageError as e:
                self._log.warning("Could not update sidecar for %s: %s", rel, e)
        self._log.info("Deleted asset %s (id: %s)", rel, asset_id)
        return rel

    def duplicate_asset(self, asset_id: str) -> BrandAssetMetadata:
        """Copy to '<name>-copy.<ext>' beside the original and register the copy."""
        source_entry, source_file = self._locate(asset_id)
        if source_entry is None:
            if source_file is None:
                raise AssetNotFoundError(f"Asset not found: {asset_id}")
            sidecar_entry = self.sidecar(source_file.asset_type).find_by_key(source_file.file_name)
            sidecar_entry = sidecar_entry or {}
            source_entry = BrandAssetMetadata(
                path=source_file.relative_path,
                name=sidecar_entry.get("name") or _stem(source_file.file_name),
                type=source_file.asset_type,
                description=sidecar_entry.get("description") or "",
                tags=list(sidecar_entry.get("tags") or []),
            )

        subdir, _, file_name = source_entry.path.rpartition("/")
        ext = "." + file_name.rsplit(".", 1)[1] if "." in file_name else ""
        copy_name = f"{_stem(file_name)}-copy{ext}"
        copy_rel = f"{subdir}/{copy_name}" if subdir else copy_name
        target = self.root / copy_rel
        if target.exists():
            raise DuplicateEntityError(f"Asset '{copy_name}' already exists")
        shutil.copy2(self.root / source_entry.path, target)

        new_entry = BrandAssetMetadata(
            path=copy_rel,
            name=f"{source_entry.name} (copy)",
            type=source_entry.type,
            description=source_entry.description,
            tags=list(source_entry.tags),
        )
        append_registry_entries(self.root, [new_entry])
        self._log.info("Duplicated asset %s -> %s", source_entry.path, copy_rel)
        return new_entry
