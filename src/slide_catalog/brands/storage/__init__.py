"""Brand asset storage.

Sidecar catalogs and the assets.json registry both live under
<catalog>/brand-assets/.
"""

from .base import (
    ASSET_SUBDIRS,
    generate_asset_id,
    get_brand_assets_dir,
    relative_asset_path,
)
from .registry import (
    append_registry_entries,
    find_registry_entry,
    get_registry_path,
    load_registry,
    save_registry,
)
from .sidecar import SIDECAR_KINDS, SidecarCatalog, SidecarDocument, SidecarKind

__all__ = [
    "ASSET_SUBDIRS",
    "generate_asset_id",
    "get_brand_assets_dir",
    "relative_asset_path",
    "append_registry_entries",
    "find_registry_entry",
    "get_registry_path",
    "load_registry",
    "save_registry",
    "SIDECAR_KINDS",
    "SidecarCatalog",
    "SidecarDocument",
    "SidecarKind",
]
