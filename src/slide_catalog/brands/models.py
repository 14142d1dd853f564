"""Brand asset models."""

from __future__ import annotations

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BrandAssetType = Literal["icon", "logo", "image"]
BackgroundAffinity = Literal["light", "dark", "both", "any"]
ContrastNeeds = Literal["high", "medium", "low"]
ColorAssetType = Literal["logo", "icon", "photo", "illustration", "shape"]

# Color fields as they appear inside sidecar catalog entries
COLOR_FIELDS = (
    "backgroundAffinity",
    "hasTransparency",
    "dominantColors",
    "contrastNeeds",
    "assetType",
    "manualOverride",
)


class ColorMetadata(BaseModel):
    """Color intelligence for a brand asset.

    Stored inline in the per-type sidecar entry under camelCase keys.
    Once manual_override is set, automatic analysis leaves the record alone.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    background_affinity: BackgroundAffinity = Field(
        default="any", description="Background luminance the asset works against"
    )
    has_transparency: bool = Field(default=False)
    dominant_colors: List[str] = Field(
        default_factory=list, description="Hex colors, most prevalent first"
    )
    contrast_needs: ContrastNeeds = Field(default="medium")
    asset_type: ColorAssetType = Field(default="photo")
    manual_override: bool = Field(default=False, description="True if set by a human")

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> ColorMetadata | None:
        """Extract color metadata from a sidecar entry. None when absent."""
        if not entry.get("backgroundAffinity"):
            return None
        data = {k: entry[k] for k in COLOR_FIELDS if entry.get(k) is not None}
        try:
            return cls.model_validate(data)
        except ValueError:
            return None

    def to_entry_fields(self) -> dict[str, Any]:
        """camelCase dict ready to merge into a sidecar entry."""
        return self.model_dump(by_alias=True)


class BrandAsset(BaseModel):
    """A brand asset file joined with its sidecar metadata."""

    id: str = Field(description="asset-<base36 hash of relative_path>")
    type: BrandAssetType
    name: str
    path: str = Field(description="Absolute file path")
    relative_path: str = Field(description="Path relative to brand-assets/, e.g. 'icons/star.svg'")
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    file_size: int = 0
    format: str = Field(description="Lowercase file extension without dot")
    last_modified: float = Field(description="File mtime in epoch milliseconds")
    color_metadata: ColorMetadata | None = None


class BrandAssetMetadata(BaseModel):
    """Registry record in assets.json."""

    model_config = ConfigDict(extra="allow")

    path: str
    name: str
    type: BrandAssetType
    description: str = ""
    tags: List[str] = Field(default_factory=list)


class AssetRegistry(BaseModel):
    """assets.json document."""

    model_config = ConfigDict(extra="allow")

    version: int = 1
    assets: List[BrandAssetMetadata] = Field(default_factory=list)

    def paths(self) -> set[str]:
        return {a.path for a in self.assets}
