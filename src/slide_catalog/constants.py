"""Centralized constants for slide-catalog."""

# Deck layout
PLAN_FILE = "plan.yaml"
SLIDES_DIR = "slides"
SINGLES_DIR = "singles"
SLIDE_ARTIFACT_EXT = ".html"
# Editor backup copies written next to built slides
BACKUP_MARKER = ".vscode-viewer"

# Catalog layout (relative to the catalog root)
BRAND_ASSETS_DIR = "brand-assets"
ASSET_REGISTRY_FILE = "assets.json"
DECK_TEMPLATES_FILE = "deck-templates.json"
SLIDE_TEMPLATES_FILE = "slide-templates.json"
DECK_TEMPLATES_DIR = "deck-templates"
SLIDE_TEMPLATES_DIR = "slide-templates"

SUPPORTED_IMAGE_FORMATS = ("svg", "png", "jpg", "jpeg", "gif", "webp", "ico")
# Formats the pixel sampler can decode; everything else gets default metadata
RASTER_FORMATS = ("png", "jpg", "jpeg", "gif")
VECTOR_FORMATS = ("svg",)


class ColorThresholds:
    TRANSPARENT_ALPHA = 250
    CLUSTER_MIN_ALPHA = 128
    OPAQUE_RATIO = 0.1
    DARK_LUMINANCE = 0.3
    LIGHT_LUMINANCE = 0.7
    LOW_CONTRAST_VARIANCE = 5000
    MEDIUM_CONTRAST_VARIANCE = 1500


class ScoreWeights:
    USE_CASE = 2.0
    DESCRIPTION = 1.0
    HIGH_TIER = 80
    MEDIUM_TIER = 50
