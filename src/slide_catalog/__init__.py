"""slide-catalog: catalog data layer for slide deck workspaces.

Discovers decks, folders, templates and brand assets on disk, derives their
build status, and keeps the JSON sidecar catalogs in step with the files.
"""

__version__ = "0.1.0"
