"""Brand asset catalog: files, sidecar metadata and the asset registry."""
