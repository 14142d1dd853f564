"""Deck and folder catalog: scanning and filesystem mutations."""

from .models import DeckDetail, DeckInfo, FolderInfo, ScanResult, SlideInfo, compute_status
from .mutator import CatalogMutator
from .reader import CatalogReader

__all__ = [
    "CatalogMutator",
    "CatalogReader",
    "DeckDetail",
    "DeckInfo",
    "FolderInfo",
    "ScanResult",
    "SlideInfo",
    "compute_status",
]
