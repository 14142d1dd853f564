"""Dominant color extraction and background affinity inference."""

from .analyzer import ColorAnalyzer, default_metadata
from .clustering import Cluster, kmeans

__all__ = ["ColorAnalyzer", "Cluster", "default_metadata", "kmeans"]
