"""Configuration and settings management."""

from slide_catalog.config.logging import get_logger, setup_logging
from slide_catalog.config.settings import Settings, clear_settings_cache, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "setup_logging",
    "get_logger",
]
