"""Centralized exception classes for slide-catalog.

This module provides a hierarchy of exceptions for better error handling
and user-friendly error messages throughout the catalog.
"""


class SlideCatalogError(Exception):
    """Base exception for all slide-catalog errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: User-friendly error message.
            details: Additional technical details for debugging.
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class ConfigurationError(SlideCatalogError):
    """Raised when configuration is missing or invalid."""

    pass


class ValidationError(SlideCatalogError, ValueError):
    """Raised when input validation fails (bad names, path traversal)."""

    pass


class StorageError(SlideCatalogError):
    """Raised when a filesystem operation fails for an unexpected reason."""

    pass


class DuplicateEntityError(SlideCatalogError, ValueError):
    """Raised when a target name or path is already occupied."""

    pass


class DeckNotFoundError(SlideCatalogError, ValueError):
    """Raised when a deck doesn't exist."""

    pass


class FolderNotFoundError(SlideCatalogError, ValueError):
    """Raised when a folder doesn't exist."""

    pass


class TemplateNotFoundError(SlideCatalogError, ValueError):
    """Raised when a deck or slide template doesn't exist."""

    pass


class AssetNotFoundError(SlideCatalogError, ValueError):
    """Raised when a brand asset doesn't exist."""

    pass
