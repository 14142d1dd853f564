"""Name validation and path safety utilities."""

from __future__ import annotations

import re
from pathlib import Path

from slide_catalog.exceptions import ValidationError

_INVALID_CHARS = re.compile(r'[/\\:*?"<>|]')
MAX_NAME_LENGTH = 255


def validate_entry_name(name: str, kind: str = "Folder") -> str:
    """Validate a single path segment used as a folder or deck name.

    Returns the trimmed name. Raises ValidationError on empty, overly long,
    traversal or reserved-character names.
    """
    trimmed = name.strip() if isinstance(name, str) else ""
    if not trimmed:
        raise ValidationError(f"{kind} name cannot be empty")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValidationError(f"{kind} name is too long (max {MAX_NAME_LENGTH} characters)")
    if _INVALID_CHARS.search(trimmed):
        raise ValidationError(
            f'{kind} name contains invalid characters: / \\ : * ? " < > |'
        )
    if trimmed in (".", ".."):
        raise ValidationError(f"Invalid {kind.lower()} name: path traversal")
    return trimmed


def validate_slug(slug: str) -> str:
    """Deck slugs follow folder rules and additionally forbid whitespace."""
    trimmed = validate_entry_name(slug, "Deck")
    if re.search(r"\s", trimmed):
        raise ValidationError("Deck slug cannot contain spaces")
    return trimmed


def resolve_in_dir(base_dir: Path, relative_path: str) -> tuple[Path | None, str | None]:
    """Resolve a path safely within a base directory (prevents path traversal)."""
    try:
        r = (base_dir / relative_path).resolve()
        if not r.is_relative_to(base_dir.resolve()):
            return None, "Invalid path: outside allowed directory"
        return r, None
    except (ValueError, OSError) as e:
        return None, f"Invalid path: {e}"
