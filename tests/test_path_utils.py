"""Tests for name validation and path helpers."""

from pathlib import Path

import pytest

from slide_catalog.exceptions import ValidationError
from slide_catalog.utils.path_utils import (
    MAX_NAME_LENGTH,
    resolve_in_dir,
    validate_entry_name,
    validate_slug,
)


class TestValidateEntryName:
    """Tests for validate_entry_name."""

    def test_returns_trimmed_name(self):
        """Should strip surrounding whitespace."""
        assert validate_entry_name("  Team Decks ") == "Team Decks"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_empty(self, name):
        """Should reject empty names."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_entry_name(name)

    def test_rejects_too_long(self):
        """Should reject names over the limit."""
        with pytest.raises(ValidationError, match="too long"):
            validate_entry_name("a" * (MAX_NAME_LENGTH + 1))

    @pytest.mark.parametrize(
        "name", ["a/b", "a\\b", "a:b", "a*b", "a?b", 'a"b', "a<b", "a>b", "a|b"]
    )
    def test_rejects_reserved_characters(self, name):
        """Should reject filesystem-reserved characters."""
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_entry_name(name)

    @pytest.mark.parametrize("name", [".", ".."])
    def test_rejects_traversal(self, name):
        """Should reject . and .. names."""
        with pytest.raises(ValidationError, match="path traversal"):
            validate_entry_name(name)

    def test_kind_appears_in_message(self):
        """Should name the entity kind in the error."""
        with pytest.raises(ValidationError, match="Deck name"):
            validate_entry_name("", "Deck")

    def test_is_value_error(self):
        """Should be catchable as ValueError."""
        with pytest.raises(ValueError):
            validate_entry_name("")


class TestValidateSlug:
    """Tests for validate_slug."""

    def test_accepts_slug(self):
        """Should return a valid slug unchanged."""
        assert validate_slug("q3-review") == "q3-review"

    def test_rejects_inner_whitespace(self):
        """Should reject slugs containing spaces."""
        with pytest.raises(ValidationError, match="spaces"):
            validate_slug("q3 review")


class TestResolveInDir:
    """Tests for resolve_in_dir."""

    def test_resolves_inside(self, tmp_path: Path):
        """Should resolve paths inside the base directory."""
        resolved, err = resolve_in_dir(tmp_path, "templates/deck-a")
        assert err is None
        assert resolved == (tmp_path / "templates" / "deck-a").resolve()

    def test_rejects_escape(self, tmp_path: Path):
        """Should refuse paths that climb out of the base directory."""
        resolved, err = resolve_in_dir(tmp_path / "base", "../outside")
        assert resolved is None
        assert "outside allowed directory" in err
