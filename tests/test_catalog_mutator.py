"""Tests for CatalogMutator deck and folder mutations."""

import errno
from pathlib import Path

import pytest
import yaml

from slide_catalog.catalog import CatalogMutator, CatalogReader
from slide_catalog.catalog import mutator as mutator_module
from slide_catalog.exceptions import (
    DeckNotFoundError,
    DuplicateEntityError,
    FolderNotFoundError,
    StorageError,
    TemplateNotFoundError,
    ValidationError,
)
from slide_catalog.utils.file_utils import ProbeError

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def output(workspace: Path) -> Path:
    return workspace / "output"


@pytest.fixture
def mutator(output: Path) -> CatalogMutator:
    return CatalogMutator(CatalogReader(output))


@pytest.fixture
def decks(make_deck):
    """alpha and beta at the root, gamma inside team/."""
    make_deck("alpha", slides=2, built=[1])
    make_deck("beta", slides=1)
    make_deck("team/gamma", slides=1)


# =============================================================================
# Folders
# =============================================================================


class TestFolders:
    """Tests for folder create/rename/delete."""

    def test_create_folder(self, mutator: CatalogMutator, output: Path):
        """Should create the folder under output/."""
        path = mutator.create_folder("  Q3 Reviews ")
        assert path == output / "Q3 Reviews"
        assert path.is_dir()

    def test_create_existing_folder_is_ok(self, mutator: CatalogMutator, output: Path):
        """Should not fail when the folder already exists."""
        (output / "team").mkdir()
        assert mutator.create_folder("team") == output / "team"

    def test_create_folder_rejects_bad_name(self, mutator: CatalogMutator):
        """Should validate folder names."""
        with pytest.raises(ValidationError):
            mutator.create_folder("../escape")

    def test_rename_folder(self, mutator: CatalogMutator, output: Path, decks):
        """Should rename the folder and keep its decks."""
        mutator.rename_folder("team", "squad")
        assert not (output / "team").exists()
        assert (output / "squad" / "gamma" / "plan.yaml").exists()

    def test_rename_folder_collision(self, mutator: CatalogMutator, output: Path, decks):
        """Should refuse to overwrite an existing entry and leave the source intact."""
        (output / "other").mkdir()
        with pytest.raises(DuplicateEntityError, match="already exists"):
            mutator.rename_folder("team", "other")
        assert (output / "team" / "gamma").is_dir()

    def test_rename_folder_same_name_is_noop(self, mutator: CatalogMutator, output: Path, decks):
        """Should return the folder unchanged when the name does not change."""
        assert mutator.rename_folder("team", "team") == output / "team"

    def test_rename_missing_folder(self, mutator: CatalogMutator):
        """Should raise FolderNotFoundError for unknown folders."""
        with pytest.raises(FolderNotFoundError):
            mutator.rename_folder("ghost", "new")

    def test_delete_folder(self, mutator: CatalogMutator, output: Path, decks):
        """Should delete the folder with its decks."""
        mutator.delete_folder("team")
        assert not (output / "team").exists()

    def test_delete_missing_folder(self, mutator: CatalogMutator):
        """Should raise FolderNotFoundError for unknown folders."""
        with pytest.raises(FolderNotFoundError):
            mutator.delete_folder("ghost")


# =============================================================================
# Decks
# =============================================================================


class TestRenameDeck:
    """Tests for rename_deck."""

    def test_rename_root_deck(self, mutator: CatalogMutator, output: Path, decks):
        """Should move the deck tree to the new slug."""
        path = mutator.rename_deck("alpha", "alpha-v2")
        assert path == output / "alpha-v2"
        assert (path / "slides" / "slide-1.html").exists()
        assert not (output / "alpha").exists()

    def test_rename_folder_deck_stays_in_folder(self, mutator: CatalogMutator, output, decks):
        """Should keep decks inside their folder."""
        assert mutator.rename_deck("gamma", "delta") == output / "team" / "delta"

    def test_rename_collision(self, mutator: CatalogMutator, output: Path, decks):
        """Should refuse to overwrite another deck and leave both intact."""
        with pytest.raises(DuplicateEntityError, match="A deck named 'beta' already exists"):
            mutator.rename_deck("alpha", "beta")
        assert (output / "alpha" / "slides" / "slide-1.html").exists()
        assert (output / "beta" / "plan.yaml").exists()

    def test_rename_same_slug_is_noop(self, mutator: CatalogMutator, output: Path, decks):
        """Should return the deck unchanged when the slug does not change."""
        assert mutator.rename_deck("alpha", "alpha") == output / "alpha"

    def test_rename_rejects_spaces(self, mutator: CatalogMutator, decks):
        """Should reject slugs containing whitespace."""
        with pytest.raises(ValidationError):
            mutator.rename_deck("alpha", "alpha v2")

    def test_rename_missing_deck(self, mutator: CatalogMutator, decks):
        """Should raise DeckNotFoundError."""
        with pytest.raises(DeckNotFoundError):
            mutator.rename_deck("ghost", "spirit")

    def test_probe_failure_is_storage_error(
        self, mutator: CatalogMutator, output: Path, decks, monkeypatch
    ):
        """Should not treat an unreadable target as free."""
        real_probe = mutator_module.probe_path
        blocked = output / "blocked"

        def probe(path: Path):
            if path == blocked:
                return ProbeError(path, PermissionError(errno.EACCES, "Permission denied"))
            return real_probe(path)

        monkeypatch.setattr(mutator_module, "probe_path", probe)
        with pytest.raises(StorageError) as exc_info:
            mutator.rename_deck("alpha", "blocked")
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert (output / "alpha").is_dir()

    def test_failed_copy_leaves_no_partial_target(
        self, mutator: CatalogMutator, output: Path, workspace: Path, decks
    ):
        """Should remove a half-copied target so the rename can be retried."""
        dangling = output / "alpha" / "slides" / "ghost.html"
        dangling.symlink_to(workspace / "nowhere.html")

        with pytest.raises(StorageError):
            mutator.rename_deck("alpha", "alpha-v2")
        assert not (output / "alpha-v2").exists()
        assert (output / "alpha" / "slides" / "slide-1.html").exists()

        dangling.unlink()
        assert mutator.rename_deck("alpha", "alpha-v2") == output / "alpha-v2"

    def test_rename_display_name_only(self, mutator: CatalogMutator, output: Path, decks):
        """Should rewrite deck_name in the plan and keep the directory."""
        assert mutator.rename_deck("alpha", new_name="  Alpha Two ") == output / "alpha"
        plan = yaml.safe_load((output / "alpha" / "plan.yaml").read_text())
        assert plan["deck_name"] == "Alpha Two"
        assert plan["last_modified"]
        assert len(plan["slides"]) == 2

    def test_rename_name_and_slug(self, mutator: CatalogMutator, output: Path, decks):
        """Should apply both changes."""
        path = mutator.rename_deck("gamma", "delta", "Delta")
        assert path == output / "team" / "delta"
        assert yaml.safe_load((path / "plan.yaml").read_text())["deck_name"] == "Delta"

    def test_rename_collision_keeps_display_name(
        self, mutator: CatalogMutator, output: Path, decks
    ):
        """Should not touch the plan when the slug change is refused."""
        with pytest.raises(DuplicateEntityError):
            mutator.rename_deck("alpha", "beta", "Renamed")
        assert "deck_name" not in yaml.safe_load((output / "alpha" / "plan.yaml").read_text())

    def test_rename_rejects_empty_name(self, mutator: CatalogMutator, decks):
        """Should reject a blank display name."""
        with pytest.raises(ValidationError):
            mutator.rename_deck("alpha", new_name="   ")


class TestCreateDeck:
    """Tests for create_deck."""

    @pytest.fixture
    def template_dir(self, workspace: Path) -> Path:
        folder = workspace / "templates" / "pitch"
        (folder / "slides").mkdir(parents=True)
        (folder / "plan.yaml").write_text(yaml.safe_dump({"slides": [{"number": 1}]}))
        (folder / "slides" / "slide-1.html").write_text("<html>1</html>")
        return folder

    def test_copies_template(self, mutator: CatalogMutator, output: Path, template_dir: Path):
        """Should copy the template folder to output/<name>."""
        path = mutator.create_deck(template_dir, "q4-pitch")
        assert path == output / "q4-pitch"
        assert (path / "plan.yaml").exists()
        assert (path / "slides" / "slide-1.html").exists()
        assert (template_dir / "plan.yaml").exists()

    def test_collision(self, mutator: CatalogMutator, template_dir: Path, decks):
        """Should refuse to overwrite an existing deck."""
        with pytest.raises(DuplicateEntityError, match="A deck named 'alpha' already exists"):
            mutator.create_deck(template_dir, "alpha")

    def test_invalid_name(self, mutator: CatalogMutator, template_dir: Path):
        """Should validate the new slug."""
        with pytest.raises(ValidationError):
            mutator.create_deck(template_dir, "my deck")

    def test_missing_template(self, mutator: CatalogMutator, workspace: Path, output: Path):
        """Should raise TemplateNotFoundError and create nothing."""
        with pytest.raises(TemplateNotFoundError):
            mutator.create_deck(workspace / "templates" / "ghost", "new-deck")
        assert not (output / "new-deck").exists()


class TestDuplicateDeck:
    """Tests for duplicate_deck."""

    def test_numbered_copies(self, mutator: CatalogMutator, output: Path, make_deck):
        """Should pick -copy, then -copy-2, with matching display names."""
        make_deck("pitch", slides=2, built=[1], deck_name="Pitch")

        first = mutator.duplicate_deck("pitch")
        second = mutator.duplicate_deck("pitch")
        assert first == output / "pitch-copy"
        assert second == output / "pitch-copy-2"
        assert (first / "slides" / "slide-1.html").exists()
        assert yaml.safe_load((first / "plan.yaml").read_text())["deck_name"] == "Pitch Copy"
        assert yaml.safe_load((second / "plan.yaml").read_text())["deck_name"] == "Pitch Copy 2"
        assert yaml.safe_load((output / "pitch" / "plan.yaml").read_text())["deck_name"] == "Pitch"

    def test_copy_stays_in_folder(self, mutator: CatalogMutator, output: Path, decks):
        """Should place the copy beside the source and leave nameless plans alone."""
        path = mutator.duplicate_deck("gamma")
        assert path == output / "team" / "gamma-copy"
        assert "deck_name" not in yaml.safe_load((path / "plan.yaml").read_text())

    def test_missing_deck(self, mutator: CatalogMutator, decks):
        """Should raise DeckNotFoundError."""
        with pytest.raises(DeckNotFoundError):
            mutator.duplicate_deck("ghost")


class TestMoveDeck:
    """Tests for move_deck."""

    def test_move_root_to_folder(self, mutator: CatalogMutator, output: Path, decks):
        """Should move a root deck into a folder."""
        path = mutator.move_deck("alpha", None, "team")
        assert path == output / "team" / "alpha"
        assert not (output / "alpha").exists()

    def test_move_folder_to_root(self, mutator: CatalogMutator, output: Path, decks):
        """Should move a folder deck back to the root."""
        assert mutator.move_deck("gamma", "team", None) == output / "gamma"

    def test_move_to_same_location_is_noop(self, mutator: CatalogMutator, output: Path, decks):
        """Should leave the deck where it is."""
        assert mutator.move_deck("gamma", "team", "team") == output / "team" / "gamma"

    def test_move_missing_deck(self, mutator: CatalogMutator, decks):
        """Should raise DeckNotFoundError when the source is absent."""
        with pytest.raises(DeckNotFoundError):
            mutator.move_deck("alpha", "team", None)

    def test_move_to_missing_folder(self, mutator: CatalogMutator, output: Path, decks):
        """Should raise FolderNotFoundError and leave the deck in place."""
        with pytest.raises(FolderNotFoundError):
            mutator.move_deck("alpha", None, "ghost")
        assert (output / "alpha").is_dir()

    def test_move_collision(self, mutator: CatalogMutator, output: Path, make_deck, decks):
        """Should refuse to overwrite a deck with the same name at the target."""
        make_deck("team/alpha", slides=5)
        with pytest.raises(DuplicateEntityError):
            mutator.move_deck("alpha", None, "team")
        assert (output / "alpha" / "slides").is_dir()


class TestDeleteDeck:
    """Tests for delete_deck."""

    def test_delete_folder_deck(self, mutator: CatalogMutator, output: Path, decks):
        """Should locate and delete a deck inside a folder."""
        mutator.delete_deck("gamma")
        assert not (output / "team" / "gamma").exists()
        assert (output / "team").is_dir()

    def test_delete_missing_deck(self, mutator: CatalogMutator, decks):
        """Should raise DeckNotFoundError."""
        with pytest.raises(DeckNotFoundError):
            mutator.delete_deck("ghost")
