"""
Unit tests for the single save slot.
"""
import json
from pathlib import Path

import pytest

from minesweeper import (
    CorruptSaveError,
    NoSavedGameError,
    SaveSlot,
    StorageUnavailableError,
)


class TestSaveSlot:
    """Test writing and reading the save file."""

    def test_empty_slot_does_not_exist(self, save_slot: SaveSlot) -> None:
        assert save_slot.exists() is False

    def test_save_then_load(self, save_slot: SaveSlot) -> None:
        snapshot = {"rows": 3, "cols": 3, "grid": [[{"has_mine": True}]]}
        save_slot.save(snapshot)
        assert save_slot.exists() is True
        assert save_slot.load() == snapshot

    def test_save_overwrites(self, save_slot: SaveSlot) -> None:
        """Only the most recent save is kept."""
        save_slot.save({"clicks": 1})
        save_slot.save({"clicks": 2})
        assert save_slot.load() == {"clicks": 2}

    def test_save_creates_parent_directory(self, tmp_path: Path) -> None:
        slot = SaveSlot(tmp_path / "nested" / "dir" / "save.json")
        slot.save({"ok": True})
        assert slot.load() == {"ok": True}

    def test_save_leaves_no_temp_files(self, save_slot: SaveSlot) -> None:
        save_slot.save({"ok": True})
        assert [p.name for p in save_slot.path.parent.iterdir()] == ["save.json"]

    def test_load_missing_raises(self, save_slot: SaveSlot) -> None:
        with pytest.raises(NoSavedGameError, match="do not have any saved games"):
            save_slot.load()

    def test_load_invalid_json_raises(self, save_slot: SaveSlot) -> None:
        save_slot.path.write_text("{not json")
        with pytest.raises(CorruptSaveError, match="not valid JSON"):
            save_slot.load()

    def test_load_non_object_raises(self, save_slot: SaveSlot) -> None:
        save_slot.path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(CorruptSaveError, match="not a game snapshot"):
            save_slot.load()

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        """A path under a regular file cannot hold a save."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        slot = SaveSlot(blocker / "save.json")
        with pytest.raises(StorageUnavailableError):
            slot.save({"ok": True})

    def test_clear_removes_save(self, save_slot: SaveSlot) -> None:
        save_slot.save({"ok": True})
        save_slot.clear()
        assert save_slot.exists() is False
        save_slot.clear()

    def test_default_path_is_in_home(self) -> None:
        assert SaveSlot().path == Path.home() / ".minesweeper" / "save.json"
