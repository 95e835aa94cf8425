"""
Single-slot save storage.

Only one saved game exists at a time; saving again discards the previous
save. The slot is a JSON file on disk.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import CorruptSaveError, NoSavedGameError, StorageUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_SAVE_PATH = Path.home() / ".minesweeper" / "save.json"


# ============================================================================
# Save Slot
# ============================================================================

class SaveSlot:
    """
    One named storage slot holding a serialized game.

    The snapshot is treated as opaque JSON; its meaning belongs to the
    game session.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the save slot.

        Args:
            path: File backing the slot (default: ~/.minesweeper/save.json).
        """
        self.path = Path(path) if path is not None else DEFAULT_SAVE_PATH

    def exists(self) -> bool:
        """Check if the slot holds a save."""
        return self.path.is_file()

    def save(self, snapshot: Dict[str, Any]) -> None:
        """
        Write a snapshot, replacing whatever the slot held.

        Raises:
            StorageUnavailableError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".save-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(snapshot, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageUnavailableError(
                f"Unable to save to {self.path}: {exc.strerror or exc}"
            ) from exc
        logger.info("Saved game to %s", self.path)

    def load(self) -> Dict[str, Any]:
        """
        Read the saved snapshot.

        Raises:
            NoSavedGameError: If the slot is empty.
            CorruptSaveError: If the file is not a JSON object.
            StorageUnavailableError: If the file cannot be read.
        """
        try:
            with open(self.path) as f:
                snapshot = json.load(f)
        except FileNotFoundError:
            raise NoSavedGameError() from None
        except json.JSONDecodeError as exc:
            raise CorruptSaveError(
                f"The saved game in {self.path} is not valid JSON"
            ) from exc
        except OSError as exc:
            raise StorageUnavailableError(
                f"Unable to load from {self.path}: {exc.strerror or exc}"
            ) from exc

        if not isinstance(snapshot, dict):
            raise CorruptSaveError(
                f"The saved game in {self.path} is not a game snapshot"
            )
        logger.info("Loaded game from %s", self.path)
        return snapshot

    def clear(self) -> None:
        """Delete the save, if any."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageUnavailableError(
                f"Unable to clear {self.path}: {exc.strerror or exc}"
            ) from exc
