"""
Exceptions reported to the player as notices.

None of these leave the live game in a changed state.
"""


class MinesweeperError(Exception):
    """Base class for user-visible game notices."""

    title = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GameNotActiveError(MinesweeperError):
    """An action needs a game in progress and there is none."""

    def __init__(self, action: str) -> None:
        super().__init__(
            f"You must be actively playing a game in order to {action}."
        )
        self.action = action


class PersistenceError(MinesweeperError):
    """Saving or loading failed."""


class StorageUnavailableError(PersistenceError):
    """The save slot cannot be used at all."""


class NoSavedGameError(PersistenceError):
    """The save slot is empty."""

    def __init__(self) -> None:
        super().__init__("You do not have any saved games to load...")


class CorruptSaveError(PersistenceError):
    """The save slot holds data that is not a saved game."""
