"""
Minesweeper game module.

Provides the board engine, the game session that drives it, and the
terminal and gymnasium front ends.
"""
from .cell import Cell
from .board import (
    Board,
    Outcome,
    OutcomeResult,
    generate_board,
    plant_mines,
    count_adjacent_mines,
    reveal_flood_fill,
    evaluate_outcome,
    should_auto_validate,
)
from .config import GameConfig, parse_mine_count
from .errors import (
    MinesweeperError,
    GameNotActiveError,
    PersistenceError,
    StorageUnavailableError,
    NoSavedGameError,
    CorruptSaveError,
)
from .clock import GameClock
from .persistence import SaveSlot
from .session import GameSession, MoveResult
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "Board",
    "Outcome",
    "OutcomeResult",
    "generate_board",
    "plant_mines",
    "count_adjacent_mines",
    "reveal_flood_fill",
    "evaluate_outcome",
    "should_auto_validate",
    "GameConfig",
    "parse_mine_count",
    "MinesweeperError",
    "GameNotActiveError",
    "PersistenceError",
    "StorageUnavailableError",
    "NoSavedGameError",
    "CorruptSaveError",
    "GameClock",
    "SaveSlot",
    "GameSession",
    "MoveResult",
    "MinesweeperEnv",
]
