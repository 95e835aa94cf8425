"""
Game session for Minesweeper.

Owns the one live board together with the player-facing state around it:
which cells are revealed, flagged or missed, the clock, and the save slot.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

import numpy as np

from .board import (
    Board,
    OutcomeResult,
    Position,
    count_adjacent_mines,
    evaluate_outcome,
    generate_board,
    plant_mines,
    reveal_flood_fill,
    should_auto_validate,
)
from .clock import GameClock
from .config import GameConfig
from .errors import CorruptSaveError, GameNotActiveError, StorageUnavailableError
from .persistence import SaveSlot

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

# Observation values
HIDDEN = -1
FLAGGED = -2
MISSED = -3
REVEALED_MINE = 9


@dataclass(frozen=True)
class MoveResult:
    """
    What a reveal or flag action did.

    Attributes:
        accepted: False if the action was ignored.
        revealed: Positions newly revealed by the action.
        hit_mine: True if the player revealed a mine.
        outcome: Set when the action ended the game.
    """

    accepted: bool
    revealed: FrozenSet[Position] = frozenset()
    hit_mine: bool = False
    outcome: Optional[OutcomeResult] = None


IGNORED = MoveResult(accepted=False)


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    A running game of Minesweeper.

    Exactly one board is live at a time. Starting a new game or loading a
    saved one tears down the current board and replaces it wholesale.
    """

    def __init__(
        self,
        save_slot: Optional[SaveSlot] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[GameClock] = None,
    ) -> None:
        """
        Initialize the session with no game in progress.

        Args:
            save_slot: Storage for save/load (None disables both).
            rng: Random generator used to plant mines.
            clock: Clock counting elapsed seconds.
        """
        self.save_slot = save_slot
        self.rng = rng or np.random.default_rng()
        self.clock = clock or GameClock()
        self.board: Optional[Board] = None
        self._reset_play_state()

    def _reset_play_state(self) -> None:
        self.revealed: Set[Position] = set()
        self.flagged: Set[Position] = set()
        self.missed: Set[Position] = set()
        self.exploded: Optional[Position] = None
        self.result: Optional[OutcomeResult] = None

    # ========================================================================
    # Lifecycle
    # ========================================================================

    @property
    def is_active(self) -> bool:
        """Check if a game is being played."""
        return self.board is not None and self.board.active

    @property
    def is_over(self) -> bool:
        """Check if the last game has been validated."""
        return self.result is not None

    def new_game(self, config: Optional[GameConfig] = None) -> Board:
        """
        Start a new game, replacing any game in progress.

        Args:
            config: Size and mine count (default: 8x8 with 10 mines).

        Returns:
            The freshly planted board.
        """
        config = config or GameConfig()
        self.teardown()

        board = generate_board(config.rows, config.cols)
        plant_mines(board, config.num_mines, self.rng)
        self._start(board)

        logger.info(
            "New game: %dx%d with %d mines",
            board.rows, board.cols, board.mine_target,
        )
        return board

    def teardown(self) -> None:
        """Drop the current game and stop the clock."""
        self.clock.stop()
        self.board = None
        self._reset_play_state()

    def _start(self, board: Board) -> None:
        self.board = board
        board.active = True
        self.clock.start()

    def tick(self) -> int:
        """
        Advance the elapsed-seconds counter.

        Returns:
            Seconds elapsed in the current game.
        """
        if self.board is None:
            return 0
        if self.board.active:
            self.board.seconds += self.clock.elapsed_ticks()
        return self.board.seconds

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> MoveResult:
        """
        Reveal a cell.

        A mine ends the game immediately. A safe cell with no adjacent
        mines opens up the surrounding empty region.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The result of the move; ``accepted`` is False if ignored.
        """
        position = (row, col)
        if not self._accepts_move(position):
            return IGNORED
        if position in self.revealed or position in self.flagged:
            return IGNORED

        self.board.clicks += 1

        if self.board.has_mine(row, col):
            self.exploded = position
            self.revealed.add(position)
            outcome = self.validate()
            return MoveResult(
                accepted=True,
                revealed=frozenset([position]),
                hit_mine=True,
                outcome=outcome,
            )

        newly_revealed = reveal_flood_fill(
            self.board, row, col, self.revealed, self.flagged
        )
        return MoveResult(
            accepted=True,
            revealed=frozenset(newly_revealed),
            outcome=self._auto_validate(),
        )

    def toggle_flag(self, row: int, col: int) -> MoveResult:
        """
        Flag or unflag a cell as holding a mine.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The result of the move; ``accepted`` is False if ignored.
        """
        position = (row, col)
        if not self._accepts_move(position):
            return IGNORED
        if position in self.revealed:
            return IGNORED

        self.board.clicks += 1

        if position in self.flagged:
            self.flagged.discard(position)
            self.board.mines_remaining += 1
        else:
            self.flagged.add(position)
            self.board.mines_remaining -= 1

        return MoveResult(accepted=True, outcome=self._auto_validate())

    def _accepts_move(self, position: Position) -> bool:
        return self.is_active and self.board.is_valid_position(*position)

    def _auto_validate(self) -> Optional[OutcomeResult]:
        """Validate if the remaining counts say the game is decided."""
        if should_auto_validate(self.board, self.revealed, self.flagged):
            return self.validate()
        return None

    def validate(self) -> OutcomeResult:
        """
        End the game and score it.

        Returns:
            The win/loss result.

        Raises:
            GameNotActiveError: If no game is being played.
        """
        if not self.is_active:
            raise GameNotActiveError("validate")

        self.tick()
        result = evaluate_outcome(self.board, self.revealed, self.flagged)
        self.board.active = False
        self.clock.stop()
        self.missed = set(result.missed)
        self.result = result

        logger.info(
            "Game over: %s after %d clicks and %d seconds",
            result.outcome.name, self.board.clicks, self.board.seconds,
        )
        return result

    def cheat(self) -> FrozenSet[Position]:
        """
        Get every mined position so the front end can outline them.

        Raises:
            GameNotActiveError: If no game is being played.
        """
        if not self.is_active:
            raise GameNotActiveError("cheat")
        logger.info("Cheat used")
        return frozenset(self.board.mined_positions())

    # ========================================================================
    # Presentation Queries
    # ========================================================================

    def adjacent_count(self, row: int, col: int) -> Optional[int]:
        """Adjacent mine count for a cell, or None if off the board."""
        if self.board is None or not self.board.is_valid_position(row, col):
            return None
        return count_adjacent_mines(self.board, row, col)

    def unknown_count(self) -> int:
        """Number of cells neither revealed nor flagged."""
        if self.board is None:
            return 0
        return self.board.total_cells - len(self.revealed) - len(self.flagged)

    def observation(self) -> np.ndarray:
        """
        Get what the player can see as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                -3 = missed mine (after a loss)
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        if self.board is None:
            raise GameNotActiveError("observe the board")

        counts = self.board.adjacency_map()
        obs = np.full((self.board.rows, self.board.cols), HIDDEN, dtype=np.int8)
        for row, col in self.revealed:
            if self.board.has_mine(row, col):
                obs[row, col] = REVEALED_MINE
            else:
                obs[row, col] = counts[row, col]
        for row, col in self.flagged:
            obs[row, col] = FLAGGED
        for row, col in self.missed:
            obs[row, col] = MISSED
        return obs

    # ========================================================================
    # Save / Load
    # ========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """
        Serialize the game in progress, board and presentation state included.

        Raises:
            GameNotActiveError: If no game is being played.
        """
        if not self.is_active:
            raise GameNotActiveError("save")

        data = self.board.to_dict()
        data["format_version"] = FORMAT_VERSION
        data["presentation"] = {
            "revealed": _encode_positions(self.revealed),
            "flagged": _encode_positions(self.flagged),
            "missed": _encode_positions(self.missed),
            "exploded": list(self.exploded) if self.exploded else None,
        }
        return data

    def restore(self, snapshot: Dict[str, Any]) -> Board:
        """
        Replace the current game with a serialized one.

        The snapshot is fully decoded first, so a bad snapshot leaves the
        current game untouched.

        Raises:
            CorruptSaveError: If the snapshot cannot be decoded or holds a
                game that has already ended.
        """
        try:
            version = snapshot.get("format_version", FORMAT_VERSION)
            if version != FORMAT_VERSION:
                raise ValueError(f"unsupported format version {version}")
            board = Board.from_dict(snapshot)
            presentation = snapshot.get("presentation") or {}
            revealed = _decode_positions(board, presentation.get("revealed", []))
            flagged = _decode_positions(board, presentation.get("flagged", []))
            missed = _decode_positions(board, presentation.get("missed", []))
            exploded_raw = presentation.get("exploded")
            exploded = None
            if exploded_raw is not None:
                (exploded,) = _decode_positions(board, [exploded_raw])
            if exploded is not None or missed:
                raise ValueError("the game in it has already ended")
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise CorruptSaveError(f"The saved game could not be read: {exc}") from exc

        self.teardown()
        self.revealed = revealed
        self.flagged = flagged
        self.missed = missed
        self.exploded = exploded
        self._start(board)
        return board

    def save(self) -> None:
        """
        Save the game in progress, overwriting any previous save.

        Raises:
            GameNotActiveError: If no game is being played.
            StorageUnavailableError: If saving is not possible.
        """
        if not self.is_active:
            raise GameNotActiveError("save")
        slot = self._require_slot()
        self.tick()
        slot.save(self.snapshot())

    def load(self) -> Board:
        """
        Replace the current game with the saved one.

        Raises:
            StorageUnavailableError: If loading is not possible.
            NoSavedGameError: If nothing has been saved.
            CorruptSaveError: If the save cannot be decoded.
        """
        slot = self._require_slot()
        board = self.restore(slot.load())
        logger.info(
            "Resumed %dx%d game at %d seconds",
            board.rows, board.cols, board.seconds,
        )
        return board

    def _require_slot(self) -> SaveSlot:
        if self.save_slot is None:
            raise StorageUnavailableError(
                "Saving & loading is not available in this session."
            )
        return self.save_slot


# ============================================================================
# Snapshot Helpers
# ============================================================================

def _encode_positions(positions: Iterable[Position]) -> List[List[int]]:
    return [[row, col] for row, col in sorted(positions)]


def _decode_positions(board: Board, raw: Iterable[Any]) -> Set[Position]:
    positions = set()
    for item in raw:
        row, col = (int(value) for value in item)
        if not board.is_valid_position(row, col):
            raise ValueError(f"position ({row}, {col}) is off the board")
        positions.add((row, col))
    return positions
