"""
Board module for Minesweeper game.

Implements the board engine: grid generation, mine planting, adjacency
counting, flood-fill reveal, and win/loss evaluation.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import (
    AbstractSet, Any, Dict, FrozenSet, Iterator, List, Optional, Set, Tuple,
)

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

# (delta_row, delta_col); (0, 0) is the cell itself and is skipped
NEIGHBOR_OFFSETS: Tuple[Position, ...] = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)


class Outcome(Enum):
    """Possible results of validating a game."""

    WIN = auto()
    LOSS = auto()


@dataclass(frozen=True)
class OutcomeResult:
    """
    Result of evaluating a board.

    Attributes:
        outcome: Win or loss.
        missed: Unknown cells holding a mine the player failed to
            identify. Only filled when the loss came from leaving a
            mix of safe and mined cells unknown.
    """

    outcome: Outcome
    missed: FrozenSet[Position] = frozenset()

    @property
    def is_win(self) -> bool:
        """Check if the game was won."""
        return self.outcome == Outcome.WIN

    @property
    def message(self) -> str:
        """Banner text for the presentation layer."""
        return "You Win!" if self.is_win else "You Lose!"


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Holds the grid of cells and the scalar game metadata. Revealed and
    flagged state is owned by the caller and passed in where needed.
    """

    rows: int
    cols: int
    mine_target: int = 0
    mines_remaining: int = 0
    clicks: int = 0
    seconds: int = 0
    active: bool = False
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and build the grid if none was given."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if not self._grid:
            self._grid = [
                [Cell() for _ in range(self.cols)] for _ in range(self.rows)
            ]

    # ========================================================================
    # Cell Access (Low-level)
    # ========================================================================

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def has_mine(self, row: int, col: int) -> bool:
        """Check for a mine; positions off the board never have one."""
        cell = self.get_cell(row, col)
        return cell is not None and cell.has_mine

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        result = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_position(new_row, new_col):
                result.append((new_row, new_col))
        return result

    def positions(self) -> Iterator[Position]:
        """Iterate over every position in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    # ========================================================================
    # Mine Queries (Mid-level)
    # ========================================================================

    def mined_positions(self) -> Set[Position]:
        """Get the positions of every planted mine."""
        return {pos for pos in self.positions() if self.has_mine(*pos)}

    @property
    def mine_count(self) -> int:
        """Number of mines actually planted."""
        return sum(1 for pos in self.positions() if self.has_mine(*pos))

    def mine_mask(self) -> np.ndarray:
        """Boolean array, True where a mine is planted."""
        mask = np.zeros((self.rows, self.cols), dtype=bool)
        for row, col in self.positions():
            mask[row, col] = self._grid[row][col].has_mine
        return mask

    def adjacency_map(self) -> np.ndarray:
        """
        Get adjacent mine counts for the whole board.

        Returns:
            2D int8 array of counts (0-8). Mined cells hold the count of
            their own mined neighbors.
        """
        counts = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row, col in self.positions():
            counts[row, col] = count_adjacent_mines(self, row, col)
        return counts

    # ========================================================================
    # Serialization (High-level)
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rows": self.rows,
            "cols": self.cols,
            "mine_target": self.mine_target,
            "mines_remaining": self.mines_remaining,
            "clicks": self.clicks,
            "seconds": self.seconds,
            "grid": [[cell.to_dict() for cell in line] for line in self._grid],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        """
        Rebuild a board from its serialized form.

        The restored board is inactive; the owner decides when play resumes.

        Raises:
            ValueError: If the grid does not match the stated dimensions,
                or the mine count leaves no safe cell or disagrees with
                the grid.
        """
        rows = int(data["rows"])
        cols = int(data["cols"])
        grid = [[Cell.from_dict(item) for item in line] for line in data["grid"]]
        if len(grid) != rows or any(len(line) != cols for line in grid):
            raise ValueError(
                f"Grid shape does not match {rows}x{cols} board"
            )

        mine_target = int(data["mine_target"])
        if not 0 <= mine_target < rows * cols:
            raise ValueError(
                f"Mine count {mine_target} out of range for {rows}x{cols} board"
            )
        planted = sum(cell.has_mine for line in grid for cell in line)
        if planted != mine_target:
            raise ValueError(
                f"Grid holds {planted} mines, expected {mine_target}"
            )

        return cls(
            rows=rows,
            cols=cols,
            mine_target=mine_target,
            mines_remaining=int(data["mines_remaining"]),
            clicks=int(data.get("clicks", 0)),
            seconds=int(data.get("seconds", 0)),
            _grid=grid,
        )


# ============================================================================
# Board Engine Operations
# ============================================================================

def generate_board(rows: int, cols: int) -> Board:
    """Create a rows x cols board with no mines."""
    return Board(rows=rows, cols=cols)


def plant_mines(
    board: Board,
    mine_count: int,
    rng: Optional[np.random.Generator] = None,
) -> Board:
    """
    Plant mines at uniformly random positions.

    Draws random positions until exactly ``mine_count`` cells are mined.
    Drawing a cell that already holds a mine is simply retried, so the
    caller must keep ``mine_count`` below the number of cells.

    Args:
        board: Freshly generated board.
        mine_count: Number of mines the board should end up with.
        rng: Random generator (default: a fresh ``default_rng``).

    Returns:
        The same board, mined.
    """
    rng = rng or np.random.default_rng()
    planted = board.mine_count
    attempts = 0
    while planted < mine_count:
        row = int(rng.integers(board.rows))
        col = int(rng.integers(board.cols))
        attempts += 1
        if board._grid[row][col].plant():
            planted += 1

    board.mine_target = mine_count
    board.mines_remaining = mine_count
    logger.debug(
        "Planted %d mines on %dx%d board in %d draws",
        mine_count, board.rows, board.cols, attempts,
    )
    return board


def count_adjacent_mines(board: Board, row: int, col: int) -> int:
    """Count mines in the 8 cells around a position (0-8)."""
    count = 0
    for delta_row, delta_col in NEIGHBOR_OFFSETS:
        if board.has_mine(row + delta_row, col + delta_col):
            count += 1
    return count


def reveal_flood_fill(
    board: Board,
    row: int,
    col: int,
    revealed: Set[Position],
    flagged: AbstractSet[Position] = frozenset(),
) -> Set[Position]:
    """
    Reveal a safe cell, cascading through zero-adjacency neighbors.

    Cells with adjacent mines are revealed but not expanded. Cells that
    are off the board, already revealed, flagged or mined are skipped.
    Mine reveals are a separate action and never come through here.

    Args:
        board: Board to reveal on.
        row: Row index of the starting cell.
        col: Column index of the starting cell.
        revealed: Positions already revealed; updated in place.
        flagged: Positions carrying a flag.

    Returns:
        Positions newly revealed by this call.
    """
    newly_revealed: Set[Position] = set()
    stack: List[Position] = [(row, col)]

    while stack:
        position = stack.pop()
        if not board.is_valid_position(*position):
            continue
        if position in revealed or position in flagged:
            continue
        if board.has_mine(*position):
            continue

        revealed.add(position)
        newly_revealed.add(position)

        if count_adjacent_mines(board, *position) == 0:
            stack.extend(board.neighbors(*position))

    logger.debug(
        "Flood fill from (%d, %d) revealed %d cells",
        row, col, len(newly_revealed),
    )
    return newly_revealed


def unknown_positions(
    board: Board,
    revealed: AbstractSet[Position],
    flagged: AbstractSet[Position],
) -> Set[Position]:
    """Positions that are neither revealed nor flagged."""
    return {
        pos for pos in board.positions()
        if pos not in revealed and pos not in flagged
    }


def evaluate_outcome(
    board: Board,
    revealed: AbstractSet[Position],
    flagged: AbstractSet[Position],
) -> OutcomeResult:
    """
    Decide whether the game is won or lost.

    The game is lost when a mine was revealed, when any flag sits on a
    safe cell, or when the unknown cells are a mix of mined and safe
    ones. Leaving only mines unknown still counts as a win.

    Args:
        board: Board being validated.
        revealed: Positions the player revealed.
        flagged: Positions the player flagged.

    Returns:
        The outcome, with the missed mines when unknown cells were mixed.
    """
    lost = any(board.has_mine(*pos) for pos in revealed)
    if any(not board.has_mine(*pos) for pos in flagged):
        lost = True

    unknown = unknown_positions(board, revealed, flagged)
    unknown_mined = frozenset(pos for pos in unknown if board.has_mine(*pos))
    if unknown_mined and len(unknown_mined) != len(unknown):
        return OutcomeResult(Outcome.LOSS, missed=unknown_mined)

    return OutcomeResult(Outcome.LOSS if lost else Outcome.WIN)


def should_auto_validate(
    board: Board,
    revealed: AbstractSet[Position],
    flagged: AbstractSet[Position],
) -> bool:
    """
    Check whether the game should be validated without being asked.

    True once every mine has a flag, or once the unknown cells are no
    more than the mines still unaccounted for.
    """
    if board.mines_remaining == 0:
        return True
    unknown = unknown_positions(board, revealed, flagged)
    return len(unknown) <= board.mines_remaining
