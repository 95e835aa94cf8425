"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, List

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, Cell, GameClock, GameConfig, GameSession, SaveSlot


# ============================================================================
# Layout Helpers
# ============================================================================

def make_board(layout: List[str]) -> Board:
    """
    Build a board from a text diagram.

    Each string is a row; '*' marks a mine, anything else is safe.
    Mine target and mines remaining are set to the number of mines.
    """
    grid = [[Cell(has_mine=char == "*") for char in line] for line in layout]
    mines = sum(line.count("*") for line in layout)
    return Board(
        rows=len(layout),
        cols=len(layout[0]),
        mine_target=mines,
        mines_remaining=mines,
        _grid=grid,
    )


def board_from_mask(mask: np.ndarray) -> Board:
    """Build a board from a boolean mine mask."""
    layout = ["".join("*" if value else "." for value in row) for row in mask]
    return make_board(layout)


class FakeTime:
    """Controllable time source for the game clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def board_from_layout() -> Callable[[List[str]], Board]:
    """Factory building boards from text diagrams."""
    return make_board


@pytest.fixture
def board_from_mask_factory() -> Callable[[np.ndarray], Board]:
    """Factory building boards from boolean mine masks."""
    return board_from_mask


@pytest.fixture
def corner_board() -> Board:
    """3x3 board with mines in opposite corners."""
    return make_board([
        "*..",
        "...",
        "..*",
    ])


@pytest.fixture
def standard_board() -> Board:
    """8x8 board with 10 mines and an empty region around (0, 0)."""
    return make_board([
        "........",
        "........",
        "........",
        ".....**.",
        "....*.*.",
        "...*...*",
        "..*.*...",
        ".*...*..",
    ])


@pytest.fixture
def empty_board() -> Board:
    """Board with no mines for cascade testing."""
    return make_board(["....."] * 5)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def save_slot(tmp_path: Path) -> SaveSlot:
    """Save slot in a temporary directory."""
    return SaveSlot(tmp_path / "save.json")


@pytest.fixture
def make_session(
    save_slot: SaveSlot, fake_time: FakeTime
) -> Callable[[List[str]], GameSession]:
    """Factory for an active session playing a fixed layout."""
    def factory(layout: List[str]) -> GameSession:
        session = GameSession(
            save_slot=save_slot,
            rng=np.random.default_rng(0),
            clock=GameClock(time_source=fake_time),
        )
        session.restore(make_board(layout).to_dict())
        return session

    return factory


@pytest.fixture
def corner_session(make_session) -> GameSession:
    """Active session on the 3x3 corner-mines layout."""
    return make_session([
        "*..",
        "...",
        "..*",
    ])


@pytest.fixture
def default_session(save_slot: SaveSlot, fake_time: FakeTime) -> GameSession:
    """Active session with a randomly planted default game."""
    session = GameSession(
        save_slot=save_slot,
        rng=np.random.default_rng(42),
        clock=GameClock(time_source=fake_time),
    )
    session.new_game(GameConfig())
    return session
