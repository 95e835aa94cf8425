"""
Game configuration.

Turns the raw size and mine-count inputs into a validated configuration
that is always safe to plant.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

BASE_DIMENSION = 8
DEFAULT_MINES = 10
SIZE_MULTIPLIERS = (1, 2, 4)


def parse_mine_count(value: Any, default: int = DEFAULT_MINES) -> int:
    """
    Read a mine count from loosely typed input.

    Anything that reads as a finite number is accepted and truncated to
    an integer. Anything else, including blank text, keeps the default.

    Args:
        value: Raw input, such as the text typed by the player.
        default: Count to keep when the input is not a number.

    Returns:
        The parsed count, not yet range-checked.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number)


# ============================================================================
# Game Configuration
# ============================================================================

@dataclass
class GameConfig:
    """
    Configuration for a new game.

    Attributes:
        size_multiplier: Scale applied to the 8x8 base board (1, 2 or 4).
        num_mines: Total mines to plant.
    """

    size_multiplier: int = 1
    num_mines: int = DEFAULT_MINES

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size_multiplier not in SIZE_MULTIPLIERS:
            raise ValueError(
                f"Board size multiplier must be one of {SIZE_MULTIPLIERS}"
            )
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.num_mines > self.max_mines:
            raise ValueError(f"Too many mines (max {self.max_mines})")

    @property
    def rows(self) -> int:
        return BASE_DIMENSION * self.size_multiplier

    @property
    def cols(self) -> int:
        return BASE_DIMENSION * self.size_multiplier

    @property
    def max_mines(self) -> int:
        """Largest mine count that still leaves one safe cell."""
        return self.rows * self.cols - 1

    @classmethod
    def from_inputs(cls, size: Any = 1, mines: Any = None) -> "GameConfig":
        """
        Build a configuration from raw player input.

        The mine count is clamped into range rather than rejected, so
        planting always terminates.

        Args:
            size: Board size multiplier.
            mines: Mine count override; non-numeric input keeps 10.

        Raises:
            ValueError: If the size is not a supported multiplier.
        """
        try:
            size_multiplier = int(size)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid board size: {size!r}") from None
        if size_multiplier not in SIZE_MULTIPLIERS:
            raise ValueError(
                f"Board size multiplier must be one of {SIZE_MULTIPLIERS}"
            )

        side = BASE_DIMENSION * size_multiplier
        max_mines = side * side - 1
        num_mines = parse_mine_count(mines)
        clamped = min(max(num_mines, 0), max_mines)
        if clamped != num_mines:
            logger.warning(
                "Mine count %d out of range for %dx%d board, using %d",
                num_mines, side, side, clamped,
            )

        return cls(size_multiplier=size_multiplier, num_mines=clamped)
