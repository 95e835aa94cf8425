"""
Cell module for Minesweeper game.

A cell only knows whether it holds a mine. Whether it has been revealed,
flagged or marked as missed is tracked by the game session.
"""
from dataclasses import dataclass
from typing import Any, Dict


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        has_mine: Whether this cell contains a mine.
    """

    has_mine: bool = False

    def plant(self) -> bool:
        """
        Plant a mine in this cell.

        Returns:
            True if a mine was planted, False if one was already here.
        """
        if self.has_mine:
            return False
        self.has_mine = True
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"has_mine": self.has_mine}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cell":
        """
        Rebuild a cell from its serialized form.

        Raises:
            ValueError: If ``has_mine`` is not a JSON boolean.
        """
        has_mine = data["has_mine"]
        if not isinstance(has_mine, bool):
            raise ValueError(f"has_mine must be true or false, got {has_mine!r}")
        return cls(has_mine=has_mine)
