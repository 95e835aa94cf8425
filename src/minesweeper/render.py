"""
Text rendering for the terminal front end.
"""
from typing import AbstractSet

from .board import Position
from .session import FLAGGED, HIDDEN, MISSED, REVEALED_MINE, GameSession


GLYPHS = {
    HIDDEN: ".",
    FLAGGED: "F",
    MISSED: "X",
    REVEALED_MINE: "*",
    0: " ",
}
WRONG_FLAG = "!"
CHEAT_MINE = "m"


def cell_glyph(value: int) -> str:
    """Glyph for one observation value."""
    return GLYPHS.get(value, str(value))


def render_board(
    session: GameSession,
    cheat: AbstractSet[Position] = frozenset(),
) -> str:
    """
    Render the board as text with row and column headers.

    Args:
        session: Session whose board to draw.
        cheat: Mined positions to outline while the game is running.

    Returns:
        Multi-line string, one line per row.
    """
    board = session.board
    if board is None:
        return ""

    obs = session.observation()
    width = len(str(max(board.rows, board.cols) - 1))

    header = " " * (width + 1) + " ".join(
        str(col).rjust(width) for col in range(board.cols)
    )
    lines = [header]

    for row in range(board.rows):
        glyphs = []
        for col in range(board.cols):
            value = int(obs[row, col])
            glyph = cell_glyph(value)
            if value == FLAGGED and session.is_over and not board.has_mine(row, col):
                glyph = WRONG_FLAG
            elif value == HIDDEN and (row, col) in cheat:
                glyph = CHEAT_MINE
            glyphs.append(glyph.rjust(width))
        lines.append(str(row).rjust(width) + " " + " ".join(glyphs))

    return "\n".join(lines)


def render_stats(session: GameSession) -> str:
    """Render the time, mines and clicks line, plus the result if over."""
    board = session.board
    if board is None:
        return "No game in progress"

    stats = (
        f"Time: {board.seconds}s  "
        f"Mines: {board.mines_remaining}  "
        f"Clicks: {board.clicks}"
    )
    if session.result is not None:
        stats += f"\n{session.result.message}"
    return stats
