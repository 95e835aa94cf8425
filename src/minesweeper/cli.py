"""
Minesweeper - terminal front end.

Usage:
    python main.py play [--size {1,2,4}] [--mines N] [--save-file PATH]
    python main.py load [--save-file PATH]
"""
import argparse
import logging
from typing import Callable, FrozenSet, List, Optional

from .board import Board, Position
from .config import BASE_DIMENSION, DEFAULT_MINES, SIZE_MULTIPLIERS, GameConfig
from .errors import GameNotActiveError, MinesweeperError
from .persistence import DEFAULT_SAVE_PATH, SaveSlot
from .render import render_board, render_stats
from .session import GameSession, MoveResult


HELP_TEXT = """\
Commands:
  r ROW COL          reveal a cell
  f ROW COL          flag or unflag a cell as a mine
  v                  validate (end the game and score it)
  s                  save the game (replaces any previous save)
  l                  load the saved game
  c                  cheat: outline every mine
  n [SIZE [MINES]]   new game; SIZE is 1, 2 or 4 (default: same settings)
  h                  show this help
  q                  quit

The game validates itself once every mine is flagged, or once the
cells left unknown are no more than the mines left to find."""


# ============================================================================
# Interactive Prompt
# ============================================================================

class Prompt:
    """
    Read-eval loop driving a game session from typed commands.

    Notices raised by the session are printed, never propagated.
    """

    def __init__(
        self,
        session: GameSession,
        config: GameConfig,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.session = session
        self.config = config
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.cheat: FrozenSet[Position] = frozenset()

    def run(self) -> None:
        """Prompt for commands until the player quits or input ends."""
        self.show()
        while True:
            try:
                line = self.input_fn("> ")
            except EOFError:
                break
            self.session.tick()
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """
        Run one command.

        Returns:
            False when the player asked to quit.
        """
        parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in ("q", "quit"):
            return False
        if command in ("h", "help"):
            self.output_fn(HELP_TEXT)
            return True

        try:
            self._dispatch(command, args)
        except MinesweeperError as exc:
            self.notice(exc.title, exc.message)
        return True

    def _dispatch(self, command: str, args: List[str]) -> None:
        if command in ("r", "f"):
            position = self._parse_position(args)
            if position is None:
                return
            if command == "r":
                result = self.session.reveal(*position)
            else:
                result = self.session.toggle_flag(*position)
            self._report_move(result)
        elif command == "v":
            self.session.validate()
            self._end_cheat()
            self.show()
        elif command == "s":
            self.session.save()
            self.notice("Save Successful", "Your game has successfully been saved")
        elif command == "l":
            self._load()
        elif command == "c":
            self._cheat()
        elif command == "n":
            self._new_game(args)
        else:
            self.output_fn(f"Unknown command: {command} (h for help)")

    def _parse_position(self, args: List[str]) -> Optional[Position]:
        if len(args) != 2:
            self.output_fn("Expected a row and a column, e.g. r 3 4")
            return None
        try:
            return int(args[0]), int(args[1])
        except ValueError:
            self.output_fn("Row and column must be whole numbers")
            return None

    def _report_move(self, result: MoveResult) -> None:
        if not result.accepted:
            self.output_fn("Nothing to do there")
            return
        if result.outcome is not None:
            self._end_cheat()
        self.show()

    def _new_game(self, args: List[str]) -> None:
        if len(args) > 2:
            self.output_fn("Expected at most a size and a mine count, e.g. n 2 40")
            return
        if args:
            size = args[0]
            mines = args[1] if len(args) == 2 else self.config.num_mines
            try:
                self.config = GameConfig.from_inputs(size, mines)
            except ValueError as exc:
                self.output_fn(str(exc))
                return
        self.session.new_game(self.config)
        self._end_cheat()
        self.show()

    def _load(self) -> None:
        if self.session.is_active and not self.confirm(
            "Are you sure you wish to stop the current game and load a new one?"
        ):
            return
        board = self.session.load()
        self.config = config_for_board(board)
        self._end_cheat()
        self.notice(
            "Load Successful",
            "Your previously saved game has successfully been loaded",
        )
        self.show()

    def _cheat(self) -> None:
        if not self.session.is_active:
            raise GameNotActiveError("cheat")
        if not self.confirm(
            "Cheating is a dirty habit, you know. All cells that contain "
            "mines will be outlined. Continue?"
        ):
            return
        self.cheat = self.session.cheat()
        self.show()

    def _end_cheat(self) -> None:
        self.cheat = frozenset()

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question; anything but yes means no."""
        try:
            answer = self.input_fn(f"{question} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")

    def notice(self, title: str, message: str) -> None:
        self.output_fn(f"[{title}] {message}")

    def show(self) -> None:
        self.output_fn(render_board(self.session, cheat=self.cheat))
        self.output_fn(render_stats(self.session))


# ============================================================================
# Commands
# ============================================================================

def config_for_board(board: Board) -> GameConfig:
    """Settings matching a loaded board, used for the next new game."""
    size = board.rows // BASE_DIMENSION
    if size not in SIZE_MULTIPLIERS:
        return GameConfig()
    return GameConfig.from_inputs(size, board.mine_target)


def play(args: argparse.Namespace) -> None:
    """Start a new game and hand over to the prompt."""
    config = GameConfig.from_inputs(args.size, args.mines)
    session = GameSession(save_slot=SaveSlot(args.save_file))
    session.new_game(config)

    print(
        f"Board: {config.rows}x{config.cols} with {config.num_mines} mines. "
        "Type h for help."
    )
    Prompt(session, config).run()


def load(args: argparse.Namespace) -> None:
    """Resume the saved game."""
    session = GameSession(save_slot=SaveSlot(args.save_file))
    try:
        board = session.load()
    except MinesweeperError as exc:
        print(f"[{exc.title}] {exc.message}")
        return

    config = config_for_board(board)
    print("Your previously saved game has successfully been loaded")
    Prompt(session, config).run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Minesweeper in the terminal")
    parser.add_argument(
        "--verbose", action="store_true", help="Log game events to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Start a new game")
    play_parser.add_argument(
        "--size",
        type=int,
        choices=SIZE_MULTIPLIERS,
        default=1,
        help="Board size multiplier: 1 = 8x8, 2 = 16x16, 4 = 32x32",
    )
    play_parser.add_argument(
        "--mines",
        default=str(DEFAULT_MINES),
        help="Number of mines (non-numeric input keeps the default)",
    )

    load_parser = subparsers.add_parser("load", help="Resume the saved game")

    for sub in (play_parser, load_parser):
        sub.add_argument(
            "--save-file",
            default=str(DEFAULT_SAVE_PATH),
            help="File holding the saved game",
        )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "load":
        load(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
