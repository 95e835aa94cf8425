"""
Game clock.

Counts whole seconds of play. The clock is polled once per input turn
instead of running on a timer thread.
"""
import time
from typing import Callable, Optional


class GameClock:
    """
    Elapsed-seconds counter for one game.

    Each call to ``elapsed_ticks`` reports the whole seconds passed since
    the previous call; the fractional remainder carries over.
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self._time_source = time_source
        self._last: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._last is not None

    def start(self) -> None:
        """Start (or restart) counting from now."""
        self._last = self._time_source()

    def stop(self) -> None:
        """Stop counting; later polls report nothing."""
        self._last = None

    def elapsed_ticks(self) -> int:
        """
        Whole seconds elapsed since the last poll.

        Returns:
            Number of one-second ticks, 0 when stopped.
        """
        if self._last is None:
            return 0
        now = self._time_source()
        ticks = int(now - self._last)
        if ticks > 0:
            self._last += ticks
        return ticks
