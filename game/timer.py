import time
from typing import Callable

Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Default clock: monotonic milliseconds, only meaningful as differences."""
    return time.monotonic_ns() // 1_000_000


class PlayTimer:
    """
    Accumulates active play time across pause/resume boundaries.

    Attributes:
        max_time_ms (int): Play time budget; totals are clamped to it.
        elapsed_ms (int): Active time folded in so far.
        start_ms (int): Clock value of the last resume.
    """

    def __init__(self, max_time_ms: int):
        self.max_time_ms = max_time_ms
        self.elapsed_ms = 0
        self.start_ms = 0

    def start(self, now: int):
        """Zero the timer for a new session, running from `now`."""
        self.elapsed_ms = 0
        self.start_ms = now

    def fold(self, now: int):
        """Add the active interval since the last resume. Call when leaving play."""
        self.elapsed_ms = min(
            self.max_time_ms, self.elapsed_ms + max(0, now - self.start_ms)
        )

    def resume(self, now: int):
        self.start_ms = now

    def expire(self):
        self.elapsed_ms = self.max_time_ms

    def total(self, now: int, running: bool) -> int:
        """
        Return total play time, counting the open interval only while running.

        Args:
            now (int): Current clock value.
            running (bool): Whether the game is in active play.
        Returns:
            int: Play time in ms, clamped to `max_time_ms`.
        """
        total = self.elapsed_ms
        if running:
            total += max(0, now - self.start_ms)
        return min(total, self.max_time_ms)


class StepClock:
    """
    Manually advanced clock for simulated sessions and tests.

    Attributes:
        now (int): Current value in ms.
    """

    def __init__(self, start=0):
        self.now = start

    def advance(self, ms):
        self.now += ms
        return self.now

    def __call__(self):
        return self.now
