"""
Timing - Frame Time Helpers

Delta-time and frame counting helpers feeding the update throttlers.
"""

import time
from typing import Callable, Optional


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class DeltaTimeCalculator:
    """
    Returns the time elapsed since the previous call on each call.

    Args:
        start_time: Reference time for the first delta (defaults to now)
        clock: Zero-argument callable returning the current time in ms
    """

    def __init__(self, start_time: Optional[float] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.clock = clock or monotonic_ms
        self.last_time = self.clock() if start_time is None else start_time

    def __call__(self) -> float:
        now_time = self.clock()
        delta_time = now_time - self.last_time
        self.last_time = now_time
        return delta_time


class FrameCounter:
    """
    Cycles through 0, 1, ..., interval and restarts at 0.

    Useful to spread work over frames: run a task when the counter returns 0.
    """

    def __init__(self, interval: int = 5):
        self.interval = interval
        self.count = 0

    def __call__(self) -> int:
        c = self.count
        self.count += 1
        if c == self.interval:
            self.count = 0
        return c
