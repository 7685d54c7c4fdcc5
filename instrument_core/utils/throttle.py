"""
UpdateThrottler - Frame-Budgeted Instrument Updates

Gates a periodic task so it runs at most once per interval, driven by the
frame delta time of the host update loop.
"""

import math
import random
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Returned by can_update() when the task should skip this frame.
# Elapsed times are never negative, so -1 cannot be mistaken for one.
NOT_DUE = -1


class UpdateThrottler:
    """
    Utility class to throttle instrument updates.

    Time is accumulated from the deltas passed to can_update() and split
    into buckets of interval_ms. The task is due whenever a new bucket is
    entered. Each throttler starts at a random offset inside the bucket so
    that instruments sharing an interval spread their updates over
    different frames.
    """

    def __init__(self, interval_ms: float,
                 refresh_offset: Optional[float] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize UpdateThrottler.

        Args:
            interval_ms: Interval between updates, in milliseconds
            refresh_offset: Fixed bucket offset in [0, interval_ms).
                Drawn at random when omitted.
            rng: Random generator for the offset draw (defaults to the
                module-level generator)
        """
        self.interval_ms = interval_ms
        self.current_time = 0.0
        self.last_update_time = 0.0

        if refresh_offset is None:
            refresh_offset = (rng or random).random() * interval_ms
        self.refresh_offset = refresh_offset
        self.refresh_number = 0

        logger.debug(f"UpdateThrottler initialized: interval={interval_ms}ms, "
                     f"offset={self.refresh_offset:.1f}ms")

    def can_update(self, delta_time: float, force_update: bool = False) -> float:
        """
        Check whether the task should run in the current frame.

        The bucket counter is advanced even on forced updates, so forcing
        consumes the current bucket and the next natural update falls in
        the following one.

        Args:
            delta_time: Time since the previous frame (ms)
            force_update: Run this frame regardless of the interval

        Returns:
            NOT_DUE if the task should not run, otherwise the time elapsed
            since its last update in milliseconds
        """
        self.current_time += delta_time
        number = math.floor((self.current_time + self.refresh_offset) / self.interval_ms)
        update = number > self.refresh_number
        self.refresh_number = number

        if update or force_update:
            accumulated_delta = self.current_time - self.last_update_time
            self.last_update_time = self.current_time
            return accumulated_delta

        return NOT_DUE
