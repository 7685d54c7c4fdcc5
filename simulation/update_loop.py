"""
Instrument Update Loop

Drives a set of throttled instruments from a single frame loop. Each
instrument owns an UpdateThrottler and is called back with the time elapsed
since its previous update whenever its interval comes due.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from instrument_core.utils.throttle import NOT_DUE, UpdateThrottler
from instrument_core.utils.timing import DeltaTimeCalculator

logger = logging.getLogger(__name__)


@dataclass
class Instrument:
    """Registered instrument and its update bookkeeping."""
    name: str
    throttler: UpdateThrottler
    callback: Callable[[float], None]
    update_count: int = 0
    last_elapsed_ms: Optional[float] = None


class InstrumentUpdateLoop:
    """
    Single-threaded frame loop for throttled instruments.

    Frame times come either from the caller (tick(delta_time)) or from a
    DeltaTimeCalculator reading the supplied clock.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize InstrumentUpdateLoop.

        Args:
            clock: Millisecond clock used when tick() is called without a delta
            rng: Random generator for throttler offsets
        """
        self.delta_time = DeltaTimeCalculator(clock=clock)
        self.rng = rng
        self.instruments: Dict[str, Instrument] = {}
        self.frame_count = 0

    def register(self, name: str, interval_ms: float,
                 callback: Callable[[float], None],
                 refresh_offset: Optional[float] = None) -> Instrument:
        """
        Register an instrument.

        Args:
            name: Unique instrument name
            interval_ms: Update interval in milliseconds
            callback: Called with the elapsed time (ms) since the last update
            refresh_offset: Fixed throttler offset (random when omitted)

        Returns:
            The registered Instrument
        """
        if name in self.instruments:
            logger.warning(f"Instrument {name} re-registered, replacing previous entry")

        instrument = Instrument(
            name=name,
            throttler=UpdateThrottler(interval_ms, refresh_offset, self.rng),
            callback=callback
        )
        self.instruments[name] = instrument

        logger.info(f"Registered instrument {name}: interval={interval_ms}ms, "
                    f"offset={instrument.throttler.refresh_offset:.1f}ms")
        return instrument

    def tick(self, delta_time: Optional[float] = None,
             force_update: bool = False) -> List[str]:
        """
        Run one frame.

        Args:
            delta_time: Frame time in ms (read from the clock when omitted)
            force_update: Update every instrument this frame

        Returns:
            Names of the instruments updated in this frame
        """
        if delta_time is None:
            delta_time = self.delta_time()

        self.frame_count += 1
        updated = []

        for instrument in self.instruments.values():
            elapsed = instrument.throttler.can_update(delta_time, force_update)
            if elapsed == NOT_DUE:
                continue

            instrument.update_count += 1
            instrument.last_elapsed_ms = elapsed
            updated.append(instrument.name)

            try:
                instrument.callback(elapsed)
            except Exception as e:
                logger.error(f"Instrument {instrument.name} update error: {e}")

        if updated:
            logger.debug(f"Frame {self.frame_count}: updated {', '.join(updated)}")

        return updated

    def get_statistics(self) -> Dict[str, int]:
        """Get update counts per instrument."""
        return {name: inst.update_count for name, inst in self.instruments.items()}
