"""
Mock Components for Running Instruments Without a Simulator Host

Provides stand-ins for the host collaborators the instrument core consumes:
a frame clock, an ambient magnetic variation source and a moving aircraft.
"""

import logging
from dataclasses import dataclass

from instrument_core.utils.geo_math import destination_point

logger = logging.getLogger(__name__)


class MockClock:
    """
    Manually advanced millisecond clock.

    Pass the instance as the clock of a DeltaTimeCalculator; calling it
    returns the current time.
    """

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = start_ms

    def advance(self, delta_ms: float) -> float:
        self.now_ms += delta_ms
        return self.now_ms

    def __call__(self) -> float:
        return self.now_ms


class MockMagVarSource:
    """
    Ambient magnetic variation at the aircraft position.

    Counts lookups so callers can verify when the ambient value was used.
    """

    def __init__(self, mag_var_deg: float = 0.0):
        self.mag_var_deg = mag_var_deg
        self.lookups = 0
        logger.info(f"MockMagVarSource initialized: {mag_var_deg:+.1f}°")

    def __call__(self) -> float:
        self.lookups += 1
        return self.mag_var_deg


@dataclass
class MockAircraft:
    """Simulated aircraft flying a constant turn."""
    lat: float = 48.8566
    lon: float = 2.3522
    true_heading: float = 0.0
    ground_speed_kt: float = 250.0
    turn_rate_dps: float = 0.0

    def step(self, delta_ms: float):
        """Advance the aircraft by delta_ms along its heading."""
        hours = delta_ms / 3600000.0
        self.lat, self.lon = destination_point(
            self.lat, self.lon, self.true_heading, self.ground_speed_kt * hours
        )
        self.true_heading = (self.true_heading + self.turn_rate_dps * delta_ms / 1000.0) % 360
