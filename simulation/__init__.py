"""
Simulation Module for the Instrument Core

Provides mock host components and a throttled instrument update loop for
running instruments without a simulator host.
"""

from simulation.mock_components import (
    MockClock,
    MockMagVarSource,
    MockAircraft
)
from simulation.update_loop import Instrument, InstrumentUpdateLoop

__all__ = [
    'MockClock',
    'MockMagVarSource',
    'MockAircraft',
    'Instrument',
    'InstrumentUpdateLoop'
]
