# Utilities - Helper Functions
"""
Utility modules for instrument update logic.

Modules:
    - heading: Magnetic/true heading conversion
    - geo_math: Great-circle bearings, projection and intersection
    - throttle: Frame-budgeted update throttling
    - state_machine: Table-driven mode machines
    - timing: Delta-time and frame counters
"""

from .heading import true_to_magnetic, magnetic_to_true, HeadingConverter
from .geo_math import GeoPoint, bearing, destination_point, great_circle_intersection
from .throttle import NOT_DUE, UpdateThrottler
from .state_machine import Machine, create_machine
from .timing import DeltaTimeCalculator, FrameCounter

__all__ = [
    "true_to_magnetic",
    "magnetic_to_true",
    "HeadingConverter",
    "GeoPoint",
    "bearing",
    "destination_point",
    "great_circle_intersection",
    "NOT_DUE",
    "UpdateThrottler",
    "Machine",
    "create_machine",
    "DeltaTimeCalculator",
    "FrameCounter"
]
