"""
Heading - Magnetic/True Heading Conversion

Magnetic variation is positive east: magnetic = true - variation.
"""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MagVarSource = Callable[[], float]


def _resolve_mag_var(mag_var: Optional[float],
                     mag_var_source: Optional[MagVarSource]) -> float:
    # An explicit 0 is a real variation, only None falls back to the source
    if mag_var is not None:
        return mag_var
    if mag_var_source is not None:
        return mag_var_source()
    return 0.0


def normalize_heading(heading: float) -> float:
    """Wrap a heading into [0, 360)."""
    return heading % 360


def true_to_magnetic(heading: float, mag_var: Optional[float] = None,
                     mag_var_source: Optional[MagVarSource] = None) -> float:
    """
    Compute a magnetic heading from a true heading.

    Args:
        heading: True heading (degrees)
        mag_var: Magnetic variation (degrees, east positive). None means
            "ask mag_var_source".
        mag_var_source: Callable returning the ambient variation, usually the
            variation at the aircraft position

    Returns:
        Magnetic heading in [0, 360)
    """
    return (360 + heading - _resolve_mag_var(mag_var, mag_var_source)) % 360


def magnetic_to_true(heading: float, mag_var: Optional[float] = None,
                     mag_var_source: Optional[MagVarSource] = None) -> float:
    """
    Compute a true heading from a magnetic heading.

    Args:
        heading: Magnetic heading (degrees)
        mag_var: Magnetic variation (degrees, east positive). None means
            "ask mag_var_source".
        mag_var_source: Callable returning the ambient variation

    Returns:
        True heading in [0, 360)
    """
    return (360 + heading + _resolve_mag_var(mag_var, mag_var_source)) % 360


class HeadingConverter:
    """
    Heading conversion bound to an ambient magnetic variation source.

    The source is only consulted when a call omits mag_var.
    """

    def __init__(self, mag_var_source: Optional[MagVarSource] = None):
        self.mag_var_source = mag_var_source
        logger.debug(f"HeadingConverter initialized "
                     f"(ambient source: {'yes' if mag_var_source else 'none'})")

    def true_to_magnetic(self, heading: float,
                         mag_var: Optional[float] = None) -> float:
        return true_to_magnetic(heading, mag_var, self.mag_var_source)

    def magnetic_to_true(self, heading: float,
                         mag_var: Optional[float] = None) -> float:
        return magnetic_to_true(heading, mag_var, self.mag_var_source)
