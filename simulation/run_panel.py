#!/usr/bin/env python3
"""
Instrument Panel Simulation

Runs a small cockpit panel against mock host components: a navigation
display showing magnetic heading, a primary flight display driving the
display power self-test, and a VOR radial cross-fix.

Usage:
    python -m simulation.run_panel
    python -m simulation.run_panel --ticks 1200 --frame-ms 16.7 --seed 7 -v
"""

import sys
import random
import logging
import argparse
from typing import Optional

from instrument_core.config import load_config
from instrument_core.exceptions import ConfigError
from instrument_core.utils.geo_math import GeoPoint, great_circle_intersection, haversine_distance
from instrument_core.utils.heading import HeadingConverter
from instrument_core.utils.state_machine import create_machine
from simulation.mock_components import MockAircraft, MockClock, MockMagVarSource
from simulation.update_loop import InstrumentUpdateLoop

logger = logging.getLogger(__name__)

SELF_TEST_DURATION_MS = 1000.0

DEFAULT_POWER_MACHINE = {
    "init": "OFF",
    "OFF": {"transitions": {"power_on": {"target": "SELF_TEST"}}},
    "SELF_TEST": {"transitions": {"test_complete": {"target": "ON"},
                                  "power_off": {"target": "OFF"}}},
    "ON": {"transitions": {"power_off": {"target": "OFF"}}},
}


class InstrumentPanel:
    """
    Cockpit panel wiring the instrument core to mock host components.
    """

    def __init__(self, config: dict = None, rng: Optional[random.Random] = None):
        """
        Initialize InstrumentPanel.

        Args:
            config: Parsed instrument_params.yaml
            rng: Random generator for throttler offsets
        """
        self.config = config or {}
        ambient = self.config.get('ambient', {})
        instruments = self.config.get('instruments', {})

        self.clock = MockClock()
        self.mag_var_source = MockMagVarSource(ambient.get('mag_var_deg', 0.0))
        self.headings = HeadingConverter(self.mag_var_source)
        self.aircraft = MockAircraft(turn_rate_dps=3.0)
        self.power = create_machine(
            self.config.get('machines', {}).get('display_power', DEFAULT_POWER_MACHINE)
        )

        # Displayed values
        self.magnetic_heading: Optional[float] = None
        self.cross_fix: Optional[GeoPoint] = None
        self.cross_fix_range_nm: Optional[float] = None
        self.self_test_ms = 0.0

        self.loop = InstrumentUpdateLoop(clock=self.clock, rng=rng)
        self.loop.register('nd', instruments.get('nd', {}).get('interval_ms', 100),
                           self._update_nd)
        self.loop.register('pfd', instruments.get('pfd', {}).get('interval_ms', 50),
                           self._update_pfd)
        self.loop.register('cross_fix', instruments.get('cross_fix', {}).get('interval_ms', 500),
                           self._update_cross_fix)

    def _update_nd(self, elapsed_ms: float):
        if self.power.value != "ON":
            return
        self.magnetic_heading = self.headings.true_to_magnetic(self.aircraft.true_heading)

    def _update_pfd(self, elapsed_ms: float):
        if self.power.value != "SELF_TEST":
            return
        self.self_test_ms += elapsed_ms
        if self.self_test_ms >= SELF_TEST_DURATION_MS:
            self.power.dispatch("test_complete")
            logger.info(f"Display self-test complete after {self.self_test_ms:.0f}ms")

    def _update_cross_fix(self, elapsed_ms: float):
        cross_fix = self.config.get('cross_fix')
        if not cross_fix:
            return

        station1 = cross_fix['station1']
        station2 = cross_fix['station2']

        # Radials are magnetic, the intersection works on true bearings
        fix = great_circle_intersection(
            GeoPoint(station1['lat'], station1['lon']),
            self.headings.magnetic_to_true(station1['radial']),
            GeoPoint(station2['lat'], station2['lon']),
            self.headings.magnetic_to_true(station2['radial'])
        )
        # Intersection longitudes come back in (90, 270)
        self.cross_fix = GeoPoint(fix.lat, (fix.lon + 180) % 360 - 180)
        self.cross_fix_range_nm = haversine_distance(
            station1['lat'], station1['lon'], self.cross_fix.lat, self.cross_fix.lon
        )
        logger.debug(f"Cross-fix: ({self.cross_fix.lat:.4f}, {self.cross_fix.lon:.4f}), "
                     f"{self.cross_fix_range_nm:.1f} NM from station 1")

    def run(self, ticks: int, frame_ms: float) -> dict:
        """
        Power the displays and run the panel for a number of frames.

        Args:
            ticks: Number of frames
            frame_ms: Frame time in milliseconds

        Returns:
            Summary dictionary
        """
        self.power.dispatch("power_on")
        # First frame refreshes everything
        self.loop.tick(0.0, force_update=True)

        for _ in range(ticks):
            self.clock.advance(frame_ms)
            self.aircraft.step(frame_ms)
            self.loop.tick()

        return {
            'simulated_ms': self.clock.now_ms,
            'display_state': self.power.value,
            'magnetic_heading': self.magnetic_heading,
            'cross_fix': self.cross_fix,
            'cross_fix_range_nm': self.cross_fix_range_nm,
            'updates': self.loop.get_statistics(),
        }


def main():
    parser = argparse.ArgumentParser(description="Instrument Panel Simulation")
    parser.add_argument('--config', type=str, default=None,
                        help='Path to instrument_params.yaml')
    parser.add_argument('--ticks', type=int, default=600,
                        help='Number of frames to simulate')
    parser.add_argument('--frame-ms', type=float, default=None,
                        help='Frame time in milliseconds (default from config)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for throttler offsets')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    frame_ms = args.frame_ms or config.get('ambient', {}).get('frame_ms', 16.7)
    rng = random.Random(args.seed) if args.seed is not None else None

    panel = InstrumentPanel(config, rng=rng)
    summary = panel.run(args.ticks, frame_ms)

    print("=" * 60)
    print("PANEL SUMMARY")
    print("=" * 60)
    print(f"  Simulated time:   {summary['simulated_ms'] / 1000.0:.1f}s")
    print(f"  Display state:    {summary['display_state']}")
    if summary['magnetic_heading'] is not None:
        print(f"  Magnetic heading: {summary['magnetic_heading']:.1f}°")
    if summary['cross_fix'] is not None:
        print(f"  Cross-fix:        ({summary['cross_fix'].lat:.4f}, {summary['cross_fix'].lon:.4f})")
        print(f"  Range station 1:  {summary['cross_fix_range_nm']:.1f} NM")
    for name, count in summary['updates'].items():
        print(f"  {name:<17} {count} updates")
    print("=" * 60)


if __name__ == "__main__":
    main()
