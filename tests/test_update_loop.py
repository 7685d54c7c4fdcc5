"""
Test Instrument Update Loop - Validates throttled instrument scheduling

Tests:
1. Instruments update at their own intervals
2. Forced frames update everything
3. Callback errors do not stop the loop
4. Full panel simulation against mock components
"""

import sys
import math
import random
import pytest
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from instrument_core.config import load_config
from instrument_core.utils.geo_math import haversine_distance
from simulation.mock_components import MockClock
from simulation.run_panel import InstrumentPanel
from simulation.update_loop import InstrumentUpdateLoop


@pytest.fixture
def clock():
    return MockClock()


@pytest.fixture
def loop(clock):
    return InstrumentUpdateLoop(clock=clock, rng=random.Random(1))


class TestInstrumentUpdateLoop:
    """Tests for the update loop."""

    def test_register(self, loop):
        instrument = loop.register('nd', 100, lambda elapsed: None)

        assert loop.instruments['nd'] is instrument
        assert 0 <= instrument.throttler.refresh_offset < 100

    def test_intervals(self, loop):
        calls = {'fast': [], 'slow': []}
        loop.register('fast', 100, calls['fast'].append, refresh_offset=0)
        loop.register('slow', 500, calls['slow'].append, refresh_offset=0)

        for _ in range(100):
            loop.tick(10)

        assert len(calls['fast']) == 10
        assert len(calls['slow']) == 2
        assert all(elapsed == pytest.approx(100) for elapsed in calls['fast'])
        assert loop.get_statistics() == {'fast': 10, 'slow': 2}

    def test_tick_returns_updated_names(self, loop):
        loop.register('nd', 100, lambda elapsed: None, refresh_offset=0)

        assert loop.tick(50) == []
        assert loop.tick(50) == ['nd']

    def test_force_update_all(self, loop):
        loop.register('nd', 100, lambda elapsed: None)
        loop.register('pfd', 1000, lambda elapsed: None)

        updated = loop.tick(0, force_update=True)

        assert sorted(updated) == ['nd', 'pfd']
        assert loop.instruments['pfd'].last_elapsed_ms == 0

    def test_tick_reads_clock(self, loop, clock):
        elapsed_seen = []
        loop.register('nd', 100, elapsed_seen.append, refresh_offset=0)

        clock.advance(60)
        loop.tick()
        clock.advance(60)
        loop.tick()

        assert elapsed_seen == [pytest.approx(120)]

    def test_callback_error_does_not_stop_loop(self, loop):
        def broken(elapsed):
            raise RuntimeError("display fault")

        seen = []
        loop.register('broken', 100, broken, refresh_offset=0)
        loop.register('ok', 100, seen.append, refresh_offset=0)

        assert loop.tick(100) == ['broken', 'ok']
        assert len(seen) == 1
        assert loop.instruments['broken'].update_count == 1


class TestInstrumentPanel:
    """Tests for the panel simulation."""

    @pytest.fixture
    def panel(self):
        return InstrumentPanel(load_config(), rng=random.Random(7))

    def test_power_up_sequence(self, panel):
        summary = panel.run(ticks=120, frame_ms=16.7)

        assert summary['display_state'] == "ON"
        assert summary['magnetic_heading'] is not None
        assert 0.0 <= summary['magnetic_heading'] < 360.0

    def test_still_in_self_test(self, panel):
        summary = panel.run(ticks=30, frame_ms=16.7)

        assert summary['display_state'] == "SELF_TEST"
        assert summary['magnetic_heading'] is None

    def test_uses_ambient_variation(self, panel):
        panel.run(ticks=120, frame_ms=16.7)

        expected = (panel.aircraft.true_heading - panel.mag_var_source.mag_var_deg) % 360
        assert panel.mag_var_source.lookups > 0
        # Heading shown at the last ND refresh, at most one interval old
        assert abs((panel.magnetic_heading - expected + 180) % 360 - 180) < 1.0

    def test_cross_fix(self, panel):
        summary = panel.run(ticks=60, frame_ms=16.7)
        fix = summary['cross_fix']

        assert fix is not None
        assert math.isfinite(fix.lat) and math.isfinite(fix.lon)
        # Radials point north-west of both stations
        assert fix.lat > 61.17
        assert -180.0 <= fix.lon < -150.0

    def test_cross_fix_range(self, panel):
        summary = panel.run(ticks=60, frame_ms=16.7)
        fix = summary['cross_fix']
        station1 = panel.config['cross_fix']['station1']

        expected = haversine_distance(station1['lat'], station1['lon'], fix.lat, fix.lon)
        assert summary['cross_fix_range_nm'] == pytest.approx(expected)
        # About 36 NM along the 345° true radial
        assert 30.0 < summary['cross_fix_range_nm'] < 42.0

    def test_update_counts(self, panel):
        summary = panel.run(ticks=600, frame_ms=16.7)
        updates = summary['updates']

        # 10 simulated seconds plus the forced first frame
        assert updates['pfd'] > updates['nd'] > updates['cross_fix']
        assert 18 <= updates['cross_fix'] <= 22


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
