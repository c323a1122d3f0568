"""
Unit tests for simulator/engine/clock.py
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from simulator.engine.clock import SimulationClock


class TestSimulationClock:
    """Test suite for the SimulationClock class."""

    def test_initialization(self):
        """Test that clock initializes at tick zero."""
        clock = SimulationClock()
        assert clock.now() == 0, "Clock should start at tick 0"

    def test_advance_increments_by_one(self):
        """Test that advance() moves one tick and returns the new index."""
        clock = SimulationClock()
        assert clock.advance() == 1
        assert clock.advance() == 2
        assert clock.now() == 2

    def test_advance_to_positive_tick(self):
        """Test advancing the clock to a future tick."""
        clock = SimulationClock()
        clock.advance_to(10)
        assert clock.now() == 10, "Clock should advance to the specified tick"

    def test_advance_to_float_converts_to_int(self):
        """Test that advance_to converts float inputs to integers."""
        clock = SimulationClock()
        clock.advance_to(5.7)
        assert clock.now() == 5, "Float inputs should be converted to int"
        assert isinstance(clock.now(), int), "Tick should remain integer"

    def test_advance_to_same_tick(self):
        """Test advancing to the current tick (no-op)."""
        clock = SimulationClock()
        clock.advance_to(10)
        clock.advance_to(10)
        assert clock.now() == 10

    def test_advance_to_backwards_raises_error(self):
        """Test that attempting to move backwards raises ValueError."""
        clock = SimulationClock()
        clock.advance_to(10)

        with pytest.raises(ValueError) as exc_info:
            clock.advance_to(5)

        assert "Cannot move clock backwards from 10 to 5" in str(exc_info.value)
        assert clock.now() == 10, "Clock should not change after error"

    def test_reset_functionality(self):
        """Test that reset returns clock to tick zero."""
        clock = SimulationClock()
        clock.advance()
        clock.advance_to(100)

        clock.reset()
        assert clock.now() == 0


class TestWallTime:
    """Test mapping ticks onto timestamps."""

    def test_simulated_wall_time_follows_ticks(self, fixed_start):
        """Test start_time + tick * period when a start time is set."""
        clock = SimulationClock(period=timedelta(seconds=2), start_time=fixed_start)

        assert clock.wall_time() == fixed_start
        clock.advance()
        assert clock.wall_time() == fixed_start + timedelta(seconds=2)
        clock.advance_to(30)
        assert clock.wall_time() == fixed_start + timedelta(seconds=60)

    def test_naive_start_time_treated_as_utc(self):
        """Test that a naive start time is interpreted as UTC."""
        clock = SimulationClock(start_time=datetime(2024, 1, 1, 12, 0))
        assert clock.wall_time().tzinfo is UTC

    def test_aware_start_time_keeps_its_zone(self):
        """Test that an aware start time keeps its offset."""
        eastern = timezone(timedelta(hours=-5))
        start = datetime(2024, 1, 1, 7, 30, tzinfo=eastern)
        clock = SimulationClock(start_time=start)
        assert clock.wall_time().utcoffset() == timedelta(hours=-5)
        assert clock.wall_time().hour == 7

    def test_real_time_uses_now_fn(self):
        """Test that without a start time the injected time source is used."""
        stamp = datetime(2030, 6, 1, 18, 0, tzinfo=UTC)
        clock = SimulationClock(now_fn=lambda: stamp)
        clock.advance_to(500)
        assert clock.wall_time() == stamp

    def test_default_real_time_is_timezone_aware(self):
        """Test that the default time source returns aware datetimes."""
        clock = SimulationClock()
        assert clock.wall_time().tzinfo is not None


def test_clock_is_deterministic(fixed_start):
    """Test that two clocks with the same start produce the same timestamps."""
    clock1 = SimulationClock(start_time=fixed_start)
    clock2 = SimulationClock(start_time=fixed_start)

    for _ in range(5):
        clock1.advance()
        clock2.advance()

    assert clock1.now() == clock2.now()
    assert clock1.wall_time() == clock2.wall_time()


def test_type_hints_present():
    """Test that type hints are properly declared."""
    import inspect

    sig = inspect.signature(SimulationClock.now)
    assert sig.return_annotation is int, "now() should return int"

    sig = inspect.signature(SimulationClock.advance_to)
    annotation = str(sig.parameters["target_tick"].annotation)
    assert "int" in annotation and "float" in annotation
