"""Unit tests for telemetry.generators.metrics."""

import math
import random
from datetime import UTC, datetime, timedelta

import pytest

from telemetry.generators.metrics import (
    FIELD_BOUNDS,
    MetricsSynthesizer,
    base_values,
    clamp,
    drift,
    is_business_hours,
    is_rush_hour,
)

RATIO_FIELDS = [
    "traffic_flow",
    "infrastructure_health",
    "citizen_satisfaction",
    "budget_utilization",
]
ABSOLUTE_FIELDS = [
    "energy_consumption",
    "air_quality",
    "network_latency",
    "security_score",
]


def at_hour(hour: int) -> datetime:
    return datetime(2024, 3, 5, hour, 0, tzinfo=UTC)


class TestTimeOfDayShaping:
    """Test business-hour and rush-hour classification."""

    @pytest.mark.parametrize("hour,expected", [
        (7, False), (8, True), (12, True), (18, True), (19, False), (0, False),
    ])
    def test_business_hours(self, hour, expected):
        assert is_business_hours(hour) is expected

    @pytest.mark.parametrize("hour,expected", [
        (6, False), (7, True), (9, True), (10, False),
        (16, False), (17, True), (19, True), (20, False),
    ])
    def test_rush_hour(self, hour, expected):
        assert is_rush_hour(hour) is expected

    def test_traffic_base_at_rush_hour(self):
        """Hour 8 is rush hour and business hours: traffic base is 0.85."""
        assert base_values(8)["traffic_flow"] == 0.85

    def test_traffic_base_business_only(self):
        assert base_values(12)["traffic_flow"] == 0.65

    def test_traffic_base_off_hours(self):
        assert base_values(2)["traffic_flow"] == 0.35

    def test_evening_rush_outside_business_hours(self):
        """Hour 19 is rush hour but not business hours."""
        values = base_values(19)
        assert values["traffic_flow"] == 0.85
        assert values["energy_consumption"] == 45.0

    def test_energy_base(self):
        assert base_values(10)["energy_consumption"] == 75.0
        assert base_values(23)["energy_consumption"] == 45.0

    def test_base_values_cover_every_field(self):
        assert set(base_values(0)) == set(FIELD_BOUNDS)


class TestClamp:
    """Test the non-finite guard."""

    def test_within_range_untouched(self):
        assert clamp(0.5, 0.0, 1.0) == 0.5

    def test_clamps_both_sides(self):
        assert clamp(-2.0, 0.0, 1.0) == 0.0
        assert clamp(3.0, 0.0, 1.0) == 1.0

    def test_no_upper_bound(self):
        assert clamp(1e9, 0.0) == 1e9

    def test_nan_maps_to_lower(self):
        assert clamp(math.nan, 0.0, 1.0) == 0.0

    def test_infinities(self):
        assert clamp(math.inf, 0.0, 1.0) == 1.0
        assert clamp(math.inf, 1.0) == 1.0
        assert clamp(-math.inf, 0.0, 1.0) == 0.0


class TestDrift:
    def test_drift_bounded(self):
        assert all(-1.0 <= drift(tick) <= 1.0 for tick in range(5000))

    def test_drift_varies(self):
        assert len({round(drift(tick), 6) for tick in range(100)}) > 50


class TestMetricsSynthesizer:
    """Test full synthesis."""

    def test_zero_noise_returns_base_values(self):
        synth = MetricsSynthesizer(random.Random(1), noise_scale=0.0)
        metrics = synth.synthesize(tick=17, timestamp=at_hour(8))

        assert metrics.traffic_flow == 0.85
        assert metrics.energy_consumption == 75.0
        assert metrics.infrastructure_health == 0.92

    def test_timestamp_carried_through(self):
        synth = MetricsSynthesizer(random.Random(1))
        stamp = at_hour(14)
        assert synth.synthesize(1, stamp).timestamp == stamp

    def test_fields_within_bounds_over_a_day(self):
        synth = MetricsSynthesizer(random.Random(99))
        start = at_hour(0)

        for tick in range(3000):
            metrics = synth.synthesize(tick, start + timedelta(minutes=tick))
            for name in RATIO_FIELDS:
                assert 0.0 <= getattr(metrics, name) <= 1.0, name
            for name in ABSOLUTE_FIELDS:
                value = getattr(metrics, name)
                assert math.isfinite(value) and value >= 0.0, name

    def test_extreme_noise_still_clamped(self):
        synth = MetricsSynthesizer(random.Random(5), noise_scale=100.0)

        for tick in range(500):
            metrics = synth.synthesize(tick, at_hour(tick % 24))
            for name, (lower, upper) in FIELD_BOUNDS.items():
                value = getattr(metrics, name)
                assert value >= lower
                if upper is not None:
                    assert value <= upper

    def test_seeded_synthesis_is_reproducible(self):
        a = MetricsSynthesizer(random.Random(3))
        b = MetricsSynthesizer(random.Random(3))
        for tick in range(20):
            assert a.synthesize(tick, at_hour(9)) == b.synthesize(tick, at_hour(9))
