"""Unit tests for telemetry.geo."""

import math
import random

import pytest

from telemetry.geo import KM_PER_DEGREE, jitter_location
from telemetry.models import GeoLocation


def test_points_within_radius(rng, city_center):
    radius_deg = 10.0 / KM_PER_DEGREE
    for _ in range(1000):
        loc = jitter_location(rng, city_center, 10.0)
        offset = math.hypot(
            loc.latitude - city_center.latitude,
            loc.longitude - city_center.longitude,
        )
        assert offset <= radius_deg + 1e-9


def test_zero_radius_returns_centre(rng, city_center):
    loc = jitter_location(rng, city_center, 0.0)
    assert loc.latitude == city_center.latitude
    assert loc.longitude == pytest.approx(city_center.longitude)


def test_zone_attached(rng, city_center):
    assert jitter_location(rng, city_center, 5.0, zone="harbor").zone == "harbor"


def test_clamps_near_pole():
    pole = GeoLocation(latitude=90.0, longitude=0.0)
    rng = random.Random(8)
    for _ in range(200):
        assert -90.0 <= jitter_location(rng, pole, 500.0).latitude <= 90.0


def test_wraps_antimeridian():
    dateline = GeoLocation(latitude=0.0, longitude=180.0)
    rng = random.Random(8)
    for _ in range(200):
        assert -180.0 <= jitter_location(rng, dateline, 500.0).longitude < 180.0
