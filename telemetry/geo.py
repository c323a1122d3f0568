# telemetry/geo.py
"""
Geolocation jitter used by every generator that places something on the map.
"""

from __future__ import annotations

import math
import random

from telemetry.models import GeoLocation

# Approximate length of one degree of latitude.
KM_PER_DEGREE = 111.32


def jitter_location(
    rng: random.Random,
    center: GeoLocation,
    radius_km: float,
    zone: str | None = None,
) -> GeoLocation:
    """
    Return a point within ``radius_km`` of ``center``.

    Uses a polar offset: a uniform angle and a uniform distance up to the
    radius expressed in degrees. The distance is not area-weighted, so
    points cluster towards the centre, which is what the map layers expect.
    """
    radius_deg = radius_km / KM_PER_DEGREE
    angle = rng.random() * 2 * math.pi
    distance = rng.random() * radius_deg

    latitude = center.latitude + distance * math.sin(angle)
    longitude = center.longitude + distance * math.cos(angle)

    return GeoLocation(
        latitude=max(-90.0, min(90.0, latitude)),
        longitude=(longitude + 180.0) % 360.0 - 180.0,
        zone=zone,
    )
