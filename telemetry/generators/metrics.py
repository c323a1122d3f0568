# telemetry/generators/metrics.py
"""
City metrics synthesizer for the telemetry simulator.

Produces one Metrics value per tick. Each field starts from a base value
chosen by time of day (business hours, rush hour), then receives bounded
random noise and a slow sinusoidal drift keyed by the tick index, and is
finally clamped to its documented domain.

The synthesizer keeps no state between ticks other than the random
generator it draws from.
"""

from __future__ import annotations

import math
import random
from datetime import datetime

from telemetry.models import Metrics

# Field -> (lower bound, upper bound). None means unbounded above.
FIELD_BOUNDS: dict[str, tuple[float, float | None]] = {
    "energy_consumption": (0.0, None),
    "traffic_flow": (0.0, 1.0),
    "air_quality": (0.0, 500.0),
    "infrastructure_health": (0.0, 1.0),
    "network_latency": (1.0, None),
    "security_score": (0.0, 100.0),
    "citizen_satisfaction": (0.0, 1.0),
    "budget_utilization": (0.0, 1.0),
}

# Field -> (noise amplitude, drift amplitude)
FIELD_VARIATION: dict[str, tuple[float, float]] = {
    "energy_consumption": (5.0, 4.0),
    "traffic_flow": (0.08, 0.05),
    "air_quality": (10.0, 6.0),
    "infrastructure_health": (0.02, 0.01),
    "network_latency": (8.0, 5.0),
    "security_score": (3.0, 2.0),
    "citizen_satisfaction": (0.04, 0.03),
    "budget_utilization": (0.03, 0.02),
}

DRIFT_FREQUENCY = 0.1
# Second drift frequency, incommensurate with the first so the sum never repeats.
DRIFT_FREQUENCY_ALT = DRIFT_FREQUENCY * math.sqrt(2)


def is_business_hours(hour: int) -> bool:
    return 8 <= hour <= 18


def is_rush_hour(hour: int) -> bool:
    return 7 <= hour <= 9 or 17 <= hour <= 19


def base_values(hour: int) -> dict[str, float]:
    """
    Return the unperturbed value of every metric for ``hour`` of day.
    """
    business = is_business_hours(hour)
    rush = is_rush_hour(hour)

    if rush:
        traffic = 0.85
    elif business:
        traffic = 0.65
    else:
        traffic = 0.35

    return {
        "energy_consumption": 75.0 if business else 45.0,
        "traffic_flow": traffic,
        "air_quality": 55.0 if business else 40.0,
        "infrastructure_health": 0.92,
        "network_latency": 45.0 if business else 25.0,
        "security_score": 88.0,
        "citizen_satisfaction": 0.78,
        "budget_utilization": 0.68 if business else 0.62,
    }


def clamp(value: float, lower: float, upper: float | None = None) -> float:
    """
    Clamp ``value`` into [lower, upper].

    NaN maps to ``lower``; +inf maps to ``upper`` when there is one and to
    ``lower`` otherwise.
    """
    if math.isnan(value):
        return lower
    if math.isinf(value):
        return upper if value > 0 and upper is not None else lower
    if upper is not None and value > upper:
        return upper
    return max(lower, value)


def drift(tick: int) -> float:
    """Slow, non-repeating drift in [-1, 1] for the given tick."""
    return (
        math.sin(tick * DRIFT_FREQUENCY) * 0.6
        + math.sin(tick * DRIFT_FREQUENCY_ALT) * 0.4
    )


class MetricsSynthesizer:
    """
    Turn (tick, timestamp) into a bounded Metrics snapshot.

    ``noise_scale`` scales both the random noise and the drift term; at 0
    every field equals its base value.
    """

    def __init__(self, rng: random.Random, noise_scale: float = 1.0) -> None:
        self.rng = rng
        self.noise_scale = noise_scale

    def synthesize(self, tick: int, timestamp: datetime) -> Metrics:
        bases = base_values(timestamp.hour)
        trend = drift(tick)

        values: dict[str, float] = {}
        for name, base in bases.items():
            noise_amp, drift_amp = FIELD_VARIATION[name]
            noise = self.rng.uniform(-noise_amp, noise_amp)
            raw = base + self.noise_scale * (noise + trend * drift_amp)
            lower, upper = FIELD_BOUNDS[name]
            values[name] = clamp(raw, lower, upper)

        return Metrics(timestamp=timestamp, **values)
