"""Test configuration and fixtures."""

import random
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from simulator.config import EngineConfig  # noqa: E402
from simulator.engine.simulation_engine import TelemetryEngine  # noqa: E402
from telemetry.models import GeoLocation  # noqa: E402


@pytest.fixture
def fixed_start() -> datetime:
    """Simulated start time at 08:00 UTC (rush hour and business hours)."""
    return datetime(2024, 3, 5, 8, 0, 0, tzinfo=UTC)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random generator for generator-level tests."""
    return random.Random(1234)


@pytest.fixture
def city_center() -> GeoLocation:
    return GeoLocation(latitude=39.2904, longitude=-76.6122)


@pytest.fixture
def engine_config(fixed_start) -> EngineConfig:
    """Deterministic engine configuration."""
    return EngineConfig(rng_seed=42, start_time=fixed_start)


@pytest.fixture
def engine(engine_config):
    """Deterministic engine; stopped and closed after the test."""
    eng = TelemetryEngine(engine_config)
    yield eng
    eng.close()
