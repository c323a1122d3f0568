"""Unit tests for simulator.config."""

from datetime import UTC, datetime, timedelta

import pytest

from simulator.config import (
    DEFAULT_CENTER,
    ConfigurationError,
    EngineConfig,
    load_config,
)
from telemetry.models import GeoLocation


class TestDefaults:
    def test_default_values(self):
        config = EngineConfig()

        assert config.tick_period_ms == 2000
        assert config.tick_period == timedelta(seconds=2)
        assert config.alert_probability == 0.25
        assert config.incident_probability == 0.05
        assert config.alert_history_cap == 50
        assert config.incident_history_cap == 20
        assert config.node_count == 25
        assert config.center_location == DEFAULT_CENTER
        assert config.jitter_radius_km == 15.0
        assert config.rng_seed is None
        assert config.start_time is None


class TestValidation:
    """Invalid parameters fail at construction."""

    @pytest.mark.parametrize("kwargs", [
        {"tick_period_ms": 0},
        {"tick_period_ms": -5},
        {"alert_probability": 1.5},
        {"alert_probability": -0.1},
        {"incident_probability": 2.0},
        {"status_flip_probability": -1.0},
        {"alert_history_cap": 0},
        {"incident_history_cap": -3},
        {"node_count": 1},
        {"node_count": 0},
        {"jitter_radius_km": -1.0},
        {"jitter_radius_km": float("nan")},
        {"center_location": GeoLocation(latitude=95.0, longitude=0.0)},
        {"center_location": GeoLocation(latitude=0.0, longitude=float("inf"))},
        {"node_count": 4.0},
        {"node_count": True},
        {"alert_history_cap": 2.5},
        {"incident_history_cap": "20"},
        {"tick_period_ms": 100.0},
        {"alert_probability": "0.5"},
        {"jitter_radius_km": None},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            EngineConfig(**kwargs)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            EngineConfig(node_count=1)

    @pytest.mark.parametrize("kwargs", [
        {"alert_probability": 0.0},
        {"alert_probability": 1.0},
        {"node_count": 2},
        {"jitter_radius_km": 0.0},
    ])
    def test_accepts_edge_values(self, kwargs):
        EngineConfig(**kwargs)


class TestFromMapping:
    def test_camel_case_keys(self):
        config = EngineConfig.from_mapping({
            "tickPeriodMs": 500,
            "alertProbability": 0.5,
            "nodeCount": 10,
            "rngSeed": 3,
        })
        assert config.tick_period_ms == 500
        assert config.alert_probability == 0.5
        assert config.node_count == 10
        assert config.rng_seed == 3

    def test_snake_case_keys(self):
        config = EngineConfig.from_mapping({"incident_history_cap": 7})
        assert config.incident_history_cap == 7

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            EngineConfig.from_mapping({"tickRate": 10})

    def test_center_as_mapping(self):
        config = EngineConfig.from_mapping(
            {"centerLocation": {"latitude": 51.5, "longitude": -0.12}}
        )
        assert config.center_location == GeoLocation(latitude=51.5, longitude=-0.12)

    def test_center_as_pair(self):
        config = EngineConfig.from_mapping({"centerLocation": [48.85, 2.35]})
        assert config.center_location.latitude == 48.85

    @pytest.mark.parametrize("value", [
        {"latitude": 1.0},
        [1.0, 2.0, 3.0],
        "39.29,-76.61",
        ["north", "west"],
    ])
    def test_bad_center_rejected(self, value):
        with pytest.raises(ConfigurationError):
            EngineConfig.from_mapping({"centerLocation": value})

    def test_start_time_string_with_z(self):
        config = EngineConfig.from_mapping({"startTime": "2024-03-05T08:00:00Z"})
        assert config.start_time == datetime(2024, 3, 5, 8, tzinfo=UTC)

    def test_naive_start_time_gets_utc(self):
        config = EngineConfig.from_mapping({"startTime": datetime(2024, 3, 5, 8)})
        assert config.start_time.tzinfo is UTC

    def test_bad_start_time_rejected(self):
        with pytest.raises(ConfigurationError):
            EngineConfig.from_mapping({"startTime": "yesterday"})

    def test_invalid_value_still_validated(self):
        with pytest.raises(ConfigurationError):
            EngineConfig.from_mapping({"alertProbability": 3})

    def test_non_integer_count_rejected(self):
        with pytest.raises(ConfigurationError, match="node_count must be an integer"):
            EngineConfig.from_mapping({"nodeCount": 4.0})


class TestLoadConfig:
    def test_load_yaml(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text(
            "tickPeriodMs: 250\n"
            "alertProbability: 0.4\n"
            "rngSeed: 11\n"
            "centerLocation:\n"
            "  latitude: 40.0\n"
            "  longitude: -75.0\n"
        )

        config = load_config(path)

        assert config.tick_period_ms == 250
        assert config.alert_probability == 0.4
        assert config.rng_seed == 11
        assert config.center_location.longitude == -75.0

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == EngineConfig()

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="YAML mapping"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")
