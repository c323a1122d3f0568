"""
Engine configuration.

All tunables of the engine are named construction parameters gathered in
``EngineConfig``. They are validated once, when the config is built; an
invalid configuration is a programming or deployment error and fails
immediately rather than degrading the simulation at runtime.

Configurations can also be loaded from a YAML mapping. Keys may be given
in snake_case or in the camelCase used by the dashboard.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import yaml

from telemetry.models import GeoLocation

# Baltimore city centre
DEFAULT_CENTER = GeoLocation(latitude=39.2904, longitude=-76.6122)

MIN_NODE_COUNT = 2

INTEGER_FIELDS = ("tick_period_ms", "alert_history_cap", "incident_history_cap", "node_count")
NUMERIC_FIELDS = (
    "alert_probability",
    "incident_probability",
    "status_flip_probability",
    "jitter_radius_km",
)


class ConfigurationError(ValueError):
    """Raised when engine parameters are invalid."""


def _camel_to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass(frozen=True)
class EngineConfig:
    tick_period_ms: int = 2000
    alert_probability: float = 0.25
    incident_probability: float = 0.05
    alert_history_cap: int = 50
    incident_history_cap: int = 20
    node_count: int = 25
    center_location: GeoLocation = field(default_factory=lambda: DEFAULT_CENTER)
    jitter_radius_km: float = 15.0
    rng_seed: int | None = None
    start_time: datetime | None = None
    status_flip_probability: float = 0.02

    def __post_init__(self) -> None:
        self.validate()

    @property
    def tick_period(self) -> timedelta:
        return timedelta(milliseconds=self.tick_period_ms)

    def validate(self) -> None:
        """
        Check every parameter and raise ConfigurationError on the first problem.
        """
        for name in INTEGER_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")

        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")

        if self.tick_period_ms <= 0:
            raise ConfigurationError(
                f"tick_period_ms must be positive, got {self.tick_period_ms}"
            )

        for name in ("alert_probability", "incident_probability", "status_flip_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")

        for name in ("alert_history_cap", "incident_history_cap"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if self.node_count < MIN_NODE_COUNT:
            raise ConfigurationError(
                f"node_count must be at least {MIN_NODE_COUNT} to generate edges, "
                f"got {self.node_count}"
            )

        if not math.isfinite(self.jitter_radius_km) or self.jitter_radius_km < 0:
            raise ConfigurationError(
                f"jitter_radius_km must be a non-negative number, got {self.jitter_radius_km}"
            )

        center = self.center_location
        if not (
            math.isfinite(center.latitude)
            and math.isfinite(center.longitude)
            and -90.0 <= center.latitude <= 90.0
            and -180.0 <= center.longitude <= 180.0
        ):
            raise ConfigurationError(
                f"center_location is not a valid coordinate: "
                f"({center.latitude}, {center.longitude})"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EngineConfig:
        """
        Build a config from a plain mapping such as a parsed YAML document.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}

        for key, value in data.items():
            name = _camel_to_snake(str(key))
            if name not in known:
                raise ConfigurationError(f"Unknown configuration key: {key}")
            kwargs[name] = value

        if "center_location" in kwargs:
            kwargs["center_location"] = _parse_center(kwargs["center_location"])
        if kwargs.get("start_time") is not None:
            kwargs["start_time"] = _parse_start_time(kwargs["start_time"])

        try:
            return cls(**kwargs)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc


def _parse_center(value: Any) -> GeoLocation:
    if isinstance(value, GeoLocation):
        return value
    if isinstance(value, Mapping):
        try:
            return GeoLocation(
                latitude=float(value["latitude"]),
                longitude=float(value["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(
                "center_location mapping needs numeric 'latitude' and 'longitude'"
            ) from exc
    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            return GeoLocation(latitude=float(value[0]), longitude=float(value[1]))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("center_location values must be numeric") from exc
    raise ConfigurationError(
        "center_location must be a mapping or a [latitude, longitude] pair"
    )


def _parse_start_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ConfigurationError(f"start_time is not ISO-8601: {value}") from exc
    else:
        raise ConfigurationError(f"start_time must be a timestamp, got {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def load_config(path: Path) -> EngineConfig:
    """
    Load an engine configuration from a YAML file.

    An empty file yields the defaults.
    """
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if data is None:
        return EngineConfig()

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must be a YAML mapping (dict)")

    return EngineConfig.from_mapping(data)
