"""
City operations telemetry simulator core package.

This package contains the simulator engine that manufactures the data a
municipal operations dashboard displays. The engine provides:
- TelemetryEngine
- SimulationClock
- TickScheduler
- EventBus
- EngineConfig

The generators it drives live in the ``telemetry`` package.
"""

from simulator.config import ConfigurationError, EngineConfig, load_config
from simulator.engine.clock import SimulationClock
from simulator.engine.event_bus import EventBus
from simulator.engine.scheduler import TickScheduler

# Expose core engine components
from simulator.engine.simulation_engine import TelemetryEngine
