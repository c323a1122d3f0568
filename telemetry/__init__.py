"""
Telemetry generators for the city operations simulator.

Provides the data model and the generators driven by the engine on each tick.

Generators included:
- MetricsSynthesizer: city-wide metrics with diurnal shaping
- AlertEmitter: probabilistic alert stream
- IncidentEmitter: rarer incident stream with timelines and cost estimates
- TopologySimulator: evolving network topology
"""

from telemetry.generators.alerts import AlertEmitter
from telemetry.generators.incidents import IncidentEmitter
from telemetry.generators.metrics import MetricsSynthesizer
from telemetry.generators.topology import TopologySimulator

__all__ = [
    "AlertEmitter",
    "IncidentEmitter",
    "MetricsSynthesizer",
    "TopologySimulator",
]
