# simulator/output/metrics_adapter.py
from __future__ import annotations

from collections.abc import Iterable

from telemetry.models import Snapshot

from .base import Adapter, syslog_timestamp


class MetricsAdapter(Adapter):
    """One summary line with the city metrics of a tick."""

    def transform(self, snapshot: Snapshot) -> Iterable[str]:
        m = snapshot.metrics
        return [
            f"{syslog_timestamp(m.timestamp)} metrics tick={snapshot.tick} "
            f"energy={m.energy_consumption:.1f}MW "
            f"traffic={m.traffic_flow:.2f} "
            f"aqi={m.air_quality:.0f} "
            f"infra={m.infrastructure_health:.2f} "
            f"latency={m.network_latency:.1f}ms "
            f"security={m.security_score:.1f} "
            f"satisfaction={m.citizen_satisfaction:.2f} "
            f"budget={m.budget_utilization:.2f}"
        ]
