# telemetry/generators/incidents.py
"""
Incident emitter for the telemetry simulator.

Same shape as the alert emitter, with a much lower emission probability
and a richer payload: a two-entry timeline (detection, then dispatch), the
systems affected, the responders assigned and a cost estimate scaled by
severity.

Only in-progress statuses are generated. Resolution and closure belong to
operator workflows outside the simulator.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta

from telemetry.geo import jitter_location
from telemetry.models import (
    IN_PROGRESS_STATUSES,
    GeoLocation,
    Incident,
    IncidentEvent,
    IncidentType,
    Severity,
)

log = logging.getLogger(__name__)

# Severity -> [low, high) cost in dollars
COST_RANGES: dict[Severity, tuple[int, int]] = {
    Severity.CRITICAL: (50_000, 500_000),
    Severity.HIGH: (10_000, 100_000),
}
DEFAULT_COST_RANGE = (1_000, 25_000)

TIMELINE_WINDOW = timedelta(minutes=30)

# Type -> (summary, description)
INCIDENT_TEMPLATES: dict[IncidentType, tuple[str, str]] = {
    IncidentType.CYBER_ATTACK: (
        "Intrusion attempt on operational technology segment",
        "Correlated authentication failures and lateral scanning observed "
        "on the OT network; segment isolation check under way.",
    ),
    IncidentType.INFRASTRUCTURE_FAILURE: (
        "Water main break",
        "Pressure loss and surface flooding reported; crews isolating the "
        "affected section of the distribution network.",
    ),
    IncidentType.TRAFFIC_ACCIDENT: (
        "Multi-vehicle collision",
        "Collision blocking two lanes; adaptive signal plan active on "
        "parallel arterials.",
    ),
    IncidentType.POWER_OUTAGE: (
        "Feeder outage",
        "Distribution feeder tripped; customers without power while the "
        "utility reroutes load.",
    ),
    IncidentType.ENVIRONMENTAL_HAZARD: (
        "Chemical odour complaint cluster",
        "Multiple residents report a chemical odour; air monitoring unit "
        "deployed.",
    ),
    IncidentType.PUBLIC_SAFETY: (
        "Large crowd disturbance",
        "Crowd disturbance reported near a public venue; units staging "
        "nearby.",
    ),
    IncidentType.NETWORK_OUTAGE: (
        "Municipal network segment down",
        "Loss of connectivity to a cluster of edge devices; failover link "
        "engaged.",
    ),
}

AFFECTED_SYSTEMS = [
    "traffic-signals",
    "scada-water",
    "grid-feeders",
    "cctv-network",
    "emergency-dispatch",
    "municipal-wan",
    "air-quality-sensors",
    "records-server",
]

RESPONDER_UNITS = ["police", "fire", "ems", "public-works", "it-security", "utility"]


def cost_range(severity: Severity) -> tuple[int, int]:
    return COST_RANGES.get(severity, DEFAULT_COST_RANGE)


class IncidentEmitter:
    def __init__(
        self,
        rng: random.Random,
        probability: float,
        center: GeoLocation,
        jitter_radius_km: float,
    ) -> None:
        self.rng = rng
        self.probability = probability
        self.center = center
        self.jitter_radius_km = jitter_radius_km

    def maybe_emit(self, timestamp: datetime, sequence: int) -> Incident | None:
        if self.rng.random() >= self.probability:
            return None

        incident = self.build(timestamp, sequence)
        log.debug(
            "Incident %s emitted: %s/%s cost=%d",
            incident.id, incident.type.value, incident.severity.value, incident.cost,
        )
        return incident

    def build(self, timestamp: datetime, sequence: int) -> Incident:
        rng = self.rng
        incident_type = rng.choice(list(IncidentType))
        severity = rng.choice(list(Severity))
        status = rng.choice(IN_PROGRESS_STATUSES)
        location = jitter_location(rng, self.center, self.jitter_radius_km)
        summary, description = INCIDENT_TEMPLATES[incident_type]

        timeline = self._timeline(timestamp, incident_type)
        affected_systems = tuple(rng.sample(AFFECTED_SYSTEMS, rng.randint(1, 3)))
        responders = tuple(
            f"{unit}-{rng.randint(100, 999)}"
            for unit in rng.sample(RESPONDER_UNITS, rng.randint(1, 3))
        )

        low, high = cost_range(severity)
        cost = low + int(rng.random() * (high - low))

        return Incident(
            id=f"INC-{sequence:06d}",
            type=incident_type,
            severity=severity,
            status=status,
            location=location,
            start_time=timeline[0].timestamp,
            summary=summary,
            description=description,
            affected_systems=affected_systems,
            responders=responders,
            timeline=timeline,
            cost=min(cost, high - 1),
        )

    def _timeline(
        self, timestamp: datetime, incident_type: IncidentType
    ) -> tuple[IncidentEvent, IncidentEvent]:
        """
        Build the detection and dispatch entries.

        Both offsets are drawn independently within the last 30 minutes;
        the earlier one is used for detection so the timeline stays ordered.
        """
        window = TIMELINE_WINDOW.total_seconds()
        offsets = sorted(
            (self.rng.random() * window, self.rng.random() * window),
            reverse=True,
        )
        detected_at = timestamp - timedelta(seconds=offsets[0])
        dispatched_at = timestamp - timedelta(seconds=offsets[1])

        return (
            IncidentEvent(
                timestamp=detected_at,
                actor="Automated Monitoring",
                action="Incident detected",
                details=f"{incident_type.value.replace('_', ' ')} detected by sensor correlation",
            ),
            IncidentEvent(
                timestamp=dispatched_at,
                actor="Operations Center",
                action="Responders dispatched",
                details="Response team assigned and en route",
            ),
        )
