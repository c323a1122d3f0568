# telemetry/generators/alerts.py
"""
Alert emitter for the telemetry simulator.

Each tick the emitter runs one Bernoulli trial. On success it builds a
fully populated Alert: uniformly drawn severity and category, a title and
description from the category's template list, a location jittered around
the city centre, two affected assets and, occasionally, a correlation id
linking it to a related event.

The emitter itself holds no history. The engine pushes whatever it returns
into the bounded alert history.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta

from telemetry.geo import jitter_location
from telemetry.models import Alert, AlertCategory, GeoLocation, Severity

log = logging.getLogger(__name__)

# Category -> list of (title, description)
ALERT_TEMPLATES: dict[AlertCategory, list[tuple[str, str]]] = {
    AlertCategory.CYBERSECURITY: [
        ("Suspicious authentication spike",
         "Repeated failed logins detected against the traffic control VLAN"),
        ("Malware signature detected",
         "Endpoint protection flagged a known loader on a municipal workstation"),
        ("Unusual outbound traffic",
         "Data egress from the records server exceeds its 30 day baseline"),
    ],
    AlertCategory.INFRASTRUCTURE: [
        ("Water main pressure drop",
         "Pressure sensors report a sustained drop in the distribution network"),
        ("Bridge strain threshold exceeded",
         "Structural strain gauges exceed the configured warning threshold"),
        ("Pump station fault",
         "Pump station reports a motor fault and has switched to backup"),
    ],
    AlertCategory.TRAFFIC: [
        ("Congestion building on I-95",
         "Average speed below 20 mph across three consecutive segments"),
        ("Signal controller offline",
         "Intersection controller stopped reporting and fell back to flash mode"),
        ("Collision reported",
         "Multiple vehicle collision reported; adaptive signal plan engaged"),
    ],
    AlertCategory.ENERGY: [
        ("Substation load near capacity",
         "Feeder load above 90% of rated capacity for 15 minutes"),
        ("Voltage sag detected",
         "Smart meters report a voltage sag across a distribution segment"),
        ("Solar output below forecast",
         "Municipal solar array output is 40% below forecast"),
    ],
    AlertCategory.ENVIRONMENTAL: [
        ("Air quality degradation",
         "PM2.5 readings exceed the moderate threshold at multiple stations"),
        ("Flood sensor triggered",
         "Storm drain level sensor reports rising water"),
        ("Noise level exceedance",
         "Sustained noise above permitted levels near a construction site"),
    ],
    AlertCategory.PUBLIC_SAFETY: [
        ("Gunshot detection event",
         "Acoustic sensors triangulated a probable gunshot"),
        ("Crowd density warning",
         "Camera analytics estimate crowd density above safe levels"),
        ("Emergency call surge",
         "911 call volume is twice the expected rate for this hour"),
    ],
    AlertCategory.NETWORK: [
        ("Link utilization critical",
         "Core fiber link utilization above 95% for five minutes"),
        ("Packet loss on backbone",
         "Packet loss above 2% between two core routers"),
        ("Device unreachable",
         "Edge switch failed three consecutive health checks"),
    ],
}

ALERT_SOURCES: dict[AlertCategory, str] = {
    AlertCategory.CYBERSECURITY: "SIEM",
    AlertCategory.INFRASTRUCTURE: "SCADA",
    AlertCategory.TRAFFIC: "Traffic Management System",
    AlertCategory.ENERGY: "Grid Monitoring",
    AlertCategory.ENVIRONMENTAL: "Environmental Sensor Network",
    AlertCategory.PUBLIC_SAFETY: "Public Safety CAD",
    AlertCategory.NETWORK: "Network Monitoring",
}

MITRE_TACTICS = [
    "initial-access",
    "credential-access",
    "lateral-movement",
    "command-and-control",
    "exfiltration",
]

SLA_MINUTES: dict[Severity, int] = {
    Severity.CRITICAL: 15,
    Severity.HIGH: 60,
}
DEFAULT_SLA_MINUTES = 240

ASSETS_PER_ALERT = 2


def escalation_level(severity: Severity) -> int:
    if severity is Severity.CRITICAL:
        return 3
    if severity is Severity.HIGH:
        return 2
    return 1


def sla_deadline(timestamp: datetime, severity: Severity) -> datetime:
    minutes = SLA_MINUTES.get(severity, DEFAULT_SLA_MINUTES)
    return timestamp + timedelta(minutes=minutes)


class AlertEmitter:
    def __init__(
        self,
        rng: random.Random,
        probability: float,
        center: GeoLocation,
        jitter_radius_km: float,
        correlation_probability: float = 0.1,
    ) -> None:
        """
        Args:
            rng: Random generator shared with the rest of the engine.
            probability: Chance of emitting an alert on a given tick.
            center: Point around which alert locations are jittered.
            jitter_radius_km: Maximum distance from the centre.
            correlation_probability: Chance an alert carries a correlation id.
        """
        self.rng = rng
        self.probability = probability
        self.center = center
        self.jitter_radius_km = jitter_radius_km
        self.correlation_probability = correlation_probability

    def maybe_emit(self, timestamp: datetime, sequence: int) -> Alert | None:
        """
        Run this tick's trial and return an Alert on success.
        """
        if self.rng.random() >= self.probability:
            return None

        alert = self.build(timestamp, sequence)
        log.debug(
            "Alert %s emitted: %s/%s %s",
            alert.id, alert.category.value, alert.severity.value, alert.title,
        )
        return alert

    def build(self, timestamp: datetime, sequence: int) -> Alert:
        rng = self.rng
        severity = rng.choice(list(Severity))
        category = rng.choice(list(AlertCategory))
        title, description = rng.choice(ALERT_TEMPLATES[category])
        location = jitter_location(rng, self.center, self.jitter_radius_km)

        affected_assets = tuple(
            f"{category.value}-asset-{rng.randint(1000, 9999)}"
            for _ in range(ASSETS_PER_ALERT)
        )

        correlation_id = None
        if rng.random() < self.correlation_probability:
            correlation_id = f"COR-{rng.randint(0, 0xFFFFFF):06X}"

        mitre_tactics: tuple[str, ...] = ()
        if category is AlertCategory.CYBERSECURITY:
            mitre_tactics = (rng.choice(MITRE_TACTICS),)

        return Alert(
            id=f"ALT-{sequence:06d}",
            timestamp=timestamp,
            severity=severity,
            category=category,
            title=title,
            description=description,
            source=ALERT_SOURCES[category],
            location=location,
            affected_assets=affected_assets,
            escalation_level=escalation_level(severity),
            sla_deadline=sla_deadline(timestamp, severity),
            correlation_id=correlation_id,
            mitre_tactics=mitre_tactics,
            tags=(category.value, severity.value),
        )
