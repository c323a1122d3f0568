# simulator/output/event_adapter.py
from __future__ import annotations

from collections.abc import Iterable

from telemetry.models import Snapshot

from .base import SYSLOG_SEVERITY, Adapter, syslog_timestamp


class AlertAdapter(Adapter):
    """Render the alert emitted on a tick, if any, as a syslog-like line."""

    FACILITY = 16  # local0

    def transform(self, snapshot: Snapshot) -> Iterable[str]:
        alert = snapshot.new_alert
        if alert is None:
            return []

        pri = self.FACILITY * 8 + SYSLOG_SEVERITY[alert.severity]
        line = (
            f"<{pri}>{syslog_timestamp(alert.timestamp)} {alert.source.replace(' ', '-')} "
            f"ALERT {alert.id} [{alert.severity.value}/{alert.category.value}] "
            f"{alert.title}; escalation={alert.escalation_level} "
            f"sla={alert.sla_deadline.isoformat()}"
        )
        if alert.correlation_id:
            line += f" correlation={alert.correlation_id}"
        return [line]


class IncidentAdapter(Adapter):
    """Render the incident opened on a tick, if any, plus its timeline."""

    FACILITY = 17  # local1

    def transform(self, snapshot: Snapshot) -> Iterable[str]:
        incident = snapshot.new_incident
        if incident is None:
            return []

        pri = self.FACILITY * 8 + SYSLOG_SEVERITY[incident.severity]
        ts_str = syslog_timestamp(snapshot.timestamp)
        lines = [
            f"<{pri}>{ts_str} incident-mgmt INCIDENT {incident.id} "
            f"[{incident.severity.value}/{incident.type.value}] {incident.summary}; "
            f"status={incident.status.value} cost=${incident.cost:,}"
        ]
        for entry in incident.timeline:
            lines.append(
                f"<{pri}>{ts_str} incident-mgmt {incident.id} "
                f"{entry.timestamp.isoformat()} {entry.actor}: {entry.action}"
            )
        return lines
