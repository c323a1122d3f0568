"""
Domain model for the city operations telemetry simulator.

Everything the engine publishes is defined here as a frozen dataclass.
Collections are tuples and free-form mappings are read-only views, so a
published value can be handed to any number of consumers without copying
and without risk of a consumer mutating engine-owned state.

Each model provides ``to_dict()`` which produces the camelCase, JSON-ready
shape consumed by the dashboard.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any


class Severity(str, enum.Enum):
    """Ordered severity levels shared by alerts and incidents."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = (
    Severity.INFO,
    Severity.LOW,
    Severity.MEDIUM,
    Severity.HIGH,
    Severity.CRITICAL,
)


class AlertCategory(str, enum.Enum):
    CYBERSECURITY = "cybersecurity"
    INFRASTRUCTURE = "infrastructure"
    TRAFFIC = "traffic"
    ENERGY = "energy"
    ENVIRONMENTAL = "environmental"
    PUBLIC_SAFETY = "public_safety"
    NETWORK = "network"


class AlertStatus(str, enum.Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    FALSE_POSITIVE = "false_positive"


class IncidentType(str, enum.Enum):
    CYBER_ATTACK = "cyber_attack"
    INFRASTRUCTURE_FAILURE = "infrastructure_failure"
    TRAFFIC_ACCIDENT = "traffic_accident"
    POWER_OUTAGE = "power_outage"
    ENVIRONMENTAL_HAZARD = "environmental_hazard"
    PUBLIC_SAFETY = "public_safety"
    NETWORK_OUTAGE = "network_outage"


class IncidentStatus(str, enum.Enum):
    """
    Incident lifecycle states.

    The generator only ever emits the in-progress states; ``RESOLVED`` and
    ``CLOSED`` are set by operator workflows outside the simulator.
    """

    REPORTED = "reported"
    INVESTIGATING = "investigating"
    RESPONDING = "responding"
    MITIGATING = "mitigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


IN_PROGRESS_STATUSES = (
    IncidentStatus.REPORTED,
    IncidentStatus.INVESTIGATING,
    IncidentStatus.RESPONDING,
    IncidentStatus.MITIGATING,
)


class NodeType(str, enum.Enum):
    ROUTER = "router"
    SWITCH = "switch"
    FIREWALL = "firewall"
    SENSOR = "sensor"
    CAMERA = "camera"
    SERVER = "server"
    CONTROLLER = "controller"
    GATEWAY = "gateway"


class NodeStatus(str, enum.Enum):
    ONLINE = "online"
    WARNING = "warning"
    CRITICAL = "critical"


class LinkType(str, enum.Enum):
    ETHERNET = "ethernet"
    FIBER = "fiber"
    WIRELESS = "wireless"
    CELLULAR = "cellular"


class EdgeStatus(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    DEGRADED = "degraded"


def _iso(value: datetime) -> str:
    return value.isoformat()


@dataclass(frozen=True, slots=True)
class GeoLocation:
    latitude: float
    longitude: float
    address: str | None = None
    zone: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"latitude": self.latitude, "longitude": self.longitude}
        if self.address is not None:
            data["address"] = self.address
        if self.zone is not None:
            data["zone"] = self.zone
        return data


@dataclass(frozen=True, slots=True)
class Metrics:
    """
    City-wide metrics for one tick.

    Ratio fields (traffic_flow, infrastructure_health, citizen_satisfaction,
    budget_utilization) lie in [0, 1]. Absolute fields are non-negative:
    energy in MW, air quality as an AQI in [0, 500], network latency in
    milliseconds (at least 1) and security score in [0, 100].
    """

    timestamp: datetime
    energy_consumption: float
    traffic_flow: float
    air_quality: float
    infrastructure_health: float
    network_latency: float
    security_score: float
    citizen_satisfaction: float
    budget_utilization: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": _iso(self.timestamp),
            "energyConsumption": self.energy_consumption,
            "trafficFlow": self.traffic_flow,
            "airQuality": self.air_quality,
            "infrastructureHealth": self.infrastructure_health,
            "networkLatency": self.network_latency,
            "securityScore": self.security_score,
            "citizenSatisfaction": self.citizen_satisfaction,
            "budgetUtilization": self.budget_utilization,
        }


@dataclass(frozen=True, slots=True)
class Alert:
    """An immutable alert. Escalation level and SLA deadline derive from severity."""

    id: str
    timestamp: datetime
    severity: Severity
    category: AlertCategory
    title: str
    description: str
    source: str
    location: GeoLocation | None
    affected_assets: tuple[str, ...]
    escalation_level: int
    sla_deadline: datetime
    status: AlertStatus = AlertStatus.OPEN
    correlation_id: str | None = None
    mitre_tactics: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "timestamp": _iso(self.timestamp),
            "severity": self.severity.value,
            "category": self.category.value,
            "title": self.title,
            "description": self.description,
            "source": self.source,
            "affectedAssets": list(self.affected_assets),
            "status": self.status.value,
            "escalationLevel": self.escalation_level,
            "slaDeadline": _iso(self.sla_deadline),
            "tags": list(self.tags),
        }
        if self.location is not None:
            data["location"] = self.location.to_dict()
        if self.correlation_id is not None:
            data["correlationId"] = self.correlation_id
        if self.mitre_tactics:
            data["mitreTactics"] = list(self.mitre_tactics)
        return data


@dataclass(frozen=True, slots=True)
class IncidentEvent:
    timestamp: datetime
    actor: str
    action: str
    details: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": _iso(self.timestamp),
            "actor": self.actor,
            "action": self.action,
            "details": self.details,
        }


@dataclass(frozen=True, slots=True)
class Incident:
    id: str
    type: IncidentType
    severity: Severity
    status: IncidentStatus
    location: GeoLocation
    start_time: datetime
    summary: str
    description: str
    affected_systems: tuple[str, ...]
    responders: tuple[str, ...]
    timeline: tuple[IncidentEvent, ...]
    cost: int
    # Evidence is attached by external collaborators only.
    evidence: tuple[Mapping[str, Any], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "severity": self.severity.value,
            "status": self.status.value,
            "location": self.location.to_dict(),
            "startTime": _iso(self.start_time),
            "summary": self.summary,
            "description": self.description,
            "affectedSystems": list(self.affected_systems),
            "responders": list(self.responders),
            "timeline": [entry.to_dict() for entry in self.timeline],
            "evidence": [dict(item) for item in self.evidence],
            "cost": self.cost,
        }


@dataclass(frozen=True, slots=True)
class NodeMetrics:
    cpu_usage: float
    memory_usage: float
    bandwidth: float
    temperature: float
    uptime: int
    error_rate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "cpuUsage": self.cpu_usage,
            "memoryUsage": self.memory_usage,
            "bandwidth": self.bandwidth,
            "temperature": self.temperature,
            "uptime": self.uptime,
            "errorRate": self.error_rate,
        }


@dataclass(frozen=True, slots=True)
class NetworkNode:
    id: str
    label: str
    type: NodeType
    status: NodeStatus
    location: GeoLocation | None
    properties: Mapping[str, Any]
    metrics: NodeMetrics

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "status": self.status.value,
            "properties": dict(self.properties),
            "metrics": self.metrics.to_dict(),
        }
        if self.location is not None:
            data["location"] = self.location.to_dict()
        return data


@dataclass(frozen=True, slots=True)
class NetworkEdge:
    id: str
    source: str
    target: str
    type: LinkType
    bandwidth: int
    latency: float
    utilization: float
    status: EdgeStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "bandwidth": self.bandwidth,
            "latency": self.latency,
            "utilization": self.utilization,
            "status": self.status.value,
        }


@dataclass(frozen=True, slots=True)
class NetworkTopology:
    nodes: tuple[NetworkNode, ...]
    edges: tuple[NetworkEdge, ...]
    last_updated: datetime

    def node_ids(self) -> frozenset[str]:
        return frozenset(node.id for node in self.nodes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "lastUpdated": _iso(self.last_updated),
        }


@dataclass(frozen=True, slots=True)
class Snapshot:
    """
    Everything produced by a single tick.

    ``alerts`` and ``incidents`` are the bounded histories, newest first.
    ``new_alert`` and ``new_incident`` hold the event emitted on this tick,
    if any, for consumers that react to individual events.
    """

    tick: int
    timestamp: datetime
    metrics: Metrics
    alerts: tuple[Alert, ...]
    incidents: tuple[Incident, ...]
    topology: NetworkTopology
    new_alert: Alert | None = None
    new_incident: Incident | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "timestamp": _iso(self.timestamp),
            "metrics": self.metrics.to_dict(),
            "alerts": [alert.to_dict() for alert in self.alerts],
            "incidents": [incident.to_dict() for incident in self.incidents],
            "topology": self.topology.to_dict(),
            "newAlertId": self.new_alert.id if self.new_alert else None,
            "newIncidentId": self.new_incident.id if self.new_incident else None,
        }


def frozen_mapping(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only copy of ``data``."""
    return MappingProxyType(dict(data))
