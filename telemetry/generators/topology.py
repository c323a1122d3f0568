# telemetry/generators/topology.py
"""
Network topology simulator.

Owns nothing itself: the mutable node list lives in the engine state and
is passed in on every step. Nodes are created once and mutated in place;
the edge list is thrown away and rebuilt from the current node set on
every tick, which gives the dashboard a deliberately volatile topology.

Status changes are memoryless. With a small probability each tick a node
is reassigned a status drawn uniformly from online/warning/critical,
regardless of its current status.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from telemetry.geo import jitter_location
from telemetry.models import (
    EdgeStatus,
    GeoLocation,
    LinkType,
    NetworkEdge,
    NetworkNode,
    NetworkTopology,
    NodeMetrics,
    NodeStatus,
    NodeType,
    frozen_mapping,
)

ZONES = ["downtown", "harbor", "industrial", "residential", "midtown"]

VENDORS: dict[str, list[str]] = {
    "Cisco": ["C9300", "ISR4451", "IE-3400"],
    "Juniper": ["EX4300", "SRX345", "MX204"],
    "Axis": ["P3245-LVE", "Q6135-LE"],
    "Siemens": ["SCALANCE X208", "RUGGEDCOM RX1500"],
    "Dell": ["PowerEdge R650", "PowerEdge R750"],
}

# 3 up : 1 degraded
EDGE_STATUS_CHOICES = [EdgeStatus.UP, EdgeStatus.UP, EdgeStatus.UP, EdgeStatus.DEGRADED]
EDGE_BANDWIDTHS = [100, 1_000, 10_000]

# Exclusive upper bound on a node's out-degree.
MAX_OUT_DEGREE = 4

CPU_STEP = 5.0
MEMORY_STEP = 3.0
BANDWIDTH_STEP = 100.0
TEMPERATURE_STEP = 2.0
ERROR_RATE_STEP = 0.5


@dataclass
class NodeState:
    """Engine-internal, mutable view of a node. Never published directly."""

    id: str
    label: str
    type: NodeType
    location: GeoLocation
    properties: dict[str, Any]
    status: NodeStatus = NodeStatus.ONLINE
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    bandwidth: float = 0.0
    temperature: float = 0.0
    uptime: int = 0
    error_rate: float = 0.0

    def freeze(self) -> NetworkNode:
        return NetworkNode(
            id=self.id,
            label=self.label,
            type=self.type,
            status=self.status,
            location=self.location,
            properties=frozen_mapping(self.properties),
            metrics=NodeMetrics(
                cpu_usage=self.cpu_usage,
                memory_usage=self.memory_usage,
                bandwidth=self.bandwidth,
                temperature=self.temperature,
                uptime=self.uptime,
                error_rate=self.error_rate,
            ),
        )


def _clamp(value: float, lower: float, upper: float | None = None) -> float:
    if upper is not None:
        value = min(upper, value)
    return max(lower, value)


class TopologySimulator:
    def __init__(
        self,
        rng: random.Random,
        node_count: int,
        center: GeoLocation,
        jitter_radius_km: float,
        status_flip_probability: float = 0.02,
    ) -> None:
        """
        Args:
            rng: Random generator shared with the rest of the engine.
            node_count: Number of nodes; fixed for the engine's lifetime.
            center: Point around which node locations are jittered.
            jitter_radius_km: Maximum distance from the centre.
            status_flip_probability: Per node, per tick chance of a status reassignment.
        """
        self.rng = rng
        self.node_count = node_count
        self.center = center
        self.jitter_radius_km = jitter_radius_km
        self.status_flip_probability = status_flip_probability

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def create_nodes(self, now: datetime) -> list[NodeState]:
        """
        Create the fixed node set with randomised starting metrics.
        """
        return [self._create_node(index, now) for index in range(self.node_count)]

    def _create_node(self, index: int, now: datetime) -> NodeState:
        rng = self.rng
        node_type = rng.choice(list(NodeType))
        zone = rng.choice(ZONES)
        vendor = rng.choice(sorted(VENDORS))
        installed = now - timedelta(days=rng.randint(30, 5 * 365))

        properties = {
            "zone": zone,
            "vendor": vendor,
            "model": rng.choice(VENDORS[vendor]),
            "firmware": f"{rng.randint(1, 17)}.{rng.randint(0, 9)}.{rng.randint(0, 30)}",
            "installDate": installed.date().isoformat(),
        }

        return NodeState(
            id=f"node-{index:03d}",
            label=f"{node_type.value.title()}-{index + 1:02d}",
            type=node_type,
            location=jitter_location(rng, self.center, self.jitter_radius_km, zone=zone),
            properties=properties,
            cpu_usage=rng.uniform(10, 60),
            memory_usage=rng.uniform(20, 70),
            bandwidth=rng.uniform(100, 1000),
            temperature=rng.uniform(30, 55),
            uptime=rng.randint(0, 90 * 24 * 3600),
            error_rate=rng.uniform(0, 2),
        )

    # ------------------------------------------------------------------
    # Per-tick evolution
    # ------------------------------------------------------------------

    def step(self, nodes: list[NodeState], now: datetime) -> NetworkTopology:
        """
        Advance every node by one tick, rebuild the edges and return a
        frozen topology snapshot.
        """
        for node in nodes:
            self._perturb(node)

        edges = self.generate_edges(nodes)
        return NetworkTopology(
            nodes=tuple(node.freeze() for node in nodes),
            edges=tuple(edges),
            last_updated=now,
        )

    def _perturb(self, node: NodeState) -> None:
        rng = self.rng
        node.cpu_usage = _clamp(node.cpu_usage + rng.uniform(-CPU_STEP, CPU_STEP), 0.0, 100.0)
        node.memory_usage = _clamp(
            node.memory_usage + rng.uniform(-MEMORY_STEP, MEMORY_STEP), 0.0, 100.0
        )
        node.bandwidth = _clamp(node.bandwidth + rng.uniform(-BANDWIDTH_STEP, BANDWIDTH_STEP), 0.0)
        node.temperature = _clamp(
            node.temperature + rng.uniform(-TEMPERATURE_STEP, TEMPERATURE_STEP), 0.0, 100.0
        )
        node.uptime += 1
        node.error_rate = _clamp(
            node.error_rate + rng.uniform(-ERROR_RATE_STEP, ERROR_RATE_STEP), 0.0
        )

        if rng.random() < self.status_flip_probability:
            node.status = rng.choice(list(NodeStatus))

    def generate_edges(self, nodes: list[NodeState]) -> list[NetworkEdge]:
        """
        Build a fresh edge list.

        Every node gets an out-degree in [1, MAX_OUT_DEGREE). Targets are
        drawn uniformly with self-loops rejected; duplicates are allowed.
        """
        rng = self.rng
        edges: list[NetworkEdge] = []

        for node in nodes:
            out_degree = rng.randrange(1, MAX_OUT_DEGREE)
            for slot in range(out_degree):
                target = rng.choice(nodes)
                while target is node:
                    target = rng.choice(nodes)

                edges.append(
                    NetworkEdge(
                        id=f"edge-{node.id}-{target.id}-{slot}",
                        source=node.id,
                        target=target.id,
                        type=rng.choice(list(LinkType)),
                        bandwidth=rng.choice(EDGE_BANDWIDTHS),
                        latency=rng.uniform(1.0, 50.0),
                        utilization=rng.random(),
                        status=rng.choice(EDGE_STATUS_CHOICES),
                    )
                )

        return edges
