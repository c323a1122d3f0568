# simulator/output/topology_adapter.py
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from telemetry.models import EdgeStatus, NodeStatus, Snapshot

from .base import Adapter, syslog_timestamp


class TopologyAdapter(Adapter):
    """Summarise node health and link state for a tick."""

    def transform(self, snapshot: Snapshot) -> Iterable[str]:
        topology = snapshot.topology
        statuses = Counter(node.status for node in topology.nodes)
        links = Counter(edge.status for edge in topology.edges)

        lines = [
            f"{syslog_timestamp(topology.last_updated)} topology "
            f"nodes={len(topology.nodes)} "
            f"online={statuses[NodeStatus.ONLINE]} "
            f"warning={statuses[NodeStatus.WARNING]} "
            f"critical={statuses[NodeStatus.CRITICAL]} "
            f"edges={len(topology.edges)} "
            f"up={links[EdgeStatus.UP]} degraded={links[EdgeStatus.DEGRADED]}"
        ]
        for node in topology.nodes:
            if node.status is NodeStatus.CRITICAL:
                lines.append(
                    f"{syslog_timestamp(topology.last_updated)} topology "
                    f"NODE_CRITICAL {node.id} ({node.label}) "
                    f"cpu={node.metrics.cpu_usage:.0f}% temp={node.metrics.temperature:.0f}C"
                )
        return lines
