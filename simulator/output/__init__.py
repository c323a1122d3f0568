# simulator/output/__init__.py
from .base import Adapter
from .adapter import SnapshotAdapter, write_snapshot_logs
from .event_adapter import AlertAdapter, IncidentAdapter
from .metrics_adapter import MetricsAdapter
from .topology_adapter import TopologyAdapter

__all__ = [
    "Adapter",
    "SnapshotAdapter",
    "write_snapshot_logs",
    "AlertAdapter",
    "IncidentAdapter",
    "MetricsAdapter",
    "TopologyAdapter",
]
