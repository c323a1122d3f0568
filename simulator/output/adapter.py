# simulator/output/adapter.py
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from telemetry.models import Snapshot

from .event_adapter import AlertAdapter, IncidentAdapter
from .metrics_adapter import MetricsAdapter
from .topology_adapter import TopologyAdapter

log = logging.getLogger(__name__)


class SnapshotAdapter:
    """Run a snapshot through every section adapter, in a fixed order."""

    def __init__(self):
        self.adapters = {
            "metrics": MetricsAdapter(),
            "alert": AlertAdapter(),
            "incident": IncidentAdapter(),
            "topology": TopologyAdapter(),
        }

    def transform(self, snapshot: Snapshot, sections: Iterable[str] | None = None) -> list[str]:
        selected = list(sections) if sections is not None else list(self.adapters)
        lines: list[str] = []
        for name in selected:
            adapter = self.adapters.get(name)
            if adapter:
                lines.extend(adapter.transform(snapshot))
        return lines


def write_snapshot_logs(snapshots: Iterable[Snapshot], output_file_path: str | Path) -> None:
    adapter = SnapshotAdapter()
    output_file = Path(output_file_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("w", encoding="utf-8") as f:
        for snapshot in snapshots:
            try:
                for line in adapter.transform(snapshot):
                    if line:
                        f.write(line + "\n")
            except Exception as e:
                log.warning("Failed to transform snapshot for tick %s: %s", snapshot.tick, e)
