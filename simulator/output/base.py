# simulator/output/base.py
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from telemetry.models import Severity, Snapshot

# Severity -> syslog severity number
SYSLOG_SEVERITY = {
    Severity.CRITICAL: 2,
    Severity.HIGH: 3,
    Severity.MEDIUM: 4,
    Severity.LOW: 5,
    Severity.INFO: 6,
}


def syslog_timestamp(ts: datetime) -> str:
    return ts.strftime("%b %d %H:%M:%S")


class Adapter:
    """Base adapter for turning tick snapshots into log lines."""

    def transform(self, snapshot: Snapshot) -> Iterable[str]:
        """Override in subclasses."""
        return []
