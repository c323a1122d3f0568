"""
Mutable engine state.

Everything the engine changes between ticks lives in one ``EngineState``
value: the two bounded histories, the node set and the id sequences. The
engine owns it exclusively and only touches it while running a tick.
Consumers never see it; they get frozen snapshots instead.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from telemetry.generators.topology import NodeState
from telemetry.models import Alert, Incident

T = TypeVar("T")


class BoundedHistory(Generic[T]):
    """
    Most-recent-first list with a fixed capacity.

    Pushing onto a full history evicts the oldest entry.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items: deque[T] = deque(maxlen=capacity)

    def push(self, item: T) -> None:
        self._items.appendleft(item)

    def snapshot(self) -> tuple[T, ...]:
        """Return the entries, newest first, as an immutable tuple."""
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))


@dataclass
class EngineState:
    alerts: BoundedHistory[Alert]
    incidents: BoundedHistory[Incident]
    nodes: list[NodeState] = field(default_factory=list)
    alert_sequence: int = 0
    incident_sequence: int = 0
