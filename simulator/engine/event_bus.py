"""
Event bus for the city telemetry simulator.

The event bus is the only mechanism by which tick snapshots leave the
engine. It provides a narrow, explicit boundary between generation and
whatever consumes the results: dashboards, notification routing, map
layers.

The bus does not interpret snapshots. It does not copy them. Snapshots are
immutable, so every subscriber receives the same object.
"""

from collections.abc import Callable

from telemetry.models import Snapshot

Subscriber = Callable[[Snapshot], None]


class EventBus:
    """
    Simple publish-subscribe bus for snapshots.

    Subscribers are called synchronously, in the order they were
    registered. If a subscriber raises an exception, propagation stops
    and the error is surfaced to the caller.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._closed: bool = False

    def subscribe(self, handler: Subscriber) -> Callable[[], None]:
        """
        Register a new snapshot handler.

        Returns a callable that removes the handler again.
        """
        if self._closed:
            raise RuntimeError("Cannot subscribe to a closed event bus")

        self._subscribers.append(handler)
        return lambda: self.unsubscribe(handler)

    def unsubscribe(self, handler: Subscriber) -> None:
        """
        Remove a handler. Unknown handlers are ignored.
        """
        if handler in self._subscribers:
            self._subscribers.remove(handler)

    def publish(self, snapshot: Snapshot) -> None:
        """
        Publish a snapshot to all subscribers.
        """
        if self._closed:
            raise RuntimeError("Cannot publish to a closed event bus")

        # Iterate over a copy so handlers may unsubscribe themselves.
        for handler in list(self._subscribers):
            handler(snapshot)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """
        Close the event bus.

        After closing, no further subscriptions or publications are
        permitted. This provides a clear lifecycle boundary for an engine.
        """
        self._closed = True
