"""
Simulation clock for the city telemetry simulator.

The clock counts ticks. It does not sleep and it does not wait; the
scheduler decides when a tick happens, the clock merely records how many
have happened and what time they correspond to.

When a start time is configured the timestamp of a tick is derived from
the tick count alone (start + tick * period), which makes a seeded run
fully reproducible. Without one, ticks are stamped with the host's
current time.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta


def _system_now() -> datetime:
    return datetime.now().astimezone()


class SimulationClock:
    """
    A monotonic tick counter with an optional simulated wall clock.
    """

    def __init__(
        self,
        period: timedelta = timedelta(seconds=2),
        start_time: datetime | None = None,
        now_fn: Callable[[], datetime] = _system_now,
    ) -> None:
        if start_time is not None and start_time.tzinfo is None:
            start_time = start_time.replace(tzinfo=UTC)

        self.period = period
        self.start_time = start_time
        self._now_fn = now_fn
        self._current_tick: int = 0

    def now(self) -> int:
        """
        Return the current tick index.
        """
        return self._current_tick

    def advance(self) -> int:
        """
        Move forward by one tick and return the new tick index.
        """
        self._current_tick += 1
        return self._current_tick

    def advance_to(self, target_tick: int | float) -> None:
        """
        Advance the clock to the specified tick.

        The clock may only move forwards. Attempting to move backwards is
        treated as a programming error.
        """
        target = int(target_tick)

        if target < self._current_tick:
            raise ValueError(
                f"Cannot move clock backwards from {self._current_tick} to {target}"
            )

        self._current_tick = target

    def wall_time(self) -> datetime:
        """
        Return the timestamp of the current tick.
        """
        if self.start_time is None:
            return self._now_fn()
        return self.start_time + self.period * self._current_tick

    def reset(self) -> None:
        """
        Reset the clock to tick zero.
        """
        self._current_tick = 0
