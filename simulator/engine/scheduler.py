"""
Periodic tick scheduler.

Runs a callback on a background thread at a fixed period. There is only
ever one worker thread, so ticks can never overlap: if a tick overruns
its slot, the next one fires as soon as it finishes and the schedule is
re-anchored from there rather than bursting to catch up.

Stopping is cooperative. ``stop()`` prevents further ticks and waits for
the worker to exit, but never interrupts a tick that is already running.
If the wait times out, the next ``start()`` joins the old worker before
launching a new one.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

log = logging.getLogger(__name__)


class TickScheduler:
    def __init__(
        self,
        period_seconds: float,
        callback: Callable[[], object],
        name: str = "telemetry-scheduler",
    ) -> None:
        if period_seconds <= 0:
            raise ValueError(f"Tick period must be positive, got {period_seconds}")

        self.period_seconds = period_seconds
        self._callback = callback
        self._name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stop.is_set()

    def start(self) -> None:
        if self.running:
            return

        previous = self._thread
        if previous is not None and previous is not threading.current_thread():
            # A timed-out stop() left a tick in flight; let that worker exit first.
            previous.join()

        # One stop event per run.
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop,), name=self._name, daemon=True
        )
        self._thread.start()
        log.info("Scheduler started (period=%.3fs)", self.period_seconds)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                log.warning("Scheduler stop timed out; in-flight tick still running")
            else:
                self._thread = None
        log.info("Scheduler stopped")

    def _run(self, stop: threading.Event) -> None:
        next_due = time.monotonic() + self.period_seconds
        while not stop.wait(max(0.0, next_due - time.monotonic())):
            try:
                self._callback()
            except Exception:
                log.exception("Tick failed; scheduler continues")

            next_due += self.period_seconds
            now = time.monotonic()
            if next_due < now:
                # Overran: defer the next tick rather than firing a backlog.
                next_due = now
