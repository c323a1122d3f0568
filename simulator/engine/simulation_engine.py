"""
Simulation engine for the city telemetry simulator.

The engine wires the generators to the clock. On every tick it:

1. Advances the clock and stamps the tick with a timestamp
2. Synthesizes a fresh Metrics value
3. Runs the alert and incident trials, pushing any new event into its
   bounded history
4. Evolves the network topology and rebuilds its edges
5. Freezes the results into a Snapshot, stores it as the latest one and
   publishes it on the event bus

All generators draw from one seeded random generator in a fixed order, so
two engines built from the same configuration (with a fixed start time)
produce identical snapshot sequences.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable

from simulator.config import EngineConfig
from simulator.engine.clock import SimulationClock
from simulator.engine.event_bus import EventBus, Subscriber
from simulator.engine.scheduler import TickScheduler
from simulator.engine.state import BoundedHistory, EngineState
from telemetry.generators.alerts import AlertEmitter
from telemetry.generators.incidents import IncidentEmitter
from telemetry.generators.metrics import MetricsSynthesizer
from telemetry.generators.topology import TopologySimulator
from telemetry.models import Alert, Incident, Metrics, NetworkTopology, Snapshot

log = logging.getLogger(__name__)


class TelemetryEngine:
    """
    Owns the engine state and produces one immutable Snapshot per tick.

    Ticks are driven either by the background scheduler (``start()`` /
    ``stop()``) or synchronously with ``step()``. Both paths share a lock,
    so ticks never run concurrently.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        clock: SimulationClock | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.clock = clock or SimulationClock(
            period=self.config.tick_period,
            start_time=self.config.start_time,
        )
        self.event_bus = event_bus or EventBus()
        self.rng = random.Random(self.config.rng_seed)

        cfg = self.config
        self.metrics_synthesizer = MetricsSynthesizer(self.rng)
        self.alert_emitter = AlertEmitter(
            self.rng,
            probability=cfg.alert_probability,
            center=cfg.center_location,
            jitter_radius_km=cfg.jitter_radius_km,
        )
        self.incident_emitter = IncidentEmitter(
            self.rng,
            probability=cfg.incident_probability,
            center=cfg.center_location,
            jitter_radius_km=cfg.jitter_radius_km,
        )
        self.topology_simulator = TopologySimulator(
            self.rng,
            node_count=cfg.node_count,
            center=cfg.center_location,
            jitter_radius_km=cfg.jitter_radius_km,
            status_flip_probability=cfg.status_flip_probability,
        )

        self._state = EngineState(
            alerts=BoundedHistory(cfg.alert_history_cap),
            incidents=BoundedHistory(cfg.incident_history_cap),
            nodes=self.topology_simulator.create_nodes(self.clock.wall_time()),
        )
        self._latest: Snapshot | None = None
        self._tick_lock = threading.Lock()
        self._ticking_thread: int | None = None
        self._scheduler = TickScheduler(
            period_seconds=cfg.tick_period_ms / 1000.0,
            callback=self.step,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        """
        Begin ticking in the background at the configured period.
        """
        log.info(
            "Starting telemetry engine (period=%dms, nodes=%d, seed=%s)",
            self.config.tick_period_ms, self.config.node_count, self.config.rng_seed,
        )
        self._scheduler.start()

    def stop(self, timeout: float | None = None) -> None:
        """
        Stop ticking. A tick already in progress is allowed to finish.
        """
        self._scheduler.stop(timeout)
        log.info("Telemetry engine stopped at tick %d", self.clock.now())

    def close(self) -> None:
        """
        Stop the engine and close its event bus.
        """
        self.stop()
        self.event_bus.close()

    # ------------------------------------------------------------------
    # Tick pipeline
    # ------------------------------------------------------------------

    def step(self) -> Snapshot:
        """
        Run exactly one tick synchronously and return its snapshot.

        Raises RuntimeError when called from an on_tick subscriber, since
        the tick that is publishing still holds the tick lock.
        """
        if self._ticking_thread == threading.get_ident():
            raise RuntimeError("step() cannot be called from inside an on_tick callback")

        with self._tick_lock:
            self._ticking_thread = threading.get_ident()
            try:
                snapshot = self._tick()
                self._latest = snapshot
                self.event_bus.publish(snapshot)
            finally:
                self._ticking_thread = None
        return snapshot

    def run(self, ticks: int) -> Snapshot | None:
        """
        Run ``ticks`` ticks back to back and return the last snapshot.
        """
        snapshot = None
        for _ in range(ticks):
            snapshot = self.step()
        return snapshot

    def _tick(self) -> Snapshot:
        state = self._state
        tick = self.clock.advance()
        now = self.clock.wall_time()

        metrics = self.metrics_synthesizer.synthesize(tick, now)

        alert = self.alert_emitter.maybe_emit(now, state.alert_sequence + 1)
        if alert is not None:
            state.alert_sequence += 1
            state.alerts.push(alert)

        incident = self.incident_emitter.maybe_emit(now, state.incident_sequence + 1)
        if incident is not None:
            state.incident_sequence += 1
            state.incidents.push(incident)

        topology = self.topology_simulator.step(state.nodes, now)

        log.debug(
            "Tick %d: alert=%s incident=%s edges=%d",
            tick,
            alert.id if alert else None,
            incident.id if incident else None,
            len(topology.edges),
        )

        return Snapshot(
            tick=tick,
            timestamp=now,
            metrics=metrics,
            alerts=state.alerts.snapshot(),
            incidents=state.incidents.snapshot(),
            topology=topology,
            new_alert=alert,
            new_incident=incident,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def latest_snapshot(self) -> Snapshot | None:
        return self._latest

    def latest_metrics(self) -> Metrics | None:
        snapshot = self._latest
        return snapshot.metrics if snapshot else None

    def alert_history(self) -> tuple[Alert, ...]:
        snapshot = self._latest
        return snapshot.alerts if snapshot else ()

    def incident_history(self) -> tuple[Incident, ...]:
        snapshot = self._latest
        return snapshot.incidents if snapshot else ()

    def topology(self) -> NetworkTopology | None:
        snapshot = self._latest
        return snapshot.topology if snapshot else None

    def on_tick(self, callback: Subscriber) -> Callable[[], None]:
        """
        Call ``callback`` with every completed tick's snapshot.

        Callbacks run while the tick lock is held, so they must not call
        ``step()`` or ``run()``; doing so raises RuntimeError. Returns a
        callable that cancels the subscription.
        """
        return self.event_bus.subscribe(callback)
