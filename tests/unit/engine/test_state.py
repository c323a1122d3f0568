"""Unit tests for simulator.engine.state module."""

import pytest

from simulator.engine.state import BoundedHistory, EngineState


class TestBoundedHistory:
    """Tests for the most-recent-first bounded list."""

    @pytest.mark.parametrize("capacity", [0, -3])
    def test_capacity_must_be_positive(self, capacity):
        with pytest.raises(ValueError, match="History capacity must be positive"):
            BoundedHistory(capacity)

    def test_push_puts_newest_first(self):
        history = BoundedHistory(5)
        for item in ["a", "b", "c"]:
            history.push(item)

        assert history.snapshot() == ("c", "b", "a")

    def test_overflow_evicts_oldest(self):
        history = BoundedHistory(3)
        for item in range(10):
            history.push(item)

        assert len(history) == 3
        assert history.snapshot() == (9, 8, 7)

    def test_snapshot_is_immutable_copy(self):
        history = BoundedHistory(3)
        history.push(1)
        snap = history.snapshot()
        history.push(2)

        assert isinstance(snap, tuple)
        assert snap == (1,)

    def test_iteration_and_clear(self):
        history = BoundedHistory(3)
        history.push("x")
        history.push("y")

        assert list(history) == ["y", "x"]
        history.clear()
        assert len(history) == 0


def test_engine_state_defaults():
    state = EngineState(alerts=BoundedHistory(50), incidents=BoundedHistory(20))
    assert state.nodes == []
    assert state.alert_sequence == 0
    assert state.incident_sequence == 0
    assert state.alerts.capacity == 50
    assert state.incidents.capacity == 20
