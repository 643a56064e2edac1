"""Unit tests for Evader — waypoint walking, freeze timer, capture handoff."""

from __future__ import annotations

import pytest

from lockdown.simulation.evader import Evader, EvaderConfig, FreezeState

pytestmark = pytest.mark.unit


def _make_evader(
    waypoints=((0.0, 0.0), (0.0, 100.0)),
    speed: float = 60.0,
    position=None,
    threshold: float = 5.0,
) -> Evader:
    return Evader(
        "e1", list(waypoints), speed, position=position,
        config=EvaderConfig(capture_threshold=threshold),
    )


class TestConstruction:
    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            Evader("e1", [], 60.0)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            Evader("e1", [(0.0, 0.0)], 60.0, kind="guard")

    def test_kind_sets_radius(self):
        e = Evader("e1", [(0.0, 0.0)], 60.0, kind="strong")
        assert e.radius == 12.0

    def test_starts_on_first_waypoint_by_default(self):
        e = _make_evader()
        assert e.position == (0.0, 0.0)
        assert e.state is FreezeState.MOVING


class TestAdvance:
    def test_moves_speed_times_dt(self):
        e = _make_evader(position=(0.0, -50.0), waypoints=[(0.0, 0.0), (0.0, 100.0)])
        e.advance(0.5)
        assert e.position == pytest.approx((0.0, -20.0))

    def test_does_not_overshoot_waypoint(self):
        e = _make_evader(position=(0.0, -10.0), speed=100.0)
        e.advance(1.0)
        assert e.position == pytest.approx((0.0, 0.0))
        assert e.waypoint_index == 0

    def test_arrival_advances_index(self):
        e = _make_evader()
        e.advance(0.1)
        assert e.waypoint_index == 1

    def test_waypoints_visited_in_order(self):
        path = [(0.0, 0.0), (0.0, 50.0), (30.0, 80.0), (30.0, 200.0)]
        e = _make_evader(waypoints=path, speed=50.0)
        seen = []
        for _ in range(200):
            if e.waypoint_index not in seen:
                seen.append(e.waypoint_index)
            e.advance(0.1)
            if e.escaped:
                break
        assert seen == [0, 1, 2, 3]

    def test_frozen_evader_does_not_move(self):
        e = _make_evader(position=(0.0, -50.0))
        e.freeze(0.0)
        e.advance(1.0)
        assert e.position == (0.0, -50.0)

    def test_captured_evader_does_not_move(self):
        e = _make_evader(position=(0.0, -50.0))
        e.mark_captured("guard-1")
        e.advance(1.0)
        assert e.position == (0.0, -50.0)
        assert e.waypoint_index == 0

    def test_escape_after_final_waypoint(self):
        path = [(0.0, 0.0), (0.0, 20.0), (0.0, 40.0), (0.0, 60.0)]
        e = _make_evader(waypoints=path, speed=100.0)
        for _ in range(100):
            e.advance(0.1)
            if e.escaped:
                break
        assert e.escaped is True
        assert e.waypoint_index == 4
        assert e.current_waypoint is None
        pos = e.position
        e.advance(0.1)
        e.advance(1.0)
        assert e.position == pos


class TestFreeze:
    def test_freeze_records_start(self):
        e = _make_evader()
        e.freeze(1.5)
        assert e.state is FreezeState.FROZEN
        assert e.freeze_started_at == 1.5

    def test_freeze_is_idempotent(self):
        e = _make_evader()
        e.freeze(1.0)
        e.freeze(3.0)
        assert e.freeze_started_at == 1.0

    def test_unfreeze_clears_timer(self):
        e = _make_evader()
        e.freeze(1.0)
        e.unfreeze()
        assert e.state is FreezeState.MOVING
        assert e.freeze_started_at is None

    def test_unfreeze_when_moving_is_noop(self):
        e = _make_evader()
        e.unfreeze()
        assert e.state is FreezeState.MOVING

    def test_capturable_exactly_at_threshold(self):
        e = _make_evader(threshold=5.0)
        e.freeze(0.0)
        assert e.is_capturable(5.0) is True

    def test_not_capturable_just_before_threshold(self):
        e = _make_evader(threshold=5.0)
        e.freeze(0.0)
        assert e.is_capturable(5.0 - 1e-6) is False

    def test_refreeze_restarts_countdown(self):
        e = _make_evader(threshold=5.0)
        e.freeze(0.0)
        e.unfreeze()
        e.freeze(3.0)
        assert e.is_capturable(6.0) is False
        assert e.is_capturable(8.0) is True

    def test_moving_evader_not_capturable(self):
        e = _make_evader()
        assert e.is_capturable(100.0) is False

    def test_capture_progress(self):
        e = _make_evader(threshold=4.0)
        assert e.capture_progress(1.0) == 0.0
        e.freeze(0.0)
        assert e.capture_progress(1.0) == pytest.approx(0.25)
        assert e.capture_progress(10.0) == 1.0


class TestCapture:
    def test_capture_from_frozen_clears_timer(self):
        e = _make_evader()
        e.freeze(0.0)
        assert e.mark_captured("guard-1") is True
        assert e.state is FreezeState.CAPTURED
        assert e.freeze_started_at is None
        assert e.captured_by == "guard-1"

    def test_capture_from_moving(self):
        e = _make_evader()
        assert e.mark_captured("guard-1") is True
        assert e.is_captured

    def test_recapture_is_noop(self):
        e = _make_evader()
        e.mark_captured("guard-1")
        assert e.mark_captured("guard-2") is False
        assert e.captured_by == "guard-1"

    def test_escaped_cannot_be_captured(self):
        e = _make_evader(waypoints=[(0.0, 0.0)])
        e.advance(0.1)
        assert e.escaped
        assert e.mark_captured("guard-1") is False
        assert e.captured_by is None

    def test_freeze_after_capture_is_noop(self):
        e = _make_evader()
        e.mark_captured("guard-1")
        e.freeze(1.0)
        e.unfreeze()
        assert e.state is FreezeState.CAPTURED

    def test_only_captor_can_reposition(self):
        e = _make_evader()
        e.mark_captured("guard-1")
        assert e.follow((10.0, 10.0), "guard-2") is False
        assert e.position == (0.0, 0.0)
        assert e.follow((10.0, 10.0), "guard-1") is True
        assert e.position == (10.0, 10.0)

    def test_follow_requires_capture(self):
        e = _make_evader()
        assert e.follow((10.0, 10.0), "guard-1") is False
