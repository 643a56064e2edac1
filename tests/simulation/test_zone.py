"""Unit tests for IlluminationZone — switching, containment, boost timing."""

from __future__ import annotations

import pytest

from lockdown.simulation.zone import BoostState, IlluminationZone, ZoneConfig

pytestmark = pytest.mark.unit


def _make_zone(active: bool = True, **cfg) -> IlluminationZone:
    return IlluminationZone(0, (500.0, 300.0), ZoneConfig(radius=120.0, **cfg), active=active)


class TestContainment:
    def test_point_inside_active_zone(self):
        zone = _make_zone()
        assert zone.contains((550.0, 300.0)) is True

    def test_point_on_edge_is_contained(self):
        zone = _make_zone()
        assert zone.contains((620.0, 300.0)) is True

    def test_point_outside(self):
        zone = _make_zone()
        assert zone.contains((621.0, 300.0)) is False

    def test_inactive_zone_never_contains(self):
        zone = _make_zone(active=False)
        assert zone.contains((500.0, 300.0)) is False

    def test_set_active_toggles(self):
        zone = _make_zone(active=False)
        zone.set_active(True)
        assert zone.active is True
        zone.set_active(False)
        assert zone.active is False


class TestBoost:
    def test_boost_enlarges_radius(self):
        zone = _make_zone()
        assert zone.request_boost(0.0) is True
        assert zone.boost_state is BoostState.ACTIVE
        assert zone.radius == pytest.approx(180.0)
        assert zone.contains((670.0, 300.0)) is True

    def test_radius_never_below_base(self):
        zone = _make_zone()
        for t in (0.0, 1.0, 2.5, 8.0, 20.0):
            zone.tick(t)
            assert zone.radius >= zone.base_radius

    def test_boost_reverts_after_duration(self):
        zone = _make_zone()
        zone.request_boost(0.0)
        zone.tick(1.9)
        assert zone.boost_state is BoostState.ACTIVE
        zone.tick(2.1)
        assert zone.boost_state is BoostState.COOLDOWN
        assert zone.radius == pytest.approx(120.0)

    def test_second_request_within_cooldown_is_ignored(self):
        zone = _make_zone()
        assert zone.request_boost(0.0) is True
        assert zone.request_boost(0.5) is False
        zone.tick(2.1)
        assert zone.request_boost(3.0) is False
        assert zone.boost_state is BoostState.COOLDOWN
        assert zone.radius == pytest.approx(120.0)

    def test_cooldown_counts_from_reversion(self):
        zone = _make_zone()
        zone.request_boost(0.0)
        zone.tick(2.1)  # reverts here, cooldown runs to 7.1
        assert zone.request_boost(6.0) is False
        assert zone.cooldown_remaining(6.0) == pytest.approx(1.1)
        assert zone.request_boost(7.2) is True

    def test_cooldown_elapses_to_idle(self):
        zone = _make_zone()
        zone.request_boost(0.0)
        zone.tick(2.1)
        zone.tick(7.2)
        assert zone.boost_state is BoostState.IDLE
        assert zone.cooldown_remaining(7.2) == 0.0

    def test_boost_works_while_zone_off(self):
        zone = _make_zone(active=False)
        assert zone.request_boost(0.0) is True
        assert zone.contains((500.0, 300.0)) is False


class TestZoneConfig:
    def test_rejects_non_positive_radius(self):
        with pytest.raises(ValueError):
            ZoneConfig(radius=0.0)

    def test_rejects_shrinking_boost(self):
        with pytest.raises(ValueError):
            ZoneConfig(boost_multiplier=0.5)

    def test_to_dict(self):
        zone = _make_zone()
        d = zone.to_dict(now=0.0)
        assert d["index"] == 0
        assert d["center"] == [500.0, 300.0]
        assert d["active"] is True
        assert d["boost_state"] == "idle"
