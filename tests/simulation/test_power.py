"""Unit tests for PowerSupply — drain, recharge and delivery bonus."""

from __future__ import annotations

import pytest

from lockdown.simulation.power import PowerConfig, PowerSupply

pytestmark = pytest.mark.unit


class TestDrain:
    def test_starts_full(self):
        ps = PowerSupply()
        assert ps.level == 100.0
        assert ps.fraction == 1.0
        assert not ps.depleted

    def test_extra_zones_cost_more(self):
        ps = PowerSupply(PowerConfig(drain_rate=18.0, multi_zone_multiplier=1.5))
        assert ps.drain_rate_for(0) == 0.0
        assert ps.drain_rate_for(1) == pytest.approx(18.0)
        assert ps.drain_rate_for(2) == pytest.approx(45.0)
        assert ps.drain_rate_for(3) == pytest.approx(72.0)

    def test_one_zone_drains(self):
        ps = PowerSupply()
        ps.tick(1.0, 1)
        assert ps.level == pytest.approx(82.0)

    def test_reports_depletion_once(self):
        ps = PowerSupply(PowerConfig(capacity=10.0, drain_rate=20.0))
        assert ps.tick(1.0, 1) is True
        assert ps.depleted
        assert ps.level == 0.0
        assert ps.tick(1.0, 1) is False

    def test_disabled_never_depletes(self):
        ps = PowerSupply(PowerConfig(enabled=False, capacity=10.0, drain_rate=50.0))
        assert ps.tick(5.0, 6) is False
        assert not ps.depleted
        assert ps.level == 10.0


class TestCharge:
    def test_recharges_when_dark(self):
        ps = PowerSupply()
        ps.tick(2.0, 1)
        ps.tick(0.5, 0)
        assert ps.level == pytest.approx(64.0 + 15.0)

    def test_charge_capped_at_capacity(self):
        ps = PowerSupply()
        ps.tick(10.0, 0)
        assert ps.level == 100.0

    def test_delivery_bonus(self):
        ps = PowerSupply(PowerConfig(charge_rate=30.0, delivery_bonus=6.0))
        ps.credit_delivery(2)
        assert ps.charge_rate() == pytest.approx(42.0)

    def test_reset(self):
        ps = PowerSupply()
        ps.credit_delivery(3)
        ps.tick(1.0, 2)
        ps.reset()
        assert ps.level == 100.0
        assert ps.delivered_total == 0


class TestPowerConfig:
    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            PowerConfig(capacity=0.0)

    def test_rejects_negative_rate(self):
        with pytest.raises(ValueError):
            PowerConfig(drain_rate=-1.0)

    def test_to_dict(self):
        d = PowerSupply().to_dict()
        assert d == {"enabled": True, "level": 100.0, "capacity": 100.0, "delivered_total": 0}
