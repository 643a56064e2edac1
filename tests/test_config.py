"""Unit tests for Settings and the per-agent config builders."""

from __future__ import annotations

import pytest

from lockdown.config import Settings
from lockdown.simulation.pursuer import PursuerConfig
from lockdown.simulation.zone import ZoneConfig

pytestmark = pytest.mark.unit


class TestDefaults:
    def test_six_zones(self):
        s = Settings()
        assert len(s.zone_positions) == 6

    def test_defaults_match_agent_configs(self):
        s = Settings()
        assert s.zone_config() == ZoneConfig()
        assert s.pursuer_config(speed=60.0, radius=12.0) == PursuerConfig()

    def test_evader_config(self):
        cfg = Settings(capture_threshold=3.0).evader_config()
        assert cfg.capture_threshold == 3.0
        assert cfg.arrival_epsilon == 5.0

    def test_power_and_spawn_configs(self):
        s = Settings(power_enabled=False, spawn_kinds={"fast": 2.0, "regular": 1.0})
        assert s.power_config().enabled is False
        assert s.spawn_config().kinds == {"fast": 2.0, "regular": 1.0}


class TestEnvironment:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOCKDOWN_PURSUER_CAPACITY", "4")
        monkeypatch.setenv("LOCKDOWN_ZONE_RADIUS", "90")
        s = Settings()
        assert s.pursuer_capacity == 4
        assert s.zone_config().radius == 90.0

    def test_invalid_values_surface_in_builders(self):
        s = Settings(pursuer_capacity=0)
        with pytest.raises(ValueError):
            s.pursuer_config(speed=60.0, radius=12.0)
