"""Configuration management using Pydantic settings.

Every tunable lives here and can be overridden with a ``LOCKDOWN_``
environment variable or a ``.env`` file.  The engine never reads these
fields directly; it asks for the frozen per-agent config objects built by
the ``*_config()`` helpers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lockdown.simulation.evader import EvaderConfig
from lockdown.simulation.power import PowerConfig
from lockdown.simulation.pursuer import PursuerConfig
from lockdown.simulation.spawner import SpawnConfig
from lockdown.simulation.zone import ZoneConfig

# Six searchlights on an arc across the top of the yard (keys 1-6).
_DEFAULT_ZONE_POSITIONS: list[tuple[float, float]] = [
    (200.0, 300.0),
    (350.0, 250.0),
    (500.0, 200.0),
    (650.0, 200.0),
    (800.0, 250.0),
    (950.0, 300.0),
]


class Settings(BaseSettings):
    """Simulation settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LOCKDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Arena / driver
    arena_width: float = 1200.0
    arena_height: float = 800.0
    tick_rate_hz: float = 60.0
    log_level: str = "INFO"
    seed: Optional[int] = None

    # Illumination zones
    zone_positions: list[tuple[float, float]] = Field(
        default_factory=lambda: list(_DEFAULT_ZONE_POSITIONS)
    )
    zone_radius: float = 120.0
    zone_boost_multiplier: float = 1.5
    zone_boost_duration: float = 2.0
    zone_boost_cooldown: float = 5.0

    # Evaders
    capture_threshold: float = 5.0
    evader_arrival_epsilon: float = 5.0

    # Pursuers
    pursuer_count: int = 2
    pursuer_type: str = "guard"
    pursuer_speed: Optional[float] = None  # None = draw from the type's range
    pursuer_capacity: int = 10
    pursuer_vision_range: float = 450.0
    pursuer_vision_angle: float = 360.0
    pursuer_hunt_multiplier: float = 2.0
    patrol_bounds: tuple[float, float, float, float] = (50.0, 50.0, 1150.0, 600.0)
    drop_off_point: tuple[float, float] = (1050.0, 400.0)
    drop_off_threshold: float = 10.0
    escort_spacing: float = 25.0
    patrol_dwell_min: float = 2.0
    patrol_dwell_max: float = 5.0
    attention_duration: float = 3.0
    attention_speed_multiplier: float = 0.3

    # Power
    power_enabled: bool = True
    power_capacity: float = 100.0
    power_charge_rate: float = 30.0
    power_delivery_bonus: float = 6.0
    power_drain_rate: float = 18.0
    power_multi_zone_multiplier: float = 1.5

    # Spawning
    auto_spawn: bool = False
    spawn_interval: float = 2.0
    spawn_interval_min: float = 0.5
    spawn_interval_decay: float = 0.99
    spawn_kinds: dict[str, float] = Field(default_factory=lambda: {"regular": 1.0})

    # -- Per-agent config builders ------------------------------------------

    def zone_config(self) -> ZoneConfig:
        return ZoneConfig(
            radius=self.zone_radius,
            boost_multiplier=self.zone_boost_multiplier,
            boost_duration=self.zone_boost_duration,
            boost_cooldown=self.zone_boost_cooldown,
        )

    def evader_config(self) -> EvaderConfig:
        return EvaderConfig(
            capture_threshold=self.capture_threshold,
            arrival_epsilon=self.evader_arrival_epsilon,
        )

    def pursuer_config(self, speed: float, radius: float) -> PursuerConfig:
        return PursuerConfig(
            speed=speed,
            hunt_multiplier=self.pursuer_hunt_multiplier,
            vision_range=self.pursuer_vision_range,
            vision_angle=self.pursuer_vision_angle,
            capacity=self.pursuer_capacity,
            radius=radius,
            patrol_bounds=self.patrol_bounds,
            drop_off_point=self.drop_off_point,
            drop_off_threshold=self.drop_off_threshold,
            escort_spacing=self.escort_spacing,
            dwell_min=self.patrol_dwell_min,
            dwell_max=self.patrol_dwell_max,
            attention_duration=self.attention_duration,
            attention_speed_multiplier=self.attention_speed_multiplier,
        )

    def power_config(self) -> PowerConfig:
        return PowerConfig(
            enabled=self.power_enabled,
            capacity=self.power_capacity,
            charge_rate=self.power_charge_rate,
            delivery_bonus=self.power_delivery_bonus,
            drain_rate=self.power_drain_rate,
            multi_zone_multiplier=self.power_multi_zone_multiplier,
        )

    def spawn_config(self) -> SpawnConfig:
        return SpawnConfig(
            interval=self.spawn_interval,
            interval_min=self.spawn_interval_min,
            decay=self.spawn_interval_decay,
            kinds=dict(self.spawn_kinds),
        )


# Global settings instance
settings = Settings()
