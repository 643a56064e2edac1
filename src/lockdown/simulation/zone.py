"""IlluminationZone — a stationary searchlight pool that freezes inmates.

A zone is a circle on the yard floor.  While switched on it catches any
point inside its current radius.  The radius can be boosted for a short
time; boosting is rate limited by a cooldown that starts when the boost
wears off:

  idle --request_boost--> active --(duration elapsed)--> cooldown --(cooldown elapsed)--> idle

All timing is driven by the simulation clock passed into each call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from .clock import elapsed_at_least, elapsed_beyond
from .geometry import Vec2, distance


class BoostState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COOLDOWN = "cooldown"


@dataclass(frozen=True)
class ZoneConfig:
    """Radius and boost timings shared by every zone in a yard."""

    radius: float = 120.0
    boost_multiplier: float = 1.5
    boost_duration: float = 2.0   # seconds
    boost_cooldown: float = 5.0   # seconds, measured from boost end

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"zone radius must be positive, got {self.radius}")
        if self.boost_multiplier < 1.0:
            raise ValueError("boost_multiplier must be >= 1.0")
        if self.boost_duration < 0 or self.boost_cooldown < 0:
            raise ValueError("boost timings must be non-negative")


class IlluminationZone:
    """One switchable, boostable catch circle."""

    def __init__(self, index: int, center: Vec2, config: ZoneConfig | None = None,
                 active: bool = False) -> None:
        self.index = index
        self.center: Vec2 = (float(center[0]), float(center[1]))
        self.config = config or ZoneConfig()
        self.base_radius: float = self.config.radius
        self.active = active
        self.boost_state = BoostState.IDLE
        self.activated_at: float | None = None
        self._cooldown_started_at: float | None = None

    # -- Switching ------------------------------------------------------------

    def set_active(self, flag: bool) -> None:
        self.active = bool(flag)

    # -- Boost ----------------------------------------------------------------

    @property
    def radius(self) -> float:
        """Current catch radius, never below the base radius."""
        if self.boost_state is BoostState.ACTIVE:
            return self.base_radius * self.config.boost_multiplier
        return self.base_radius

    def boost_available(self, now: float) -> bool:
        if self.boost_state is BoostState.IDLE:
            return True
        if self.boost_state is BoostState.COOLDOWN:
            return elapsed_at_least(now, self._cooldown_started_at, self.config.boost_cooldown)
        return False

    def request_boost(self, now: float) -> bool:
        """Start a boost if one is available. Returns True if it started."""
        if not self.boost_available(now):
            logger.debug(f"Zone {self.index} boost refused ({self.boost_state.value})")
            return False
        self.boost_state = BoostState.ACTIVE
        self.activated_at = now
        self._cooldown_started_at = None
        logger.debug(f"Zone {self.index} boost on at t={now:.2f}")
        return True

    def cooldown_remaining(self, now: float) -> float:
        if self.boost_state is BoostState.COOLDOWN:
            left = self.config.boost_cooldown - (now - self._cooldown_started_at)
            return max(0.0, left)
        if self.boost_state is BoostState.ACTIVE:
            return self.config.boost_cooldown
        return 0.0

    def tick(self, now: float) -> None:
        """Advance the boost timer."""
        if self.boost_state is BoostState.ACTIVE:
            if elapsed_beyond(now, self.activated_at, self.config.boost_duration):
                self.boost_state = BoostState.COOLDOWN
                self._cooldown_started_at = now
        elif self.boost_state is BoostState.COOLDOWN:
            if elapsed_at_least(now, self._cooldown_started_at, self.config.boost_cooldown):
                self.boost_state = BoostState.IDLE
                self._cooldown_started_at = None

    # -- Geometry -------------------------------------------------------------

    def contains(self, point: Vec2) -> bool:
        """True iff the zone is on and *point* lies within its current radius."""
        if not self.active:
            return False
        return distance(self.center, point) <= self.radius

    def to_dict(self, now: float | None = None) -> dict:
        return {
            "index": self.index,
            "center": list(self.center),
            "radius": self.radius,
            "base_radius": self.base_radius,
            "active": self.active,
            "boost_state": self.boost_state.value,
            "cooldown_remaining": self.cooldown_remaining(now) if now is not None else None,
        }
