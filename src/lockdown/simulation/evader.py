"""Evader — an inmate walking a fixed waypoint path toward the yard exit.

State machine:

  moving --freeze--> frozen --unfreeze--> moving
  moving|frozen --mark_captured--> captured
  moving --(passes final waypoint)--> escaped

The engine's zone-containment check is the only thing that freezes or
unfreezes an evader.  Once captured, the evader stops walking and its
position belongs to the captor, which moves it along an escort chain via
``follow()``.  Escaped and captured are mutually exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from lockdown.units import get_type

from .clock import elapsed_at_least
from .geometry import Vec2, distance, step_toward


class FreezeState(Enum):
    MOVING = "moving"
    FROZEN = "frozen"
    CAPTURED = "captured"


@dataclass(frozen=True)
class EvaderConfig:
    """Timing and arrival tolerance shared by all evaders."""

    capture_threshold: float = 5.0  # seconds of continuous freeze
    arrival_epsilon: float = 5.0

    def __post_init__(self) -> None:
        if self.capture_threshold < 0:
            raise ValueError("capture_threshold must be non-negative")
        if self.arrival_epsilon <= 0:
            raise ValueError("arrival_epsilon must be positive")


class Evader:
    """A mobile agent following pre-generated waypoints."""

    def __init__(
        self,
        evader_id: str,
        waypoints: Sequence[Vec2],
        speed: float,
        position: Vec2 | None = None,
        kind: str = "regular",
        config: EvaderConfig | None = None,
    ) -> None:
        if not waypoints:
            raise ValueError("evader needs at least one waypoint")
        if speed <= 0:
            raise ValueError(f"evader speed must be positive, got {speed}")
        utype = get_type(kind)
        if utype is None or not utype.is_evader():
            raise ValueError(f"unknown evader kind {kind!r}")

        self.evader_id = evader_id
        self.kind = kind
        self.radius: float = utype.radius
        self.speed = float(speed)
        self.config = config or EvaderConfig()
        self.waypoints: tuple[Vec2, ...] = tuple((float(x), float(y)) for x, y in waypoints)
        self.waypoint_index = 0
        start = position if position is not None else self.waypoints[0]
        self.position: Vec2 = (float(start[0]), float(start[1]))

        self.state = FreezeState.MOVING
        self.freeze_started_at: float | None = None
        self.captured_by: str | None = None
        self.escaped = False

    # -- Queries --------------------------------------------------------------

    @property
    def is_frozen(self) -> bool:
        return self.state is FreezeState.FROZEN

    @property
    def is_captured(self) -> bool:
        return self.state is FreezeState.CAPTURED

    @property
    def capture_threshold(self) -> float:
        return self.config.capture_threshold

    def is_capturable(self, now: float) -> bool:
        """True once frozen continuously for at least the capture threshold."""
        if self.state is not FreezeState.FROZEN:
            return False
        return elapsed_at_least(now, self.freeze_started_at, self.config.capture_threshold)

    def capture_progress(self, now: float) -> float:
        """Fraction 0..1 of the capture countdown, for the renderer."""
        if self.state is not FreezeState.FROZEN:
            return 0.0
        if self.config.capture_threshold == 0:
            return 1.0
        return min((now - self.freeze_started_at) / self.config.capture_threshold, 1.0)

    @property
    def current_waypoint(self) -> Vec2 | None:
        if self.waypoint_index >= len(self.waypoints):
            return None
        return self.waypoints[self.waypoint_index]

    # -- Transitions ----------------------------------------------------------

    def freeze(self, now: float) -> None:
        # Re-entering a zone must not restart the countdown.
        if self.state is FreezeState.MOVING and not self.escaped:
            self.state = FreezeState.FROZEN
            self.freeze_started_at = now

    def unfreeze(self) -> None:
        if self.state is FreezeState.FROZEN:
            self.state = FreezeState.MOVING
            self.freeze_started_at = None

    def mark_captured(self, pursuer_id: str) -> bool:
        """Hand this evader to *pursuer_id*. No-op if already captured or gone."""
        if self.state is FreezeState.CAPTURED or self.escaped:
            return False
        self.state = FreezeState.CAPTURED
        self.freeze_started_at = None
        self.captured_by = pursuer_id
        return True

    # -- Movement -------------------------------------------------------------

    def advance(self, dt: float) -> None:
        """Walk toward the current waypoint; frozen, captured or escaped evaders stay put."""
        if self.state is not FreezeState.MOVING or self.escaped:
            return
        target = self.waypoints[self.waypoint_index]
        if distance(self.position, target) <= self.config.arrival_epsilon:
            self.waypoint_index += 1
            if self.waypoint_index >= len(self.waypoints):
                self.waypoint_index = len(self.waypoints)
                self.escaped = True
            return
        self.position = step_toward(self.position, target, self.speed * dt)

    def follow(self, position: Vec2, captor_id: str) -> bool:
        """Reposition a captured evader. Only its captor may do this."""
        if self.state is not FreezeState.CAPTURED or captor_id != self.captured_by:
            return False
        self.position = (float(position[0]), float(position[1]))
        return True

    def to_dict(self, now: float | None = None) -> dict:
        return {
            "evader_id": self.evader_id,
            "kind": self.kind,
            "position": list(self.position),
            "radius": self.radius,
            "state": self.state.value,
            "waypoint_index": self.waypoint_index,
            "waypoint_count": len(self.waypoints),
            "captured_by": self.captured_by,
            "escaped": self.escaped,
            "capture_progress": self.capture_progress(now) if now is not None else 0.0,
        }

    def __repr__(self) -> str:
        return f"<Evader {self.evader_id} {self.state.value} @ ({self.position[0]:.1f}, {self.position[1]:.1f})>"
