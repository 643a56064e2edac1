"""Pursuer — a guard that hunts frozen inmates and escorts them to drop-off.

Architecture
------------
Each tick runs six fixed steps:

  1. Target selection -- nearest frozen, uncaptured evader within vision
     (only with spare escort capacity).  Recomputed every tick.
  2. Mode derivation  -- return if the chain is full, else hunt if a target
     exists, else patrol.
  3. Movement         -- return: toward drop-off at cruise speed.
                         hunt: toward the live target at hunt speed.
                         patrol: toward a random point in the patrol
                         rectangle, re-chosen on arrival or after a dwell.
  4. Collision capture -- any uncaptured evader touching the guard joins the
                         escort chain while capacity lasts.
  5. Escort positioning -- conga line: each captive trails the one ahead.
  6. Drop-off          -- in return mode, within threshold of the drop-off,
                         hand over the whole chain and go back to patrol.

Mode graph:

  patrol <-> hunt
  patrol|hunt --(chain full)--> return --(drop-off reached)--> patrol

Return is a hard gate: nothing interrupts it until the chain is unloaded.

A patrolling guard can also be drawn toward a freshly lit zone for a few
seconds ("attention"), moving slowly.  Hunting and returning override it.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from loguru import logger

from lockdown.units import get_type

from .evader import Evader, FreezeState
from .geometry import (
    Vec2,
    clamp_to_rect,
    distance,
    heading_deg,
    in_cone,
    step_toward,
    trailing_point,
)


class PursuerMode(Enum):
    PATROL = "patrol"
    HUNT = "hunt"
    RETURN = "return"


@dataclass(frozen=True)
class PursuerConfig:
    """Everything that shapes one guard's behaviour."""

    speed: float = 60.0
    hunt_multiplier: float = 2.0
    vision_range: float = 450.0
    vision_angle: float = 360.0  # degrees; 360 = omnidirectional
    capacity: int = 10
    radius: float = 12.0
    patrol_bounds: tuple[float, float, float, float] = (50.0, 50.0, 1150.0, 600.0)
    drop_off_point: tuple[float, float] = (1050.0, 400.0)
    drop_off_threshold: float = 10.0
    escort_spacing: float = 25.0
    arrival_epsilon: float = 5.0
    dwell_min: float = 2.0
    dwell_max: float = 5.0
    attention_duration: float = 3.0
    attention_speed_multiplier: float = 0.3

    def __post_init__(self) -> None:
        if self.speed <= 0:
            raise ValueError("pursuer speed must be positive")
        if self.hunt_multiplier <= 1.0:
            raise ValueError("hunt_multiplier must be greater than 1")
        if self.capacity < 1:
            raise ValueError("capacity must be at least 1")
        if self.vision_range < 0 or self.radius <= 0:
            raise ValueError("vision_range and radius must be positive")
        min_x, min_y, max_x, max_y = self.patrol_bounds
        if min_x > max_x or min_y > max_y:
            raise ValueError(f"inverted patrol bounds {self.patrol_bounds}")
        if self.dwell_min > self.dwell_max:
            raise ValueError("dwell_min must not exceed dwell_max")


@dataclass
class Capture:
    """One evader taken into the escort chain this tick."""
    evader: Evader
    spotlight_assisted: bool  # frozen for the full capture threshold


@dataclass
class PursuerTickResult:
    captures: list[Capture] = field(default_factory=list)
    delivered: list[Evader] = field(default_factory=list)


class Pursuer:
    """A roaming guard with a bounded escort chain."""

    def __init__(
        self,
        pursuer_id: str,
        position: Vec2,
        config: PursuerConfig | None = None,
        rng: random.Random | None = None,
        kind: str = "guard",
    ) -> None:
        utype = get_type(kind)
        if utype is None or not utype.is_pursuer():
            raise ValueError(f"unknown pursuer kind {kind!r}")
        self.pursuer_id = pursuer_id
        self.kind = kind
        self.config = config or PursuerConfig()
        self._rng = rng or random.Random()
        self.position: Vec2 = (float(position[0]), float(position[1]))
        self.heading = 0.0

        self.mode = PursuerMode.PATROL
        self.hunt_target: Evader | None = None
        self.escort: list[Evader] = []
        self.patrol_target: Vec2 = self.position
        self._retarget_at = 0.0
        self._attention_target: Vec2 | None = None
        self._attention_until = 0.0
        self._needs_patrol_target = True

    # -- Queries --------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self.config.capacity

    @property
    def radius(self) -> float:
        return self.config.radius

    @property
    def has_spare_capacity(self) -> bool:
        return len(self.escort) < self.config.capacity

    @property
    def is_attentive(self) -> bool:
        return self._attention_target is not None

    def _can_see(self, evader: Evader) -> bool:
        if distance(self.position, evader.position) > self.config.vision_range:
            return False
        return in_cone(self.position, self.heading, evader.position, self.config.vision_angle)

    def _is_huntable(self, evader: Evader) -> bool:
        return (
            evader.state is FreezeState.FROZEN
            and evader.captured_by is None
            and not evader.escaped
            and self._can_see(evader)
            and self._can_reach(evader)
        )

    def _can_reach(self, evader: Evader) -> bool:
        """True if the patrol rectangle gets close enough to touch *evader*."""
        nearest = clamp_to_rect(evader.position, self.config.patrol_bounds)
        return distance(nearest, evader.position) < self.radius + evader.radius

    # -- External nudges ------------------------------------------------------

    def notify_zone_activated(self, center: Vec2, now: float) -> bool:
        """Draw a patrolling guard toward a zone that just lit up."""
        if self.mode is not PursuerMode.PATROL or not self.has_spare_capacity:
            return False
        self._attention_target = (float(center[0]), float(center[1]))
        self._attention_until = now + self.config.attention_duration
        return True

    # -- Tick -----------------------------------------------------------------

    def tick(self, now: float, dt: float, evaders: Iterable[Evader]) -> PursuerTickResult:
        result = PursuerTickResult()
        evaders = list(evaders)

        # 1. target selection
        self.hunt_target = self._select_target(evaders) if self.has_spare_capacity else None

        # 2. mode derivation
        self._derive_mode()

        # 3. movement
        self._move(now, dt)

        # 4. collision capture
        for evader in evaders:
            if evader.captured_by is not None or evader.escaped:
                continue
            if distance(self.position, evader.position) >= self.radius + evader.radius:
                continue
            if not self.has_spare_capacity:
                continue
            assisted = evader.is_capturable(now)
            if evader.mark_captured(self.pursuer_id):
                self.escort.append(evader)
                result.captures.append(Capture(evader, assisted))
                logger.debug(
                    f"{self.pursuer_id} captured {evader.evader_id} "
                    f"({len(self.escort)}/{self.capacity})"
                )
        if result.captures:
            if self.hunt_target is not None and self.hunt_target.captured_by is not None:
                self.hunt_target = None
            self._derive_mode()

        # 5. escort positioning
        self._position_escort()

        # 6. drop-off
        if self.mode is PursuerMode.RETURN:
            if distance(self.position, self.config.drop_off_point) <= self.config.drop_off_threshold:
                result.delivered = self._drop_off()

        return result

    def _select_target(self, evaders: list[Evader]) -> Evader | None:
        best: Evader | None = None
        best_dist = float("inf")
        for evader in evaders:
            if not self._is_huntable(evader):
                continue
            d = distance(self.position, evader.position)
            if d < best_dist:
                best, best_dist = evader, d
        return best

    def _derive_mode(self) -> None:
        previous = self.mode
        if not self.has_spare_capacity:
            self.mode = PursuerMode.RETURN
            self.hunt_target = None
        elif self.hunt_target is not None:
            self.mode = PursuerMode.HUNT
        else:
            self.mode = PursuerMode.PATROL

        if self.mode is not PursuerMode.PATROL:
            self._attention_target = None
        if previous is not PursuerMode.PATROL and self.mode is PursuerMode.PATROL:
            self._needs_patrol_target = True
        if self.mode is PursuerMode.RETURN and previous is not PursuerMode.RETURN:
            logger.info(
                f"{self.pursuer_id} at capacity ({len(self.escort)}), returning to drop-off"
            )

    def _move(self, now: float, dt: float) -> None:
        cfg = self.config
        if self.mode is PursuerMode.RETURN:
            self._step(cfg.drop_off_point, cfg.speed * dt, clamp=False)
            return
        if self.mode is PursuerMode.HUNT:
            self._step(self.hunt_target.position, cfg.speed * cfg.hunt_multiplier * dt)
            return

        if self._attention_target is not None:
            if now < self._attention_until:
                self._step(self._attention_target, cfg.speed * cfg.attention_speed_multiplier * dt)
                return
            self._attention_target = None
            self._needs_patrol_target = True

        if (
            self._needs_patrol_target
            or now >= self._retarget_at
            or distance(self.position, self.patrol_target) <= cfg.arrival_epsilon
        ):
            self._choose_patrol_target(now)
        self._step(self.patrol_target, cfg.speed * dt)

    def _step(self, target: Vec2, step: float, clamp: bool = True) -> None:
        # Goal is clamped, position is not: a guard outside the rectangle
        # walks back in.
        if clamp:
            target = clamp_to_rect(target, self.config.patrol_bounds)
        if target != self.position:
            self.heading = heading_deg(self.position, target)
        self.position = step_toward(self.position, target, step)

    def _choose_patrol_target(self, now: float) -> None:
        min_x, min_y, max_x, max_y = self.config.patrol_bounds
        self.patrol_target = (
            self._rng.uniform(min_x, max_x),
            self._rng.uniform(min_y, max_y),
        )
        self._retarget_at = now + self._rng.uniform(self.config.dwell_min, self.config.dwell_max)
        self._needs_patrol_target = False

    def _position_escort(self) -> None:
        leader = self.position
        for evader in self.escort:
            slot = trailing_point(leader, evader.position, self.config.escort_spacing)
            evader.follow(slot, self.pursuer_id)
            leader = evader.position

    def _drop_off(self) -> list[Evader]:
        delivered = list(self.escort)
        self.escort.clear()
        self.hunt_target = None
        self.mode = PursuerMode.PATROL
        self._needs_patrol_target = True
        logger.info(f"{self.pursuer_id} dropped off {len(delivered)} prisoners")
        return delivered

    def to_dict(self) -> dict:
        return {
            "pursuer_id": self.pursuer_id,
            "kind": self.kind,
            "position": list(self.position),
            "heading": self.heading,
            "mode": self.mode.value,
            "radius": self.radius,
            "vision_range": self.config.vision_range,
            "vision_angle": self.config.vision_angle,
            "hunt_target": self.hunt_target.evader_id if self.hunt_target else None,
            "escort": [e.evader_id for e in self.escort],
            "capacity": self.capacity,
            "attentive": self.is_attentive,
        }

    def __repr__(self) -> str:
        return f"<Pursuer {self.pursuer_id} {self.mode.value} {len(self.escort)}/{self.capacity}>"
