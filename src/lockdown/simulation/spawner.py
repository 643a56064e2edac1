"""EvaderSpawner — clock-driven inmate release schedule.

The spawner only decides *when* and *what* to spawn; the engine owns the
evader collection and does the actual registration.  Every release
shortens the next interval by ``decay`` until it reaches the floor, so
pressure ramps up over a session.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .clock import elapsed_beyond


@dataclass(frozen=True)
class SpawnConfig:
    interval: float = 2.0        # seconds between releases at start
    interval_min: float = 0.5    # floor
    decay: float = 0.99          # interval multiplier per release
    kinds: dict[str, float] = field(default_factory=lambda: {"regular": 1.0})

    def __post_init__(self) -> None:
        if self.interval <= 0 or self.interval_min <= 0:
            raise ValueError("spawn intervals must be positive")
        if not 0 < self.decay <= 1.0:
            raise ValueError("decay must be in (0, 1]")
        weights = list(self.kinds.values())
        if not weights or any(w < 0 for w in weights) or sum(weights) <= 0:
            raise ValueError("kinds needs non-negative weights with a positive total")


class EvaderSpawner:
    def __init__(self, config: SpawnConfig | None = None,
                 rng: random.Random | None = None) -> None:
        self.config = config or SpawnConfig()
        self._rng = rng or random.Random()
        self.interval = self.config.interval
        self._last_spawn_at = 0.0
        self.spawned = 0

    def due(self, now: float) -> bool:
        """True if a release is due at *now*; records it and ramps the interval."""
        if not elapsed_beyond(now, self._last_spawn_at, self.interval):
            return False
        self._last_spawn_at = now
        self.spawned += 1
        if self.interval > self.config.interval_min:
            self.interval = max(self.config.interval_min, self.interval * self.config.decay)
        return True

    def choose_kind(self) -> str:
        kinds = list(self.config.kinds)
        weights = [self.config.kinds[k] for k in kinds]
        return self._rng.choices(kinds, weights=weights, k=1)[0]

    def reset(self) -> None:
        self.interval = self.config.interval
        self._last_spawn_at = 0.0
        self.spawned = 0
