"""Base classes for the agent type system.

Role        -- enum for which side of the yard an agent plays
SpeedRange  -- frozen dataclass for a randomised cruise speed
AgentType   -- abstract base every concrete type subclasses
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Role(Enum):
    """What an agent does in the yard."""
    EVADER = "evader"
    PURSUER = "pursuer"


@dataclass(frozen=True)
class SpeedRange:
    """Cruise speed drawn uniformly from [low, high] units per second."""
    low: float
    high: float

    def __post_init__(self) -> None:
        if self.low <= 0 or self.high < self.low:
            raise ValueError(f"invalid speed range {self.low}..{self.high}")

    def draw(self, rng: random.Random | None = None) -> float:
        rng = rng or random
        return rng.uniform(self.low, self.high)


class AgentType:
    """Abstract base for every agent type definition.

    Subclasses MUST set all ClassVar fields.  The registry discovers
    concrete subclasses automatically at import time.
    """

    # -- identity --
    type_id: ClassVar[str]
    display_name: ClassVar[str]
    role: ClassVar[Role]

    # -- movement --
    speed: ClassVar[SpeedRange]

    # -- body --
    radius: ClassVar[float]  # collision radius in arena units

    # -- helpers --

    @classmethod
    def is_evader(cls) -> bool:
        return cls.role is Role.EVADER

    @classmethod
    def is_pursuer(cls) -> bool:
        return cls.role is Role.PURSUER

    def __repr__(self) -> str:
        return f"<AgentType {self.type_id}>"
