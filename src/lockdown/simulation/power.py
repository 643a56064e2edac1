"""PowerSupply — the shared battery that lit zones draw from.

With no zone lit the battery recharges, faster for every prisoner the
guards have delivered.  Each lit zone drains it, and every zone beyond the
first costs progressively more.  An empty battery forces every zone off
and refuses new switch-ons until it recharges.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PowerConfig:
    enabled: bool = True
    capacity: float = 100.0
    charge_rate: float = 30.0          # per second, no zones lit
    delivery_bonus: float = 6.0        # extra charge per second per delivered prisoner
    drain_rate: float = 18.0           # per second, one zone lit
    multi_zone_multiplier: float = 1.5

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("power capacity must be positive")
        if min(self.charge_rate, self.delivery_bonus, self.drain_rate, self.multi_zone_multiplier) < 0:
            raise ValueError("power rates must be non-negative")


class PowerSupply:
    def __init__(self, config: PowerConfig | None = None) -> None:
        self.config = config or PowerConfig()
        self.level: float = self.config.capacity
        self.delivered_total = 0

    @property
    def depleted(self) -> bool:
        return self.config.enabled and self.level <= 0.0

    @property
    def fraction(self) -> float:
        return self.level / self.config.capacity

    def drain_rate_for(self, active_zones: int) -> float:
        if active_zones <= 0:
            return 0.0
        extra = (active_zones - 1) * self.config.multi_zone_multiplier
        return self.config.drain_rate * (1.0 + extra)

    def charge_rate(self) -> float:
        return self.config.charge_rate + self.delivered_total * self.config.delivery_bonus

    def credit_delivery(self, count: int) -> None:
        self.delivered_total += count

    def tick(self, dt: float, active_zones: int) -> bool:
        """Charge or drain for *dt* seconds. Returns True if the battery just ran dry."""
        if not self.config.enabled:
            return False
        if active_zones == 0:
            self.level = min(self.config.capacity, self.level + self.charge_rate() * dt)
            return False
        was_empty = self.level <= 0.0
        self.level = max(0.0, self.level - self.drain_rate_for(active_zones) * dt)
        return self.level <= 0.0 and not was_empty

    def reset(self) -> None:
        self.level = self.config.capacity
        self.delivered_total = 0

    def to_dict(self) -> dict:
        return {
            "enabled": self.config.enabled,
            "level": self.level,
            "capacity": self.config.capacity,
            "delivered_total": self.delivered_total,
        }
