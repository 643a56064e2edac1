"""SimulationEngine — the per-tick driver for zones, inmates and guards.

Architecture
------------
The engine is the authoritative owner of every zone, evader and pursuer.
Agents never remove themselves; they set flags (``escaped``) or hand back
delivered evaders, and the engine reaps them at the end of the tick.

Each ``tick(dt)`` advances the simulation clock by ``dt`` seconds and runs
these steps in a fixed order:

  0. Spawning    -- optional auto-spawner releases a new inmate.
  1. Zones       -- boost timers, then the power supply (may force all
                    zones off).
  2. Containment -- every uncaptured evader is frozen if any lit zone
                    contains it, unfrozen otherwise.  This is the only
                    thing that freezes or unfreezes an evader.
  3. Evaders     -- ``advance(dt)``.
  4. Pursuers    -- ``tick(now, dt, evaders)`` against the live collection,
                    in creation order.  A pursuer earlier in the order wins
                    any contested capture.
  5. Escapes     -- escaped evaders are removed and reported.
  6. Deliveries  -- evaders handed over at drop-off are removed and
                    reported; the power supply is credited.

Capture is always pursuer initiated: an evader that has been frozen past
its capture threshold just waits for a guard to reach it.

Events published on the EventBus (see ``_publish``):
  - ``evader_escaped``
  - ``pursuer_captured``
  - ``evader_caught_by_spotlight``
  - ``prisoners_delivered``
  - ``zone_changed``
  - ``power_depleted``
  - ``sim_telemetry_batch`` (once per tick, after every step)

The engine is normally stepped by an external render loop calling
``tick()``.  ``start()`` runs an equivalent daemon loop at a fixed rate for
headless use.  Commands and ticks share one lock, so a tick never overlaps
another tick or a command.
"""

from __future__ import annotations

import itertools
import random
import threading
from typing import TYPE_CHECKING, Sequence

from loguru import logger

from lockdown.units import get_type

from .evader import Evader, FreezeState
from .geometry import Vec2, distance
from .paths import generate_escape_path
from .power import PowerSupply
from .pursuer import Pursuer, PursuerMode
from .spawner import EvaderSpawner
from .zone import IlluminationZone

if TYPE_CHECKING:
    from lockdown.comms.event_bus import EventBus
    from lockdown.config import Settings


class SimulationEngine:
    """Drives the yard one tick at a time and publishes what happened."""

    def __init__(
        self,
        event_bus: EventBus,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if settings is None:
            from lockdown.config import settings as default_settings
            settings = default_settings
        self._event_bus = event_bus
        self._settings = settings
        self._rng = rng or random.Random(settings.seed)
        self._lock = threading.RLock()
        self._running = False
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

        self._zone_config = settings.zone_config()
        self._evader_config = settings.evader_config()
        self.power = PowerSupply(settings.power_config())
        self.spawner = EvaderSpawner(settings.spawn_config(), rng=self._rng)

        self.now = 0.0
        self.tick_count = 0
        self.zones: list[IlluminationZone] = []
        self.evaders: dict[str, Evader] = {}
        self.pursuers: list[Pursuer] = []
        self._evader_ids = itertools.count(1)

        self._build_agents()

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def settings(self) -> Settings:
        return self._settings

    def _build_agents(self) -> None:
        s = self._settings
        self.zones = [
            IlluminationZone(i, pos, self._zone_config)
            for i, pos in enumerate(s.zone_positions)
        ]
        utype = get_type(s.pursuer_type)
        if utype is None or not utype.is_pursuer():
            raise ValueError(f"unknown pursuer type {s.pursuer_type!r}")
        self.pursuers = []
        for i in range(s.pursuer_count):
            # Spread across the middle of the yard
            start = (
                400.0 + i * 200.0 + self._rng.uniform(-50.0, 50.0),
                300.0 + self._rng.uniform(-50.0, 50.0),
            )
            speed = s.pursuer_speed if s.pursuer_speed is not None else utype.speed.draw(self._rng)
            self.pursuers.append(Pursuer(
                pursuer_id=f"{utype.type_id}-{i + 1}",
                position=start,
                config=s.pursuer_config(speed=speed, radius=utype.radius),
                rng=self._rng,
                kind=utype.type_id,
            ))

    # -- Commands (spawner / input binding) ----------------------------------

    def spawn_evader(
        self,
        waypoints: Sequence[Vec2],
        speed: float | None = None,
        kind: str = "regular",
        position: Vec2 | None = None,
    ) -> Evader:
        """Create and register a new evader on a pre-generated path."""
        if speed is None:
            utype = get_type(kind)
            if utype is None or not utype.is_evader():
                raise ValueError(f"unknown evader kind {kind!r}")
            speed = utype.speed.draw(self._rng)
        with self._lock:
            evader = Evader(
                evader_id=f"evader-{next(self._evader_ids)}",
                waypoints=waypoints,
                speed=speed,
                position=position,
                kind=kind,
                config=self._evader_config,
            )
            self.evaders[evader.evader_id] = evader
        logger.debug(f"Spawned {evader.evader_id} ({kind}) with {len(evader.waypoints)} waypoints")
        return evader

    def spawn_random_evader(self, kind: str | None = None) -> Evader:
        """Spawn an evader on a freshly generated escape path."""
        start, waypoints = generate_escape_path(
            self._settings.arena_width, self._settings.arena_height, rng=self._rng,
        )
        return self.spawn_evader(waypoints, kind=kind or self.spawner.choose_kind(), position=start)

    def set_zone_active(self, index: int, active: bool) -> bool:
        """Switch a zone on or off. Returns False if the command was refused."""
        with self._lock:
            zone = self._zone(index)
            if zone is None:
                return False
            if active and self.power.depleted:
                logger.debug(f"Zone {index} switch-on refused: no power")
                return False
            was_active = zone.active
            zone.set_active(active)
            if zone.active != was_active:
                self._publish("zone_changed", {"index": index, "active": zone.active})
                if zone.active:
                    self._alert_nearest_pursuer(zone)
            return True

    def request_zone_boost(self, index: int) -> bool:
        with self._lock:
            zone = self._zone(index)
            if zone is None:
                return False
            return zone.request_boost(self.now)

    def _zone(self, index: int) -> IlluminationZone | None:
        if 0 <= index < len(self.zones):
            return self.zones[index]
        logger.warning(f"No zone at index {index} ({len(self.zones)} zones)")
        return None

    def _alert_nearest_pursuer(self, zone: IlluminationZone) -> None:
        """Point the nearest free, patrolling guard at a newly lit zone."""
        candidates = [
            p for p in self.pursuers
            if p.mode is PursuerMode.PATROL and p.has_spare_capacity
        ]
        if not candidates:
            return
        nearest = min(candidates, key=lambda p: distance(p.position, zone.center))
        nearest.notify_zone_activated(zone.center, self.now)

    # -- Tick ----------------------------------------------------------------

    def tick(self, dt: float) -> None:
        """Advance the simulation by *dt* seconds."""
        with self._lock:
            self.now += dt
            self.tick_count += 1
            now = self.now

            # 0. auto-spawn
            if self._settings.auto_spawn and self.spawner.due(now):
                self.spawn_random_evader()

            # 1. zone timers, then power
            for zone in self.zones:
                zone.tick(now)
            lit = sum(1 for z in self.zones if z.active)
            if self.power.tick(dt, lit):
                self._cut_power()

            # 2. containment drives freeze / unfreeze
            for evader in self.evaders.values():
                if evader.state is FreezeState.CAPTURED or evader.escaped:
                    continue
                if any(zone.contains(evader.position) for zone in self.zones):
                    evader.freeze(now)
                else:
                    evader.unfreeze()

            # 3. evaders walk
            for evader in self.evaders.values():
                evader.advance(dt)

            # 4. pursuers act on the live collection
            delivered: list[tuple[Pursuer, list[Evader]]] = []
            live = list(self.evaders.values())
            for pursuer in self.pursuers:
                result = pursuer.tick(now, dt, live)
                for capture in result.captures:
                    self._publish("pursuer_captured", {
                        "pursuer_id": pursuer.pursuer_id,
                        "evader_id": capture.evader.evader_id,
                        "spotlight_assisted": capture.spotlight_assisted,
                        "escort_size": len(pursuer.escort),
                    })
                    if capture.spotlight_assisted:
                        self._publish("evader_caught_by_spotlight", {
                            "pursuer_id": pursuer.pursuer_id,
                            "evader_id": capture.evader.evader_id,
                        })
                if result.delivered:
                    delivered.append((pursuer, result.delivered))

            # 5. escapes
            escaped = [e for e in self.evaders.values() if e.escaped]
            for evader in escaped:
                del self.evaders[evader.evader_id]
                logger.debug(f"{evader.evader_id} escaped")
                self._publish("evader_escaped", {
                    "evader_id": evader.evader_id,
                    "kind": evader.kind,
                })

            # 6. deliveries
            for pursuer, evaders in delivered:
                for evader in evaders:
                    self.evaders.pop(evader.evader_id, None)
                self.power.credit_delivery(len(evaders))
                self._publish("prisoners_delivered", {
                    "pursuer_id": pursuer.pursuer_id,
                    "count": len(evaders),
                    "evader_ids": [e.evader_id for e in evaders],
                })

            self._publish("sim_telemetry_batch", self._telemetry_rows())

    def _cut_power(self) -> None:
        logger.info("Power depleted, all zones forced off")
        for zone in self.zones:
            if zone.active:
                zone.set_active(False)
                self._publish("zone_changed", {"index": zone.index, "active": False})
        self._publish("power_depleted", {})

    def _publish(self, event_type: str, data: dict | list) -> None:
        self._event_bus.publish(event_type, data)

    # -- Renderer view -------------------------------------------------------

    def _telemetry_rows(self) -> list[dict]:
        rows: list[dict] = []
        for zone in self.zones:
            rows.append({"entity": "zone", **zone.to_dict(self.now)})
        for evader in self.evaders.values():
            rows.append({"entity": "evader", **evader.to_dict(self.now)})
        for pursuer in self.pursuers:
            rows.append({"entity": "pursuer", **pursuer.to_dict()})
        return rows

    def snapshot(self) -> dict:
        """Read-only view of everything the renderer draws."""
        with self._lock:
            return {
                "time": self.now,
                "tick": self.tick_count,
                "zones": [z.to_dict(self.now) for z in self.zones],
                "evaders": [e.to_dict(self.now) for e in self.evaders.values()],
                "pursuers": [p.to_dict() for p in self.pursuers],
                "power": self.power.to_dict(),
            }

    def get_evader(self, evader_id: str) -> Evader | None:
        with self._lock:
            return self.evaders.get(evader_id)

    # -- Lifecycle -----------------------------------------------------------

    def reset(self) -> None:
        """Drop every agent and rebuild zones and pursuers from settings."""
        with self._lock:
            self.evaders.clear()
            self._evader_ids = itertools.count(1)
            self.now = 0.0
            self.tick_count = 0
            self.power.reset()
            self.spawner.reset()
            self._build_agents()
        logger.info("Simulation reset")

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            if self._thread is not None and self._thread.is_alive():
                logger.warning("Previous tick thread still running, not starting another")
                return
            self._running = True
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._tick_loop, args=(self._stop_event,), name="sim-tick", daemon=True,
            )
            self._thread.start()
        logger.info(f"Simulation started at {self._settings.tick_rate_hz:g} Hz")

    def stop(self) -> None:
        with self._lock:
            self._running = False
            self._stop_event.set()
            thread = self._thread
        if thread is not None:
            # Joined outside the lock: the loop needs it to finish its tick.
            thread.join(timeout=2.0)
            with self._lock:
                if self._thread is thread and not thread.is_alive():
                    self._thread = None
        logger.info("Simulation stopped")

    @property
    def running(self) -> bool:
        return self._running

    def _tick_loop(self, stop_event: threading.Event) -> None:
        dt = 1.0 / self._settings.tick_rate_hz
        while not stop_event.wait(dt):
            self.tick(dt)
