#!/usr/bin/env python3
"""Run the yard simulation without a renderer and report what happened.

A scripted operator stands in for the keyboard: each tick it lights every
zone that has a free inmate inside its radius and switches the rest off.

Usage:
    PYTHONPATH=src python3 scripts/run_headless.py --seconds 120 --seed 7
"""

from __future__ import annotations

import argparse
import json
import queue
import random
import sys
from collections import Counter
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from loguru import logger

from lockdown.comms import EventBus
from lockdown.config import Settings
from lockdown.simulation import FreezeState, SimulationEngine
from lockdown.simulation.geometry import distance


def _operate_zones(engine: SimulationEngine) -> None:
    """Light zones that have a free inmate under them; darken the rest."""
    free = [
        e for e in engine.evaders.values()
        if e.state is not FreezeState.CAPTURED and not e.escaped
    ]
    for zone in engine.zones:
        wanted = any(distance(zone.center, e.position) <= zone.base_radius for e in free)
        if wanted != zone.active:
            engine.set_zone_active(zone.index, wanted)


def run(seconds: float, seed: int | None, overrides: dict) -> dict:
    settings = Settings(auto_spawn=True, seed=seed, **overrides)
    bus = EventBus(maxsize=10_000)
    events = bus.subscribe()
    engine = SimulationEngine(bus, settings=settings, rng=random.Random(seed))

    dt = 1.0 / settings.tick_rate_hz
    counts: Counter[str] = Counter()
    delivered = 0
    while engine.now < seconds:
        _operate_zones(engine)
        engine.tick(dt)
        while True:
            try:
                msg = events.get_nowait()
            except queue.Empty:
                break
            if msg["type"] == "sim_telemetry_batch":
                continue
            counts[msg["type"]] += 1
            if msg["type"] == "prisoners_delivered":
                delivered += msg["data"]["count"]

    snap = engine.snapshot()
    return {
        "seconds": round(engine.now, 2),
        "ticks": engine.tick_count,
        "spawned": engine.spawner.spawned,
        "escaped": counts["evader_escaped"],
        "captured": counts["pursuer_captured"],
        "spotlight_assisted": counts["evader_caught_by_spotlight"],
        "delivered": delivered,
        "power_outages": counts["power_depleted"],
        "still_in_yard": len(snap["evaders"]),
        "power_level": round(snap["power"]["level"], 1),
    }


def main():
    parser = argparse.ArgumentParser(
        description="Headless yard simulation with a scripted zone operator",
    )
    parser.add_argument("--seconds", type=float, default=60.0, help="Simulated seconds to run")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    parser.add_argument("--guards", type=int, default=None, help="Override pursuer count")
    parser.add_argument("--no-power", action="store_true", help="Disable the power budget")
    parser.add_argument("--json", action="store_true", dest="output_json", help="Output JSON")
    parser.add_argument("--log-level", default=None, help="loguru level for stderr (default: LOCKDOWN_LOG_LEVEL)")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level=(args.log_level or Settings().log_level).upper())

    overrides: dict = {}
    if args.guards is not None:
        overrides["pursuer_count"] = args.guards
    if args.no_power:
        overrides["power_enabled"] = False

    summary = run(args.seconds, args.seed, overrides)

    if args.output_json:
        print(json.dumps(summary, indent=2))
        return

    print(f"\n{'='*50}")
    print(f"  YARD SUMMARY ({summary['seconds']}s, {summary['ticks']} ticks)")
    print(f"{'='*50}")
    for key, value in summary.items():
        if key in ("seconds", "ticks"):
            continue
        print(f"  {key.replace('_', ' '):<20} {value}")


if __name__ == "__main__":
    main()
