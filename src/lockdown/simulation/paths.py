"""Escape path generation for newly spawned inmates.

Paths are generated once at spawn and never recomputed: inmates enter
just above the top edge of the yard and zig-zag downward to an exit below
the bottom edge.  Waypoint y values increase monotonically, so an inmate
never doubles back.
"""

from __future__ import annotations

import random

from .geometry import Vec2

_ENTRY_Y = -20.0
_EXIT_OVERSHOOT = 50.0  # last waypoint sits this far below the arena


def generate_escape_path(
    arena_width: float = 1200.0,
    arena_height: float = 800.0,
    rng: random.Random | None = None,
) -> tuple[Vec2, list[Vec2]]:
    """Return ``(start, waypoints)`` for one inmate.

    Produces 3-5 waypoints: an entry point near the spawn column, middle
    points spread across the yard, and an exit below the bottom edge.
    Horizontal spreads scale with *arena_width* (the defaults reproduce
    a 1200-wide yard).
    """
    rng = rng or random
    sx = arena_width / 1200.0
    count = rng.randint(3, 5)

    start = (rng.uniform(200.0 * sx, 1000.0 * sx), _ENTRY_Y)
    waypoints: list[Vec2] = [
        (start[0] + rng.uniform(-100.0, 100.0) * sx, rng.uniform(100.0, 200.0)),
    ]

    band = arena_height / count
    last_y = waypoints[0][1]
    for i in range(1, count - 1):
        y = band * (i + 1) + rng.uniform(-50.0, 50.0)
        y = max(y, last_y + 1.0)
        waypoints.append((rng.uniform(200.0 * sx, 1000.0 * sx), y))
        last_y = y

    waypoints.append(
        (rng.uniform(400.0 * sx, 800.0 * sx), arena_height + _EXIT_OVERSHOOT)
    )
    return start, waypoints
