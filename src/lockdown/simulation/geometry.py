"""Planar helpers shared by every agent's movement rule.

Positions are plain ``(x, y)`` tuples in arena units, +y pointing down the
yard (spawn at the top, exit at the bottom).
"""

from __future__ import annotations

import math

Vec2 = tuple[float, float]


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def step_toward(pos: Vec2, target: Vec2, step: float) -> Vec2:
    """Move *pos* toward *target* by at most *step*; never overshoots."""
    dx = target[0] - pos[0]
    dy = target[1] - pos[1]
    dist = math.hypot(dx, dy)
    if dist <= step or dist == 0.0:
        return (target[0], target[1])
    return (pos[0] + dx / dist * step, pos[1] + dy / dist * step)


def trailing_point(leader: Vec2, follower: Vec2, spacing: float) -> Vec2:
    """Point *spacing* behind *leader* on the leader-to-follower bearing."""
    angle = math.atan2(leader[1] - follower[1], leader[0] - follower[0])
    return (
        leader[0] - math.cos(angle) * spacing,
        leader[1] - math.sin(angle) * spacing,
    )


def heading_deg(frm: Vec2, to: Vec2) -> float:
    """Bearing from *frm* to *to* in degrees, 0 = +x axis."""
    return math.degrees(math.atan2(to[1] - frm[1], to[0] - frm[0]))


def in_cone(origin: Vec2, facing_deg: float, point: Vec2, cone_angle: float) -> bool:
    """True if *point* lies within a cone of *cone_angle* degrees about *facing_deg*."""
    if cone_angle >= 360.0:
        return True
    diff = (heading_deg(origin, point) - facing_deg + 180.0) % 360.0 - 180.0
    return abs(diff) <= cone_angle / 2.0


def clamp_to_rect(pos: Vec2, rect: tuple[float, float, float, float]) -> Vec2:
    min_x, min_y, max_x, max_y = rect
    return (min(max(pos[0], min_x), max_x), min(max(pos[1], min_y), max_y))
