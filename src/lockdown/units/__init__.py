"""Agent type registry.

Every concrete AgentType subclass defined in this package is registered
by ``type_id``.  Lookups are cheap dict reads so agents can resolve their
profile once at construction.
"""

from __future__ import annotations

from .base import AgentType, Role, SpeedRange
from . import evaders as _evaders  # noqa: F401  (registers subclasses)
from . import pursuers as _pursuers  # noqa: F401


def _discover() -> dict[str, type[AgentType]]:
    found: dict[str, type[AgentType]] = {}
    stack = list(AgentType.__subclasses__())
    while stack:
        cls = stack.pop()
        stack.extend(cls.__subclasses__())
        type_id = getattr(cls, "type_id", None)
        if type_id:
            found[type_id] = cls
    return found


_REGISTRY: dict[str, type[AgentType]] = _discover()


def get_type(type_id: str) -> type[AgentType] | None:
    """Return the AgentType registered under *type_id*, or None."""
    return _REGISTRY.get(type_id)


def all_types() -> list[type[AgentType]]:
    return sorted(_REGISTRY.values(), key=lambda c: c.type_id)


def evader_type_ids() -> list[str]:
    return [c.type_id for c in all_types() if c.is_evader()]


def pursuer_type_ids() -> list[str]:
    return [c.type_id for c in all_types() if c.is_pursuer()]


__all__ = [
    "AgentType",
    "Role",
    "SpeedRange",
    "all_types",
    "evader_type_ids",
    "get_type",
    "pursuer_type_ids",
]
