"""Timer comparisons on the simulation clock.

The engine clock is a running sum of tick deltas, so a span that should
land exactly on a threshold can come out a few ulps short or long.  Every
timer in the core compares elapsed spans through these helpers.
"""

from __future__ import annotations

TIME_EPSILON = 1e-9  # seconds


def elapsed_at_least(now: float, since: float, span: float) -> bool:
    """True once *span* seconds have passed since *since*."""
    return now - since >= span - TIME_EPSILON


def elapsed_beyond(now: float, since: float, span: float) -> bool:
    """True once strictly more than *span* seconds have passed since *since*."""
    return now - since > span + TIME_EPSILON
