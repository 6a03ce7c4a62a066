"""
Fractional position keys for drag-and-drop ordering.

A task's ``position`` orders it within its (workspace, status) column.
Moving a card computes a key strictly between its new neighbours; nothing is
ever renumbered.
"""

import math
from typing import Optional

SEED_POSITION = 1.0


def allocate(prev: Optional[float], next: Optional[float]) -> float:
    """
    Key for a slot between ``prev`` and ``next`` (either may be absent).

    - both absent: ``SEED_POSITION`` (first card in an empty column)
    - only ``next``: ``next / 2`` (new top of the column); a non-positive
      ``next`` gets ``next - 1.0`` so the key still sorts first
    - only ``prev``: ``prev + 1.0`` (new bottom of the column)
    - both: their midpoint

    For ``prev < next`` the result is strictly between them. Callers must
    check the result with ``is_valid_position`` before persisting it.
    """
    if prev is None and next is None:
        return SEED_POSITION
    if prev is None:
        return next / 2 if next > 0 else next - 1.0
    if next is None:
        return prev + 1.0
    return (prev + next) / 2


def is_valid_position(position: float, prev: Optional[float] = None, next: Optional[float] = None) -> bool:
    """True if ``position`` is finite and strictly between the given neighbours."""
    if not math.isfinite(position):
        return False
    if prev is not None and not position > prev:
        return False
    if next is not None and not position < next:
        return False
    return True
