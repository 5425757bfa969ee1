# grid.py

from __future__ import annotations

import enum
from typing import Optional, Tuple

Cell = Tuple[int, int]      # (column, row)
Delta = Tuple[int, int]     # unit direction (dx, dy)


class BoundaryPolicy(enum.Enum):
    """What happens when the head leaves the grid."""

    TOROIDAL = "wrap"
    BOUNDED = "bounded"


def in_bounds(cell: Cell, dimension: int) -> bool:
    """Check if a cell is inside the grid."""
    x, y = cell
    return 0 <= x < dimension and 0 <= y < dimension


def wrap_or_clamp(
    cell: Cell,
    delta: Delta,
    dimension: int,
    policy: BoundaryPolicy,
) -> Optional[Cell]:
    """
    Move `cell` by `delta` under the given edge policy.

    Toroidal: re-enter from the opposite edge.
    Bounded:  return None when the move leaves the grid, the caller
              treats that as a terminal collision.
    """
    x, y = cell[0] + delta[0], cell[1] + delta[1]
    if policy is BoundaryPolicy.TOROIDAL:
        return ((x + dimension) % dimension, (y + dimension) % dimension)
    if not in_bounds((x, y), dimension):
        return None
    return (x, y)
