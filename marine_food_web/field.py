"""
field.py

Bounded rectangular grid holding at most one organism per cell.

Cells store organism ids in a numpy integer array (0 = vacant); the field never
holds organism objects and never changes an organism's lifecycle on its own.
Adjacency is the 8-cell Moore neighbourhood, clipped at the edges (no wrapping),
enumerated row by row from the top-left neighbour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np


VACANT = 0

# Fixed neighbour scan order: (-1,-1) (-1,0) (-1,1) (0,-1) (0,1) (1,-1) (1,0) (1,1)
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


# ============================================================
# ERRORS
# ============================================================

class FoodWebError(Exception):
    """Base class for simulation errors."""


class OutOfBoundsError(FoodWebError, IndexError):
    """A coordinate outside the grid was used for placement or lookup."""


class InvalidDimensionError(FoodWebError, ValueError):
    """Grid depth or width is not positive."""


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class Coordinate:
    row: int
    col: int

    def offset(self, dr: int, dc: int) -> Coordinate:
        return Coordinate(self.row + dr, self.col + dc)


class Field:
    def __init__(self, depth: int, width: int):
        if depth <= 0 or width <= 0:
            raise InvalidDimensionError(f"field dimensions must be positive, got {depth}x{width}")
        self.depth = depth
        self.width = width
        self.cells = np.zeros((depth, width), dtype=np.int64)

    # ---- bounds ----

    def in_bounds(self, c: Coordinate) -> bool:
        return 0 <= c.row < self.depth and 0 <= c.col < self.width

    def _check(self, c: Coordinate) -> None:
        if not self.in_bounds(c):
            raise OutOfBoundsError(f"{c} outside {self.depth}x{self.width} field")

    def dimensions(self) -> Tuple[int, int]:
        return self.depth, self.width

    # ---- occupancy ----

    def is_vacant(self, c: Coordinate) -> bool:
        return self.in_bounds(c) and self.cells[c.row, c.col] == VACANT

    def occupant_at(self, c: Coordinate) -> Optional[int]:
        """Id of the organism recorded at c, or None when vacant."""
        self._check(c)
        oid = int(self.cells[c.row, c.col])
        return None if oid == VACANT else oid

    def place(self, oid: int, c: Coordinate) -> None:
        """Record oid at c. A previous occupant record is overwritten, not killed."""
        self._check(c)
        if oid <= VACANT:
            raise ValueError(f"organism ids must be positive, got {oid}")
        self.cells[c.row, c.col] = oid

    def clear(self, c: Coordinate) -> None:
        self._check(c)
        self.cells[c.row, c.col] = VACANT

    def clear_all(self) -> None:
        self.cells.fill(VACANT)

    # ---- adjacency ----

    def adjacent_coordinates(self, c: Coordinate) -> List[Coordinate]:
        self._check(c)
        out: List[Coordinate] = []
        for dr, dc in NEIGHBOUR_OFFSETS:
            nb = c.offset(dr, dc)
            if self.in_bounds(nb):
                out.append(nb)
        return out

    def free_adjacent_coordinates(self, c: Coordinate) -> List[Coordinate]:
        return [nb for nb in self.adjacent_coordinates(c) if self.cells[nb.row, nb.col] == VACANT]

    def free_adjacent_coordinate(self, c: Coordinate) -> Optional[Coordinate]:
        free = self.free_adjacent_coordinates(c)
        return free[0] if free else None

    # ---- inspection ----

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def snapshot(self) -> np.ndarray:
        return self.cells.copy()
