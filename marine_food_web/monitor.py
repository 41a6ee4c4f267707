"""
monitor.py

Post-step observers for the simulator.

The engine hands a `FieldSnapshot` to its monitor after `reset()` and after every
`step()`, and asks it whether the run is still worth continuing. The default
`PopulationMonitor` keeps per-step species counts, prints a progress line every
`report_every` steps and calls the run non-viable once at most one species is left.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Protocol, Tuple

import numpy as np
import pandas as pd

from marine_food_web.config import SPECIES_ORDER


SPECIES_NAMES: Tuple[str, ...] = tuple(sp.name for sp in SPECIES_ORDER)
SPECIES_CODES: Dict[str, int] = {name: i + 1 for i, name in enumerate(SPECIES_NAMES)}


# ============================================================
# SNAPSHOT
# ============================================================

@dataclass(frozen=True)
class FieldSnapshot:
    step: int
    grid: np.ndarray  # int8 species codes, 0 = vacant
    species: Tuple[str, ...] = SPECIES_NAMES

    @property
    def depth(self) -> int:
        return int(self.grid.shape[0])

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    def counts(self) -> Dict[str, int]:
        tally = np.bincount(self.grid.ravel(), minlength=len(self.species) + 1)
        return {name: int(tally[i + 1]) for i, name in enumerate(self.species)}

    def occupied(self) -> int:
        return int(np.count_nonzero(self.grid))

    def species_at(self, row: int, col: int) -> str | None:
        code = int(self.grid[row, col])
        return None if code == 0 else self.species[code - 1]


def build_snapshot(step: int, depth: int, width: int, organisms: Iterable) -> FieldSnapshot:
    grid = np.zeros((depth, width), dtype=np.int8)
    for org in organisms:
        if org.alive and org.location is not None:
            grid[org.location.row, org.location.col] = SPECIES_CODES[org.species.name]
    grid.setflags(write=False)
    return FieldSnapshot(step=step, grid=grid)


# ============================================================
# MONITORS
# ============================================================

class Monitor(Protocol):
    def report(self, step: int, snapshot: FieldSnapshot) -> None: ...

    def is_viable(self, snapshot: FieldSnapshot) -> bool: ...


class PopulationMonitor:
    def __init__(self, report_every: int = 0):
        self.report_every = report_every
        self.history: List[Dict[str, int]] = []

    def report(self, step: int, snapshot: FieldSnapshot) -> None:
        counts = snapshot.counts()
        if step == 0:
            self.history = []
        self.history.append({"step": step, **counts})

        if self.report_every and step > 0 and step % self.report_every == 0:
            parts = " ".join(f"{name}={n:5d}" for name, n in counts.items())
            print(f"t={step:5d} {parts}")

    def is_viable(self, snapshot: FieldSnapshot) -> bool:
        present = sum(1 for n in snapshot.counts().values() if n > 0)
        return present > 1

    def history_frame(self) -> pd.DataFrame:
        if not self.history:
            return pd.DataFrame(columns=list(SPECIES_NAMES), index=pd.Index([], name="step"))
        return pd.DataFrame(self.history).set_index("step")

    def to_csv(self, path: str) -> None:
        self.history_frame().to_csv(path)
        print(f"Saved population history to {path}")
