from __future__ import annotations

from typing import List

import pytest

from marine_food_web.config import Params
from marine_food_web.simulator import Simulator


class ScriptedRandom:
    """Random source that replays queued draws, then falls back to fixed values."""

    def __init__(self, floats: List[float] | None = None, ints: List[int] | None = None,
                 float_default: float = 0.99, int_default: int = 0):
        self.floats = list(floats or [])
        self.ints = list(ints or [])
        self.float_default = float_default
        self.int_default = int_default
        self.float_calls = 0
        self.int_calls = 0

    def next_float(self) -> float:
        self.float_calls += 1
        return self.floats.pop(0) if self.floats else self.float_default

    def next_int(self, bound: int) -> int:
        self.int_calls += 1
        value = self.ints.pop(0) if self.ints else self.int_default
        return min(value, bound - 1)


class RecordingMonitor:
    def __init__(self, viable_until: int | None = None):
        self.viable_until = viable_until
        self.reports = []

    def report(self, step, snapshot):
        self.reports.append((step, snapshot))

    def is_viable(self, snapshot):
        if self.viable_until is None:
            return True
        return snapshot.step < self.viable_until


@pytest.fixture
def scripted():
    return ScriptedRandom()


def empty_sim(depth: int, width: int, rng=None, monitor=None) -> Simulator:
    params = Params(depth=depth, width=width, report_every=0)
    return Simulator(params, rng=rng or ScriptedRandom(), monitor=monitor or RecordingMonitor(), populate=False)
