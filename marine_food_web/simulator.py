#!/usr/bin/env python3
"""
simulator.py

Discrete-time marine food web on a bounded grid.

Per step:
- every live organism acts once, in population (insertion) order
- an organism eaten earlier in the sweep is skipped
- newborns go to a staging list and join the population after the sweep
- dead organisms are dropped, then the monitor receives the new field state

Run:
  python -m marine_food_web.simulator --steps 500 --seed 42
"""

from __future__ import annotations

import argparse
import time
from dataclasses import replace
from typing import Dict, Iterator, List, Optional

from marine_food_web.config import (
    DEFAULT_DEPTH,
    DEFAULT_STEPS,
    DEFAULT_WIDTH,
    LONG_RUN_STEPS,
    REPORT_EVERY,
    SPECIES,
    SPECIES_ORDER,
    Params,
)
from marine_food_web.field import Coordinate, Field, InvalidDimensionError
from marine_food_web.monitor import FieldSnapshot, Monitor, PopulationMonitor, build_snapshot
from marine_food_web.organisms import Organism, RandomSource, act, spawn
from marine_food_web.randomizer import Randomizer


# ============================================================
# POPULATION
# ============================================================

class Population:
    """Id-keyed arena of organisms taking part in the current step, in insertion order."""

    def __init__(self):
        self._members: Dict[int, Organism] = {}
        self._next_id = 1

    def new_id(self) -> int:
        oid = self._next_id
        self._next_id += 1
        return oid

    def add(self, org: Organism) -> None:
        self._members[org.oid] = org

    def extend(self, orgs: List[Organism]) -> None:
        for org in orgs:
            self.add(org)

    def get(self, oid: int) -> Optional[Organism]:
        return self._members.get(oid)

    def remove_dead(self) -> int:
        dead = [oid for oid, org in self._members.items() if not org.alive]
        for oid in dead:
            del self._members[oid]
        return len(dead)

    def clear(self) -> None:
        self._members.clear()

    def __iter__(self) -> Iterator[Organism]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, org: Organism) -> bool:
        return self._members.get(org.oid) is org


# ============================================================
# SIMULATOR
# ============================================================

class Simulator:
    def __init__(
        self,
        params: Params | None = None,
        rng: RandomSource | None = None,
        monitor: Monitor | None = None,
        populate: bool = True,
    ):
        self.p = params or Params()
        self.rng = rng if rng is not None else Randomizer(self.p.seed)
        self.monitor = monitor if monitor is not None else PopulationMonitor(self.p.report_every)

        try:
            self.field = Field(self.p.depth, self.p.width)
        except InvalidDimensionError:
            print("The dimensions must be greater than zero.")
            print(f"Using default values ({DEFAULT_DEPTH}x{DEFAULT_WIDTH}).")
            self.p = replace(self.p, depth=DEFAULT_DEPTH, width=DEFAULT_WIDTH)
            self.field = Field(DEFAULT_DEPTH, DEFAULT_WIDTH)

        self.population = Population()
        self.step_count = 0
        self.reset(populate=populate)

    # ---- engine ----

    def step(self) -> None:
        newborns: List[Organism] = []
        for org in list(self.population):
            if org.alive:
                act(org, self.field, self.population, self.rng, newborns)

        self.population.remove_dead()
        self.population.extend(newborns)

        self.step_count += 1
        self.monitor.report(self.step_count, self.snapshot())

    def reset(self, populate: bool = True) -> None:
        self.step_count = 0
        self.field.clear_all()
        self.population.clear()
        if populate:
            self.populate()
        self.monitor.report(self.step_count, self.snapshot())

    def run(self, max_steps: int) -> int:
        """Step until max_steps have run or the monitor calls the field non-viable."""
        done = 0
        while done < max_steps:
            if not self.monitor.is_viable(self.snapshot()):
                print(f"Run no longer viable at step {self.step_count}")
                break
            self.step()
            done += 1
            if self.p.delay > 0:
                time.sleep(self.p.delay)
        return done

    def run_long_simulation(self) -> int:
        return self.run(LONG_RUN_STEPS)

    # ---- population ----

    def populate(self) -> None:
        """Seed each cell with at most one organism; the first species whose draw succeeds wins."""
        for row in range(self.field.depth):
            for col in range(self.field.width):
                for species in SPECIES_ORDER:
                    if self.rng.next_float() <= self.p.creation_probability(species.name):
                        self.add_organism(species.name, Coordinate(row, col), random_age=True)
                        break

    def add_organism(self, name: str, location: Coordinate, random_age: bool = False) -> Organism:
        org = spawn(SPECIES[name], self.population.new_id(), self.field, location, self.rng, random_age)
        self.population.add(org)
        return org

    # ---- inspection ----

    def snapshot(self) -> FieldSnapshot:
        return build_snapshot(self.step_count, self.field.depth, self.field.width, self.population)

    def counts(self) -> Dict[str, int]:
        return self.snapshot().counts()


# ============================================================
# MAIN
# ============================================================

def add_species_arguments(ap: argparse.ArgumentParser) -> None:
    for species in SPECIES_ORDER:
        flag = species.name.replace("_", "-")
        ap.add_argument(f"--{flag}-probability", type=float, default=None)


def apply_species_arguments(params: Params, args: argparse.Namespace) -> None:
    for species in SPECIES_ORDER:
        value = getattr(args, f"{species.name}_probability")
        if value is not None:
            params.creation_probabilities[species.name] = value


def build_params(args: argparse.Namespace) -> Params:
    params = Params(
        depth=args.depth,
        width=args.width,
        steps=args.steps,
        seed=args.seed,
        report_every=args.report_every,
        delay=args.delay,
    )
    apply_species_arguments(params, args)
    return params


def make_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Marine food web simulation")
    ap.add_argument("--depth", type=int, default=DEFAULT_DEPTH)
    ap.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    ap.add_argument("--steps", type=int, default=DEFAULT_STEPS)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--report-every", type=int, default=REPORT_EVERY)
    ap.add_argument("--delay", type=float, default=0.0, help="seconds to pause between steps")
    ap.add_argument("--history-csv", type=str, default=None, help="write per-step species counts here")
    add_species_arguments(ap)
    return ap


def main(argv: List[str] | None = None) -> None:
    args = make_parser().parse_args(argv)
    params = build_params(args)
    monitor = PopulationMonitor(params.report_every)
    sim = Simulator(params, monitor=monitor)

    steps_run = sim.run(params.steps)
    counts = sim.counts()
    print(f"Simulation finished after {steps_run} steps (t={sim.step_count}).")
    print("Final populations: " + " ".join(f"{name}={n}" for name, n in counts.items()))

    if args.history_csv:
        monitor.to_csv(args.history_csv)


if __name__ == "__main__":
    main()
