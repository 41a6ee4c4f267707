"""
config.py

Species constants and run parameters for the marine food web.

Food chain:
- plankton  -> sardine   -> sea lion  -> killer whale
- kelp      -> sea otter -> dolphin

Each species is one `SpeciesTraits` record. Producers only age and spread;
consumers also get hungry, hunt their prey species and breed once mature.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


PRODUCER = "producer"
CONSUMER = "consumer"


# ============================================================
# SPECIES
# ============================================================

@dataclass(frozen=True)
class SpeciesTraits:
    name: str
    kind: str
    max_age: int
    reproduction_probability: float
    max_litter_size: int
    breeding_age: int = 0
    food_value: int = 0  # foodLevel after a meal; steps a consumer survives without eating
    prey: str | None = None

    @property
    def is_consumer(self) -> bool:
        return self.kind == CONSUMER


KILLER_WHALE = SpeciesTraits(
    name="killer_whale",
    kind=CONSUMER,
    max_age=40,
    reproduction_probability=0.08,
    max_litter_size=2,
    breeding_age=6,
    food_value=9,
    prey="sea_lion",
)

SEA_LION = SpeciesTraits(
    name="sea_lion",
    kind=CONSUMER,
    max_age=25,
    reproduction_probability=0.15,
    max_litter_size=3,
    breeding_age=4,
    food_value=6,
    prey="sardine",
)

DOLPHIN = SpeciesTraits(
    name="dolphin",
    kind=CONSUMER,
    max_age=30,
    reproduction_probability=0.10,
    max_litter_size=2,
    breeding_age=5,
    food_value=7,
    prey="sea_otter",
)

SEA_OTTER = SpeciesTraits(
    name="sea_otter",
    kind=CONSUMER,
    max_age=15,
    reproduction_probability=0.20,
    max_litter_size=3,
    breeding_age=3,
    food_value=5,
    prey="kelp",
)

SARDINE = SpeciesTraits(
    name="sardine",
    kind=CONSUMER,
    max_age=13,
    reproduction_probability=0.30,
    max_litter_size=4,
    breeding_age=2,
    food_value=4,
    prey="plankton",
)

KELP = SpeciesTraits(
    name="kelp",
    kind=PRODUCER,
    max_age=10,
    reproduction_probability=0.04,
    max_litter_size=2,
)

PLANKTON = SpeciesTraits(
    name="plankton",
    kind=PRODUCER,
    max_age=10,
    reproduction_probability=0.02,
    max_litter_size=2,
)

# Seeding priority: apex predators first, producers last.
SPECIES_ORDER: Tuple[SpeciesTraits, ...] = (
    KILLER_WHALE,
    SEA_LION,
    DOLPHIN,
    SEA_OTTER,
    SARDINE,
    KELP,
    PLANKTON,
)

SPECIES: Dict[str, SpeciesTraits] = {sp.name: sp for sp in SPECIES_ORDER}


# ============================================================
# RUN PARAMETERS
# ============================================================

DEFAULT_DEPTH = 80
DEFAULT_WIDTH = 120
DEFAULT_STEPS = 1000
LONG_RUN_STEPS = 1000
REPORT_EVERY = 100

CREATION_PROBABILITIES: Dict[str, float] = {
    "killer_whale": 0.02,
    "sea_lion": 0.02,
    "dolphin": 0.04,
    "sea_otter": 0.04,
    "sardine": 0.09,
    "kelp": 0.05,
    "plankton": 0.05,
}


@dataclass
class Params:
    depth: int = DEFAULT_DEPTH
    width: int = DEFAULT_WIDTH
    steps: int = DEFAULT_STEPS
    seed: int | None = None
    report_every: int = REPORT_EVERY
    delay: float = 0.0  # seconds between steps; presentation only
    creation_probabilities: Dict[str, float] = field(default_factory=lambda: dict(CREATION_PROBABILITIES))

    def creation_probability(self, name: str) -> float:
        if name not in SPECIES:
            raise KeyError(f"unknown species: {name}")
        return self.creation_probabilities.get(name, 0.0)
