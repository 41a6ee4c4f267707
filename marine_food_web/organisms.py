"""
organisms.py

Organism state and the per-step lifecycle shared by every species.

An organism is a plain record (id, species traits, age, food level, alive flag,
location). The field only knows ids; species behaviour is selected by the
`kind` tag of the species record:

- producer: age -> spread -> move (or die of overcrowding)
- consumer: age -> hunger -> breed -> feed -> move (or die of overcrowding)

Death is one-way: the organism is evicted from the field and loses its location.
Every mutating helper is a no-op on a dead organism.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

from marine_food_web.config import CONSUMER, PRODUCER, SpeciesTraits
from marine_food_web.field import Coordinate, Field


OLD_AGE = "old_age"
STARVATION = "starvation"
OVERCROWDING = "overcrowding"
EATEN = "eaten"


class RandomSource(Protocol):
    def next_float(self) -> float: ...

    def next_int(self, bound: int) -> int: ...


class OrganismLookup(Protocol):
    def get(self, oid: int) -> Optional[Organism]: ...

    def new_id(self) -> int: ...


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(eq=False)
class Organism:
    oid: int
    species: SpeciesTraits
    age: int = 0
    food_level: int | None = None  # None for producers
    alive: bool = True
    location: Coordinate | None = None
    cause_of_death: str | None = None

    @property
    def name(self) -> str:
        return self.species.name


def spawn(
    species: SpeciesTraits,
    oid: int,
    field: Field,
    location: Coordinate,
    rng: RandomSource,
    random_age: bool = False,
) -> Organism:
    """Create an organism at location. Newborns start at age 0 and, for consumers, full food level."""
    org = Organism(oid=oid, species=species)
    if random_age:
        org.age = rng.next_int(species.max_age)
        if species.is_consumer:
            org.food_level = rng.next_int(species.food_value)
    elif species.is_consumer:
        org.food_level = species.food_value
    relocate(org, field, location)
    return org


# ============================================================
# LIFECYCLE
# ============================================================

def kill(org: Organism, field: Field, cause: str) -> None:
    if not org.alive:
        return
    org.alive = False
    org.cause_of_death = cause
    if org.location is not None:
        if field.occupant_at(org.location) == org.oid:
            field.clear(org.location)
        org.location = None


def relocate(org: Organism, field: Field, new_location: Coordinate) -> None:
    if not org.alive:
        return
    if org.location is not None and field.occupant_at(org.location) == org.oid:
        field.clear(org.location)
    field.place(org.oid, new_location)
    org.location = new_location


def increment_age(org: Organism, field: Field) -> None:
    org.age += 1
    if org.age > org.species.max_age:
        kill(org, field, OLD_AGE)


def increment_hunger(org: Organism, field: Field) -> None:
    org.food_level -= 1
    if org.food_level <= 0:
        kill(org, field, STARVATION)


# ============================================================
# BREEDING
# ============================================================

def can_breed(org: Organism) -> bool:
    return org.age >= org.species.breeding_age


def breed(org: Organism, rng: RandomSource) -> int:
    """Litter size for this step; no draw is made below breeding age."""
    sp = org.species
    if can_breed(org) and rng.next_float() <= sp.reproduction_probability:
        return rng.next_int(sp.max_litter_size) + 1
    return 0


def give_birth(
    org: Organism,
    field: Field,
    population: OrganismLookup,
    rng: RandomSource,
    newborns: List[Organism],
) -> int:
    free = field.free_adjacent_coordinates(org.location)
    births = breed(org, rng)
    born = 0
    while born < births and free:
        where = free.pop(0)
        young = spawn(org.species, population.new_id(), field, where, rng)
        newborns.append(young)
        born += 1
    return born


# ============================================================
# FEEDING / MOVEMENT
# ============================================================

def find_food(org: Organism, field: Field, population: OrganismLookup) -> Optional[Coordinate]:
    """
    Eat the first live prey in neighbour scan order and return its cell.

    Occupants are resolved through the population, so newborns staged this
    step are invisible here even though their cells are occupied.
    """
    prey_name = org.species.prey
    for where in field.adjacent_coordinates(org.location):
        oid = field.occupant_at(where)
        if oid is None:
            continue
        prey = population.get(oid)
        if prey is None or not prey.alive or prey.species.name != prey_name:
            continue
        kill(prey, field, EATEN)
        org.food_level = org.species.food_value
        return where
    return None


def move_or_die(org: Organism, field: Field, target: Optional[Coordinate]) -> None:
    if target is None:
        target = field.free_adjacent_coordinate(org.location)
    if target is not None:
        relocate(org, field, target)
    else:
        kill(org, field, OVERCROWDING)


# ============================================================
# PER-STEP BEHAVIOUR
# ============================================================

def act_producer(
    org: Organism,
    field: Field,
    population: OrganismLookup,
    rng: RandomSource,
    newborns: List[Organism],
) -> None:
    increment_age(org, field)
    if org.alive:
        give_birth(org, field, population, rng, newborns)
        move_or_die(org, field, None)


def act_consumer(
    org: Organism,
    field: Field,
    population: OrganismLookup,
    rng: RandomSource,
    newborns: List[Organism],
) -> None:
    increment_age(org, field)
    if not org.alive:
        return
    increment_hunger(org, field)
    if org.alive:
        give_birth(org, field, population, rng, newborns)
        target = find_food(org, field, population)
        move_or_die(org, field, target)


BEHAVIOURS: Dict[str, Callable[..., None]] = {
    PRODUCER: act_producer,
    CONSUMER: act_consumer,
}


def act(
    org: Organism,
    field: Field,
    population: OrganismLookup,
    rng: RandomSource,
    newborns: List[Organism],
) -> None:
    """Run one step of org's lifecycle; newborns are appended to the staging list."""
    if not org.alive:
        return
    BEHAVIOURS[org.species.kind](org, field, population, rng, newborns)
