from marine_food_web.config import SPECIES, SPECIES_ORDER, Params, SpeciesTraits
from marine_food_web.field import (
    Coordinate,
    Field,
    FoodWebError,
    InvalidDimensionError,
    OutOfBoundsError,
)
from marine_food_web.monitor import FieldSnapshot, PopulationMonitor
from marine_food_web.organisms import Organism
from marine_food_web.randomizer import Randomizer
from marine_food_web.simulator import Population, Simulator

__all__ = [
    "Coordinate",
    "Field",
    "FieldSnapshot",
    "FoodWebError",
    "InvalidDimensionError",
    "Organism",
    "OutOfBoundsError",
    "Params",
    "Population",
    "PopulationMonitor",
    "Randomizer",
    "SPECIES",
    "SPECIES_ORDER",
    "Simulator",
    "SpeciesTraits",
]
