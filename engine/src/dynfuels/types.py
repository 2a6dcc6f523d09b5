"""Shared dataclasses and type definitions for dynfuels."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping

from dynfuels.errors import InputValueError


class BaseFuel(str, Enum):
    """Coarse vegetation class of a fuel type.

    Loosely based on the Canadian FBP fuel groups. Seasonal types (M2, M4,
    O1b) are not represented; leaf state is resolved by the fire model.
    """

    CONIFER = "Conifer"
    CONIFER_PLANTATION = "ConiferPlantation"
    DECIDUOUS = "Deciduous"
    NO_FUEL = "NoFuel"
    OPEN = "Open"
    SLASH = "Slash"

    @classmethod
    def parse(cls, word: str) -> BaseFuel:
        """Parse a base fuel name as written in a parameter file.

        Raises:
            InputValueError: If the word is not one of the six names
        """
        for member in cls:
            if member.value == word:
                return member
        raise InputValueError(
            "Base Fuel Type",
            word,
            "Valid Fuel Types: " + ", ".join(m.value for m in cls) + ".",
        )

    @property
    def is_conifer(self) -> bool:
        return self in (BaseFuel.CONIFER, BaseFuel.CONIFER_PLANTATION)


@dataclass(frozen=True)
class Species:
    """A tree species known to the host landscape model."""

    index: int
    name: str
    longevity: int  # years


class SpeciesDataset:
    """Ordered lookup of species by name and by index."""

    def __init__(self, species: list[Species] | tuple[Species, ...]):
        self._species = tuple(sorted(species, key=lambda s: s.index))
        self._by_name = {s.name: s for s in self._species}

    @classmethod
    def from_longevities(cls, longevities: Mapping[str, int]) -> SpeciesDataset:
        """Build a dataset indexing species in mapping order."""
        return cls(
            [Species(index=i, name=name, longevity=age)
             for i, (name, age) in enumerate(longevities.items())]
        )

    def __getitem__(self, name: str) -> Species | None:
        return self._by_name.get(name)

    def __iter__(self) -> Iterator[Species]:
        return iter(self._species)

    def __len__(self) -> int:
        return len(self._species)


@dataclass(frozen=True)
class SpeciesCohorts:
    """Live cohorts of one species at a cell."""

    species: Species
    ages: tuple[int, ...]


@dataclass(frozen=True)
class CellInputs:
    """Read-only snapshot of one active cell for a single timestep.

    Times since an event are None when the event never happened at the
    cell (or the model producing it is not running).
    """

    cohorts: tuple[SpeciesCohorts, ...] = ()
    time_since_last_harvest: int | None = None
    time_since_last_fire: int | None = None
    time_since_last_wind: int | None = None
    fire_severity: int = 0
    wind_severity: int = 0
    harvest_prescription: str = ""
    # {simulation year: dead fir cohorts}; None when the insect model is off
    dead_fir_cohorts: Mapping[int, int] | None = None

    @property
    def live_cohort_count(self) -> int:
        return sum(len(sc.ages) for sc in self.cohorts)


@dataclass(frozen=True)
class FuelClassification:
    """Fuel outputs derived for one cell in one timestep."""

    fuel_type: int = 0
    decid_fuel_type: int = 0
    percent_conifer: int = 0
    percent_hardwood: int = 0
    percent_dead_fir: int = 0
