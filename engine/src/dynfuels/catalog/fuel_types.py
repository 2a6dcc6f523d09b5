"""Fuel type definitions and the catalog that owns them.

A fuel type reacts to cohorts of the species listed in its multiplier table
whose age lies within its age window. Records are validated once, when they
are built, and are immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Sequence

from dynfuels.errors import DuplicateIndexError, InputValueError
from dynfuels.types import BaseFuel

MIN_FUEL_INDEX = 1
MAX_FUEL_INDEX = 100


def check_fuel_index(value: int, field_name: str = "Fuel Index") -> int:
    """Validate a fuel index used as a score slot.

    Raises:
        InputValueError: If value is outside [1, 100]
    """
    if value < MIN_FUEL_INDEX or value > MAX_FUEL_INDEX:
        raise InputValueError(
            field_name, value,
            f"Value must be between {MIN_FUEL_INDEX} and {MAX_FUEL_INDEX}.",
        )
    return value


@dataclass(frozen=True)
class FuelType:
    """A single fuel classification bucket.

    Attributes:
        fuel_index: Slot of this fuel type (1-100), shared with the fire model
        base_fuel: Coarse vegetation class driving the dominance rules
        min_age: Youngest cohort age this type reacts to (years)
        max_age: Oldest cohort age this type reacts to (years)
        multipliers: {species index: +1 or -1}; missing species are ignored
    """

    fuel_index: int
    base_fuel: BaseFuel
    min_age: int
    max_age: int
    multipliers: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        check_fuel_index(self.fuel_index)
        if not isinstance(self.base_fuel, BaseFuel):
            object.__setattr__(self, "base_fuel", BaseFuel.parse(self.base_fuel))
        if self.min_age < 0:
            raise InputValueError("Min Age", self.min_age, "Value must be = or > 0.")
        if self.max_age < 0:
            raise InputValueError("Max Age", self.max_age, "Value must be = or > 0.")
        for species_index, sign in self.multipliers.items():
            if sign not in (-1, 0, 1):
                raise InputValueError(
                    f"Multiplier for species {species_index}", sign,
                    "Value must be -1, 0 or 1.",
                )
        object.__setattr__(
            self, "multipliers", MappingProxyType(dict(self.multipliers))
        )

    def multiplier(self, species_index: int) -> int:
        """Multiplier for a species: +1, -1, or 0 when not listed."""
        return self.multipliers.get(species_index, 0)

    def in_age_window(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age


class FuelTypeCatalog:
    """Ordered, validated collection of fuel types with unique indices."""

    def __init__(
        self,
        fuel_types: Iterable[FuelType],
        positions: Sequence[int] | None = None,
    ):
        """Build the catalog.

        Args:
            fuel_types: Fuel types in definition order
            positions: Source line of each fuel type, used in error messages.
                Defaults to the 1-based position in the sequence.

        Raises:
            DuplicateIndexError: If two fuel types share a fuel index
        """
        records = tuple(fuel_types)
        if positions is None:
            positions = range(1, len(records) + 1)

        first_use: dict[int, int] = {}
        for ftype, position in zip(records, positions):
            if ftype.fuel_index in first_use:
                raise DuplicateIndexError(
                    "fuel type", ftype.fuel_index, first_use[ftype.fuel_index]
                )
            first_use[ftype.fuel_index] = position

        self._fuel_types = records
        self._by_index = {ft.fuel_index: ft for ft in records}

    def __iter__(self) -> Iterator[FuelType]:
        return iter(self._fuel_types)

    def __len__(self) -> int:
        return len(self._fuel_types)

    def __contains__(self, fuel_index: object) -> bool:
        return fuel_index in self._by_index

    def get(self, fuel_index: int) -> FuelType | None:
        return self._by_index.get(fuel_index)

    def base_fuel_of(self, fuel_index: int) -> BaseFuel | None:
        """Base fuel of a fuel index, or None for index 0 / unknown."""
        ftype = self._by_index.get(fuel_index)
        return ftype.base_fuel if ftype is not None else None
