"""Reader for the text parameter file of the fuel system.

The file is line oriented. `>>` starts a comment, blank lines are skipped
and values containing spaces are double quoted. Sections appear in a fixed
order:

    LandisData  "Dynamic Fuel System"
    Timestep  10
    >> Species    Fuel Coefficient
    abiebals     1.0
    HardwoodMaximum  15
    DeadFirMaxAge    15
    FuelTypes
    >> Index  BaseFuel  AgeRange   Species
    1   Conifer   0 to 400   abiebals -acersacc
    DisturbanceConversionTable
    >> Index  MaxAge  Prescriptions
    20  20  MaxAgeClearcut FireSeverity3
    MapFileNames         fuels/FuelType-{timestep}.img
    PctConiferFileName   fuels/PctConifer-{timestep}.img
    PctDeadFirFileName   fuels/PctDeadFir-{timestep}.img
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Sequence

from dynfuels.catalog.disturbances import DisturbanceCatalog, DisturbanceOverride
from dynfuels.catalog.fuel_types import FuelType, FuelTypeCatalog
from dynfuels.errors import DuplicateIndexError, InputValueError, ParseError
from dynfuels.params.parameters import InputParameters
from dynfuels.types import BaseFuel, Species, SpeciesDataset

logger = logging.getLogger(__name__)

EXTENSION_NAME = "Dynamic Fuel System"

_COMMENT = ">>"


def lookup_species(
    species: SpeciesDataset, name: str, line_number: int | None = None
) -> Species:
    """Find a species by name.

    Raises:
        InputValueError: If the dataset has no such species
    """
    found = species[name]
    if found is None:
        raise InputValueError("Species", name, f"{name} is not a species name.", line_number)
    return found


def parse_species_multipliers(
    words: Sequence[str], species: SpeciesDataset, line_number: int | None = None
) -> dict[int, int]:
    """Convert a fuel type species list to {species index: +1 or -1}.

    A leading "-" marks a species that counts against the fuel type.

    Raises:
        InputValueError: On a bare "-" or an unknown species
        ParseError: If the list is empty or names a species twice
    """
    multipliers: dict[int, int] = {}
    for word in words:
        negative = word.startswith("-")
        name = word[1:] if negative else word
        if not name:
            raise InputValueError("Species", word, 'No species name after "-"', line_number)
        found = lookup_species(species, name, line_number)
        if found.index in multipliers:
            raise ParseError(f"The species {found.name} appears more than once.", line_number)
        multipliers[found.index] = -1 if negative else 1
    if not multipliers:
        raise ParseError("At least one species is required.", line_number)
    return multipliers


class InputParametersParser:
    """Parses a parameter file against a species dataset.

    A parser instance is single use: call parse() once.
    """

    def __init__(self, species: SpeciesDataset):
        self.species = species
        self._lines: list[tuple[int, list[str]]] = []
        self._pos = 0

    # ------------------------------------------------------------------
    # Line cursor

    def _load(self, text: str) -> None:
        self._lines = []
        self._pos = 0
        for number, raw in enumerate(text.splitlines(), start=1):
            content = raw.split(_COMMENT, 1)[0].strip()
            if not content:
                continue
            try:
                words = shlex.split(content)
            except ValueError as e:
                raise ParseError(str(e), number) from e
            self._lines.append((number, words))

    @property
    def _at_end(self) -> bool:
        return self._pos >= len(self._lines)

    @property
    def _line_number(self) -> int | None:
        if self._at_end:
            return None
        return self._lines[self._pos][0]

    @property
    def _current_name(self) -> str | None:
        if self._at_end:
            return None
        return self._lines[self._pos][1][0]

    def _next_line(self) -> None:
        self._pos += 1

    def _read_name(self, name: str) -> None:
        if self._at_end:
            raise ParseError(f'Expected "{name}" but reached the end of input')
        if self._current_name != name:
            raise ParseError(
                f'Expected "{name}" but found "{self._current_name}"', self._line_number
            )
        words = self._lines[self._pos][1]
        if len(words) > 1:
            raise ParseError(f'Extra data after "{name}": "{words[1]}"', self._line_number)
        self._next_line()

    def _read_var(self, name: str) -> tuple[str, int]:
        """Read a `Name  value` line and return the value and line number."""
        if self._at_end:
            raise ParseError(f'Expected "{name}" but reached the end of input')
        number, words = self._lines[self._pos]
        if words[0] != name:
            raise ParseError(f'Expected "{name}" but found "{words[0]}"', number)
        if len(words) < 2:
            raise ParseError(f"Missing value for {name}", number)
        if len(words) > 2:
            raise ParseError(f'Extra data after the {name} value: "{words[2]}"', number)
        self._next_line()
        return words[1], number

    # ------------------------------------------------------------------
    # Value conversion

    @staticmethod
    def _to_int(name: str, word: str, number: int) -> int:
        try:
            return int(word)
        except ValueError:
            raise InputValueError(name, word, "Value must be an integer.", number) from None

    @staticmethod
    def _to_float(name: str, word: str, number: int) -> float:
        try:
            return float(word)
        except ValueError:
            raise InputValueError(name, word, "Value must be a number.", number) from None

    # ------------------------------------------------------------------
    # Sections

    def parse(self, text: str) -> InputParameters:
        """Parse the parameter file contents.

        Raises:
            ParameterError: On the first malformed or invalid value
        """
        self._load(text)

        landis_data, number = self._read_var("LandisData")
        if landis_data != EXTENSION_NAME:
            raise InputValueError(
                "LandisData", landis_data, f'The value is not "{EXTENSION_NAME}"', number
            )

        word, number = self._read_var("Timestep")
        timestep = self._to_int("Timestep", word, number)

        coefficients = self._parse_coefficients()

        word, number = self._read_var("HardwoodMaximum")
        hardwood_max = self._to_int("HardwoodMaximum", word, number)
        word, number = self._read_var("DeadFirMaxAge")
        dead_fir_max_age = self._to_int("DeadFirMaxAge", word, number)

        logger.info("Reading in the Fuel Assignment table...")
        self._read_name("FuelTypes")
        fuel_types = self._parse_fuel_types()

        logger.info("Reading in the Disturbance Conversion table...")
        self._read_name("DisturbanceConversionTable")
        disturbance_types = self._parse_disturbance_types()

        logger.info("Reading in map names...")
        map_file_names, _ = self._read_var("MapFileNames")
        pct_conifer_file_name, _ = self._read_var("PctConiferFileName")
        pct_dead_fir_file_name, _ = self._read_var("PctDeadFirFileName")
        if not self._at_end:
            raise ParseError(
                f'Unexpected data after the PctDeadFirFileName parameter: "{self._current_name}"',
                self._line_number,
            )

        return InputParameters(
            timestep=timestep,
            fuel_coefficients=tuple(coefficients),
            hardwood_max=hardwood_max,
            dead_fir_max_age=dead_fir_max_age,
            fuel_types=fuel_types,
            disturbance_types=disturbance_types,
            map_file_names=map_file_names,
            pct_conifer_file_name=pct_conifer_file_name,
            pct_dead_fir_file_name=pct_dead_fir_file_name,
        )

    def _parse_coefficients(self) -> list[float]:
        """Species fuel coefficient table; unlisted species keep 1.0."""
        coefficients = [1.0] * len(self.species)
        first_use: dict[str, int] = {}

        while not self._at_end and self._current_name != "HardwoodMaximum":
            number, words = self._lines[self._pos]
            species = lookup_species(self.species, words[0], number)
            if species.name in first_use:
                raise DuplicateIndexError("species", species.name, first_use[species.name])
            first_use[species.name] = number

            if len(words) < 2:
                raise ParseError(f"Missing fuel coefficient for {species.name}", number)
            if len(words) > 2:
                raise ParseError(
                    f'Extra data after the Fuel Coefficient column: "{words[2]}"', number
                )
            coefficient = self._to_float("Fuel Coefficient", words[1], number)
            if coefficient < 0.0:
                raise InputValueError(
                    "Fuel Coefficient", coefficient, "Value must be = or > 0.", number
                )
            coefficients[species.index] = coefficient
            self._next_line()

        return coefficients

    def _parse_fuel_types(self) -> FuelTypeCatalog:
        fuel_types: list[FuelType] = []
        positions: list[int] = []
        first_use: dict[int, int] = {}

        while not self._at_end and self._current_name != "DisturbanceConversionTable":
            number, words = self._lines[self._pos]
            if len(words) < 3:
                raise ParseError("Expected a fuel index, base fuel type and age range", number)

            fuel_index = self._to_int("Fuel Index", words[0], number)
            if fuel_index in first_use:
                raise DuplicateIndexError("fuel type", fuel_index, first_use[fuel_index])
            first_use[fuel_index] = number

            try:
                base_fuel = BaseFuel.parse(words[1])
            except InputValueError as e:
                raise InputValueError(e.field, e.value, e.constraint, number) from e
            min_age = self._to_int("Min Age", words[2], number)

            separator = words[3] if len(words) > 3 else ""
            if separator != "to":
                message = f'Expected "to" after the minimum age ({words[2]})'
                if separator:
                    message += f', but found "{separator}" instead'
                raise ParseError(message, number)
            if len(words) < 5:
                raise ParseError("Missing the maximum age", number)
            max_age = self._to_int("Max Age", words[4], number)

            multipliers = parse_species_multipliers(words[5:], self.species, number)

            try:
                fuel_types.append(
                    FuelType(
                        fuel_index=fuel_index,
                        base_fuel=base_fuel,
                        min_age=min_age,
                        max_age=max_age,
                        multipliers=multipliers,
                    )
                )
            except InputValueError as e:
                raise InputValueError(e.field, e.value, e.constraint, number) from e
            positions.append(number)
            self._next_line()

        return FuelTypeCatalog(fuel_types, positions)

    def _parse_disturbance_types(self) -> DisturbanceCatalog:
        rules: list[DisturbanceOverride] = []

        while not self._at_end and self._current_name != "MapFileNames":
            number, words = self._lines[self._pos]
            fuel_index = self._to_int("Fuel Index", words[0], number)
            if len(words) < 2:
                raise ParseError("Missing the maximum age", number)
            max_age = self._to_int("Max Age", words[1], number)
            prescriptions = tuple(words[2:])
            if not prescriptions:
                raise ParseError("At least one prescription is required.", number)

            try:
                rules.append(DisturbanceOverride(fuel_index, max_age, prescriptions))
            except InputValueError as e:
                raise InputValueError(e.field, e.value, e.constraint, number) from e
            self._next_line()

        return DisturbanceCatalog(rules)


def parse_parameters(text: str, species: SpeciesDataset) -> InputParameters:
    """Parse parameter file contents."""
    return InputParametersParser(species).parse(text)


def load_parameters(path: str | Path, species: SpeciesDataset) -> InputParameters:
    """Load and parse a parameter file from disk."""
    path = Path(path)
    logger.info("Loading fuel parameters from %s", path)
    return parse_parameters(path.read_text(), species)
