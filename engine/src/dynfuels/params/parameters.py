"""Validated input parameters of the fuel system."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from dynfuels.catalog.disturbances import DisturbanceCatalog
from dynfuels.catalog.fuel_types import FuelTypeCatalog
from dynfuels.errors import InputValueError

TIMESTEP_VAR = "timestep"
_TEMPLATE_VAR = re.compile(r"\{([^{}]*)\}")

DEFAULT_MAP_FILE_NAMES = "fuels/FuelType-{timestep}.img"
DEFAULT_PCT_CONIFER_FILE_NAME = "fuels/PctConifer-{timestep}.img"
DEFAULT_PCT_DEAD_FIR_FILE_NAME = "fuels/PctDeadFir-{timestep}.img"


def check_template_vars(template: str, field_name: str = "MapFileNames") -> str:
    """Validate a map file name template.

    The only variable allowed is {timestep}.

    Raises:
        InputValueError: If the template is empty or uses another variable
    """
    if not template.strip():
        raise InputValueError(field_name, template, "A file name template is required.")
    for var in _TEMPLATE_VAR.findall(template):
        if var != TIMESTEP_VAR:
            raise InputValueError(
                field_name, template,
                f'Unknown template variable "{{{var}}}"; only {{{TIMESTEP_VAR}}} is allowed.',
            )
    return template


def replace_template_vars(template: str, current_time: int) -> str:
    """Expand {timestep} in a map file name template."""
    return template.replace("{" + TIMESTEP_VAR + "}", str(current_time))


def _check_percent(name: str, value: int) -> None:
    if value < 0 or value > 100:
        raise InputValueError(name, value, "Value must be >= 0 and <= 100.")


@dataclass(frozen=True)
class InputParameters:
    """All parameters of the fuel system, validated at construction.

    Attributes:
        timestep: Years between classifications
        fuel_coefficients: Fuel coefficient per species index
        hardwood_max: Dominance (percent) under which a cell snaps to pure
            conifer or pure hardwood
        dead_fir_max_age: Years a dead fir cohort keeps counting
        fuel_types: Fuel type catalog
        disturbance_types: Disturbance rules in priority order
        map_file_names: Template for fuel type maps
        pct_conifer_file_name: Template for percent conifer maps
        pct_dead_fir_file_name: Template for percent dead fir maps
    """

    timestep: int
    fuel_coefficients: tuple[float, ...]
    hardwood_max: int
    dead_fir_max_age: int
    fuel_types: FuelTypeCatalog
    disturbance_types: DisturbanceCatalog = field(default_factory=DisturbanceCatalog)
    map_file_names: str = DEFAULT_MAP_FILE_NAMES
    pct_conifer_file_name: str = DEFAULT_PCT_CONIFER_FILE_NAME
    pct_dead_fir_file_name: str = DEFAULT_PCT_DEAD_FIR_FILE_NAME

    def __post_init__(self) -> None:
        if self.timestep < 0:
            raise InputValueError("Timestep", self.timestep, "Value must be = or > 0.")
        coefficients = tuple(float(c) for c in self.fuel_coefficients)
        for index, coefficient in enumerate(coefficients):
            if coefficient < 0.0:
                raise InputValueError(
                    f"Fuel Coefficient of species {index}", coefficient,
                    "Value must be = or > 0.",
                )
        object.__setattr__(self, "fuel_coefficients", coefficients)
        _check_percent("HardwoodMaximum", self.hardwood_max)
        _check_percent("DeadFirMaxAge", self.dead_fir_max_age)
        check_template_vars(self.map_file_names, "MapFileNames")
        check_template_vars(self.pct_conifer_file_name, "PctConiferFileName")
        check_template_vars(self.pct_dead_fir_file_name, "PctDeadFirFileName")

    def map_paths(self, current_time: int) -> dict[str, str]:
        """Output file names of the three maps for a timestep."""
        return {
            "fuel_type": replace_template_vars(self.map_file_names, current_time),
            "percent_conifer": replace_template_vars(self.pct_conifer_file_name, current_time),
            "percent_dead_fir": replace_template_vars(self.pct_dead_fir_file_name, current_time),
        }
