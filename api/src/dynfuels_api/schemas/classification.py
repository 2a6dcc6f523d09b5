"""Pydantic models for classification endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, model_validator

from dynfuels.types import BaseFuel


class SpeciesParams(BaseModel):
    """A species of the landscape and its fuel coefficient."""

    name: str = Field(..., min_length=1, description="Species code (e.g., abiebals)")
    longevity: int = Field(..., gt=0, description="Species longevity (years)")
    fuel_coefficient: float = Field(default=1.0, ge=0, description="Fuel coefficient")


class FuelTypeParams(BaseModel):
    """A fuel type definition. Species prefixed with '-' count negatively."""

    fuel_index: int = Field(..., ge=1, le=100, description="Fuel index (1-100)")
    base_fuel: BaseFuel
    min_age: int = Field(..., ge=0, description="Minimum cohort age (years)")
    max_age: int = Field(..., ge=0, description="Maximum cohort age (years)")
    species: list[str] = Field(..., min_length=1, description="Species codes")


class DisturbanceParams(BaseModel):
    """A disturbance conversion rule."""

    fuel_index: int = Field(..., ge=1, le=100, description="Fuel index forced on the cell")
    max_age: int = Field(..., gt=0, description="Years since the event the rule applies")
    prescriptions: list[str] = Field(
        ..., min_length=1, description="Prescription names or FireSeverityN/WindSeverityN"
    )


class CellParams(BaseModel):
    """Snapshot of one active cell."""

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    cohorts: dict[str, list[Annotated[int, Field(ge=0)]]] = Field(
        default_factory=dict, description="{species code: [cohort ages]}"
    )
    time_since_last_harvest: int | None = Field(default=None, ge=0)
    time_since_last_fire: int | None = Field(default=None, ge=0)
    time_since_last_wind: int | None = Field(default=None, ge=0)
    fire_severity: int = Field(default=0, ge=0)
    wind_severity: int = Field(default=0, ge=0)
    harvest_prescription: str = ""
    dead_fir_cohorts: dict[int, int] | None = Field(
        default=None, description="{year: dead fir cohorts}; null when not modelled"
    )


class ClassificationCreate(BaseModel):
    """Request body for classifying a landscape snapshot."""

    species: list[SpeciesParams] = Field(..., min_length=1)
    fuel_types: list[FuelTypeParams] = Field(..., min_length=1)
    disturbance_types: list[DisturbanceParams] = Field(default_factory=list)
    hardwood_max: int = Field(default=15, ge=0, le=100, description="Hardwood maximum (%)")
    dead_fir_max_age: int = Field(default=15, ge=0, le=100, description="Dead fir max age (years)")
    timestep: int = Field(default=10, ge=0, description="Years between classifications")
    current_time: int = Field(default=0, ge=0, description="Current simulation year")
    start_time: int = Field(default=0, ge=0, description="First simulation year")
    end_time: int | None = Field(
        default=None, ge=0, description="Last simulation year; defaults to current_time"
    )
    cell_area: float = Field(default=1.0, gt=0, description="Raster cell area (ha)")
    rows: int = Field(..., gt=0, le=2000)
    cols: int = Field(..., gt=0, le=2000)
    cells: list[CellParams] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_cells_in_grid(self) -> "ClassificationCreate":
        """Every cell must lie inside the grid."""
        for cell in self.cells:
            if cell.row >= self.rows or cell.col >= self.cols:
                raise ValueError(
                    f"cell ({cell.row}, {cell.col}) is outside the {self.rows} x {self.cols} grid"
                )
        return self


class ClassificationStatus(str, Enum):
    """Classification run status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class FuelMapsSchema(BaseModel):
    """Per-layer grids of a classified landscape."""

    current_time: int
    fuel_type: list[list[int]]
    decid_fuel_type: list[list[int]]
    percent_conifer: list[list[int]]
    percent_hardwood: list[list[int]]
    percent_dead_fir: list[list[int]]
    fuel_histogram: dict[int, int]
    map_paths: dict[str, str]


class ClassificationResponse(BaseModel):
    """Response from classification creation or status query."""

    classification_id: str
    status: ClassificationStatus
    maps: FuelMapsSchema | None = None
    metadata_path: str | None = None
    error: str | None = None
