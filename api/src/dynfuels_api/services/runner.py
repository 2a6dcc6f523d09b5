"""Classification runner service.

Manages classification lifecycle: creation, execution, and result storage.
Requests are converted to engine parameters up front, so configuration
errors surface before a run exists. Classifications then run in background
threads.
"""

from __future__ import annotations

import logging
import threading
import uuid
from pathlib import Path

from dynfuels.catalog.disturbances import DisturbanceCatalog, DisturbanceOverride
from dynfuels.catalog.fuel_types import FuelType, FuelTypeCatalog
from dynfuels.errors import DuplicateIndexError
from dynfuels.landscape.driver import FuelMaps, FuelSystem, Landscape
from dynfuels.params.parameters import InputParameters
from dynfuels.params.parser import lookup_species, parse_species_multipliers
from dynfuels.types import CellInputs, Species, SpeciesCohorts, SpeciesDataset

from dynfuels_api.schemas.classification import (
    CellParams,
    ClassificationCreate,
    ClassificationStatus,
)

logger = logging.getLogger(__name__)


def build_species(request: ClassificationCreate) -> SpeciesDataset:
    first_use: dict[str, int] = {}
    species = []
    for position, params in enumerate(request.species, start=1):
        if params.name in first_use:
            raise DuplicateIndexError("species", params.name, first_use[params.name])
        first_use[params.name] = position
        species.append(Species(index=position - 1, name=params.name, longevity=params.longevity))
    return SpeciesDataset(species)


def build_parameters(
    request: ClassificationCreate, species: SpeciesDataset
) -> InputParameters:
    """Convert a request into validated engine parameters.

    Raises:
        ParameterError: If the request describes an invalid configuration
    """
    fuel_types = []
    for params in request.fuel_types:
        multipliers = parse_species_multipliers(params.species, species)
        fuel_types.append(
            FuelType(
                fuel_index=params.fuel_index,
                base_fuel=params.base_fuel,
                min_age=params.min_age,
                max_age=params.max_age,
                multipliers=multipliers,
            )
        )

    rules = [
        DisturbanceOverride(p.fuel_index, p.max_age, tuple(p.prescriptions))
        for p in request.disturbance_types
    ]

    return InputParameters(
        timestep=request.timestep,
        fuel_coefficients=tuple(p.fuel_coefficient for p in request.species),
        hardwood_max=request.hardwood_max,
        dead_fir_max_age=request.dead_fir_max_age,
        fuel_types=FuelTypeCatalog(fuel_types),
        disturbance_types=DisturbanceCatalog(rules),
    )


def build_cell(params: CellParams, species: SpeciesDataset) -> CellInputs:
    cohorts = tuple(
        SpeciesCohorts(species=lookup_species(species, name), ages=tuple(ages))
        for name, ages in params.cohorts.items()
    )
    return CellInputs(
        cohorts=cohorts,
        time_since_last_harvest=params.time_since_last_harvest,
        time_since_last_fire=params.time_since_last_fire,
        time_since_last_wind=params.time_since_last_wind,
        fire_severity=params.fire_severity,
        wind_severity=params.wind_severity,
        harvest_prescription=params.harvest_prescription,
        dead_fir_cohorts=params.dead_fir_cohorts,
    )


def build_landscape(request: ClassificationCreate, species: SpeciesDataset) -> Landscape:
    landscape = Landscape.empty(request.rows, request.cols)
    first_use: dict[tuple[int, int], int] = {}
    for position, params in enumerate(request.cells, start=1):
        key = (params.row, params.col)
        if key in first_use:
            raise DuplicateIndexError("cell", key, first_use[key])
        first_use[key] = position
        landscape.cells[params.row][params.col] = build_cell(params, species)
    return landscape


class ClassificationRun:
    """Tracks state of a single classification run."""

    def __init__(
        self,
        run_id: str,
        system: FuelSystem,
        landscape: Landscape,
        current_time: int,
    ):
        self.id = run_id
        self.system = system
        self.parameters = system.parameters
        self.landscape = landscape
        self.current_time = current_time
        self.status: ClassificationStatus = ClassificationStatus.PENDING
        self.maps: FuelMaps | None = None
        self.error: str | None = None


class ClassificationRunner:
    """Manages classification runs.

    Stores active and completed runs in memory. When metadata_dir is set,
    each completed run writes its map manifest to metadata_dir/<run id>.
    """

    def __init__(
        self, max_workers: int = 1, metadata_dir: str | Path | None = None
    ) -> None:
        self.max_workers = max_workers
        self.metadata_dir = Path(metadata_dir) if metadata_dir is not None else None
        self._runs: dict[str, ClassificationRun] = {}
        self._lock = threading.Lock()

    def create(self, request: ClassificationCreate) -> str:
        """Validate a request and start classifying it.

        Args:
            request: Classification parameters and landscape snapshot

        Returns:
            Classification ID

        Raises:
            ParameterError: If the request is not a valid configuration
        """
        species = build_species(request)
        parameters = build_parameters(request, species)
        landscape = build_landscape(request, species)

        run_id = str(uuid.uuid4())[:8]
        system = FuelSystem(
            parameters,
            cell_area=request.cell_area,
            start_time=request.start_time,
            end_time=request.end_time,
        )
        run = ClassificationRun(run_id, system, landscape, request.current_time)

        with self._lock:
            self._runs[run_id] = run

        thread = threading.Thread(target=self._execute, args=(run,), daemon=True)
        thread.start()

        return run_id

    def get(self, run_id: str) -> ClassificationRun | None:
        with self._lock:
            return self._runs.get(run_id)

    def _execute(self, run: ClassificationRun) -> None:
        """Execute a classification run."""
        run.status = ClassificationStatus.RUNNING

        try:
            metadata_dir = self.metadata_dir / run.id if self.metadata_dir is not None else None
            run.maps = run.system.run(
                run.landscape, run.current_time, self.max_workers, metadata_dir
            )
            run.status = ClassificationStatus.COMPLETED
            logger.info(
                "Classification %s completed: %d active cells",
                run.id,
                run.landscape.active_count,
            )

        except Exception as e:
            run.status = ClassificationStatus.FAILED
            run.error = str(e)
            logger.exception("Classification %s failed: %s", run.id, e)
