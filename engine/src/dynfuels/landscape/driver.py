"""Landscape-wide fuel classification for one timestep.

The FuelSystem visits every active cell of a Landscape, classifies it, and
collects the results into per-layer grids. Cells are independent, so rows
can be classified on a thread pool; every cell writes only its own slot.

Usage:
    system = FuelSystem(parameters)
    maps = system.run(landscape, current_time=10)
    print(maps.fuel_histogram())
"""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from pathlib import Path

from dynfuels.classify.dead_fir import calculate_percent_dead_fir
from dynfuels.classify.engine import classify
from dynfuels.landscape.maps import encode_fuel_map, encode_percent_map
from dynfuels.landscape.metadata import build_metadata, write_metadata
from dynfuels.params.parameters import InputParameters
from dynfuels.types import CellInputs, FuelClassification

logger = logging.getLogger(__name__)


@dataclass
class Landscape:
    """Row-major grid of cell snapshots. None marks an inactive cell."""

    rows: int
    cols: int
    cells: list[list[CellInputs | None]]

    def __post_init__(self) -> None:
        if len(self.cells) != self.rows or any(len(r) != self.cols for r in self.cells):
            raise ValueError(
                f"Landscape cells must be {self.rows} x {self.cols}"
            )

    @classmethod
    def empty(cls, rows: int, cols: int) -> Landscape:
        """Landscape with every cell inactive."""
        return cls(rows, cols, [[None] * cols for _ in range(rows)])

    @property
    def active_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is not None)


def _zeros(rows: int, cols: int) -> list[list[int]]:
    return [[0] * cols for _ in range(rows)]


@dataclass
class FuelMaps:
    """Fuel outputs of every cell for one timestep.

    Inactive cells hold 0 in every layer.
    """

    current_time: int
    rows: int
    cols: int
    active: list[list[bool]]
    fuel_type: list[list[int]] = field(default_factory=list)
    decid_fuel_type: list[list[int]] = field(default_factory=list)
    percent_conifer: list[list[int]] = field(default_factory=list)
    percent_hardwood: list[list[int]] = field(default_factory=list)
    percent_dead_fir: list[list[int]] = field(default_factory=list)
    metadata_path: Path | None = None

    def __post_init__(self) -> None:
        for name in (
            "fuel_type", "decid_fuel_type", "percent_conifer",
            "percent_hardwood", "percent_dead_fir",
        ):
            if not getattr(self, name):
                setattr(self, name, _zeros(self.rows, self.cols))

    def set(self, row: int, col: int, result: FuelClassification) -> None:
        self.fuel_type[row][col] = result.fuel_type
        self.decid_fuel_type[row][col] = result.decid_fuel_type
        self.percent_conifer[row][col] = result.percent_conifer
        self.percent_hardwood[row][col] = result.percent_hardwood
        self.percent_dead_fir[row][col] = result.percent_dead_fir

    def get(self, row: int, col: int) -> FuelClassification:
        return FuelClassification(
            fuel_type=self.fuel_type[row][col],
            decid_fuel_type=self.decid_fuel_type[row][col],
            percent_conifer=self.percent_conifer[row][col],
            percent_hardwood=self.percent_hardwood[row][col],
            percent_dead_fir=self.percent_dead_fir[row][col],
        )

    def fuel_histogram(self) -> dict[int, int]:
        """Number of active cells per fuel type."""
        counts: Counter[int] = Counter()
        for values, flags in zip(self.fuel_type, self.active):
            for value, is_active in zip(values, flags):
                if is_active:
                    counts[value] += 1
        return dict(sorted(counts.items()))

    def encode_fuel_type(self) -> bytes:
        return encode_fuel_map(self.fuel_type, self.active)

    def encode_percent_conifer(self) -> bytes:
        return encode_percent_map(self.percent_conifer, self.active)

    def encode_percent_dead_fir(self) -> bytes:
        return encode_percent_map(self.percent_dead_fir, self.active)


class FuelSystem:
    """Classifies the fuels of a whole landscape each timestep.

    Attributes:
        parameters: Validated fuel system parameters
        cell_area: Area of one raster cell (ha), reported in the metadata
        start_time: First simulation year
        end_time: Last simulation year; defaults to the year being run
    """

    def __init__(
        self,
        parameters: InputParameters,
        cell_area: float = 1.0,
        start_time: int = 0,
        end_time: int | None = None,
    ):
        self.parameters = parameters
        self.cell_area = cell_area
        self.start_time = start_time
        self.end_time = end_time

    def classify_cell(self, cell: CellInputs, current_time: int) -> FuelClassification:
        """Fuel type, dominance and percent dead fir of a single cell."""
        params = self.parameters
        result = classify(
            cell,
            params.fuel_types,
            params.disturbance_types,
            params.fuel_coefficients,
            params.hardwood_max,
        )
        dead_fir = calculate_percent_dead_fir(cell, current_time, params.dead_fir_max_age)
        return replace(result, percent_dead_fir=dead_fir)

    def _classify_row(
        self, maps: FuelMaps, row: int, cells: list[CellInputs | None], current_time: int
    ) -> None:
        for col, cell in enumerate(cells):
            if cell is not None:
                maps.set(row, col, self.classify_cell(cell, current_time))

    def run(
        self,
        landscape: Landscape,
        current_time: int,
        max_workers: int = 1,
        metadata_dir: str | Path | None = None,
    ) -> FuelMaps:
        """Classify every active cell of the landscape.

        Args:
            landscape: Cell snapshots for this timestep
            current_time: Current simulation year
            max_workers: Threads used to classify rows; 1 runs inline
            metadata_dir: When given, the output manifest is written there

        Returns:
            FuelMaps with all layers recomputed from scratch
        """
        active = [[cell is not None for cell in row] for row in landscape.cells]
        maps = FuelMaps(
            current_time=current_time,
            rows=landscape.rows,
            cols=landscape.cols,
            active=active,
        )

        logger.info(
            "Calculating the dynamic fuel type for %d active cells at year %d...",
            landscape.active_count,
            current_time,
        )

        if max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                futures = [
                    pool.submit(self._classify_row, maps, row, cells, current_time)
                    for row, cells in enumerate(landscape.cells)
                ]
                for future in futures:
                    future.result()
        else:
            for row, cells in enumerate(landscape.cells):
                self._classify_row(maps, row, cells, current_time)

        if metadata_dir is not None:
            maps.metadata_path = self.write_metadata(metadata_dir, current_time)

        paths = self.parameters.map_paths(current_time)
        logger.info(
            "Fuel classification complete: %d fuel types, map names %s",
            len(maps.fuel_histogram()),
            ", ".join(paths.values()),
        )
        return maps

    def write_metadata(self, directory: str | Path, current_time: int) -> Path:
        """Write the manifest of the maps produced for a timestep."""
        end_time = self.end_time if self.end_time is not None else current_time
        manifest = build_metadata(
            self.parameters, current_time, self.cell_area, self.start_time, end_time
        )
        return write_metadata(directory, manifest)
