"""Metadata manifest describing the maps written by the fuel system."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dynfuels.params.parameters import InputParameters
from dynfuels.params.parser import EXTENSION_NAME

logger = logging.getLogger(__name__)


def build_metadata(
    parameters: InputParameters,
    current_time: int,
    cell_area: float,
    start_time: int,
    end_time: int,
) -> dict[str, Any]:
    """Build the manifest of map outputs for a scenario.

    Args:
        parameters: Fuel system parameters (map name templates)
        current_time: Year used to resolve the file name templates
        cell_area: Area of one raster cell (ha)
        start_time: First simulation year
        end_time: Last simulation year

    Returns:
        JSON-serialisable manifest
    """
    paths = parameters.map_paths(current_time)

    def _map(name: str, path: str) -> dict[str, Any]:
        return {
            "type": "map",
            "name": name,
            "file_path": path,
            "data_type": "continuous",
            "visualize": True,
        }

    return {
        "name": EXTENSION_NAME,
        "time_interval": parameters.timestep,
        "scenario_replication": {
            "raster_out_cell_area": cell_area,
            "time_min": start_time,
            "time_max": end_time,
        },
        "outputs": [
            _map("Fuel_Map", paths["fuel_type"]),
            _map("Percent_Conifer", paths["percent_conifer"]),
            _map("Percent_Dead_Fir", paths["percent_dead_fir"]),
        ],
    }


def write_metadata(directory: str | Path, manifest: dict[str, Any]) -> Path:
    """Write a manifest as <directory>/<name>.json and return its path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{manifest['name']}.json"
    path.write_text(json.dumps(manifest, indent=2))
    logger.info("Wrote fuel metadata to %s", path)
    return path
