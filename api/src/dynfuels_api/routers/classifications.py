"""Classification REST endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from dynfuels.errors import ParameterError
from dynfuels.landscape.driver import FuelMaps

from dynfuels_api.schemas.classification import (
    ClassificationCreate,
    ClassificationResponse,
    ClassificationStatus,
    FuelMapsSchema,
)
from dynfuels_api.services.runner import ClassificationRun, ClassificationRunner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/classifications", tags=["classifications"])

# Shared state, injected from main app
runner: ClassificationRunner | None = None


def _maps_to_schema(run: ClassificationRun, maps: FuelMaps) -> FuelMapsSchema:
    """Convert engine FuelMaps to API schema."""
    return FuelMapsSchema(
        current_time=maps.current_time,
        fuel_type=maps.fuel_type,
        decid_fuel_type=maps.decid_fuel_type,
        percent_conifer=maps.percent_conifer,
        percent_hardwood=maps.percent_hardwood,
        percent_dead_fir=maps.percent_dead_fir,
        fuel_histogram=maps.fuel_histogram(),
        map_paths=run.parameters.map_paths(maps.current_time),
    )


@router.post("", response_model=ClassificationResponse)
async def create_classification(params: ClassificationCreate) -> ClassificationResponse:
    """Start classifying the fuels of a landscape snapshot."""
    if runner is None:
        raise HTTPException(status_code=500, detail="Runner not initialized")

    try:
        run_id = runner.create(params)
    except ParameterError as e:
        logger.warning("Rejected classification request: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return ClassificationResponse(
        classification_id=run_id,
        status=ClassificationStatus.RUNNING,
    )


@router.get("/{run_id}", response_model=ClassificationResponse)
async def get_classification(run_id: str) -> ClassificationResponse:
    """Get classification status and results."""
    if runner is None:
        raise HTTPException(status_code=500, detail="Runner not initialized")

    run = runner.get(run_id)
    if run is None:
        raise HTTPException(status_code=404, detail="Classification not found")

    maps = _maps_to_schema(run, run.maps) if run.maps is not None else None
    metadata_path = None
    if run.maps is not None and run.maps.metadata_path is not None:
        metadata_path = str(run.maps.metadata_path)

    return ClassificationResponse(
        classification_id=run.id,
        status=run.status,
        maps=maps,
        metadata_path=metadata_path,
        error=run.error,
    )
