"""Pydantic schemas for the API."""

from dynfuels_api.schemas.classification import (
    CellParams,
    ClassificationCreate,
    ClassificationResponse,
    ClassificationStatus,
    DisturbanceParams,
    FuelMapsSchema,
    FuelTypeParams,
    SpeciesParams,
)

__all__ = [
    "CellParams",
    "ClassificationCreate",
    "ClassificationResponse",
    "ClassificationStatus",
    "DisturbanceParams",
    "FuelMapsSchema",
    "FuelTypeParams",
    "SpeciesParams",
]
