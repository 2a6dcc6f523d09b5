"""Fuel type and disturbance rule catalogs."""

from dynfuels.catalog.disturbances import DisturbanceCatalog, DisturbanceOverride
from dynfuels.catalog.fuel_types import FuelType, FuelTypeCatalog

__all__ = ["DisturbanceCatalog", "DisturbanceOverride", "FuelType", "FuelTypeCatalog"]
