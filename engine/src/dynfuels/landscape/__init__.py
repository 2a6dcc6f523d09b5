"""Landscape driver, output map encoding and metadata."""

from dynfuels.landscape.driver import FuelMaps, FuelSystem, Landscape

__all__ = ["FuelMaps", "FuelSystem", "Landscape"]
