"""Shared test fixtures for dynfuels engine tests."""

import pytest

from dynfuels.catalog.disturbances import DisturbanceCatalog, DisturbanceOverride
from dynfuels.catalog.fuel_types import FuelType, FuelTypeCatalog
from dynfuels.params.parameters import InputParameters
from dynfuels.types import BaseFuel, CellInputs, SpeciesCohorts, SpeciesDataset


@pytest.fixture
def species():
    """Four species of a northern hardwood / boreal landscape.

    Indices: abiebals=0, piceglau=1, acersacc=2, poputrem=3
    """
    return SpeciesDataset.from_longevities(
        {"abiebals": 200, "piceglau": 300, "acersacc": 300, "poputrem": 150}
    )


@pytest.fixture
def cohorts(species):
    """Factory: cohorts(abiebals=(50, 80), ...) -> tuple of SpeciesCohorts."""

    def _make(**ages):
        return tuple(
            SpeciesCohorts(species=species[name], ages=tuple(values))
            for name, values in ages.items()
        )

    return _make


@pytest.fixture
def fuel_catalog():
    """Conifer, deciduous, plantation and slash fuel types.

    1: Conifer 0-100 (abiebals, piceglau)
    2: Deciduous 0-100 (poputrem)
    3: Deciduous 0-100 (acersacc)
    5: ConiferPlantation 0-30 (piceglau)
    """
    return FuelTypeCatalog([
        FuelType(1, BaseFuel.CONIFER, 0, 100, {0: 1, 1: 1}),
        FuelType(2, BaseFuel.DECIDUOUS, 0, 100, {3: 1}),
        FuelType(3, BaseFuel.DECIDUOUS, 0, 100, {2: 1}),
        FuelType(5, BaseFuel.CONIFER_PLANTATION, 0, 30, {1: 1}),
    ])


@pytest.fixture
def disturbance_catalog():
    """Clearcut slash, then high severity fire, then wind throw."""
    return DisturbanceCatalog([
        DisturbanceOverride(20, 10, ("MaxAgeClearcut",)),
        DisturbanceOverride(31, 10, ("FireSeverity4", "FireSeverity5")),
        DisturbanceOverride(40, 5, ("WindSeverity3",)),
    ])


@pytest.fixture
def coefficients():
    return (1.0, 1.0, 1.0, 1.0)


@pytest.fixture
def parameters(fuel_catalog, disturbance_catalog, coefficients):
    return InputParameters(
        timestep=10,
        fuel_coefficients=coefficients,
        hardwood_max=15,
        dead_fir_max_age=15,
        fuel_types=fuel_catalog,
        disturbance_types=disturbance_catalog,
    )


@pytest.fixture
def empty_cell():
    return CellInputs()
