"""Per-cell fuel type classification.

The classification runs in three phases:

1. Scoring: every species present adds (or subtracts) the value of its
   dominant cohort to each fuel type that lists it.
2. Selection: the highest positive score wins; conifer and deciduous
   scores give the percent conifer / hardwood dominance, which may in turn
   replace the winner with the best deciduous type.
3. Disturbance override: recent harvests, fires and wind events force
   the fuel type of matching rules, later rules winning.

Everything here is a pure function of its arguments, so cells can be
classified independently and in any order.
"""

from __future__ import annotations

from typing import Sequence

from dynfuels.catalog.disturbances import DisturbanceCatalog
from dynfuels.catalog.fuel_types import FuelType, FuelTypeCatalog
from dynfuels.types import BaseFuel, CellInputs, FuelClassification, SpeciesCohorts

DEFAULT_FUEL_COEFFICIENT = 1.0


def _round_percent(fraction: float) -> int:
    """Round a 0-1 fraction to a whole percent, halves rounding up."""
    return int(fraction * 100.0 + 0.5)


def calculate_cohort_value(
    age: int, ftype: FuelType, longevity: int, coefficient: float
) -> float:
    """Value of one cohort for a fuel type, relative to the age window.

    The window is capped at the species longevity and floored at one year,
    so young cohorts and narrow windows never divide by zero.

    Args:
        age: Cohort age (years), assumed inside the fuel type's age window
        ftype: Fuel type being scored
        longevity: Species longevity (years)
        coefficient: Fuel coefficient of the species

    Returns:
        Cohort value (dimensionless)
    """
    max_age = min(float(ftype.max_age), float(longevity))
    window = max(1.0, max_age - ftype.min_age)
    relative_age = max(1.0, float(age - ftype.min_age))
    return relative_age / window * coefficient


def calculate_species_value(
    species_cohorts: SpeciesCohorts, ftype: FuelType, coefficient: float
) -> float:
    """Value of the single dominant cohort of a species for a fuel type.

    Only the largest cohort value counts; cohorts are not summed.
    """
    value = 0.0
    for age in species_cohorts.ages:
        if ftype.in_age_window(age):
            cohort_value = calculate_cohort_value(
                age, ftype, species_cohorts.species.longevity, coefficient
            )
            value = max(value, cohort_value)
    return value


def score_fuel_types(
    cell: CellInputs,
    fuel_catalog: FuelTypeCatalog,
    fuel_coefficients: Sequence[float],
) -> dict[int, float]:
    """Accumulate the score of every fuel type at a cell.

    Returns:
        {fuel index: score}; fuel types nothing contributed to score 0.0
    """
    scores = {ftype.fuel_index: 0.0 for ftype in fuel_catalog}

    for species_cohorts in cell.cohorts:
        if not species_cohorts.ages:
            continue
        species = species_cohorts.species
        if species.index < len(fuel_coefficients):
            coefficient = fuel_coefficients[species.index]
        else:
            coefficient = DEFAULT_FUEL_COEFFICIENT

        for ftype in fuel_catalog:
            sign = ftype.multiplier(species.index)
            if sign == 0:
                continue
            value = calculate_species_value(species_cohorts, ftype, coefficient)
            if sign == -1:
                scores[ftype.fuel_index] -= value
            if sign == 1:
                scores[ftype.fuel_index] += value

    return scores


def select_fuel_type(
    scores: dict[int, float],
    fuel_catalog: FuelTypeCatalog,
    hardwood_max: int,
) -> FuelClassification:
    """Pick the winning fuel type and derive conifer/hardwood dominance.

    Args:
        scores: Output of score_fuel_types
        fuel_catalog: Fuel types, iterated in definition order for ties
        hardwood_max: Dominance (percent) under which a cell snaps to pure
            conifer or pure hardwood

    Returns:
        FuelClassification without disturbance effects or dead fir
    """
    final_fuel_type = 0
    decid_fuel_type = 0
    max_value = 0.0
    max_decid_value = 0.0
    sum_conifer = 0.0
    sum_decid = 0.0

    for ftype in fuel_catalog:
        score = scores.get(ftype.fuel_index, 0.0)

        if ftype.base_fuel.is_conifer and score > 0:
            sum_conifer += score
        if ftype.base_fuel == BaseFuel.DECIDUOUS and score > 0:
            sum_decid += score

        if score > max_value:
            max_value = score
            final_fuel_type = ftype.fuel_index

        if ftype.base_fuel == BaseFuel.DECIDUOUS and score > max_decid_value:
            max_decid_value = score
            decid_fuel_type = ftype.fuel_index

    winner = fuel_catalog.base_fuel_of(final_fuel_type)
    if winner == BaseFuel.CONIFER_PLANTATION:
        decid_fuel_type = 0
        sum_conifer = 100.0
        sum_decid = 0.0
    elif winner in (BaseFuel.SLASH, BaseFuel.OPEN):
        sum_conifer = 0.0
        sum_decid = 0.0

    percent_conifer = 0
    percent_hardwood = 0
    if sum_conifer > 0 or sum_decid > 0:
        # Rounded independently; on exact halves the two may sum to 101
        total = sum_conifer + sum_decid
        percent_conifer = _round_percent(sum_conifer / total)
        percent_hardwood = _round_percent(sum_decid / total)
        if percent_hardwood < hardwood_max:
            percent_conifer = 100
            percent_hardwood = 0
        elif percent_conifer < hardwood_max:
            percent_conifer = 0
            percent_hardwood = 100
            final_fuel_type = decid_fuel_type

    return FuelClassification(
        fuel_type=final_fuel_type,
        decid_fuel_type=decid_fuel_type,
        percent_conifer=percent_conifer,
        percent_hardwood=percent_hardwood,
    )


def apply_disturbances(
    result: FuelClassification,
    cell: CellInputs,
    disturbance_catalog: DisturbanceCatalog,
) -> FuelClassification:
    """Override the vegetation fuel type with recent disturbance rules.

    Harvest, fire and wind are checked for every rule without stopping at
    the first hit; the last matching check wins.
    """
    for rule in disturbance_catalog:
        triggered = False

        if rule.is_recent(cell.time_since_last_harvest):
            if rule.matches_prescription(cell.harvest_prescription):
                triggered = True

        if cell.fire_severity > 0 and rule.is_recent(cell.time_since_last_fire):
            if rule.matches_fire_severity(cell.fire_severity):
                triggered = True

        if cell.wind_severity > 0 and rule.is_recent(cell.time_since_last_wind):
            if rule.matches_wind_severity(cell.wind_severity):
                triggered = True

        if triggered:
            result = FuelClassification(
                fuel_type=rule.fuel_index,
                percent_dead_fir=result.percent_dead_fir,
            )

    return result


def classify(
    cell: CellInputs,
    fuel_catalog: FuelTypeCatalog,
    disturbance_catalog: DisturbanceCatalog,
    fuel_coefficients: Sequence[float],
    hardwood_max: int,
) -> FuelClassification:
    """Classify the fuel type of a single cell.

    This is the main entry point of the engine. Percent dead fir is left
    at 0; see dynfuels.classify.dead_fir.

    Args:
        cell: Cohort and disturbance snapshot of the cell
        fuel_catalog: Fuel type definitions
        disturbance_catalog: Disturbance rules, in priority order
        fuel_coefficients: Fuel coefficient per species index
        hardwood_max: Hardwood maximum (percent)

    Returns:
        FuelClassification for the cell
    """
    scores = score_fuel_types(cell, fuel_catalog, fuel_coefficients)
    result = select_fuel_type(scores, fuel_catalog, hardwood_max)
    return apply_disturbances(result, cell, disturbance_catalog)
