"""Percent of cohorts at a cell that are dead fir.

Dead fir counts come from an insect outbreak model. When that model is not
running, cells carry no dead fir history and the percentage is always 0.
"""

from __future__ import annotations

from dynfuels.types import CellInputs


def count_dead_fir(cell: CellInputs, current_time: int, dead_fir_max_age: int) -> int:
    """Dead fir cohorts killed since the last fire and within the max age."""
    if cell.dead_fir_cohorts is None:
        return 0

    last_fire = 0
    if cell.time_since_last_fire is not None:
        last_fire = max(0, current_time - cell.time_since_last_fire)

    total = 0
    for year in range(last_fire, current_time + 1):
        if current_time - year <= dead_fir_max_age:
            total += cell.dead_fir_cohorts.get(year, 0)
    return total


def calculate_percent_dead_fir(
    cell: CellInputs, current_time: int, dead_fir_max_age: int
) -> int:
    """Calculate percent dead fir among live and dead cohorts.

    Args:
        cell: Cell snapshot
        current_time: Current simulation year
        dead_fir_max_age: Years a dead fir cohort keeps counting

    Returns:
        Percent dead fir (0-100)
    """
    if cell.dead_fir_cohorts is None:
        return 0

    dead = count_dead_fir(cell, current_time, dead_fir_max_age)
    total = cell.live_cohort_count + dead
    if total == 0:
        return 0

    percent = int(dead / total * 100.0 + 0.5)
    return min(percent, 100)
