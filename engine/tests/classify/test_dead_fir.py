"""Tests for the percent dead fir calculation."""

import pytest

from dynfuels.classify.dead_fir import calculate_percent_dead_fir, count_dead_fir
from dynfuels.types import CellInputs


class TestCountDeadFir:
    def test_no_history(self):
        assert count_dead_fir(CellInputs(), current_time=10, dead_fir_max_age=15) == 0

    def test_sums_years_within_max_age(self):
        cell = CellInputs(dead_fir_cohorts={2: 7, 5: 2, 8: 3})
        assert count_dead_fir(cell, current_time=10, dead_fir_max_age=15) == 12
        assert count_dead_fir(cell, current_time=10, dead_fir_max_age=5) == 5

    def test_only_since_last_fire(self):
        cell = CellInputs(time_since_last_fire=3, dead_fir_cohorts={5: 2, 7: 4, 8: 3})
        assert count_dead_fir(cell, current_time=10, dead_fir_max_age=15) == 7

    def test_future_years_ignored(self):
        cell = CellInputs(dead_fir_cohorts={10: 1, 11: 5})
        assert count_dead_fir(cell, current_time=10, dead_fir_max_age=15) == 1


class TestPercentDeadFir:
    def test_absent_model_is_zero(self, cohorts):
        """Without a dead fir history the result is 0 even with live cohorts."""
        cell = CellInputs(cohorts=cohorts(abiebals=(10, 20, 30)))
        assert calculate_percent_dead_fir(cell, 10, 15) == 0

    def test_fraction_of_all_cohorts(self, cohorts):
        cell = CellInputs(
            cohorts=cohorts(abiebals=(10, 20, 30), poputrem=(5, 15)),
            dead_fir_cohorts={5: 2, 8: 3},
        )
        assert calculate_percent_dead_fir(cell, 10, 15) == 50

    def test_rounds_half_up(self, cohorts):
        cell = CellInputs(
            cohorts=cohorts(abiebals=(10, 20, 30), poputrem=(5, 15)),
            time_since_last_fire=3,
            dead_fir_cohorts={5: 2, 8: 3},
        )
        # 3 dead of 8 cohorts = 37.5%
        assert calculate_percent_dead_fir(cell, 10, 15) == 38

    def test_no_cohorts_at_all(self):
        cell = CellInputs(dead_fir_cohorts={})
        assert calculate_percent_dead_fir(cell, 10, 15) == 0

    def test_only_dead_cohorts(self):
        cell = CellInputs(dead_fir_cohorts={9: 4})
        assert calculate_percent_dead_fir(cell, 10, 15) == 100

    @pytest.mark.parametrize("dead", [0, 1, 5, 50, 500])
    def test_in_range(self, cohorts, dead):
        cell = CellInputs(cohorts=cohorts(abiebals=(10,)), dead_fir_cohorts={10: dead})
        assert 0 <= calculate_percent_dead_fir(cell, 10, 15) <= 100
