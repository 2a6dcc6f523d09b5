"""Tests for the parameter file reader."""

import pytest

from dynfuels.errors import DuplicateIndexError, InputValueError, ParseError
from dynfuels.params.parser import load_parameters, parse_parameters
from dynfuels.types import BaseFuel

VALID = """\
LandisData  "Dynamic Fuel System"

Timestep  10

>> Species   Fuel Coefficient
>> -------   ----------------
   abiebals  1.0
   acersacc  0.5

HardwoodMaximum  15
DeadFirMaxAge    15

FuelTypes
>> Index  BaseFuel    Age Range   Species
   1      Conifer     0 to 400    abiebals piceglau -acersacc
   2      Deciduous   0 to 300    acersacc poputrem
   5      ConiferPlantation  0 to 40  piceglau

DisturbanceConversionTable
>> Index  MaxAge  Prescriptions
   20     20      MaxAgeClearcut  PatchCutting
   31     10      FireSeverity4 FireSeverity5   >> high severity

MapFileNames         fuels/FuelType-{timestep}.img
PctConiferFileName   fuels/PctConifer-{timestep}.img
PctDeadFirFileName   fuels/PctDeadFir-{timestep}.img
"""


def _replace(old, new, text=VALID):
    assert old in text
    return text.replace(old, new)


class TestValidFile:
    """Parse a complete, valid parameter file."""

    def test_scalars(self, species):
        params = parse_parameters(VALID, species)
        assert params.timestep == 10
        assert params.hardwood_max == 15
        assert params.dead_fir_max_age == 15

    def test_coefficients_default_to_one(self, species):
        params = parse_parameters(VALID, species)
        assert params.fuel_coefficients == (1.0, 1.0, 0.5, 1.0)

    def test_fuel_types(self, species):
        params = parse_parameters(VALID, species)
        fuel_types = list(params.fuel_types)
        assert [ft.fuel_index for ft in fuel_types] == [1, 2, 5]
        first = fuel_types[0]
        assert first.base_fuel is BaseFuel.CONIFER
        assert (first.min_age, first.max_age) == (0, 400)
        assert first.multiplier(species["abiebals"].index) == 1
        assert first.multiplier(species["acersacc"].index) == -1
        assert first.multiplier(species["poputrem"].index) == 0
        assert fuel_types[2].base_fuel is BaseFuel.CONIFER_PLANTATION

    def test_disturbance_types(self, species):
        params = parse_parameters(VALID, species)
        rules = list(params.disturbance_types)
        assert [(r.fuel_index, r.max_age) for r in rules] == [(20, 20), (31, 10)]
        assert rules[0].prescriptions == ("MaxAgeClearcut", "PatchCutting")
        assert rules[1].prescriptions == ("FireSeverity4", "FireSeverity5")

    def test_map_names(self, species):
        params = parse_parameters(VALID, species)
        assert params.map_paths(30) == {
            "fuel_type": "fuels/FuelType-30.img",
            "percent_conifer": "fuels/PctConifer-30.img",
            "percent_dead_fir": "fuels/PctDeadFir-30.img",
        }

    def test_empty_disturbance_table(self, species):
        text = _replace(
            "   20     20      MaxAgeClearcut  PatchCutting\n"
            "   31     10      FireSeverity4 FireSeverity5   >> high severity\n",
            "",
        )
        assert len(parse_parameters(text, species).disturbance_types) == 0

    def test_load_from_file(self, species, tmp_path):
        path = tmp_path / "fuels.txt"
        path.write_text(VALID)
        assert load_parameters(path, species).timestep == 10


class TestMalformedFile:
    """Malformed files fail with named, positioned errors."""

    def test_wrong_landis_data(self, species):
        text = _replace('"Dynamic Fuel System"', '"Base Fire"')
        with pytest.raises(InputValueError, match="Dynamic Fuel System"):
            parse_parameters(text, species)

    def test_duplicate_species_row(self, species):
        text = _replace("   acersacc  0.5\n", "   acersacc  0.5\n   abiebals  2.0\n")
        with pytest.raises(DuplicateIndexError) as exc:
            parse_parameters(text, species)
        assert exc.value.index == "abiebals"
        assert exc.value.first_position == 7

    def test_unknown_species(self, species):
        text = _replace("   acersacc  0.5", "   tsugcana  0.5")
        with pytest.raises(InputValueError, match="tsugcana is not a species name"):
            parse_parameters(text, species)

    def test_negative_coefficient(self, species):
        text = _replace("acersacc  0.5", "acersacc  -0.5")
        with pytest.raises(InputValueError, match="Fuel Coefficient"):
            parse_parameters(text, species)

    def test_duplicate_fuel_index(self, species):
        text = _replace("   5      ConiferPlantation", "   1      ConiferPlantation")
        with pytest.raises(DuplicateIndexError, match="fuel type 1 was previously used on line 15"):
            parse_parameters(text, species)

    def test_fuel_index_out_of_range(self, species):
        text = _replace("   5      ConiferPlantation", "   101    ConiferPlantation")
        with pytest.raises(InputValueError) as exc:
            parse_parameters(text, species)
        assert exc.value.line_number == 17

    def test_missing_to(self, species):
        text = _replace("0 to 300", "0 300")
        with pytest.raises(ParseError, match='Expected "to" after the minimum age'):
            parse_parameters(text, species)

    def test_bad_base_fuel(self, species):
        text = _replace("Deciduous   0 to 300", "Mixedwood   0 to 300")
        with pytest.raises(InputValueError, match="Valid Fuel Types"):
            parse_parameters(text, species)

    def test_fuel_type_without_species(self, species):
        text = _replace("0 to 40  piceglau", "0 to 40")
        with pytest.raises(ParseError, match="At least one species is required"):
            parse_parameters(text, species)

    def test_species_repeated_in_fuel_type(self, species):
        text = _replace("acersacc poputrem", "acersacc -acersacc")
        with pytest.raises(ParseError, match="appears more than once"):
            parse_parameters(text, species)

    def test_bare_minus(self, species):
        text = _replace("acersacc poputrem", "acersacc -")
        with pytest.raises(InputValueError, match='No species name after "-"'):
            parse_parameters(text, species)

    def test_rule_without_prescriptions(self, species):
        text = _replace("   20     20      MaxAgeClearcut  PatchCutting", "   20     20")
        with pytest.raises(ParseError, match="At least one prescription is required"):
            parse_parameters(text, species)

    def test_rule_max_age_zero(self, species):
        text = _replace("   31     10", "   31     0")
        with pytest.raises(InputValueError, match="Max Age"):
            parse_parameters(text, species)

    def test_hardwood_max_out_of_range(self, species):
        text = _replace("HardwoodMaximum  15", "HardwoodMaximum  150")
        with pytest.raises(InputValueError, match="HardwoodMaximum"):
            parse_parameters(text, species)

    def test_bad_template_variable(self, species):
        text = _replace("PctConifer-{timestep}", "PctConifer-{year}")
        with pytest.raises(InputValueError, match="PctConiferFileName"):
            parse_parameters(text, species)

    def test_missing_section(self, species):
        text = _replace("FuelTypes\n", "")
        with pytest.raises(ParseError, match='Expected "FuelTypes"'):
            parse_parameters(text, species)

    def test_truncated_file(self, species):
        text = VALID.split("MapFileNames")[0]
        with pytest.raises(ParseError, match="end of input"):
            parse_parameters(text, species)

    def test_data_after_last_parameter(self, species):
        with pytest.raises(ParseError, match="Unexpected data"):
            parse_parameters(VALID + "Timestep 5\n", species)

    def test_non_integer_timestep(self, species):
        text = _replace("Timestep  10", "Timestep  ten")
        with pytest.raises(InputValueError, match="integer"):
            parse_parameters(text, species)
