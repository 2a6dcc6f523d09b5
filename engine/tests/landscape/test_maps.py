"""Tests for output map encoding and the metadata manifest."""

import json

from dynfuels.landscape.maps import encode_fuel_map, encode_percent_map
from dynfuels.landscape.metadata import build_metadata, write_metadata


class TestMapEncoding:
    """One byte per cell, row-major, 0 for inactive cells."""

    def test_fuel_map_offsets_by_one(self):
        encoded = encode_fuel_map([[0, 3], [99, 7]], [[True, True], [True, False]])
        assert encoded == bytes([1, 4, 100, 0])

    def test_percent_map_raw_values(self):
        encoded = encode_percent_map([[0, 55], [100, 40]], [[True, True], [False, True]])
        assert encoded == bytes([0, 55, 0, 40])

    def test_empty_grid(self):
        assert encode_fuel_map([], []) == b""


class TestMetadata:
    def test_manifest(self, parameters):
        manifest = build_metadata(parameters, current_time=10, cell_area=6.25,
                                  start_time=0, end_time=100)
        assert manifest["name"] == "Dynamic Fuel System"
        assert manifest["time_interval"] == 10
        assert manifest["scenario_replication"] == {
            "raster_out_cell_area": 6.25, "time_min": 0, "time_max": 100,
        }
        names = [o["name"] for o in manifest["outputs"]]
        assert names == ["Fuel_Map", "Percent_Conifer", "Percent_Dead_Fir"]
        assert manifest["outputs"][0]["file_path"] == "fuels/FuelType-10.img"

    def test_write_metadata(self, parameters, tmp_path):
        manifest = build_metadata(parameters, 0, 1.0, 0, 50)
        path = write_metadata(tmp_path / "Metadata", manifest)
        assert path.name == "Dynamic Fuel System.json"
        assert json.loads(path.read_text()) == manifest
