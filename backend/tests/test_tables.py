"""Tests for the airport and aircraft tables."""

from __future__ import annotations

import pandas as pd
import pytest

from flightcalc.aircraft import CategoryTable, load_categories
from flightcalc.airports import AirportTable, load_airports
from flightcalc.errors import UnknownAirport


class TestAirports:
    def test_all_airports_loaded(self, airports):
        assert list(airports) == ["ATL", "GRU", "DEN", "JNB", "LAX", "PEK", "DXB", "LHR", "SYD", "CDG"]

    def test_coordinates_exact(self, airports):
        assert airports["LHR"].coordinate.lat == 51.47
        assert airports["LHR"].coordinate.lon == -0.4543
        assert airports["JNB"].coordinate.lon == 28.246
        assert airports["SYD"].coordinate.lat == -33.9399

    def test_lookup_unknown(self, airports):
        with pytest.raises(UnknownAirport, match="XXX"):
            airports.lookup("XXX")

    def test_read_only(self, airports):
        with pytest.raises(TypeError):
            airports["NEW"] = airports["LHR"]

    def test_duplicate_codes_rejected(self, tmp_path):
        path = tmp_path / "airports.csv"
        path.write_text("code,latitude_deg,longitude_deg\nLHR,51.47,-0.4543\nlhr,51.47,-0.4543\n")
        with pytest.raises(ValueError, match="LHR"):
            load_airports(str(path))

    def test_blank_rows_dropped(self, tmp_path):
        path = tmp_path / "airports.csv"
        path.write_text("code,latitude_deg,longitude_deg\n cdg ,49.0097,2.5479\n,1,2\nXYZ,,3\n")
        table = AirportTable.from_frame(load_airports(str(path)))
        assert list(table) == ["CDG"]

    def test_nan_code_kept(self, tmp_path):
        path = tmp_path / "airports.csv"
        path.write_text("code,latitude_deg,longitude_deg\nNAN,-17.7554,177.4434\nnan,,1\n")
        table = AirportTable.from_frame(load_airports(str(path)))
        assert list(table) == ["NAN"]
        assert table.lookup("NAN").coordinate.lon == 177.4434

    def test_to_frame_roundtrip(self, airports):
        df = airports.to_frame()
        assert list(df.columns) == ["code", "lat", "lon"]
        assert len(AirportTable.from_frame(df)) == len(airports)


class TestCategories:
    def test_values(self, categories):
        narrow = categories.by_name("Narrow-body Jet")
        assert narrow.seats == 180
        assert narrow.max_range_km == 6000
        assert narrow.fuel.base_kg == 4500
        assert narrow.fuel.kg_per_km == 8.52
        assert narrow.description == "Standard commercial aircraft"

    def test_max_range(self, categories):
        assert categories.max_range_km == 17000

    def test_unknown_name(self, categories):
        with pytest.raises(KeyError):
            categories.by_name("Concorde")

    def test_file_order_does_not_matter(self, tmp_path, categories):
        shuffled = categories.to_frame().iloc[::-1]
        path = tmp_path / "aircraft.csv"
        shuffled.to_csv(path, index=False)
        table = CategoryTable.from_frame(load_categories(str(path)))
        assert [c.name for c in table] == [c.name for c in categories]

    def test_invalid_seats_rejected(self, tmp_path):
        path = tmp_path / "aircraft.csv"
        pd.DataFrame([{
            "name": "Empty", "seats": 0, "max_range_km": 100,
            "fuel_base_kg": 1, "fuel_kg_per_km": 1, "description": "",
        }]).to_csv(path, index=False)
        with pytest.raises(ValueError):
            load_categories(str(path))

    def test_categories_serializable(self, categories):
        dumped = [c.model_dump() for c in categories]
        assert dumped[0]["fuel"] == {"base_kg": 40.0, "kg_per_km": 0.16}
