"""Tests for route validation and the calculate() cycle."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from flightcalc.calculator import FixedSelection, ResultsPanel, RouteCalculator, analyze_route, validate_selection
from flightcalc.errors import IdenticalAirports, MissingSelection, UnknownAirport
from flightcalc.rendering import RecordingSurface


class TestValidateSelection:
    @pytest.mark.parametrize("dep, arr", [("", "CDG"), ("LHR", ""), (None, "CDG"), ("LHR", None), ("", ""), ("  ", "CDG")])
    def test_missing(self, dep, arr):
        with pytest.raises(MissingSelection):
            validate_selection(dep, arr)

    def test_identical(self):
        with pytest.raises(IdenticalAirports):
            validate_selection("ATL", "ATL")

    def test_identical_after_normalizing(self):
        with pytest.raises(IdenticalAirports):
            validate_selection("atl ", "ATL")

    def test_normalizes(self):
        assert validate_selection(" lhr", "cdg") == ("LHR", "CDG")


class TestAnalyzeRoute:
    def test_lax_syd(self):
        analysis = analyze_route("LAX", "SYD")
        assert analysis.distance_km == pytest.approx(12074, abs=20)
        assert analysis.category.name == "Wide-body Jet"
        assert analysis.emissions.fuel_kg == pytest.approx(6000 + 9.0 * analysis.distance_km)
        assert analysis.emissions.co2_kg == pytest.approx(analysis.emissions.fuel_kg * 3.16)
        assert analysis.emissions.fuel_kg == pytest.approx(114666, rel=0.002)

    def test_lhr_cdg_piston(self):
        analysis = analyze_route("LHR", "CDG")
        assert analysis.category.name == "Piston"
        assert analysis.feasible

    def test_symmetric(self):
        assert analyze_route("ATL", "JNB").distance_km == pytest.approx(analyze_route("JNB", "ATL").distance_km)

    def test_missing_checked_before_lookup(self):
        airports = MagicMock()
        with pytest.raises(MissingSelection):
            analyze_route("ZZZ", "", airports=airports)
        airports.lookup.assert_not_called()

    def test_identical_skips_distance(self, monkeypatch):
        haversine = MagicMock()
        monkeypatch.setattr("flightcalc.calculator.haversine_km", haversine)
        with pytest.raises(IdenticalAirports):
            analyze_route("ATL", "ATL")
        haversine.assert_not_called()

    def test_unknown_code(self):
        with pytest.raises(UnknownAirport):
            analyze_route("LHR", "XXX")

    def test_infeasible_route(self, categories):
        short_haul = list(categories)[:2]
        analysis = analyze_route("LAX", "SYD", categories=short_haul)
        assert not analysis.feasible
        assert analysis.category is None
        assert analysis.emissions is None
        assert analysis.distance_km > 0


class TestRouteCalculator:
    def _calculator(self, dep, arr, **kwargs):
        surface = RecordingSurface(1280, 640)
        panel = ResultsPanel()
        return RouteCalculator(FixedSelection(dep, arr), surface, panel, **kwargs), surface, panel

    def test_success(self):
        calc, surface, panel = self._calculator("LHR", "CDG", map_image="map.jpg")
        analysis = calc.calculate()
        assert analysis is not None
        assert panel.visible
        assert panel.error_message == ""
        assert "Piston" in panel.results_html
        ops = [c["op"] for c in surface.commands]
        assert ops[:3] == ["clearRect", "fillRect", "drawImage"]
        assert "drawLine" in ops

    def test_identical_reports_message(self):
        calc, surface, panel = self._calculator("ATL", "ATL")
        assert calc.calculate() is None
        assert panel.error_message == IdenticalAirports.message
        assert panel.results_html == ""
        assert not panel.visible
        assert "drawLine" not in [c["op"] for c in surface.commands]

    def test_missing_reports_message(self):
        calc, _, panel = self._calculator("LHR", "")
        assert calc.calculate() is None
        assert panel.error_message == MissingSelection.message

    def test_error_clears_previous_result(self):
        surface = RecordingSurface(1280, 640)
        panel = ResultsPanel()
        selection = FixedSelection("LHR", "CDG")
        calc = RouteCalculator(selection, surface, panel)
        calc.calculate()
        assert panel.results_html

        selection.arrival = "LHR"
        calc.calculate()
        assert panel.results_html == ""
        assert panel.error_message == IdenticalAirports.message
        assert "drawDot" not in [c["op"] for c in surface.commands]

    def test_result_clears_previous_error(self):
        selection = FixedSelection("LHR", None)
        panel = ResultsPanel()
        calc = RouteCalculator(selection, RecordingSurface(1280, 640), panel)
        calc.calculate()
        assert panel.error_message

        selection.arrival = "DXB"
        calc.calculate()
        assert panel.error_message == ""
        assert panel.visible

    def test_infeasible_is_notice_not_error(self, categories):
        calc, _, panel = self._calculator("LAX", "SYD", categories=list(categories)[:3])
        analysis = calc.calculate()
        assert analysis is not None and not analysis.feasible
        assert panel.error_message == ""
        assert "notice" in panel.results_html
        assert panel.visible

    def test_last_error_kept(self):
        selection = FixedSelection("LHR", "XXX")
        calc = RouteCalculator(selection, RecordingSurface(1280, 640), ResultsPanel())
        calc.calculate()
        assert isinstance(calc.last_error, UnknownAirport)

        selection.arrival = "CDG"
        calc.calculate()
        assert calc.last_error is None

    def test_reversed_categories(self, categories):
        calc, _, panel = self._calculator("LHR", "CDG", categories=list(categories)[::-1])
        assert calc.calculate().category.name == "Piston"
        assert "Piston" in panel.results_html


class TestCategoryOrder:
    def test_analyze_with_reversed_list(self, categories):
        analysis = analyze_route("LHR", "CDG", categories=list(categories)[::-1])
        assert analysis.category.name == "Piston"

    def test_analyze_with_shuffled_list(self, categories):
        shuffled = [categories[i] for i in (4, 1, 3, 0, 2)]
        assert analyze_route("LHR", "DXB", categories=shuffled).category.name == "Narrow-body Jet"
        assert analyze_route("LAX", "SYD", categories=shuffled).category.name == "Wide-body Jet"
