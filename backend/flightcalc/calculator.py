"""Wires a route selection through distance, aircraft selection and rendering."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from flightcalc.aircraft import CategoryTable, as_category_table, default_categories
from flightcalc.airports import AirportTable, default_airports
from flightcalc.emissions import compute_emissions, select_aircraft
from flightcalc.errors import IdenticalAirports, MissingSelection, RouteInputError
from flightcalc.geodesy import haversine_km
from flightcalc.models import AircraftCategory, RouteAnalysis
from flightcalc.rendering import MapSurface, render_background, render_route
from flightcalc.report import format_results_html

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    def get_selected_departure(self) -> Optional[str]: ...

    def get_selected_arrival(self) -> Optional[str]: ...


class ResultsDisplay(Protocol):
    def set_error_message(self, text: str) -> None: ...

    def set_results_html(self, html: str) -> None: ...

    def show_results(self) -> None: ...


def validate_selection(departure: Optional[str], arrival: Optional[str]) -> tuple[str, str]:
    """Normalizes both codes. Checked before any table lookup."""
    dep = (departure or "").strip().upper()
    arr = (arrival or "").strip().upper()
    if not dep or not arr:
        raise MissingSelection()
    if dep == arr:
        raise IdenticalAirports()
    return dep, arr


def analyze_route(
    departure: Optional[str],
    arrival: Optional[str],
    airports: Optional[AirportTable] = None,
    categories: Optional[CategoryTable | Iterable[AircraftCategory]] = None,
) -> RouteAnalysis:
    airports = airports if airports is not None else default_airports()
    categories = as_category_table(categories) if categories is not None else default_categories()

    dep_code, arr_code = validate_selection(departure, arrival)
    dep = airports.lookup(dep_code)
    arr = airports.lookup(arr_code)

    distance_km = haversine_km(dep.coordinate, arr.coordinate)
    category = select_aircraft(distance_km, categories)
    emissions = compute_emissions(category, distance_km) if category is not None else None

    if category is None:
        logger.info("%s-%s: %.0f km, no aircraft with enough range", dep.code, arr.code, distance_km)
    else:
        logger.info("%s-%s: %.0f km, %s", dep.code, arr.code, distance_km, category.name)

    return RouteAnalysis(
        departure=dep,
        arrival=arr,
        distance_km=distance_km,
        category=category,
        emissions=emissions,
    )


class RouteCalculator:
    """
    One calculate() call per user action: reads the selection, analyzes the route,
    redraws the map and updates the results panel. Validation failures are reported
    to the display and never raised; the last one is kept on ``last_error``.
    """

    def __init__(
        self,
        inputs: InputSource,
        surface: MapSurface,
        display: ResultsDisplay,
        airports: Optional[AirportTable] = None,
        categories: Optional[CategoryTable | Iterable[AircraftCategory]] = None,
        map_image: Optional[str] = None,
    ):
        self.inputs = inputs
        self.surface = surface
        self.display = display
        self.airports = airports
        self.categories = as_category_table(categories) if categories is not None else None
        self.map_image = map_image
        self.last_error: Optional[RouteInputError] = None

    def calculate(self) -> Optional[RouteAnalysis]:
        departure = self.inputs.get_selected_departure()
        arrival = self.inputs.get_selected_arrival()
        self.last_error = None

        try:
            analysis = analyze_route(departure, arrival, self.airports, self.categories)
        except RouteInputError as e:
            logger.warning("Rejected route %r -> %r: %s", departure, arrival, e)
            self.last_error = e
            render_background(self.surface, self.map_image)
            self.display.set_results_html("")
            self.display.set_error_message(e.user_message)
            return None

        render_route(self.surface, analysis.departure, analysis.arrival, analysis.distance_km, self.map_image)
        self.display.set_error_message("")
        self.display.set_results_html(format_results_html(analysis))
        self.display.show_results()
        return analysis


class FixedSelection:
    """InputSource for a selection known up front (HTTP query, command line)."""

    def __init__(self, departure: Optional[str], arrival: Optional[str]):
        self.departure = departure
        self.arrival = arrival

    def get_selected_departure(self) -> Optional[str]:
        return self.departure

    def get_selected_arrival(self) -> Optional[str]:
        return self.arrival


class ResultsPanel:
    """ResultsDisplay that keeps the last state in memory."""

    def __init__(self):
        self.error_message = ""
        self.results_html = ""
        self.visible = False

    def set_error_message(self, text: str) -> None:
        self.error_message = text
        if text:
            self.visible = False

    def set_results_html(self, html: str) -> None:
        self.results_html = html

    def show_results(self) -> None:
        self.visible = True
