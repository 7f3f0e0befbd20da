from html import escape
from typing import Any, Dict

from flightcalc.models import RouteAnalysis


def format_summary(analysis: RouteAnalysis) -> Dict[str, Any]:
    """
    Display values for one route: distance and totals rounded to whole numbers,
    per-passenger values to one decimal. Emission fields are None when infeasible.
    """
    summary = {
        "departure": analysis.departure.code,
        "arrival": analysis.arrival.code,
        "distance_km": round(analysis.distance_km),
        "feasible": analysis.feasible,
        "category": None,
        "category_description": None,
        "seats": None,
        "fuel_kg": None,
        "co2_kg": None,
        "fuel_per_pax_kg": None,
        "co2_per_pax_kg": None,
    }
    if analysis.category is not None and analysis.emissions is not None:
        e = analysis.emissions
        summary.update({
            "category": analysis.category.name,
            "category_description": analysis.category.description,
            "seats": analysis.category.seats,
            "fuel_kg": round(e.fuel_kg),
            "co2_kg": round(e.co2_kg),
            "fuel_per_pax_kg": round(e.fuel_per_pax_kg, 1),
            "co2_per_pax_kg": round(e.co2_per_pax_kg, 1),
        })
    return summary


def format_error_html(message: str) -> str:
    return f'<p class="error-message">{escape(message)}</p>'


def format_results_html(analysis: RouteAnalysis) -> str:
    s = format_summary(analysis)
    route = f"{escape(s['departure'])} &rarr; {escape(s['arrival'])}"
    lines = [
        f"<h3>Route: {route}</h3>",
        f"<p><strong>Distance:</strong> {s['distance_km']:,} km</p>",
    ]

    if not s["feasible"]:
        lines.append(
            '<p class="notice">No aircraft category can fly this route direct. '
            "The distance exceeds the range of every available aircraft.</p>"
        )
        return "\n".join(lines)

    lines += [
        f"<p><strong>Recommended aircraft:</strong> {escape(s['category'])} "
        f"({escape(s['category_description'])}, {s['seats']} seats)</p>",
        "<ul>",
        f"<li>Fuel burn: {s['fuel_kg']:,} kg</li>",
        f"<li>CO2 emissions: {s['co2_kg']:,} kg</li>",
        f"<li>Fuel per passenger: {s['fuel_per_pax_kg']:.1f} kg</li>",
        f"<li>CO2 per passenger: {s['co2_per_pax_kg']:.1f} kg</li>",
        "</ul>",
    ]
    return "\n".join(lines)
