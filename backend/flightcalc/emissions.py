from typing import Iterable, Optional

import numpy as np
import pandas as pd

from flightcalc.aircraft import as_category_table
from flightcalc.geodesy import EARTH_RADIUS_KM
from flightcalc.models import AircraftCategory, EmissionsResult

CO2_PER_KG_FUEL = 3.16  # kg CO2 per kg jet fuel burned


def select_aircraft(distance_km: float, categories: Iterable[AircraftCategory]) -> Optional[AircraftCategory]:
    """
    Smallest aircraft that fits: scan categories in ascending max_range_km order and
    return the first one whose range covers the distance (boundary inclusive).
    None means no category can fly the route direct.
    Plain lists are sorted by range first.
    """
    for category in as_category_table(categories):
        if category.max_range_km >= distance_km:
            return category
    return None


def compute_emissions(category: AircraftCategory, distance_km: float) -> EmissionsResult:
    """
    fuel_kg = base + rate * distance_km  (per-category affine model)
    co2_kg  = fuel_kg * 3.16
    Per-passenger values assume every seat is filled.
    """
    fuel_kg = category.fuel.fuel_kg(distance_km)
    co2_kg = fuel_kg * CO2_PER_KG_FUEL
    return EmissionsResult(
        fuel_kg=fuel_kg,
        co2_kg=co2_kg,
        fuel_per_pax_kg=fuel_kg / category.seats,
        co2_per_pax_kg=co2_kg / category.seats,
    )


def haversine_km_vectorized(lat1, lon1, lat2, lon2):
    p1, p2 = np.radians(lat1), np.radians(lat2)
    dphi = np.radians(np.asarray(lat2) - np.asarray(lat1))
    dlmbda = np.radians(np.asarray(lon2) - np.asarray(lon1))
    h = np.sin(dphi/2)**2 + np.cos(p1) * np.cos(p2) * np.sin(dlmbda/2)**2
    h = np.clip(h, 0.0, 1.0)
    return 2 * EARTH_RADIUS_KM * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def compute_emissions_vectorized(df: pd.DataFrame, categories: Iterable[AircraftCategory]) -> pd.DataFrame:
    """
    Batch version of select_aircraft + compute_emissions.
    Expects dep_lat, dep_lon, arr_lat, arr_lon columns and returns a copy with
      distance_km, category, fuel_kg, co2_kg, fuel_per_pax_kg, co2_per_pax_kg
    Rows with missing coordinates or no covering category keep NaN / None.
    """
    categories = as_category_table(categories)
    if len(categories) == 0:
        raise ValueError("No aircraft categories configured")

    out = df.copy()
    out["distance_km"] = haversine_km_vectorized(
        out["dep_lat"].to_numpy(dtype=float),
        out["dep_lon"].to_numpy(dtype=float),
        out["arr_lat"].to_numpy(dtype=float),
        out["arr_lon"].to_numpy(dtype=float),
    )

    ranges = np.array([c.max_range_km for c in categories], dtype=float)
    # side="left" gives the first index with ranges[i] >= distance, matching select_aircraft
    idx = np.searchsorted(ranges, out["distance_km"].to_numpy(), side="left")
    known = out["distance_km"].notna().to_numpy()
    feasible = known & (idx < len(ranges))
    safe_idx = np.where(feasible, idx, 0)

    names = np.array([c.name for c in categories], dtype=object)
    base = np.array([c.fuel.base_kg for c in categories], dtype=float)
    rate = np.array([c.fuel.kg_per_km for c in categories], dtype=float)
    seats = np.array([c.seats for c in categories], dtype=float)

    dist = out["distance_km"].to_numpy()
    fuel = np.where(feasible, base[safe_idx] + rate[safe_idx] * dist, np.nan)

    out["category"] = np.where(feasible, names[safe_idx], None)
    out["fuel_kg"] = fuel
    out["co2_kg"] = fuel * CO2_PER_KG_FUEL
    out["fuel_per_pax_kg"] = fuel / seats[safe_idx]
    out["co2_per_pax_kg"] = out["co2_kg"] / seats[safe_idx]
    return out


def route_matrix(airports: pd.DataFrame, categories: Iterable[AircraftCategory]) -> pd.DataFrame:
    """
    Every ordered pair of distinct airports with distance, aircraft and emissions.
    `airports` is a code/lat/lon frame as returned by load_airports().
    """
    codes = airports["code"].tolist()
    pairs = pd.DataFrame([(d, a) for d in codes for a in codes if d != a], columns=["dep", "arr"])

    # Join dep/arr to lat/lon
    dep = airports.rename(columns={"code": "dep", "lat": "dep_lat", "lon": "dep_lon"})
    arr = airports.rename(columns={"code": "arr", "lat": "arr_lat", "lon": "arr_lon"})

    df = pairs.merge(dep[["dep", "dep_lat", "dep_lon"]], on="dep", how="left")
    df = df.merge(arr[["arr", "arr_lat", "arr_lon"]], on="arr", how="left")

    return compute_emissions_vectorized(df, categories)
