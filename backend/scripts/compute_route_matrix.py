#!/usr/bin/env python3
"""
Compute distance, recommended aircraft and emissions for every ordered pair
of airports and save the table as CSV.
Usage:
    python scripts/compute_route_matrix.py [output_name]
"""
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from flightcalc.aircraft import default_categories
from flightcalc.airports import default_airports
from flightcalc.emissions import route_matrix
from flightcalc.storage import save_csv

def compute_matrix(name: str = "route_matrix") -> str:
    airports = default_airports()
    categories = default_categories()
    print(f"Computing routes for {len(airports)} airports, {len(categories)} aircraft categories...")

    df = route_matrix(airports.to_frame(), categories)
    path = save_csv(df, name)

    feasible = df["category"].notna()
    print(f"Computed {len(df):,} routes -> {path}")
    print(f"  Feasible: {int(feasible.sum()):,}  Infeasible: {int((~feasible).sum()):,}")
    if feasible.any():
        print(f"  Total CO2 (kg), one flight per route: {df.loc[feasible, 'co2_kg'].sum():,.0f}")
        print(f"  Aircraft mix: {df.loc[feasible, 'category'].value_counts().to_dict()}")
    return path

if __name__ == "__main__":
    if len(sys.argv) > 2:
        print("Usage: python scripts/compute_route_matrix.py [output_name]")
        sys.exit(1)
    compute_matrix(*sys.argv[1:])
