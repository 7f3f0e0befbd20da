#!/usr/bin/env python3
"""
Render a route on the world map as SVG and print the analysis.
Usage:
    python scripts/render_route.py LHR CDG [out.svg]
"""
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from flightcalc import config
from flightcalc.calculator import FixedSelection, ResultsPanel, RouteCalculator
from flightcalc.rendering import SvgSurface
from flightcalc.report import format_summary

def render(dep: str, arr: str, out_path: str) -> bool:
    surface = SvgSurface(config.CANVAS_WIDTH, config.CANVAS_HEIGHT)
    panel = ResultsPanel()
    calculator = RouteCalculator(FixedSelection(dep, arr), surface, panel, map_image=config.MAP_IMAGE)

    analysis = calculator.calculate()
    if analysis is None:
        print(f"Error: {panel.error_message}")
        return False

    with open(out_path, "w", encoding="utf-8") as f:
        f.write(surface.to_svg())

    for key, value in format_summary(analysis).items():
        print(f"  {key}: {value}")
    print(f"Saved map -> {out_path}")
    return True

if __name__ == "__main__":
    if len(sys.argv) not in (3, 4):
        print("Usage: python scripts/render_route.py DEP ARR [out.svg]")
        sys.exit(1)
    out = sys.argv[3] if len(sys.argv) == 4 else f"route_{sys.argv[1]}_{sys.argv[2]}.svg".lower()
    if not render(sys.argv[1], sys.argv[2], out):
        sys.exit(1)
