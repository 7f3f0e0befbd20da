"""Route overlay drawing.

The calculator draws through the small ``MapSurface`` protocol so the same
drawing code feeds a browser canvas (``RecordingSurface`` produces the draw
list as JSON) or a standalone image (``SvgSurface``).
"""

from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Optional, Protocol

from flightcalc.geodesy import midpoint, project
from flightcalc.models import Airport, CanvasPoint

BACKGROUND_COLOR = "#e8f4f8"
ROUTE_COLOR = "blue"
ROUTE_WIDTH = 2
DEPARTURE_COLOR = "green"
ARRIVAL_COLOR = "red"
DOT_RADIUS = 5
LABEL_FONT = "14px Arial"
LABEL_OFFSET = (8, -8)
DISTANCE_BOX_COLOR = "yellow"
DISTANCE_TEXT_COLOR = "black"
DISTANCE_BOX_PADDING = 5
DISTANCE_BOX_HEIGHT = 20

# Average glyph width relative to the font size, for surfaces that can't measure text
AVG_GLYPH_WIDTH = 0.6


def font_size_px(font: str) -> float:
    size = font.split()[0]
    return float(size[:-2]) if size.endswith("px") else 14.0


def approx_text_width(text: str, font: str = LABEL_FONT) -> float:
    return len(text) * font_size_px(font) * AVG_GLYPH_WIDTH


class MapSurface(Protocol):
    width: float
    height: float

    def draw_image(self, href: str, x: float, y: float, w: float, h: float) -> None: ...

    def draw_line(self, p1: CanvasPoint, p2: CanvasPoint, color: str, line_width: float) -> None: ...

    def draw_dot(self, p: CanvasPoint, radius: float, color: str) -> None: ...

    def draw_text(self, p: CanvasPoint, text: str, color: str, font: str) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None: ...

    def clear_area(self, x: float, y: float, w: float, h: float) -> None: ...

    def measure_text(self, text: str, font: str) -> float: ...


def render_background(surface: MapSurface, map_image: Optional[str] = None) -> None:
    surface.clear_area(0, 0, surface.width, surface.height)
    surface.fill_rect(0, 0, surface.width, surface.height, BACKGROUND_COLOR)
    if map_image:
        surface.draw_image(map_image, 0, 0, surface.width, surface.height)


def draw_label(surface: MapSurface, p: CanvasPoint, label: str, color: str) -> None:
    dx, dy = LABEL_OFFSET
    surface.draw_text(CanvasPoint(x=p.x + dx, y=p.y + dy), label, color, LABEL_FONT)


def draw_distance_label(surface: MapSurface, p1: CanvasPoint, p2: CanvasPoint, distance_km: int) -> None:
    """Yellow box with "<distance> km" centered on the route midpoint."""
    mid = midpoint(p1, p2)
    text = f"{distance_km} km"
    text_width = surface.measure_text(text, LABEL_FONT)

    surface.fill_rect(
        mid.x - text_width / 2 - DISTANCE_BOX_PADDING,
        mid.y - DISTANCE_BOX_HEIGHT / 2,
        text_width + 2 * DISTANCE_BOX_PADDING,
        DISTANCE_BOX_HEIGHT,
        DISTANCE_BOX_COLOR,
    )
    surface.draw_text(CanvasPoint(x=mid.x - text_width / 2, y=mid.y + 5), text, DISTANCE_TEXT_COLOR, LABEL_FONT)


def render_route(
    surface: MapSurface,
    departure: Airport,
    arrival: Airport,
    distance_km: float,
    map_image: Optional[str] = None,
) -> None:
    render_background(surface, map_image)

    dep = project(departure.coordinate, surface.width, surface.height)
    arr = project(arrival.coordinate, surface.width, surface.height)

    surface.draw_line(dep, arr, ROUTE_COLOR, ROUTE_WIDTH)
    surface.draw_dot(dep, DOT_RADIUS, DEPARTURE_COLOR)
    draw_label(surface, dep, departure.code, DEPARTURE_COLOR)
    surface.draw_dot(arr, DOT_RADIUS, ARRIVAL_COLOR)
    draw_label(surface, arr, arrival.code, ARRIVAL_COLOR)

    draw_distance_label(surface, dep, arr, round(distance_km))


class RecordingSurface:
    """Records draw calls as JSON-ready dicts for a client-side canvas."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.commands: List[Dict[str, Any]] = []

    def _record(self, op: str, **args) -> None:
        self.commands.append({"op": op, **args})

    def draw_image(self, href, x, y, w, h):
        self._record("drawImage", href=href, x=x, y=y, w=w, h=h)

    def draw_line(self, p1, p2, color, line_width):
        self._record("drawLine", x1=p1.x, y1=p1.y, x2=p2.x, y2=p2.y, color=color, lineWidth=line_width)

    def draw_dot(self, p, radius, color):
        self._record("drawDot", x=p.x, y=p.y, radius=radius, color=color)

    def draw_text(self, p, text, color, font):
        self._record("drawText", x=p.x, y=p.y, text=text, color=color, font=font)

    def fill_rect(self, x, y, w, h, color):
        self._record("fillRect", x=x, y=y, w=w, h=h, color=color)

    def clear_area(self, x, y, w, h):
        if x <= 0 and y <= 0 and w >= self.width and h >= self.height:
            self.commands.clear()
        self._record("clearRect", x=x, y=y, w=w, h=h)

    def measure_text(self, text, font):
        return approx_text_width(text, font)


class SvgSurface:
    """Builds a standalone SVG document."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.elements: List[str] = []

    def draw_image(self, href, x, y, w, h):
        self.elements.append(
            f'<image href="{escape(href)}" x="{x}" y="{y}" width="{w}" height="{h}" preserveAspectRatio="none"/>'
        )

    def draw_line(self, p1, p2, color, line_width):
        self.elements.append(
            f'<line x1="{p1.x}" y1="{p1.y}" x2="{p2.x}" y2="{p2.y}" stroke="{escape(color)}" stroke-width="{line_width}"/>'
        )

    def draw_dot(self, p, radius, color):
        self.elements.append(f'<circle cx="{p.x}" cy="{p.y}" r="{radius}" fill="{escape(color)}"/>')

    def draw_text(self, p, text, color, font):
        size = font_size_px(font)
        family = " ".join(font.split()[1:]) or "Arial"
        self.elements.append(
            f'<text x="{p.x}" y="{p.y}" fill="{escape(color)}" font-size="{size}" '
            f'font-family="{escape(family)}">{escape(text)}</text>'
        )

    def fill_rect(self, x, y, w, h, color):
        self.elements.append(f'<rect x="{x}" y="{y}" width="{w}" height="{h}" fill="{escape(color)}"/>')

    def clear_area(self, x, y, w, h):
        if x <= 0 and y <= 0 and w >= self.width and h >= self.height:
            self.elements.clear()
        else:
            self.elements.append(f'<rect x="{x}" y="{y}" width="{w}" height="{h}" fill="white"/>')

    def measure_text(self, text, font):
        return approx_text_width(text, font)

    def to_svg(self) -> str:
        body = "\n  ".join(self.elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}">\n  {body}\n</svg>\n'
        )
