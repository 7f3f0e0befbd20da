import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response

from flightcalc import config
from flightcalc.aircraft import default_categories
from flightcalc.airports import default_airports
from flightcalc.calculator import FixedSelection, ResultsPanel, RouteCalculator, analyze_route
from flightcalc.emissions import route_matrix
from flightcalc.errors import RouteInputError, UnknownAirport
from flightcalc.rendering import RecordingSurface, SvgSurface
from flightcalc.report import format_error_html, format_summary

logger = logging.getLogger(__name__)

app = FastAPI(title="Flight Route Calculator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _status_for(err: RouteInputError) -> int:
    return 404 if isinstance(err, UnknownAirport) else 400


def _render(surface, dep: Optional[str], arr: Optional[str]):
    """Runs one calculation; returns the panel and the validation error, if any."""
    panel = ResultsPanel()
    calculator = RouteCalculator(FixedSelection(dep, arr), surface, panel, map_image=config.MAP_IMAGE)
    calculator.calculate()
    return panel, calculator.last_error


@app.get("/")
def root():
    return {"message": "Flight Route Calculator API is running. Try /airports or /route?dep=LHR&arr=CDG"}

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/airports")
def airports():
    return [
        {"code": a.code, "lat": a.coordinate.lat, "lon": a.coordinate.lon}
        for a in default_airports().values()
    ]

@app.get("/aircraft")
def aircraft():
    return [c.model_dump() for c in default_categories()]

@app.get("/route")
def route(dep: Optional[str] = None, arr: Optional[str] = None):
    try:
        analysis = analyze_route(dep, arr)
    except RouteInputError as e:
        raise HTTPException(status_code=_status_for(e), detail=e.user_message)
    return format_summary(analysis)

@app.get("/route/html", response_class=HTMLResponse)
def route_html(dep: Optional[str] = None, arr: Optional[str] = None):
    panel, err = _render(RecordingSurface(config.CANVAS_WIDTH, config.CANVAS_HEIGHT), dep, arr)
    if err is not None:
        return HTMLResponse(format_error_html(panel.error_message), status_code=_status_for(err))
    return HTMLResponse(panel.results_html)

@app.get("/route/map")
def route_map(dep: Optional[str] = None, arr: Optional[str] = None):
    """
    Draw list for a browser canvas. Invalid selections still return the
    background commands, alongside the error message.
    """
    surface = RecordingSurface(config.CANVAS_WIDTH, config.CANVAS_HEIGHT)
    panel, _ = _render(surface, dep, arr)
    return {
        "width": surface.width,
        "height": surface.height,
        "error": panel.error_message or None,
        "commands": surface.commands,
    }

@app.get("/route/map.svg")
def route_map_svg(dep: Optional[str] = None, arr: Optional[str] = None):
    surface = SvgSurface(config.CANVAS_WIDTH, config.CANVAS_HEIGHT)
    panel, err = _render(surface, dep, arr)
    if err is not None:
        raise HTTPException(status_code=_status_for(err), detail=panel.error_message)
    return Response(content=surface.to_svg(), media_type="image/svg+xml")

@app.get("/routes/matrix")
def routes_matrix():
    df = route_matrix(default_airports().to_frame(), default_categories())
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")
