"""Value types shared by the calculator.

Units: distances in kilometers (``_km``), masses in kilograms (``_kg``),
coordinates in WGS84 decimal degrees. All models are frozen.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class GeoCoordinate(FrozenModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


class CanvasPoint(FrozenModel):
    """A point on the rendering surface, in pixels from the top-left corner."""

    x: float
    y: float


class Airport(FrozenModel):
    code: str = Field(min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")
    coordinate: GeoCoordinate


class FuelModel(FrozenModel):
    """Affine fuel burn: ``base_kg + kg_per_km * distance_km``."""

    base_kg: float = Field(ge=0)
    kg_per_km: float = Field(ge=0)

    def fuel_kg(self, distance_km: float) -> float:
        return self.base_kg + self.kg_per_km * distance_km


class AircraftCategory(FrozenModel):
    name: str = Field(min_length=1)
    seats: int = Field(gt=0)
    max_range_km: float = Field(gt=0)
    fuel: FuelModel
    description: str = ""


class EmissionsResult(FrozenModel):
    fuel_kg: float
    co2_kg: float
    fuel_per_pax_kg: float
    co2_per_pax_kg: float


class RouteAnalysis(FrozenModel):
    """Result of one calculation. ``category`` is None when no aircraft has the range."""

    departure: Airport
    arrival: Airport
    distance_km: float = Field(ge=0)
    category: Optional[AircraftCategory] = None
    emissions: Optional[EmissionsResult] = None

    @property
    def feasible(self) -> bool:
        return self.category is not None
