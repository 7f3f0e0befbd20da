import logging
import os
from collections.abc import Sequence
from functools import lru_cache

import pandas as pd

from flightcalc.models import AircraftCategory, FuelModel

logger = logging.getLogger(__name__)

CATEGORIES_CSV = os.path.join(os.path.dirname(__file__), "data", "aircraft_categories.csv")


def load_categories(path: str = CATEGORIES_CSV) -> pd.DataFrame:
    """
    Loads the aircraft category table:
      name, seats, max_range_km, fuel_base_kg, fuel_kg_per_km, description
    Rows come back sorted by max_range_km (stable, so equal ranges keep file order).
    """
    df = pd.read_csv(path)
    df["name"] = df["name"].astype(str).str.strip()
    df["description"] = df["description"].fillna("").astype(str)

    if df["name"].duplicated().any():
        raise ValueError(f"Duplicate aircraft category names in {path}")
    if (df["seats"] <= 0).any() or (df["max_range_km"] <= 0).any():
        raise ValueError(f"Seats and max_range_km must be positive in {path}")

    return df.sort_values("max_range_km", kind="stable").reset_index(drop=True)


class CategoryTable(Sequence):
    """Immutable aircraft categories, always in ascending max_range_km order."""

    def __init__(self, categories):
        self._items = tuple(sorted(categories, key=lambda c: c.max_range_km))

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "CategoryTable":
        return cls(
            AircraftCategory(
                name=row.name,
                seats=int(row.seats),
                max_range_km=float(row.max_range_km),
                fuel=FuelModel(base_kg=float(row.fuel_base_kg), kg_per_km=float(row.fuel_kg_per_km)),
                description=row.description,
            )
            for row in df.itertuples(index=False)
        )

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    @property
    def max_range_km(self) -> float:
        return self._items[-1].max_range_km if self._items else 0.0

    def by_name(self, name: str) -> AircraftCategory:
        for category in self._items:
            if category.name == name:
                return category
        raise KeyError(name)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([
            {
                "name": c.name,
                "seats": c.seats,
                "max_range_km": c.max_range_km,
                "fuel_base_kg": c.fuel.base_kg,
                "fuel_kg_per_km": c.fuel.kg_per_km,
                "description": c.description,
            }
            for c in self._items
        ])


@lru_cache(maxsize=None)
def default_categories() -> CategoryTable:
    table = CategoryTable.from_frame(load_categories())
    logger.info("Loaded %d aircraft categories from %s", len(table), CATEGORIES_CSV)
    return table


def as_category_table(categories) -> CategoryTable:
    """Any iterable of categories as a CategoryTable, so selection never depends on caller order."""
    if isinstance(categories, CategoryTable):
        return categories
    return CategoryTable(categories)
