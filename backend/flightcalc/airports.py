import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator

import pandas as pd

from flightcalc.errors import UnknownAirport
from flightcalc.models import Airport, GeoCoordinate

logger = logging.getLogger(__name__)

AIRPORTS_CSV = os.path.join(os.path.dirname(__file__), "data", "airports.csv")


def load_airports(path: str = AIRPORTS_CSV) -> pd.DataFrame:
    """
    Loads the airport table and returns a frame:
      code -> lat/lon
    Codes are stripped and upper-cased; rows missing a code or coordinate are dropped.
    """
    # "NAN" is a real IATA code (Nadi), so only empty cells count as missing
    df = pd.read_csv(path, dtype={"code": str}, keep_default_na=False, na_values=[""])

    out = pd.DataFrame({
        "code": df["code"].fillna("").astype(str).str.strip().str.upper(),
        "lat": df["latitude_deg"],
        "lon": df["longitude_deg"],
    })

    out = out.replace({"code": {"": None}}).dropna(subset=["code", "lat", "lon"])
    if out["code"].duplicated().any():
        dupes = sorted(out.loc[out["code"].duplicated(), "code"].unique())
        raise ValueError(f"Duplicate airport codes in {path}: {', '.join(dupes)}")

    return out.reset_index(drop=True)


class AirportTable(Mapping):
    """Read-only code -> Airport mapping. Iteration follows the file order."""

    def __init__(self, airports):
        self._by_code = MappingProxyType({a.code: a for a in airports})

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "AirportTable":
        return cls(
            Airport(code=row.code, coordinate=GeoCoordinate(lat=row.lat, lon=row.lon))
            for row in df.itertuples(index=False)
        )

    def __getitem__(self, code: str) -> Airport:
        return self._by_code[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_code)

    def __len__(self) -> int:
        return len(self._by_code)

    def lookup(self, code: str) -> Airport:
        try:
            return self._by_code[code]
        except KeyError:
            raise UnknownAirport(code) from None

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"code": a.code, "lat": a.coordinate.lat, "lon": a.coordinate.lon} for a in self.values()]
        )


@lru_cache(maxsize=None)
def default_airports() -> AirportTable:
    table = AirportTable.from_frame(load_airports())
    logger.info("Loaded %d airports from %s", len(table), AIRPORTS_CSV)
    return table
