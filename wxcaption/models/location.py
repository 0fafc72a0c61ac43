"""Location models: coordinates, resolved places and NWS point metadata."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            raise ValueError(f"Coordinate must be finite: {self.lat},{self.lon}")

    def rounded(self, places: int = 3) -> str:
        """Fixed-precision "lat,lon" string, used for labels and cache keys."""
        return f"{self.lat:.{places}f},{self.lon:.{places}f}"

    def query(self) -> str:
        """Full-precision "lat,lon" as sent upstream."""
        return f"{self.lat},{self.lon}"


@dataclass(frozen=True)
class ResolvedPlace:
    coordinate: Coordinate
    place: str  # "<city>, <region>" or a rounded coordinate


@dataclass(frozen=True)
class PointInfo:
    forecast_url: str
    office: str | None
