# backend/binsurvey/services/streets/proximity.py
"""
Street candidates for a surveyor's position.

There is no street geometry: every street name is mapped to a synthetic
coordinate near the municipality center, and "nearby" means close to that
pseudo-coordinate.
"""
from __future__ import annotations

import logging
from math import radians, sin, cos, atan2, sqrt
from typing import Literal, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

NEARBY_RADIUS_KM = 2.0
NEARBY_LIMIT = 15
SEARCH_LIMIT = 20
ALL_LIMIT = 50

Mode = Literal["nearby", "search", "all"]


class Location(NamedTuple):
    latitude: float
    longitude: float


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    dlat, dlon = radians(lat2 - lat1), radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * atan2(sqrt(a), sqrt(1 - a))


def street_coordinates(street: str, center: Location) -> Location:
    # 文字コードの総和から ±0.05° のオフセットを決める（実行間で不変）
    h = sum(ord(ch) for ch in street)
    lat_offset = ((h % 100) - 50) * 0.001
    lon_offset = (((h * 7) % 100) - 50) * 0.001
    return Location(center.latitude + lat_offset, center.longitude + lon_offset)


def nearby_with_distance(
    location: Optional[Location],
    streets: Sequence[str],
    center: Location,
    radius_km: float = NEARBY_RADIUS_KM,
    limit: int = NEARBY_LIMIT,
) -> list[tuple[str, float]]:
    if location is None:
        logger.debug("No GPS fix, nearby mode disabled")
        return []
    scored = []
    for street in streets:
        pt = street_coordinates(street, center)
        d = haversine_km(location.latitude, location.longitude, pt.latitude, pt.longitude)
        if d <= radius_km:
            scored.append((street, d))
    scored.sort(key=lambda item: item[1])
    return scored[:limit]


def nearby_streets(
    location: Optional[Location],
    streets: Sequence[str],
    center: Location,
    radius_km: float = NEARBY_RADIUS_KM,
    limit: int = NEARBY_LIMIT,
) -> list[str]:
    return [s for s, _ in nearby_with_distance(location, streets, center, radius_km, limit)]


def search_streets(streets: Sequence[str], query: str = "", limit: int = SEARCH_LIMIT) -> list[str]:
    if not query or not query.strip():
        return list(streets[:limit])
    needle = query.lower()
    return [s for s in streets if needle in s.lower()][:limit]


def all_streets(streets: Sequence[str], limit: int = ALL_LIMIT) -> list[str]:
    return list(streets[:limit])


class StreetSelector:
    """Selection state behind the street picker: mode, search text, GPS fix, chosen street."""

    def __init__(self, streets: Sequence[str], center: Location, location: Optional[Location] = None):
        self.streets = tuple(streets)
        self.center = center
        self.location = location
        self.mode: Mode = "nearby"
        self.search_term = ""
        self.selected: Optional[str] = None

    @property
    def nearby_available(self) -> bool:
        return self.location is not None

    def set_location(self, location: Optional[Location]) -> None:
        self.location = location

    def set_mode(self, mode: Mode) -> None:
        if mode not in ("nearby", "search", "all"):
            raise ValueError(f"unknown street selection mode: {mode!r}")
        self.mode = mode
        self.search_term = ""

    def search(self, term: str) -> list[str]:
        self.search_term = term
        return self.options()

    def select(self, street: str) -> None:
        self.selected = street

    def options(self) -> list[str]:
        if self.mode == "search":
            return search_streets(self.streets, self.search_term)
        if self.mode == "nearby":
            return nearby_streets(self.location, self.streets, self.center)
        return all_streets(self.streets)
