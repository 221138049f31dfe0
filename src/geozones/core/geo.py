from __future__ import annotations
from dataclasses import dataclass
from math import atan2, cos, isfinite, radians, sin, sqrt
from typing import Any

"""
Geospatial helpers.

We keep a tiny geometry layer here so clustering code can do distance calculations
without pulling in heavier GIS dependencies. Every distance in this package is in miles.
"""

EARTH_RADIUS_MILES = 3959.0


@dataclass(frozen=True)
class GeoPoint:
    """A record's coordinate in decimal degrees, tagged with the record's input position."""

    index: int
    lat: float
    lng: float


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Compute great-circle distance in miles between two coordinates."""
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dlat = radians(lat2 - lat1)
    dlng = radians(lng2 - lng1)

    a = sin(dlat / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_MILES * atan2(sqrt(a), sqrt(1 - a))


def haversine_miles_points(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_miles(a.lat, a.lng, b.lat, b.lng)


def coerce_coordinate(lat: Any, lng: Any) -> tuple[float, float] | None:
    """Return a validated `(lat, lng)` pair, or None when the pair is unusable.

    Partial pairs, non-numeric values, NaN/infinity and out-of-range degrees all count
    as "no coordinate": malformed geocoder output is expected, not exceptional.
    """
    if lat is None or lng is None or isinstance(lat, bool) or isinstance(lng, bool):
        return None
    try:
        lat_f = float(lat)
        lng_f = float(lng)
    except (TypeError, ValueError):
        return None
    if not (isfinite(lat_f) and isfinite(lng_f)):
        return None
    if not (-90.0 <= lat_f <= 90.0 and -180.0 <= lng_f <= 180.0):
        return None
    return lat_f, lng_f


def is_valid_coordinate(lat: Any, lng: Any) -> bool:
    return coerce_coordinate(lat, lng) is not None
