"""
Neighbor finders for radius queries over GeoPoints.

Clustering only ever asks one question: "which other points lie within the radius of
this point?". Two interchangeable answers live here:
- `LinearNeighborFinder`: scans every point (O(N) per query, O(N^2) per clustering run).
- `SpatialGridIndex`: buckets points into lat/lng cells sized from the radius, so a query
  only touches nearby cells. Used when batches grow to many thousands of points.

Both return exactly the same neighbors, in input order, so swapping them changes cost only.
"""

from __future__ import annotations

import math
from typing import Literal, Protocol, Sequence

from geozones.core.geo import EARTH_RADIUS_MILES, GeoPoint, haversine_miles

NeighborIndexName = Literal["linear", "grid"]


class NeighborFinder(Protocol):
    def neighbors(self, point: GeoPoint) -> list[GeoPoint]: ...


def validate_radius(radius_miles: float) -> float:
    r = float(radius_miles)
    if not math.isfinite(r) or r <= 0:
        raise ValueError(f"radius_miles must be a finite number > 0 (got {radius_miles!r})")
    return r


class LinearNeighborFinder:
    def __init__(self, points: Sequence[GeoPoint], *, radius_miles: float):
        self._points = list(points)
        self._radius = validate_radius(radius_miles)

    def neighbors(self, point: GeoPoint) -> list[GeoPoint]:
        return [
            other
            for other in self._points
            if other.index != point.index
            and haversine_miles(point.lat, point.lng, other.lat, other.lng) <= self._radius
        ]


class SpatialGridIndex:
    """Grid bucket index keyed by (row, col) cells of equal angular size.

    The cell size equals the radius expressed as an arc angle, so any neighbor is at most
    one row away. The column window widens with latitude (meridians converge) and wraps
    around the antimeridian; near the poles it degrades to scanning whole rows.
    """

    def __init__(self, points: Sequence[GeoPoint], *, radius_miles: float):
        self._radius = validate_radius(radius_miles)
        self._angle_rad = self._radius / EARTH_RADIUS_MILES
        self._cell_deg = min(360.0, math.degrees(self._angle_rad))
        self._n_cols = max(1, int(math.ceil(360.0 / self._cell_deg)))
        self._rows: dict[int, dict[int, list[GeoPoint]]] = {}

        for p in points:
            row, col = self._cell_key(p.lat, p.lng)
            self._rows.setdefault(row, {}).setdefault(col, []).append(p)

    def _cell_key(self, lat: float, lng: float) -> tuple[int, int]:
        row = int(math.floor((lat + 90.0) / self._cell_deg))
        col = int(math.floor((lng + 180.0) / self._cell_deg)) % self._n_cols
        return row, col

    def _lng_window_deg(self, lat: float) -> float | None:
        """Largest longitude difference a neighbor can have, or None for "any"."""
        far_lat = min(90.0, abs(lat) + math.degrees(self._angle_rad))
        cos_prod = math.cos(math.radians(lat)) * math.cos(math.radians(far_lat))
        if cos_prod <= 0:
            return None
        ratio = math.sin(self._angle_rad / 2) ** 2 / cos_prod
        if ratio >= 1:
            return None
        return math.degrees(2 * math.asin(math.sqrt(ratio)))

    def _candidate_cols(self, lng: float, window_deg: float | None) -> list[int] | None:
        if window_deg is None:
            return None
        lo = int(math.floor((lng + 180.0 - window_deg) / self._cell_deg)) - 1
        hi = int(math.floor((lng + 180.0 + window_deg) / self._cell_deg)) + 1
        if hi - lo + 1 >= self._n_cols:
            return None
        return sorted({c % self._n_cols for c in range(lo, hi + 1)})

    def neighbors(self, point: GeoPoint) -> list[GeoPoint]:
        row, _ = self._cell_key(point.lat, point.lng)
        cols = self._candidate_cols(point.lng, self._lng_window_deg(point.lat))

        out: list[GeoPoint] = []
        # Two rows each side absorbs float error at row boundaries.
        for r in range(row - 2, row + 3):
            cells = self._rows.get(r)
            if not cells:
                continue
            buckets = cells.values() if cols is None else (cells.get(c) for c in cols)
            for bucket in buckets:
                if not bucket:
                    continue
                for other in bucket:
                    if other.index == point.index:
                        continue
                    if haversine_miles(point.lat, point.lng, other.lat, other.lng) <= self._radius:
                        out.append(other)
        out.sort(key=lambda p: p.index)
        return out


def build_neighbor_finder(
    points: Sequence[GeoPoint], *, radius_miles: float, kind: NeighborIndexName = "linear"
) -> NeighborFinder:
    if kind == "linear":
        return LinearNeighborFinder(points, radius_miles=radius_miles)
    if kind == "grid":
        return SpatialGridIndex(points, radius_miles=radius_miles)
    raise ValueError(f"Unknown neighbor index '{kind}', expected 'linear' or 'grid'")
