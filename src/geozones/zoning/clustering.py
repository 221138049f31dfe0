from __future__ import annotations

# Radius-connectivity clustering ("DBSCAN with minPts = 1").
#
# Two points share a zone when they are connected by a chain of points, each within
# `radius_miles` of the next. Points with no neighbor at all become singleton zones.
#
# Determinism rules:
# - points are visited in input order,
# - neighbor finders return neighbors in input order,
# - the BFS queue is FIFO,
# so identical input + radius always yields identical clusters and labels.

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence, TypeVar

from geozones.core.geo import GeoPoint, coerce_coordinate
from geozones.core.spatial_index import NeighborFinder, NeighborIndexName, build_neighbor_finder, validate_radius
from geozones.zoning.labels import LabelScheme, zone_label

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class ClusteringResult:
    """Clusters in discovery order plus isolated points in input order."""

    clusters: list[list[GeoPoint]] = field(default_factory=list)
    singletons: list[GeoPoint] = field(default_factory=list)


@dataclass(frozen=True)
class ZoneAssignment:
    """Per-record labels (aligned with the input) and the order labels were handed out."""

    labels: list[str | None]
    zone_order: list[str]
    point_count: int = 0
    cluster_count: int = 0
    singleton_count: int = 0


def build_points(records: Sequence[R], *, get_latlng: Callable[[R], Any]) -> list[GeoPoint]:
    """Create one GeoPoint per record with a usable coordinate, keeping input order."""
    points: list[GeoPoint] = []
    for index, record in enumerate(records):
        pair = get_latlng(record)
        if pair is None:
            continue
        lat, lng = pair
        coord = coerce_coordinate(lat, lng)
        if coord is None:
            continue
        points.append(GeoPoint(index=index, lat=coord[0], lng=coord[1]))
    return points


def _expand_cluster(
    seed: GeoPoint,
    seed_neighbors: list[GeoPoint],
    finder: NeighborFinder,
    visited: set[int],
) -> list[GeoPoint]:
    cluster = [seed]
    visited.add(seed.index)

    queue = deque(seed_neighbors)
    while queue:
        current = queue.popleft()
        if current.index in visited:
            continue
        visited.add(current.index)
        cluster.append(current)
        queue.extend(n for n in finder.neighbors(current) if n.index not in visited)
    return cluster


def cluster_points(
    points: Sequence[GeoPoint],
    *,
    radius_miles: float,
    neighbor_index: NeighborIndexName = "linear",
    finder: NeighborFinder | None = None,
) -> ClusteringResult:
    """Group points into radius-connected clusters.

    `finder` lets callers plug in their own neighbor lookup; otherwise one is built from
    `neighbor_index`. The radius is validated even for empty input or a custom finder.
    """
    validate_radius(radius_miles)
    finder = finder or build_neighbor_finder(points, radius_miles=radius_miles, kind=neighbor_index)

    visited: set[int] = set()
    clusters: list[list[GeoPoint]] = []
    for point in points:
        if point.index in visited:
            continue
        neighbors = finder.neighbors(point)
        if neighbors:
            clusters.append(_expand_cluster(point, neighbors, finder, visited))

    singletons = [p for p in points if p.index not in visited]
    return ClusteringResult(clusters=clusters, singletons=singletons)


def assign_zone_labels(
    records: Sequence[R],
    *,
    get_latlng: Callable[[R], Any],
    radius_miles: float,
    neighbor_index: NeighborIndexName = "linear",
    label_scheme: LabelScheme = "letters",
    label_prefix: str = "Zone",
) -> ZoneAssignment:
    """Cluster `records` by coordinate and return one optional label per record.

    Clusters are labeled first (discovery order), then singleton zones continue the same
    sequence in input order. Records without a usable coordinate get None.
    """
    points = build_points(records, get_latlng=get_latlng)
    result = cluster_points(points, radius_miles=radius_miles, neighbor_index=neighbor_index)

    labels: list[str | None] = [None] * len(records)
    zone_order: list[str] = []

    groups = [*result.clusters, *([p] for p in result.singletons)]
    for zone_index, members in enumerate(groups):
        label = zone_label(zone_index, scheme=label_scheme, prefix=label_prefix)
        zone_order.append(label)
        for p in members:
            labels[p.index] = label

    logger.debug(
        "Clustered %d/%d records: %d clusters, %d singletons (radius=%.3f mi)",
        len(points),
        len(records),
        len(result.clusters),
        len(result.singletons),
        float(radius_miles),
    )
    return ZoneAssignment(
        labels=labels,
        zone_order=zone_order,
        point_count=len(points),
        cluster_count=len(result.clusters),
        singleton_count=len(result.singletons),
    )
