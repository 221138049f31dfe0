"""
Zone summaries (size, centroid, sample addresses, map link).

The centroid is the plain arithmetic mean of latitudes and of longitudes. That is a planar
approximation, which is fine at the ~1-2 mile scale zones are built at.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, TypeVar

from geozones.core.geo import coerce_coordinate
from geozones.domain.models import ZoneSummary

logger = logging.getLogger(__name__)

R = TypeVar("R")

DEFAULT_MAP_LINK_TEMPLATE = "https://www.google.com/maps/search/?api=1&query={lat},{lng}"


def build_map_link(lat: float, lng: float, template: str = DEFAULT_MAP_LINK_TEMPLATE) -> str:
    return template.format(lat=lat, lng=lng)


def _clean_address(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def summarize_zones(
    records: Sequence[R],
    labels: Sequence[str | None],
    *,
    get_latlng: Callable[[R], Any],
    get_address: Callable[[R], Any],
    zone_order: Sequence[str] | None = None,
    sample_limit: int = 3,
    map_link_template: str = DEFAULT_MAP_LINK_TEMPLATE,
) -> list[ZoneSummary]:
    """Summarize labeled records, largest zone first.

    Groups are visited in `zone_order` (the order labels were handed out) when given,
    otherwise in order of first appearance. Ties in size keep that order.
    """
    if len(records) != len(labels):
        raise ValueError(f"labels must align with records ({len(labels)} labels for {len(records)} records)")

    groups: dict[str, list[R]] = {label: [] for label in (zone_order or [])}
    for record, label in zip(records, labels):
        if label is None:
            continue
        groups.setdefault(label, []).append(record)

    zones: list[ZoneSummary] = []
    for zone_id, members in groups.items():
        if not members:
            continue

        coords = []
        for m in members:
            pair = get_latlng(m)
            coord = coerce_coordinate(*pair) if pair is not None else None
            if coord is not None:
                coords.append(coord)
        if not coords:
            logger.warning("Skipping zone %s: no member has a usable coordinate", zone_id)
            continue

        centroid_lat = sum(lat for lat, _ in coords) / len(coords)
        centroid_lng = sum(lng for _, lng in coords) / len(coords)

        samples = [_clean_address(get_address(m)) for m in members[: max(0, int(sample_limit))]]

        zones.append(
            ZoneSummary(
                zone_id=zone_id,
                count=len(members),
                centroid_lat=centroid_lat,
                centroid_lng=centroid_lng,
                sample_addresses=[s for s in samples if s],
                map_link=build_map_link(centroid_lat, centroid_lng, map_link_template),
            )
        )

    # list.sort is stable, so equal counts keep label order.
    zones.sort(key=lambda z: z.count, reverse=True)
    return zones
