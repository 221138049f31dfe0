from __future__ import annotations

# This module is the "orchestrator" for a zoning run.
# It wires together:
# - domain input (DocumentRecord list, already geocoded upstream)
# - clustering (radius-connectivity labels)
# - summarization (per-zone centroid/count/samples)
# - the result payload consumed by the CLI, the API and the exporters.

import logging
import time
from typing import Sequence

from geozones.config.settings import Settings, get_settings
from geozones.domain.models import DocumentRecord, ZoningResult
from geozones.zoning.clustering import assign_zone_labels
from geozones.zoning.summary import summarize_zones

logger = logging.getLogger(__name__)


def _latlng(doc: DocumentRecord) -> tuple[float | None, float | None]:
    return doc.lat, doc.lng


def _address(doc: DocumentRecord) -> str | None:
    return doc.property_address


def assign_zones(
    documents: Sequence[DocumentRecord],
    *,
    settings: Settings | None = None,
    radius_miles: float | None = None,
) -> ZoningResult:
    """Cluster documents into zones and summarize them.

    Input records are not mutated; the result carries copies with `zone_id` set (or
    cleared, for records without a usable coordinate).
    """
    settings = settings or get_settings()
    clustering = settings.clustering
    radius = float(radius_miles) if radius_miles is not None else clustering.radius_miles

    t0 = time.perf_counter()
    assignment = assign_zone_labels(
        documents,
        get_latlng=_latlng,
        radius_miles=radius,
        neighbor_index=clustering.neighbor_index,
        label_scheme=clustering.label_scheme,
        label_prefix=clustering.label_prefix,
    )
    annotated = [
        doc if doc.zone_id == label else doc.model_copy(update={"zone_id": label})
        for doc, label in zip(documents, assignment.labels)
    ]
    zones = summarize_zones(
        annotated,
        assignment.labels,
        get_latlng=_latlng,
        get_address=_address,
        zone_order=assignment.zone_order,
        sample_limit=settings.summary.sample_address_limit,
        map_link_template=settings.summary.map_link_template,
    )
    elapsed_ms = int((time.perf_counter() - t0) * 1000)

    logger.info(
        "Created %d zones from %d documents (%d with coordinates, radius=%.2f mi, index=%s) in %dms",
        len(zones),
        len(documents),
        assignment.point_count,
        radius,
        clustering.neighbor_index,
        elapsed_ms,
    )
    return ZoningResult(
        documents=annotated,
        zones=zones,
        meta={
            "radius_miles": radius,
            "neighbor_index": clustering.neighbor_index,
            "label_scheme": clustering.label_scheme,
            "documents": len(documents),
            "points": assignment.point_count,
            "clusters": assignment.cluster_count,
            "singletons": assignment.singleton_count,
            "elapsed_ms": elapsed_ms,
        },
    )
