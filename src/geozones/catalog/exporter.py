"""
CSV/JSON exporters for zoning output.

Column layouts follow the files downstream viewers already read:
- documents: one row per record, `sale_date` written as `instrument_date`
- zones: one row per zone, sample addresses joined with " | "
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from geozones.domain.models import DocumentRecord, ZoneSummary, ZoningResult

logger = logging.getLogger(__name__)

SAMPLE_ADDRESS_SEPARATOR = " | "

DOCUMENT_COLUMNS: list[tuple[str, str]] = [
    ("doc_id", "doc_id"),
    ("recorded_date", "recorded_date"),
    ("sale_date", "instrument_date"),
    ("borrower_owner_name", "borrower_owner_name"),
    ("lender_name", "lender_name"),
    ("property_address", "property_address"),
    ("city", "city"),
    ("zip", "zip"),
    ("lat", "lat"),
    ("lng", "lng"),
    ("zone_id", "zone_id"),
    ("doc_url", "doc_url"),
]

ZONE_COLUMNS = ["zone_id", "count", "centroid_lat", "centroid_lng", "sample_addresses", "google_maps_link"]


def _prepare_path(path: str | Path) -> Path:
    resolved = Path(path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved


def _cell(value: Any) -> Any:
    return "" if value is None else value


def export_documents_csv(documents: Sequence[DocumentRecord], path: str | Path) -> Path:
    resolved = _prepare_path(path)
    with resolved.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([title for _, title in DOCUMENT_COLUMNS])
        for doc in documents:
            writer.writerow([_cell(getattr(doc, field)) for field, _ in DOCUMENT_COLUMNS])
    logger.info("Exported %d documents to %s", len(documents), resolved)
    return resolved


def zone_row(zone: ZoneSummary) -> dict[str, Any]:
    return {
        "zone_id": zone.zone_id,
        "count": zone.count,
        "centroid_lat": zone.centroid_lat,
        "centroid_lng": zone.centroid_lng,
        "sample_addresses": SAMPLE_ADDRESS_SEPARATOR.join(zone.sample_addresses),
        "google_maps_link": zone.map_link,
    }


def export_zones_csv(zones: Sequence[ZoneSummary], path: str | Path) -> Path:
    resolved = _prepare_path(path)
    with resolved.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=ZONE_COLUMNS)
        writer.writeheader()
        for zone in zones:
            writer.writerow(zone_row(zone))
    logger.info("Exported %d zones to %s", len(zones), resolved)
    return resolved


def export_result_json(result: ZoningResult, path: str | Path) -> Path:
    resolved = _prepare_path(path)
    resolved.write_text(
        json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.info("Exported %d documents and %d zones to %s", len(result.documents), len(result.zones), resolved)
    return resolved


def write_json_report(report: dict[str, Any], path: str | Path) -> Path:
    resolved = _prepare_path(path)
    resolved.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Run report written to %s", resolved)
    return resolved
