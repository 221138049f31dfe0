"""
Offline run/quality report utilities.

Goal: provide a deterministic view of "how complete was this batch, and how did it zone?"
Used by:
- CLI (`geozones report`, and the report file written by `geozones cluster`)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

from geozones.core.geo import coerce_coordinate
from geozones.domain.models import DocumentRecord, ZoningResult


@dataclass(frozen=True)
class Issue:
    severity: str  # "info" | "warning" | "error"
    code: str
    message: str
    count: int = 1
    sample: list[str] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "count": int(self.count),
            "sample": list(self.sample or []),
        }


def _rate(part: int, total: int) -> float:
    return round(part / total, 4) if total else 0.0


def document_issues(documents: Sequence[DocumentRecord]) -> list[Issue]:
    issues: list[Issue] = []
    if not documents:
        return [Issue(severity="info", code="DOCS_EMPTY", message="No documents in this batch.", count=0)]

    ids = [d.doc_id for d in documents]
    seen: set[str] = set()
    dup: set[str] = set()
    for i in ids:
        if i in seen:
            dup.add(i)
        seen.add(i)
    if dup:
        issues.append(
            Issue(
                severity="error",
                code="DOCS_DUPLICATE_ID",
                message="Duplicate doc_id values in batch.",
                count=len(dup),
                sample=sorted(dup)[:8],
            )
        )

    missing = [d.doc_id for d in documents if d.lat is None and d.lng is None]
    if missing:
        issues.append(
            Issue(
                severity="warning",
                code="DOCS_MISSING_COORDS",
                message="Some documents were not geocoded and get no zone.",
                count=len(missing),
                sample=missing[:8],
            )
        )

    bad = [
        d.doc_id
        for d in documents
        if not (d.lat is None and d.lng is None) and coerce_coordinate(d.lat, d.lng) is None
    ]
    if bad:
        issues.append(
            Issue(
                severity="warning",
                code="DOCS_BAD_COORDS",
                message="Some documents have partial, non-finite or out-of-range coordinates.",
                count=len(bad),
                sample=bad[:8],
            )
        )

    errored = [d.doc_id for d in documents if d.extraction_error]
    if errored:
        issues.append(
            Issue(
                severity="warning",
                code="DOCS_EXTRACTION_ERRORS",
                message="Some documents carry an upstream extraction error.",
                count=len(errored),
                sample=errored[:8],
            )
        )

    no_address = [d.doc_id for d in documents if not (d.property_address or "").strip()]
    if no_address:
        issues.append(
            Issue(
                severity="info",
                code="DOCS_MISSING_ADDRESS",
                message="Some documents have no property address (they never appear as zone samples).",
                count=len(no_address),
                sample=no_address[:8],
            )
        )
    return issues


def zoning_issues(result: ZoningResult) -> list[Issue]:
    issues: list[Issue] = []
    meta = result.meta or {}
    points = int(meta.get("points", 0))
    clusters = int(meta.get("clusters", 0))
    if points > 1 and clusters == 0:
        issues.append(
            Issue(
                severity="info",
                code="ZONES_ALL_SINGLETONS",
                message="Every geocoded document is its own zone; the radius may be too small.",
                count=points,
            )
        )
    if len(result.zones) == 1 and points > 2:
        issues.append(
            Issue(
                severity="info",
                code="ZONES_SINGLE_ZONE",
                message="All geocoded documents fell into one zone; the radius may be too large.",
                count=points,
                sample=[result.zones[0].zone_id],
            )
        )
    return issues


def build_run_report(documents: Sequence[DocumentRecord], result: ZoningResult) -> dict[str, Any]:
    """Summarize one zoning run (counts, rates, zones, issues) as a JSON-ready dict."""
    total = len(documents)
    meta = result.meta or {}
    points = int(meta.get("points", sum(1 for d in result.documents if d.zone_id)))
    issues = [*document_issues(documents), *zoning_issues(result)]

    largest = result.zones[0] if result.zones else None
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "summary": {
            "total_documents": total,
            "geocoded_documents": points,
            "ungeocoded_documents": total - points,
            "geocoding_rate": _rate(points, total),
            "successful_extractions": sum(1 for d in documents if not d.extraction_error),
            "total_zones": len(result.zones),
            "clusters": int(meta.get("clusters", 0)),
            "singletons": int(meta.get("singletons", 0)),
            "largest_zone": {"zone_id": largest.zone_id, "count": largest.count} if largest else None,
            "radius_miles": meta.get("radius_miles"),
        },
        "extraction_errors": [
            {"doc_id": d.doc_id, "error": d.extraction_error} for d in documents if d.extraction_error
        ],
        "issues": [i.as_dict() for i in issues],
    }
