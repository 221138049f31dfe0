"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- upstream records to cluster (`DocumentRecord`, produced by scraping + geocoding)
- derived zone statistics (`ZoneSummary`)
- API/CLI payloads (`ZoningRequest`, `ZoningResult`)

The clustering core itself is generic and never requires these models; they are what the
service, CLI and API speak.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_float_or_none(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class DocumentRecord(BaseModel):
    """One recorded real-estate document with an optional resolved coordinate."""

    model_config = ConfigDict(extra="ignore")

    doc_id: str
    doc_url: str | None = None
    doc_type: str | None = None
    recorded_date: str | None = None
    sale_date: str | None = None
    property_address: str | None = None
    borrower_owner_name: str | None = None
    lender_name: str | None = None
    instrument_number: str | None = None
    city: str | None = None
    zip: str | None = None
    lat: float | None = None
    lng: float | None = None
    zone_id: str | None = None
    extraction_error: str | None = None

    @field_validator("doc_id", mode="before")
    @classmethod
    def _coerce_doc_id(cls, value: Any) -> Any:
        # Upstream CSVs sometimes carry numeric ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _coerce_coordinate(cls, value: Any) -> Any:
        # Unparseable geocoder output means "no coordinate", never a rejected record.
        return _to_float_or_none(value)


class ZoneSummary(BaseModel):
    """Aggregate view of one zone."""

    zone_id: str
    count: int = Field(..., ge=1)
    centroid_lat: float
    centroid_lng: float
    sample_addresses: list[str] = Field(default_factory=list)
    map_link: str


class ZoningRequest(BaseModel):
    """API payload: records to cluster plus optional per-request tuning."""

    documents: list[DocumentRecord]
    radius_miles: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    settings_overrides: dict[str, Any] | None = None


class ZoningResult(BaseModel):
    """Annotated records plus zone summaries (largest zone first)."""

    documents: list[DocumentRecord]
    zones: list[ZoneSummary]
    meta: dict[str, Any] = Field(default_factory=dict)
