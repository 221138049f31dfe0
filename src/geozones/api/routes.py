"""
API routes.

Endpoints:
- POST `/api/zones`: cluster posted documents and return annotated documents + zones.
- GET  `/api/settings`: public clustering/summary settings.
- GET  `/api/health`: liveness probe.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from geozones.config.overrides import apply_settings_overrides
from geozones.config.settings import get_settings
from geozones.domain.models import ZoningRequest, ZoningResult
from geozones.zoning.service import assign_zones

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok"}


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return the settings a client may tune per request."""
    settings = get_settings()
    return {
        "clustering": settings.clustering.model_dump(mode="json"),
        "summary": settings.summary.model_dump(mode="json"),
    }


@router.post("/api/zones", response_model=ZoningResult)
def post_zones(request: ZoningRequest) -> ZoningResult:
    """Run zoning over the posted documents."""
    try:
        settings = apply_settings_overrides(get_settings(), request.settings_overrides)
    except ValueError as e:
        # Covers pydantic.ValidationError (out-of-range values) and disallowed keys.
        raise HTTPException(status_code=400, detail=str(e)) from e

    result = assign_zones(request.documents, settings=settings, radius_miles=request.radius_miles)
    logger.debug("POST /api/zones -> %d zones", len(result.zones))
    return result
