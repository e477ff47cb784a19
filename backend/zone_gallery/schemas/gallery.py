"""
Zone Gallery — Pydantic Schemas
================================

What:  Pydantic models for the values that cross the service boundaries.
How:   FastAPI uses the response models to serialize results and generate
       the OpenAPI documentation; the media search client returns SearchHit
       values that the taxonomy resolver consumes.
When:  Built per request from the media service response and discarded once
       the response is serialized.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Upstream Models — What the media search service gives us
# ══════════════════════════════════════════════════════════════════════════


class SearchHit(BaseModel):
    """
    What:  One asset returned by the media search call.
    Who:   Produced by MediaSearchService.search(); consumed by the resolver.

    identifier is the asset's full public id, a "/"-separated path such as
    "Zones/Zone1/Nandhu/Attendence/3/2025-08-20/img123".
    """
    identifier: str = Field(description="Full '/'-separated asset identifier")
    secure_url: str = Field(description="HTTPS delivery URL resolved by the media service")

    model_config = {"frozen": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class ImageRecord(BaseModel):
    """
    What:  A leaf image under a full zone/supervisor/category/ward/date path.
    Who:   Returned as array items by /getImages and /api/zones/.../{date}.
    """
    url: str = Field(description="Delivery URL of the image")
    name: str = Field(description="Last segment of the asset identifier")

    model_config = {"frozen": True}


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every endpoint.

    Example:
        {"error": "Missing query parameters"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and upstream status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    media_service: str = Field(description="Cloudinary status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
    detail: Optional[str] = Field(default=None, description="Reason for a degraded status")
