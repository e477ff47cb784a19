"""
Zone Gallery — Health Check Route
==================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the media service and reports an aggregate status. The service
       reuses a ping result for HEALTH_CACHE_TTL seconds.
Who:   Called by container health checks, load balancers and monitoring.

Status levels:
    - healthy:   Cloudinary reachable with the configured credentials
    - degraded:  Cloudinary unreachable; the process itself is up (HTTP 200)
"""

import logging
import time

from fastapi import APIRouter, Depends

from zone_gallery import __version__
from zone_gallery.dependencies import get_search_service
from zone_gallery.schemas.gallery import HealthResponse
from zone_gallery.services.media_base import MediaSearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    search_service: MediaSearchService = Depends(get_search_service),
) -> HealthResponse:
    """Ping the media service (cached briefly) and report status."""
    media_status = "available"
    overall = "healthy"
    detail = None

    if not await search_service.health_check():
        media_status = "unavailable"
        overall = "degraded"
        detail = "Media service ping failed"

    return HealthResponse(
        status=overall,
        version=__version__,
        media_service=media_status,
        uptime_seconds=round(time.time() - _start_time, 2),
        detail=detail,
    )
