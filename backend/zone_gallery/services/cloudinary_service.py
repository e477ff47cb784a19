"""
Zone Gallery — Cloudinary Search Service
=========================================

What:  Concrete media search service backed by the Cloudinary Search API.
How:   POSTs a search expression to
       {api_base_url}/{cloud_name}/resources/search with HTTP basic auth
       and maps each returned resource to a SearchHit.
Who:   Created once by create_app(); called by GalleryService per request.

Request body:
    {
        "expression": "folder:Zones/Zone1/Nandhu/Attendence/3/2025-08-20",
        "sort_by": [{"public_id": "asc"}],
        "max_results": 100
    }

Response body (fields we read):
    {"resources": [{"public_id": "...", "secure_url": "https://..."}], ...}

Failure handling:
    - Timeout                         → UpstreamTimeoutError
    - Connection / protocol error     → UpstreamFailureError
    - HTTP status >= 400              → UpstreamFailureError (status in context)
    - Body not JSON / wrong shape     → UpstreamFailureError
    There are no retries and no circuit breaker: each request makes exactly
    one call and reports its outcome.
"""

import logging
import time
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from zone_gallery.config import Settings
from zone_gallery.exceptions import UpstreamFailureError, UpstreamTimeoutError
from zone_gallery.middleware.request_id import request_id_var
from zone_gallery.schemas.gallery import SearchHit
from zone_gallery.services.media_base import MediaSearchService

logger = logging.getLogger(__name__)


class CloudinarySearchService(MediaSearchService):
    """
    Cloudinary Search API client.

    Credentials, endpoint and timeout come from the Settings value passed in;
    nothing is read from module-level SDK state.

    Args:
        settings: Frozen application settings.
        client:   Optional pre-built httpx.AsyncClient (tests pass one with a
                  MockTransport). When omitted the service builds its own on
                  first use and closes it in aclose().
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._owns_client = client is None
        self._client = client
        self._auth = httpx.BasicAuth(settings.cloud_api_key, settings.cloud_api_secret)
        self._timeout = httpx.Timeout(settings.search_timeout)
        self._health_checked_at: Optional[float] = None
        self._health_result = False

        logger.info(
            "CloudinarySearchService initialized for cloud=%s (timeout=%.1fs, max_results=%d)",
            settings.cloud_name or "<unset>",
            settings.search_timeout,
            settings.search_max_results,
        )

    async def search(
        self,
        expression: str,
        sort_by: Optional[str] = None,
        sort_direction: str = "asc",
        max_results: Optional[int] = None,
    ) -> List[SearchHit]:
        payload: dict = {
            "expression": expression,
            "max_results": max_results or self.settings.search_max_results,
        }
        if sort_by:
            payload["sort_by"] = [{sort_by: sort_direction}]

        rid = request_id_var.get("")
        start_time = time.perf_counter()

        try:
            response = await self._get_client().post(
                self.settings.search_url,
                json=payload,
                auth=self._auth,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            logger.error(
                "[%s] Cloudinary search timed out after %.1fs: %s",
                rid,
                self.settings.search_timeout,
                expression,
            )
            raise UpstreamTimeoutError(
                timeout=self.settings.search_timeout,
                context={"expression": expression, "error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            logger.error("[%s] Cloudinary search failed: %s", rid, str(e))
            raise UpstreamFailureError(
                message="Failed to reach the media service",
                context={"expression": expression, "error_type": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000

        if response.status_code >= 400:
            upstream_message = _error_message(response)
            logger.error(
                "[%s] Cloudinary search returned %d after %.0fms: %s",
                rid,
                response.status_code,
                duration_ms,
                upstream_message,
            )
            raise UpstreamFailureError(
                message="Media service rejected the search request",
                status_code=response.status_code,
                context={"expression": expression, "upstream_message": upstream_message},
            )

        hits = _parse_resources(response, expression)
        logger.info(
            "[%s] Cloudinary search '%s' returned %d asset(s) in %.0fms",
            rid,
            expression,
            len(hits),
            duration_ms,
        )
        return hits

    async def health_check(self) -> bool:
        """
        Check if Cloudinary is reachable with the configured credentials.

        How: Calls the Admin API ping endpoint. Ping counts against the same
             hourly Admin API limit as search, so a result is reused for
             `health_cache_ttl` seconds.
        """
        now = time.monotonic()
        ttl = self.settings.health_cache_ttl
        if self._health_checked_at is not None and now - self._health_checked_at < ttl:
            return self._health_result

        self._health_result = await self._ping()
        self._health_checked_at = now
        return self._health_result

    async def _ping(self) -> bool:
        try:
            response = await self._get_client().get(
                self.settings.ping_url,
                auth=self._auth,
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("Cloudinary health check failed: %s", str(e))
            return False
        if response.status_code != 200:
            logger.warning("Cloudinary health check returned HTTP %d", response.status_code)
            return False
        return True

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()

def _error_message(response: httpx.Response) -> str:
    """Extracts Cloudinary's {"error": {"message": ...}} text, if any."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text[:200]


def _parse_resources(response: httpx.Response, expression: str) -> List[SearchHit]:
    try:
        body: Any = response.json()
    except ValueError as e:
        raise UpstreamFailureError(
            message="Media service returned a malformed response",
            context={"expression": expression, "reason": "body is not JSON"},
        ) from e

    resources = body.get("resources", []) if isinstance(body, dict) else None
    if not isinstance(resources, list):
        raise UpstreamFailureError(
            message="Media service returned a malformed response",
            context={"expression": expression, "reason": "resources is not a list"},
        )

    try:
        return [
            SearchHit(identifier=resource["public_id"], secure_url=resource["secure_url"])
            for resource in resources
        ]
    except (KeyError, TypeError, PydanticValidationError) as e:
        raise UpstreamFailureError(
            message="Media service returned a malformed response",
            context={"expression": expression, "reason": f"bad resource entry: {e}"},
        ) from e
