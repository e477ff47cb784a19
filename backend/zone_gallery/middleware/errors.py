"""
Zone Gallery — Unhandled Error Middleware
==========================================

What:  Turns any exception that escapes the routes and the registered
       exception handlers into a JSON 500 response.
How:   Registered first, so it is the innermost user middleware; CORS,
       request ID and access logging all wrap the response it builds.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from zone_gallery.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Answer unexpected errors with {"error": "Internal server error"}."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = request_id_var.get("")
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(e),
                exc_info=e,
            )
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
