"""
Zone Gallery — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the gateway's error scenarios.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error bodies with the matching HTTP status code.
Who:   Raised by routes, services and the taxonomy resolver; caught by the
       global handlers.

Exception Hierarchy:
    GalleryError (base)
    ├── MissingParameterError    → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── UpstreamFailureError     → 500 Internal Server Error
    │   └── UpstreamTimeoutError → 500 Internal Server Error
    └── InvalidArgumentError     → programming error, never mapped explicitly

Every error response body carries an "error" field with a readable message.
"""

from typing import Any, Dict, List, Optional


class GalleryError(Exception):
    """
    Base exception for all Zone Gallery errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MissingParameterError(GalleryError):
    """
    Raised when the client supplied an incomplete request.

    When:    /getImages is called without one of zone, supervisor, category,
             ward or date (or with an empty value).
    HTTP:    400 Bad Request

    Example response:
        {"error": "Missing query parameters"}
    """

    def __init__(
        self,
        message: str = "Missing query parameters",
        missing: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if missing:
            ctx["missing"] = list(missing)
        super().__init__(message=message, context=ctx)
        self.missing = list(missing or [])


class NotFoundError(GalleryError):
    """
    Raised when a request path does not map onto the taxonomy.

    When:    /api/zones/... with more than five segments or an empty segment.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UpstreamFailureError(GalleryError):
    """
    Raised when the hosted media search call fails.

    What:    The search request threw, returned a non-2xx status, or returned
             a body that could not be decoded into search hits.
    HTTP:    500 Internal Server Error

    There are no retries: a single failure discards the whole request.
    """

    def __init__(
        self,
        message: str = "Failed to fetch data from the media service",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code


class UpstreamTimeoutError(UpstreamFailureError):
    """
    Raised when the media search call exceeds the configured timeout.

    HTTP:    500 Internal Server Error (same mapping as UpstreamFailureError,
             logged separately so timeouts can be told apart from errors)
    """

    def __init__(
        self,
        timeout: float,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["timeout"] = timeout
        super().__init__(
            message=f"Media service did not respond within {timeout:g} seconds",
            context=ctx,
        )
        self.timeout = timeout


class InvalidArgumentError(GalleryError):
    """
    Raised when the taxonomy resolver is called with a mismatched
    prefix/level pair.

    This is a programming error in the caller, not a runtime data error.
    The routing layer guards against it; if it ever escapes it falls through
    to the generic 500 handler.
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
