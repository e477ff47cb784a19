"""
Zone Gallery — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() takes the settings (and optionally a
       media search service) and returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn zone_gallery.main:app) or `zone-gallery`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID  │→│   Logging   │→│ GZip │→│  CORS  │  │
    │  └──────────┘ └─────────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌────────────┐ │
    │  │GET /api/zones│ │GET /getImages│ │GET /health │ │
    │  └──────────────┘ └──────────────┘ └────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ Missing→400 │ NotFound→404 │ Upstream→500    │  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, report missing credentials, log readiness
    Shutdown:  close the media service HTTP client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from zone_gallery import __version__
from zone_gallery.config import Settings, get_settings
from zone_gallery.exceptions import (
    GalleryError,
    MissingParameterError,
    NotFoundError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from zone_gallery.middleware.errors import UnhandledErrorMiddleware
from zone_gallery.middleware.logging import RequestLoggingMiddleware
from zone_gallery.middleware.request_id import RequestIDMiddleware, request_id_var
from zone_gallery.routes import health, images, zones
from zone_gallery.services.cloudinary_service import CloudinarySearchService
from zone_gallery.services.gallery_service import GalleryService
from zone_gallery.services.media_base import MediaSearchService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, credential check, readiness log.
    Shutdown: close the media service client.
    """
    settings: Settings = app.state.settings

    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("Zone Gallery %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health reports the upstream as unavailable
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    logger.info("Root folder: %s", settings.root_folder)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Zone Gallery shutting down...")
    await app.state.search_service.aclose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON bodies.

    Handler hierarchy:
        MissingParameterError   → 400 {"error": "Missing query parameters"}
        NotFoundError           → 404 {"error": ...}
        UpstreamTimeoutError    → 500 {"error": ...}
        UpstreamFailureError    → 500 {"error": ...}
        GalleryError (base)     → 500 generic message (InvalidArgumentError lands here)

    Any other exception is answered by UnhandledErrorMiddleware, inside CORS
    and the request ID middleware, so its 500 carries their headers too.

    Context dicts and stack traces are logged server-side only.
    """

    @app.exception_handler(MissingParameterError)
    async def handle_missing_parameter(request: Request, exc: MissingParameterError):
        rid = request_id_var.get("")
        logger.warning("[%s] Missing parameters: %s", rid, ", ".join(exc.missing))
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(UpstreamTimeoutError)
    async def handle_upstream_timeout(request: Request, exc: UpstreamTimeoutError):
        rid = request_id_var.get("")
        logger.error("[%s] Upstream timeout: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(UpstreamFailureError)
    async def handle_upstream_failure(request: Request, exc: UpstreamFailureError):
        rid = request_id_var.get("")
        logger.error("[%s] Upstream failure: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(GalleryError)
    async def handle_gallery_error(request: Request, exc: GalleryError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s",
            rid,
            type(exc).__name__,
            exc.message,
            exc.context,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    search_service: Optional[MediaSearchService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:       Configuration value; defaults to get_settings().
        search_service: Media search implementation; defaults to a
                        CloudinarySearchService built from `settings`.

    Returns:
        Fully configured FastAPI instance. The settings and services are
        stored on app.state and handed to routes through dependencies.py.
    """
    settings = settings or get_settings()
    search_service = search_service or CloudinarySearchService(settings)

    app = FastAPI(
        title="Zone Gallery API",
        description=(
            "Browse the Zones/zone/supervisor/category/ward/date folder taxonomy "
            "stored in Cloudinary and list the images in each date folder."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.search_service = search_service
    app.state.gallery_service = GalleryService(search_service, settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → GZip → CORS → Errors
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(zones.router)
    app.include_router(images.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "zone_gallery.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `zone_gallery.main:app` to be importable
app = create_app()
