"""
Zone Gallery — FastAPI Dependencies
====================================

What:  Dependency providers that hand route handlers the objects built by
       create_app().
How:   create_app() stores the settings and services on app.state; these
       functions read them back for each request via Depends().
Who:   Route handlers. Tests inject a mock search service through create_app().
"""

from fastapi import Request

from zone_gallery.services.gallery_service import GalleryService
from zone_gallery.services.media_base import MediaSearchService


def get_search_service(request: Request) -> MediaSearchService:
    return request.app.state.search_service


def get_gallery_service(request: Request) -> GalleryService:
    """
    Provides the GalleryService for the current app.

    Usage:
        @router.get("/zones")
        async def list_zones(gallery: GalleryService = Depends(get_gallery_service)):
            ...
    """
    return request.app.state.gallery_service
