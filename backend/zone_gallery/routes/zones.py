"""
Zone Gallery — Zone Browsing Route Handlers
============================================

What:  Handles GET /api/zones and GET /api/zones/{zone}/.../{date}.
How:   Splits the path into segments and dispatches on depth through a
       single table: depth 0-4 lists the next taxonomy level, depth 5 lists
       the leaf images.
Who:   Called by the gallery frontend while drilling down the folder tree.

Depth table:
    /api/zones                                   → zones
    /api/zones/{zone}                            → supervisors
    /api/zones/{zone}/{supervisor}               → categories
    /api/zones/{zone}/{supervisor}/{category}    → wards
    /api/zones/{zone}/.../{ward}                 → dates
    /api/zones/{zone}/.../{ward}/{date}          → [{url, name}, ...]
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List

from fastapi import APIRouter, Depends

from zone_gallery.dependencies import get_gallery_service
from zone_gallery.exceptions import NotFoundError
from zone_gallery.schemas.gallery import ErrorResponse, ImageRecord
from zone_gallery.services.gallery_service import GalleryService
from zone_gallery.services.taxonomy import SEPARATOR, TaxonomyLevel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Zones"])

DepthHandler = Callable[[GalleryService, List[str]], Awaitable[Any]]

# Number of path segments after /api/zones → service call
DEPTH_HANDLERS: Dict[int, DepthHandler] = {
    0: GalleryService.list_level,
    TaxonomyLevel.ZONE: GalleryService.list_level,
    TaxonomyLevel.SUPERVISOR: GalleryService.list_level,
    TaxonomyLevel.CATEGORY: GalleryService.list_level,
    TaxonomyLevel.WARD: GalleryService.list_level,
    TaxonomyLevel.DATE: GalleryService.list_images,
}


async def dispatch(gallery: GalleryService, segments: List[str]) -> Any:
    handler = DEPTH_HANDLERS.get(len(segments))
    if handler is None or any(not segment for segment in segments):
        raise NotFoundError(resource="folder", resource_id=SEPARATOR.join(segments))
    return await handler(gallery, segments)


@router.get(
    "/zones",
    response_model=List[str],
    responses={500: {"description": "Media service failure", "model": ErrorResponse}},
    summary="List zones",
)
async def list_zones(gallery: GalleryService = Depends(get_gallery_service)) -> List[str]:
    """Returns the zone folder names directly under the root folder."""
    return await dispatch(gallery, [])


@router.get(
    "/zones/{folder_path:path}",
    response_model=List[str] | List[ImageRecord],
    responses={
        404: {"description": "Path deeper than zone/supervisor/category/ward/date", "model": ErrorResponse},
        500: {"description": "Media service failure", "model": ErrorResponse},
    },
    summary="Browse the zone taxonomy",
    description=(
        "With 1-4 path segments returns the folder names one level down "
        "(supervisors, categories, wards, dates). With 5 segments returns the "
        "images stored in that date folder, sorted by asset id."
    ),
)
async def browse_zone_path(
    folder_path: str,
    gallery: GalleryService = Depends(get_gallery_service),
):
    """
    Browse one level of the taxonomy.

    Trailing slashes are ignored; an empty segment in the middle of the path
    ("Zone1//Cat") is reported as 404.
    """
    trimmed = folder_path.strip(SEPARATOR)
    segments = trimmed.split(SEPARATOR) if trimmed else []
    return await dispatch(gallery, segments)
