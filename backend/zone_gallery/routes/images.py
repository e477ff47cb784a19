"""
Zone Gallery — Image Listing Route Handler
===========================================

What:  Handles GET /getImages?zone=&supervisor=&category=&ward=&date=
How:   Checks all five query parameters, then delegates to
       GalleryService.list_images().
Who:   Called by existing clients that address a date folder by query string.

Example:
    GET /getImages?zone=Zone1&supervisor=Nandhu&category=Attendence&ward=3&date=2025-08-20
    → [{"url": "https://res.cloudinary.com/...", "name": "img123"}, ...]
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from zone_gallery.dependencies import get_gallery_service
from zone_gallery.exceptions import MissingParameterError
from zone_gallery.schemas.gallery import ErrorResponse, ImageRecord
from zone_gallery.services.gallery_service import GalleryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


@router.get(
    "/getImages",
    response_model=List[ImageRecord],
    responses={
        400: {"description": "One or more query parameters missing", "model": ErrorResponse},
        500: {"description": "Media service failure", "model": ErrorResponse},
    },
    summary="List images in a date folder",
)
async def get_images(
    zone: Optional[str] = Query(default=None),
    supervisor: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    ward: Optional[str] = Query(default=None),
    date: Optional[str] = Query(default=None, description="Date folder, e.g. 2025-08-20"),
    gallery: GalleryService = Depends(get_gallery_service),
) -> List[ImageRecord]:
    """
    List images stored under Zones/{zone}/{supervisor}/{category}/{ward}/{date}.

    All five parameters are required; an empty value counts as missing.
    """
    params = {
        "zone": zone,
        "supervisor": supervisor,
        "category": category,
        "ward": ward,
        "date": date,
    }
    missing = [name for name, value in params.items() if not value]
    if missing:
        raise MissingParameterError(missing=missing)

    return await gallery.list_images(list(params.values()))
