"""
Zone Gallery — Gallery Service (Business Logic Orchestrator)
=============================================================

What:  Turns a taxonomy prefix into one media search call and hands the
       result to the taxonomy resolver.
How:   Composes a MediaSearchService with the pure functions in
       services/taxonomy.py.
Who:   Called by the zone and image route handlers.
When:  Once per request; nothing is kept between requests.

Orchestration Flow:
    ┌──────────┐    ┌──────────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Build folder    │───▶│  Cloudinary  │───▶│ Resolver │
    │ (prefix) │    │  expression      │    │  search      │    │ (pure)   │
    └──────────┘    └──────────────────┘    └──────────────┘    └──────────┘

    Level listing:  folder:Zones/<prefix...>/*   (every asset below the prefix)
    Leaf images:    folder:Zones/<zone>/<supervisor>/<category>/<ward>/<date>
"""

import logging
from typing import List, Sequence

from zone_gallery.config import Settings
from zone_gallery.exceptions import GalleryError, InvalidArgumentError, UpstreamFailureError
from zone_gallery.schemas.gallery import ImageRecord
from zone_gallery.services.media_base import MediaSearchService
from zone_gallery.services.taxonomy import (
    SEPARATOR,
    TaxonomyLevel,
    resolve_leaf_images,
    resolve_level,
)

logger = logging.getLogger(__name__)


class GalleryService:
    """
    Business logic layer for taxonomy browsing.

    Responsibilities:
        - list_level(): distinct values one level below a prefix
        - list_images(): leaf images under a complete path

    Error Handling Strategy:
        GalleryError subclasses raised by the search client propagate as-is.
        Anything else is wrapped in UpstreamFailureError so the client always
        gets a JSON body; no partial results are returned.
    """

    def __init__(self, search_service: MediaSearchService, settings: Settings):
        self.search_service = search_service
        self.settings = settings

    def folder_path(self, segments: Sequence[str]) -> str:
        """Joins the root label and the given segments into a folder path."""
        return SEPARATOR.join([self.settings.root_folder, *segments])

    async def list_level(self, prefix: Sequence[str]) -> List[str]:
        """
        List the values at the level directly below `prefix`.

        Args:
            prefix: 0 to 4 concrete values (zone, supervisor, category, ward).

        Returns:
            Distinct values sorted ascending. Empty when the folder has no
            children yet.
        """
        prefix = list(prefix)
        level = len(prefix) + 1
        if level > TaxonomyLevel.DATE:
            raise InvalidArgumentError(
                f"prefix has {len(prefix)} segments; folder levels stop at {TaxonomyLevel.DATE.name.lower()}",
                context={"prefix": prefix},
            )

        expression = f"folder:{self.folder_path(prefix)}/*"
        hits = await self._search(expression, max_results=self.settings.search_max_results)

        values = resolve_level(
            (hit.identifier for hit in hits),
            prefix,
            level,
            root_label=self.settings.root_folder,
        )
        logger.info(
            "Resolved %d %s value(s) under %s",
            len(values),
            TaxonomyLevel(level).name.lower(),
            self.folder_path(prefix),
        )
        return sorted(values)

    async def list_images(self, full_prefix: Sequence[str]) -> List[ImageRecord]:
        """
        List the images stored under zone/supervisor/category/ward/date.

        Returns:
            ImageRecord values sorted by identifier, possibly empty.
        """
        full_prefix = list(full_prefix)
        expression = f"folder:{self.folder_path(full_prefix)}"
        hits = await self._search(
            expression,
            sort_by="public_id",
            sort_direction="asc",
            max_results=self.settings.search_max_results,
        )

        images = resolve_leaf_images(hits, full_prefix)
        logger.info("Resolved %d image(s) under %s", len(images), self.folder_path(full_prefix))
        return images

    async def _search(self, expression: str, **kwargs):
        try:
            return await self.search_service.search(expression, **kwargs)
        except GalleryError:
            raise
        except Exception as e:
            logger.error("Unexpected media search error for '%s': %s", expression, str(e), exc_info=True)
            raise UpstreamFailureError(
                message="Failed to fetch data from the media service",
                context={"expression": expression, "error_type": type(e).__name__},
            ) from e
