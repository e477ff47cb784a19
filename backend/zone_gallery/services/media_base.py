"""
Zone Gallery — Abstract Media Search Interface
===============================================

What:  Abstract base class defining the contract for the hosted media
       search provider.
How:   Concrete implementations inherit from MediaSearchService and
       implement search() and health_check().
Who:   Called by GalleryService once per request.

Tests substitute an AsyncMock with this spec, so the gallery and route layers
never need network access.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from zone_gallery.schemas.gallery import SearchHit


class MediaSearchService(ABC):
    """
    Abstract interface for searching assets in a hosted media library.

    Contract:
        - search() returns every asset matching an expression as SearchHit values
        - Implementations translate their own transport errors into
          UpstreamFailureError / UpstreamTimeoutError
        - No retries: one call, one outcome

    Implementations:
        - CloudinarySearchService: Cloudinary Search API over HTTPS
    """

    @abstractmethod
    async def search(
        self,
        expression: str,
        sort_by: Optional[str] = None,
        sort_direction: str = "asc",
        max_results: Optional[int] = None,
    ) -> List[SearchHit]:
        """
        Run one search against the media library.

        Args:
            expression:     Provider search expression, e.g. "folder:Zones/Zone1/*".
            sort_by:        Field to sort on (e.g. "public_id"); provider order if None.
            sort_direction: "asc" or "desc".
            max_results:    Upper bound on returned assets; provider default if None.

        Returns:
            The matching assets, possibly empty.

        Raises:
            UpstreamTimeoutError: The provider did not answer in time.
            UpstreamFailureError: Any other transport, status or decoding failure.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the media service is reachable and the credentials work.

        Returns True if reachable, False otherwise. Never raises.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the implementation."""
        return None
