"""
Zone Gallery — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── settings: Settings value with fake Cloudinary credentials
    ├── make_hit: Factory for SearchHit values
    ├── sample_identifiers: The three-zone identifier set used across tests
    ├── mock_search_service: AsyncMock standing in for the Cloudinary client
    └── test_client: HTTPX AsyncClient talking to a fresh app instance
"""

import os
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set before any zone_gallery import builds the module-level app
os.environ.setdefault("CLOUD_NAME", "test-cloud")
os.environ.setdefault("CLOUD_API_KEY", "test-key-not-real")
os.environ.setdefault("CLOUD_API_SECRET", "test-secret-not-real")
os.environ["LOG_LEVEL"] = "WARNING"

from zone_gallery.config import Settings  # noqa: E402
from zone_gallery.main import create_app  # noqa: E402
from zone_gallery.schemas.gallery import SearchHit  # noqa: E402
from zone_gallery.services.media_base import MediaSearchService  # noqa: E402


@pytest.fixture
def settings():
    """Settings with fake credentials; the .env file is ignored."""
    return Settings(
        _env_file=None,
        cloud_name="demo-cloud",
        cloud_api_key="key-123",
        cloud_api_secret="secret-456",
        cloudinary_api_base_url="https://api.cloudinary.test/v1_1",
        search_max_results=100,
        search_timeout=5.0,
    )


@pytest.fixture
def make_hit():
    """
    Builds SearchHit values whose URL is derived from the identifier.

    Usage:
        hit = make_hit("Zones/Z/S/C/3/2025-08-20/a")
        hit.secure_url == "https://res.cloudinary.test/Zones/Z/S/C/3/2025-08-20/a.jpg"
    """
    def _make(identifier: str) -> SearchHit:
        return SearchHit(
            identifier=identifier,
            secure_url=f"https://res.cloudinary.test/{identifier}.jpg",
        )
    return _make


@pytest.fixture
def sample_identifiers():
    return [
        "Zones/Zone1/A/Cat1/3/2025-01-01/x",
        "Zones/Zone1/B/Cat1/3/2025-01-01/y",
        "Zones/Zone2/A/Cat1/3/2025-01-01/z",
    ]


@pytest.fixture
def mock_search_service():
    """
    Provides a mock media search service.

    Usage:
        mock_search_service.search.return_value = [make_hit("Zones/Zone1/A/...")]
    """
    service = AsyncMock(spec=MediaSearchService)
    service.search.return_value = []
    service.health_check.return_value = True
    return service


@pytest.fixture
def app(settings, mock_search_service):
    return create_app(settings=settings, search_service=mock_search_service)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    raise_app_exceptions=False lets the catch-all 500 handler's response
    reach the test instead of the re-raised exception.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
