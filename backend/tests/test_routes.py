"""
Zone Gallery — HTTP Endpoint Tests
===================================

What:  End-to-end tests for the routing layer through the ASGI app.
How:   HTTPX AsyncClient over ASGITransport; the media search service is
       an AsyncMock injected into create_app().

What we test:
    ✅ Depth dispatch for /api/zones/... (levels 1-5 and leaf images)
    ✅ /getImages parameter checks and result shape
    ✅ Upstream failures → 500 with an "error" field
    ✅ Request ID header and /health
"""

import pytest

from zone_gallery.exceptions import InvalidArgumentError, UpstreamFailureError, UpstreamTimeoutError
from zone_gallery.routes import zones

FULL_QUERY = {
    "zone": "Zone1",
    "supervisor": "Nandhu",
    "category": "Attendence",
    "ward": "3",
    "date": "2025-08-20",
}


class TestZoneRoutes:

    @pytest.mark.asyncio
    async def test_list_zones(self, test_client, mock_search_service, make_hit, sample_identifiers):
        mock_search_service.search.return_value = [make_hit(i) for i in sample_identifiers]

        response = await test_client.get("/api/zones")

        assert response.status_code == 200
        assert response.json() == ["Zone1", "Zone2"]
        assert mock_search_service.search.await_args.args[0] == "folder:Zones/*"

    @pytest.mark.asyncio
    async def test_list_supervisors(self, test_client, mock_search_service, make_hit, sample_identifiers):
        mock_search_service.search.return_value = [make_hit(i) for i in sample_identifiers]

        response = await test_client.get("/api/zones/Zone1")

        assert response.status_code == 200
        assert response.json() == ["A", "B"]
        assert mock_search_service.search.await_args.args[0] == "folder:Zones/Zone1/*"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, expression, expected",
        [
            ("/api/zones/Zone1/A", "folder:Zones/Zone1/A/*", ["Cat1"]),
            ("/api/zones/Zone1/A/Cat1", "folder:Zones/Zone1/A/Cat1/*", ["3"]),
            ("/api/zones/Zone1/A/Cat1/3", "folder:Zones/Zone1/A/Cat1/3/*", ["2025-01-01"]),
        ],
    )
    async def test_deeper_levels(self, test_client, mock_search_service, make_hit, path, expression, expected):
        mock_search_service.search.return_value = [make_hit("Zones/Zone1/A/Cat1/3/2025-01-01/x")]

        response = await test_client.get(path)

        assert response.status_code == 200
        assert response.json() == expected
        assert mock_search_service.search.await_args.args[0] == expression

    @pytest.mark.asyncio
    async def test_unknown_zone_returns_empty_list(self, test_client):
        response = await test_client.get("/api/zones/Zone3")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_date_path_lists_images(self, test_client, mock_search_service, make_hit):
        mock_search_service.search.return_value = [
            make_hit("Zones/Zone1/Nandhu/Attendence/3/2025-08-20/b"),
            make_hit("Zones/Zone1/Nandhu/Attendence/3/2025-08-20/a"),
        ]

        response = await test_client.get("/api/zones/Zone1/Nandhu/Attendence/3/2025-08-20")

        assert response.status_code == 200
        assert response.json() == [
            {"url": "https://res.cloudinary.test/Zones/Zone1/Nandhu/Attendence/3/2025-08-20/a.jpg", "name": "a"},
            {"url": "https://res.cloudinary.test/Zones/Zone1/Nandhu/Attendence/3/2025-08-20/b.jpg", "name": "b"},
        ]
        kwargs = mock_search_service.search.await_args.kwargs
        assert kwargs["sort_by"] == "public_id"
        assert kwargs["sort_direction"] == "asc"

    @pytest.mark.asyncio
    async def test_trailing_slash_ignored(self, test_client, mock_search_service, make_hit, sample_identifiers):
        mock_search_service.search.return_value = [make_hit(i) for i in sample_identifiers]

        response = await test_client.get("/api/zones/Zone1/")

        assert response.status_code == 200
        assert response.json() == ["A", "B"]

    @pytest.mark.asyncio
    async def test_too_deep_is_404(self, test_client, mock_search_service):
        response = await test_client.get("/api/zones/Z/S/C/3/2025-08-20/extra")

        assert response.status_code == 404
        assert "error" in response.json()
        mock_search_service.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_segment_is_404(self, test_client, mock_search_service):
        response = await test_client.get("/api/zones/Zone1//Cat1")

        assert response.status_code == 404
        mock_search_service.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_url_encoded_segment(self, test_client, mock_search_service):
        await test_client.get("/api/zones/Zone%201")

        assert mock_search_service.search.await_args.args[0] == "folder:Zones/Zone 1/*"


class TestGetImagesRoute:

    @pytest.mark.asyncio
    async def test_get_images(self, test_client, mock_search_service, make_hit):
        mock_search_service.search.return_value = [
            make_hit("Zones/Zone1/Nandhu/Attendence/3/2025-08-20/img2"),
            make_hit("Zones/Zone1/Nandhu/Attendence/3/2025-08-20/img1"),
        ]

        response = await test_client.get("/getImages", params=FULL_QUERY)

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["img1", "img2"]
        assert mock_search_service.search.await_args.args[0] == (
            "folder:Zones/Zone1/Nandhu/Attendence/3/2025-08-20"
        )

    @pytest.mark.asyncio
    async def test_missing_ward_is_400(self, test_client, mock_search_service):
        params = {k: v for k, v in FULL_QUERY.items() if k != "ward"}

        response = await test_client.get("/getImages", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing query parameters"}
        mock_search_service.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_value_counts_as_missing(self, test_client):
        response = await test_client.get("/getImages", params={**FULL_QUERY, "date": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing query parameters"}

    @pytest.mark.asyncio
    async def test_no_params_is_400(self, test_client):
        response = await test_client.get("/getImages")
        assert response.status_code == 400


class TestErrorMapping:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, params",
        [
            ("/api/zones", None),
            ("/api/zones/Zone1", None),
            ("/api/zones/Zone1/A/Cat1/3", None),
            ("/api/zones/Zone1/Nandhu/Attendence/3/2025-08-20", None),
            ("/getImages", FULL_QUERY),
        ],
    )
    async def test_upstream_failure_is_500_on_every_endpoint(self, test_client, mock_search_service, path, params):
        mock_search_service.search.side_effect = UpstreamFailureError(message="Failed to reach the media service")

        response = await test_client.get(path, params=params)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to reach the media service"}

    @pytest.mark.asyncio
    async def test_upstream_timeout_is_500(self, test_client, mock_search_service):
        mock_search_service.search.side_effect = UpstreamTimeoutError(timeout=5.0)

        response = await test_client.get("/api/zones")

        assert response.status_code == 500
        assert "5 seconds" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_arbitrary_exception_is_500(self, test_client, mock_search_service):
        mock_search_service.search.side_effect = RuntimeError("boom")

        response = await test_client.get("/api/zones/Zone1")

        assert response.status_code == 500
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_internal_contract_violation_is_generic_500(self, test_client, monkeypatch):
        async def broken(gallery, prefix):
            raise InvalidArgumentError("prefix for level 2 must have 1 segment(s), got 0")

        monkeypatch.setitem(zones.DEPTH_HANDLERS, 0, broken)

        response = await test_client.get("/api/zones")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_cors_and_request_id(self, test_client, monkeypatch):
        async def broken(gallery, prefix):
            raise KeyError("public_id")

        monkeypatch.setitem(zones.DEPTH_HANDLERS, 0, broken)

        response = await test_client.get("/api/zones", headers={"Origin": "http://x.test"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "*"
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_unexpected_error_on_get_images_keeps_cors(self, app, test_client, monkeypatch):
        async def broken(full_prefix):
            raise TypeError("unexpected payload")

        monkeypatch.setattr(app.state.gallery_service, "list_images", broken)

        response = await test_client.get(
            "/getImages",
            params=FULL_QUERY,
            headers={"Origin": "http://x.test", "X-Request-ID": "req-500"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["x-request-id"] == "req-500"


class TestHealthAndHeaders:

    @pytest.mark.asyncio
    async def test_health_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["media_service"] == "available"

    @pytest.mark.asyncio
    async def test_health_degraded(self, test_client, mock_search_service):
        mock_search_service.health_check.return_value = False

        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["media_service"] == "unavailable"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/api/zones")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/zones", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
