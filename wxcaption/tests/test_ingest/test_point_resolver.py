"""Tests for NWS point resolution."""

import asyncio
import json
from pathlib import Path

import httpx
import pytest
import respx

from wxcaption.errors import UpstreamLookupError
from wxcaption.ingest.nws_client import NwsClient
from wxcaption.ingest.point_resolver import PointResolver
from wxcaption.models.location import Coordinate

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"
NYC = Coordinate(40.7484, -73.9967)
POINT_URL = "https://test-nws.example.com/points/40.7484,-73.9967"


@pytest.fixture
def point_payload() -> dict:
    with open(FIXTURE_DIR / "nws_points_nyc.json") as f:
        return json.load(f)


@pytest.fixture
def resolver(memory_cache) -> PointResolver:
    return PointResolver(NwsClient(base_url="https://test-nws.example.com"), memory_cache)


class TestPointResolver:
    @respx.mock
    def test_success(self, resolver: PointResolver, point_payload: dict):
        respx.get(POINT_URL).mock(return_value=httpx.Response(200, json=point_payload))

        info = asyncio.run(resolver.resolve(NYC))
        assert info.forecast_url == "https://test-nws.example.com/gridpoints/OKX/33,35/forecast"
        assert info.office == "OKX"

    @respx.mock
    def test_geo_json_accept_header(self, resolver: PointResolver, point_payload: dict):
        route = respx.get(POINT_URL).mock(return_value=httpx.Response(200, json=point_payload))

        asyncio.run(resolver.resolve(NYC))
        assert route.calls[0].request.headers["accept"] == "application/geo+json"

    @respx.mock
    def test_nearby_coordinate_hits_cache(self, resolver: PointResolver, point_payload: dict):
        route = respx.get(POINT_URL).mock(return_value=httpx.Response(200, json=point_payload))

        first = asyncio.run(resolver.resolve(NYC))
        # Same point to 3 decimals, different full-precision URL
        second = asyncio.run(resolver.resolve(Coordinate(40.74799, -73.99701)))
        assert first == second
        assert route.call_count == 1

    @respx.mock
    def test_office_from_plain_id(self, resolver: PointResolver):
        payload = {"properties": {"forecast": "https://f/x", "forecastOffice": "LOT"}}
        respx.get(POINT_URL).mock(return_value=httpx.Response(200, json=payload))

        assert asyncio.run(resolver.resolve(NYC)).office == "LOT"

    @respx.mock
    def test_error_status_raises(self, resolver: PointResolver):
        respx.get(POINT_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(UpstreamLookupError, match="NWS points lookup failed"):
            asyncio.run(resolver.resolve(NYC))

    @respx.mock
    def test_missing_forecast_url(self, resolver: PointResolver):
        respx.get(POINT_URL).mock(
            return_value=httpx.Response(200, json={"properties": {"forecastOffice": "OKX"}})
        )

        with pytest.raises(UpstreamLookupError, match="No forecast available"):
            asyncio.run(resolver.resolve(NYC))
        assert resolver.cache.get("point:40.748,-73.997") is None

    @respx.mock
    def test_non_object_body_raises_lookup_error(self, resolver: PointResolver):
        respx.get(POINT_URL).mock(return_value=httpx.Response(200, json=[]))

        with pytest.raises(UpstreamLookupError, match="unexpected payload"):
            asyncio.run(resolver.resolve(NYC))

    @respx.mock
    def test_non_object_properties_has_no_forecast(self, resolver: PointResolver):
        respx.get(POINT_URL).mock(
            return_value=httpx.Response(200, json={"properties": ["forecast"]})
        )

        with pytest.raises(UpstreamLookupError, match="No forecast available"):
            asyncio.run(resolver.resolve(NYC))
