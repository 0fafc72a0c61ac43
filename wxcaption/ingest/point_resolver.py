"""Coordinate to NWS forecast URL and issuing office."""

import logging

from wxcaption.errors import UpstreamLookupError
from wxcaption.ingest.http_client import properties_of, required_json
from wxcaption.ingest.nws_client import NwsClient
from wxcaption.models.location import Coordinate, PointInfo
from wxcaption.storage.cache import CacheStore, point_key

logger = logging.getLogger(__name__)


class PointResolver:
    def __init__(self, client: NwsClient, cache: CacheStore):
        self.client = client
        self.cache = cache

    async def resolve(self, coord: Coordinate) -> PointInfo:
        """Resolve a coordinate; the cache key is rounded to 3 decimals (~111 m)."""
        key = point_key(coord)
        cached = self.cache.get(key)
        if isinstance(cached, dict) and cached.get("forecast"):
            return PointInfo(forecast_url=cached["forecast"], office=_office_id(cached))

        data = await required_json(self.client.get_point(coord), "NWS points lookup")
        properties = properties_of(data)
        forecast_url = properties.get("forecast")
        if not forecast_url:
            logger.error("NWS point %s has no forecast URL", coord.rounded())
            raise UpstreamLookupError("No forecast available for this location")

        self.cache.set(
            key,
            {
                "forecast": forecast_url,
                "forecastOffice": properties.get("forecastOffice"),
                "cwa": properties.get("cwa"),
                "gridId": properties.get("gridId"),
            },
        )
        return PointInfo(forecast_url=forecast_url, office=_office_id(properties))


def _office_id(properties: dict) -> str | None:
    """Office code such as "OKX"; NWS usually gives the full office URL."""
    raw = properties.get("forecastOffice") or properties.get("cwa") or properties.get("gridId")
    if not raw or not isinstance(raw, str):
        return None
    return raw.rstrip("/").rsplit("/", 1)[-1]
