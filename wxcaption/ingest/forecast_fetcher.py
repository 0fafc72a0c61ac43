"""Forecast period and active alert retrieval through the shared cache."""

import logging

import httpx

from wxcaption.errors import UpstreamLookupError
from wxcaption.ingest.http_client import properties_of, required_json
from wxcaption.ingest.nws_client import NwsClient
from wxcaption.models.forecast import ForecastPeriod
from wxcaption.models.location import Coordinate
from wxcaption.storage.cache import CacheStore, alerts_key, forecast_key

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, client: NwsClient, cache: CacheStore):
        self.client = client
        self.cache = cache

    async def fetch(self, url: str) -> list[ForecastPeriod]:
        """Fetch forecast periods, cached by the literal forecast URL."""
        key = forecast_key(url)
        raw_periods = self.cache.get(key)
        if not isinstance(raw_periods, list):
            data = await required_json(self.client.get_forecast(url), "NWS forecast fetch")
            raw_periods = properties_of(data).get("periods") or []
            if not isinstance(raw_periods, list):
                raise UpstreamLookupError("NWS forecast fetch returned an unexpected payload")
            self.cache.set(key, raw_periods)
        periods = [ForecastPeriod.from_api(p) for p in raw_periods if isinstance(p, dict)]
        logger.debug("Loaded %d forecast periods from %s", len(periods), url)
        return periods


class AlertsFetcher:
    """Active alerts are best-effort: any failure yields an empty list."""

    def __init__(self, client: NwsClient, cache: CacheStore):
        self.client = client
        self.cache = cache

    async def fetch(self, coord: Coordinate) -> list[dict]:
        key = alerts_key(coord)
        cached = self.cache.get(key)
        if isinstance(cached, list):
            return [f for f in cached if isinstance(f, dict)]

        try:
            resp = await self.client.get_active_alerts(coord)
        except httpx.RequestError as e:
            logger.warning("Alerts request failed for %s: %s", coord.rounded(), e)
            return []
        if not resp.is_success:
            logger.warning("Alerts returned %d for %s", resp.status_code, coord.rounded())
            return []
        try:
            features = resp.json().get("features")
        except (ValueError, AttributeError):
            features = None
        if not isinstance(features, list):
            logger.warning("Alerts response for %s was not a feature collection", coord.rounded())
            return []

        features = [f for f in features if isinstance(f, dict)]
        self.cache.set(key, features)
        return features
