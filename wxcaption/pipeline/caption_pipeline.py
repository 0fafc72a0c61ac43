"""Caption pipeline: location input to aggregated weather report."""

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import datetime

from wxcaption.config.schema import WxConfig
from wxcaption.errors import InputError
from wxcaption.ingest.forecast_fetcher import AlertsFetcher, ForecastFetcher
from wxcaption.ingest.geo_resolver import GeoResolver
from wxcaption.ingest.hwo_resolver import HWOResolver
from wxcaption.ingest.nws_client import NwsClient
from wxcaption.ingest.point_resolver import PointResolver
from wxcaption.ingest.zippopotam_client import ZippopotamClient
from wxcaption.models.common import utc_now
from wxcaption.models.location import Coordinate, ResolvedPlace
from wxcaption.models.report import WeatherReport
from wxcaption.storage.cache import CacheStore, open_cache
from wxcaption.summary.aggregator import aggregate

logger = logging.getLogger(__name__)


def parse_coordinates(raw: str) -> ResolvedPlace:
    """Parse a literal "lat,lon" pair; the label is the 3-decimal coordinate."""
    # Extra fields are rejected rather than ignored.
    parts = [s.strip() for s in raw.split(",")]
    if len(parts) != 2:
        raise InputError(f"Invalid lat,lon: {raw!r}")
    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise InputError(f"Invalid lat,lon: {raw!r}") from e
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InputError(f"Invalid lat,lon: {raw!r}")
    coord = Coordinate(lat, lon)
    return ResolvedPlace(coordinate=coord, place=coord.rounded(3))


class CaptionPipeline:
    def __init__(
        self,
        geocoder: GeoResolver,
        points: PointResolver,
        forecasts: ForecastFetcher,
        alerts: AlertsFetcher,
        outlooks: HWOResolver,
        max_alerts: int = 5,
        now: Callable[[], datetime] = utc_now,
    ):
        self.geocoder = geocoder
        self.points = points
        self.forecasts = forecasts
        self.alerts = alerts
        self.outlooks = outlooks
        self.max_alerts = max_alerts
        self._now = now

    @classmethod
    def from_clients(
        cls,
        zip_client: ZippopotamClient,
        nws_client: NwsClient,
        cache: CacheStore,
        max_alerts: int = 5,
        now: Callable[[], datetime] = utc_now,
    ) -> "CaptionPipeline":
        return cls(
            geocoder=GeoResolver(zip_client, cache),
            points=PointResolver(nws_client, cache),
            forecasts=ForecastFetcher(nws_client, cache),
            alerts=AlertsFetcher(nws_client, cache),
            outlooks=HWOResolver(nws_client, cache),
            max_alerts=max_alerts,
            now=now,
        )

    async def resolve_location(self, location_input: str) -> ResolvedPlace:
        raw = (location_input or "").strip()
        if not raw:
            raise InputError("Enter ZIP or lat,lon")
        if "," in raw:
            return parse_coordinates(raw)
        return await self.geocoder.resolve(raw)

    async def generate(self, location_input: str, day_count: int) -> WeatherReport:
        """Run one full resolution. Only InputError and UpstreamLookupError escape."""
        if day_count < 1:
            raise InputError(f"Day count must be at least 1, got {day_count}")

        location = await self.resolve_location(location_input)
        coord = location.coordinate
        point = await self.points.resolve(coord)
        periods = await self.forecasts.fetch(point.forecast_url)

        # Both absorb their own failures, so neither can abort the gather.
        alerts, hwo = await asyncio.gather(
            self.alerts.fetch(coord),
            self.outlooks.resolve(coord, point.office),
        )

        days = aggregate(periods, day_count, now=self._now())
        logger.info(
            "Generated %d-day report for %s: %d days, %d alerts, outlook=%s",
            day_count, location.place, len(days), len(alerts), hwo is not None,
        )
        return WeatherReport(
            place=location.place,
            coordinate=coord,
            days=days,
            alerts=alerts[: self.max_alerts],
            hwo=hwo,
            office=point.office,
            day_count=day_count,
        )


async def run_pipeline(
    config: WxConfig,
    location_input: str,
    day_count: int,
    cache: CacheStore,
) -> WeatherReport:
    providers = config.providers
    async with ZippopotamClient(
        base_url=providers.geocode_base_url,
        user_agent=providers.user_agent,
        timeout=providers.timeout,
    ) as zip_client, NwsClient(
        base_url=providers.nws_base_url,
        user_agent=providers.user_agent,
        timeout=providers.timeout,
    ) as nws_client:
        pipeline = CaptionPipeline.from_clients(
            zip_client, nws_client, cache, max_alerts=config.output.max_alerts
        )
        return await pipeline.generate(location_input, day_count)


def generate_report(
    config: WxConfig,
    location_input: str,
    day_count: int | None = None,
    cache: CacheStore | None = None,
) -> WeatherReport:
    """Synchronous entry point used by the CLI."""
    owns_cache = cache is None
    if cache is None:
        cache = open_cache(config.cache)
    if day_count is None:
        day_count = config.output.default_days
    try:
        return asyncio.run(run_pipeline(config, location_input, day_count, cache))
    finally:
        if owns_cache:
            cache.close()
