"""NOAA/NWS API client: points, forecasts, alerts and text products."""

import httpx

from wxcaption.ingest.http_client import DEFAULT_USER_AGENT, BaseApiClient
from wxcaption.models.location import Coordinate

NWS_BASE_URL = "https://api.weather.gov"
HWO_EVENT = "Hazardous Weather Outlook"


class NwsClient(BaseApiClient):
    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            base_url,
            user_agent=user_agent,
            timeout=timeout,
            accept="application/geo+json",
            client=client,
        )

    async def get_point(self, coord: Coordinate) -> httpx.Response:
        return await self._get(f"{self.base_url}/points/{coord.query()}")

    async def get_forecast(self, url: str) -> httpx.Response:
        return await self._get(url)

    async def get_active_alerts(self, coord: Coordinate) -> httpx.Response:
        return await self._get(
            f"{self.base_url}/alerts/active", params={"point": coord.query()}
        )

    async def get_alerts(self, coord: Coordinate, event: str) -> httpx.Response:
        return await self._get(
            f"{self.base_url}/alerts", params={"point": coord.query(), "event": event}
        )

    async def get_products(self, office: str) -> httpx.Response:
        return await self._get(f"{self.base_url}/products", params={"office": office})

    async def get_document(self, url: str) -> httpx.Response:
        return await self._get(url)

    def product_url(self, product_id: str) -> str:
        return f"{self.base_url}/products/{product_id}"
