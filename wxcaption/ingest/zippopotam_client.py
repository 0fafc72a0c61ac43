"""Zippopotam.us postal code geocoding client."""

import httpx

from wxcaption.ingest.http_client import DEFAULT_USER_AGENT, BaseApiClient

ZIPPOPOTAM_BASE_URL = "https://api.zippopotam.us"


class ZippopotamClient(BaseApiClient):
    def __init__(
        self,
        base_url: str = ZIPPOPOTAM_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(base_url, user_agent=user_agent, timeout=timeout, client=client)

    async def lookup(self, postal_code: str) -> httpx.Response:
        return await self._get(f"{self.base_url}/us/{postal_code}")
