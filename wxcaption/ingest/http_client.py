"""Shared async HTTP plumbing for the upstream providers."""

import logging
from collections.abc import Awaitable

import httpx

from wxcaption.errors import UpstreamLookupError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "wxcaption/0.1.0"


class BaseApiClient:
    """Owns an httpx.AsyncClient. No retries: one failed response is final."""

    def __init__(
        self,
        base_url: str,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        accept: str = "application/json",
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": user_agent, "Accept": accept},
            timeout=timeout,
        )

    async def _get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        logger.debug("GET %s params=%s", url, params)
        return await self._client.get(url, params=params)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


async def required_json(request: Awaitable[httpx.Response], what: str) -> dict:
    """Await a request whose failure aborts the pipeline."""
    try:
        resp = await request
    except httpx.RequestError as e:
        logger.error("%s request error: %s", what, e)
        raise UpstreamLookupError(f"{what} failed") from e
    if not resp.is_success:
        logger.error("%s returned %d for %s", what, resp.status_code, resp.request.url)
        raise UpstreamLookupError(f"{what} failed", status_code=resp.status_code)
    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamLookupError(f"{what} returned invalid JSON") from e
    if not isinstance(data, dict):
        logger.error("%s returned a %s payload", what, type(data).__name__)
        raise UpstreamLookupError(f"{what} returned an unexpected payload")
    return data


def properties_of(data: dict) -> dict:
    """GeoJSON "properties" object, or {} when absent or not an object."""
    properties = data.get("properties")
    return properties if isinstance(properties, dict) else {}
