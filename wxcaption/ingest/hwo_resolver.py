"""Hazardous Weather Outlook lookup with a two-tier fallback.

The HWO is not reliably present in the alerts feed, so resolution tries:

1. the alerts endpoint filtered by the HWO event name for the coordinate;
2. the issuing office's product catalog, scanning entries for an HWO and
   pulling the text from the linked product document.

Each tier absorbs its own failures. When neither finds anything the
resolver returns None, which callers render as "no outlook available".
"""

import json
import logging
from collections.abc import Callable, Sequence
from typing import Any

from wxcaption.ingest.nws_client import HWO_EVENT, NwsClient
from wxcaption.models.location import Coordinate
from wxcaption.models.outlook import HazardOutlook, OutlookSource
from wxcaption.storage.cache import CacheStore, products_key

logger = logging.getLogger(__name__)

HWO_MARKER = "hazardous weather outlook"
HWO_PRODUCT_CODE = "HWO"

TextStrategy = Callable[[Any], str | None]


def field_text(*path: str) -> TextStrategy:
    """Strategy returning the non-blank string found at a key path, if any."""

    def extract(doc: Any) -> str | None:
        value = doc
        for key in path:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    extract.__name__ = "field_text_" + "_".join(path)
    return extract


# Product documents do not share a schema; first hit wins.
DOCUMENT_TEXT_STRATEGIES: tuple[TextStrategy, ...] = (
    field_text("productText"),
    field_text("text"),
    field_text("body"),
    field_text("content"),
    field_text("description"),
    field_text("properties", "productText"),
    field_text("properties", "description"),
)

ENTRY_SUMMARY_STRATEGIES: tuple[TextStrategy, ...] = (
    field_text("summary"),
    field_text("description"),
    field_text("productName"),
    field_text("title"),
    field_text("name"),
)

TITLE_STRATEGIES: tuple[TextStrategy, ...] = (
    field_text("productName"),
    field_text("title"),
    field_text("headline"),
    field_text("name"),
)

URL_FIELDS = ("@id", "url", "href", "link")


def first_text(doc: Any, strategies: Sequence[TextStrategy]) -> str | None:
    for strategy in strategies:
        text = strategy(doc)
        if text is not None:
            return text
    return None


def catalog_entries(catalog: Any) -> list[dict]:
    """Entries of a product catalog, wherever the payload keeps them."""
    if isinstance(catalog, list):
        items = catalog
    elif isinstance(catalog, dict):
        items = []
        for key in ("@graph", "features", "products", "items"):
            if isinstance(catalog.get(key), list):
                items = catalog[key]
                break
    else:
        items = []
    return [e for e in items if isinstance(e, dict)]


def is_hwo_entry(entry: dict) -> bool:
    """Match on the serialized entry text, or an explicit HWO product code.

    The text match runs over the whole entry, so a description merely
    mentioning the phrase also matches.
    """
    for candidate in (entry, entry.get("properties")):
        if isinstance(candidate, dict):
            code = candidate.get("productCode") or candidate.get("product_type")
            if isinstance(code, str) and code.upper() == HWO_PRODUCT_CODE:
                return True
    try:
        serialized = json.dumps(entry).lower()
    except (TypeError, ValueError):
        return False
    return HWO_MARKER in serialized


class HWOResolver:
    def __init__(self, client: NwsClient, cache: CacheStore):
        self.client = client
        self.cache = cache

    async def resolve(self, coord: Coordinate, office: str | None) -> HazardOutlook | None:
        try:
            outlook = await self._from_alerts(coord)
        except Exception:
            logger.warning("HWO alert query failed for %s", coord.rounded(), exc_info=True)
            outlook = None
        if outlook is not None:
            return outlook

        if not office:
            logger.debug("No office for %s, skipping product catalog", coord.rounded())
            return None
        try:
            outlook = await self._from_products(office)
        except Exception:
            logger.warning("HWO product scan failed for office %s", office, exc_info=True)
            outlook = None
        if outlook is None:
            logger.info("No hazardous weather outlook found for %s", coord.rounded())
        return outlook

    async def _from_alerts(self, coord: Coordinate) -> HazardOutlook | None:
        resp = await self.client.get_alerts(coord, HWO_EVENT)
        if not resp.is_success:
            logger.debug("HWO alert query returned %d", resp.status_code)
            return None
        features = resp.json().get("features") or []
        if not features:
            return None
        feature = features[0]
        props = feature.get("properties") or {}
        return HazardOutlook(
            source=OutlookSource.ALERTS,
            title=props.get("headline") or props.get("event") or HWO_EVENT,
            text=props.get("description") or props.get("instruction") or "",
            raw=feature,
        )

    async def _from_products(self, office: str) -> HazardOutlook | None:
        catalog = await self._product_catalog(office)
        if catalog is None:
            return None
        entry = next((e for e in catalog_entries(catalog) if is_hwo_entry(e)), None)
        if entry is None:
            return None

        url = self._document_url(entry)
        if url is not None:
            document = await self._fetch_document(url)
            if document is not None:
                text = first_text(document, DOCUMENT_TEXT_STRATEGIES)
                if text is not None:
                    return HazardOutlook(
                        source=OutlookSource.PRODUCTS,
                        title=first_text(document, TITLE_STRATEGIES)
                        or first_text(entry, TITLE_STRATEGIES)
                        or HWO_EVENT,
                        text=text,
                        raw=document,
                    )

        summary = first_text(entry, ENTRY_SUMMARY_STRATEGIES)
        if summary is None:
            return None
        return HazardOutlook(
            source=OutlookSource.PRODUCTS,
            title=first_text(entry, TITLE_STRATEGIES) or HWO_EVENT,
            text=summary,
            raw=entry,
        )

    async def _product_catalog(self, office: str) -> Any | None:
        key = products_key(office)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        resp = await self.client.get_products(office)
        if not resp.is_success:
            logger.debug("Product catalog for %s returned %d", office, resp.status_code)
            return None
        catalog = resp.json()
        self.cache.set(key, catalog)
        return catalog

    async def _fetch_document(self, url: str) -> Any | None:
        resp = await self.client.get_document(url)
        if not resp.is_success:
            logger.debug("Product document %s returned %d", url, resp.status_code)
            return None
        return resp.json()

    def _document_url(self, entry: dict) -> str | None:
        for field in URL_FIELDS:
            value = entry.get(field)
            if isinstance(value, str) and value.startswith(("http://", "https://")):
                return value
        product_id = entry.get("id")
        if isinstance(product_id, str) and product_id:
            if product_id.startswith(("http://", "https://")):
                return product_id
            return self.client.product_url(product_id)
        return None
