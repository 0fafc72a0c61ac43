"""Postal code to coordinate and place label."""

import logging

from wxcaption.errors import UpstreamLookupError
from wxcaption.ingest.http_client import required_json
from wxcaption.ingest.zippopotam_client import ZippopotamClient
from wxcaption.models.location import Coordinate, ResolvedPlace
from wxcaption.storage.cache import CacheStore, zip_key

logger = logging.getLogger(__name__)


class GeoResolver:
    def __init__(self, client: ZippopotamClient, cache: CacheStore):
        self.client = client
        self.cache = cache

    async def resolve(self, postal_code: str) -> ResolvedPlace:
        key = zip_key(postal_code)
        cached = self.cache.get(key)
        if cached is not None:
            place = _from_cached(cached)
            if place is not None:
                return place
            self.cache.delete(key)

        data = await required_json(self.client.lookup(postal_code), "ZIP lookup")
        resolved = _parse_zip_response(data, postal_code)
        self.cache.set(
            key,
            {
                "lat": resolved.coordinate.lat,
                "lon": resolved.coordinate.lon,
                "place": resolved.place,
            },
        )
        return resolved


def _parse_zip_response(data: dict, postal_code: str) -> ResolvedPlace:
    places = data.get("places")
    if not isinstance(places, list) or not places or not isinstance(places[0], dict):
        raise UpstreamLookupError(f"ZIP lookup returned no places for {postal_code}")
    first = places[0]
    try:
        coord = Coordinate(float(first["latitude"]), float(first["longitude"]))
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamLookupError(f"ZIP lookup returned no coordinates for {postal_code}") from e
    # Zippopotam nests the state inside each place; the country sits at the top.
    region = (
        first.get("state abbreviation")
        or data.get("state abbreviation")
        or data.get("country abbreviation")
        or ""
    )
    label = f"{first.get('place name', postal_code)}, {region}"
    logger.debug("Resolved %s to %s (%s)", postal_code, label, coord.rounded())
    return ResolvedPlace(coordinate=coord, place=label)


def _from_cached(cached) -> ResolvedPlace | None:
    try:
        return ResolvedPlace(
            coordinate=Coordinate(float(cached["lat"]), float(cached["lon"])),
            place=str(cached["place"]),
        )
    except (KeyError, TypeError, ValueError):
        return None
