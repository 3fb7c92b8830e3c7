"""Geocoding through a geopy geocoder standing in for the device geocoder."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim
from geopy.location import Location

from geotrack.core.config import settings
from geotrack.core.errors import NO_PLACEMARKS_FOUND, NoResultError
from geotrack.geocoding.normalizer import AddressNormalizer
from geotrack.models.address import GeocodeResult, Placemark
from geotrack.models.location import Coordinate

logger = logging.getLogger(__name__)


def _first(address: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = address.get(key)
        if value:
            return str(value)
    return None


def placemark_from_location(location: Location) -> Placemark:
    """Convert a geopy ``Location`` into a :class:`Placemark`.

    Nominatim-style ``address`` details are mapped onto placemark fields;
    providers without them still yield the coordinate and address lines.
    """
    raw = location.raw if isinstance(location.raw, Mapping) else {}
    address = raw.get("address") or {}

    house_number = _first(address, "house_number")
    road = _first(address, "road", "pedestrian", "street")
    street = " ".join(part for part in (house_number, road) if part) or None
    country_code = _first(address, "country_code")

    lines = [
        line.strip() for line in (location.address or "").split(",") if line.strip()
    ]

    return Placemark(
        coordinate=Coordinate(latitude=location.latitude, longitude=location.longitude),
        name=_first(raw, "name"),
        street=street,
        thoroughfare=road,
        sub_thoroughfare=house_number,
        locality=_first(address, "city", "town", "village", "hamlet"),
        sub_locality=_first(address, "suburb", "neighbourhood", "quarter"),
        administrative_area=_first(address, "state"),
        sub_administrative_area=_first(address, "county"),
        postal_code=_first(address, "postcode"),
        country=_first(address, "country"),
        iso_country_code=country_code.upper() if country_code else None,
        formatted_address_lines=lines,
    )


class NativeGeocoder:
    """Forward and reverse geocoding through a geopy geocoder.

    geopy geocoders block, so every lookup runs in a worker thread.
    """

    def __init__(
        self,
        geocoder: Any | None = None,
        normalizer: AddressNormalizer | None = None,
    ) -> None:
        self.geocoder = geocoder or Nominatim(
            user_agent=settings.NOMINATIM_USER_AGENT,
            timeout=settings.GEOCODER_TIMEOUT,
        )
        self.normalizer = normalizer or AddressNormalizer()

    async def geocode(self, address: str) -> GeocodeResult:
        """Resolve an address string to a normalized address."""
        return await self._perform(
            self.geocoder.geocode,
            address,
            empty_error=f"invalid address: {address}",
        )

    async def reverse(self, coordinate: Coordinate) -> GeocodeResult:
        """Resolve a coordinate to a normalized address."""
        return await self._perform(
            self.geocoder.reverse,
            (coordinate.latitude, coordinate.longitude),
            empty_error=NO_PLACEMARKS_FOUND,
        )

    async def _perform(
        self, lookup: Any, query: Any, empty_error: str
    ) -> GeocodeResult:
        try:
            location = await asyncio.to_thread(lookup, query, exactly_one=True)
        except GeopyError as e:
            logger.warning(f"Native geocoder failed: {e}")
            return GeocodeResult.failure(str(e) or type(e).__name__)

        try:
            placemark = self._first_placemark(location, empty_error)
        except NoResultError as e:
            return GeocodeResult.failure(e.description)

        return GeocodeResult(
            address=self.normalizer.normalize_native(placemark),
            placemark=placemark,
        )

    def _first_placemark(self, location: Any, empty_error: str) -> Placemark:
        if isinstance(location, list):
            location = location[0] if location else None
        if location is None:
            raise NoResultError(empty_error)
        return placemark_from_location(location)
