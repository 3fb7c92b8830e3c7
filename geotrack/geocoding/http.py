"""Geocoding through the HTTP geocoding API."""

import json
import logging
from urllib.parse import quote

from geotrack.core.config import settings
from geotrack.core.errors import ProviderStatusError, TransportFailure
from geotrack.geocoding.normalizer import AddressNormalizer
from geotrack.geocoding.transport import Fetch, HttpTransport
from geotrack.models.address import GeocodeResult
from geotrack.models.location import Coordinate, format_degrees

logger = logging.getLogger(__name__)


class HttpGeocoder:
    """Forward and reverse geocoding against a JSON geocoding endpoint.

    The endpoint answers ``{status, results: [...]}`` documents; replies are
    classified and normalized by :class:`AddressNormalizer`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        fetch: Fetch | None = None,
        normalizer: AddressNormalizer | None = None,
    ) -> None:
        self.base_url = (base_url or settings.GEOCODER_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.GOOGLE_MAPS_API_KEY
        self.fetch = fetch or HttpTransport()
        self.normalizer = normalizer or AddressNormalizer()

    def _finish_url(self, query: str) -> str:
        url = f"{self.base_url}?{query}&sensor=true"
        if self.api_key:
            url += f"&key={quote(self.api_key, safe='')}"
        return url

    def build_geocode_url(self, address: str) -> str:
        return self._finish_url(f"address={quote(address, safe=',')}")

    def build_reverse_url(self, coordinate: Coordinate) -> str:
        latlng = (
            f"{format_degrees(coordinate.latitude)},"
            f"{format_degrees(coordinate.longitude)}"
        )
        return self._finish_url(f"latlng={latlng}")

    async def geocode(self, address: str) -> GeocodeResult:
        """Resolve an address string to a normalized address."""
        return await self._perform(self.build_geocode_url(address))

    async def reverse(self, coordinate: Coordinate) -> GeocodeResult:
        """Resolve a coordinate to a normalized address."""
        return await self._perform(self.build_reverse_url(coordinate))

    async def _perform(self, url: str) -> GeocodeResult:
        try:
            body = await self.fetch(url)
        except TransportFailure as e:
            return GeocodeResult.failure(e.description)

        try:
            document = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"HTTP geocoder returned an undecodable body: {e}")
            return GeocodeResult.failure(ProviderStatusError("").description)

        return self.normalizer.classify_response(document)
