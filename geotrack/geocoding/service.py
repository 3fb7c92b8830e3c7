"""Geocoding service combining the native and HTTP providers.

Every request runs as its own coroutine, so any number of forward and
reverse lookups may be in flight at once. The callback entry points
(``resolve_address`` and ``resolve_coordinate``) schedule one task per
request and return it as the request handle.
"""

import asyncio
import uuid
from collections.abc import Awaitable, Callable

from prometheus_client import Counter

from geotrack.core.logging import get_request_logger
from geotrack.geocoding.http import HttpGeocoder
from geotrack.geocoding.native import NativeGeocoder
from geotrack.geocoding.normalizer import AddressNormalizer
from geotrack.models.address import (
    GeocodeRequestKind,
    GeocodeResult,
    GeocoderSource,
    NormalizedAddress,
    Placemark,
)
from geotrack.models.location import Coordinate

GeocodeCompletion = Callable[
    [NormalizedAddress | None, Placemark | None, str | None], None
]

GEOCODE_REQUESTS = Counter(
    "geotrack_geocode_requests_total",
    "Total number of geocoding requests",
    ["source", "kind", "outcome"],
)


def as_coordinate(value: Coordinate | tuple[float, float]) -> Coordinate:
    """Accept either a Coordinate or a ``(latitude, longitude)`` pair."""
    if isinstance(value, Coordinate):
        return value
    latitude, longitude = value
    return Coordinate(latitude=latitude, longitude=longitude)


class GeocodingService:
    """Resolves addresses and coordinates through either provider."""

    def __init__(
        self,
        native: NativeGeocoder | None = None,
        http: HttpGeocoder | None = None,
        normalizer: AddressNormalizer | None = None,
    ) -> None:
        self.normalizer = normalizer or AddressNormalizer()
        self._native = native
        self._http = http
        self._pending: set[asyncio.Task[GeocodeResult]] = set()

    @property
    def native(self) -> NativeGeocoder:
        if self._native is None:
            self._native = NativeGeocoder(normalizer=self.normalizer)
        return self._native

    @property
    def http(self) -> HttpGeocoder:
        if self._http is None:
            self._http = HttpGeocoder(normalizer=self.normalizer)
        return self._http

    def _provider(self, source: GeocoderSource) -> NativeGeocoder | HttpGeocoder:
        return self.native if source == GeocoderSource.NATIVE else self.http

    async def reverse_geocode(
        self,
        coordinate: Coordinate | tuple[float, float],
        source: GeocoderSource = GeocoderSource.HTTP,
    ) -> GeocodeResult:
        """Resolve a coordinate to an address.

        Never raises; failures are returned in ``GeocodeResult.error``.
        """
        return await self._run(
            source,
            GeocodeRequestKind.REVERSE_GEOCODE,
            lambda: self._provider(source).reverse(as_coordinate(coordinate)),
        )

    async def geocode(
        self, address: str, source: GeocoderSource = GeocoderSource.HTTP
    ) -> GeocodeResult:
        """Resolve an address string to coordinates and a normalized address.

        Never raises; failures are returned in ``GeocodeResult.error``.
        """
        return await self._run(
            source,
            GeocodeRequestKind.GEOCODE,
            lambda: self._provider(source).geocode(address),
        )

    def resolve_address(
        self,
        coordinate: Coordinate | tuple[float, float],
        source: GeocoderSource,
        completion: GeocodeCompletion,
    ) -> asyncio.Task[GeocodeResult]:
        """Schedule a reverse geocode and deliver it to ``completion``.

        Must be called from a running event loop. Returns the task handling
        this request.
        """
        return self._schedule(self.reverse_geocode(coordinate, source), completion)

    def resolve_coordinate(
        self, address: str, source: GeocoderSource, completion: GeocodeCompletion
    ) -> asyncio.Task[GeocodeResult]:
        """Schedule a forward geocode and deliver it to ``completion``.

        Must be called from a running event loop. Returns the task handling
        this request.
        """
        return self._schedule(self.geocode(address, source), completion)

    async def _run(
        self,
        source: GeocoderSource,
        kind: GeocodeRequestKind,
        request: Callable[[], Awaitable[GeocodeResult]],
    ) -> GeocodeResult:
        log = get_request_logger(uuid.uuid4().hex).bind(
            source=source.value, kind=kind.value
        )
        log.debug("geocode_request_started")
        try:
            result = await request()
        except Exception as e:
            log.exception("geocode_request_crashed", error=str(e))
            result = GeocodeResult.failure(str(e) or type(e).__name__)

        outcome = "ok" if result.ok else "error"
        GEOCODE_REQUESTS.labels(
            source=source.value, kind=kind.value, outcome=outcome
        ).inc()
        if result.ok:
            log.info("geocode_request_finished")
        else:
            log.warning("geocode_request_failed", error=result.error)
        return result

    def _schedule(
        self, request: Awaitable[GeocodeResult], completion: GeocodeCompletion
    ) -> asyncio.Task[GeocodeResult]:
        async def deliver() -> GeocodeResult:
            try:
                result = await request
            except Exception as e:
                get_request_logger().exception("geocode_request_raised", error=str(e))
                result = GeocodeResult.failure(str(e) or type(e).__name__)
            try:
                completion(result.address, result.placemark, result.error)
            except Exception as e:
                get_request_logger().exception(
                    "geocode_completion_raised", error=str(e)
                )
            return result

        task = asyncio.get_running_loop().create_task(deliver())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task


_geocoding_service = None


def get_geocoding_service() -> GeocodingService:
    """Get the shared geocoding service instance.

    Returns:
        GeocodingService instance
    """
    global _geocoding_service
    if _geocoding_service is None:
        _geocoding_service = GeocodingService()
    return _geocoding_service
