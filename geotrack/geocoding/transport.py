"""HTTP transport used by the HTTP geocoder."""

import logging
from collections.abc import Awaitable, Callable

import httpx

from geotrack.core.config import settings
from geotrack.core.errors import TransportFailure

logger = logging.getLogger(__name__)

Fetch = Callable[[str], Awaitable[bytes]]


def get_transport_headers() -> dict[str, str]:
    """Get standard headers for geocoder requests."""
    return {"User-Agent": f"{settings.app_name}/{settings.version}"}


class HttpTransport:
    """Fetches URLs with ``httpx`` and reports failures as TransportFailure."""

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.GEOCODER_TIMEOUT
        self._client = client

    async def fetch(self, url: str) -> bytes:
        """Fetch ``url`` and return the response body.

        Raises:
            TransportFailure: On network errors and non-2xx responses
        """
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(
                    headers=get_transport_headers(),
                    timeout=httpx.Timeout(self.timeout),
                ) as client:
                    response = await client.get(url)
            response.raise_for_status()
            return response.content
        except httpx.HTTPError as e:
            endpoint = url.split("?", 1)[0]
            logger.error(f"Error fetching {endpoint}: {type(e).__name__}: {str(e)}")
            raise TransportFailure(str(e) or type(e).__name__) from e

    async def __call__(self, url: str) -> bytes:
        return await self.fetch(url)
