"""Error taxonomy for tracking and geocoding.

These exceptions are raised inside the package and converted to plain
error strings before they reach a caller's callback.
"""

INVALID_INPUT = "Invalid Input"
NO_PLACEMARKS_FOUND = "No Placemarks Found!"


class GeotrackError(Exception):
    """Base class for all geotrack errors."""

    @property
    def description(self) -> str:
        """Human readable description handed to callbacks."""
        return str(self)


class AuthorizationError(GeotrackError):
    """Raised when location access is denied, restricted or undecided."""

    def __init__(self, status: str, message: str = "") -> None:
        self.status = status
        super().__init__(message or status)


class CapabilityFailure(GeotrackError):
    """Raised when the device location subsystem reports an error."""


class TransportFailure(GeotrackError):
    """Raised when the HTTP geocoder cannot be reached."""


class ProviderStatusError(GeotrackError):
    """Raised when the HTTP geocoder answers with a non-OK status.

    ``expected`` is True for the statuses the provider documents for empty
    or refused results; any other status is reported as invalid input.
    """

    EXPECTED_STATUSES = frozenset(
        {"zero_results", "over_query_limit", "request_denied", "invalid_request"}
    )

    def __init__(self, status: str) -> None:
        self.status = status
        self.expected = status.lower() in self.EXPECTED_STATUSES
        super().__init__(status if self.expected else INVALID_INPUT)


class NoResultError(GeotrackError):
    """Raised when a geocoder returns no placemarks."""
