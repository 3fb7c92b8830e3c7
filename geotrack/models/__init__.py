"""Data models for tracking and geocoding."""

from geotrack.models.address import (
    GeocodeRequestKind,
    GeocodeResult,
    GeocoderSource,
    NormalizedAddress,
    Placemark,
    RawAddressFields,
)
from geotrack.models.location import (
    AuthorizationStatus,
    Coordinate,
    PositionSnapshot,
    TrackingState,
    UpdateMode,
    format_degrees,
)

__all__ = [
    "AuthorizationStatus",
    "Coordinate",
    "GeocodeRequestKind",
    "GeocodeResult",
    "GeocoderSource",
    "NormalizedAddress",
    "Placemark",
    "PositionSnapshot",
    "RawAddressFields",
    "TrackingState",
    "UpdateMode",
    "format_degrees",
]
