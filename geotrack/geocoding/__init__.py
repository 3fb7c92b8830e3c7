"""Geocoding through a native geocoder or an HTTP geocoding API.

This package provides:
- Address normalization shared by both providers
- The HTTP geocoder and its transport
- The native (geopy backed) geocoder
- A service resolving requests through either provider
"""

from geotrack.geocoding.http import HttpGeocoder
from geotrack.geocoding.native import NativeGeocoder, placemark_from_location
from geotrack.geocoding.normalizer import AddressNormalizer, find_component
from geotrack.geocoding.service import (
    GeocodingService,
    get_geocoding_service,
)
from geotrack.geocoding.transport import HttpTransport

__all__ = [
    "AddressNormalizer",
    "GeocodingService",
    "HttpGeocoder",
    "HttpTransport",
    "NativeGeocoder",
    "find_component",
    "get_geocoding_service",
    "placemark_from_location",
]
