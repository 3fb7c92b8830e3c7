"""Normalization of native and HTTP geocoder results.

Both providers are reduced to :class:`RawAddressFields` and projected to the
same :class:`NormalizedAddress`. The HTTP provider has no placemark of its
own, so one is synthesized from the parsed fields.

All functions here are pure; the normalizer keeps no state between calls.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from geotrack.core.errors import (
    NO_PLACEMARKS_FOUND,
    NoResultError,
    ProviderStatusError,
)
from geotrack.models.address import (
    GeocodeResult,
    NormalizedAddress,
    Placemark,
    RawAddressFields,
)
from geotrack.models.location import Coordinate, format_degrees

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
ADDRESS_LINE_SEPARATOR = ", "

# Component names used by the HTTP geocoder's address breakdown
COMPONENT_STREET_NUMBER = "street_number"
COMPONENT_ROUTE = "route"
COMPONENT_LOCALITY = "locality"
COMPONENT_SUB_LOCALITY = "sublocality"
COMPONENT_POSTAL_CODE = "postal_code"
COMPONENT_ADMIN_AREA = "administrative_area_level_1"
COMPONENT_SUB_ADMIN_AREA = "administrative_area_level_2"
COMPONENT_COUNTRY = "country"

LONG_NAME = "long_name"
SHORT_NAME = "short_name"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> Sequence[Any]:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return value
    return []


def find_component(
    components: Sequence[Mapping[str, Any]], name: str, key: str = LONG_NAME
) -> str:
    """Return ``key`` of the first component whose first type is ``name``.

    Args:
        components: The ``address_components`` list of one result
        name: Component name to look for (e.g. "locality")
        key: Either ``long_name`` or ``short_name``

    Returns:
        The component value, or an empty string when the component is
        missing or blank
    """
    for component in components:
        if not isinstance(component, Mapping):
            continue
        types = _sequence(component.get("types"))
        if types and types[0] == name:
            return _text(component.get(key))
    return ""


class AddressNormalizer:
    """Converts raw geocoder output into :class:`NormalizedAddress` records."""

    def parse_native(self, placemark: Placemark) -> RawAddressFields:
        """Collect the fields of a native geocoder placemark.

        Args:
            placemark: Placemark returned by the native geocoder

        Returns:
            Raw fields with empty strings for everything the placemark lacks
        """
        fields = RawAddressFields(
            # The native path fills the street number from the thoroughfare.
            street_number=_text(placemark.thoroughfare),
            thoroughfare=_text(placemark.thoroughfare),
            sub_thoroughfare=_text(placemark.sub_thoroughfare),
            locality=_text(placemark.locality),
            postal_code=_text(placemark.postal_code),
            sub_locality=_text(placemark.sub_locality),
            administrative_area=_text(placemark.administrative_area),
            sub_administrative_area=_text(placemark.sub_administrative_area),
            country=_text(placemark.country),
            iso_country_code=_text(placemark.iso_country_code),
            formatted_address=ADDRESS_LINE_SEPARATOR.join(
                placemark.formatted_address_lines
            ),
        )
        if placemark.coordinate is not None:
            fields.latitude = format_degrees(placemark.coordinate.latitude)
            fields.longitude = format_degrees(placemark.coordinate.longitude)
        return fields

    def parse_http(self, document: Mapping[str, Any]) -> RawAddressFields:
        """Collect the fields of the first result of an HTTP geocoder reply.

        Args:
            document: Decoded JSON body with a non-empty ``results`` list

        Returns:
            Raw fields parsed from ``results[0]``

        Raises:
            NoResultError: If the document carries no results
        """
        results = _sequence(document.get("results"))
        if not results or not isinstance(results[0], Mapping):
            raise NoResultError(NO_PLACEMARKS_FOUND)

        result = results[0]
        components = _sequence(result.get("address_components"))
        geometry = _mapping(result.get("geometry"))
        location = _mapping(geometry.get("location"))

        fields = RawAddressFields(
            formatted_address=_text(result.get("formatted_address"))
        )
        try:
            fields.latitude = format_degrees(location["lat"])
            fields.longitude = format_degrees(location["lng"])
        except (KeyError, TypeError, ValueError):
            fields.latitude = fields.longitude = ""

        fields.sub_thoroughfare = find_component(components, COMPONENT_STREET_NUMBER)
        fields.street_number = fields.sub_thoroughfare
        fields.thoroughfare = find_component(components, COMPONENT_ROUTE)
        fields.route = fields.thoroughfare
        fields.locality = find_component(components, COMPONENT_LOCALITY)
        fields.sub_locality = find_component(components, COMPONENT_SUB_LOCALITY)
        fields.postal_code = find_component(components, COMPONENT_POSTAL_CODE)
        fields.administrative_area = find_component(components, COMPONENT_ADMIN_AREA)
        fields.administrative_area_code = find_component(
            components, COMPONENT_ADMIN_AREA, SHORT_NAME
        )
        fields.state = fields.administrative_area_code
        fields.sub_administrative_area = find_component(
            components, COMPONENT_SUB_ADMIN_AREA
        )
        fields.country = find_component(components, COMPONENT_COUNTRY)
        fields.iso_country_code = find_component(
            components, COMPONENT_COUNTRY, SHORT_NAME
        )
        return fields

    def synthesize_placemark(self, fields: RawAddressFields) -> Placemark:
        """Build a provider-neutral placemark from HTTP geocoder fields."""
        lines = fields.formatted_address.split(ADDRESS_LINE_SEPARATOR)

        coordinate = None
        try:
            coordinate = Coordinate(
                latitude=float(fields.latitude), longitude=float(fields.longitude)
            )
        except ValueError:
            logger.debug("Placemark synthesized without a coordinate")

        return Placemark(
            coordinate=coordinate,
            street=lines[0],
            thoroughfare=fields.thoroughfare,
            sub_thoroughfare=fields.sub_thoroughfare,
            locality=fields.locality,
            sub_locality=fields.sub_locality,
            administrative_area=fields.administrative_area_code,
            sub_administrative_area=fields.sub_administrative_area,
            postal_code=fields.postal_code,
            post_code_extension="",
            country=fields.country,
            iso_country_code=fields.iso_country_code,
            formatted_address_lines=lines,
        )

    def normalize_native(self, placemark: Placemark) -> NormalizedAddress:
        return self.parse_native(placemark).to_normalized()

    def normalize_http(self, document: Mapping[str, Any]) -> NormalizedAddress:
        return self.parse_http(document).to_normalized()

    def classify_response(self, document: Mapping[str, Any]) -> GeocodeResult:
        """Turn a decoded HTTP geocoder reply into a :class:`GeocodeResult`.

        ``OK`` yields an address and a synthesized placemark. The four
        documented empty/refused statuses are reported verbatim; any other
        status is reported as ``"Invalid Input"``.
        """
        if not isinstance(document, Mapping):
            return GeocodeResult.failure(ProviderStatusError("").description)

        raw_status = _text(document.get("status"))

        if raw_status.lower() != STATUS_OK:
            error = ProviderStatusError(raw_status)
            logger.warning(f"HTTP geocoder returned status {raw_status!r}")
            return GeocodeResult.failure(error.description)

        try:
            fields = self.parse_http(document)
        except NoResultError as e:
            return GeocodeResult.failure(e.description)

        return GeocodeResult(
            address=fields.to_normalized(),
            placemark=self.synthesize_placemark(fields),
        )
