"""Address models shared by both geocoding paths."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from geotrack.models.location import Coordinate


class GeocodeRequestKind(str, Enum):
    """Direction of a geocoding request."""

    GEOCODE = "geocode"
    REVERSE_GEOCODE = "reverse_geocode"


class GeocoderSource(str, Enum):
    """Which provider resolves a geocoding request."""

    NATIVE = "native"
    HTTP = "http"


class NormalizedAddress(BaseModel):
    """Canonical address returned by every geocoding path.

    Every field is a string; absent values are empty strings.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    latitude: str = ""
    longitude: str = ""
    street_number: str = ""
    locality: str = ""
    sub_locality: str = ""
    administrative_area: str = ""
    postal_code: str = ""
    country: str = ""
    formatted_address: str = ""

    def as_dict(self) -> dict[str, str]:
        """The address keyed by its public camelCase names."""
        return self.model_dump(by_alias=True)


class RawAddressFields(BaseModel):
    """Provider specific superset of the normalized address fields."""

    model_config = ConfigDict(
        validate_assignment=True, alias_generator=to_camel, populate_by_name=True
    )

    latitude: str = ""
    longitude: str = ""
    street_number: str = ""
    route: str = ""
    locality: str = ""
    sub_locality: str = ""
    formatted_address: str = ""
    administrative_area: str = ""
    administrative_area_code: str = ""
    sub_administrative_area: str = ""
    postal_code: str = ""
    country: str = ""
    sub_thoroughfare: str = ""
    thoroughfare: str = ""
    iso_country_code: str = Field(default="", alias="ISOcountryCode")
    state: str = ""

    def to_normalized(self) -> NormalizedAddress:
        return NormalizedAddress(
            latitude=self.latitude,
            longitude=self.longitude,
            street_number=self.street_number,
            locality=self.locality,
            sub_locality=self.sub_locality,
            administrative_area=self.administrative_area,
            postal_code=self.postal_code,
            country=self.country,
            formatted_address=self.formatted_address,
        )


class Placemark(BaseModel):
    """Provider-neutral placemark.

    Mirrors what a device geocoder hands back; the HTTP path synthesizes one
    from its parsed fields.
    """

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate | None = None
    name: str | None = None
    street: str | None = None
    thoroughfare: str | None = None
    sub_thoroughfare: str | None = None
    locality: str | None = None
    sub_locality: str | None = None
    administrative_area: str | None = None
    sub_administrative_area: str | None = None
    postal_code: str | None = None
    post_code_extension: str | None = None
    country: str | None = None
    iso_country_code: str | None = None
    formatted_address_lines: list[str] = Field(default_factory=list)

    @property
    def city(self) -> str | None:
        return self.locality

    @property
    def state(self) -> str | None:
        return self.administrative_area

    @property
    def zip(self) -> str | None:
        return self.postal_code


class GeocodeResult(BaseModel):
    """Terminal outcome of one geocoding request.

    Exactly one of ``address`` and ``error`` is set; ``placemark`` accompanies
    a successful address.
    """

    model_config = ConfigDict(frozen=True)

    address: NormalizedAddress | None = None
    placemark: Placemark | None = None
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> "GeocodeResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
