"""Position and tracking state models."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def format_degrees(value: float) -> str:
    """Render a coordinate component with full round-trip precision."""
    return repr(float(value))


class Coordinate(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    @property
    def is_valid(self) -> bool:
        """Whether both components are finite and within geographic range."""
        return (
            math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
            and -90 <= self.latitude <= 90
            and -180 <= self.longitude <= 180
        )

    @property
    def latitude_as_string(self) -> str:
        return format_degrees(self.latitude)

    @property
    def longitude_as_string(self) -> str:
        return format_degrees(self.longitude)


class TrackingState(str, Enum):
    """States of the authorization/update state machine."""

    IDLE = "idle"
    AWAITING_AUTHORIZATION = "awaiting_authorization"
    ACTIVE = "active"
    DENIED = "denied"
    RESTRICTED = "restricted"
    FAILED = "failed"


class AuthorizationStatus(str, Enum):
    """Authorization outcomes reported by the location capability."""

    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"

    @property
    def is_authorized(self) -> bool:
        return self in (
            AuthorizationStatus.AUTHORIZED_ALWAYS,
            AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
        )


class UpdateMode(str, Enum):
    """Update delivery modes supported by the location capability."""

    CONTINUOUS = "continuous"
    SIGNIFICANT_CHANGE = "significant_change"


class PositionSnapshot(BaseModel):
    """Current and last known position of a tracking controller.

    ``current`` and ``last_known`` are replaced together on every accepted
    fix. Numeric mirrors read 0.0 and string mirrors read "" when the
    underlying coordinate is absent.
    """

    model_config = ConfigDict(frozen=True)

    current: Coordinate | None = None
    last_known: Coordinate | None = None
    has_last_known: bool = False

    @classmethod
    def from_fix(cls, coordinate: Coordinate) -> "PositionSnapshot":
        return cls(current=coordinate, last_known=coordinate, has_last_known=True)

    def cleared(self, keep_last_known: bool) -> "PositionSnapshot":
        """Return a snapshot without ``current``, and without ``last_known``
        unless it is retained."""
        if keep_last_known:
            return PositionSnapshot(
                current=None,
                last_known=self.last_known,
                has_last_known=self.has_last_known,
            )
        return PositionSnapshot()

    @property
    def latitude(self) -> float:
        return self.current.latitude if self.current else 0.0

    @property
    def longitude(self) -> float:
        return self.current.longitude if self.current else 0.0

    @property
    def latitude_as_string(self) -> str:
        return self.current.latitude_as_string if self.current else ""

    @property
    def longitude_as_string(self) -> str:
        return self.current.longitude_as_string if self.current else ""

    @property
    def last_known_latitude(self) -> float:
        return self.last_known.latitude if self.last_known else 0.0

    @property
    def last_known_longitude(self) -> float:
        return self.last_known.longitude if self.last_known else 0.0

    @property
    def last_known_latitude_as_string(self) -> str:
        return self.last_known.latitude_as_string if self.last_known else ""

    @property
    def last_known_longitude_as_string(self) -> str:
        return self.last_known.longitude_as_string if self.last_known else ""
