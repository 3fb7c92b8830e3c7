"""Location tracking state machine."""

from geotrack.tracking.capability import LocationCapability, LocationDelegate
from geotrack.tracking.controller import TrackingController
from geotrack.tracking.messages import (
    STATUS_ALLOWED,
    STATUS_CALIBRATING,
    STATUS_DENIED,
    STATUS_NOT_DETERMINED,
    STATUS_RESTRICTED,
    status_label,
    verbose_message,
)

__all__ = [
    "LocationCapability",
    "LocationDelegate",
    "STATUS_ALLOWED",
    "STATUS_CALIBRATING",
    "STATUS_DENIED",
    "STATUS_NOT_DETERMINED",
    "STATUS_RESTRICTED",
    "TrackingController",
    "status_label",
    "verbose_message",
]
