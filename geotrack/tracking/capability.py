"""Protocols for the device location capability and its event delegate."""

from collections.abc import Sequence
from typing import Protocol

from geotrack.models.location import AuthorizationStatus, Coordinate, UpdateMode


class LocationDelegate(Protocol):
    """Receiver of the capability's three event streams.

    The capability delivers every event on one sequential context.
    """

    def on_authorization_changed(self, status: AuthorizationStatus) -> None: ...

    def on_position_fixes(self, fixes: Sequence[Coordinate]) -> None: ...

    def on_failure(self, error: BaseException | str) -> None: ...


class LocationCapability(Protocol):
    """Operations the tracking controller needs from the location subsystem."""

    delegate: LocationDelegate | None

    def request_authorization(self) -> None: ...

    def begin_updates(self, mode: UpdateMode) -> None: ...

    def end_updates(self) -> None: ...

    def supports_significant_change(self) -> bool: ...
