"""Authorization and update state machine for device location tracking.

The controller is the delegate of a :class:`LocationCapability`. Every
transition and snapshot update happens inside one of its ``on_*`` handlers or
in ``start_tracking``/``stop_tracking``; all of them must be called from the
capability's delivery context. The controller holds no locks.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from prometheus_client import Counter

from geotrack.core.config import settings
from geotrack.core.errors import GeotrackError
from geotrack.models.location import (
    AuthorizationStatus,
    Coordinate,
    PositionSnapshot,
    TrackingState,
    UpdateMode,
)
from geotrack.tracking.capability import LocationCapability
from geotrack.tracking.messages import (
    STATUS_CALIBRATING,
    status_label,
    verbose_message,
)

logger = logging.getLogger(__name__)

ResultCallback = Callable[[float, float, str, str, str | None], None]
StatusCallback = Callable[[str], None]
ErrorCallback = Callable[[str], None]
VerboseCallback = Callable[[str], None]
LocationFoundCallback = Callable[[float, float], None]
LocationFoundAsStringCallback = Callable[[str, str], None]

TRACKING_TRANSITIONS = Counter(
    "geotrack_tracking_transitions_total",
    "Total number of tracking state transitions",
    ["state"],
)


class TrackingController:
    """Drives a location capability and reports positions to callbacks.

    Configuration switches are plain attributes and take effect on the next
    transition or fix:

    - ``force_continuous``: always use continuous updates
    - ``keep_last_known``: keep ``last_known`` when tracking stops or fails
    - ``verbose``: pass the explanatory status text to result callbacks
    """

    def __init__(
        self,
        capability: LocationCapability,
        *,
        force_continuous: bool | None = None,
        keep_last_known: bool | None = None,
        verbose: bool | None = None,
        on_status: StatusCallback | None = None,
        on_error: ErrorCallback | None = None,
        on_verbose_message: VerboseCallback | None = None,
        on_location_found: LocationFoundCallback | None = None,
        on_location_found_as_string: LocationFoundAsStringCallback | None = None,
    ) -> None:
        self.capability = capability
        self.force_continuous = (
            settings.FORCE_CONTINUOUS_UPDATES
            if force_continuous is None
            else force_continuous
        )
        self.keep_last_known = (
            settings.KEEP_LAST_KNOWN_LOCATION
            if keep_last_known is None
            else keep_last_known
        )
        self.verbose = settings.SHOW_VERBOSE_MESSAGE if verbose is None else verbose

        self.on_status = on_status
        self.on_error = on_error
        self.on_verbose_message = on_verbose_message
        self.on_location_found = on_location_found
        self.on_location_found_as_string = on_location_found_as_string

        self._on_result: ResultCallback | None = None
        self._state = TrackingState.IDLE
        self._status = STATUS_CALIBRATING
        self._verbose_message = STATUS_CALIBRATING
        self._snapshot = PositionSnapshot()
        self._mode: UpdateMode | None = None

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def status(self) -> str:
        """Label of the most recent authorization outcome."""
        return self._status

    @property
    def verbose_message(self) -> str:
        return self._verbose_message

    @property
    def snapshot(self) -> PositionSnapshot:
        return self._snapshot

    @property
    def is_running(self) -> bool:
        return self._state == TrackingState.ACTIVE

    @property
    def update_mode(self) -> UpdateMode | None:
        """Mode of the updates currently running, if any."""
        return self._mode

    def start_tracking(self, on_result: ResultCallback | None = None) -> None:
        """Register the result callback and request authorization.

        Calling this again after a decision (including while active)
        re-requests authorization; the capability answers through
        :meth:`on_authorization_changed`.
        """
        if on_result is not None:
            self._on_result = on_result

        if self._state == TrackingState.ACTIVE:
            self._end_updates()

        self.capability.delegate = self
        self._transition(TrackingState.AWAITING_AUTHORIZATION)
        self.capability.request_authorization()

    def stop_tracking(self) -> None:
        """Halt updates and apply the retention policy.

        A no-op when the controller is already idle. Outstanding geocoding
        requests are unaffected.
        """
        if self._state == TrackingState.IDLE:
            return

        if self._state == TrackingState.ACTIVE:
            self._end_updates()

        self._reset_position()
        self._transition(TrackingState.IDLE)

    def on_authorization_changed(self, status: AuthorizationStatus) -> None:
        """Handle an authorization decision from the capability.

        Decisions arriving while idle or failed are ignored; only
        :meth:`start_tracking` leaves those states.
        """
        if self._state in (TrackingState.IDLE, TrackingState.FAILED):
            logger.info(
                f"Ignoring authorization {status.value} in state {self._state.value}"
            )
            return

        self._status = status_label(status)
        self._verbose_message = verbose_message(status)

        if status.is_authorized:
            if self._state != TrackingState.ACTIVE:
                self._begin_updates()
            return

        if self._state == TrackingState.ACTIVE:
            self._end_updates()

        self._reset_position()
        match status:
            case AuthorizationStatus.DENIED:
                self._transition(TrackingState.DENIED)
            case AuthorizationStatus.RESTRICTED:
                self._transition(TrackingState.RESTRICTED)
            case _:
                self._transition(TrackingState.AWAITING_AUTHORIZATION)

        # Denied is only reported through the status callback.
        if status != AuthorizationStatus.DENIED:
            verbose = ""
            if self.verbose:
                verbose = self._verbose_message
                self._notify(self.on_verbose_message, verbose)
            self._notify(
                self._on_result,
                self._snapshot.latitude,
                self._snapshot.longitude,
                self._status,
                verbose,
                None,
            )

        self._notify(self.on_status, self._status)

    def on_position_fix(self, coordinate: Coordinate) -> None:
        """Accept one fix while active; anything else is dropped."""
        if self._state != TrackingState.ACTIVE:
            logger.debug(f"Dropping fix received in state {self._state.value}")
            return
        if not coordinate.is_valid:
            logger.warning(
                f"Dropping invalid fix ({coordinate.latitude}, {coordinate.longitude})"
            )
            return

        self._snapshot = PositionSnapshot.from_fix(coordinate)

        self._notify(
            self._on_result,
            coordinate.latitude,
            coordinate.longitude,
            self._status,
            self._verbose_text(),
            None,
        )
        self._notify(
            self.on_location_found_as_string,
            coordinate.latitude_as_string,
            coordinate.longitude_as_string,
        )
        self._notify(self.on_location_found, coordinate.latitude, coordinate.longitude)

    def on_position_fixes(self, fixes: Sequence[Coordinate]) -> None:
        """Accept a batch of fixes; only the most recent one is used."""
        if fixes:
            self.on_position_fix(fixes[-1])

    def on_failure(self, error: BaseException | str) -> None:
        """Handle a failure reported by the location subsystem."""
        if isinstance(error, GeotrackError):
            description = error.description
        else:
            description = str(error)
        logger.warning(f"Location capability failed: {description}")

        if self._state == TrackingState.ACTIVE:
            self._end_updates()
        self._reset_position()
        self._transition(TrackingState.FAILED)

        self._notify(
            self._on_result, 0.0, 0.0, self._status, self._verbose_text(), description
        )
        self._notify(self.on_error, description)

    def _select_mode(self) -> UpdateMode:
        if self.force_continuous or not self.capability.supports_significant_change():
            return UpdateMode.CONTINUOUS
        return UpdateMode.SIGNIFICANT_CHANGE

    def _begin_updates(self) -> None:
        self._mode = self._select_mode()
        self.capability.begin_updates(self._mode)
        self._transition(TrackingState.ACTIVE)

    def _end_updates(self) -> None:
        self.capability.end_updates()
        self._mode = None

    def _reset_position(self) -> None:
        self._snapshot = self._snapshot.cleared(self.keep_last_known)

    def _verbose_text(self) -> str:
        return self._verbose_message if self.verbose else ""

    def _transition(self, state: TrackingState) -> None:
        if state == self._state:
            return
        logger.info(f"Tracking state {self._state.value} -> {state.value}")
        self._state = state
        TRACKING_TRANSITIONS.labels(state=state.value).inc()

    def _notify(self, callback: Callable[..., Any] | None, *args: Any) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.exception(f"Tracking callback {callback!r} raised: {e}")
