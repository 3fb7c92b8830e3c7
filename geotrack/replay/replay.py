"""Replay recorded location sessions through a tracking controller."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from geotrack.core.errors import CapabilityFailure
from geotrack.models.location import AuthorizationStatus, Coordinate, UpdateMode
from geotrack.tracking.capability import LocationDelegate
from geotrack.tracking.controller import TrackingController

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB limit


class ReplaySession(BaseModel):
    """A recorded session: one authorization outcome, fixes, optional failure."""

    authorization: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE
    significant_change: bool = True
    fixes: list[Coordinate] = Field(default_factory=list)
    failure: str | None = None

    @field_validator("fixes", mode="before")
    @classmethod
    def coerce_pairs(cls, value: Any) -> Any:
        """Allow fixes recorded as ``[latitude, longitude]`` pairs."""
        if not isinstance(value, list):
            return value
        return [
            {"latitude": item[0], "longitude": item[1]}
            if isinstance(item, (list, tuple)) and len(item) == 2
            else item
            for item in value
        ]


class ReplayLocationCapability:
    """In-memory location capability that plays back recorded events.

    Events are delivered synchronously on the caller's thread, which makes
    that thread the controller's delivery context.
    """

    def __init__(
        self,
        authorization: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
        significant_change: bool = True,
    ) -> None:
        self.delegate: LocationDelegate | None = None
        self.authorization = authorization
        self.significant_change = significant_change
        self.mode: UpdateMode | None = None
        self.authorization_requests = 0

    @property
    def running(self) -> bool:
        return self.mode is not None

    def request_authorization(self) -> None:
        self.authorization_requests += 1
        if self.delegate is not None:
            self.delegate.on_authorization_changed(self.authorization)

    def begin_updates(self, mode: UpdateMode) -> None:
        self.mode = mode

    def end_updates(self) -> None:
        self.mode = None

    def supports_significant_change(self) -> bool:
        return self.significant_change

    def deliver(self, fixes: Sequence[Coordinate]) -> None:
        """Deliver each fix to the delegate, one at a time."""
        if self.delegate is None:
            return
        for fix in fixes:
            self.delegate.on_position_fixes([fix])

    def fail(self, message: str) -> None:
        if self.delegate is not None:
            self.delegate.on_failure(CapabilityFailure(message))


def read_session_file(file_path: str) -> ReplaySession | None:
    """Read and validate a recorded session file.

    Args:
        file_path: Path to the JSON session file

    Returns:
        Parsed session or None if the file is missing, too large or invalid
    """
    path = Path(file_path)
    if not path.is_file():
        logger.warning(f"File not found: {file_path}")
        return None

    file_size = path.stat().st_size
    if file_size > MAX_FILE_SIZE:
        logger.warning(
            f"File too large: {file_path} ({file_size} bytes > {MAX_FILE_SIZE} bytes)"
        )
        return None

    try:
        with open(path) as f:
            return ReplaySession.model_validate(json.load(f))
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in file {file_path}: {e}")
        return None
    except ValidationError as e:
        logger.warning(f"Invalid session in file {file_path}: {e}")
        return None


def replay_session(
    session: ReplaySession,
    force_continuous: bool = False,
    keep_last_known: bool = True,
    verbose: bool = False,
) -> list[dict[str, Any]]:
    """Run a session through a fresh controller and collect its callbacks.

    Returns:
        One dict per callback invocation, in delivery order
    """
    events: list[dict[str, Any]] = []
    capability = ReplayLocationCapability(
        authorization=session.authorization,
        significant_change=session.significant_change,
    )
    controller = TrackingController(
        capability,
        force_continuous=force_continuous,
        keep_last_known=keep_last_known,
        verbose=verbose,
        on_status=lambda status: events.append({"event": "status", "status": status}),
        on_error=lambda error: events.append({"event": "error", "error": error}),
        on_verbose_message=lambda message: events.append(
            {"event": "verbose", "message": message}
        ),
    )

    def on_result(
        latitude: float,
        longitude: float,
        status: str,
        verbose_text: str,
        error: str | None,
    ) -> None:
        events.append(
            {
                "event": "result",
                "latitude": latitude,
                "longitude": longitude,
                "status": status,
                "verbose": verbose_text,
                "error": error,
            }
        )

    controller.start_tracking(on_result)
    if capability.mode is not None:
        logger.info(
            f"Replaying {len(session.fixes)} fixes in {capability.mode.value} mode"
        )
    capability.deliver(session.fixes)
    if session.failure:
        capability.fail(session.failure)
    controller.stop_tracking()
    return events
