"""Test configuration."""

import os
from collections.abc import Sequence
from typing import Any

import pytest
from pytest import Config

from geotrack.core.logging import configure_logging
from geotrack.models.location import AuthorizationStatus, Coordinate, UpdateMode
from geotrack.tracking.capability import LocationDelegate

fixture = pytest.fixture


class FakeLocationCapability:
    """Location capability that records calls and lets tests emit events."""

    def __init__(self, significant_change: bool = True) -> None:
        self.delegate: LocationDelegate | None = None
        self.significant_change = significant_change
        self.calls: list[tuple[str, Any]] = []

    def request_authorization(self) -> None:
        self.calls.append(("request_authorization", None))

    def begin_updates(self, mode: UpdateMode) -> None:
        self.calls.append(("begin_updates", mode))

    def end_updates(self) -> None:
        self.calls.append(("end_updates", None))

    def supports_significant_change(self) -> bool:
        return self.significant_change

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def authorize(self, status: AuthorizationStatus) -> None:
        assert self.delegate is not None
        self.delegate.on_authorization_changed(status)

    def emit(self, *fixes: Coordinate) -> None:
        assert self.delegate is not None
        self.delegate.on_position_fixes(list(fixes))

    def emit_batch(self, fixes: Sequence[Coordinate]) -> None:
        assert self.delegate is not None
        self.delegate.on_position_fixes(fixes)

    def fail(self, error: BaseException | str) -> None:
        assert self.delegate is not None
        self.delegate.on_failure(error)


class CallbackRecorder:
    """Collects controller callback invocations in delivery order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, tuple[Any, ...]]] = []

    def result(self, *args: Any) -> None:
        self.events.append(("result", args))

    def status(self, *args: Any) -> None:
        self.events.append(("status", args))

    def error(self, *args: Any) -> None:
        self.events.append(("error", args))

    def verbose(self, *args: Any) -> None:
        self.events.append(("verbose", args))

    def found(self, *args: Any) -> None:
        self.events.append(("found", args))

    def found_as_string(self, *args: Any) -> None:
        self.events.append(("found_as_string", args))

    def of(self, name: str) -> list[tuple[Any, ...]]:
        return [args for event, args in self.events if event == name]

    def names(self) -> list[str]:
        return [event for event, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


@fixture
def capability() -> FakeLocationCapability:
    return FakeLocationCapability()


@fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@fixture
def google_ok_document() -> dict[str, Any]:
    """A full OK reply from the HTTP geocoder."""
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA",
                "geometry": {"location": {"lat": 37.4224764, "lng": -122.0842499}},
                "address_components": [
                    {
                        "types": ["street_number"],
                        "long_name": "1600",
                        "short_name": "1600",
                    },
                    {
                        "types": ["route"],
                        "long_name": "Amphitheatre Parkway",
                        "short_name": "Amphitheatre Pkwy",
                    },
                    {
                        "types": ["locality", "political"],
                        "long_name": "Mountain View",
                        "short_name": "Mountain View",
                    },
                    {
                        "types": ["administrative_area_level_2", "political"],
                        "long_name": "Santa Clara County",
                        "short_name": "Santa Clara County",
                    },
                    {
                        "types": ["administrative_area_level_1", "political"],
                        "long_name": "California",
                        "short_name": "CA",
                    },
                    {
                        "types": ["country", "political"],
                        "long_name": "United States",
                        "short_name": "US",
                    },
                    {
                        "types": ["postal_code"],
                        "long_name": "94043",
                        "short_name": "94043",
                    },
                ],
            },
            {
                "formatted_address": "Somewhere else",
                "geometry": {"location": {"lat": 1.0, "lng": 2.0}},
                "address_components": [],
            },
        ],
    }


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    os.environ["TESTING"] = "true"
    configure_logging(testing=True)
