"""Tests for position models."""

import pytest
from pydantic import ValidationError

from geotrack.models.location import (
    AuthorizationStatus,
    Coordinate,
    PositionSnapshot,
    format_degrees,
)


class TestCoordinate:
    """Tests for Coordinate."""

    def test_is_immutable(self):
        """Coordinates cannot be changed after creation."""
        coordinate = Coordinate(latitude=1.0, longitude=2.0)

        with pytest.raises(ValidationError):
            coordinate.latitude = 3.0

    @pytest.mark.parametrize(
        "latitude,longitude,valid",
        [
            (0.0, 0.0, True),
            (90.0, 180.0, True),
            (-90.0, -180.0, True),
            (90.1, 0.0, False),
            (0.0, 180.5, False),
            (float("nan"), 0.0, False),
        ],
    )
    def test_is_valid(self, latitude, longitude, valid):
        """Validity requires finite, in-range components."""
        assert Coordinate(latitude=latitude, longitude=longitude).is_valid is valid

    def test_string_mirrors_keep_full_precision(self):
        """String rendering is not rounded."""
        coordinate = Coordinate(latitude=12.345678901234, longitude=-0.1)

        assert coordinate.latitude_as_string == "12.345678901234"
        assert coordinate.longitude_as_string == "-0.1"


def test_format_degrees_renders_integers_as_floats():
    """Integral values render with a decimal point."""
    assert format_degrees(37) == "37.0"


class TestPositionSnapshot:
    """Tests for PositionSnapshot."""

    def test_empty_snapshot_mirrors(self):
        """An empty snapshot reads zeros and empty strings."""
        snapshot = PositionSnapshot()

        assert snapshot.latitude == 0.0
        assert snapshot.longitude == 0.0
        assert snapshot.latitude_as_string == ""
        assert snapshot.last_known_latitude_as_string == ""
        assert snapshot.has_last_known is False

    def test_from_fix_sets_both_positions(self):
        """A fix fills current and last known with the same value."""
        fix = Coordinate(latitude=1.25, longitude=2.5)

        snapshot = PositionSnapshot.from_fix(fix)

        assert snapshot.current == snapshot.last_known == fix
        assert snapshot.last_known_longitude == 2.5

    @pytest.mark.parametrize("keep", [True, False])
    def test_cleared(self, keep):
        """Clearing always drops current and drops last known unless kept."""
        fix = Coordinate(latitude=1.25, longitude=2.5)

        snapshot = PositionSnapshot.from_fix(fix).cleared(keep_last_known=keep)

        assert snapshot.current is None
        assert (snapshot.last_known == fix) is keep
        assert snapshot.has_last_known is keep


def test_authorized_statuses():
    """Only the two allowed outcomes count as authorized."""
    authorized = {status for status in AuthorizationStatus if status.is_authorized}

    assert authorized == {
        AuthorizationStatus.AUTHORIZED_ALWAYS,
        AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
    }
