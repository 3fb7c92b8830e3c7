"""Tests for the HTTP geocoder."""

import json

import pytest

from geotrack.core.errors import TransportFailure
from geotrack.geocoding.http import HttpGeocoder
from geotrack.models.location import Coordinate

BASE_URL = "https://maps.example.com/maps/api/geocode/json"


class RecordingFetch:
    """Async fetch stand-in returning a canned body or raising."""

    def __init__(self, body=None, error=None):
        self.body = body
        self.error = error
        self.urls = []

    async def __call__(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.body


def make_geocoder(fetch, api_key=""):
    return HttpGeocoder(base_url=BASE_URL, api_key=api_key, fetch=fetch)


class TestUrls:
    """Tests for request URL construction."""

    def test_forward_url_percent_encodes_address(self):
        """Spaces and ampersands are escaped, commas kept."""
        geocoder = make_geocoder(RecordingFetch())

        url = geocoder.build_geocode_url("1600 Amphitheatre Pkwy, A&B")

        assert url == (
            f"{BASE_URL}?address=1600%20Amphitheatre%20Pkwy,%20A%26B&sensor=true"
        )

    def test_reverse_url_uses_full_precision(self):
        """Coordinates are rendered unrounded."""
        geocoder = make_geocoder(RecordingFetch())

        url = geocoder.build_reverse_url(
            Coordinate(latitude=40.714224, longitude=-73.961452)
        )

        assert url == f"{BASE_URL}?latlng=40.714224,-73.961452&sensor=true"

    def test_api_key_is_appended(self):
        """A configured key is sent with every request."""
        geocoder = make_geocoder(RecordingFetch(), api_key="secret key")

        url = geocoder.build_geocode_url("Berlin")

        assert url.endswith("&sensor=true&key=secret%20key")

    def test_defaults_from_settings(self, monkeypatch):
        """Base URL and key default from settings."""
        from geotrack.geocoding import http as http_module

        monkeypatch.setattr(http_module.settings, "GOOGLE_MAPS_API_KEY", "k")
        geocoder = HttpGeocoder(fetch=RecordingFetch())

        assert geocoder.base_url == http_module.settings.GEOCODER_BASE_URL
        assert geocoder.api_key == "k"


class TestRequests:
    """Tests for request outcomes."""

    @pytest.mark.asyncio
    async def test_reverse_ok(self, google_ok_document):
        """An OK reply is normalized with a placemark."""
        fetch = RecordingFetch(body=json.dumps(google_ok_document).encode())
        geocoder = make_geocoder(fetch)

        result = await geocoder.reverse(Coordinate(latitude=37.42, longitude=-122.08))

        assert result.ok is True
        assert result.address.locality == "Mountain View"
        assert result.placemark.iso_country_code == "US"
        assert fetch.urls == [f"{BASE_URL}?latlng=37.42,-122.08&sensor=true"]

    @pytest.mark.asyncio
    async def test_geocode_zero_results(self):
        """ZERO_RESULTS is reported as the error."""
        geocoder = make_geocoder(RecordingFetch(body=b'{"status":"ZERO_RESULTS"}'))

        result = await geocoder.geocode("nowhere at all")

        assert result.address is None
        assert result.placemark is None
        assert result.error == "ZERO_RESULTS"

    @pytest.mark.asyncio
    async def test_transport_failure_wins_over_status(self):
        """Transport errors are reported by their description."""
        geocoder = make_geocoder(
            RecordingFetch(error=TransportFailure("The network connection was lost."))
        )

        result = await geocoder.geocode("Berlin")

        assert result.error == "The network connection was lost."
        assert result.address is None

    @pytest.mark.asyncio
    async def test_undecodable_body(self):
        """A body that is not JSON is invalid input."""
        geocoder = make_geocoder(RecordingFetch(body=b"<html>"))

        result = await geocoder.geocode("Berlin")

        assert result.error == "Invalid Input"
