"""Unit tests for the NexTrip API client."""

import pytest
import requests
import responses

from next_bus.core.client import DEFAULT_BASE_URL, NexTripClient
from next_bus.core.exceptions import DecodeError, NetworkError


class TestNexTripClient:
    """Test NexTrip API client."""

    def test_client_initialization(self):
        """Test client defaults."""
        client = NexTripClient()
        assert client.base_url == "https://svc.metrotransit.org/nextripv2"
        assert client.timeout is None

        custom = NexTripClient(base_url="http://localhost:8080/api/", timeout=5)
        assert custom.base_url == "http://localhost:8080/api"
        assert custom.timeout == 5

    def test_get_routes(self, mock_nextrip):
        """Test route catalog decoding."""
        routes = NexTripClient().get_routes()

        assert len(routes) == 4
        assert routes[1].id == "901"
        assert routes[1].label == "METRO Blue Line"
        assert mock_nextrip.calls[0].request.headers["Accept"] == "application/json"

    def test_get_directions(self, mock_nextrip):
        """Test direction list decoding."""
        directions = NexTripClient().get_directions("901")

        assert [(d.id, d.name) for d in directions] == [
            (0, "Southbound"),
            (1, "Northbound"),
        ]

    def test_get_stops(self, mock_nextrip):
        """Test stop list decoding."""
        stops = NexTripClient().get_stops("901", 1)

        assert stops[1].code == "TF123"
        assert stops[1].description == "Target Field Station"

    def test_get_departures(self, mock_nextrip):
        """Test departure board decoding."""
        departures = NexTripClient().get_departures("901", 1, "TF123")

        assert len(departures) == 2
        assert departures[0].actual is True
        assert departures[0].route_short_name == "Blue"
        assert departures[1].description is None

    @responses.activate
    def test_custom_base_url(self):
        """Test requests go to the configured base URL."""
        responses.add(responses.GET, "http://localhost:8080/api/routes", json=[])

        assert NexTripClient(base_url="http://localhost:8080/api").get_routes() == []

    @responses.activate
    def test_timeout_is_passed_through(self):
        """Test the timeout reaches the request."""
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/routes", json=[])

        NexTripClient(timeout=2.5).get_routes()

        assert responses.calls[0].request.req_kwargs["timeout"] == 2.5

    @responses.activate
    def test_null_body_is_empty(self):
        """Test a JSON null body decodes as an empty listing."""
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/routes", body="null")
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/901/1/TF1", body="null")

        client = NexTripClient()
        assert client.get_routes() == []
        assert client.get_departures("901", 1, "TF1") == []

    @responses.activate
    def test_connection_error(self):
        """Test transport failures become NetworkError."""
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/routes",
            body=requests.ConnectionError("connection refused"),
        )

        with pytest.raises(NetworkError, match="connection refused") as exc_info:
            NexTripClient().get_routes()

        assert f"{DEFAULT_BASE_URL}/routes" in str(exc_info.value)

    @responses.activate
    def test_http_error_status(self):
        """Test error statuses become NetworkError."""
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/directions/999",
            json={"status": 400, "detail": "Invalid route"},
            status=400,
        )

        with pytest.raises(NetworkError, match="400"):
            NexTripClient().get_directions("999")

    @responses.activate
    def test_invalid_json(self):
        """Test a non-JSON body becomes DecodeError."""
        responses.add(
            responses.GET, f"{DEFAULT_BASE_URL}/routes", body="Service Unavailable"
        )

        with pytest.raises(DecodeError, match="Invalid JSON"):
            NexTripClient().get_routes()

    @responses.activate
    def test_unexpected_shape(self):
        """Test a JSON body of the wrong shape becomes DecodeError."""
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/stops/901/1",
            json=[{"code": "TF123"}],
        )

        with pytest.raises(DecodeError, match="Unexpected response"):
            NexTripClient().get_stops("901", 1)

    @responses.activate
    def test_object_where_list_expected(self):
        """Test an object body for a listing becomes DecodeError."""
        responses.add(
            responses.GET, f"{DEFAULT_BASE_URL}/routes", json={"routes": []}
        )

        with pytest.raises(DecodeError):
            NexTripClient().get_routes()
