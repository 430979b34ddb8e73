"""Test configuration and fixtures."""

from datetime import datetime, timezone

import pytest
import responses

BASE_URL = "https://svc.metrotransit.org/nextripv2"
NOW = 1_700_000_000


@pytest.fixture
def fixed_now():
    """A fixed, timezone-aware 'current time'."""
    return datetime.fromtimestamp(NOW, tz=timezone.utc)


@pytest.fixture
def sample_routes_data():
    """Sample route catalog payload."""
    return [
        {"route_id": "902", "agency_id": 0, "route_label": "METRO Green Line"},
        {"route_id": "901", "agency_id": 0, "route_label": "METRO Blue Line"},
        {"route_id": "921", "agency_id": 0, "route_label": "METRO A Line"},
        {"route_id": "9211", "agency_id": 0, "route_label": "METRO A Line Express"},
    ]


@pytest.fixture
def sample_directions_data():
    """Sample direction list payload."""
    return [
        {"direction_id": 0, "direction_name": "Southbound"},
        {"direction_id": 1, "direction_name": "Northbound"},
    ]


@pytest.fixture
def sample_stops_data():
    """Sample stop list payload."""
    return [
        {"place_code": "MAAM", "description": "Mall of America Station"},
        {"place_code": "TF123", "description": "Target Field Station"},
        {"place_code": "TF2", "description": "Target Field Station Platform 2"},
    ]


@pytest.fixture
def sample_departures_data():
    """Sample departure board payload with the next bus 300 seconds away."""
    return {
        "stops": [{"stop_id": 51408, "description": "Target Field Station"}],
        "alerts": [],
        "departures": [
            {
                "actual": True,
                "trip_id": "23948744-DEC23",
                "stop_id": 51408,
                "departure_text": "5 Min",
                "departure_time": NOW + 300,
                "description": "to Target Field",
                "route_id": "901",
                "route_short_name": "Blue",
                "direction_id": 1,
                "direction_text": "NB",
                "schedule_relationship": "Scheduled",
            },
            {
                "actual": False,
                "departure_text": "10:43",
                "departure_time": NOW + 900,
                "route_id": "901",
            },
        ],
    }


@pytest.fixture
def mock_nextrip(
    sample_routes_data,
    sample_directions_data,
    sample_stops_data,
    sample_departures_data,
):
    """Serve the four NexTrip endpoints the blue line lookup needs."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(responses.GET, f"{BASE_URL}/routes", json=sample_routes_data)
        rsps.add(
            responses.GET, f"{BASE_URL}/directions/901", json=sample_directions_data
        )
        rsps.add(responses.GET, f"{BASE_URL}/stops/901/1", json=sample_stops_data)
        rsps.add(
            responses.GET, f"{BASE_URL}/901/1/TF123", json=sample_departures_data
        )
        yield rsps
