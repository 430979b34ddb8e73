"""NexTrip real-time API client."""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import requests
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodeError, NetworkError
from .models import Departure, Route, RouteDepartures, RouteDirection, StopPlace

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://svc.metrotransit.org/nextripv2"

T = TypeVar("T")

_ROUTES = TypeAdapter(list[Route])
_DIRECTIONS = TypeAdapter(list[RouteDirection])
_STOPS = TypeAdapter(list[StopPlace])
_DEPARTURES = TypeAdapter(RouteDepartures)


class NexTripClient:
    """Client for the Metro Transit NexTrip v2 API.

    Every call is a single unauthenticated GET returning JSON. No caching
    and no retries are performed; failures surface as ``NetworkError`` or
    ``DecodeError``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root, without trailing slash
            timeout: Request timeout in seconds (None waits indefinitely)
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def get_routes(self) -> list[Route]:
        """Fetch the full route catalog."""
        return self._fetch("routes", _ROUTES, default=[])

    def get_directions(self, route_id: str) -> list[RouteDirection]:
        """Fetch the directions served by a route."""
        return self._fetch(
            f"directions/{_segment(route_id)}", _DIRECTIONS, default=[]
        )

    def get_stops(self, route_id: str, direction_id: int) -> list[StopPlace]:
        """Fetch the stops of a route in one direction."""
        return self._fetch(
            f"stops/{_segment(route_id)}/{direction_id}", _STOPS, default=[]
        )

    def get_departures(
        self, route_id: str, direction_id: int, place_code: str
    ) -> list[Departure]:
        """Fetch the live departures for a stop, earliest first."""
        board = self._fetch(
            f"{_segment(route_id)}/{direction_id}/{_segment(place_code)}",
            _DEPARTURES,
            default={},
        )
        return board.departures

    def _fetch(self, path: str, shape: TypeAdapter[T], default: Any) -> T:
        """GET ``path`` and decode the JSON body into ``shape``.

        A JSON ``null`` body is decoded as ``default``.

        Raises:
            NetworkError: If the request fails or returns an error status
            DecodeError: If the body is not JSON or has the wrong shape
        """
        url = f"{self.base_url}/{path}"
        payload = self._get_json(url)
        if payload is None:
            payload = default

        try:
            return shape.validate_python(payload)
        except PydanticValidationError as e:
            raise DecodeError(f"Unexpected response from {url}: {e}") from e

    def _get_json(self, url: str) -> Any:
        logger.debug(f"GET {url}")
        try:
            # The with block releases the connection on every exit path
            with self.session.get(url, timeout=self.timeout) as response:
                response.raise_for_status()
                try:
                    return response.json()
                except requests.exceptions.JSONDecodeError as e:
                    raise DecodeError(f"Invalid JSON from {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch {url}: {e}") from e


def _segment(value: str) -> str:
    return quote(str(value), safe="")
