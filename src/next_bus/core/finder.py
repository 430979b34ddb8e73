"""Next bus lookup pipeline.

Resolves a human-readable route label, stop name and direction into NexTrip
identifiers, then reads the live departure board:

1. route label -> Route (exact match)
2. direction text -> RouteDirection (substring of the lower-cased name)
3. stop text -> StopPlace (case-sensitive substring of the description)
4. earliest departure -> whole minutes from now

Each stage needs the previous stage's output, so the first failure stops the
lookup.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import TypeVar

from .client import NexTripClient
from .exceptions import (
    DirectionNotFoundError,
    NextBusError,
    RouteNotFoundError,
    StopNotFoundError,
)
from .models import Departure, NextBusResult, Route, RouteDirection, StopPlace

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

ERROR_PREFIXES = {
    "routes": "Error retrieving routes",
    "direction": "Error getting bus direction ID",
    "stop": "Error getting bus direction ID",
    "departures": "Error getting time till next bus stop",
}


def find_first(items: Iterable[T], predicate: Callable[[T], bool]) -> T | None:
    """Return the first item matching ``predicate`` in server order."""
    for item in items:
        if predicate(item):
            return item
    return None


def minutes_until(departure_time: int, now: datetime) -> int:
    """Whole minutes from ``now`` until an epoch timestamp, truncated toward zero.

    Departures in the past give zero or a negative number. Works in whole
    microseconds so any integer timestamp is accepted.
    """
    now_us = (now - _EPOCH) // timedelta(microseconds=1)
    remaining_us = departure_time * 1_000_000 - now_us
    minutes = abs(remaining_us) // 60_000_000
    return minutes if remaining_us >= 0 else -minutes


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NextBusFinder:
    """Answers "how many minutes until the next bus?" for a route, stop and direction."""

    def __init__(
        self,
        client: NexTripClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the finder.

        Args:
            client: NexTrip API client (a default client is created if omitted)
            clock: Returns the current timezone-aware time
        """
        self.client = client or NexTripClient()
        self.clock = clock or _utc_now

    def find(self, bus_route: str, bus_stop: str, direction: str) -> NextBusResult:
        """Run the full lookup.

        Args:
            bus_route: Route label, matched exactly (e.g. "METRO Blue Line")
            bus_stop: Part of the stop description, case-sensitive
            direction: Part of the direction name, compared against the
                lower-cased name (so pass it lower-case, e.g. "north")

        Returns:
            NextBusResult; ``departure`` and ``minutes`` are None when the
            board is empty

        Raises:
            NextBusError: From the first stage that fails, with ``stage`` set
        """
        with _stage("routes"):
            route = self.resolve_route(bus_route)
        with _stage("direction"):
            route_direction = self.resolve_direction(route.id, direction)
        with _stage("stop"):
            stop = self.resolve_stop(route.id, route_direction.id, bus_stop)
        with _stage("departures"):
            departure = self.next_departure(route.id, route_direction.id, stop.code)

        minutes = None
        if departure is not None:
            minutes = minutes_until(departure.departure_time, self.clock())

        return NextBusResult(
            route=route,
            direction=route_direction,
            stop=stop,
            departure=departure,
            minutes=minutes,
        )

    def resolve_route(self, bus_route: str) -> Route:
        """Find the route whose label equals ``bus_route`` exactly."""
        return self._first_match(
            self.client.get_routes(),
            lambda route: route.label == bus_route,
            RouteNotFoundError("Route not found"),
        )

    def resolve_direction(self, route_id: str, direction: str) -> RouteDirection:
        """Find the first direction whose lower-cased name contains ``direction``."""
        return self._first_match(
            self.client.get_directions(route_id),
            lambda candidate: direction in candidate.name.lower(),
            DirectionNotFoundError("Route direction not found"),
        )

    def resolve_direction_id(self, route_id: str, direction: str) -> int:
        """Get the direction id for ``direction`` on a route."""
        return self.resolve_direction(route_id, direction).id

    def resolve_stop(self, route_id: str, direction_id: int, bus_stop: str) -> StopPlace:
        """Find the first stop whose description contains ``bus_stop``."""
        return self._first_match(
            self.client.get_stops(route_id, direction_id),
            lambda stop: bus_stop in stop.description,
            StopNotFoundError("Bus stop place code not found"),
        )

    def resolve_stop_place_code(
        self, route_id: str, direction_id: int, bus_stop: str
    ) -> str:
        """Get the place code for ``bus_stop`` on a route and direction."""
        return self.resolve_stop(route_id, direction_id, bus_stop).code

    def next_departure(
        self, route_id: str, direction_id: int, place_code: str
    ) -> Departure | None:
        """Get the first departure on the board, or None when it is empty.

        The board is trusted to be in chronological order.
        """
        departures = self.client.get_departures(route_id, direction_id, place_code)
        if not departures:
            logger.info(
                f"No upcoming departures for {route_id}/{direction_id}/{place_code}"
            )
            return None
        return departures[0]

    def time_till_next_departure(
        self, route_id: str, direction_id: int, place_code: str
    ) -> str:
        """Get "<N> Minutes" until the next departure, or "" when none is scheduled."""
        departure = self.next_departure(route_id, direction_id, place_code)
        if departure is None:
            return ""
        return f"{minutes_until(departure.departure_time, self.clock())} Minutes"

    def _first_match(
        self, items: list[T], predicate: Callable[[T], bool], not_found: NextBusError
    ) -> T:
        match = find_first(items, predicate)
        if match is None:
            logger.warning(f"{not_found} among {len(items)} candidates")
            raise not_found
        logger.debug(f"Resolved {match!r}")
        return match


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Tag a NextBusError leaving the block with the stage it came from."""
    try:
        yield
    except NextBusError as e:
        e.stage = name
        raise


def describe_error(error: NextBusError) -> str:
    """Render an error with the user-facing prefix for its stage."""
    if isinstance(error, RouteNotFoundError):
        return "Error: Route not found"
    prefix = ERROR_PREFIXES.get(error.stage or "")
    if prefix is None:
        return f"Error: {error}"
    return f"{prefix}: {error}"


def calculate_time_till_next_bus(
    bus_route: str,
    bus_stop: str,
    direction: str,
    finder: NextBusFinder | None = None,
) -> str:
    """Answer with "<N> Minutes", "" when nothing is scheduled, or an error message."""
    finder = finder or NextBusFinder()
    try:
        return finder.find(bus_route, bus_stop, direction).summary
    except NextBusError as e:
        return describe_error(e)
