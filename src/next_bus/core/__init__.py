"""Core next bus lookup functionality."""

from .client import DEFAULT_BASE_URL, NexTripClient
from .exceptions import (
    DecodeError,
    DirectionNotFoundError,
    NetworkError,
    NextBusError,
    NotFoundError,
    RouteNotFoundError,
    StopNotFoundError,
)
from .finder import NextBusFinder, calculate_time_till_next_bus, describe_error
from .models import (
    Departure,
    NextBusResult,
    Route,
    RouteDepartures,
    RouteDirection,
    StopPlace,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "NexTripClient",
    "NextBusFinder",
    "calculate_time_till_next_bus",
    "describe_error",
    "Departure",
    "NextBusResult",
    "Route",
    "RouteDepartures",
    "RouteDirection",
    "StopPlace",
    "NextBusError",
    "NetworkError",
    "DecodeError",
    "NotFoundError",
    "RouteNotFoundError",
    "DirectionNotFoundError",
    "StopNotFoundError",
]
