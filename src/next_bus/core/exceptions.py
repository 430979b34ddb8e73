"""Custom exceptions for next bus lookups."""


class NextBusError(Exception):
    """Base exception for next bus lookup errors.

    ``stage`` names the pipeline stage the error escaped from
    ("routes", "direction", "stop" or "departures"). It is filled in by
    ``NextBusFinder`` and stays ``None`` for errors raised outside a lookup.
    """

    stage: str | None = None


class NetworkError(NextBusError):
    """Raised when a request to the NexTrip API fails."""

    pass


class DecodeError(NextBusError):
    """Raised when a response body is not the JSON shape we expect."""

    pass


class NotFoundError(NextBusError):
    """Raised when a lookup succeeded but nothing matched the user input."""

    pass


class RouteNotFoundError(NotFoundError):
    """Raised when no route label equals the requested route."""

    pass


class DirectionNotFoundError(NotFoundError):
    """Raised when no direction name contains the requested direction."""

    pass


class StopNotFoundError(NotFoundError):
    """Raised when no stop description contains the requested stop."""

    pass
