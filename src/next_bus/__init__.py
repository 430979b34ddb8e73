"""Next Bus Package

A Python package that answers "how many minutes until the next bus?" for a
Metro Transit route, stop and direction using the NexTrip real-time API.
"""

__version__ = "0.1.0"

from .core.client import NexTripClient
from .core.finder import NextBusFinder, calculate_time_till_next_bus
from .core.models import Departure, NextBusResult, Route, RouteDirection, StopPlace

__all__ = [
    "Departure",
    "NexTripClient",
    "NextBusFinder",
    "NextBusResult",
    "Route",
    "RouteDirection",
    "StopPlace",
    "calculate_time_till_next_bus",
]
