"""Data models for NexTrip API payloads."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Route(BaseModel):
    """Represents a transit route from the route catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="route_id", description="Route identifier")
    agency_id: int = Field(0, description="Operating agency identifier")
    label: str = Field(
        ..., alias="route_label", description="Human-facing route label"
    )

    def __str__(self) -> str:
        return self.label


class RouteDirection(BaseModel):
    """Represents one travel direction of a route."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., alias="direction_id", description="Direction identifier")
    name: str = Field(
        ..., alias="direction_name", description="Direction name (e.g. 'Northbound')"
    )

    def __str__(self) -> str:
        return self.name


class StopPlace(BaseModel):
    """Represents a stop along a route in one direction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = Field(..., alias="place_code", description="Stop place code")
    description: str = Field(..., description="Stop description")

    def __str__(self) -> str:
        return f"{self.description} ({self.code})"


class Departure(BaseModel):
    """Represents a single departure from the live departure board."""

    model_config = ConfigDict(frozen=True)

    departure_time: int = Field(..., description="Departure time in epoch seconds")
    # Display-only fields returned by the live board
    actual: bool | None = Field(None, description="True when the time is real-time")
    departure_text: str | None = Field(None, description="Board text, e.g. '5 Min'")
    description: str | None = Field(None, description="Trip headsign")
    route_short_name: str | None = Field(None, description="Short route name")
    direction_text: str | None = Field(None, description="Direction abbreviation")


class RouteDepartures(BaseModel):
    """Departure board payload for a route, direction and stop."""

    model_config = ConfigDict(frozen=True)

    departures: list[Departure] = Field(
        default_factory=list, description="Departures in chronological order"
    )

    @field_validator("departures", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class NextBusResult(BaseModel):
    """Outcome of a full route/direction/stop/departure lookup."""

    model_config = ConfigDict(frozen=True)

    route: Route
    direction: RouteDirection
    stop: StopPlace
    departure: Departure | None = Field(
        None, description="Earliest departure, or None when nothing is scheduled"
    )
    minutes: int | None = Field(None, description="Whole minutes until departure")

    @property
    def summary(self) -> str:
        """Get the '<N> Minutes' text, or an empty string without departures."""
        if self.minutes is None:
            return ""
        return f"{self.minutes} Minutes"
