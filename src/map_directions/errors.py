"""Exception types raised by the directions core."""

from __future__ import annotations

from map_directions.schemas import RoutingFailure


class MapDirectionsError(Exception):
    """Base class for all package errors."""


class EmptyInputError(MapDirectionsError, ValueError):
    """A region was requested for zero points."""


class LocationError(MapDirectionsError):
    """The current position could not be resolved."""


class LocationTimeoutError(LocationError, TimeoutError):
    """No usable location update arrived before the timeout."""


class LocationUnavailableError(LocationError):
    """The location stream failed or ended without a coordinate."""


class RoutingServiceError(MapDirectionsError):
    """The routing service rejected or failed a route request."""

    def __init__(self, reason: RoutingFailure, message: str = "") -> None:
        self.reason = reason
        self.message = message or reason.value
        super().__init__(f"{reason.value}: {self.message}")


class PanoramaUnavailableError(MapDirectionsError):
    """No street-level imagery could be found for a coordinate."""
