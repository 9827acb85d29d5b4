"""
Domain models for map directions.

Pydantic models shared by the location, routing and controller layers.
Service clients normalize API responses to these.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class TransportMode(StrEnum):
    """Transport mode for route requests. Only walking is supported."""

    WALKING = "walking"


class OperationState(StrEnum):
    """Lifecycle of one ``request_directions`` operation."""

    STARTED = "started"
    AWAITING_LOCATION = "awaiting_location"
    AWAITING_ROUTE = "awaiting_route"
    COMMITTED = "committed"
    ABORTED = "aborted"


class RoutingFailure(StrEnum):
    """Why the routing service rejected a request."""

    NO_ROUTE = "no_route"
    NETWORK = "network"
    INVALID_REQUEST = "invalid_request"


# =============================================================================
# Geographic
# =============================================================================


class GeoPoint(BaseModel):
    """A WGS84 coordinate in degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"


class Region(BaseModel):
    """Rectangular camera viewport: a center plus latitude/longitude spans."""

    model_config = ConfigDict(frozen=True)

    center: GeoPoint
    latitude_delta: float = Field(..., ge=0)
    longitude_delta: float = Field(..., ge=0)

    @property
    def min_latitude(self) -> float:
        return self.center.latitude - self.latitude_delta / 2

    @property
    def max_latitude(self) -> float:
        return self.center.latitude + self.latitude_delta / 2

    @property
    def min_longitude(self) -> float:
        return self.center.longitude - self.longitude_delta / 2

    @property
    def max_longitude(self) -> float:
        return self.center.longitude + self.longitude_delta / 2

    def contains(self, point: GeoPoint, tolerance: float = 1e-9) -> bool:
        """Whether ``point`` lies inside the rectangle (edges inclusive).

        ``tolerance`` absorbs float rounding on the edges of an unpadded region.
        """
        return (
            self.min_latitude - tolerance <= point.latitude <= self.max_latitude + tolerance
            and self.min_longitude - tolerance <= point.longitude <= self.max_longitude + tolerance
        )


# =============================================================================
# Routing
# =============================================================================


class Route(BaseModel):
    """A path returned by the routing service."""

    model_config = ConfigDict(frozen=True)

    points: tuple[GeoPoint, ...] = Field(..., min_length=2)
    distance_m: float = Field(..., ge=0)
    duration_s: float = Field(..., ge=0)
    mode: TransportMode = TransportMode.WALKING

    @property
    def origin(self) -> GeoPoint:
        return self.points[0]

    @property
    def destination(self) -> GeoPoint:
        return self.points[-1]


class NavigationSnapshot(BaseModel):
    """The route/region pair as published by one commit."""

    model_config = ConfigDict(frozen=True)

    route: Route | None
    region: Region


# =============================================================================
# Reference data
# =============================================================================


class Landmark(BaseModel):
    """A named point of interest shown on the map."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    coordinate: GeoPoint
    symbol: str = Field(default="mappin", description="Icon hint for the presentation layer")


class PanoramaScene(BaseModel):
    """Street-level imagery near a coordinate."""

    model_config = ConfigDict(frozen=True)

    image_id: str
    coordinate: GeoPoint
    captured_at: datetime | None = None
    url: str
