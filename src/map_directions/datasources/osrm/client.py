"""OSRM routing API constants.

API docs: https://project-osrm.org/docs/v5.24.0/api/#route-service

The public FOSSGIS instances serve one profile per base URL, e.g.
``https://routing.openstreetmap.de/routed-foot`` for walking.
"""

from map_directions.schemas import RoutingFailure, TransportMode

OSRM_BASE_URL = "https://routing.openstreetmap.de/routed-foot"

# Profile path segment per transport mode
PROFILES: dict[TransportMode, str] = {
    TransportMode.WALKING: "foot",
}

ROUTE_PARAMS: dict[str, str] = {
    "overview": "full",
    "geometries": "geojson",
    "alternatives": "false",
    "steps": "false",
}

# OSRM response ``code`` → failure reason
ERROR_CODES: dict[str, RoutingFailure] = {
    "NoRoute": RoutingFailure.NO_ROUTE,
    "NoSegment": RoutingFailure.NO_ROUTE,
    "InvalidUrl": RoutingFailure.INVALID_REQUEST,
    "InvalidService": RoutingFailure.INVALID_REQUEST,
    "InvalidVersion": RoutingFailure.INVALID_REQUEST,
    "InvalidOptions": RoutingFailure.INVALID_REQUEST,
    "InvalidQuery": RoutingFailure.INVALID_REQUEST,
    "InvalidValue": RoutingFailure.INVALID_REQUEST,
    "TooBig": RoutingFailure.INVALID_REQUEST,
}
