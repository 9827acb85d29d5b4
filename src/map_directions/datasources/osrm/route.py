"""Walking routes from the OSRM route service."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from map_directions.datasources.osrm.client import (
    ERROR_CODES,
    OSRM_BASE_URL,
    PROFILES,
    ROUTE_PARAMS,
)
from map_directions.errors import RoutingServiceError
from map_directions.schemas import GeoPoint, Route, RoutingFailure, TransportMode
from map_directions.services.http import DEFAULT_TIMEOUT, NO_RETRY, create_session

logger = logging.getLogger(__name__)


def _format_coordinates(*points: GeoPoint) -> str:
    """OSRM wants ``lon,lat;lon,lat``."""
    return ";".join(f"{p.longitude:.6f},{p.latitude:.6f}" for p in points)


def fetch_route(
    http: requests.Session,
    origin: GeoPoint,
    destination: GeoPoint,
    mode: TransportMode | str = TransportMode.WALKING,
    *,
    base_url: str = OSRM_BASE_URL,
) -> dict[str, Any]:
    """
    Make one ``/route/v1`` request and return the decoded body.

    Args:
        http: Session to send the request with.
        origin: Start of the route.
        destination: End of the route.
        mode: Transport mode (only walking is supported).
        base_url: OSRM instance serving the mode's profile.

    Returns:
        Raw API response dict with ``code == "Ok"``.

    Raises:
        RoutingServiceError: With the reason the request failed.
    """
    try:
        profile = PROFILES[TransportMode(mode)]
    except (ValueError, KeyError):
        raise RoutingServiceError(
            RoutingFailure.INVALID_REQUEST, f"unsupported transport mode: {mode}"
        ) from None

    url = f"{base_url.rstrip('/')}/route/v1/{profile}/{_format_coordinates(origin, destination)}"
    try:
        resp = http.get(url, params=ROUTE_PARAMS)
    except requests.RequestException as exc:
        raise RoutingServiceError(RoutingFailure.NETWORK, str(exc)) from exc

    if resp.status_code == 429 or resp.status_code >= 500:
        raise RoutingServiceError(RoutingFailure.NETWORK, f"HTTP {resp.status_code} from {base_url}")

    try:
        data = resp.json()
    except ValueError:
        raise RoutingServiceError(
            RoutingFailure.INVALID_REQUEST, f"unreadable response (HTTP {resp.status_code})"
        ) from None
    if not isinstance(data, dict):
        raise RoutingServiceError(
            RoutingFailure.INVALID_REQUEST, f"unexpected response body: {type(data).__name__}"
        )

    code = data.get("code")
    if code != "Ok":
        reason = ERROR_CODES.get(str(code), RoutingFailure.INVALID_REQUEST)
        raise RoutingServiceError(reason, data.get("message") or f"OSRM code {code}")

    return data


def parse_route(data: dict[str, Any], mode: TransportMode = TransportMode.WALKING) -> Route:
    """Build a ``Route`` from the first route in an OSRM response."""
    routes = data.get("routes") or []
    if not routes:
        raise RoutingServiceError(RoutingFailure.NO_ROUTE, "service returned no routes")

    try:
        best = routes[0]
        coordinates = (best.get("geometry") or {}).get("coordinates") or []
        count = len(coordinates)
    except (AttributeError, KeyError, TypeError) as exc:
        raise RoutingServiceError(
            RoutingFailure.INVALID_REQUEST, f"malformed route: {exc}"
        ) from exc
    if count < 2:
        raise RoutingServiceError(RoutingFailure.NO_ROUTE, "route geometry is empty")

    try:
        points = tuple(GeoPoint(latitude=lat, longitude=lon) for lon, lat, *_ in coordinates)
        return Route(
            points=points,
            distance_m=float(best.get("distance", 0.0)),
            duration_s=float(best.get("duration", 0.0)),
            mode=mode,
        )
    except (TypeError, ValueError) as exc:
        raise RoutingServiceError(
            RoutingFailure.INVALID_REQUEST, f"malformed route geometry: {exc}"
        ) from exc


class OSRMRouteRequester:
    """
    Async route requester backed by OSRM.

    Sends exactly one HTTP request per call (the session has retries
    disabled); retrying is left to the caller.
    """

    def __init__(
        self,
        base_url: str = OSRM_BASE_URL,
        *,
        http: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url
        self.http = http if http is not None else create_session(retry=NO_RETRY, timeout=timeout)

    async def request_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        mode: TransportMode = TransportMode.WALKING,
    ) -> Route:
        logger.debug("Requesting %s route %s -> %s", mode, origin, destination)
        data = await asyncio.to_thread(
            fetch_route, self.http, origin, destination, mode, base_url=self.base_url
        )
        route = parse_route(data, TransportMode(mode))
        logger.info(
            "Route found: %.0f m, %.0f s, %d points",
            route.distance_m,
            route.duration_s,
            len(route.points),
        )
        return route
