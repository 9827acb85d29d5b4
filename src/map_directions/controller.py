"""
Directions orchestration.

``NavigationController`` owns the state the map screen displays (the current
route and the camera region) and runs the "get directions" operation:

    Started -> AwaitingLocation -> AwaitingRoute -> Committed
                     \\                  \\
                      -> Aborted          -> Aborted

Every call takes a fresh ``RequestToken``. Starting a newer call makes older
tokens stale; a stale operation keeps running but its result is discarded,
so the last call started always wins regardless of completion order.
Failures are logged and leave the previous route/region on screen.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from map_directions.datasources.mapillary import MapillaryPanoramaProvider
from map_directions.datasources.osrm import OSRMRouteRequester
from map_directions.errors import LocationError, PanoramaUnavailableError, RoutingServiceError
from map_directions.location import DEFAULT_TIMEOUT_S, LocationProvider, StaticLocationSource
from map_directions.reference import INITIAL_REGION
from map_directions.region import DEFAULT_PADDING, fit_region
from map_directions.schemas import (
    GeoPoint,
    NavigationSnapshot,
    OperationState,
    PanoramaScene,
    Region,
    Route,
    TransportMode,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from map_directions.config import Settings
    from map_directions.location import LocationSource

logger = logging.getLogger(__name__)


class RouteRequester(Protocol):
    async def request_route(
        self, origin: GeoPoint, destination: GeoPoint, mode: TransportMode
    ) -> Route: ...


class PanoramaProvider(Protocol):
    async def find_scene(self, point: GeoPoint) -> PanoramaScene: ...


@dataclass(frozen=True)
class RequestToken:
    """Identity of one ``request_directions`` call."""

    generation: int
    destination: GeoPoint


class NavigationController:
    """Observable route/region state plus the commands that change it."""

    def __init__(
        self,
        location: LocationProvider,
        router: RouteRequester,
        *,
        initial_region: Region,
        panoramas: PanoramaProvider | None = None,
        padding: float = DEFAULT_PADDING,
        location_timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.location = location
        self.router = router
        self.panoramas = panoramas
        self.padding = padding
        self.location_timeout = location_timeout
        self.mode = TransportMode.WALKING

        self._lock = threading.Lock()
        self._notify_lock = threading.Lock()
        self._commits = itertools.count(1)
        self._delivered = 0
        self._generations = itertools.count(1)
        self._observers: list[Callable[[NavigationSnapshot], None]] = []

        self._current_route: Route | None = None
        self._current_region = initial_region
        self._active_token: RequestToken | None = None

        self.look_around_scene: PanoramaScene | None = None
        self.is_showing_look_around = False

    # -------------------------------------------------------------------------
    # Observable state (read-only from outside)
    # -------------------------------------------------------------------------

    @property
    def current_route(self) -> Route | None:
        with self._lock:
            return self._current_route

    @property
    def current_region(self) -> Region:
        with self._lock:
            return self._current_region

    @property
    def active_token(self) -> RequestToken | None:
        with self._lock:
            return self._active_token

    def snapshot(self) -> NavigationSnapshot:
        """Current route and region, read together."""
        with self._lock:
            return NavigationSnapshot(route=self._current_route, region=self._current_region)

    def subscribe(self, observer: Callable[[NavigationSnapshot], None]) -> Callable[[], None]:
        """
        Call ``observer`` with a snapshot after every commit.

        Returns a function that removes the observer.
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def is_current(self, token: RequestToken) -> bool:
        with self._lock:
            return self._active_token is token

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def request_directions(self, destination: GeoPoint) -> OperationState:
        """
        Fetch a walking route from the current position to ``destination``.

        On success the route and the region fitting both endpoints are
        committed together. Location or routing failures, and being
        superseded by a newer call, abort without touching state.

        Returns:
            The terminal state, ``COMMITTED`` or ``ABORTED``.
        """
        token = self._start(destination)

        self._transition(token, OperationState.AWAITING_LOCATION)
        try:
            origin = await self.location.resolve_once(self.location_timeout)
        except LocationError as exc:
            logger.warning("Cannot get user location: %s", exc)
            return self._abort(token)
        if not self.is_current(token):
            return self._abort(token, "superseded while locating")

        self._transition(token, OperationState.AWAITING_ROUTE)
        try:
            route = await self.router.request_route(origin, destination, self.mode)
        except RoutingServiceError as exc:
            logger.warning("Error getting directions (%s): %s", exc.reason, exc.message)
            return self._abort(token)

        region = fit_region((origin, destination), self.padding)
        if not self._commit(token, route, region):
            return self._abort(token, "superseded while routing")

        self._transition(token, OperationState.COMMITTED)
        return OperationState.COMMITTED

    async def show_panorama(self, point: GeoPoint) -> PanoramaScene | None:
        """Look up street-level imagery at ``point`` and open the viewer."""
        if self.panoramas is None:
            logger.info("No panorama provider configured")
            return None

        try:
            scene = await self.panoramas.find_scene(point)
        except PanoramaUnavailableError as exc:
            logger.warning("Cannot retrieve look around scene: %s", exc)
            with self._lock:
                self.look_around_scene = None
            return None

        with self._lock:
            self.look_around_scene = scene
            self.is_showing_look_around = True
        return scene

    def dismiss_panorama(self) -> None:
        with self._lock:
            self.is_showing_look_around = False

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _start(self, destination: GeoPoint) -> RequestToken:
        with self._lock:
            token = RequestToken(generation=next(self._generations), destination=destination)
            superseded = self._active_token
            self._active_token = token
        if superseded is not None:
            logger.debug("Request #%d supersedes #%d", token.generation, superseded.generation)
        self._transition(token, OperationState.STARTED)
        return token

    def _commit(self, token: RequestToken, route: Route, region: Region) -> bool:
        with self._lock:
            if self._active_token is not token:
                return False
            self._current_route = route
            self._current_region = region
            snapshot = NavigationSnapshot(route=route, region=region)
            sequence = next(self._commits)

        # Observers run outside the state lock so they can read the controller.
        # A snapshot older than one already delivered is dropped.
        with self._notify_lock:
            if sequence < self._delivered:
                return True
            self._delivered = sequence
            with self._lock:
                observers = list(self._observers)
            for observer in observers:
                try:
                    observer(snapshot)
                except Exception:
                    logger.exception("Navigation observer %r failed", observer)
        return True

    def _abort(self, token: RequestToken, reason: str | None = None) -> OperationState:
        if reason:
            logger.info("Request #%d discarded: %s", token.generation, reason)
        self._transition(token, OperationState.ABORTED)
        return OperationState.ABORTED

    @staticmethod
    def _transition(token: RequestToken, state: OperationState) -> None:
        logger.debug("Request #%d -> %s", token.generation, state)


def build_controller(
    settings: Settings,
    location_source: LocationSource | None = None,
    *,
    initial_region: Region | None = None,
) -> NavigationController:
    """
    Wire a controller to the OSRM and Mapillary services from ``settings``.

    Without a ``location_source`` the device position is simulated from
    ``settings.lat``/``settings.lon``.
    """
    if location_source is None:
        location_source = StaticLocationSource(GeoPoint(latitude=settings.lat, longitude=settings.lon))

    return NavigationController(
        LocationProvider(location_source, default_timeout=settings.location_timeout_s),
        OSRMRouteRequester(settings.osrm_base_url, timeout=settings.http_timeout_s),
        initial_region=initial_region if initial_region is not None else INITIAL_REGION,
        panoramas=MapillaryPanoramaProvider(
            settings.mapillary_token, radius_deg=settings.panorama_search_radius_deg
        ),
        padding=settings.region_padding,
        location_timeout=settings.location_timeout_s,
    )
