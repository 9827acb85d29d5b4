"""
Single-shot resolution of the device position from a live location feed.

A ``LocationSource`` pushes ``LocationUpdate`` events to a callback until the
returned ``Subscription`` is cancelled. ``LocationProvider.resolve_once``
turns that feed into one awaited coordinate:

    provider = LocationProvider(StaticLocationSource(point))
    here = await provider.resolve_once(timeout=5)

Callbacks may fire on any thread; results are marshalled back onto the
awaiting event loop.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from map_directions.errors import LocationTimeoutError, LocationUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from map_directions.schemas import GeoPoint

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class LocationUpdate:
    """One event from a location feed.

    An update may carry a coordinate, an error, or neither (e.g. a heading-only
    update). ``ended`` marks the end of the stream.
    """

    coordinate: GeoPoint | None = None
    error: BaseException | None = None
    ended: bool = False


class Subscription(Protocol):
    def cancel(self) -> None: ...


class LocationSource(Protocol):
    def subscribe(self, callback: Callable[[LocationUpdate], None]) -> Subscription: ...


class LocationProvider:
    """Resolves the current position once per call."""

    def __init__(self, source: LocationSource, default_timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self.source = source
        self.default_timeout = default_timeout

    async def resolve_once(self, timeout: float | None = None) -> GeoPoint:
        """
        Wait for the first update carrying a coordinate.

        Every call opens its own subscription and always cancels it before
        returning or raising.

        Raises:
            LocationTimeoutError: Nothing usable arrived within ``timeout`` seconds.
            LocationUnavailableError: The feed reported an error or ended.
        """
        timeout = self.default_timeout if timeout is None else timeout
        loop = asyncio.get_running_loop()
        fix: asyncio.Future[GeoPoint] = loop.create_future()

        def settle(update: LocationUpdate) -> None:
            if fix.done():
                return
            if update.coordinate is not None:
                fix.set_result(update.coordinate)
            elif update.error is not None:
                exc = LocationUnavailableError(f"location feed failed: {update.error}")
                exc.__cause__ = update.error
                fix.set_exception(exc)
            elif update.ended:
                fix.set_exception(LocationUnavailableError("location feed ended without a fix"))

        def on_update(update: LocationUpdate) -> None:
            if loop.is_closed():
                return
            loop.call_soon_threadsafe(settle, update)

        try:
            subscription = self.source.subscribe(on_update)
        except Exception as exc:
            raise LocationUnavailableError(f"cannot subscribe to location feed: {exc}") from exc

        try:
            async with asyncio.timeout(timeout):
                return await fix
        except TimeoutError as exc:
            msg = f"no location fix within {timeout}s"
            raise LocationTimeoutError(msg) from exc
        finally:
            subscription.cancel()
            # Nobody will retrieve a late exception once we've given up
            if fix.done() and not fix.cancelled():
                fix.exception()


# =============================================================================
# Sources
# =============================================================================


class _Subscription:
    """Cancellation handle that unregisters itself from its source."""

    def __init__(self, registry: set[_Subscription]) -> None:
        self._registry = registry
        self._handles: list[asyncio.TimerHandle | asyncio.Handle] = []
        self.cancelled = False
        registry.add(self)

    def track(self, handle: asyncio.TimerHandle | asyncio.Handle) -> None:
        self._handles.append(handle)

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        for handle in self._handles:
            handle.cancel()
        self._registry.discard(self)


class StaticLocationSource:
    """Feed that reports one fixed coordinate as soon as it is subscribed to."""

    def __init__(self, coordinate: GeoPoint) -> None:
        self.coordinate = coordinate
        self.active: set[_Subscription] = set()

    def subscribe(self, callback: Callable[[LocationUpdate], None]) -> _Subscription:
        subscription = _Subscription(self.active)
        callback(LocationUpdate(coordinate=self.coordinate))
        return subscription


class ReplayLocationSource:
    """
    Feed that replays a scripted list of ``(delay_s, update)`` events.

    Delays are relative to the previous event and are scheduled on the
    running event loop when a caller subscribes. Each subscriber gets its own
    replay from the start.
    """

    def __init__(self, events: Iterable[tuple[float, LocationUpdate]]) -> None:
        self.events = list(events)
        self.active: set[_Subscription] = set()
        self.subscribe_count = 0

    def subscribe(self, callback: Callable[[LocationUpdate], None]) -> _Subscription:
        loop = asyncio.get_running_loop()
        subscription = _Subscription(self.active)
        self.subscribe_count += 1

        def deliver(update: LocationUpdate) -> None:
            if not subscription.cancelled:
                callback(update)

        at = 0.0
        for delay, update in self.events:
            at += delay
            subscription.track(loop.call_later(at, deliver, update))
        logger.debug("Replaying %d location events", len(self.events))
        return subscription
