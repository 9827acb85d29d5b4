"""
Prefect flow for planning a walk to one of the map landmarks.

Resolves the (simulated) device position, requests a walking route from
OSRM and reports the route together with the camera region fitting both
endpoints.

Run locally:
    python -m map_directions.flows.directions kings-park

Run with Prefect dashboard:
    prefect server start &
    python -m map_directions.flows.directions kings-park
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING, Any

from prefect import flow

from map_directions.config import get_settings
from map_directions.controller import build_controller
from map_directions.location import StaticLocationSource
from map_directions.reference import get_landmark
from map_directions.schemas import GeoPoint, OperationState

if TYPE_CHECKING:
    from map_directions.schemas import Landmark, NavigationSnapshot


def summarize(
    landmark: Landmark, state: OperationState, snapshot: NavigationSnapshot
) -> dict[str, Any]:
    """Flatten the outcome of one directions request into a plain dict."""
    region = snapshot.region
    summary: dict[str, Any] = {
        "landmark": landmark.key,
        "name": landmark.name,
        "state": state.value,
        "region": {
            "center": [region.center.latitude, region.center.longitude],
            "latitude_delta": region.latitude_delta,
            "longitude_delta": region.longitude_delta,
        },
    }
    route = snapshot.route
    if state is OperationState.COMMITTED and route is not None:
        summary["route"] = {
            "distance_m": route.distance_m,
            "duration_s": route.duration_s,
            "points": len(route.points),
            "origin": [route.origin.latitude, route.origin.longitude],
            "destination": [route.destination.latitude, route.destination.longitude],
        }
    return summary


@flow(name="plan-walk", log_prints=True)
async def plan_walk(
    landmark_key: str = "kings-park",
    lat: float | None = None,
    lon: float | None = None,
) -> dict[str, Any]:
    """
    Fetch walking directions to a landmark.

    Args:
        landmark_key: Landmark to walk to (see ``map_directions.reference``).
        lat: Starting latitude (default: ``settings.lat``).
        lon: Starting longitude (default: ``settings.lon``).

    Returns:
        Summary dict with the terminal state, region and (on success) route.
    """
    settings = get_settings()
    landmark = get_landmark(landmark_key)
    origin = GeoPoint(
        latitude=settings.lat if lat is None else lat,
        longitude=settings.lon if lon is None else lon,
    )

    controller = build_controller(settings, StaticLocationSource(origin))
    print(f"Requesting walking directions from {origin} to {landmark.name}...")
    state = await controller.request_directions(landmark.coordinate)

    summary = summarize(landmark, state, controller.snapshot())
    if state is OperationState.COMMITTED:
        route = summary["route"]
        print(
            f"Route to {landmark.name}: {route['distance_m'] / 1000:.2f} km, "
            f"{route['duration_s'] / 60:.0f} min walk"
        )
    else:
        print(f"No directions to {landmark.name}; map left unchanged.")
    return summary


if __name__ == "__main__":
    key = sys.argv[1] if len(sys.argv) > 1 else "kings-park"
    result = asyncio.run(plan_walk(key))
    print(f"Flow complete: {result}")
