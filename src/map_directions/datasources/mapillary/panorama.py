"""Look-around scenes from Mapillary imagery."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

import requests

from map_directions.datasources.mapillary.client import (
    DEFAULT_SEARCH_RADIUS_DEG,
    GRAPH_IMAGES_API,
    IMAGE_FIELDS,
    VIEWER_URL,
)
from map_directions.errors import PanoramaUnavailableError
from map_directions.schemas import GeoPoint, PanoramaScene
from map_directions.services.http import session


def fetch_images(
    point: GeoPoint,
    token: str,
    *,
    radius_deg: float = DEFAULT_SEARCH_RADIUS_DEG,
    limit: int = 1,
) -> list[dict[str, Any]]:
    """
    Fetch panoramic images inside a small box around ``point``.

    Returns:
        The ``data`` list of the Graph API response (may be empty).
    """
    bbox = ",".join(
        f"{v:.6f}"
        for v in (
            point.longitude - radius_deg,
            point.latitude - radius_deg,
            point.longitude + radius_deg,
            point.latitude + radius_deg,
        )
    )
    params: dict[str, str | int] = {
        "access_token": token,
        "fields": IMAGE_FIELDS,
        "bbox": bbox,
        "is_pano": "true",
        "limit": limit,
    }

    resp = session.get(GRAPH_IMAGES_API, params=params)
    resp.raise_for_status()
    body = resp.json()
    if not isinstance(body, dict):
        raise ValueError(f"unexpected response body: {type(body).__name__}")
    result: list[dict[str, Any]] = body.get("data") or []
    return result


def parse_scene(image: dict[str, Any], fallback: GeoPoint) -> PanoramaScene:
    """Turn one Graph API image record into a ``PanoramaScene``."""
    geometry = image.get("computed_geometry") or image.get("geometry") or {}
    coords = geometry.get("coordinates")
    coordinate = (
        GeoPoint(latitude=coords[1], longitude=coords[0]) if coords and len(coords) >= 2 else fallback
    )

    captured_at = None
    if image.get("captured_at") is not None:
        # Epoch milliseconds
        captured_at = datetime.fromtimestamp(int(image["captured_at"]) / 1000, tz=UTC)

    image_id = str(image["id"])
    return PanoramaScene(
        image_id=image_id,
        coordinate=coordinate,
        captured_at=captured_at,
        url=VIEWER_URL.format(image_id=image_id),
    )


class MapillaryPanoramaProvider:
    """Finds the nearest Mapillary panorama for a coordinate."""

    def __init__(self, token: str | None, radius_deg: float = DEFAULT_SEARCH_RADIUS_DEG) -> None:
        self.token = token
        self.radius_deg = radius_deg

    async def find_scene(self, point: GeoPoint) -> PanoramaScene:
        if not self.token:
            raise PanoramaUnavailableError("no Mapillary access token configured")

        try:
            images = await asyncio.to_thread(
                fetch_images, point, self.token, radius_deg=self.radius_deg
            )
        except (requests.RequestException, ValueError) as exc:
            raise PanoramaUnavailableError(f"imagery lookup failed: {exc}") from exc

        if not images:
            raise PanoramaUnavailableError(f"no imagery near {point}")
        try:
            return parse_scene(images[0], point)
        except (AttributeError, KeyError, OSError, OverflowError, TypeError, ValueError) as exc:
            raise PanoramaUnavailableError(f"malformed image record: {exc!r}") from exc
