"""
Camera region fitting.

Pure functions that turn coordinates into a ``Region`` the map can display.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from map_directions.errors import EmptyInputError
from map_directions.schemas import GeoPoint, Region

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_PADDING = 0.005  # degrees added to both spans

METERS_PER_DEGREE_LAT = 111_320.0


def fit_region(points: Iterable[GeoPoint], padding: float = DEFAULT_PADDING) -> Region:
    """
    Smallest region containing every point, widened by ``padding``.

    The padding is added to both spans even for a single point, so the
    result always has a visible, non-zero span.

    Args:
        points: Coordinates to enclose (any order).
        padding: Degrees added to each span (must be >= 0).

    Returns:
        Region centred on the bounding box midpoint.

    Raises:
        EmptyInputError: If ``points`` is empty.
        ValueError: If ``padding`` is negative.
    """
    if padding < 0:
        msg = f"padding must be >= 0, got {padding}"
        raise ValueError(msg)

    min_lat = max_lat = min_lon = max_lon = math.nan
    count = 0
    for point in points:
        if count == 0:
            min_lat = max_lat = point.latitude
            min_lon = max_lon = point.longitude
        else:
            min_lat = min(min_lat, point.latitude)
            max_lat = max(max_lat, point.latitude)
            min_lon = min(min_lon, point.longitude)
            max_lon = max(max_lon, point.longitude)
        count += 1

    if count == 0:
        raise EmptyInputError("cannot fit a region to zero points")

    center = GeoPoint(latitude=(min_lat + max_lat) / 2, longitude=(min_lon + max_lon) / 2)
    return Region(
        center=center,
        latitude_delta=max_lat - min_lat + padding,
        longitude_delta=max_lon - min_lon + padding,
    )


def region_from_distance(
    center: GeoPoint, latitudinal_m: float, longitudinal_m: float
) -> Region:
    """
    Region centred on ``center`` spanning the given distances in metres.

    Uses a spherical approximation: one degree of latitude is ~111.32 km and
    a degree of longitude shrinks with cos(latitude).
    """
    if latitudinal_m < 0 or longitudinal_m < 0:
        msg = "distances must be >= 0"
        raise ValueError(msg)

    lat_delta = latitudinal_m / METERS_PER_DEGREE_LAT
    cos_lat = math.cos(math.radians(center.latitude))
    # At the poles a longitude span is meaningless; cover the full circle
    lon_delta = 360.0 if cos_lat < 1e-12 else longitudinal_m / (METERS_PER_DEGREE_LAT * cos_lat)
    return Region(center=center, latitude_delta=lat_delta, longitude_delta=min(lon_delta, 360.0))
