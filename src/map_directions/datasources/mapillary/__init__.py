"""Mapillary street-level imagery.

Public API:
  - panorama: fetch_images, parse_scene, MapillaryPanoramaProvider
  - client: API URLs, requested fields
"""

from map_directions.datasources.mapillary.client import GRAPH_IMAGES_API
from map_directions.datasources.mapillary.panorama import (
    MapillaryPanoramaProvider,
    fetch_images,
    parse_scene,
)

__all__ = [
    "GRAPH_IMAGES_API",
    "MapillaryPanoramaProvider",
    "fetch_images",
    "parse_scene",
]
