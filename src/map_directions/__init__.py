"""Map Directions - walking routes to map landmarks with an auto-fitted camera.

Architecture::

    schemas.py     Value types (GeoPoint, Region, Route, Landmark, ...)
    region.py      Pure region fitting (points -> padded viewport)
    location.py    Live location feed -> one awaited position
    datasources/   External APIs (OSRM routing, Mapillary imagery)
    controller.py  NavigationController: locate -> route -> fit -> commit
    reference/     Static landmarks and the initial camera region
    flows/         Prefect orchestration (one-shot "plan a walk" flow)
    services/      Shared utilities (HTTP client with retry)

Data flow: command -> controller -> location -> routing -> region -> observers
"""

__version__ = "0.1.0"

from map_directions.config import Settings
from map_directions.schemas import GeoPoint, Region, Route

__all__ = ["GeoPoint", "Region", "Route", "Settings", "__version__"]
