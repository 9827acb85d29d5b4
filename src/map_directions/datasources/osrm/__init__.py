"""OSRM routing service.

Public API:
  - route: fetch_route, parse_route, OSRMRouteRequester
  - client: API URL, profiles, error-code table
"""

from map_directions.datasources.osrm.client import ERROR_CODES, OSRM_BASE_URL, PROFILES
from map_directions.datasources.osrm.route import OSRMRouteRequester, fetch_route, parse_route

__all__ = [
    "ERROR_CODES",
    "OSRM_BASE_URL",
    "PROFILES",
    "OSRMRouteRequester",
    "fetch_route",
    "parse_route",
]
