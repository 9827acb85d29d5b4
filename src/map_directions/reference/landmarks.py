"""Fixed points of interest around Perth, WA."""

from __future__ import annotations

from map_directions.region import region_from_distance
from map_directions.schemas import GeoPoint, Landmark

HOME = GeoPoint(latitude=-31.970838701817076, longitude=115.81733669987415)
WORK = GeoPoint(latitude=-31.872630919113636, longitude=115.92597050781775)
FERRY_ELIZABETH_QUAY = GeoPoint(latitude=-31.956956148146187, longitude=115.85598567416766)
KINGS_PARK_BOTANIC_GARDEN = GeoPoint(latitude=-31.960772289516896, longitude=115.8327472610476)
PERTH = GeoPoint(latitude=-31.950934450673, longitude=115.85996564582562)
OPTUS_STADIUM = GeoPoint(latitude=-31.950895396290967, longitude=115.88824353965249)

# Markers shown on the map, in display order
LANDMARKS: tuple[Landmark, ...] = (
    Landmark(key="home", name="Home", coordinate=HOME, symbol="house.fill"),
    Landmark(
        key="ferry",
        name="Ferry Elizabeth Quay",
        coordinate=FERRY_ELIZABETH_QUAY,
        symbol="ferry.fill",
    ),
    Landmark(
        key="kings-park",
        name="Kings Park & Botanic Garden",
        coordinate=KINGS_PARK_BOTANIC_GARDEN,
        symbol="tree.fill",
    ),
    Landmark(key="work", name="My job", coordinate=WORK, symbol="building.2.fill"),
)

# Camera on launch: 1300 m x 1300 m around home
INITIAL_REGION_METERS = 1300.0
INITIAL_REGION = region_from_distance(HOME, INITIAL_REGION_METERS, INITIAL_REGION_METERS)


def get_landmark(key: str) -> Landmark:
    """Look up a landmark by key (case-insensitive). Raises KeyError if unknown."""
    wanted = key.strip().lower()
    for landmark in LANDMARKS:
        if landmark.key == wanted:
            return landmark
    raise KeyError(key)
