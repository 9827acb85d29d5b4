"""Static map configuration.

Reference data that doesn't change at runtime: landmark markers and the
initial camera region.
"""

from map_directions.reference.landmarks import INITIAL_REGION as INITIAL_REGION
from map_directions.reference.landmarks import LANDMARKS as LANDMARKS
from map_directions.reference.landmarks import get_landmark as get_landmark
