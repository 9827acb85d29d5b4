"""Mapillary Graph API constants.

API docs: https://www.mapillary.com/developer/api-documentation
Requires a client access token (``MAP_DIRECTIONS_MAPILLARY_TOKEN``).
"""

GRAPH_IMAGES_API = "https://graph.mapillary.com/images"

IMAGE_FIELDS = "id,captured_at,computed_geometry,geometry,is_pano"

VIEWER_URL = "https://www.mapillary.com/app/?pKey={image_id}"

DEFAULT_SEARCH_RADIUS_DEG = 0.0005  # ~55 m of latitude
