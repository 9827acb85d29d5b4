"""
Prefect flows.

Flows:
- directions: resolve position, fetch a walking route to a landmark, fit the camera

Usage (local):
    python -m map_directions.flows.directions kings-park

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m map_directions.flows.directions kings-park
"""
