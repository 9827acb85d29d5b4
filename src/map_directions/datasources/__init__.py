"""External service integrations.

Each subdirectory is one service with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, error-code tables
    └── {feature}.py      # Fetch + parse functions and the async adapter class

- osrm/       Walking routes (OSRM ``/route/v1`` API)
- mapillary/  Street-level imagery near a point (Mapillary Graph API)

Fetch functions are synchronous ``requests`` calls; the adapter classes run
them with ``asyncio.to_thread`` so the controller can await them.
"""
