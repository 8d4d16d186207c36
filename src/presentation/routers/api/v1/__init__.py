"""API v1 routers.

RESTful resource-based endpoints. All routes are generated from the Route
Metadata Registry at startup; see routes/registry.py for the catalog.

Resources:
    /api/v1/events/stats                          - Connection statistics
    /api/v1/events/{event_code}/stream            - Live photo stream (SSE)
    /api/v1/events/{event_code}/photos            - Upload / list photos
    /api/v1/events/{event_code}/photos/{photo_id} - Fetch one photo
    /api/v1/storage                               - Storage backend info
"""

from fastapi import APIRouter

from src.core.config import get_settings
from src.presentation.routers.api.v1.routes.generator import (
    register_routes_from_registry,
)
from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY

# Create v1 router and generate all routes from registry
v1_router = APIRouter(prefix=get_settings().api_v1_prefix)
register_routes_from_registry(v1_router, ROUTE_REGISTRY)

__all__ = [
    "v1_router",
]
