"""API Route Registry package.

Modules:
    metadata: Core types (RouteMetadata, Access, ErrorSpec, HTTPMethod)
    registry: ROUTE_REGISTRY - every v1 route
    generator: register_routes_from_registry() - generate FastAPI routes
"""

from src.presentation.routers.api.v1.routes.metadata import (
    Access,
    ErrorSpec,
    HTTPMethod,
    RouteMetadata,
)

__all__ = [
    "Access",
    "ErrorSpec",
    "HTTPMethod",
    "RouteMetadata",
]
