"""Route generator for the API Route Registry.

Functions:
    register_routes_from_registry: Add every registry entry to a router

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    v1_router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(v1_router, ROUTE_REGISTRY)
"""

from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, Depends

from src.presentation.routers.api.middleware.api_key_dependencies import (
    require_upload_api_key,
)
from src.presentation.routers.api.v1.routes.metadata import Access, RouteMetadata

_ACCESS_DEPENDENCIES: dict[Access, list[Any]] = {
    Access.PUBLIC: [],
    Access.UPLOADER: [Depends(require_upload_api_key)],
}


def register_routes_from_registry(
    router: APIRouter, registry: Sequence[RouteMetadata]
) -> None:
    """Generate FastAPI routes from registry metadata.

    Args:
        router: Router to add routes to.
        registry: Route entries.

    Raises:
        ValueError: If two entries share a method and path.
    """
    seen: set[tuple[str, str]] = set()
    for metadata in registry:
        key = (metadata.method.value, metadata.path)
        if key in seen:
            raise ValueError(f"Duplicate route: {key[0]} {key[1]}")
        seen.add(key)

        router.add_api_route(
            path=metadata.path,
            endpoint=metadata.handler,
            methods=[metadata.method.value],
            response_model=metadata.response_model,
            status_code=metadata.status_code,
            tags=list(metadata.tags),
            summary=metadata.summary,
            description=metadata.description,
            operation_id=metadata.operation_id,
            responses={e.status: {"description": e.description} for e in metadata.errors}
            or None,
            dependencies=_ACCESS_DEPENDENCIES[metadata.access],
        )
