"""Route metadata types for the API Route Registry.

The registry is the single source of truth for Shutterfeed's versioned
routes: each entry declares the endpoint, who may call it, and the errors
it documents. generator.py turns entries into FastAPI routes.

Core types:
    RouteMetadata: One route (method, path, handler, access, docs)
    HTTPMethod: HTTP method enum (GET, POST)
    Access: Who may call a route (PUBLIC, UPLOADER)
    ErrorSpec: Documented error response

Usage:
    from src.presentation.routers.api.v1.routes.metadata import RouteMetadata, HTTPMethod

    metadata = RouteMetadata(
        method=HTTPMethod.POST,
        path="/events/{event_code}/photos",
        handler=upload_event_photo,
        tags=("Photos",),
        summary="Upload photo",
        response_model=PhotoUploadResponse,
        status_code=201,
        access=Access.UPLOADER,
    )
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


class HTTPMethod(str, Enum):
    """HTTP methods used by the API."""

    GET = "GET"
    POST = "POST"


class Access(str, Enum):
    """Who may call a route.

    Attributes:
        PUBLIC: Anyone (gallery viewers, listing, stats)
        UPLOADER: Requires the upload API key when one is configured
    """

    PUBLIC = "public"
    UPLOADER = "uploader"


@dataclass(frozen=True, slots=True)
class ErrorSpec:
    """Error response documented in OpenAPI.

    Examples:
        >>> ErrorSpec(415, "Unsupported or malformed image")
    """

    status: int
    description: str


@dataclass(frozen=True, kw_only=True)
class RouteMetadata:
    """One API route.

    Attributes:
        method: HTTP method.
        path: URL path relative to the version prefix.
        handler: Async endpoint function. Its name is the operation id.
        tags: OpenAPI tags.
        summary: Short endpoint description.
        description: Longer description (markdown).
        response_model: Success body model (None for streams).
        status_code: Success status.
        errors: Documented error responses.
        access: Who may call the route.
    """

    method: HTTPMethod
    path: str
    handler: Callable[..., Awaitable[Any]]
    tags: Sequence[str]
    summary: str
    description: str | None = None
    response_model: type[BaseModel] | None = None
    status_code: int = 200
    errors: Sequence[ErrorSpec] = ()
    access: Access = Access.PUBLIC

    @property
    def operation_id(self) -> str:
        return self.handler.__name__
