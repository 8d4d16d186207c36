"""API Route Registry - Single Source of Truth for all v1 routes.

Resources:
    events  - Live photo stream (SSE) and connection statistics
    photos  - Upload, gallery listing, single-photo fetch
    storage - Storage backend info

Only the upload route is gated (Access.UPLOADER); viewing is public.
"""

from src.presentation.routers.api.v1.events import (
    get_connection_stats,
    stream_event_photos,
)
from src.presentation.routers.api.v1.photos import (
    get_event_photo,
    list_event_photos,
    upload_event_photo,
)
from src.presentation.routers.api.v1.routes.metadata import (
    Access,
    ErrorSpec,
    HTTPMethod,
    RouteMetadata,
)
from src.presentation.routers.api.v1.storage import get_storage_info
from src.schemas.event_schemas import ConnectionStatsResponse
from src.schemas.photo_schemas import (
    PhotoContentResponse,
    PhotoListResponse,
    PhotoUploadResponse,
)
from src.schemas.storage_schemas import StorageInfoResponse

EVENT_NOT_FOUND = ErrorSpec(404, "Event not found")
STORAGE_UNAVAILABLE = ErrorSpec(503, "Storage unavailable")

ROUTE_REGISTRY: list[RouteMetadata] = [
    # Events
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/events/stats",
        handler=get_connection_stats,
        tags=("Events",),
        summary="Connection statistics",
        description="Open gallery streams per topic.",
        response_model=ConnectionStatsResponse,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/events/{event_code}/stream",
        handler=stream_event_photos,
        tags=("Events",),
        summary="Subscribe to event photos (SSE)",
        description="Server-Sent Events stream of new photos for one event. "
        "The first message is always `connected`.",
        errors=(EVENT_NOT_FOUND,),
    ),
    # Photos
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/events/{event_code}/photos",
        handler=upload_event_photo,
        tags=("Photos",),
        summary="Upload photo",
        description="Store a photo (converting RAW and other formats) and "
        "announce it to the event's live viewers.",
        response_model=PhotoUploadResponse,
        status_code=201,
        errors=(
            ErrorSpec(400, "Empty file"),
            ErrorSpec(401, "Missing or invalid upload API key"),
            EVENT_NOT_FOUND,
            ErrorSpec(415, "Unsupported or malformed image"),
            STORAGE_UNAVAILABLE,
        ),
        access=Access.UPLOADER,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/events/{event_code}/photos",
        handler=list_event_photos,
        tags=("Photos",),
        summary="List photos",
        description="Gallery of stored photos, newest first, with fresh URLs.",
        response_model=PhotoListResponse,
        errors=(EVENT_NOT_FOUND, STORAGE_UNAVAILABLE),
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/events/{event_code}/photos/{photo_id}",
        handler=get_event_photo,
        tags=("Photos",),
        summary="Get photo",
        description="Original bytes of one photo as a base64 data URL.",
        response_model=PhotoContentResponse,
        errors=(ErrorSpec(404, "Event or photo not found"), STORAGE_UNAVAILABLE),
    ),
    # Storage
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/storage",
        handler=get_storage_info,
        tags=("Storage",),
        summary="Storage info",
        description="Storage backend selected at startup.",
        response_model=StorageInfoResponse,
    ),
]
