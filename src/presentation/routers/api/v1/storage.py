"""Storage resource handlers.

Handlers:
    get_storage_info - Configured storage backend
"""

from typing import Annotated

from fastapi import Depends

from src.core.container import get_storage_router
from src.infrastructure.storage.storage_router import StorageRouter
from src.schemas.storage_schemas import StorageInfoResponse


async def get_storage_info(
    storage: Annotated[StorageRouter, Depends(get_storage_router)],
) -> StorageInfoResponse:
    """Describe the storage backend this process was started with.

    GET /api/v1/storage → 200 OK
    """
    return StorageInfoResponse.from_description(storage.describe())
