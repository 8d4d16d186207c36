"""Upload API key dependencies.

Uploads can be gated by a shared secret (UPLOAD_API_KEY). The key is read
from the ``X-API-Key`` header or the ``api_key`` query parameter. When no
key is configured, uploads are open.

Usage:
    # Applied by the route generator to UPLOADER routes
    dependencies=[Depends(require_upload_api_key)]
"""

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader, APIKeyQuery

from src.core.config import Settings, get_settings
from src.core.constants import API_KEY_HEADER, API_KEY_QUERY_PARAM

# auto_error=False: a missing key is only an error when one is configured
api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)
api_key_query = APIKeyQuery(name=API_KEY_QUERY_PARAM, auto_error=False)


async def require_upload_api_key(
    settings: Annotated[Settings, Depends(get_settings)],
    header_key: Annotated[str | None, Security(api_key_header)] = None,
    query_key: Annotated[str | None, Security(api_key_query)] = None,
) -> None:
    """Reject the request unless it carries the configured upload key.

    Args:
        settings: Application settings (injected).
        header_key: Key from the X-API-Key header.
        query_key: Key from the api_key query parameter.

    Raises:
        HTTPException: 401 if a key is configured and the request's key is
            missing or wrong.
    """
    expected = settings.upload_api_key
    if not expected:
        return

    supplied = header_key or query_key
    if supplied is None or not secrets.compare_digest(
        supplied.encode(), expected.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid upload API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )
