"""S3 storage adapter.

Implements StorageBackendProtocol on an S3 bucket with boto3. Download URLs
are presigned GET URLs with a fixed TTL, recomputed on every call.

boto3 is synchronous; every network call runs in a worker thread so the
event loop keeps serving subscribers while an upload is in flight. boto3
clients are safe to share between threads.
"""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects import ConvertedImage
from src.infrastructure.storage.base_adapter import BaseStorageAdapter, ListedObject
from src.infrastructure.storage.object_keys import ObjectKeys

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class S3StorageAdapter(BaseStorageAdapter):
    """Photo storage in an S3 bucket.

    Args:
        bucket: Bucket name.
        keys: Key naming helper.
        logger: Structured logger.
        region: AWS region of the bucket.
        signed_url_ttl_seconds: Lifetime of presigned URLs.
        max_keys: Keys requested per listing page. Every page of the
            topic prefix is read, so the newest uploads are never cut off.
        client: Pre-built boto3 S3 client (tests); built from the
            remaining arguments when omitted.
        endpoint_url: Custom endpoint for S3-compatible stores.
        access_key_id: Explicit credentials; the default chain is used
            when omitted.
        secret_access_key: Explicit credentials.
    """

    mode = "s3"
    _io_errors = (BotoCoreError, ClientError)

    def __init__(
        self,
        *,
        bucket: str,
        keys: ObjectKeys,
        logger: LoggerProtocol,
        region: str = "us-east-1",
        signed_url_ttl_seconds: int = 3600,
        max_keys: int = 1000,
        client: Any | None = None,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ) -> None:
        super().__init__(keys=keys, logger=logger)
        self._bucket = bucket
        self._region = region
        self._ttl = signed_url_ttl_seconds
        self._max_keys = max_keys
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    async def _write(self, key: str, image: ConvertedImage) -> None:
        await asyncio.to_thread(
            self._client.put_object,
            Bucket=self._bucket,
            Key=key,
            Body=image.buffer,
            ContentType=image.content_type,
        )

    async def _list_objects(self, prefix: str) -> list[ListedObject]:
        return await asyncio.to_thread(self._list_objects_sync, prefix)

    def _list_objects_sync(self, prefix: str) -> list[ListedObject]:
        paginator = self._client.get_paginator("list_objects_v2")
        pages = paginator.paginate(
            Bucket=self._bucket,
            Prefix=prefix,
            PaginationConfig={"PageSize": self._max_keys},
        )
        return [
            ListedObject(key=obj["Key"], modified_at=obj["LastModified"])
            for page in pages
            for obj in page.get("Contents", [])
        ]

    async def _find_key(self, name_prefix: str) -> str | None:
        response = await asyncio.to_thread(
            self._client.list_objects_v2,
            Bucket=self._bucket,
            Prefix=name_prefix,
            MaxKeys=1,
        )
        contents = response.get("Contents", [])
        return contents[0]["Key"] if contents else None

    async def _read(self, key: str) -> bytes:
        return await asyncio.to_thread(self._read_sync, key)

    def _read_sync(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_KEY_CODES:
                raise FileNotFoundError(key) from e
            raise
        body = response["Body"]
        try:
            return body.read()
        finally:
            body.close()

    def url_for(self, key: str) -> str:
        """Presigned GET URL for a key, valid for the configured TTL.

        Args:
            key: Object key.

        Returns:
            Freshly signed URL. Never cache it past the TTL.
        """
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self._bucket, "Key": key},
            ExpiresIn=self._ttl,
        )

    def describe(self) -> dict[str, str]:
        return {
            "mode": self.mode,
            "bucket": self._bucket,
            "region": self._region,
            "key_prefix": self._keys.prefix,
        }
