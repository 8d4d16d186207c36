"""Local filesystem storage adapter.

Implements StorageBackendProtocol on a directory tree mirroring the object
key layout. Writes are durable when store() returns: each file is written
to a hidden temporary name, fsynced, then atomically renamed into place,
so a listing never observes a half-written photo.

URLs are server-relative paths under the static files prefix, optionally
absolutized with PUBLIC_BASE_URL. They never expire.
"""

from __future__ import annotations

import asyncio
import os
from datetime import UTC, datetime
from pathlib import Path

from uuid_extensions import uuid7

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects import ConvertedImage
from src.infrastructure.storage.base_adapter import BaseStorageAdapter, ListedObject
from src.infrastructure.storage.object_keys import ObjectKeys


class LocalStorageAdapter(BaseStorageAdapter):
    """Photo storage under a local root directory.

    Args:
        root: Storage root directory (created on first write).
        keys: Key naming helper.
        logger: Structured logger.
        url_prefix: Prefix under which the root is served.
        base_url: Optional absolute base for generated URLs.
    """

    mode = "local"
    _io_errors = (OSError,)

    def __init__(
        self,
        *,
        root: str | Path,
        keys: ObjectKeys,
        logger: LoggerProtocol,
        url_prefix: str = "/api/files",
        base_url: str | None = None,
    ) -> None:
        super().__init__(keys=keys, logger=logger)
        self._root = Path(root).resolve()
        self._url_prefix = "/" + url_prefix.strip("/")
        self._base_url = base_url.rstrip("/") if base_url else None

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        return self._root.joinpath(*key.split("/"))

    async def _write(self, key: str, image: ConvertedImage) -> None:
        await asyncio.to_thread(self._write_sync, self._path(key), image.buffer)

    @staticmethod
    def _write_sync(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f".{path.name}.{uuid7().hex}.tmp")
        try:
            with open(tmp_path, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        finally:
            tmp_path.unlink(missing_ok=True)

    async def _list_objects(self, prefix: str) -> list[ListedObject]:
        return await asyncio.to_thread(self._list_objects_sync, prefix)

    def _list_objects_sync(self, prefix: str) -> list[ListedObject]:
        directory = self._path(prefix.rstrip("/"))
        if not directory.is_dir():
            return []
        objects = []
        for entry in os.scandir(directory):
            if not entry.is_file() or entry.name.startswith("."):
                continue
            objects.append(
                ListedObject(
                    key=f"{prefix}{entry.name}",
                    modified_at=datetime.fromtimestamp(entry.stat().st_mtime, UTC),
                )
            )
        return objects

    async def _find_key(self, name_prefix: str) -> str | None:
        return await asyncio.to_thread(self._find_key_sync, name_prefix)

    def _find_key_sync(self, name_prefix: str) -> str | None:
        topic_prefix, _, name_start = name_prefix.rpartition("/")
        directory = self._path(topic_prefix)
        if not directory.is_dir():
            return None
        matches = sorted(
            entry.name
            for entry in os.scandir(directory)
            if entry.is_file() and entry.name.startswith(name_start)
        )
        return f"{topic_prefix}/{matches[0]}" if matches else None

    async def _read(self, key: str) -> bytes:
        return await asyncio.to_thread(self._path(key).read_bytes)

    def url_for(self, key: str) -> str:
        """Static-serving URL for a key.

        Args:
            key: Key relative to the storage root.

        Returns:
            "/api/files/<key>", or "<base_url>/api/files/<key>" when a
            base URL is configured.
        """
        path = f"{self._url_prefix}/{key}"
        return f"{self._base_url}{path}" if self._base_url else path

    def describe(self) -> dict[str, str]:
        return {
            "mode": self.mode,
            "root": str(self._root),
            "url_prefix": self._url_prefix,
            "key_prefix": self._keys.prefix,
        }
