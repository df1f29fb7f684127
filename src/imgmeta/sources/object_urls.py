"""Object URL store and byte source.

Object URLs (``blob:imgmeta/<id>``) are process-local references to bytes
registered earlier with :func:`create_object_url`. The bytes live in an
fsspec in-memory filesystem until the URL is revoked.

Example:
    url = create_object_url(jpeg_bytes)
    handle = ImageHandle(src=url)
    await get_data(handle)
    revoke_object_url(url)
"""

from __future__ import annotations

import uuid
from typing import Any

import fsspec
from loguru import logger

from imgmeta.core.exceptions import AcquisitionError

from .base import ClassifiedSource
from .resources import Blob, FileResource, read_resource

OBJECT_URL_PREFIX = "blob:imgmeta/"


def is_object_url(locator: str) -> bool:
    """Check whether a locator uses the blob: scheme."""
    return locator[:5].lower() == "blob:"


class ObjectURLStore:
    """Registry of object URLs backed by an fsspec filesystem.

    The fsspec memory filesystem is process-global, so stores sharing a
    root share registrations. Each store gets its own root unless one is
    given.

    Attributes:
        root: Directory on the filesystem holding registered bytes.
    """

    def __init__(self, fs: Any = None, root: str | None = None) -> None:
        """Initialize the store.

        Args:
            fs: fsspec filesystem; defaults to the in-memory filesystem.
            root: Directory holding registered bytes; defaults to a fresh
                directory under ``/imgmeta-object-urls``.
        """
        self._fs = fs if fs is not None else fsspec.filesystem("memory")
        if root is None:
            root = f"/imgmeta-object-urls/{uuid.uuid4().hex}"
        self.root = root.rstrip("/")

    def create(self, data: bytes | Blob) -> str:
        """Register bytes and return a new object URL.

        Args:
            data: Raw bytes or a Blob.

        Returns:
            A ``blob:`` URL naming the registered bytes.
        """
        if isinstance(data, Blob):
            data = data.data
        key = uuid.uuid4().hex
        with self._fs.open(self._path(key), "wb") as f:
            f.write(bytes(data))
        logger.debug(f"Registered object URL {OBJECT_URL_PREFIX}{key} ({len(data)} bytes)")
        return f"{OBJECT_URL_PREFIX}{key}"

    def revoke(self, url: str) -> bool:
        """Release the bytes behind an object URL.

        Returns:
            True if the URL was registered and removed, False otherwise.
        """
        key = self._key(url)
        if not key:
            return False
        path = self._path(key)
        if not self._fs.exists(path):
            return False
        self._fs.rm(path)
        logger.debug(f"Revoked object URL {url}")
        return True

    def is_registered(self, url: str) -> bool:
        key = self._key(url)
        return bool(key) and self._fs.exists(self._path(key))

    def resolve(self, url: str) -> FileResource:
        """Resolve an object URL to the resource holding its bytes.

        Raises:
            AcquisitionError: If the URL was never registered or was revoked.
        """
        if not self.is_registered(url):
            raise AcquisitionError(url, "Object URL is not registered or was revoked")
        return FileResource(self._path(self._key(url)), fs=self._fs)

    def _key(self, url: str) -> str:
        if not is_object_url(url):
            return ""
        return url.split(":", 1)[1].rsplit("/", 1)[-1].strip()

    def _path(self, key: str) -> str:
        return f"{self.root}/{key}"


class ObjectURLByteSource:
    """Byte source for ``blob:`` object URLs."""

    def __init__(self, store: ObjectURLStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> ObjectURLStore:
        return self._store if self._store is not None else get_default_object_url_store()

    async def fetch_bytes(self, source: ClassifiedSource) -> bytes:
        url = source.locator or ""
        resource = self.store.resolve(url)
        data = await read_resource(resource, url)
        logger.debug(f"Read {len(data)} bytes from object URL {url}")
        return data


# Singleton instance
_default_store: ObjectURLStore | None = None


def get_default_object_url_store() -> ObjectURLStore:
    """Get the process-wide object URL store."""
    global _default_store
    if _default_store is None:
        _default_store = ObjectURLStore()
    return _default_store


def create_object_url(data: bytes | Blob) -> str:
    """Register bytes with the default store and return an object URL."""
    return get_default_object_url_store().create(data)


def revoke_object_url(url: str) -> bool:
    """Revoke an object URL registered with the default store."""
    return get_default_object_url_store().revoke(url)
