"""Built-in binary resources.

``Blob`` holds bytes already in memory. ``FileResource`` reads a local path
or any fsspec URL (``memory://``, ``file://``, ...) off the event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import fsspec
from loguru import logger

from imgmeta.core.exceptions import AcquisitionError
from imgmeta.core.types import BinaryResource

from .base import ClassifiedSource


@dataclass(frozen=True)
class Blob:
    """Immutable bytes with a media type."""

    data: bytes = field(repr=False)
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)

    async def read(self) -> bytes:
        return bytes(self.data)


@dataclass(frozen=True)
class FileResource:
    """A file readable through fsspec.

    Attributes:
        url: Local path or fsspec URL.
        fs: Filesystem to open ``url`` on. When None, ``fsspec.open``
            infers it from the URL protocol.
    """

    url: str
    fs: Any = field(default=None, compare=False)

    async def read(self) -> bytes:
        return await asyncio.to_thread(self._read_sync)

    def _read_sync(self) -> bytes:
        if self.fs is not None:
            with self.fs.open(self.url, "rb") as f:
                return f.read()
        with fsspec.open(self.url, "rb") as f:
            return f.read()


async def read_resource(resource: BinaryResource, locator: str) -> bytes:
    """Read a binary resource, normalizing storage failures.

    Args:
        resource: Resource to read.
        locator: Label used in the error message.

    Returns:
        The resource bytes.

    Raises:
        AcquisitionError: If the read raises OSError.
    """
    try:
        data = await resource.read()
    except OSError as e:
        raise AcquisitionError(locator, str(e) or type(e).__name__) from e
    return bytes(data)


class ResourceByteSource:
    """Byte source for handles that are binary resources themselves."""

    async def fetch_bytes(self, source: ClassifiedSource) -> bytes:
        if source.resource is None:
            raise AcquisitionError(source.describe(), "Handle has no binary resource")
        data = await read_resource(source.resource, source.describe())
        logger.debug(f"Read {len(data)} bytes from resource {source.resource!r}")
        return data
