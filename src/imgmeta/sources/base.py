"""Base protocol and types for byte sources.

A byte source turns a classified image handle into the raw bytes of the
image. Sources use Protocol (structural subtyping) so callers can register
their own without inheriting from anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from imgmeta.core.types import BinaryResource


class SourceKind(Enum):
    """How the bytes of an image handle are acquired."""

    INLINE = "inline"
    OBJECT_URL = "object-url"
    REMOTE = "remote"
    RESOURCE = "resource"


@dataclass(frozen=True)
class ClassifiedSource:
    """An image handle reduced to its acquisition strategy.

    Attributes:
        kind: The acquisition strategy.
        locator: The handle's src for INLINE, OBJECT_URL and REMOTE.
        resource: The handle's binary resource for RESOURCE.
    """

    kind: SourceKind
    locator: str | None = None
    resource: BinaryResource | None = None

    def describe(self) -> str:
        """Short human-readable label for log and error messages."""
        if self.locator is not None:
            if self.kind is SourceKind.INLINE:
                return self.locator[:32] + ("..." if len(self.locator) > 32 else "")
            return self.locator
        return repr(self.resource)


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for strategies that read image bytes.

    Example implementation:

        class S3ByteSource:
            def __init__(self, client):
                self.client = client

            async def fetch_bytes(self, source: ClassifiedSource) -> bytes:
                return await self.client.download(source.locator)
    """

    async def fetch_bytes(self, source: ClassifiedSource) -> bytes:
        """Read the full image content.

        Args:
            source: The classified handle to read.

        Returns:
            A byte buffer owned by the caller.

        Raises:
            MalformedEncodingError: If an inline payload cannot be decoded.
            AcquisitionError: If the network or storage read fails.
        """
        ...
