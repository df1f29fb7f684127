"""Type definitions for imgmeta."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Protocol, Union, runtime_checkable


@dataclass(frozen=True)
class Rational:
    """An EXIF RATIONAL or SRATIONAL value.

    Attributes:
        numerator: Numerator as stored in the file.
        denominator: Denominator as stored in the file.
    """

    numerator: int
    denominator: int

    @property
    def value(self) -> float:
        """Floating point value of the fraction."""
        if self.denominator == 0:
            if self.numerator == 0:
                return math.nan
            return math.copysign(math.inf, self.numerator)
        return self.numerator / self.denominator

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        value = self.value
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)


# Scalar, Rational, or a sequence of either
TagValue = Union[str, int, float, Rational, list]
TagMapping = dict[str, Any]


@runtime_checkable
class BinaryResource(Protocol):
    """Protocol for binary resource objects whose bytes can be read.

    Example implementation:

        class BucketObject:
            def __init__(self, client, key: str):
                self.client = client
                self.key = key

            async def read(self) -> bytes:
                return await self.client.get_object(self.key)
    """

    async def read(self) -> bytes:
        """Read the full content of the resource.

        Returns:
            The resource bytes.

        Raises:
            OSError: If the underlying storage cannot be read.
        """
        ...


@dataclass
class MetadataRecord:
    """Metadata decoded from one image.

    Attributes:
        exifdata: EXIF tags by name, empty when none were found.
        iptcdata: IPTC tags by name, empty when none were found.
        xmpdata: XMP properties by name, or None when XMP extraction was disabled.
    """

    exifdata: TagMapping = field(default_factory=dict)
    iptcdata: TagMapping = field(default_factory=dict)
    xmpdata: TagMapping | None = None


@dataclass(eq=False)
class ImageHandle:
    """Caller-owned reference to an image.

    Either ``src`` (a data URI, ``blob:`` object URL, or http(s) URL) or
    ``resource`` (a BinaryResource the handle stands for) identifies the
    bytes. ``metadata`` is the only field imgmeta writes.
    """

    src: str | None = None
    resource: BinaryResource | None = None
    metadata: MetadataRecord | None = None

    @classmethod
    def from_bytes(cls, data: bytes, content_type: str = "image/jpeg") -> "ImageHandle":
        """Create a handle over an in-memory blob."""
        from imgmeta.sources.resources import Blob

        return cls(resource=Blob(data, content_type=content_type))

    @classmethod
    def from_path(cls, path: str) -> "ImageHandle":
        """Create a handle over a local path or fsspec URL."""
        from imgmeta.sources.resources import FileResource

        return cls(resource=FileResource(str(path)))

    @property
    def has_data(self) -> bool:
        """Whether a metadata record is already attached."""
        return self.metadata is not None

    @property
    def exifdata(self) -> TagMapping | None:
        return self.metadata.exifdata if self.metadata is not None else None

    @property
    def iptcdata(self) -> TagMapping | None:
        return self.metadata.iptcdata if self.metadata is not None else None

    @property
    def xmpdata(self) -> TagMapping | None:
        return self.metadata.xmpdata if self.metadata is not None else None
