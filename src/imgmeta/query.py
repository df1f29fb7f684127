"""Tag query API.

``get_data`` is the only coroutine here; every other accessor is synchronous
and returns an empty value (None, ``{}`` or ``""``) for a handle that has no
metadata yet, so read-side code never needs error handling.

Example:
    handle = await get_data(ImageHandle(src="https://example.com/photo.jpg"))
    print(get_tag(handle, "Model"))
    print(pretty(handle))
"""

from __future__ import annotations

from typing import Any

from imgmeta.core.config import Config, get_default_config
from imgmeta.core.types import ImageHandle, MetadataRecord, Rational, TagMapping
from imgmeta.extraction.pipeline import MetadataExtractor

# Singleton instance
_default_extractor: MetadataExtractor | None = None


def get_default_extractor() -> MetadataExtractor:
    """Get the extractor used when callers do not supply one."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = MetadataExtractor()
    return _default_extractor


def reset_default_extractor() -> None:
    """Reset the default extractor singleton.

    This is primarily useful for testing to ensure a clean state.
    """
    global _default_extractor
    _default_extractor = None


async def get_data(
    handle: ImageHandle,
    *,
    config: Config | None = None,
    extractor: MetadataExtractor | None = None,
) -> ImageHandle:
    """Return the handle with its metadata record attached.

    Runs the extraction pipeline only if the handle has no record yet.

    Args:
        handle: Image handle to populate.
        config: Per-call configuration (e.g. ``Config(xmp_enabled=False)``).
            Both the XMP flag and the HTTP settings apply to this call.
        extractor: Extractor to use instead of the default one.

    Returns:
        The same handle.
    """
    if handle.has_data:
        return handle
    extractor = extractor or get_default_extractor()
    return await extractor.extract(handle, config=config)


def get_tag(handle: ImageHandle, name: str) -> Any:
    """EXIF tag value, or None if absent or not extracted."""
    if not handle.has_data:
        return None
    return handle.metadata.exifdata.get(name)


def get_iptc_tag(handle: ImageHandle, name: str) -> Any:
    """IPTC dataset value, or None if absent or not extracted."""
    if not handle.has_data:
        return None
    return handle.metadata.iptcdata.get(name)


def get_all_tags(handle: ImageHandle) -> TagMapping:
    """Shallow copy of all EXIF tags; empty if not extracted."""
    if not handle.has_data:
        return {}
    return dict(handle.metadata.exifdata)


def pretty(handle: ImageHandle) -> str:
    """Render the EXIF tags one per line for debugging.

    Rationals render as ``key : value [numerator/denominator]``, lists as
    ``key : [N values]``, anything else as ``key : value``. Lines end with
    CRLF and follow the record's order.
    """
    if not handle.has_data:
        return ""
    lines = []
    for key, value in handle.metadata.exifdata.items():
        if isinstance(value, Rational):
            lines.append(f"{key} : {value} [{value.numerator}/{value.denominator}]\r\n")
        elif isinstance(value, (list, tuple)):
            lines.append(f"{key} : [{len(value)} values]\r\n")
        else:
            lines.append(f"{key} : {value}\r\n")
    return "".join(lines)


def read_from_binary(
    data: bytes,
    *,
    config: Config | None = None,
    extractor: MetadataExtractor | None = None,
) -> MetadataRecord:
    """Decode metadata from an in-memory JPEG without a handle.

    Args:
        data: The complete JPEG file.
        config: Configuration; the process-wide default when None.
        extractor: Extractor whose decoders to use.

    Returns:
        A new metadata record.
    """
    config = config or get_default_config()
    extractor = extractor or get_default_extractor()
    return extractor.decode(bytes(data), xmp_enabled=config.xmp_enabled)
