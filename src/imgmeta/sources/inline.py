"""Inline data URI byte source.

Decodes ``data:<media-type>;base64,<payload>`` locators without any I/O.
The media type is informational only and never checked against the bytes.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import NamedTuple

from loguru import logger

from imgmeta.core.exceptions import MalformedEncodingError

from .base import ClassifiedSource

# Scheme and encoding tokens are case-insensitive
_DATA_URI_RE = re.compile(r"^data:([^;,]+);base64,(.*)$", re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(rb"[ \t\r\n\f\v]+")


class DataURI(NamedTuple):
    """A parsed data URI."""

    media_type: str
    payload: str


def is_data_uri(locator: str) -> bool:
    """Check whether a locator uses the data: scheme."""
    return locator[:5].lower() == "data:"


def parse_data_uri(uri: str) -> DataURI:
    """Split a base64 data URI into media type and payload.

    Raises:
        MalformedEncodingError: If the URI lacks the ``;base64,`` shape.
    """
    match = _DATA_URI_RE.match(uri)
    if match is None:
        raise MalformedEncodingError(uri, "expected 'data:<media-type>;base64,<payload>'")
    return DataURI(media_type=match.group(1).strip().lower(), payload=match.group(2))


def decode_data_uri(uri: str) -> bytes:
    """Decode a base64 data URI into bytes.

    Args:
        uri: The data URI.

    Returns:
        The decoded payload.

    Raises:
        MalformedEncodingError: If the shape is wrong or the payload is not
            valid base64.
    """
    parsed = parse_data_uri(uri)
    try:
        body = _WHITESPACE_RE.sub(b"", parsed.payload.encode("ascii"))
        if not body.endswith(b"="):
            body += b"=" * (-len(body) % 4)
        return base64.b64decode(body, validate=True)
    except (UnicodeEncodeError, binascii.Error) as e:
        raise MalformedEncodingError(uri, f"invalid base64 payload: {e}") from e


class InlineByteSource:
    """Byte source for data URIs; completes without suspending."""

    async def fetch_bytes(self, source: ClassifiedSource) -> bytes:
        if source.locator is None:
            raise MalformedEncodingError("", "missing data URI")
        data = decode_data_uri(source.locator)
        logger.debug(f"Decoded {len(data)} bytes from inline data URI")
        return data
