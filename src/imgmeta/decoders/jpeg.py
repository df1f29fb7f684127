"""JPEG segment walking shared by the metadata decoders."""

from __future__ import annotations

import struct
from typing import Iterator, NamedTuple

from loguru import logger

SOI = b"\xff\xd8"

APP1 = 0xE1
APP13 = 0xED

_SOS = 0xDA
_EOI = 0xD9
_TEM = 0x01


class Segment(NamedTuple):
    """A JPEG marker segment.

    Attributes:
        marker: Marker byte following 0xFF (e.g. 0xE1 for APP1).
        offset: Offset of the 0xFF byte in the file.
        payload: Segment data after the two length bytes.
    """

    marker: int
    offset: int
    payload: bytes


def is_jpeg(data: bytes) -> bool:
    return data[:2] == SOI


def iter_segments(data: bytes) -> Iterator[Segment]:
    """Yield the marker segments that precede the compressed image data.

    Stops at start-of-scan, end-of-image, an invalid marker, or truncated
    data. Yields nothing for non-JPEG input.
    """
    if not is_jpeg(data):
        return

    offset = 2
    size = len(data)
    while offset + 2 <= size:
        if data[offset] != 0xFF:
            logger.debug(f"Invalid JPEG marker byte 0x{data[offset]:02X} at offset {offset}")
            return

        marker = data[offset + 1]
        if marker == 0xFF:
            # Fill byte
            offset += 1
            continue
        if marker in (_SOS, _EOI):
            return
        if marker == _TEM or 0xD0 <= marker <= 0xD7:
            offset += 2
            continue

        if offset + 4 > size:
            return
        (length,) = struct.unpack(">H", data[offset + 2:offset + 4])
        if length < 2:
            return
        yield Segment(marker, offset, data[offset + 4:offset + 2 + length])
        offset += 2 + length
