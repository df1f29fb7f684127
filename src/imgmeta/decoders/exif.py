"""EXIF decoder.

Reads the TIFF structure embedded in a JPEG APP1 ``Exif`` segment: IFD0,
the Exif sub-IFD and the GPS sub-IFD. Tags come back keyed by name, with
RATIONAL values as :class:`Rational` and multi-valued fields as lists.
"""

from __future__ import annotations

import struct
from typing import Any

from loguru import logger

from imgmeta.core.types import Rational, TagMapping

from .exif_tags import COMPONENTS, EXIF_TAGS, GPS_TAGS, STRING_VALUES, TIFF_TAGS
from .jpeg import APP1, iter_segments

EXIF_HEADER = b"Exif\x00\x00"

# TIFF field type: (struct format, size in bytes)
_FIELD_TYPES = {
    1: ("B", 1),  # BYTE
    2: ("s", 1),  # ASCII
    3: ("H", 2),  # SHORT
    4: ("I", 4),  # LONG
    5: ("II", 8),  # RATIONAL
    6: ("b", 1),  # SBYTE
    7: ("B", 1),  # UNDEFINED
    8: ("h", 2),  # SSHORT
    9: ("i", 4),  # SLONG
    10: ("ii", 8),  # SRATIONAL
    11: ("f", 4),  # FLOAT
    12: ("d", 8),  # DOUBLE
}

_ASCII = 2
_RATIONAL_TYPES = (5, 10)


def find_exif(data: bytes) -> TagMapping | None:
    """Locate and parse EXIF data in a JPEG buffer.

    Args:
        data: The complete JPEG file.

    Returns:
        Tags by name, or None if the buffer is not a JPEG or holds no
        readable EXIF segment.
    """
    for segment in iter_segments(data):
        if segment.marker == APP1 and segment.payload.startswith(EXIF_HEADER):
            return read_tiff(segment.payload[len(EXIF_HEADER):])
    return None


def read_tiff(tiff: bytes) -> TagMapping | None:
    """Parse a TIFF header and its IFD0, Exif and GPS directories.

    Offsets inside the TIFF structure are relative to its first byte.
    """
    if len(tiff) < 8:
        logger.warning("EXIF segment too short for a TIFF header")
        return None

    byte_order = tiff[:2]
    if byte_order == b"II":
        endian = "<"
    elif byte_order == b"MM":
        endian = ">"
    else:
        logger.warning(f"Not valid TIFF data: byte order {byte_order!r}")
        return None

    magic, ifd0_offset = struct.unpack(endian + "HI", tiff[2:8])
    if magic != 42:
        logger.warning(f"Not valid TIFF data: magic {magic:#06x}")
        return None

    reader = _IFDReader(tiff, endian)
    tags = reader.read_ifd(ifd0_offset, TIFF_TAGS)

    exif_offset = tags.get("ExifIFDPointer")
    if isinstance(exif_offset, int):
        exif_tags = reader.read_ifd(exif_offset, EXIF_TAGS)
        _apply_labels(exif_tags)
        tags.update(exif_tags)

    gps_offset = tags.get("GPSInfoIFDPointer")
    if isinstance(gps_offset, int):
        gps_tags = reader.read_ifd(gps_offset, GPS_TAGS)
        version = gps_tags.get("GPSVersionID")
        if isinstance(version, list):
            gps_tags["GPSVersionID"] = ".".join(str(part) for part in version)
        tags.update(gps_tags)

    return tags


class _IFDReader:
    """Reads image file directories from a TIFF buffer."""

    def __init__(self, tiff: bytes, endian: str):
        self.tiff = tiff
        self.endian = endian

    def read_ifd(self, offset: int, names: dict[int, str]) -> TagMapping:
        tags: TagMapping = {}
        if offset + 2 > len(self.tiff):
            logger.debug(f"IFD offset {offset} outside TIFF data")
            return tags

        (count,) = struct.unpack(self.endian + "H", self.tiff[offset:offset + 2])
        for index in range(count):
            entry = offset + 2 + index * 12
            if entry + 12 > len(self.tiff):
                logger.debug(f"IFD at {offset} truncated after {index} of {count} entries")
                break
            tag, field_type, value_count = struct.unpack(
                self.endian + "HHI", self.tiff[entry:entry + 8]
            )
            value = self._read_value(entry, field_type, value_count)
            if value is None:
                continue
            tags[names.get(tag, f"Tag0x{tag:04X}")] = value
        return tags

    def _read_value(self, entry: int, field_type: int, count: int) -> Any:
        spec = _FIELD_TYPES.get(field_type)
        if spec is None or count == 0:
            return None
        fmt, size = spec

        total = size * count
        if total > 4:
            (start,) = struct.unpack(self.endian + "I", self.tiff[entry + 8:entry + 12])
        else:
            start = entry + 8
        if start + total > len(self.tiff):
            logger.debug(f"Tag value at {start} ({total} bytes) outside TIFF data")
            return None
        raw = self.tiff[start:start + total]

        if field_type == _ASCII:
            return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")

        if field_type in _RATIONAL_TYPES:
            pairs = struct.unpack(self.endian + fmt[0] * (2 * count), raw)
            values: list[Any] = [
                Rational(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)
            ]
        else:
            values = list(struct.unpack(self.endian + fmt * count, raw))

        return values[0] if count == 1 else values


def _apply_labels(tags: TagMapping) -> None:
    """Replace enumerated codes and version bytes with readable text."""
    for name in ("ExifVersion", "FlashpixVersion"):
        value = tags.get(name)
        if isinstance(value, list):
            tags[name] = "".join(chr(byte) for byte in value)

    components = tags.get("ComponentsConfiguration")
    if isinstance(components, list):
        tags["ComponentsConfiguration"] = "".join(
            COMPONENTS.get(code, "") for code in components
        )

    for name, labels in STRING_VALUES.items():
        value = tags.get(name)
        if isinstance(value, int) and value in labels:
            tags[name] = labels[value]
