"""IPTC decoder.

IPTC-IIM data sits in a JPEG APP13 ``Photoshop 3.0`` segment, inside the
8BIM image resource 0x0404. Only the application record (record 2) is
decoded; datasets that repeat (keywords, bylines, ...) become lists.
"""

from __future__ import annotations

import struct
from typing import Any

from loguru import logger

from imgmeta.core.types import TagMapping

from .jpeg import APP13, iter_segments

PHOTOSHOP_HEADER = b"Photoshop 3.0\x00"
RESOURCE_SIGNATURE = b"8BIM"
IPTC_RESOURCE_ID = 0x0404

_TAG_MARKER = 0x1C
_APPLICATION_RECORD = 2

# Record 2 datasets
IPTC_TAG_NAMES = {
    0: "RecordVersion",
    3: "ObjectTypeReference",
    4: "ObjectAttributeReference",
    5: "ObjectName",
    7: "EditStatus",
    8: "EditorialUpdate",
    10: "Urgency",
    12: "SubjectReference",
    15: "Category",
    20: "SupplementalCategories",
    22: "FixtureIdentifier",
    25: "Keywords",
    26: "ContentLocationCode",
    27: "ContentLocationName",
    30: "ReleaseDate",
    35: "ReleaseTime",
    37: "ExpirationDate",
    38: "ExpirationTime",
    40: "SpecialInstructions",
    42: "ActionAdvised",
    45: "ReferenceService",
    47: "ReferenceDate",
    50: "ReferenceNumber",
    55: "DateCreated",
    60: "TimeCreated",
    62: "DigitalCreationDate",
    63: "DigitalCreationTime",
    65: "OriginatingProgram",
    70: "ProgramVersion",
    75: "ObjectCycle",
    80: "Byline",
    85: "BylineTitle",
    90: "City",
    92: "Sublocation",
    95: "ProvinceState",
    100: "CountryCode",
    101: "CountryName",
    103: "OriginalTransmissionReference",
    105: "Headline",
    110: "Credit",
    115: "Source",
    116: "CopyrightNotice",
    118: "Contact",
    120: "Caption",
    122: "WriterEditor",
    130: "ImageType",
    131: "ImageOrientation",
    135: "LanguageIdentifier",
}

# Datasets holding binary numbers rather than text
_NUMERIC_DATASETS = {0}


def find_iptc(data: bytes) -> TagMapping | None:
    """Locate and parse IPTC data in a JPEG buffer.

    Returns:
        Datasets by name, or None if no IPTC block is present.
    """
    for segment in iter_segments(data):
        if segment.marker != APP13 or not segment.payload.startswith(PHOTOSHOP_HEADER):
            continue
        block = find_iptc_resource(segment.payload[len(PHOTOSHOP_HEADER):])
        if block is not None:
            return read_iim(block)
    return None


def find_iptc_resource(resources: bytes) -> bytes | None:
    """Return the payload of the 0x0404 image resource, if present."""
    offset = 0
    size = len(resources)
    while offset + 12 <= size:
        if resources[offset:offset + 4] != RESOURCE_SIGNATURE:
            logger.debug(f"Unexpected image resource signature at offset {offset}")
            return None

        (resource_id,) = struct.unpack(">H", resources[offset + 4:offset + 6])
        # Pascal string name, padded to an even length including the length byte
        name_length = resources[offset + 6] + 1
        name_length += name_length % 2
        header_end = offset + 6 + name_length
        if header_end + 4 > size:
            return None
        (data_size,) = struct.unpack(">I", resources[header_end:header_end + 4])
        data_start = header_end + 4

        if resource_id == IPTC_RESOURCE_ID:
            return resources[data_start:data_start + data_size]
        offset = data_start + data_size + data_size % 2
    return None


def read_iim(block: bytes) -> TagMapping:
    """Parse IPTC-IIM datasets from an image resource payload."""
    tags: TagMapping = {}
    offset = 0
    size = len(block)
    while offset + 5 <= size:
        if block[offset] != _TAG_MARKER:
            break
        record = block[offset + 1]
        dataset = block[offset + 2]
        (length,) = struct.unpack(">H", block[offset + 3:offset + 5])
        offset += 5

        if length & 0x8000:
            # Extended dataset: low bits give the width of the real length
            width = length & 0x7FFF
            length = int.from_bytes(block[offset:offset + width], "big")
            offset += width

        raw = block[offset:offset + length]
        offset += length
        if record != _APPLICATION_RECORD:
            continue

        name = IPTC_TAG_NAMES.get(dataset, f"Dataset{dataset}")
        _store(tags, name, _decode(dataset, raw))
    return tags


def _decode(dataset: int, raw: bytes) -> Any:
    if dataset in _NUMERIC_DATASETS:
        return int.from_bytes(raw, "big")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def _store(tags: TagMapping, name: str, value: Any) -> None:
    if name not in tags:
        tags[name] = value
    elif isinstance(tags[name], list):
        tags[name].append(value)
    else:
        tags[name] = [tags[name], value]
