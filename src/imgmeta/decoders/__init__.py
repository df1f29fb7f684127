"""Format decoders for JPEG embedded metadata.

Each decoder is a plain function ``bytes -> mapping | None``. None means
"no such metadata in this buffer", which is not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from imgmeta.core.types import TagMapping

from .exif import find_exif, read_tiff
from .iptc import IPTC_TAG_NAMES, find_iptc, read_iim
from .jpeg import Segment, is_jpeg, iter_segments
from .xmp import find_xmp, parse_xmp_packet

Decoder = Callable[[bytes], "TagMapping | None"]


@dataclass(frozen=True)
class DecoderFacade:
    """The three decoders run by the extraction pipeline.

    Swap any of them to plug in another parser:

        decoders = DecoderFacade(exif=my_exif_reader)
    """

    exif: Decoder = find_exif
    iptc: Decoder = find_iptc
    xmp: Decoder = find_xmp


__all__ = [
    "Decoder",
    "DecoderFacade",
    "find_exif",
    "find_iptc",
    "find_xmp",
    "read_tiff",
    "read_iim",
    "parse_xmp_packet",
    "IPTC_TAG_NAMES",
    "Segment",
    "is_jpeg",
    "iter_segments",
]
