"""Test doubles and byte builders."""

from .jpeg import (
    TiffBuilder,
    build_jpeg,
    iim,
    photoshop_resources,
    sample_jpeg,
    sample_tiff,
    to_data_uri,
)
from .sources import (
    CountingDecoders,
    CountingResource,
    FailingResource,
    RecordingByteSource,
)

__all__ = [
    "TiffBuilder",
    "build_jpeg",
    "iim",
    "photoshop_resources",
    "sample_jpeg",
    "sample_tiff",
    "to_data_uri",
    "CountingDecoders",
    "CountingResource",
    "FailingResource",
    "RecordingByteSource",
]
