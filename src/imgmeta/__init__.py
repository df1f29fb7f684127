"""imgmeta: EXIF, IPTC and XMP metadata from JPEG images.

    from imgmeta import ImageHandle, get_data, get_tag

    handle = await get_data(ImageHandle(src="https://example.com/photo.jpg"))
    get_tag(handle, "Make")
"""

from .core import (
    AcquisitionError,
    BinaryResource,
    Config,
    ConfigError,
    HTTPConfig,
    ImageHandle,
    ImgMetaError,
    MalformedEncodingError,
    MetadataRecord,
    Rational,
    RegistryError,
    SourceError,
    UnresolvableSourceError,
    get_default_config,
    reset_default_config,
)
from .decoders import DecoderFacade
from .extraction import MetadataExtractor
from .query import (
    get_all_tags,
    get_data,
    get_iptc_tag,
    get_tag,
    pretty,
    read_from_binary,
)
from .sources import (
    Blob,
    ByteSourceResolver,
    FileResource,
    SourceKind,
    create_object_url,
    revoke_object_url,
)

__version__ = "0.1.0"

__all__ = [
    "get_data",
    "get_tag",
    "get_iptc_tag",
    "get_all_tags",
    "pretty",
    "read_from_binary",
    "ImageHandle",
    "MetadataRecord",
    "Rational",
    "BinaryResource",
    "Blob",
    "FileResource",
    "create_object_url",
    "revoke_object_url",
    "Config",
    "HTTPConfig",
    "get_default_config",
    "reset_default_config",
    "MetadataExtractor",
    "ByteSourceResolver",
    "SourceKind",
    "DecoderFacade",
    "ImgMetaError",
    "ConfigError",
    "SourceError",
    "MalformedEncodingError",
    "AcquisitionError",
    "UnresolvableSourceError",
    "RegistryError",
]
