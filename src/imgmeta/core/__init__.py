"""Core configuration, exceptions and types for imgmeta."""

from .config import (
    Config,
    HTTPConfig,
    get_default_config,
    reset_default_config,
)
from .exceptions import (
    AcquisitionError,
    ConfigError,
    ImgMetaError,
    MalformedEncodingError,
    SourceError,
    RegistryError,
    UnresolvableSourceError,
)
from .types import (
    BinaryResource,
    ImageHandle,
    MetadataRecord,
    Rational,
    TagMapping,
    TagValue,
)

__all__ = [
    "Config",
    "HTTPConfig",
    "get_default_config",
    "reset_default_config",
    "ImgMetaError",
    "ConfigError",
    "SourceError",
    "MalformedEncodingError",
    "AcquisitionError",
    "UnresolvableSourceError",
    "RegistryError",
    "BinaryResource",
    "ImageHandle",
    "MetadataRecord",
    "Rational",
    "TagMapping",
    "TagValue",
]
