"""Byte source abstraction for imgmeta.

Turns an image handle into raw bytes using exactly one strategy, chosen from
the shape of the handle:

- ``data:`` URIs: InlineByteSource (decoded in place)
- ``blob:`` object URLs: ObjectURLByteSource (bytes registered in-process)
- ``http://`` and ``https://``: HTTPByteSource (single GET)
- handles wrapping a BinaryResource: ResourceByteSource

    resolver = ByteSourceResolver()
    data = await resolver.fetch(handle)
"""

from .base import (
    ByteSource,
    ClassifiedSource,
    SourceKind,
)
from .http import HTTPByteSource
from .inline import (
    DataURI,
    InlineByteSource,
    decode_data_uri,
    is_data_uri,
    parse_data_uri,
)
from .object_urls import (
    ObjectURLByteSource,
    ObjectURLStore,
    create_object_url,
    get_default_object_url_store,
    is_object_url,
    revoke_object_url,
)
from .registry import (
    ByteSourceResolver,
    classify,
)
from .resources import (
    Blob,
    FileResource,
    ResourceByteSource,
    read_resource,
)

__all__ = [
    "ByteSource",
    "ClassifiedSource",
    "SourceKind",
    "HTTPByteSource",
    "DataURI",
    "InlineByteSource",
    "decode_data_uri",
    "is_data_uri",
    "parse_data_uri",
    "ObjectURLByteSource",
    "ObjectURLStore",
    "create_object_url",
    "get_default_object_url_store",
    "is_object_url",
    "revoke_object_url",
    "ByteSourceResolver",
    "classify",
    "Blob",
    "FileResource",
    "ResourceByteSource",
    "read_resource",
]
