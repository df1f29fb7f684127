"""Handle classification and byte source routing.

This module classifies an image handle into one of the acquisition
strategies in :class:`SourceKind` and routes it to the byte source
registered for that strategy.
"""

from __future__ import annotations

from urllib.parse import urlparse

import httpx
from loguru import logger

from imgmeta.core.config import Config, get_default_config
from imgmeta.core.exceptions import RegistryError, UnresolvableSourceError
from imgmeta.core.types import BinaryResource, ImageHandle

from .base import ByteSource, ClassifiedSource, SourceKind
from .http import HTTPByteSource
from .inline import InlineByteSource, is_data_uri
from .object_urls import ObjectURLByteSource, ObjectURLStore, is_object_url
from .resources import ResourceByteSource

REMOTE_SCHEMES = frozenset({"http", "https"})


def _scheme(locator: str) -> str:
    """Lower-cased URL scheme of a locator, or "" if it has none.

    A locator whose authority is malformed (e.g. an unclosed IPv6 bracket)
    still reports its scheme; the read fails later with AcquisitionError.
    """
    try:
        return urlparse(locator).scheme.lower()
    except ValueError:
        scheme, sep, _ = locator.partition(":")
        return scheme.lower() if sep else ""


def classify(handle: ImageHandle) -> ClassifiedSource:
    """Determine how the bytes of a handle must be acquired.

    Rules, first match wins:
    1. ``src`` is a data URI: INLINE
    2. ``src`` is a ``blob:`` object URL: OBJECT_URL
    3. ``src`` is an http(s) URL: REMOTE
    4. ``resource`` is a BinaryResource: RESOURCE

    The bytes themselves are never inspected.

    Args:
        handle: Image handle to classify.

    Returns:
        The classified source.

    Raises:
        UnresolvableSourceError: If no rule matches.
    """
    src = handle.src
    if src:
        if is_data_uri(src):
            return ClassifiedSource(SourceKind.INLINE, locator=src)
        if is_object_url(src):
            return ClassifiedSource(SourceKind.OBJECT_URL, locator=src)
        if _scheme(src) in REMOTE_SCHEMES:
            return ClassifiedSource(SourceKind.REMOTE, locator=src)
        logger.debug(f"Locator {src[:64]!r} has no supported scheme")

    resource = handle.resource
    if resource is not None and isinstance(resource, BinaryResource):
        return ClassifiedSource(SourceKind.RESOURCE, resource=resource)

    raise UnresolvableSourceError(
        "Image handle has neither a supported src nor a binary resource"
    )


class ByteSourceResolver:
    """Routes classified handles to byte sources.

    Example:
        resolver = ByteSourceResolver()
        data = await resolver.fetch(ImageHandle(src="https://example.com/a.jpg"))

        # Replace a strategy, e.g. with a caching HTTP source
        resolver.register(SourceKind.REMOTE, MyHTTPSource(), override=True)
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        object_urls: ObjectURLStore | None = None,
        client: httpx.AsyncClient | None = None,
        register_builtin: bool = True,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Supplies HTTP settings; defaults to the process config.
            object_urls: Store for ``blob:`` URLs; defaults to the process store.
            client: Shared httpx client for remote reads.
            register_builtin: Register the four built-in byte sources.
        """
        self._sources: dict[SourceKind, ByteSource] = {}
        if register_builtin:
            config = config or get_default_config()
            self.register(SourceKind.INLINE, InlineByteSource())
            self.register(SourceKind.OBJECT_URL, ObjectURLByteSource(object_urls))
            self.register(SourceKind.REMOTE, HTTPByteSource(config.http, client=client))
            self.register(SourceKind.RESOURCE, ResourceByteSource())

    def register(
        self,
        kind: SourceKind,
        source: ByteSource,
        *,
        override: bool = False,
    ) -> None:
        """Register the byte source for an acquisition strategy.

        Raises:
            RegistryError: If the kind is already registered and override=False.
        """
        if kind in self._sources and not override:
            raise RegistryError(
                f"Byte source for '{kind.value}' is already registered. "
                f"Use override=True to replace."
            )
        self._sources[kind] = source

    def unregister(self, kind: SourceKind) -> bool:
        """Remove the byte source for a strategy.

        Returns:
            True if a source was registered and removed, False if not found.
        """
        if kind in self._sources:
            del self._sources[kind]
            return True
        return False

    def is_registered(self, kind: SourceKind) -> bool:
        return kind in self._sources

    def supported_kinds(self) -> list[SourceKind]:
        """Registered strategies in declaration order."""
        return [kind for kind in SourceKind if kind in self._sources]

    def classify(self, handle: ImageHandle) -> ClassifiedSource:
        return classify(handle)

    async def fetch(self, handle: ImageHandle) -> bytes:
        """Classify a handle and read its bytes once.

        Args:
            handle: Image handle to read.

        Returns:
            A new byte buffer.

        Raises:
            UnresolvableSourceError: If the handle cannot be classified or no
                source is registered for its strategy.
            MalformedEncodingError: If an inline payload is malformed.
            AcquisitionError: If the read fails.
        """
        source = classify(handle)
        byte_source = self._sources.get(source.kind)
        if byte_source is None:
            raise UnresolvableSourceError(
                f"No byte source registered for '{source.kind.value}'"
            )
        logger.debug(f"Acquiring bytes via {source.kind.value}: {source.describe()}")
        return await byte_source.fetch_bytes(source)
