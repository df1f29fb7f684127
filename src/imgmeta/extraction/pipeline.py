"""Metadata extraction pipeline.

Orchestrates one extraction: has-data check, byte acquisition, the three
decoders, and attaching the merged record to the handle.
"""

from __future__ import annotations

from loguru import logger

from imgmeta.core.config import Config, HTTPConfig, get_default_config
from imgmeta.core.exceptions import UnresolvableSourceError
from imgmeta.core.types import ImageHandle, MetadataRecord
from imgmeta.decoders import DecoderFacade
from imgmeta.sources.registry import ByteSourceResolver


class MetadataExtractor:
    """Extracts EXIF, IPTC and XMP metadata onto image handles.

    Extraction runs at most once per handle: a handle that already carries
    a record is returned untouched. Nothing guards concurrent calls on the
    same fresh handle; both runs decode the same bytes and the later
    assignment replaces the earlier, equal record.

    Example:
        extractor = MetadataExtractor()
        handle = await extractor.extract(ImageHandle(src="https://example.com/a.jpg"))
        print(handle.exifdata["Make"])
    """

    def __init__(
        self,
        resolver: ByteSourceResolver | None = None,
        decoders: DecoderFacade | None = None,
        config: Config | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            resolver: Byte source resolver; built from ``config`` when None.
                An injected resolver is used for every call.
            decoders: Decoder functions; defaults to the built-in decoders.
            config: Fixed configuration. When None, the process-wide default
                is read at every extraction.
        """
        self._config = config
        self._resolver = resolver
        self._resolver_http: HTTPConfig | None = None
        self._decoders = decoders or DecoderFacade()

    @property
    def resolver(self) -> ByteSourceResolver:
        if self._resolver is None:
            config = self._effective_config(None)
            self._resolver = ByteSourceResolver(config)
            self._resolver_http = config.http
        return self._resolver

    def _effective_config(self, config: Config | None) -> Config:
        return config or self._config or get_default_config()

    def _resolver_for(self, config: Config | None) -> ByteSourceResolver:
        resolver = self.resolver
        if config is None or self._resolver_http is None:
            return resolver
        if config.http != self._resolver_http:
            return ByteSourceResolver(config)
        return resolver

    async def extract(
        self,
        handle: ImageHandle,
        *,
        config: Config | None = None,
    ) -> ImageHandle:
        """Populate ``handle.metadata`` unless it is already set.

        Args:
            handle: Image handle to extract from.
            config: Per-call configuration overriding the extractor's. Its
                HTTP settings apply to this call unless the extractor was
                given its own resolver.

        Returns:
            The same handle object.

        Raises:
            MalformedEncodingError: If the handle's data URI is malformed.
            AcquisitionError: If the bytes cannot be read.
            Exception: Any decoder fault, unchanged.
        """
        if handle.has_data:
            return handle

        xmp_enabled = self._effective_config(config).xmp_enabled

        try:
            data = await self._resolver_for(config).fetch(handle)
        except UnresolvableSourceError as e:
            logger.debug(f"Skipping metadata extraction: {e}")
            return handle

        handle.metadata = self.decode(data, xmp_enabled=xmp_enabled)
        return handle

    def decode(self, data: bytes, *, xmp_enabled: bool = True) -> MetadataRecord:
        """Run the decoders over a buffer in the order EXIF, IPTC, XMP.

        A decoder returning None yields an empty mapping. With XMP disabled
        the ``xmpdata`` slot stays None.
        """
        exifdata = self._decoders.exif(data) or {}
        iptcdata = self._decoders.iptc(data) or {}
        xmpdata = (self._decoders.xmp(data) or {}) if xmp_enabled else None

        logger.debug(
            f"Decoded {len(exifdata)} EXIF, {len(iptcdata)} IPTC, "
            f"{'-' if xmpdata is None else len(xmpdata)} XMP tags from {len(data)} bytes"
        )
        return MetadataRecord(exifdata=exifdata, iptcdata=iptcdata, xmpdata=xmpdata)
