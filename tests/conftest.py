"""Pytest configuration and fixtures."""

import pytest

import imgmeta.query
import imgmeta.sources.object_urls
from imgmeta.core.config import Config, reset_default_config
from imgmeta.core.types import ImageHandle
from imgmeta.extraction import MetadataExtractor
from imgmeta.sources import ByteSourceResolver, ObjectURLStore
from tests.fakes import CountingDecoders, build_jpeg, sample_jpeg


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    """Isolate process-wide singletons between tests."""
    for name in ("IMGMETA_XMP_ENABLED", "IMGMETA_HTTP_TIMEOUT", "IMGMETA_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
    reset_default_config()
    imgmeta.query.reset_default_extractor()
    monkeypatch.setattr(imgmeta.sources.object_urls, "_default_store", None)
    yield
    reset_default_config()
    imgmeta.query.reset_default_extractor()


@pytest.fixture
def config() -> Config:
    """Provide a fresh configuration with XMP enabled."""
    return Config()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Provide a JPEG carrying EXIF, IPTC and XMP segments."""
    return sample_jpeg()


@pytest.fixture
def bare_jpeg() -> bytes:
    """Provide a JPEG without any metadata segment."""
    return build_jpeg()


@pytest.fixture
def object_url_store() -> ObjectURLStore:
    """Provide an object URL store with its own registrations."""
    return ObjectURLStore()


@pytest.fixture
def resolver(config: Config, object_url_store: ObjectURLStore) -> ByteSourceResolver:
    """Provide a resolver with the built-in byte sources."""
    return ByteSourceResolver(config, object_urls=object_url_store)


@pytest.fixture
def decoders() -> CountingDecoders:
    """Provide counting decoders with one tag each."""
    return CountingDecoders(
        exif={"Make": "Acme"},
        iptc={"Keywords": "boats"},
        xmp={"dc:title": "Harbor"},
    )


@pytest.fixture
def extractor(resolver: ByteSourceResolver, decoders: CountingDecoders) -> MetadataExtractor:
    """Provide an extractor over counting decoders."""
    return MetadataExtractor(resolver=resolver, decoders=decoders.facade())


@pytest.fixture
def fresh_handle() -> ImageHandle:
    """Provide a handle that was never extracted."""
    return ImageHandle(src="https://example.com/photo.jpg")
