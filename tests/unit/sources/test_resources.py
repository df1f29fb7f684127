"""Tests for binary resources."""

import pytest

from imgmeta.core import AcquisitionError
from imgmeta.sources import (
    Blob,
    ClassifiedSource,
    FileResource,
    ResourceByteSource,
    SourceKind,
    read_resource,
)
from tests.fakes import CountingResource, FailingResource


class TestBlob:
    """Tests for Blob."""

    @pytest.mark.asyncio
    async def test_read(self):
        """read returns the stored bytes."""
        blob = Blob(b"abc", content_type="image/jpeg")
        assert await blob.read() == b"abc"
        assert blob.size == 3

    def test_repr_hides_data(self):
        """repr does not dump the bytes."""
        assert "abc" not in repr(Blob(b"abc"))


class TestFileResource:
    """Tests for FileResource."""

    @pytest.mark.asyncio
    async def test_read_local_path(self, tmp_path):
        """A plain path is read from the local filesystem."""
        path = tmp_path / "photo.jpg"
        path.write_bytes(b"\xff\xd8local")
        assert await FileResource(str(path)).read() == b"\xff\xd8local"

    @pytest.mark.asyncio
    async def test_read_file_url(self, tmp_path):
        """A file:// URL is read through fsspec."""
        path = tmp_path / "photo.jpg"
        path.write_bytes(b"url")
        assert await FileResource(path.as_uri()).read() == b"url"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            await FileResource(str(tmp_path / "missing.jpg")).read()


class TestReadResource:
    """Tests for read_resource."""

    @pytest.mark.asyncio
    async def test_wraps_os_error(self):
        """OSError becomes AcquisitionError."""
        with pytest.raises(AcquisitionError, match="disk unplugged"):
            await read_resource(FailingResource(), "resource")

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        """Non-storage errors are not reinterpreted."""
        with pytest.raises(ValueError):
            await read_resource(FailingResource(ValueError("bug")), "resource")


class TestResourceByteSource:
    """Tests for ResourceByteSource."""

    @pytest.mark.asyncio
    async def test_reads_resource_once(self):
        """fetch_bytes reads the resource exactly once."""
        resource = CountingResource(b"bytes")
        source = ClassifiedSource(SourceKind.RESOURCE, resource=resource)

        assert await ResourceByteSource().fetch_bytes(source) == b"bytes"
        assert resource.reads == 1

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path):
        """An unreadable file raises AcquisitionError."""
        source = ClassifiedSource(
            SourceKind.RESOURCE, resource=FileResource(str(tmp_path / "gone.jpg"))
        )
        with pytest.raises(AcquisitionError):
            await ResourceByteSource().fetch_bytes(source)
