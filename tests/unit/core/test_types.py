"""Tests for core types."""

import math

import pytest
from dataclasses import FrozenInstanceError

from imgmeta.core import BinaryResource, ImageHandle, MetadataRecord, Rational
from imgmeta.sources import Blob, FileResource


class TestRational:
    """Tests for Rational."""

    def test_value(self):
        """value is numerator over denominator."""
        assert Rational(1, 4).value == 0.25
        assert float(Rational(28, 10)) == pytest.approx(2.8)

    def test_str_integral(self):
        """Whole values render without a fractional part."""
        assert str(Rational(72, 1)) == "72"
        assert str(Rational(300, 100)) == "3"

    def test_str_fractional(self):
        """Fractional values render as Python floats."""
        assert str(Rational(1, 4)) == "0.25"
        assert str(Rational(-1, 2)) == "-0.5"

    def test_zero_denominator(self):
        """A zero denominator gives inf or nan instead of raising."""
        assert Rational(5, 0).value == math.inf
        assert Rational(-5, 0).value == -math.inf
        assert math.isnan(Rational(0, 0).value)
        assert str(Rational(5, 0)) == "inf"

    def test_is_frozen(self):
        """Rational is immutable."""
        with pytest.raises(FrozenInstanceError):
            Rational(1, 2).numerator = 3

    def test_equality(self):
        """Rationals compare by numerator and denominator."""
        assert Rational(1, 2) == Rational(1, 2)
        assert Rational(1, 2) != Rational(2, 4)


class TestMetadataRecord:
    """Tests for MetadataRecord."""

    def test_defaults(self):
        """Defaults are empty EXIF/IPTC and absent XMP."""
        record = MetadataRecord()
        assert record.exifdata == {}
        assert record.iptcdata == {}
        assert record.xmpdata is None

    def test_mappings_not_shared(self):
        """Each record owns its mappings."""
        first = MetadataRecord()
        first.exifdata["Make"] = "Acme"
        assert MetadataRecord().exifdata == {}


class TestImageHandle:
    """Tests for ImageHandle."""

    def test_fresh_handle_has_no_data(self):
        """A new handle has no metadata slots."""
        handle = ImageHandle(src="https://example.com/a.jpg")
        assert handle.has_data is False
        assert handle.exifdata is None
        assert handle.iptcdata is None
        assert handle.xmpdata is None

    def test_slots_follow_record(self):
        """Slot properties read through to the attached record."""
        record = MetadataRecord(exifdata={"Make": "Acme"}, xmpdata={})
        handle = ImageHandle(metadata=record)
        assert handle.has_data is True
        assert handle.exifdata == {"Make": "Acme"}
        assert handle.iptcdata == {}
        assert handle.xmpdata == {}

    def test_empty_record_counts_as_data(self):
        """An empty record still marks the handle as extracted."""
        assert ImageHandle(metadata=MetadataRecord()).has_data is True

    def test_identity_equality(self):
        """Handles compare by identity."""
        assert ImageHandle(src="x") != ImageHandle(src="x")

    def test_from_bytes(self):
        """from_bytes wraps the data in a Blob resource."""
        handle = ImageHandle.from_bytes(b"\xff\xd8", content_type="image/jpeg")
        assert isinstance(handle.resource, Blob)
        assert handle.resource.data == b"\xff\xd8"
        assert handle.src is None

    def test_from_path(self, tmp_path):
        """from_path wraps the path in a FileResource."""
        path = tmp_path / "a.jpg"
        handle = ImageHandle.from_path(path)
        assert isinstance(handle.resource, FileResource)
        assert handle.resource.url == str(path)


class TestBinaryResource:
    """Tests for the BinaryResource protocol."""

    def test_builtin_resources_satisfy_protocol(self):
        """Blob and FileResource are BinaryResources."""
        assert isinstance(Blob(b""), BinaryResource)
        assert isinstance(FileResource("/tmp/x"), BinaryResource)

    def test_plain_objects_do_not(self):
        """Objects without read() are not BinaryResources."""
        assert not isinstance(b"bytes", BinaryResource)
        assert not isinstance("path", BinaryResource)
