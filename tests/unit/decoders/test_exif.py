"""Tests for the EXIF decoder."""

import pytest

from imgmeta.core import Rational
from imgmeta.decoders import find_exif, read_tiff
from tests.fakes import TiffBuilder, build_jpeg, sample_jpeg, sample_tiff


class TestFindExif:
    """Tests for find_exif on complete JPEG files."""

    def test_ifd0_tags(self):
        """IFD0 ASCII, SHORT and RATIONAL tags are decoded."""
        tags = find_exif(sample_jpeg())
        assert tags["Make"] == "Acme"
        assert tags["Model"] == "Shooter 3000"
        assert tags["Orientation"] == 6
        assert tags["XResolution"] == Rational(72, 1)

    def test_exif_sub_ifd(self):
        """Exif IFD tags are merged into the result with readable labels."""
        tags = find_exif(sample_jpeg())
        assert tags["ExposureTime"] == Rational(1, 250)
        assert tags["FNumber"] == Rational(28, 10)
        assert tags["ExposureProgram"] == "Aperture priority"
        assert tags["Flash"] == "Flash fired, auto mode"
        assert tags["ExifVersion"] == "0230"
        assert tags["ComponentsConfiguration"] == "YCbCr"
        assert tags["ExposureBias"] == Rational(-1, 3)
        assert tags["DateTimeOriginal"] == "2024:05:01 18:30:00"

    def test_gps_sub_ifd(self):
        """GPS IFD tags are merged and the version is dotted."""
        tags = find_exif(sample_jpeg())
        assert tags["GPSVersionID"] == "2.2.0.0"
        assert tags["GPSLatitudeRef"] == "N"
        assert tags["GPSLatitude"] == [Rational(38, 1), Rational(42, 1), Rational(3000, 100)]

    def test_pointers_kept(self):
        """Sub-IFD pointers remain visible as integer tags."""
        tags = find_exif(sample_jpeg())
        assert isinstance(tags["ExifIFDPointer"], int)
        assert isinstance(tags["GPSInfoIFDPointer"], int)

    def test_no_exif_segment(self):
        assert find_exif(build_jpeg()) is None

    def test_not_a_jpeg(self):
        assert find_exif(b"not an image at all") is None

    def test_xmp_app1_ignored(self):
        """An APP1 segment without the Exif header is not EXIF."""
        assert find_exif(build_jpeg(xmp="<x/>")) is None


class TestReadTiff:
    """Tests for read_tiff."""

    def test_big_endian(self):
        """Motorola byte order decodes to the same tags."""
        assert read_tiff(sample_tiff(">")) == read_tiff(sample_tiff("<"))

    def test_bad_byte_order(self):
        assert read_tiff(b"XX\x2a\x00\x08\x00\x00\x00") is None

    def test_bad_magic(self):
        assert read_tiff(b"II\x2b\x00\x08\x00\x00\x00") is None

    def test_too_short(self):
        assert read_tiff(b"II\x2a") is None

    def test_unknown_tag_named_by_number(self):
        """Tags missing from the name tables use their hex id."""
        t = TiffBuilder()
        tags = read_tiff(t.build([t.short(0xC4A5, 7)]))
        assert tags == {"Tag0xC4A5": 7}

    def test_multi_value_short(self):
        """Fields with several values decode to a list."""
        t = TiffBuilder()
        tags = read_tiff(t.build([t.short(0x0212, 2, 1)]))
        assert tags["YCbCrSubSampling"] == [2, 1]

    def test_out_of_bounds_value_skipped(self):
        """A value offset past the end of the data drops only that tag."""
        t = TiffBuilder()
        tiff = bytearray(t.build([t.ascii(0x010F, "Acme Corporation"), t.short(0x0112, 1)]))
        # Point Make's value offset past the end
        tiff[8 + 2 + 8:8 + 2 + 12] = (10_000).to_bytes(4, "little")
        tags = read_tiff(bytes(tiff))
        assert "Make" not in tags
        assert tags["Orientation"] == 1

    def test_unlabelled_enum_value_kept(self):
        """Enumerated codes without a label stay numeric."""
        t = TiffBuilder()
        tags = read_tiff(t.build([], exif_ifd=[t.short(0x8822, 42)]))
        assert tags["ExposureProgram"] == 42

    @pytest.mark.parametrize("endian", ["<", ">"])
    def test_ascii_stops_at_nul(self, endian):
        t = TiffBuilder(endian)
        tags = read_tiff(t.build([t.ascii(0x010F, "Acme\x00junk")]))
        assert tags["Make"] == "Acme"
