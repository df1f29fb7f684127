"""Tests for JPEG segment walking."""

from imgmeta.decoders import is_jpeg, iter_segments
from imgmeta.decoders.jpeg import APP1, APP13
from tests.fakes import build_jpeg, sample_jpeg
from tests.fakes.jpeg import segment


def test_is_jpeg():
    assert is_jpeg(b"\xff\xd8\xff\xe0")
    assert not is_jpeg(b"\x89PNG\r\n")
    assert not is_jpeg(b"")


class TestIterSegments:
    """Tests for iter_segments."""

    def test_yields_header_segments_in_order(self):
        """Segments up to start-of-scan are yielded in file order."""
        markers = [s.marker for s in iter_segments(sample_jpeg())]
        assert markers == [0xE0, APP1, APP1, APP13, 0xDB]

    def test_payload_excludes_length(self):
        """Payload is the segment body without marker and length."""
        data = b"\xff\xd8" + segment(0xE1, b"hello") + b"\xff\xd9"
        (only,) = list(iter_segments(data))
        assert only.marker == APP1
        assert only.offset == 2
        assert only.payload == b"hello"

    def test_stops_at_start_of_scan(self):
        """Entropy-coded data after SOS is never parsed as markers."""
        data = build_jpeg() + segment(0xE1, b"Exif\x00\x00late")
        assert all(s.payload != b"Exif\x00\x00late" for s in iter_segments(data))

    def test_skips_fill_bytes(self):
        """Repeated 0xFF bytes before a marker are padding."""
        data = b"\xff\xd8\xff\xff\xff" + segment(0xE1, b"x") + b"\xff\xd9"
        assert [s.payload for s in iter_segments(data)] == [b"x"]

    def test_non_jpeg_yields_nothing(self):
        assert list(iter_segments(b"GIF89a" + bytes(20))) == []

    def test_invalid_marker_stops(self):
        """A non-0xFF byte where a marker is expected ends the walk."""
        data = b"\xff\xd8" + segment(0xE0, b"a") + b"\x00\x00" + segment(0xE1, b"b")
        assert [s.payload for s in iter_segments(data)] == [b"a"]

    def test_truncated_segment(self):
        """A declared length past the end yields the available bytes."""
        data = b"\xff\xd8\xff\xe1\x00\x10abc"
        (only,) = list(iter_segments(data))
        assert only.payload == b"abc"

    def test_truncated_header(self):
        """A marker without its length bytes ends the walk."""
        assert list(iter_segments(b"\xff\xd8\xff\xe1\x00")) == []
