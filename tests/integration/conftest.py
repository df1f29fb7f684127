"""Pytest configuration and fixtures for integration tests."""

from pathlib import Path

import pytest

from tests.fakes import build_jpeg, sample_jpeg


@pytest.fixture
def photo_path(tmp_path: Path) -> Path:
    """Provide a JPEG with EXIF, IPTC and XMP written to disk."""
    path = tmp_path / "harbor.jpg"
    path.write_bytes(sample_jpeg())
    return path


@pytest.fixture
def bare_photo_path(tmp_path: Path) -> Path:
    """Provide a JPEG without metadata written to disk."""
    path = tmp_path / "bare.jpg"
    path.write_bytes(build_jpeg())
    return path
