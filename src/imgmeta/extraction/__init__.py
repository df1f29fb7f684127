"""Metadata extraction pipeline."""

from .pipeline import MetadataExtractor

__all__ = ["MetadataExtractor"]
