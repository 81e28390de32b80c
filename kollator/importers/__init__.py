"""Corpus importers for various sources."""

from .base import BaseImporter
from .mock import MockImporter
from .delimited import DelimitedTextImporter, DirectoryImporter, split_segments

__all__ = ["BaseImporter", "MockImporter", "DelimitedTextImporter", "DirectoryImporter", "split_segments"]
