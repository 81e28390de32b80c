"""
Kollator: A document deduplication and version-collation utility.

Groups near-duplicate text blocks, keeps the most complete revision of each
logical document and emits a clean ordered document set.
"""

__version__ = "0.1.0"
__author__ = "Kollator Project"

# Import main components
from .config import InvalidConfigurationError
from .models import Block, Cluster, Corpus, CollationState, DiffSpan, SimilarityResult
from .dedup import Collator, normalize_text, similarity, compare, select_canonical
from .importers import BaseImporter, MockImporter, DelimitedTextImporter, DirectoryImporter
from .exporters import render_markdown, write_markdown, build_report, write_report
from .pipeline import collate_importer, collate_text, collate_path

__all__ = [
    "InvalidConfigurationError",
    "Block",
    "Cluster",
    "Corpus",
    "CollationState",
    "DiffSpan",
    "SimilarityResult",
    "Collator",
    "normalize_text",
    "similarity",
    "compare",
    "select_canonical",
    "BaseImporter",
    "MockImporter",
    "DelimitedTextImporter",
    "DirectoryImporter",
    "render_markdown",
    "write_markdown",
    "build_report",
    "write_report",
    "collate_importer",
    "collate_text",
    "collate_path"
]
