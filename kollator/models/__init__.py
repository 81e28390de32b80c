"""Data models for Kollator."""

from .blocks import Block
from .clusters import Cluster, Corpus, CollationState
from .comparison import DiffSpan, SimilarityResult

__all__ = [
    "Block",
    "Cluster",
    "Corpus",
    "CollationState",
    "DiffSpan",
    "SimilarityResult"
]
