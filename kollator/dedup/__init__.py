"""Normalization, comparison and clustering of near-duplicate blocks."""

from .normalizer import normalize_text, extract_title, tokenize
from .similarity import similarity, compare, diff_spans, reaches_threshold
from .selector import select_canonical
from .collator import Collator

__all__ = [
    "normalize_text",
    "extract_title",
    "tokenize",
    "similarity",
    "compare",
    "diff_spans",
    "reaches_threshold",
    "select_canonical",
    "Collator"
]
