"""
Similarity and diff engine for Kollator.

Scores are token-level longest-common-subsequence ratios:

    score = 2 * |LCS(a, b)| / (|a| + |b|)

which is exactly rapidfuzz's normalized Indel similarity over token lists. The
same alignment provides the differing spans.
"""

import math
from fractions import Fraction
from typing import List, Optional, Sequence, Union

from rapidfuzz.distance import Indel, LCSseq

from ..models import DiffSpan, SimilarityResult
from .normalizer import tokenize


def _score_tokens(a: Sequence[str], b: Sequence[str], score_cutoff: Optional[float] = None) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return Indel.normalized_similarity(a, b, score_cutoff=score_cutoff)


def similarity(a: str, b: str, score_cutoff: Optional[float] = None) -> float:
    """
    Compute the similarity score of two normalized strings.

    Args:
        a: First normalized text
        b: Second normalized text
        score_cutoff: If given, scores below it are reported as 0.0, which lets
            the comparison bail out early

    Returns:
        Score in [0, 1]; empty vs empty is 1.0, empty vs non-empty is 0.0
    """
    return _score_tokens(tokenize(a), tokenize(b), score_cutoff)


def exact_threshold(threshold: float) -> Fraction:
    """
    Convert a threshold to the exact decimal it was written as.

    0.85 becomes 17/20 rather than the nearest binary float.
    """
    return Fraction(repr(float(threshold)))


def reaches_threshold(a: str, b: str, threshold: Union[float, Fraction]) -> bool:
    """
    Decide whether two normalized strings score at least the threshold.

    The comparison 2 * |LCS| >= threshold * (|a| + |b|) is done in integer
    arithmetic, so a score exactly equal to the threshold always passes.

    Args:
        a: First normalized text
        b: Second normalized text
        threshold: Minimum score in [0, 1]

    Returns:
        True if similarity(a, b) >= threshold
    """
    if not isinstance(threshold, Fraction):
        threshold = exact_threshold(threshold)

    a_tokens = tokenize(a)
    b_tokens = tokenize(b)
    total = len(a_tokens) + len(b_tokens)

    if total == 0:
        return True

    # Smallest LCS length whose score reaches the threshold
    required = math.ceil(threshold * total / 2)
    if required == 0:
        return True
    if required > min(len(a_tokens), len(b_tokens)):
        return False

    return LCSseq.similarity(a_tokens, b_tokens, score_cutoff=required) >= required


def diff_spans(a_tokens: Sequence[str], b_tokens: Sequence[str]) -> List[DiffSpan]:
    """
    Compute the ordered list of regions where two token sequences differ.

    Adjacent edits are merged; a deletion touching an insertion is reported
    as a single 'replace' span.

    Args:
        a_tokens: Tokens of the first text
        b_tokens: Tokens of the second text

    Returns:
        List of DiffSpan objects in alignment order
    """
    spans: List[DiffSpan] = []

    for op in Indel.opcodes(a_tokens, b_tokens):
        if op.tag == "equal":
            continue

        previous = spans[-1] if spans else None
        if (previous is not None
                and previous.a_end == op.src_start
                and previous.b_end == op.dest_start):
            a_start, b_start = previous.a_start, previous.b_start
            tag = previous.tag if previous.tag == op.tag else "replace"
            spans.pop()
        else:
            a_start, b_start = op.src_start, op.dest_start
            tag = op.tag

        spans.append(DiffSpan(
            tag=tag,
            a_start=a_start,
            a_end=op.src_end,
            b_start=b_start,
            b_end=op.dest_end,
            a_text=" ".join(a_tokens[a_start:op.src_end]),
            b_text=" ".join(b_tokens[b_start:op.dest_end])
        ))

    return spans


def compare(a: str, b: str) -> SimilarityResult:
    """
    Compare two normalized strings.

    Args:
        a: First normalized text
        b: Second normalized text

    Returns:
        SimilarityResult with the score and the differing spans
    """
    a_tokens = tokenize(a)
    b_tokens = tokenize(b)

    return SimilarityResult(
        score=_score_tokens(a_tokens, b_tokens),
        spans=diff_spans(a_tokens, b_tokens)
    )
