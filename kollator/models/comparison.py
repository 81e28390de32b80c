"""
Comparison result models for Kollator.
"""

from typing import List, Literal
from pydantic import BaseModel, Field


class DiffSpan(BaseModel):
    """
    A region where two token sequences differ.

    Offsets are token indices into the first (a) and second (b) sequence.
    """

    tag: Literal["replace", "delete", "insert"] = Field(
        ...,
        description="Kind of difference: tokens replaced, only in a, or only in b"
    )

    a_start: int = Field(..., ge=0)
    a_end: int = Field(..., ge=0)
    b_start: int = Field(..., ge=0)
    b_end: int = Field(..., ge=0)

    a_text: str = Field(
        default="",
        description="The tokens of a covered by this span, joined by spaces"
    )

    b_text: str = Field(
        default="",
        description="The tokens of b covered by this span, joined by spaces"
    )


class SimilarityResult(BaseModel):
    """
    The output of comparing two normalized texts.
    """

    score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Token-level LCS ratio: 2 * |LCS| / (|a| + |b|)"
    )

    spans: List[DiffSpan] = Field(
        default_factory=list,
        description="Ordered list of differing spans"
    )
