"""
Block models for Kollator.

This module defines the standardized internal data structure that all importers
must convert their source text into.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class Block(BaseModel):
    """
    One contiguous unit of source text between delimiter markers.

    Blocks are created once when a corpus is split and are never mutated
    afterwards; every later stage works from the same instances.
    """

    block_id: str = Field(
        ...,
        description="A stable identifier derived from the source and content"
    )

    source_ref: str = Field(
        ...,
        description="A human-readable reference to the source (e.g., file path and segment)"
    )

    content: str = Field(
        ...,
        description="The raw text of the block"
    )

    normalized: str = Field(
        ...,
        description="The normalized text used for comparison"
    )

    position: int = Field(
        ...,
        ge=0,
        description="Index of the block's first occurrence in the corpus"
    )

    title: Optional[str] = Field(
        default=None,
        description="The first '#'-prefixed heading line of the block, if any"
    )

    class Config:
        """Pydantic configuration."""
        frozen = True

    @property
    def tokens(self) -> List[str]:
        """The normalized text split into comparison tokens."""
        return self.normalized.split()

    @property
    def normalized_length(self) -> int:
        """Length of the normalized text, used as a completeness measure."""
        return len(self.normalized)
