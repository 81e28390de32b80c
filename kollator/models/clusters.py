"""
Cluster and corpus models for Kollator.

This module defines the structures produced by collation: groups of similar
blocks and the corpus that ties blocks to the clusters they belong to.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from .blocks import Block


class CollationState(str, Enum):
    """Lifecycle of a collation run. DONE is terminal."""

    ACCUMULATING = "accumulating"
    FINALIZING = "finalizing"
    DONE = "done"


class Cluster(BaseModel):
    """
    A set of blocks judged similar enough to represent the same logical document.
    """

    cluster_id: str = Field(
        ...,
        description="Identifier assigned in order of cluster creation (e.g., 'CL-0001')"
    )

    members: List[Block] = Field(
        default_factory=list,
        description="Blocks assigned to this cluster"
    )

    canonical: Optional[Block] = Field(
        default=None,
        description="The chosen representative, set by revision selection"
    )

    def add_member(self, block: Block) -> None:
        """Assign a block to this cluster."""
        self.members.append(block)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def earliest_position(self) -> int:
        """Position of the first member to appear in the corpus."""
        return min(member.position for member in self.members)


class Corpus(BaseModel):
    """
    The ordered blocks read from input plus the clusters derived from them.
    """

    blocks: List[Block] = Field(
        default_factory=list,
        description="Blocks in input order"
    )

    clusters: List[Cluster] = Field(
        default_factory=list,
        description="Clusters in order of creation"
    )

    threshold: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Similarity threshold the clusters were built with"
    )

    state: CollationState = Field(
        default=CollationState.ACCUMULATING,
        description="Current stage of the collation run"
    )

    def canonical_blocks(self) -> List[Block]:
        """
        Return the canonical block of every cluster, in cluster order.

        Returns:
            List of canonical blocks
        """
        return [cluster.canonical for cluster in self.clusters if cluster.canonical is not None]

    def cluster_for(self, block_id: str) -> Optional[Cluster]:
        """
        Find the cluster a block was assigned to.

        Args:
            block_id: ID of the block to look up

        Returns:
            The owning cluster, or None if the block is unknown
        """
        for cluster in self.clusters:
            if any(member.block_id == block_id for member in cluster.members):
                return cluster
        return None
