"""
Corpus collation for Kollator.

This module groups blocks into clusters of near-duplicates with single-linkage
greedy clustering and fixes a canonical block for each cluster.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..config import config, validate_threshold
from ..models import Block, Cluster, Corpus, CollationState
from .selector import select_canonical
from .similarity import exact_threshold, reaches_threshold


class Collator:
    """
    Partitions blocks into clusters of similar documents.

    Blocks are processed in input order. Each block is compared against the
    current canonical of every existing cluster, in creation order, and joins
    the first one whose similarity reaches the threshold; otherwise it starts
    a new cluster. Canonicals are re-selected as members join and fixed once
    all blocks have been processed.
    """

    def __init__(self, threshold: Optional[Any] = None):
        """
        Initialize the collator.

        Args:
            threshold: Minimum similarity to merge two blocks, in [0, 1].
                Defaults to the configured collation.threshold.

        Raises:
            InvalidConfigurationError: If the threshold is outside [0, 1]
        """
        if threshold is None:
            self.threshold = config.threshold
        else:
            self.threshold = validate_threshold(threshold, field="threshold")

        self._exact_threshold = exact_threshold(self.threshold)

        logging.debug(f"Initialized Collator with threshold {self.threshold}")

    def collate(self, blocks: Sequence[Block]) -> Corpus:
        """
        Collate an ordered sequence of blocks.

        Args:
            blocks: Blocks in input order

        Returns:
            A finalized Corpus whose clusters are in order of creation
        """
        corpus = Corpus(blocks=list(blocks), threshold=self.threshold)

        if not corpus.blocks:
            logging.info("No blocks to collate")
            corpus.state = CollationState.DONE
            return corpus

        for block in corpus.blocks:
            cluster = self._find_cluster(corpus.clusters, block)

            if cluster is None:
                cluster = Cluster(
                    cluster_id=f"CL-{len(corpus.clusters) + 1:04d}",
                    members=[block],
                    canonical=block
                )
                corpus.clusters.append(cluster)
                logging.debug(f"Block {block.block_id} ({block.source_ref}) started cluster {cluster.cluster_id}")
            else:
                cluster.add_member(block)
                cluster.canonical = select_canonical(cluster.members)
                logging.debug(f"Block {block.block_id} ({block.source_ref}) joined cluster {cluster.cluster_id}")

        self._finalize(corpus)

        logging.info(f"Collated {len(corpus.blocks)} blocks into {len(corpus.clusters)} clusters "
                     f"(threshold {self.threshold})")
        return corpus

    def collate_canonicals(self, blocks: Sequence[Block]) -> List[Block]:
        """
        Collate blocks and return only the canonical block of each cluster.

        Args:
            blocks: Blocks in input order

        Returns:
            Canonical blocks in order of cluster creation
        """
        return self.collate(blocks).canonical_blocks()

    def _find_cluster(self, clusters: List[Cluster], block: Block) -> Optional[Cluster]:
        """Return the first cluster whose canonical is similar enough to the block."""
        for cluster in clusters:
            canonical = cluster.canonical
            if canonical is None:
                continue

            if reaches_threshold(canonical.normalized, block.normalized, self._exact_threshold):
                return cluster

        return None

    def _finalize(self, corpus: Corpus) -> None:
        """Run revision selection over every cluster and close the run."""
        corpus.state = CollationState.FINALIZING

        for cluster in corpus.clusters:
            cluster.canonical = select_canonical(cluster.members)
            if cluster.size > 1:
                logging.info(f"Cluster {cluster.cluster_id}: kept {cluster.canonical.source_ref} "
                             f"out of {cluster.size} revisions")

        corpus.state = CollationState.DONE
