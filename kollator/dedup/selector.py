"""
Revision selection for clusters of similar blocks.
"""

import logging
from typing import Sequence

from ..models import Block


def select_canonical(members: Sequence[Block]) -> Block:
    """
    Pick the canonical block of a cluster.

    Policy, in order:
    1. Greatest normalized length (the most complete content).
    2. Latest position in the corpus (assumed to be a later revision).
    3. Earliest member in the given order.

    Args:
        members: The cluster's member blocks

    Returns:
        The chosen canonical block

    Raises:
        ValueError: If members is empty
    """
    if not members:
        raise ValueError("Cannot select a canonical block from an empty cluster")

    best = members[0]
    for candidate in members[1:]:
        # Strictly greater keeps the earlier member on a full tie
        if (candidate.normalized_length, candidate.position) > (best.normalized_length, best.position):
            best = candidate

    logging.debug(f"Selected {best.block_id} as canonical among {len(members)} member(s)")
    return best
