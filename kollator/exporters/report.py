"""
JSON collation report.

The report lists every cluster with its canonical block and, for each member,
its similarity to the canonical and the spans where the two differ.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..dedup.similarity import compare
from ..models import Corpus


def build_report(corpus: Corpus) -> Dict[str, Any]:
    """
    Build a serializable report of a collated corpus.

    Args:
        corpus: A finalized corpus

    Returns:
        Dictionary with run settings, counts and per-cluster details
    """
    clusters = []

    for cluster in corpus.clusters:
        canonical = cluster.canonical
        members = []

        for member in cluster.members:
            entry: Dict[str, Any] = {
                "block_id": member.block_id,
                "source_ref": member.source_ref,
                "position": member.position,
            }
            if canonical is not None and member.block_id != canonical.block_id:
                result = compare(canonical.normalized, member.normalized)
                entry["similarity"] = result.score
                entry["differences"] = [span.model_dump() for span in result.spans]
            members.append(entry)

        clusters.append({
            "cluster_id": cluster.cluster_id,
            "canonical": None if canonical is None else {
                "block_id": canonical.block_id,
                "source_ref": canonical.source_ref,
                "title": canonical.title,
                "position": canonical.position,
            },
            "members": members,
        })

    return {
        "threshold": corpus.threshold,
        "state": corpus.state.value,
        "block_count": len(corpus.blocks),
        "cluster_count": len(corpus.clusters),
        "duplicates_removed": len(corpus.blocks) - len(corpus.clusters),
        "clusters": clusters,
    }


def write_report(corpus: Corpus, path: Union[str, Path]) -> Path:
    """
    Write the collation report as JSON.

    Args:
        corpus: A finalized corpus
        path: Destination file

    Returns:
        The path that was written
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(build_report(corpus), f, indent=2, ensure_ascii=False)

    logging.info(f"Saved collation report to: {file_path}")
    return file_path
