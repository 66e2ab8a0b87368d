"""Diagnostics for multi-view clusterings."""

from mvsc.evaluation.agreement import (
    agreement_rate,
    cluster_quality,
    history_to_matrix,
    partition_similarity,
)

__all__ = [
    "agreement_rate",
    "cluster_quality",
    "history_to_matrix",
    "partition_similarity",
]
