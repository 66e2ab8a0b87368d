"""
Agreement and quality diagnostics for multi-view clusterings.

These are reporting helpers layered on top of co-training; none of them
feeds back into the algorithm.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from sklearn.metrics import adjusted_rand_score

from mvsc.clustering.spherical_kmeans import CenterSet, normalize_rows


def agreement_rate(
    labels1: np.ndarray,
    labels2: np.ndarray,
    consensus_labels: Optional[Sequence[int]] = None,
) -> float:
    """Fraction of items both views place in the same cluster.

    Args:
        labels1: Labels of the first view, shape (N,).
        labels2: Labels of the second view, shape (N,).
        consensus_labels: If given, only agreement on one of these labels counts.

    Returns:
        Agreement rate in [0, 1].
    """
    labels1 = np.asarray(labels1)
    labels2 = np.asarray(labels2)
    if labels1.shape != labels2.shape:
        raise ValueError(f"Label vectors differ in shape: {labels1.shape} vs {labels2.shape}")
    if labels1.size == 0:
        return 0.0
    agree = labels1 == labels2
    if consensus_labels is not None:
        agree &= np.isin(labels1, np.asarray(consensus_labels))
    return float(np.mean(agree))


def history_to_matrix(history: List[np.ndarray]) -> np.ndarray:
    """Stack a per-round label trajectory into a (rounds, N) matrix."""
    if not history:
        return np.empty((0, 0), dtype=np.int64)
    return np.vstack(history).astype(np.int64)


def partition_similarity(labels_a: np.ndarray, labels_b: np.ndarray) -> float:
    """Adjusted Rand index; 1.0 means the same partition up to relabeling."""
    return float(adjusted_rand_score(labels_a, labels_b))


def cluster_quality(view: np.ndarray, centers: CenterSet, labels: np.ndarray) -> dict:
    """Compute quality metrics for a spherical clustering of one view.

    Args:
        view: Data matrix of shape (N, D).
        centers: Center set keyed by label.
        labels: Cluster assignments of shape (N,).

    Returns:
        Dictionary with intra-cluster cohesion, inter-cluster separation and
        cosine inertia.
    """
    X = normalize_rows(view)
    keys = sorted(centers)
    C = np.vstack([centers[k] for k in keys])

    # Intra-cluster cohesion (average cosine similarity within clusters)
    intra_sims = []
    for key in keys:
        mask = labels == key
        if np.any(mask):
            intra_sims.append(np.mean(X[mask] @ centers[key]))

    # Inter-cluster separation (average pairwise distance between centers)
    n_clusters = len(keys)
    if n_clusters > 1:
        center_sims = C @ C.T
        inter_sep = 1.0 - np.mean(center_sims[np.triu_indices(n_clusters, k=1)])
    else:
        inter_sep = 1.0

    return {
        'intra_cohesion': float(np.mean(intra_sims)) if intra_sims else 0.0,
        'inter_separation': float(inter_sep),
        'inertia': float(np.sum(1.0 - (X @ C.T).max(axis=1))),
    }
