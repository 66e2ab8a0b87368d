"""
Spherical K-Means primitives on the unit hypersphere.

This module holds the single-view building blocks used by co-training:
row normalization, the M-step (center estimation), the E-step (nearest
center assignment), the spherical objective, and a restart-based spherical
k-means used to seed the loop. Labels are 1-based; a center set is a dict
mapping each label to its unit-norm direction.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from mvsc.exceptions import EmptyClusterError


CenterSet = Dict[int, np.ndarray]


def normalize_rows(X: np.ndarray) -> np.ndarray:
    """Scale every row of X to unit L2 norm.

    Rows with zero norm would divide to NaN; every non-finite entry is
    replaced by zero, so all-zero rows stay all-zero.

    Args:
        X: Matrix of shape (N, D).

    Returns:
        New float matrix of shape (N, D).
    """
    X = np.asarray(X, dtype=np.float64)
    norms = np.linalg.norm(X, axis=-1, keepdims=True)
    with np.errstate(divide='ignore', invalid='ignore'):
        out = X / norms
    out[~np.isfinite(out)] = 0.0
    return out


def compute_centers(
    view: np.ndarray,
    labels: np.ndarray,
    expected_labels: Optional[Iterable[int]] = None,
    strict: bool = False,
) -> CenterSet:
    """Normalized mean direction of each cluster (M-step).

    Args:
        view: Row-normalized data of shape (N, D).
        labels: Cluster label of every row, shape (N,).
        expected_labels: Labels that should have a center. Defaults to the
            distinct values of ``labels``.
        strict: Raise instead of dropping an expected label with no rows.

    Returns:
        Center set keyed by label value, ascending.

    Raises:
        EmptyClusterError: If ``strict`` and an expected label is empty.
    """
    labels = np.asarray(labels)
    if expected_labels is None:
        expected = np.unique(labels)
    else:
        expected = np.unique(np.asarray(list(expected_labels)))

    centers: CenterSet = {}
    for label in expected:
        mask = labels == label
        if not np.any(mask):
            if strict:
                raise EmptyClusterError(f'Cluster {int(label)} has no members')
            continue
        centers[int(label)] = normalize_rows(view[mask].mean(axis=0, keepdims=True))[0]
    return centers


def assign_labels(view: np.ndarray, centers: CenterSet) -> np.ndarray:
    """Assign each row to the nearest center (E-step).

    Distances are Euclidean between unit vectors, so the nearest center is
    the most cosine-similar one. Ties go to the lowest label.
    """
    keys = np.array(sorted(centers), dtype=np.int64)
    C = np.stack([centers[k] for k in keys])
    d = cdist(view, C)
    return keys[np.argmin(d, axis=1)]


def spherical_objective(view: np.ndarray, centers: CenterSet, labels: np.ndarray) -> float:
    """Sum of cosine similarities between each row and its assigned center."""
    obj = 0.0
    for label, center in centers.items():
        mask = labels == label
        if np.any(mask):
            obj += float(np.sum(view[mask] @ center))
    return obj


def spherical_kmeans(
    X: np.ndarray,
    n_clusters: int,
    n_init: int = 10,
    max_iter: int = 50,
    random_state: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Spherical K-Means on L2-normalized data (cosine geometry).

    Args:
        X: Data matrix of shape (N, D), will be L2-normalized internally.
        n_clusters: Number of clusters to form.
        n_init: Number of random initializations to try.
        max_iter: Maximum iterations per initialization.
        random_state: Random seed for reproducibility.

    Returns:
        Tuple of (centers, labels) where:
            - centers: Cluster centers of shape (n_clusters, D), unit L2-normalized.
            - labels: 1-based cluster assignments of shape (N,).
    """
    if n_clusters < 1:
        raise ValueError("n_clusters must be >= 1")
    rng = np.random.RandomState(random_state)
    X = normalize_rows(X)

    N, D = X.shape
    best_inertia = np.inf
    best_centers = None
    best_labels = None

    for _ in range(max(n_init, 1)):
        # Initialize centers by random samples
        if N >= n_clusters:
            idx = rng.choice(N, size=n_clusters, replace=False)
        else:
            idx = np.arange(N)
        centers = normalize_rows(X[idx])
        k = centers.shape[0]

        labels = np.full(N, -1, dtype=np.int64)
        for _it in range(max_iter):
            new_labels = (X @ centers.T).argmax(axis=1)
            if np.array_equal(new_labels, labels):
                break
            labels = new_labels

            for j in range(k):
                mask = labels == j
                if not np.any(mask):
                    # Re-seed empty cluster to a random point
                    centers[j] = X[rng.randint(0, N)]
                else:
                    centers[j] = X[mask].mean(axis=0)
            centers = normalize_rows(centers)

        # Inertia under cosine distance: sum_i (1 - max_k cos(x_i, c_k))
        sims = X @ centers.T
        inertia = float(np.sum(1.0 - sims.max(axis=1)))
        if inertia < best_inertia:
            best_inertia = inertia
            best_centers = centers.copy()
            best_labels = sims.argmax(axis=1)

    return best_centers, best_labels + 1
