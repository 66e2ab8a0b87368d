"""
Initial partitioners that seed the co-training loop.

A partitioner clusters a single view and returns 1-based labels together
with a center set. The co-training loop only depends on the
``partition(view, k, n_init, random_state)`` contract, so any conforming
k-means can be injected.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from sklearn.cluster import AgglomerativeClustering, KMeans

from mvsc.clustering.spherical_kmeans import (
    CenterSet,
    compute_centers,
    normalize_rows,
    spherical_kmeans,
)


class InitialPartitioner:
    """Single-view clustering used to seed co-training."""

    name = 'base'

    def partition(
        self,
        view: np.ndarray,
        k: int,
        n_init: int = 10,
        random_state: Optional[int] = None,
    ) -> Tuple[np.ndarray, CenterSet]:
        """Cluster ``view`` into at most ``k`` groups.

        Returns:
            Tuple of (labels in 1..k, center set keyed by label).
        """
        raise NotImplementedError


class SphericalKMeansPartitioner(InitialPartitioner):
    """Restart spherical k-means, best cosine inertia retained."""

    name = 'spherical'

    def __init__(self, max_iter: int = 50):
        self.max_iter = max_iter

    def partition(self, view, k, n_init=10, random_state=None):
        view = normalize_rows(view)
        _, labels = spherical_kmeans(
            view,
            n_clusters=k,
            n_init=n_init,
            max_iter=self.max_iter,
            random_state=random_state,
        )
        return labels, compute_centers(view, labels)


class KMeansPartitioner(InitialPartitioner):
    """Euclidean k-means (scikit-learn) on unit rows, centers re-normalized."""

    name = 'kmeans'

    def __init__(self, max_iter: int = 300):
        self.max_iter = max_iter

    def partition(self, view, k, n_init=10, random_state=None):
        view = normalize_rows(view)
        k = min(k, view.shape[0])
        kmeans = KMeans(
            n_clusters=k,
            init='k-means++',
            n_init=max(n_init, 1),
            max_iter=self.max_iter,
            random_state=random_state,
        )
        labels = kmeans.fit_predict(view) + 1
        return labels, compute_centers(view, labels)


class AgglomerativePartitioner(InitialPartitioner):
    """Average-linkage hierarchical clustering under cosine distance.

    Deterministic, so ``n_init`` and ``random_state`` are ignored.
    """

    name = 'hierarchical'

    def __init__(self, linkage: str = 'average'):
        self.linkage = linkage

    def partition(self, view, k, n_init=10, random_state=None):
        view = normalize_rows(view)
        k = min(k, view.shape[0])
        if k == 1:
            labels = np.ones(view.shape[0], dtype=np.int64)
        else:
            model = AgglomerativeClustering(n_clusters=k, metric='cosine', linkage=self.linkage)
            labels = model.fit_predict(view) + 1
        return labels, compute_centers(view, labels)


PARTITIONERS = {
    'spherical': SphericalKMeansPartitioner,
    'kmeans': KMeansPartitioner,
    'hierarchical': AgglomerativePartitioner,
}


def get_partitioner(name: str) -> InitialPartitioner:
    """Instantiate a partitioner by name (spherical, kmeans, hierarchical)."""
    try:
        return PARTITIONERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown init method: {name}") from None
