"""
Consensus means and final label assignment.

After co-training, each cluster label used by both views gets a mean
direction per view, computed only over the items both views put in that
cluster. Every item is then assigned to the consensus cluster with the
smallest summed angular distance across the two views.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from mvsc.clustering.spherical_kmeans import CenterSet, normalize_rows
from mvsc.exceptions import NoSharedLabelsError


class ConsensusMeans:
    """Index-aligned per-view mean directions of the shared clusters.

    Row ``i`` of ``means1`` and ``means2`` both belong to ``labels[i]``.
    """

    def __init__(self, labels: np.ndarray, means1: np.ndarray, means2: np.ndarray):
        self.labels = labels
        self.means1 = means1
        self.means2 = means2

    def __len__(self):
        return len(self.labels)

    def as_center_sets(self) -> Tuple[CenterSet, CenterSet]:
        """Return the two means as center sets keyed by shared label."""
        first = {int(l): m for l, m in zip(self.labels, self.means1)}
        second = {int(l): m for l, m in zip(self.labels, self.means2)}
        return first, second


def build_consensus_means(
    view1: np.ndarray,
    view2: np.ndarray,
    labels1: np.ndarray,
    labels2: np.ndarray,
) -> ConsensusMeans:
    """Per-view means of the items both views agree on, for each shared label.

    Args:
        view1: Row-normalized first view, shape (N, D1).
        view2: Row-normalized second view, shape (N, D2).
        labels1: Final labels of the first view, shape (N,).
        labels2: Final labels of the second view, shape (N,).

    Returns:
        ConsensusMeans over the shared labels with a non-empty agreement set.

    Raises:
        NoSharedLabelsError: If no label has any agreeing item.
    """
    labels1 = np.asarray(labels1)
    labels2 = np.asarray(labels2)
    shared = np.intersect1d(labels1, labels2)

    kept, means1, means2 = [], [], []
    for label in shared:
        agree = (labels1 == label) & (labels2 == label)
        if not np.any(agree):
            continue
        kept.append(int(label))
        means1.append(view1[agree].mean(axis=0))
        means2.append(view2[agree].mean(axis=0))

    if not kept:
        raise NoSharedLabelsError(
            f'No cluster is shared by both views (view1 labels {np.unique(labels1).tolist()}, '
            f'view2 labels {np.unique(labels2).tolist()})'
        )
    return ConsensusMeans(
        labels=np.array(kept, dtype=np.int64),
        means1=normalize_rows(np.vstack(means1)),
        means2=normalize_rows(np.vstack(means2)),
    )


def assign_final_labels(
    view1: np.ndarray,
    view2: np.ndarray,
    consensus: ConsensusMeans,
    tol: float = 1e-12,
) -> np.ndarray:
    """Assign every item to the consensus cluster closest in both views.

    The distance is the sum of the angles to the two per-view means. Labels
    are 1-based positions into ``consensus``. Sums within ``tol`` of the
    smallest count as ties and go to the lower position.
    """
    view1 = normalize_rows(view1)
    view2 = normalize_rows(view2)
    # Clip guards arccos against overshoot on unit vectors
    angles1 = np.arccos(np.clip(view1 @ consensus.means1.T, -1.0, 1.0))
    angles2 = np.arccos(np.clip(view2 @ consensus.means2.T, -1.0, 1.0))
    total = angles1 + angles2
    near_min = total <= total.min(axis=1, keepdims=True) + tol
    return np.argmax(near_min, axis=1) + 1
