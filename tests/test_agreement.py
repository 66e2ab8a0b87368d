"""
Tests for agreement and quality diagnostics.
"""
import numpy as np
import pytest

from mvsc.clustering.spherical_kmeans import compute_centers
from mvsc.evaluation.agreement import (
    agreement_rate,
    cluster_quality,
    history_to_matrix,
    partition_similarity,
)


def test_agreement_rate_plain():
    assert agreement_rate([1, 2, 2], [1, 2, 1]) == pytest.approx(2 / 3)


def test_agreement_rate_restricted_to_consensus_labels():
    assert agreement_rate([1, 2, 2], [1, 2, 1], consensus_labels=[1]) == pytest.approx(1 / 3)


def test_agreement_rate_empty():
    assert agreement_rate([], []) == 0.0


def test_agreement_rate_shape_mismatch():
    with pytest.raises(ValueError, match="differ in shape"):
        agreement_rate([1, 2], [1, 2, 3])


def test_history_to_matrix():
    history = [np.array([1, 2, 2]), np.array([1, 1, 2])]

    matrix = history_to_matrix(history)

    assert matrix.shape == (2, 3)
    np.testing.assert_array_equal(matrix[1], [1, 1, 2])


def test_history_to_matrix_empty():
    assert history_to_matrix([]).shape == (0, 0)


def test_partition_similarity_ignores_relabeling():
    assert partition_similarity([1, 1, 2, 2], [2, 2, 1, 1]) == pytest.approx(1.0)
    assert partition_similarity([1, 1, 2, 2], [1, 2, 1, 2]) < 0.5


def test_cluster_quality_perfect_clusters(two_block_views):
    view, _ = two_block_views
    labels = np.array([1, 1, 1, 2, 2, 2])
    centers = compute_centers(view, labels)

    quality = cluster_quality(view, centers, labels)

    assert quality['intra_cohesion'] == pytest.approx(1.0)
    assert quality['inter_separation'] == pytest.approx(1.0)
    assert quality['inertia'] == pytest.approx(0.0)


def test_cluster_quality_single_cluster(two_block_views):
    view, _ = two_block_views
    labels = np.ones(6, dtype=int)
    centers = compute_centers(view, labels)

    quality = cluster_quality(view, centers, labels)

    assert quality['inter_separation'] == 1.0
    assert quality['intra_cohesion'] < 1.0
