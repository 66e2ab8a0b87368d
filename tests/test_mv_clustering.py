"""
End-to-end tests for MultiViewClustering.
"""
import numpy as np
import pytest

from mvsc import Config, DegenerateInputError, MultiViewClustering, NonConvergenceWarning, multi_view_cluster
from mvsc.clustering.partitioners import InitialPartitioner
from mvsc.clustering.spherical_kmeans import compute_centers, normalize_rows
from mvsc.evaluation.agreement import partition_similarity


class FixedPartitioner(InitialPartitioner):
    """Deterministic stub returning a preset partition."""

    name = 'fixed'

    def __init__(self, labels):
        self.labels = np.asarray(labels)
        self.calls = []

    def partition(self, view, k, n_init=10, random_state=None):
        self.calls.append((k, n_init, random_state))
        return self.labels, compute_centers(normalize_rows(view), self.labels)


def _assert_two_blocks(labels):
    assert len(set(labels.tolist())) == 2
    assert labels[0] == labels[1] == labels[2]
    assert labels[3] == labels[4] == labels[5]
    assert labels[0] != labels[3]


def test_two_block_scenario(two_block_views):
    """Two well-separated angular groups come out as two clusters."""
    view1, view2 = two_block_views

    result = MultiViewClustering(n_clusters=2, nthresh=5, random_state=0).fit(view1, view2)

    _assert_two_blocks(result.final_labels)
    assert set(result.final_labels.tolist()) == {1, 2}
    assert result.converged
    assert result.agreement_rate == pytest.approx(1.0)


def test_two_block_scenario_with_stub(two_block_views):
    view1, view2 = two_block_views
    stub = FixedPartitioner([2, 2, 2, 1, 1, 1])

    result = MultiViewClustering(n_clusters=2, nthresh=5, partitioner=stub, random_state=3).fit(view1, view2)

    _assert_two_blocks(result.final_labels)
    assert stub.calls == [(2, 10, 3)]
    assert result.n_iter == 14
    np.testing.assert_array_equal(result.consensus_labels, [2, 2, 2, 1, 1, 1])


def test_label_history_recorded(two_block_views):
    view1, view2 = two_block_views
    stub = FixedPartitioner([1, 1, 1, 2, 2, 2])

    result = MultiViewClustering(n_clusters=2, nthresh=5, partitioner=stub).fit(view1, view2)

    assert result.history_view1.shape == (7, 6)
    assert result.history_view2.shape == (7, 6)
    np.testing.assert_array_equal(result.history_view2[-1], result.labels_view2)
    assert len(result.objective_history) == 7


def test_history_disabled(two_block_views):
    view1, view2 = two_block_views
    stub = FixedPartitioner([1, 1, 1, 2, 2, 2])

    result = MultiViewClustering(n_clusters=2, partitioner=stub, record_history=False).fit(view1, view2)

    assert result.history_view1.size == 0


def test_start_view_swap_gives_same_partition(three_cluster_views):
    """Seeding from either view yields the same partition up to relabeling."""
    view1, view2, truth = three_cluster_views

    from_view1 = MultiViewClustering(
        n_clusters=3, start_view='view1', init_method='hierarchical', random_state=0
    ).fit_predict(view1, view2)
    from_view2 = MultiViewClustering(
        n_clusters=3, start_view='view2', init_method='hierarchical', random_state=0
    ).fit_predict(view1, view2)

    assert partition_similarity(from_view1, from_view2) == pytest.approx(1.0)
    assert partition_similarity(from_view1, truth) == pytest.approx(1.0)


def test_zero_row_is_assigned_to_first_cluster(two_block_views):
    view1, view2 = two_block_views
    view1 = np.vstack([view1, [0.0, 0.0]])
    view2 = np.vstack([view2, [0.0, 0.0]])
    stub = FixedPartitioner([1, 1, 1, 2, 2, 2, 1])

    result = MultiViewClustering(n_clusters=2, nthresh=3, partitioner=stub).fit(view1, view2)

    assert result.final_labels[-1] == 1
    _assert_two_blocks(result.final_labels[:6])


def test_multi_view_cluster_shortcut(two_block_views):
    view1, view2 = two_block_views

    labels = multi_view_cluster(view1, view2, 2, nthresh=5, random_state=0)

    _assert_two_blocks(labels)


def test_from_config():
    config = Config(base_seed=4)
    config.n_clusters = 3
    config.update_for_start_view('view2')
    config.update_for_init('kmeans')
    config.nthresh = 7

    model = MultiViewClustering.from_config(config)

    assert model.n_clusters == 3
    assert model.start_view == 'view2'
    assert model.nthresh == 7
    assert model.random_state == 4
    assert model.partitioner.name == 'kmeans'


@pytest.mark.parametrize("kwargs", [{"n_clusters": 0}, {"n_clusters": 2, "start_view": "left"}])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        MultiViewClustering(**kwargs)


def test_row_count_mismatch():
    with pytest.raises(ValueError, match="row count"):
        MultiViewClustering(n_clusters=2).fit(np.eye(3), np.eye(2))


def test_verbose_prints_summary(two_block_views, capsys):
    view1, view2 = two_block_views

    MultiViewClustering(n_clusters=2, nthresh=2, random_state=0, verbose=True).fit(view1, view2)

    out = capsys.readouterr().out
    assert "Initial partition of view1 (spherical)" in out
    assert "agreement rate 1.000" in out


def test_non_convergence_warning_points_at_caller(three_cluster_views):
    view1, view2, _ = three_cluster_views
    model = MultiViewClustering(n_clusters=3, nthresh=1000, max_iter=3, init_method='hierarchical')

    with pytest.warns(NonConvergenceWarning) as record:
        result = model.fit(view1, view2)

    assert not result.converged
    caught = [w for w in record if issubclass(w.category, NonConvergenceWarning)]
    assert len(caught) == 1
    assert caught[0].filename.endswith("test_mv_clustering.py")


@pytest.mark.parametrize("bad", [np.nan, np.inf])
def test_non_finite_input_rejected(two_block_views, bad):
    """Non-finite rows are not silently turned into zero rows."""
    view1, view2 = two_block_views
    view1[2, 0] = bad

    with pytest.raises(ValueError, match="non-finite"):
        MultiViewClustering(n_clusters=2).fit(view1, view2)


def test_all_zero_view_rejected(two_block_views):
    view1, _ = two_block_views

    with pytest.raises(DegenerateInputError, match="view2"):
        MultiViewClustering(n_clusters=2).fit(view1, np.zeros((6, 3)))
