import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def two_block_views():
    """Six items in two orthogonal groups, identical in both views."""
    view = np.array(
        [[1.0, 0.0], [1.0, 0.0], [1.0, 0.0], [0.0, 1.0], [0.0, 1.0], [0.0, 1.0]]
    )
    return view.copy(), view.copy()


@pytest.fixture
def three_cluster_views():
    """Thirty items in three well-separated angular clusters per view."""
    rng = np.random.default_rng(7)
    truth = np.repeat([0, 1, 2], 10)
    dirs1 = np.eye(5)[[0, 1, 2]]
    dirs2 = np.eye(4)[[3, 1, 0]]
    view1 = dirs1[truth] + 0.05 * rng.standard_normal((30, 5))
    view2 = dirs2[truth] + 0.05 * rng.standard_normal((30, 4))
    return view1, view2, truth
