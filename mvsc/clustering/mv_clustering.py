"""
Multi-View Clustering with spherical k-means co-training.

This module implements the MultiViewClustering class that clusters items
observed through two feature views into a single consensus labeling
(Bickel & Scheffer, "Multi-View Clustering", ICDM 2004).
"""

from __future__ import annotations

import warnings
from typing import Dict, List, Optional

import numpy as np

from mvsc.clustering.co_training import VIEW_NAMES, CoTrainingLoop
from mvsc.clustering.consensus import ConsensusMeans, assign_final_labels, build_consensus_means
from mvsc.clustering.partitioners import InitialPartitioner, get_partitioner
from mvsc.clustering.spherical_kmeans import normalize_rows
from mvsc.configs.base_config import Config
from mvsc.data.view_loader import validate_views
from mvsc.evaluation.agreement import agreement_rate, history_to_matrix
from mvsc.exceptions import NonConvergenceWarning


class MultiViewResult:
    """Outcome of a multi-view clustering run."""

    def __init__(
        self,
        final_labels: np.ndarray,
        consensus: ConsensusMeans,
        labels_view1: np.ndarray,
        labels_view2: np.ndarray,
        history_view1: np.ndarray,
        history_view2: np.ndarray,
        objective_history: list,
        n_iter: int,
        converged: bool,
    ):
        self.final_labels = final_labels
        self.consensus = consensus
        self.labels_view1 = labels_view1
        self.labels_view2 = labels_view2
        self.history_view1 = history_view1
        self.history_view2 = history_view2
        self.objective_history = objective_history
        self.n_iter = n_iter
        self.converged = converged

    @property
    def consensus_labels(self) -> np.ndarray:
        """Co-training label value behind each final label position."""
        return self.consensus.labels[self.final_labels - 1]

    @property
    def agreement_rate(self) -> float:
        """Fraction of items whose two view labels agree on a consensus cluster."""
        return agreement_rate(self.labels_view1, self.labels_view2, self.consensus.labels)

    @property
    def n_clusters(self) -> int:
        return len(np.unique(self.final_labels))


class MultiViewClustering:
    """Consensus clustering of two views by alternating spherical k-means.

    The pipeline:
    1. Normalizes both views to the unit sphere
    2. Partitions the start view with an initial (restart) k-means
    3. Co-trains: each view re-estimates its centers from the other view's labels
    4. Builds consensus means from the items both views agree on
    5. Assigns every item to the closest consensus cluster across both views
    """

    def __init__(
        self,
        n_clusters: int,
        start_view: str = 'view1',
        nthresh: int = 20,
        n_init: int = 10,
        init_method: str = 'spherical',
        partitioner: Optional[InitialPartitioner] = None,
        max_iter: Optional[int] = 10000,
        random_state: Optional[int] = None,
        record_history: bool = True,
        verbose: bool = False,
        debug: bool = False,
    ):
        """Initialize multi-view clustering.

        Args:
            n_clusters: Maximum number of clusters to create.
            start_view: View that receives the initial partition ('view1' or 'view2').
            nthresh: Evaluation rounds without objective improvement tolerated per view.
            n_init: Restarts of the initial partitioner.
            init_method: Name of the built-in partitioner, used when ``partitioner`` is None.
            partitioner: Custom initial partitioner.
            max_iter: Iteration cap for co-training; None disables it.
            random_state: Seed passed to the initial partitioner.
            record_history: Keep each view's labels after every co-training turn.
            verbose: Print progress to the console.
            debug: Print per-round objectives (implies verbose).
        """
        if n_clusters < 1:
            raise ValueError("n_clusters must be >= 1")
        if start_view not in VIEW_NAMES:
            raise ValueError(f"start_view must be one of {VIEW_NAMES}, got {start_view!r}")
        self.n_clusters = n_clusters
        self.start_view = start_view
        self.nthresh = nthresh
        self.n_init = n_init
        self.partitioner = partitioner if partitioner is not None else get_partitioner(init_method)
        self.max_iter = max_iter
        self.random_state = random_state
        self.record_history = record_history
        self.debug = debug
        self.verbose = verbose or debug

    @classmethod
    def from_config(cls, config: Config, partitioner: Optional[InitialPartitioner] = None) -> "MultiViewClustering":
        return cls(
            n_clusters=config.n_clusters,
            start_view=config.start_view,
            nthresh=config.nthresh,
            n_init=config.n_init,
            init_method=config.init_method,
            partitioner=partitioner,
            max_iter=config.max_iter,
            random_state=config.current_seed,
            record_history=config.record_history,
            verbose=config.verbose,
            debug=config.debug,
        )

    def fit(self, view1: np.ndarray, view2: np.ndarray) -> MultiViewResult:
        """Cluster the items described by ``view1`` and ``view2``.

        Args:
            view1: First view, shape (N, D1).
            view2: Second view, shape (N, D2), same row order as ``view1``.

        Returns:
            MultiViewResult with the final labels and diagnostics.

        Raises:
            ValueError: On shape mismatch, empty views or non-finite entries.
            DegenerateInputError: If every row of a view is zero.
            NoSharedLabelsError: If the views end up sharing no cluster.
        """
        view1, view2 = validate_views(view1, view2)
        view1 = normalize_rows(view1)
        view2 = normalize_rows(view2)

        views = {'view1': view1, 'view2': view2}
        init_labels, init_centers = self.partitioner.partition(
            views[self.start_view],
            self.n_clusters,
            n_init=self.n_init,
            random_state=self.random_state,
        )
        if self.verbose:
            print(f'Initial partition of {self.start_view} ({self.partitioner.name}): {len(init_centers)} clusters')

        history: Dict[str, List[np.ndarray]] = {name: [] for name in VIEW_NAMES}

        def record(iteration, role, objective, labels):
            history[role].append(np.array(labels, copy=True))

        loop = CoTrainingLoop(
            nthresh=self.nthresh,
            max_iter=self.max_iter,
            callback=record if self.record_history else None,
            verbose=self.verbose,
            debug=self.debug,
        )
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', NonConvergenceWarning)
            trained = loop.run(view1, view2, init_labels, init_centers, start_view=self.start_view)
        # Re-issue so the warning points at the caller of fit
        for w in caught:
            warnings.warn(w.message, w.category, stacklevel=2)

        consensus = build_consensus_means(view1, view2, trained.labels_view1, trained.labels_view2)
        final_labels = assign_final_labels(view1, view2, consensus)

        result = MultiViewResult(
            final_labels=final_labels,
            consensus=consensus,
            labels_view1=trained.labels_view1,
            labels_view2=trained.labels_view2,
            history_view1=history_to_matrix(history['view1']),
            history_view2=history_to_matrix(history['view2']),
            objective_history=trained.objective_history,
            n_iter=trained.n_iter,
            converged=trained.converged,
        )
        if self.verbose:
            print(f'Consensus: {len(consensus)} clusters, agreement rate {result.agreement_rate:.3f}')
        return result

    def fit_predict(self, view1: np.ndarray, view2: np.ndarray) -> np.ndarray:
        """Fit and return only the final label vector."""
        return self.fit(view1, view2).final_labels


def multi_view_cluster(
    view1: np.ndarray,
    view2: np.ndarray,
    k: int,
    start_view: str = 'view1',
    nthresh: int = 20,
    random_state: Optional[int] = None,
    **kwargs,
) -> np.ndarray:
    """Final consensus labels (1-based) for two views; see MultiViewClustering."""
    model = MultiViewClustering(
        n_clusters=k,
        start_view=start_view,
        nthresh=nthresh,
        random_state=random_state,
        **kwargs,
    )
    return model.fit_predict(view1, view2)
