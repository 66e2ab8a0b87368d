"""
Alternating spherical k-means across two views (co-training).

Each iteration re-estimates the active view's centers from the passive
view's labels, re-assigns the active view, and swaps roles. Every second
iteration both views' objectives are checked; a view whose objective does
not strictly improve accrues a stall round. The loop ends once both views
have stalled for more than ``nthresh`` rounds.
"""

from __future__ import annotations

import warnings
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from mvsc.clustering.spherical_kmeans import (
    CenterSet,
    assign_labels,
    compute_centers,
    spherical_objective,
)
from mvsc.exceptions import NonConvergenceWarning


VIEW_NAMES = ('view1', 'view2')

RoundCallback = Callable[[int, str, Optional[float], np.ndarray], None]


class RoundState:
    """Per-view state carried through co-training."""

    def __init__(
        self,
        name: str,
        data: np.ndarray,
        labels: Optional[np.ndarray] = None,
        centers: Optional[CenterSet] = None,
    ):
        self.name = name
        self.data = data
        self.labels = labels
        self.centers = centers if centers is not None else {}
        self.maximum = -np.inf
        self.stall = 0

    def evaluate(self) -> float:
        """Score the current centers/labels and update the stall counter."""
        self.stall += 1
        obj = spherical_objective(self.data, self.centers, self.labels)
        if obj > self.maximum:
            self.maximum = obj
            self.stall = 0
        return obj

    def __repr__(self):
        return f'RoundState({self.name}, clusters={len(self.centers)}, max={self.maximum:.4f}, stall={self.stall})'


class CoTrainingResult:
    """Terminal state of the loop, in original view order."""

    def __init__(
        self,
        labels: Dict[str, np.ndarray],
        centers: Dict[str, CenterSet],
        maxima: Dict[str, float],
        n_iter: int,
        converged: bool,
        objective_history: List[Tuple[int, float, float]],
    ):
        self.labels = labels
        self.centers = centers
        self.maxima = maxima
        self.n_iter = n_iter
        self.converged = converged
        self.objective_history = objective_history

    @property
    def labels_view1(self) -> np.ndarray:
        return self.labels['view1']

    @property
    def labels_view2(self) -> np.ndarray:
        return self.labels['view2']


class CoTrainingLoop:
    """Alternating M/E steps between two views with dual stall detection."""

    def __init__(
        self,
        nthresh: int = 20,
        max_iter: Optional[int] = 10000,
        callback: Optional[RoundCallback] = None,
        verbose: bool = False,
        debug: bool = False,
    ):
        """Configure the loop.

        Args:
            nthresh: Evaluation rounds without improvement tolerated per view.
            max_iter: Hard cap on iterations; None runs until both views stall.
            callback: Called once per iteration with
                (iteration, active view name, active objective or None, active labels).
            verbose: Print a start/termination summary and a progress bar.
            debug: Print every objective evaluation (implies verbose).
        """
        if nthresh < 0:
            raise ValueError("nthresh must be >= 0")
        if max_iter is not None and max_iter < 1:
            raise ValueError("max_iter must be >= 1")
        self.nthresh = nthresh
        self.max_iter = max_iter
        self.callback = callback
        self.debug = debug
        self.verbose = verbose or debug
        self.states: List[RoundState] = []
        self.active_index = 0

    def active(self) -> RoundState:
        return self.states[self.active_index]

    def passive(self) -> RoundState:
        return self.states[1 - self.active_index]

    def swap(self):
        self.active_index = 1 - self.active_index

    def stalled(self) -> bool:
        return all(s.stall > self.nthresh for s in self.states)

    def run(
        self,
        view1: np.ndarray,
        view2: np.ndarray,
        init_labels: np.ndarray,
        init_centers: CenterSet,
        start_view: str = 'view1',
    ) -> CoTrainingResult:
        """Co-train from an initial partition of ``start_view``.

        Args:
            view1: Row-normalized first view, shape (N, D1).
            view2: Row-normalized second view, shape (N, D2).
            init_labels: 1-based labels of the start view from the partitioner.
            init_centers: Center set of the start view from the partitioner.
            start_view: Which view the initial partition belongs to.

        Returns:
            CoTrainingResult with the latest labels/centers of each view.
        """
        if start_view not in VIEW_NAMES:
            raise ValueError(f"start_view must be one of {VIEW_NAMES}, got {start_view!r}")
        data = {'view1': view1, 'view2': view2}
        other_view = VIEW_NAMES[1 - VIEW_NAMES.index(start_view)]

        # The view without an initial partition is processed first
        self.states = [
            RoundState(other_view, data[other_view]),
            RoundState(start_view, data[start_view], np.asarray(init_labels), dict(init_centers)),
        ]
        self.active_index = 0

        if self.verbose:
            print(f'Co-training: start_view={start_view}, clusters={len(init_centers)}, nthresh={self.nthresh}')

        objective_history: List[Tuple[int, float, float]] = []
        converged = True
        it = 0
        evaluate_turn = 0
        pbar = tqdm(total=self.max_iter, desc='Co-training', disable=not self.verbose)
        try:
            while True:
                it += 1
                evaluate_turn += 1
                active, passive = self.active(), self.passive()

                # M-step from the other view's labels, then E-step on own data
                active.centers = compute_centers(active.data, passive.labels)
                active.labels = assign_labels(active.data, active.centers)

                objective = None
                if evaluate_turn == 2:
                    evaluate_turn = 0
                    passive_obj = passive.evaluate()
                    objective = active.evaluate()
                    by_name = {active.name: objective, passive.name: passive_obj}
                    objective_history.append((it, by_name['view1'], by_name['view2']))
                    if self.debug:
                        print(
                            f'  iter {it}: {active.name} obj={objective:.4f} stall={active.stall}, '
                            f'{passive.name} obj={passive_obj:.4f} stall={passive.stall}'
                        )

                if self.callback is not None:
                    self.callback(it, active.name, objective, active.labels)
                pbar.update(1)

                if self.stalled():
                    break
                if self.max_iter is not None and it >= self.max_iter:
                    converged = False
                    warnings.warn(
                        f'Co-training hit max_iter={self.max_iter} before both views stalled',
                        NonConvergenceWarning,
                        stacklevel=2,
                    )
                    break
                self.swap()
        finally:
            pbar.close()

        by_view = {s.name: s for s in self.states}
        if self.verbose:
            status = 'converged' if converged else 'stopped at cap'
            print(
                f'Co-training {status} after {it} iterations '
                f'(view1 max={by_view["view1"].maximum:.4f}, view2 max={by_view["view2"].maximum:.4f})'
            )
        return CoTrainingResult(
            labels={name: by_view[name].labels for name in VIEW_NAMES},
            centers={name: by_view[name].centers for name in VIEW_NAMES},
            maxima={name: float(by_view[name].maximum) for name in VIEW_NAMES},
            n_iter=it,
            converged=converged,
            objective_history=objective_history,
        )
