"""Errors and warnings raised by multi-view clustering."""

from __future__ import annotations


class MultiViewClusteringError(Exception):
    """Base class for multi-view clustering failures."""


class DegenerateInputError(MultiViewClusteringError):
    """A view carries no signal: every row is the zero vector."""


class EmptyClusterError(MultiViewClusteringError):
    """An expected cluster label has no members during center estimation."""


class NoSharedLabelsError(MultiViewClusteringError):
    """The two final label vectors agree on no cluster at all."""


class NonConvergenceWarning(RuntimeWarning):
    """Co-training stopped at the iteration cap before both views stalled."""
