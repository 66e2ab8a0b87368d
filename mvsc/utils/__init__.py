"""Utility functions for MVSC."""

from mvsc.utils.visualization import (
    label_cmap,
    plot_hierarchical_clustering,
    plot_label_trajectory,
    plot_objective_history,
)

__all__ = [
    "label_cmap",
    "plot_hierarchical_clustering",
    "plot_label_trajectory",
    "plot_objective_history",
]
