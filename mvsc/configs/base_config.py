"""
Configuration class for multi-view clustering runs.

This module contains the Config class that holds the clustering
hyperparameters and the output locations of a run.
"""

from __future__ import annotations

import os
from typing import Optional


START_VIEWS = ('view1', 'view2')
INIT_METHODS = ('spherical', 'kmeans', 'hierarchical')


class Config:
    """Container for clustering hyperparameters and resolved output locations."""

    def __init__(self, base_seed: int = 0, project_root: Optional[str] = None):
        self.current_seed = base_seed

        # Clustering
        self.n_clusters = 2
        self.start_view = 'view1'
        self.nthresh = 20  # rounds without improvement before a view counts as stalled
        self.max_iter = 10000

        # Initial partition
        self.init_method = 'spherical'
        self.n_init = 10

        # Reporting
        self.verbose = False
        self.debug = False
        self.record_history = True

        # Paths
        self.base_path = project_root or os.getcwd()
        self.outputs_root = os.path.join(self.base_path, "outputs", f"seed_{self.current_seed}")
        self.labels_file = os.path.join(self.outputs_root, "final_labels.txt")
        self.plot_file: Optional[str] = None

    def set_seed(self, s: int):
        """Update the active seed and regenerate any seed-scoped output paths."""
        self.current_seed = s
        self.outputs_root = os.path.join(self.base_path, 'outputs', f'seed_{s}')
        self.labels_file = os.path.join(self.outputs_root, 'final_labels.txt')

    def update_for_start_view(self, start_view: str):
        """Select the view that receives the initial partition (view1, view2)."""
        start_view = start_view.lower()
        if start_view not in START_VIEWS:
            raise ValueError(f"Unknown start view: {start_view}")
        self.start_view = start_view

    def update_for_init(self, init_method: str):
        """Select the initial partitioner (spherical, kmeans, hierarchical)."""
        init_method = init_method.lower()
        if init_method not in INIT_METHODS:
            raise ValueError(f"Unknown init method: {init_method}")
        self.init_method = init_method
