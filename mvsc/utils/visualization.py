"""
Visualization utilities for multi-view clustering.

This module provides functions for plotting the hierarchical structure of
the items, the co-training objective trajectory and label trajectories.
"""

from __future__ import annotations

import os
from typing import List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from scipy.cluster.hierarchy import dendrogram, linkage

from mvsc.clustering.spherical_kmeans import normalize_rows


def plot_hierarchical_clustering(
    view1: np.ndarray,
    view2: np.ndarray,
    labels: np.ndarray,
    save_path: str,
    title: Optional[str] = None,
):
    """Plot an average-linkage cosine dendrogram of both views.

    Each item is the concatenation of its normalized rows in the two views;
    leaves are annotated with the item index and its final label.

    Args:
        view1: First view, shape (N, D1).
        view2: Second view, shape (N, D2).
        labels: Final labels, shape (N,).
        save_path: Output image file.
        title: Plot title.
    """
    save_dir = os.path.dirname(save_path)
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)

    joint = np.hstack([normalize_rows(view1), normalize_rows(view2)])
    # Cosine distance is undefined for all-zero rows
    joint[~np.any(joint, axis=1)] = 1e-12
    Z = linkage(joint, method='average', metric='cosine')
    Z[:, 2] = np.clip(np.nan_to_num(Z[:, 2]), 0.0, None)
    leaf_labels = [f'{i + 1}:{int(l)}' for i, l in enumerate(labels)]

    plt.figure(figsize=(max(8, len(labels) * 0.25), 6))
    dendrogram(Z, labels=leaf_labels, leaf_rotation=90)
    plt.title(title or 'Hierarchical clustering of both views')
    plt.xlabel('Item:Label')
    plt.ylabel('Cosine distance')
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()


def plot_objective_history(
    objective_history: List[Tuple[int, float, float]],
    save_dir: str,
    filename: str = 'objective_history.png'
):
    """Plot both views' spherical objective over co-training iterations.

    Args:
        objective_history: Tuples of (iteration, objective view1, objective view2).
        save_dir: Directory to save the plot.
        filename: Output filename.
    """
    os.makedirs(save_dir, exist_ok=True)

    its = [h[0] for h in objective_history]
    plt.figure(figsize=(10, 6))
    plt.plot(its, [h[1] for h in objective_history], label='view1', marker='o')
    plt.plot(its, [h[2] for h in objective_history], label='view2', marker='s')
    plt.title('Spherical Objective vs Iteration')
    plt.xlabel('Iteration')
    plt.ylabel('Sum of cosine similarities')
    plt.legend()
    plt.grid(True)
    plt.savefig(os.path.join(save_dir, filename))
    plt.close()


def label_cmap(n_labels: int) -> str:
    """Qualitative colormap with a distinct colour per label, continuous past 20."""
    if n_labels <= 10:
        return 'tab10'
    if n_labels <= 20:
        return 'tab20'
    return 'viridis'


def plot_label_trajectory(
    history: np.ndarray,
    save_dir: str,
    filename: str = 'label_trajectory.png',
    view_name: str = 'view'
):
    """Plot a (rounds, N) label trajectory as a heatmap.

    Args:
        history: Labels of one view after each of its co-training turns.
        save_dir: Directory to save the plot.
        filename: Output filename.
        view_name: Name used in the title.
    """
    os.makedirs(save_dir, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    n_labels = int(history.max()) if history.size else 0
    im = ax.imshow(history, aspect='auto', interpolation='nearest', cmap=label_cmap(n_labels))
    ax.set_xlabel('Item')
    ax.set_ylabel('Round')
    fig.colorbar(im, ax=ax, label='Label')
    plt.title(f'Label trajectory for {view_name}')
    plt.savefig(os.path.join(save_dir, filename))
    plt.close()
