"""Clustering algorithms for MVSC."""

from mvsc.clustering.mv_clustering import MultiViewClustering
from mvsc.clustering.co_training import CoTrainingLoop, RoundState
from mvsc.clustering.consensus import ConsensusMeans, assign_final_labels, build_consensus_means
from mvsc.clustering.partitioners import get_partitioner
from mvsc.clustering.spherical_kmeans import (
    assign_labels,
    compute_centers,
    normalize_rows,
    spherical_kmeans,
    spherical_objective,
)

__all__ = [
    "MultiViewClustering",
    "CoTrainingLoop",
    "RoundState",
    "ConsensusMeans",
    "assign_final_labels",
    "build_consensus_means",
    "get_partitioner",
    "assign_labels",
    "compute_centers",
    "normalize_rows",
    "spherical_kmeans",
    "spherical_objective",
]
