"""
Multi-View Spherical Clustering (MVSC)

Consensus clustering of items observed through two feature views, using
alternating spherical k-means co-training in the spirit of Bickel &
Scheffer's multi-view clustering.
"""

__version__ = "1.0.0"

from mvsc.configs.base_config import Config
from mvsc.clustering.mv_clustering import MultiViewClustering, MultiViewResult, multi_view_cluster
from mvsc.exceptions import (
    DegenerateInputError,
    EmptyClusterError,
    NoSharedLabelsError,
    NonConvergenceWarning,
)

__all__ = [
    "Config",
    "MultiViewClustering",
    "MultiViewResult",
    "multi_view_cluster",
    "DegenerateInputError",
    "EmptyClusterError",
    "NoSharedLabelsError",
    "NonConvergenceWarning",
]
