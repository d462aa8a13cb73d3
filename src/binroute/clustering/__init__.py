"""
Bin clustering over the spanning tree.
"""

from binroute.core_types import Cluster

from .extractor import (
    build_adjacency,
    cap_cluster_size,
    compute_bin_weights,
    find_bin_clusters,
)

__all__ = [
    "Cluster",
    "build_adjacency",
    "cap_cluster_size",
    "compute_bin_weights",
    "find_bin_clusters",
]
