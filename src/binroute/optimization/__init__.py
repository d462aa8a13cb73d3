"""
Exact visiting-order search for individual clusters.
"""

from .sequence import build_distance_matrix, optimize_sequence, path_length

__all__ = ["build_distance_matrix", "optimize_sequence", "path_length"]
