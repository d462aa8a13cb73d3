"""
Graph stage: distances, the complete bin graph and its spanning tree.
"""

from .builder import EARTH_RADIUS_KM, calculate_distance, create_graph
from .mst import run_kruskal
from .union_find import DisjointSet

__all__ = [
    "EARTH_RADIUS_KM",
    "DisjointSet",
    "calculate_distance",
    "create_graph",
    "run_kruskal",
]
