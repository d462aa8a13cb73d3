"""Kruskal's minimum spanning tree over the bin graph."""

from typing import List

from binroute.core_types import Edge, Graph
from binroute.graph.union_find import DisjointSet
from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)


def run_kruskal(graph: Graph) -> List[Edge]:
    """
    Compute the minimum spanning tree (or forest) of ``graph``.

    Edges are scanned in ascending weight; ``sorted`` is stable so equal
    weights keep the graph's enumeration order. A disconnected graph yields a
    spanning forest with fewer than n-1 edges.

    Args:
        graph: Graph whose edges reference ids in ``graph.nodes``

    Returns:
        Accepted edges in acceptance order
    """
    sorted_edges = sorted(graph.edges, key=lambda e: e.weight)

    components = DisjointSet()
    for node in graph.nodes:
        components.make_set(node)

    target = len(graph.nodes) - 1
    mst: List[Edge] = []
    if target <= 0:
        return mst

    for edge in sorted_edges:
        source_root = components.find(edge.source)
        target_root = components.find(edge.target)
        if source_root != target_root:
            mst.append(edge)
            components.union(source_root, target_root)
            if len(mst) == target:
                break

    if len(mst) < target:
        logger.debug(
            f"Graph is disconnected: spanning forest has {len(mst)} of {target} edges"
        )
    return mst
