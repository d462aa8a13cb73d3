"""
extractor.py

Density-ranked bin clusters derived from the minimum spanning tree.

Each bin is weighted by how full it is and by how many spanning-tree edges
touch it. Breadth-first searches seeded from the fullest bins carve the tree
into connected groups, which are then ranked by mean weight. Because the tree
of a complete graph is connected, the usual outcome is one cluster holding
every bin; the ranking matters once clusters are capped and split for the
exact sequencer.
"""

from collections import deque
from typing import Dict, List, Optional

from binroute.core_types import Bin, Cluster, Edge
from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)

FILL_WEIGHT = 2.0


def build_adjacency(bins: List[Bin], mst: List[Edge]) -> Dict[int, List[int]]:
    """Undirected adjacency lists for the tree, with an entry for every bin."""
    adjacency: Dict[int, List[int]] = {b.bin_id: [] for b in bins}
    for edge in mst:
        adjacency.setdefault(edge.source, []).append(edge.target)
        adjacency.setdefault(edge.target, []).append(edge.source)
    return adjacency


def compute_bin_weights(
    bins: List[Bin], adjacency: Dict[int, List[int]]
) -> Dict[int, float]:
    """Weight = (fill_level / 100) * 2 + tree degree."""
    return {
        b.bin_id: (b.fill_level / 100) * FILL_WEIGHT + len(adjacency.get(b.bin_id, []))
        for b in bins
    }


def find_bin_clusters(bins: List[Bin], mst: List[Edge]) -> List[Cluster]:
    """
    Partition ``bins`` into clusters by BFS over the spanning tree.

    Args:
        bins: Bins of the current working set
        mst: Spanning tree (or forest) edges over those bins

    Returns:
        Clusters sorted by descending density. Every bin id appears in
        exactly one cluster.
    """
    adjacency = build_adjacency(bins, mst)
    weights = compute_bin_weights(bins, adjacency)

    clusters: List[Cluster] = []
    visited = set()

    # Fullest bins seed first; sorted() keeps input order among equal levels.
    for seed in sorted(bins, key=lambda b: b.fill_level, reverse=True):
        if seed.bin_id in visited:
            continue

        members: List[int] = []
        total_weight = 0.0
        queue = deque([seed.bin_id])
        visited.add(seed.bin_id)

        while queue:
            current = queue.popleft()
            members.append(current)
            total_weight += weights.get(current, 0.0)
            for neighbor in adjacency.get(current, []):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        if len(members) >= 2:
            density = total_weight / len(members)
        else:
            density = total_weight
        clusters.append(Cluster(bins=members, density=density))

    clusters.sort(key=lambda c: c.density, reverse=True)
    logger.debug(
        f"Extracted {len(clusters)} clusters from {len(bins)} bins "
        f"(sizes: {[len(c.bins) for c in clusters]})"
    )
    return clusters


def cap_cluster_size(
    clusters: List[Cluster], max_cluster_size: Optional[int]
) -> List[Cluster]:
    """
    Split clusters longer than ``max_cluster_size`` into consecutive chunks.

    The exact sequencer is exponential in cluster size, so the pipeline bounds
    it here. Chunks follow the BFS order of their parent and inherit its
    density, so the overall ordering and the partition are unchanged.
    ``None`` or 0 disables the cap.
    """
    if not max_cluster_size:
        return list(clusters)

    capped: List[Cluster] = []
    for cluster in clusters:
        if len(cluster.bins) <= max_cluster_size:
            capped.append(cluster)
            continue
        logger.debug(
            f"Splitting cluster of {len(cluster.bins)} bins into chunks of "
            f"at most {max_cluster_size}"
        )
        for start in range(0, len(cluster.bins), max_cluster_size):
            capped.append(
                Cluster(
                    bins=cluster.bins[start:start + max_cluster_size],
                    density=cluster.density,
                )
            )
    return capped
