"""
sequence.py

Exact shortest visiting order inside a cluster.

The search is the Held-Karp subset dynamic program adapted to open paths: any
bin may start the path and there is no return leg. Time is O(n^2 2^n) and
memory O(n 2^n), so callers bound cluster size before calling
``optimize_sequence`` (see ``binroute.clustering.cap_cluster_size``).
"""

from typing import List, Sequence

import numpy as np

from binroute.core_types import Graph
from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)


def build_distance_matrix(bin_ids: Sequence[int], graph: Graph) -> np.ndarray:
    """Pairwise distances for ``bin_ids`` looked up from the graph's edges.

    Pairs missing from the graph are treated as unreachable (infinite).
    """
    n = len(bin_ids)
    dist = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            try:
                dist[i, j] = graph.weight(bin_ids[i], bin_ids[j])
            except KeyError:
                dist[i, j] = np.inf
    return dist


def optimize_sequence(bin_ids: List[int], graph: Graph) -> List[int]:
    """
    Return ``bin_ids`` reordered into a minimum-length Hamiltonian path.

    Args:
        bin_ids: Bins of one cluster
        graph: Complete graph containing every pair of ``bin_ids``

    Returns:
        The same ids in optimal visiting order. Lists of two or fewer bins
        are returned unchanged.
    """
    if len(bin_ids) <= 2:
        return list(bin_ids)

    n = len(bin_ids)
    dist = build_distance_matrix(bin_ids, graph)
    n_masks = 1 << n
    full_mask = n_masks - 1

    # dp[mask, i]: shortest path over the bins in mask, ending at i
    dp = np.full((n_masks, n), np.inf, dtype=np.float64)
    parent = np.full((n_masks, n), -1, dtype=np.int64)
    for i in range(n):
        dp[1 << i, i] = 0.0

    # membership[mask, j] is True when bit j is set in mask
    membership = (
        (np.arange(n_masks)[:, None] >> np.arange(n)[None, :]) & 1
    ).astype(bool)

    for mask in range(1, n_masks):
        for i in range(n):
            bit = 1 << i
            if not mask & bit:
                continue
            prev_mask = mask ^ bit
            if prev_mask == 0:
                continue

            candidates = np.where(
                membership[prev_mask], dp[prev_mask] + dist[:, i], np.inf
            )
            # argmin picks the lowest index among equal minima
            j = int(np.argmin(candidates))
            if candidates[j] < dp[mask, i]:
                dp[mask, i] = candidates[j]
                parent[mask, i] = j

    end = int(np.argmin(dp[full_mask]))

    path: List[int] = []
    mask = full_mask
    current = end
    while len(path) < n:
        path.insert(0, bin_ids[current])
        previous = int(parent[mask, current])
        if previous == -1:
            break
        mask &= ~(1 << current)
        current = previous

    logger.debug(
        f"Sequenced {n} bins, path length {dp[full_mask, end]:.3f} km"
    )
    return path


def path_length(sequence: Sequence[int], graph: Graph) -> float:
    """Total length of visiting ``sequence`` in order (open path)."""
    return float(
        sum(graph.weight(a, b) for a, b in zip(sequence, sequence[1:]))
    )
