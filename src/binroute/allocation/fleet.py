"""
fleet.py

Split the optimized cluster sequences across the available trucks.

High-priority bins are moved to the front of the combined sequence and the
result is cut into equal-count contiguous slices, one per truck in fleet
order. Route totals use fixed per-bin estimates rather than the geometric
path length or each bin's actual load.
"""

import math
from typing import List, Sequence

from binroute.core_types import Route, Truck
from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)

WASTE_PER_BIN_KG = 1.0
DISTANCE_PER_BIN_KM = 0.5


def flatten_with_priority(
    optimized_clusters: Sequence[Sequence[int]], high_priority_ids: Sequence[int]
) -> List[int]:
    """Concatenate cluster sequences and pull high-priority ids to the front."""
    priority = list(high_priority_ids)
    priority_set = set(priority)
    remaining = [
        bin_id
        for sequence in optimized_clusters
        for bin_id in sequence
        if bin_id not in priority_set
    ]
    return priority + remaining


def generate_truck_routes(
    optimized_clusters: Sequence[Sequence[int]],
    trucks: List[Truck],
    high_priority_ids: Sequence[int],
) -> List[Route]:
    """
    Assign the flattened pickup order to trucks.

    Args:
        optimized_clusters: Per-cluster visiting orders, in cluster-density order
        trucks: Fleet, in assignment order. Capacity is not used to bound slices.
        high_priority_ids: Ids of bins above the priority threshold, in the
            order they should be collected

    Returns:
        One Route per truck that receives at least one bin. Empty when there
        are no bins or no trucks.
    """
    all_bins = flatten_with_priority(optimized_clusters, high_priority_ids)
    if not all_bins or not trucks:
        return []

    bins_per_truck = math.ceil(len(all_bins) / len(trucks))

    routes: List[Route] = []
    for index, truck in enumerate(trucks):
        start = index * bins_per_truck
        if start >= len(all_bins):
            continue
        truck_bins = all_bins[start:start + bins_per_truck]
        routes.append(
            Route(
                truck_id=truck.truck_id,
                bin_sequence=truck_bins,
                total_distance=len(truck_bins) * DISTANCE_PER_BIN_KM,
                total_waste_collected=len(truck_bins) * WASTE_PER_BIN_KG,
            )
        )

    logger.debug(
        f"Allocated {len(all_bins)} bins to {len(routes)} of {len(trucks)} trucks "
        f"({bins_per_truck} per truck)"
    )
    return routes
