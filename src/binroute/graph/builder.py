"""
builder.py

Great-circle distances and the complete bin graph used by the MST stage.
"""

from typing import List, Tuple

from haversine import Unit, haversine

from binroute.core_types import Bin, Edge, Graph
from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)

EARTH_RADIUS_KM = 6371.0


def calculate_distance(
    point1: Tuple[float, float], point2: Tuple[float, float]
) -> float:
    """Haversine distance in km between two (latitude, longitude) points.

    The ``haversine`` package returns the central angle when asked for
    radians, which is scaled here by a 6371 km Earth radius. Coordinates are
    not range-checked, so NaN inputs yield NaN.
    """
    angle = haversine(point1, point2, unit=Unit.RADIANS, check=False)
    return EARTH_RADIUS_KM * angle


def create_graph(bins: List[Bin]) -> Graph:
    """Build the complete graph over ``bins``.

    Edges are enumerated pairwise as (bins[i], bins[j]) with i < j, which
    fixes the tie-break order used later by Kruskal's algorithm.
    """
    nodes = [b.bin_id for b in bins]
    edges: List[Edge] = []

    for i in range(len(bins)):
        for j in range(i + 1, len(bins)):
            edges.append(
                Edge(
                    source=bins[i].bin_id,
                    target=bins[j].bin_id,
                    weight=calculate_distance(bins[i].location, bins[j].location),
                )
            )

    logger.debug(f"Built graph with {len(nodes)} nodes and {len(edges)} edges")
    return Graph(nodes=nodes, edges=edges)
