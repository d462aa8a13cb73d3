"""
API facade for binroute - the pipeline entry points for programmatic usage.

``recompute`` is the stateless step an external scheduler calls after every
change to the bin set: graph, spanning tree, clusters, exact sequencing and
fleet allocation, followed by a history record. ``optimize`` wraps it with
file loading and result export.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from binroute.allocation import generate_truck_routes
from binroute.clustering import cap_cluster_size, find_bin_clusters
from binroute.config import BinrouteParams, default_params, load_binroute_params
from binroute.core_types import (
    Bin,
    Cluster,
    Edge,
    Graph,
    OptimizationRecord,
    Route,
    Truck,
)
from binroute.graph import create_graph, run_kruskal
from binroute.optimization import optimize_sequence
from binroute.utils.data_processing import load_bins, load_trucks
from binroute.utils.logging import BinrouteLogger, log_warning
from binroute.utils.save_results import save_routes
from binroute.utils.time_measurement import TimeRecorder

logger = BinrouteLogger.get_logger("binroute.api")

DEFAULT_HIGH_PRIORITY_THRESHOLD = 80.0
DEFAULT_MAX_CLUSTER_SIZE = 12


@dataclass
class PipelineResult:
    """Everything one optimization pass produced."""

    routes: List[Route]
    record: OptimizationRecord
    graph: Graph = field(default_factory=Graph)
    mst: List[Edge] = field(default_factory=list)
    clusters: List[Cluster] = field(default_factory=list)
    sequences: List[List[int]] = field(default_factory=list)
    high_priority_ids: List[int] = field(default_factory=list)


def high_priority_bins(bins: List[Bin], threshold: float) -> List[Bin]:
    """Bins strictly above ``threshold``, in input order."""
    return [b for b in bins if b.fill_level > threshold]


def build_record(routes: List[Route], high_priority_count: int) -> OptimizationRecord:
    return OptimizationRecord(
        timestamp=datetime.now(),
        total_distance=sum(r.total_distance for r in routes),
        total_waste=sum(r.total_waste_collected for r in routes),
        route_count=len(routes),
        high_priority_bins=high_priority_count,
    )


def run_pipeline(
    bins: List[Bin],
    trucks: List[Truck],
    threshold: float = DEFAULT_HIGH_PRIORITY_THRESHOLD,
    max_cluster_size: Optional[int] = DEFAULT_MAX_CLUSTER_SIZE,
    time_recorder: Optional[TimeRecorder] = None,
) -> PipelineResult:
    """
    Run the full routing pipeline once.

    Args:
        bins: Current bin set. Read only.
        trucks: Available fleet. Read only.
        threshold: Fill level above which a bin is collected first
        max_cluster_size: Largest cluster handed to the exact sequencer;
            None disables the cap
        time_recorder: Optional recorder receiving one span per stage

    Returns:
        PipelineResult with routes, the history record and intermediates
    """
    recorder = time_recorder or TimeRecorder()
    priority = high_priority_bins(bins, threshold)
    priority_ids = [b.bin_id for b in priority]

    if not bins or not trucks:
        log_warning(
            f"Cannot calculate routes: {len(bins)} bins and {len(trucks)} trucks"
        )
        return PipelineResult(
            routes=[],
            record=build_record([], len(priority)),
            high_priority_ids=priority_ids,
        )

    with recorder.measure("graph"):
        graph = create_graph(bins)
    with recorder.measure("mst"):
        mst = run_kruskal(graph)
    with recorder.measure("clustering"):
        clusters = cap_cluster_size(find_bin_clusters(bins, mst), max_cluster_size)
    with recorder.measure("sequencing"):
        sequences = [optimize_sequence(c.bins, graph) for c in clusters]
    with recorder.measure("allocation"):
        routes = generate_truck_routes(sequences, trucks, priority_ids)

    record = build_record(routes, len(priority))
    logger.info(
        f"Generated {len(routes)} routes covering {len(bins)} bins "
        f"({len(priority_ids)} high priority), total distance "
        f"{record.total_distance:.2f} km"
    )
    return PipelineResult(
        routes=routes,
        record=record,
        graph=graph,
        mst=mst,
        clusters=clusters,
        sequences=sequences,
        high_priority_ids=priority_ids,
    )


def recompute(
    bins: List[Bin],
    trucks: List[Truck],
    threshold: float = DEFAULT_HIGH_PRIORITY_THRESHOLD,
    max_cluster_size: Optional[int] = DEFAULT_MAX_CLUSTER_SIZE,
) -> Tuple[List[Route], OptimizationRecord]:
    """Stateless pipeline step: routes plus the record to append to history."""
    result = run_pipeline(bins, trucks, threshold, max_cluster_size)
    return result.routes, result.record


def optimize(
    bins: str | Path | pd.DataFrame | List[Bin],
    trucks: str | Path | pd.DataFrame | List[Truck],
    config: str | Path | BinrouteParams | None = None,
    threshold: Optional[float] = None,
    output_dir: Optional[str | Path] = None,
    format: Optional[str] = None,
    save: bool = False,
) -> PipelineResult:
    """
    Optimize collection routes for the given bins and fleet.

    Args:
        bins: CSV/JSON path, DataFrame or list of Bin
        trucks: CSV/JSON path, DataFrame or list of Truck
        config: YAML path, BinrouteParams, or None for the packaged defaults
        threshold: Overrides the configured high-priority threshold
        output_dir: Overrides the configured results directory
        format: Overrides the configured export format ("json" or "csv")
        save: Write the routes to ``results_dir`` when True

    Raises:
        FileNotFoundError: If an input or config file doesn't exist
        ValueError: If inputs are malformed

    Example:
        >>> result = optimize("bins.csv", "trucks.csv", threshold=75)
        >>> for route in result.routes:
        ...     print(route.truck_id, route.bin_sequence)
    """
    if config is None:
        params = default_params()
    elif isinstance(config, BinrouteParams):
        params = config
    else:
        params = load_binroute_params(config)

    bin_list = _coerce_bins(bins)
    truck_list = _coerce_trucks(trucks)
    effective_threshold = (
        params.routing.high_priority_threshold if threshold is None else threshold
    )

    result = run_pipeline(
        bin_list,
        truck_list,
        threshold=effective_threshold,
        max_cluster_size=params.routing.max_cluster_size,
    )

    if save:
        save_routes(
            result.routes,
            results_dir=Path(output_dir) if output_dir else params.io.results_dir,
            format=format or params.io.format,
        )
    return result


def _coerce_bins(bins) -> List[Bin]:
    if isinstance(bins, pd.DataFrame):
        return Bin.from_dataframe(bins)
    if isinstance(bins, (str, Path)):
        return load_bins(bins)
    return list(bins)


def _coerce_trucks(trucks) -> List[Truck]:
    if isinstance(trucks, pd.DataFrame):
        return Truck.from_dataframe(trucks)
    if isinstance(trucks, (str, Path)):
        return load_trucks(trucks)
    return list(trucks)
