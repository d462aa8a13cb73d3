"""
In-memory application state: the bin and truck collections, the latest
routes, predictions and the optimization history.

Every change to the bin collection rebuilds the bin index from scratch.
"""

import dataclasses
from typing import Dict, List, Optional

from binroute.api import PipelineResult, run_pipeline
from binroute.config import BinrouteParams
from binroute.core_types import Bin, Edge, Route, Truck
from binroute.history import OptimizationHistory
from binroute.index import BPlusTree
from binroute.prediction import predict_fill_levels
from binroute.utils.logging import BinrouteLogger, log_detail, log_warning
from binroute.utils.time_measurement import TimeRecorder

logger = BinrouteLogger.get_logger(__name__)


class FleetState:
    """Mutable state owned by one caller (CLI session or scheduler)."""

    def __init__(self, params: Optional[BinrouteParams] = None):
        self.params = params or BinrouteParams()
        self.bins: List[Bin] = []
        self.trucks: List[Truck] = []
        self.routes: List[Route] = []
        self.previous_routes: List[Route] = []
        self.mst: List[Edge] = []
        self.predictions: Dict[int, float] = {}
        self.history = OptimizationHistory()
        self.index: BPlusTree[Bin] = BPlusTree(self.params.routing.tree_order)

    @property
    def threshold(self) -> float:
        return self.params.routing.high_priority_threshold

    def set_bins(self, bins: List[Bin]) -> None:
        """Replace the bin collection and rebuild the index."""
        self.bins = list(bins)
        self.index.rebuild(self.bins)

    def set_trucks(self, trucks: List[Truck]) -> None:
        self.trucks = list(trucks)

    def add_bin(self, bin_: Bin) -> Bin:
        """Append a copy of ``bin_`` with an id one above the current maximum."""
        new_bin = dataclasses.replace(
            bin_, bin_id=max((b.bin_id for b in self.bins), default=0) + 1
        )
        self.set_bins(self.bins + [new_bin])
        logger.info(
            f"Bin #{new_bin.bin_id} added at "
            f"[{new_bin.latitude:.4f}, {new_bin.longitude:.4f}]"
        )
        return new_bin

    def add_truck(self, truck: Truck) -> Truck:
        new_truck = dataclasses.replace(
            truck, truck_id=max((t.truck_id for t in self.trucks), default=0) + 1
        )
        self.trucks = self.trucks + [new_truck]
        logger.info(
            f"Truck #{new_truck.truck_id} with capacity {new_truck.capacity}kg added"
        )
        return new_truck

    def lookup_bin(self, bin_id: int) -> Optional[Bin]:
        return self.index.search(bin_id)

    def update_predictions(self) -> Dict[int, float]:
        self.predictions = predict_fill_levels(self.bins)
        return self.predictions

    def calculate_routes(self) -> Optional[PipelineResult]:
        """Recompute routes and append a history record.

        Returns None, leaving routes and history untouched, when there are no
        bins or no trucks.
        """
        if not self.bins or not self.trucks:
            log_warning("Cannot calculate routes: add bins and trucks first")
            return None

        self.previous_routes = self.routes
        recorder = TimeRecorder()
        result = run_pipeline(
            self.bins,
            self.trucks,
            threshold=self.threshold,
            max_cluster_size=self.params.routing.max_cluster_size,
            time_recorder=recorder,
        )
        if self.params.runtime.verbose:
            for m in recorder.measurements:
                log_detail(f"{m.span_name}: {m.wall_time * 1000:.1f} ms")
        self.routes = result.routes
        self.mst = result.mst
        self.history.append(result.record)
        return result

    def reset(self) -> None:
        """Drop all bins, trucks, routes and history."""
        self.bins = []
        self.trucks = []
        self.routes = []
        self.previous_routes = []
        self.mst = []
        self.predictions = {}
        self.history.clear()
        self.index.clear()
