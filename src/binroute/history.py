"""
Optimization history and the run-over-run statistics derived from it.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import pandas as pd

from binroute.core_types import Bin, OptimizationRecord, Route, Truck


class OptimizationHistory:
    """Append-only log of optimization records."""

    def __init__(self):
        self._records: List[OptimizationRecord] = []

    def append(self, record: OptimizationRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[OptimizationRecord]:
        return iter(list(self._records))

    def latest(self) -> Optional[OptimizationRecord]:
        return self._records[-1] if self._records else None

    def clear(self) -> None:
        self._records = []

    def to_dataframe(self) -> pd.DataFrame:
        if not self._records:
            return pd.DataFrame(
                columns=[
                    "timestamp",
                    "totalDistance",
                    "totalWaste",
                    "routeCount",
                    "highPriorityBins",
                ]
            )
        return pd.DataFrame([r.to_dict() for r in self._records])


@dataclass
class RouteComparison:
    """Totals of the current and previous route sets."""

    current_distance: float
    previous_distance: float
    distance_diff: float
    distance_percent: float
    current_waste: float
    previous_waste: float
    waste_diff: float
    waste_percent: float


def compare_routes(current: List[Route], previous: List[Route]) -> RouteComparison:
    """Difference in total distance and waste between two route sets.

    Percentages are relative to the previous totals and are 0 when those are 0.
    """
    current_distance = sum(r.total_distance for r in current)
    previous_distance = sum(r.total_distance for r in previous)
    distance_diff = current_distance - previous_distance
    current_waste = sum(r.total_waste_collected for r in current)
    previous_waste = sum(r.total_waste_collected for r in previous)
    waste_diff = current_waste - previous_waste

    return RouteComparison(
        current_distance=current_distance,
        previous_distance=previous_distance,
        distance_diff=distance_diff,
        distance_percent=(
            distance_diff / previous_distance * 100 if previous_distance != 0 else 0.0
        ),
        current_waste=current_waste,
        previous_waste=previous_waste,
        waste_diff=waste_diff,
        waste_percent=(
            waste_diff / previous_waste * 100 if previous_waste != 0 else 0.0
        ),
    )


MEDIUM_FILL_LEVEL = 50.0


@dataclass
class DashboardSummary:
    bin_count: int
    truck_count: int
    high_priority_count: int  # fill > threshold
    medium_priority_count: int  # MEDIUM_FILL_LEVEL < fill <= threshold
    low_priority_count: int  # fill <= MEDIUM_FILL_LEVEL
    predicted_high_priority_count: int
    average_fill_level: float
    total_truck_capacity: float
    route_count: int
    total_distance: float
    total_waste: float
    efficiency: float  # kg/km
    capacity_utilization: float  # percent of total truck capacity


@dataclass
class RouteEfficiency:
    truck_id: int
    distance: float
    waste: float
    efficiency: float  # kg/km, 0 for a zero-length route
    bin_count: int


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def route_efficiency(routes: List[Route]) -> List[RouteEfficiency]:
    """Waste per kilometre and bin count of every route."""
    return [
        RouteEfficiency(
            truck_id=r.truck_id,
            distance=r.total_distance,
            waste=r.total_waste_collected,
            efficiency=_ratio(r.total_waste_collected, r.total_distance),
            bin_count=len(r.bin_sequence),
        )
        for r in routes
    ]


def summarize(
    bins: List[Bin],
    trucks: List[Truck],
    routes: List[Route],
    threshold: float,
    predictions: Optional[Dict[int, float]] = None,
) -> DashboardSummary:
    """Headline numbers for the current state.

    Fill bands split at ``MEDIUM_FILL_LEVEL`` and ``threshold``; predicted
    high-priority bins are counted from ``predictions`` when given.
    """
    total_distance = sum(r.total_distance for r in routes)
    total_waste = sum(r.total_waste_collected for r in routes)
    total_capacity = sum(t.capacity for t in trucks)
    predicted = predictions or {}

    return DashboardSummary(
        bin_count=len(bins),
        truck_count=len(trucks),
        high_priority_count=sum(1 for b in bins if b.fill_level > threshold),
        medium_priority_count=sum(
            1 for b in bins if MEDIUM_FILL_LEVEL < b.fill_level <= threshold
        ),
        low_priority_count=sum(1 for b in bins if b.fill_level <= MEDIUM_FILL_LEVEL),
        predicted_high_priority_count=sum(
            1 for level in predicted.values() if level > threshold
        ),
        average_fill_level=(
            sum(b.fill_level for b in bins) / len(bins) if bins else 0.0
        ),
        total_truck_capacity=total_capacity,
        route_count=len(routes),
        total_distance=total_distance,
        total_waste=total_waste,
        efficiency=_ratio(total_waste, total_distance),
        capacity_utilization=_ratio(total_waste, total_capacity) * 100,
    )
