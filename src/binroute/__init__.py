"""binroute: waste collection route planning."""

__version__ = "0.1.0"

# Main API
from .api import PipelineResult, optimize, recompute, run_pipeline

# Stage functions
from .allocation import generate_truck_routes
from .clustering import cap_cluster_size, find_bin_clusters
from .graph import DisjointSet, calculate_distance, create_graph, run_kruskal
from .optimization import optimize_sequence
from .prediction import predict_fill_levels

# Core types
from .config import BinrouteParams, load_binroute_params
from .core_types import (
    Bin,
    Cluster,
    Edge,
    Graph,
    OptimizationRecord,
    Route,
    Truck,
)

# Application layer
from .fleet_state import FleetState
from .history import OptimizationHistory, compare_routes, summarize
from .index import BPlusTree
from .simulation import SimulationScheduler, simulate_tick

__all__ = [
    # Version
    "__version__",
    # Main API
    "optimize",
    "recompute",
    "run_pipeline",
    "PipelineResult",
    # Stage functions
    "calculate_distance",
    "create_graph",
    "run_kruskal",
    "find_bin_clusters",
    "cap_cluster_size",
    "optimize_sequence",
    "generate_truck_routes",
    "predict_fill_levels",
    # Types
    "BinrouteParams",
    "load_binroute_params",
    "Bin",
    "Truck",
    "Edge",
    "Graph",
    "Cluster",
    "Route",
    "OptimizationRecord",
    "DisjointSet",
    "BPlusTree",
    # Application layer
    "FleetState",
    "OptimizationHistory",
    "compare_routes",
    "summarize",
    "SimulationScheduler",
    "simulate_tick",
]
