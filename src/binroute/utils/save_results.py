"""
save_results.py – the single exit point for anything written to disk.

Routes and full state snapshots are converted to JSON or CSV here so the rest
of the package stays side-effect free.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

import pandas as pd

from binroute.core_types import Bin, Route
from binroute.history import route_efficiency
from binroute.utils.logging import BinrouteLogger

if TYPE_CHECKING:
    from binroute.fleet_state import FleetState

logger = BinrouteLogger.get_logger(__name__)


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def save_routes(
    routes: List[Route],
    results_dir: Path,
    format: str = "json",
    filename: Optional[str | Path] = None,
) -> Path:
    """Write ``routes`` as JSON or CSV and return the file path."""
    if format not in {"json", "csv"}:
        raise ValueError(f"Unsupported output format: {format}")

    if filename is None:
        output_path = Path(results_dir) / f"routes_{_timestamp()}.{format}"
    else:
        output_path = Path(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == "csv":
        df = Route.to_dataframe(routes)
        df["Bin_Sequence"] = df["Bin_Sequence"].apply(
            lambda seq: " ".join(str(b) for b in seq)
        )
        df.to_csv(output_path, index=False)
    else:
        with output_path.open("w") as f:
            json.dump({"routes": [r.to_dict() for r in routes]}, f, indent=2)

    logger.info(f"Routes saved to {output_path}")
    return output_path


BIN_TABLE_COLUMNS = [
    "Bin ID",
    "Latitude",
    "Longitude",
    "Fill Level (%)",
    "Capacity (kg)",
]
ROUTE_TABLE_COLUMNS = [
    "Route ID",
    "Truck ID",
    "Total Distance (km)",
    "Waste Collected (kg)",
    "Bin Count",
    "Efficiency (kg/km)",
    "Bin Sequence",
]


def bins_table(bins: List[Bin]) -> pd.DataFrame:
    rows = [
        [b.bin_id, b.latitude, b.longitude, b.fill_level, b.capacity] for b in bins
    ]
    return pd.DataFrame(rows, columns=BIN_TABLE_COLUMNS)


def routes_table(routes: List[Route]) -> pd.DataFrame:
    """One row per route, numbered from 1, with figures rounded to 2 places."""
    rows = [
        [
            i + 1,
            e.truck_id,
            round(e.distance, 2),
            round(e.waste, 2),
            e.bin_count,
            round(e.efficiency, 2),
            " ".join(str(b) for b in r.bin_sequence),
        ]
        for i, (r, e) in enumerate(zip(routes, route_efficiency(routes)))
    ]
    return pd.DataFrame(rows, columns=ROUTE_TABLE_COLUMNS)


def export_tables(
    bins: List[Bin], routes: List[Route], results_dir: Path
) -> Tuple[Path, Path]:
    """Write the bin and route tables as CSV and return both paths."""
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    stamp = _timestamp()
    bins_path = results_dir / f"bins_{stamp}.csv"
    routes_path = results_dir / f"routes_{stamp}.csv"
    bins_table(bins).to_csv(bins_path, index=False)
    routes_table(routes).to_csv(routes_path, index=False)
    logger.info(f"Tables saved to {bins_path} and {routes_path}")
    return bins_path, routes_path


def build_snapshot(state: "FleetState") -> dict:
    """JSON-compatible dump of bins, trucks, routes, history and settings."""
    return {
        "bins": [b.to_export_dict() for b in state.bins],
        "trucks": [t.to_export_dict() for t in state.trucks],
        "routes": [r.to_export_dict() for r in state.routes],
        "optimizationHistory": [r.to_dict() for r in state.history],
        "predictions": {str(k): v for k, v in state.predictions.items()},
        "settings": {
            **state.params.settings,
            "highPriorityThreshold": state.params.routing.high_priority_threshold,
        },
    }


def export_state(state: "FleetState", path: Optional[str | Path] = None) -> Path:
    """
    Export the current state.

    JSON writes the full snapshot. CSV (``state.params.io.format``) writes
    the bin and route tables and returns the route table path, or only the
    route table when ``path`` is given.
    """
    fmt = state.params.io.format
    if fmt == "csv":
        if path is not None:
            output_path = Path(path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            routes_table(state.routes).to_csv(output_path, index=False)
            logger.info(f"Routes saved to {output_path}")
            return output_path
        _, routes_path = export_tables(
            state.bins, state.routes, state.params.io.results_dir
        )
        return routes_path

    if path is None:
        output_path = (
            state.params.io.results_dir
            / f"smart_trash_routing_data_{_timestamp()}.json"
        )
    else:
        output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w") as f:
        json.dump(build_snapshot(state), f, indent=2)

    logger.info(f"State exported to {output_path}")
    return output_path

