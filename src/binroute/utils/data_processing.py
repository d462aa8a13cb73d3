"""Loading bin and truck records from CSV or JSON files."""

import json
from pathlib import Path
from typing import Any, List

import pandas as pd

from binroute.core_types import Bin, Truck
from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)

BIN_COLUMNS = ["Bin_ID", "Latitude", "Longitude", "Fill_Level"]
TRUCK_COLUMNS = ["Truck_ID", "Capacity"]


def _read_json_records(path: Path, key: str) -> List[dict]:
    """Records from a JSON list, or from ``key`` of an exported snapshot."""
    try:
        with path.open() as f:
            data: Any = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Error parsing JSON file {path}: {exc}") from exc

    if isinstance(data, dict):
        if key not in data:
            raise ValueError(f"JSON file {path} has no '{key}' entry")
        data = data[key]
    if not isinstance(data, list):
        raise ValueError(f"JSON file {path} must contain a list of {key}")
    return data


def _read_csv(path: Path, required: List[str]) -> pd.DataFrame:
    df = pd.read_csv(path)
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(
            f"Missing required columns in {path}: {', '.join(missing)}"
        )
    return df


def load_bins(path: str | Path) -> List[Bin]:
    """
    Load bins from a CSV (Bin_ID, Latitude, Longitude, Fill_Level[, Capacity])
    or JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns or keys are missing
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Bin file not found: {file_path}")

    if file_path.suffix.lower() == ".json":
        try:
            bins = [Bin.from_dict(r) for r in _read_json_records(file_path, "bins")]
        except KeyError as exc:
            raise ValueError(f"Bin record in {file_path} is missing {exc}") from exc
    else:
        df = _read_csv(file_path, BIN_COLUMNS)
        if "Capacity" not in df.columns:
            df["Capacity"] = 100.0
        bins = Bin.from_dataframe(df)

    logger.debug(f"Loaded {len(bins)} bins from {file_path}")
    return bins


def load_trucks(path: str | Path) -> List[Truck]:
    """
    Load trucks from a CSV (Truck_ID, Capacity[, Current_Load]) or JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns or keys are missing
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Truck file not found: {file_path}")

    if file_path.suffix.lower() == ".json":
        try:
            trucks = [
                Truck.from_dict(r) for r in _read_json_records(file_path, "trucks")
            ]
        except KeyError as exc:
            raise ValueError(f"Truck record in {file_path} is missing {exc}") from exc
    else:
        df = _read_csv(file_path, TRUCK_COLUMNS)
        if "Current_Load" not in df.columns:
            df["Current_Load"] = 0.0
        trucks = Truck.from_dataframe(df)

    logger.debug(f"Loaded {len(trucks)} trucks from {file_path}")
    return trucks
