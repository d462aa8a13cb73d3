from __future__ import annotations

"""Utilities for loading binroute configuration YAML files into the
parameter dataclass hierarchy.

Expected layout::

    routing:
      high_priority_threshold: 80
      max_cluster_size: 12
      tree_order: 5
    simulation:
      fill_increase_min: 5
      fill_increase_max: 15
      tick_seconds: 1.0
      seed: null
    results_dir: results
    format: json
    settings: {}
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from binroute.utils.logging import BinrouteLogger

from .params import BinrouteParams, IOParams, RoutingParams, SimulationParams

logger = BinrouteLogger.get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"


# ---------------------------------------------------------------------------
# Helper parsing routines
# ---------------------------------------------------------------------------


def _parse_section(raw: Any, cls: type, section: str):
    """Build ``cls`` from a YAML mapping, rejecting unknown keys."""
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ValueError(f"YAML section '{section}' must be a mapping.")
    try:
        return cls(**raw)
    except TypeError as exc:
        raise ValueError(f"Invalid keys in YAML section '{section}': {exc}") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_yaml(path: str | Path) -> BinrouteParams:
    """Load a YAML configuration file into ``BinrouteParams``.

    Every section is optional; omitted values take their dataclass defaults.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(cfg_path)

    try:
        with cfg_path.open() as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ValueError(
            f"Error parsing YAML configuration {cfg_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"YAML configuration {cfg_path} must be a mapping.")

    routing = _parse_section(data.pop("routing", None), RoutingParams, "routing")
    simulation = _parse_section(
        data.pop("simulation", None), SimulationParams, "simulation"
    )

    io_params = IOParams(
        results_dir=Path(data.pop("results_dir", "results")),
        format=data.pop("format", "json"),
    )

    settings = data.pop("settings", {}) or {}
    if not isinstance(settings, dict):
        raise ValueError("YAML key 'settings' must be a mapping.")

    # Any remaining unknown keys will raise an error to avoid silent mistakes.
    if data:
        unknown_keys = ", ".join(sorted(data.keys()))
        raise ValueError(
            f"Unknown top-level configuration keys in YAML: {unknown_keys}"
        )

    logger.debug(
        "Loaded configuration – routing: %s simulation: %s io: %s",
        routing,
        simulation,
        io_params,
    )

    return BinrouteParams(
        routing=routing, simulation=simulation, io=io_params, settings=settings
    )


def save_yaml(params: BinrouteParams, path: str | Path) -> None:
    """Write ``params`` back out in the layout ``load_yaml`` reads."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w") as f:
        yaml.safe_dump(params.to_dict(), f, sort_keys=False)


def default_params() -> BinrouteParams:
    """Packaged defaults, or the dataclass defaults if the file is missing."""
    if DEFAULT_CONFIG_PATH.exists():
        return load_yaml(DEFAULT_CONFIG_PATH)
    return BinrouteParams()
