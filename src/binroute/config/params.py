from __future__ import annotations

"""Parameter container dataclasses for binroute.

Routing, simulation and I/O options each live in their own immutable
dataclass. A small mutable ``RuntimeParams`` bucket captures flags that are
never serialised to YAML but can be toggled programmatically.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from binroute.utils.logging import LogLevel

__all__ = [
    "RoutingParams",
    "SimulationParams",
    "IOParams",
    "RuntimeParams",
    "BinrouteParams",
]


# ---------------------------------------------------------------------------
# Routing parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RoutingParams:
    """Options consumed by the optimization pipeline."""

    high_priority_threshold: float = 80.0
    # Exact sequencing is exponential; clusters above this size are chunked.
    # None or 0 disables chunking.
    max_cluster_size: Optional[int] = 12
    tree_order: int = 5

    def __post_init__(self):  # type: ignore[override]
        if not 0 <= self.high_priority_threshold <= 100:
            raise ValueError(
                "RoutingParams.high_priority_threshold must be between 0 and 100."
            )
        if self.max_cluster_size is not None and self.max_cluster_size < 0:
            raise ValueError(
                "RoutingParams.max_cluster_size must be non-negative or None (0 disables the cap)."
            )
        if self.tree_order < 2:
            raise ValueError("RoutingParams.tree_order must be at least 2.")


# ---------------------------------------------------------------------------
# Simulation parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SimulationParams:
    """Fill-level tick settings for the simulation scheduler."""

    fill_increase_min: int = 5
    fill_increase_max: int = 15  # exclusive
    tick_seconds: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self):  # type: ignore[override]
        if self.fill_increase_min < 0:
            raise ValueError("SimulationParams.fill_increase_min must be non-negative.")
        if self.fill_increase_max <= self.fill_increase_min:
            raise ValueError(
                "SimulationParams.fill_increase_max must be greater than fill_increase_min."
            )
        if self.tick_seconds < 0:
            raise ValueError("SimulationParams.tick_seconds must be non-negative.")


# ---------------------------------------------------------------------------
# IO parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IOParams:
    """Settings for result export."""

    results_dir: Path = Path("results")
    format: str = "json"  # One of: json, csv

    def __post_init__(self):  # type: ignore[override]
        if self.format not in {"json", "csv"}:
            raise ValueError("IOParams.format must be 'json' or 'csv'.")

        # Ensure results_dir is absolute
        if not Path(self.results_dir).is_absolute():
            object.__setattr__(
                self, "results_dir", (Path.cwd() / self.results_dir).resolve()
            )


# ---------------------------------------------------------------------------
# Runtime parameters – toggles that are never serialized to yaml
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RuntimeParams:
    """Verbosity flags set from the command line."""

    verbose: bool = False
    debug: bool = False
    quiet: bool = False

    def log_level(self) -> Optional[LogLevel]:
        """Requested level, debug winning over verbose over quiet.

        None leaves the choice to ``BINROUTE_LOG_LEVEL``.
        """
        if self.debug:
            return LogLevel.DEBUG
        if self.verbose:
            return LogLevel.VERBOSE
        if self.quiet:
            return LogLevel.QUIET
        return None


# ---------------------------------------------------------------------------
# Aggregate container
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class BinrouteParams:
    """Aggregate parameter object passed throughout the codebase."""

    routing: RoutingParams = field(default_factory=RoutingParams)
    simulation: SimulationParams = field(default_factory=SimulationParams)
    io: IOParams = field(default_factory=IOParams)
    runtime: RuntimeParams = field(default_factory=RuntimeParams)
    # Dashboard settings (algorithm label, weights, traffic toggles). Carried
    # through to exports only; the pipeline does not read them.
    settings: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """YAML-compatible view, runtime flags excluded."""
        return {
            "routing": {
                "high_priority_threshold": self.routing.high_priority_threshold,
                "max_cluster_size": self.routing.max_cluster_size,
                "tree_order": self.routing.tree_order,
            },
            "simulation": {
                "fill_increase_min": self.simulation.fill_increase_min,
                "fill_increase_max": self.simulation.fill_increase_max,
                "tick_seconds": self.simulation.tick_seconds,
                "seed": self.simulation.seed,
            },
            "results_dir": str(self.io.results_dir),
            "format": self.io.format,
            "settings": dict(self.settings),
        }
