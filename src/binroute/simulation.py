"""
simulation.py

Fill-level simulation driven by an explicit scheduler.

``simulate_tick`` is a pure step: pick one bin at random and raise its fill
level. ``SimulationScheduler`` owns the loop, refreshes predictions after
every tick and recomputes routes whenever the touched bin crosses the
high-priority threshold. The routing pipeline itself never owns a timer.
"""

import dataclasses
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from binroute.config import SimulationParams
from binroute.core_types import Bin
from binroute.fleet_state import FleetState
from binroute.utils.logging import BinrouteLogger, log_warning

logger = BinrouteLogger.get_logger(__name__)


@dataclass
class TickResult:
    tick: int
    bin_id: int
    fill_level: float
    rerouted: bool


def simulate_tick(
    bins: List[Bin], rng: np.random.Generator, params: SimulationParams
) -> Tuple[List[Bin], Bin]:
    """
    Raise one random bin's fill level.

    Args:
        bins: Current bins; not mutated
        rng: Random source
        params: Increase range, ``[fill_increase_min, fill_increase_max)``

    Returns:
        (new bin list, the updated bin)

    Raises:
        ValueError: If ``bins`` is empty
    """
    if not bins:
        raise ValueError("Cannot simulate a tick without bins")

    index = int(rng.integers(len(bins)))
    increase = int(rng.integers(params.fill_increase_min, params.fill_increase_max))
    target = bins[index]
    updated = dataclasses.replace(
        target, fill_level=min(100.0, target.fill_level + increase)
    )

    new_bins = list(bins)
    new_bins[index] = updated
    return new_bins, updated


class SimulationScheduler:
    """Drives ``simulate_tick`` against a ``FleetState``."""

    def __init__(self, state: FleetState, params: Optional[SimulationParams] = None):
        self.state = state
        self.params = params or state.params.simulation
        self.rng = np.random.default_rng(self.params.seed)
        self.tick_count = 0
        self.reroute_count = 0

    def step(self) -> TickResult:
        """Run one tick; recompute routes if the bin became high priority."""
        new_bins, updated = simulate_tick(self.state.bins, self.rng, self.params)
        self.state.set_bins(new_bins)
        self.state.update_predictions()
        self.tick_count += 1

        rerouted = False
        if updated.fill_level > self.state.threshold:
            if self.state.calculate_routes() is not None:
                rerouted = True
                self.reroute_count += 1
                log_warning(
                    f"High priority bin detected: bin #{updated.bin_id} reached "
                    f"{updated.fill_level:.0f}% fill level. Routes updated."
                )

        logger.debug(
            f"Tick {self.tick_count}: bin #{updated.bin_id} -> {updated.fill_level:.0f}%"
        )
        return TickResult(
            tick=self.tick_count,
            bin_id=updated.bin_id,
            fill_level=updated.fill_level,
            rerouted=rerouted,
        )

    def run(self, ticks: int, realtime: bool = False) -> List[TickResult]:
        """Run ``ticks`` steps, sleeping ``tick_seconds`` between them if realtime."""
        results = []
        for i in range(ticks):
            if realtime and i > 0:
                time.sleep(self.params.tick_seconds)
            results.append(self.step())
        return results
