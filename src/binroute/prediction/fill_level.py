"""Next-day fill level extrapolation."""

from typing import Dict, List

from binroute.core_types import Bin

BASE_GROWTH_RATE = 0.15
FILL_GROWTH_FACTOR = 0.10


def predict_fill_level(fill_level: float) -> float:
    """Grow ``fill_level`` by 15-25% depending on how full it already is."""
    growth_rate = BASE_GROWTH_RATE + (fill_level / 100) * FILL_GROWTH_FACTOR
    return min(100.0, fill_level + fill_level * growth_rate)


def predict_fill_levels(bins: List[Bin]) -> Dict[int, float]:
    """Predicted fill level for every bin, keyed by bin id."""
    return {b.bin_id: predict_fill_level(b.fill_level) for b in bins}
