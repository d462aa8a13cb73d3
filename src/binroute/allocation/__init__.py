"""
Fleet allocation of optimized pickup sequences.
"""

from .fleet import (
    DISTANCE_PER_BIN_KM,
    WASTE_PER_BIN_KG,
    flatten_with_priority,
    generate_truck_routes,
)

__all__ = [
    "DISTANCE_PER_BIN_KM",
    "WASTE_PER_BIN_KG",
    "flatten_with_priority",
    "generate_truck_routes",
]
