"""Built-in demo data sets: a small, medium and large city."""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from binroute.core_types import Bin, Truck

MAP_CENTER = (51.51, -0.08)

# (latitude, longitude, fill level) for bins 1..12, shared by every demo size
_BIN_SITES = [
    (51.505, -0.09, 90),
    (51.51, -0.1, 85),
    (51.515, -0.09, 80),
    (51.52, -0.1, 75),
    (51.518, -0.08, 70),
    (51.51, -0.05, 65),
    (51.505, -0.06, 60),
    (51.508, -0.11, 55),
    (51.512, -0.07, 50),
    (51.502, -0.08, 45),
    (51.5, -0.12, 40),
    (51.525, -0.07, 35),
]


@dataclass
class DemoDataset:
    name: str
    description: str
    bins: List[Bin]
    trucks: List[Truck]
    map_center: Tuple[float, float]
    expected_routes: int
    high_priority_bins: int


def _make_demo(
    name: str, description: str, n_bins: int, n_trucks: int, truck_capacity: float
) -> DemoDataset:
    bins = [
        Bin(bin_id=i + 1, location=(lat, lon), fill_level=fill, capacity=100.0)
        for i, (lat, lon, fill) in enumerate(_BIN_SITES[:n_bins])
    ]
    trucks = [
        Truck(truck_id=i + 1, capacity=truck_capacity, current_load=0.0)
        for i in range(n_trucks)
    ]
    return DemoDataset(
        name=name,
        description=description,
        bins=bins,
        trucks=trucks,
        map_center=MAP_CENTER,
        expected_routes=n_trucks,
        high_priority_bins=3,
    )


def available_demos() -> List[str]:
    return ["small", "medium", "large"]


def load_demo(name: str) -> DemoDataset:
    """Fresh copy of the named demo data set.

    Raises:
        ValueError: If ``name`` is not one of ``available_demos()``
    """
    builders: Dict[str, Tuple[str, str, int, int, float]] = {
        "small": (
            "Small City",
            "A small city with 6 bins and 2 trucks, generating 2 routes",
            6,
            2,
            200.0,
        ),
        "medium": (
            "Medium City",
            "A medium-sized city with 9 bins and 3 trucks, generating 3 routes",
            9,
            3,
            150.0,
        ),
        "large": (
            "Large City",
            "A large city with 12 bins and 4 trucks, generating 4 routes",
            12,
            4,
            100.0,
        ),
    }
    if name not in builders:
        raise ValueError(
            f"Unknown demo '{name}'. Available: {', '.join(available_demos())}"
        )
    return _make_demo(*builders[name])
