from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd


def empty_list_factory():
    """Ensures a new empty list is created for default."""
    return []


@dataclass
class Bin:
    """A geolocated waste bin."""

    bin_id: int
    location: Tuple[float, float]  # (latitude, longitude) in degrees
    fill_level: float  # percent, 0-100
    capacity: float  # kg

    @property
    def latitude(self) -> float:
        return self.location[0]

    @property
    def longitude(self) -> float:
        return self.location[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Bin_ID": self.bin_id,
            "Latitude": self.location[0],
            "Longitude": self.location[1],
            "Fill_Level": self.fill_level,
            "Capacity": self.capacity,
        }

    def to_export_dict(self) -> Dict[str, Any]:
        """Snapshot layout, readable back by ``from_dict``."""
        return {
            "id": self.bin_id,
            "location": [self.location[0], self.location[1]],
            "fillLevel": self.fill_level,
            "capacity": self.capacity,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Bin":
        """Build a Bin from either the table layout or the export layout."""
        if "Bin_ID" in data:
            return Bin(
                bin_id=int(data["Bin_ID"]),
                location=(float(data["Latitude"]), float(data["Longitude"])),
                fill_level=float(data["Fill_Level"]),
                capacity=float(data["Capacity"]),
            )
        lat, lon = data["location"]
        return Bin(
            bin_id=int(data["id"]),
            location=(float(lat), float(lon)),
            fill_level=float(data["fillLevel"]),
            capacity=float(data["capacity"]),
        )

    @staticmethod
    def from_dataframe(df: pd.DataFrame) -> List["Bin"]:
        """Convert DataFrame to list of Bin objects."""
        bins = []
        for _, row in df.iterrows():
            bins.append(
                Bin(
                    bin_id=int(row["Bin_ID"]),
                    location=(float(row["Latitude"]), float(row["Longitude"])),
                    fill_level=float(row["Fill_Level"]),
                    capacity=float(row.get("Capacity", 100.0)),
                )
            )
        return bins

    @staticmethod
    def to_dataframe(bins: List["Bin"]) -> pd.DataFrame:
        """Convert list of Bin objects to DataFrame."""
        if len(bins) == 0:
            return pd.DataFrame(
                columns=["Bin_ID", "Latitude", "Longitude", "Fill_Level", "Capacity"]
            )
        return pd.DataFrame([b.to_dict() for b in bins])


@dataclass
class Truck:
    """A collection truck. Only the fleet size drives allocation."""

    truck_id: int
    capacity: float  # kg
    current_load: float = 0.0  # kg

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Truck_ID": self.truck_id,
            "Capacity": self.capacity,
            "Current_Load": self.current_load,
        }

    def to_export_dict(self) -> Dict[str, Any]:
        return {
            "id": self.truck_id,
            "capacity": self.capacity,
            "currentLoad": self.current_load,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Truck":
        if "Truck_ID" in data:
            return Truck(
                truck_id=int(data["Truck_ID"]),
                capacity=float(data["Capacity"]),
                current_load=float(data.get("Current_Load", 0.0)),
            )
        return Truck(
            truck_id=int(data["id"]),
            capacity=float(data["capacity"]),
            current_load=float(data.get("currentLoad", 0.0)),
        )

    @staticmethod
    def from_dataframe(df: pd.DataFrame) -> List["Truck"]:
        """Convert DataFrame to list of Truck objects."""
        trucks = []
        for _, row in df.iterrows():
            trucks.append(
                Truck(
                    truck_id=int(row["Truck_ID"]),
                    capacity=float(row["Capacity"]),
                    current_load=float(row.get("Current_Load", 0.0)),
                )
            )
        return trucks

    @staticmethod
    def to_dataframe(trucks: List["Truck"]) -> pd.DataFrame:
        if len(trucks) == 0:
            return pd.DataFrame(columns=["Truck_ID", "Capacity", "Current_Load"])
        return pd.DataFrame([t.to_dict() for t in trucks])


@dataclass(frozen=True)
class Edge:
    """Undirected weighted edge between two bins."""

    source: int
    target: int
    weight: float  # km

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "weight": self.weight}


@dataclass
class Graph:
    """Complete weighted graph over a bin set."""

    nodes: List[int] = field(default_factory=empty_list_factory)
    edges: List[Edge] = field(default_factory=empty_list_factory)
    _lookup: Optional[Dict[Tuple[int, int], float]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def weight(self, a: int, b: int) -> float:
        """Weight of the edge joining ``a`` and ``b`` (0 when a == b).

        Raises KeyError when the pair has no edge.
        """
        if a == b:
            return 0.0
        if self._lookup is None:
            lookup: Dict[Tuple[int, int], float] = {}
            for edge in self.edges:
                lookup[(edge.source, edge.target)] = edge.weight
                lookup[(edge.target, edge.source)] = edge.weight
            self._lookup = lookup
        return self._lookup[(a, b)]


@dataclass
class Cluster:
    """Bins reached by one BFS over the spanning tree, with a density score."""

    bins: List[int]  # BFS visitation order, not a tour
    density: float

    def to_dict(self) -> Dict[str, Any]:
        return {"bins": list(self.bins), "density": self.density}


@dataclass
class Route:
    """Ordered pickup sequence assigned to a truck."""

    truck_id: int
    bin_sequence: List[int]
    total_distance: float = 0.0  # km
    total_waste_collected: float = 0.0  # kg

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Truck_ID": self.truck_id,
            "Bin_Sequence": list(self.bin_sequence),
            "Total_Distance": self.total_distance,
            "Total_Waste_Collected": self.total_waste_collected,
        }

    def to_export_dict(self) -> Dict[str, Any]:
        return {
            "truckId": self.truck_id,
            "binSequence": list(self.bin_sequence),
            "totalDistance": self.total_distance,
            "totalWasteCollected": self.total_waste_collected,
        }

    @staticmethod
    def to_dataframe(routes: List["Route"]) -> pd.DataFrame:
        if len(routes) == 0:
            return pd.DataFrame(
                columns=[
                    "Truck_ID",
                    "Bin_Sequence",
                    "Total_Distance",
                    "Total_Waste_Collected",
                ]
            )
        return pd.DataFrame([r.to_dict() for r in routes])


@dataclass(frozen=True)
class OptimizationRecord:
    """History entry written after each optimization run."""

    timestamp: datetime
    total_distance: float
    total_waste: float
    route_count: int
    high_priority_bins: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "totalDistance": self.total_distance,
            "totalWaste": self.total_waste,
            "routeCount": self.route_count,
            "highPriorityBins": self.high_priority_bins,
        }
