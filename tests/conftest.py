"""Shared fixtures for the binroute test suite."""

import pytest

from binroute.core_types import Bin, Truck
from binroute.utils.logging import BinrouteLogger, LogLevel


@pytest.fixture(autouse=True)
def _reset_log_level(monkeypatch):
    """Keep logger state from leaking between tests."""
    monkeypatch.delenv("BINROUTE_EFFECTIVE_LOG_LEVEL", raising=False)
    BinrouteLogger.set_level(LogLevel.NORMAL)
    yield
    BinrouteLogger.set_level(LogLevel.NORMAL)


@pytest.fixture
def small_city_bins():
    """The six-bin demo city."""
    return [
        Bin(1, (51.505, -0.09), 90, 100),
        Bin(2, (51.51, -0.1), 85, 100),
        Bin(3, (51.515, -0.09), 80, 100),
        Bin(4, (51.52, -0.1), 75, 100),
        Bin(5, (51.518, -0.08), 70, 100),
        Bin(6, (51.51, -0.05), 65, 100),
    ]


@pytest.fixture
def two_trucks():
    return [Truck(1, 200, 0), Truck(2, 200, 0)]


@pytest.fixture
def bins_csv(tmp_path, small_city_bins):
    path = tmp_path / "bins.csv"
    lines = ["Bin_ID,Latitude,Longitude,Fill_Level,Capacity"]
    for b in small_city_bins:
        lines.append(f"{b.bin_id},{b.latitude},{b.longitude},{b.fill_level},{b.capacity}")
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def trucks_csv(tmp_path):
    path = tmp_path / "trucks.csv"
    path.write_text("Truck_ID,Capacity,Current_Load\n1,200,0\n2,200,0\n")
    return path
