import json

import pandas as pd
import pytest

from binroute.core_types import Bin, Truck
from binroute.utils.data_processing import load_bins, load_trucks


def test_load_bins_csv(bins_csv):
    bins = load_bins(bins_csv)
    assert [b.bin_id for b in bins] == [1, 2, 3, 4, 5, 6]
    assert bins[0] == Bin(1, (51.505, -0.09), 90.0, 100.0)


def test_load_bins_csv_default_capacity(tmp_path):
    path = tmp_path / "bins.csv"
    pd.DataFrame(
        {"Bin_ID": [7], "Latitude": [51.5], "Longitude": [-0.1], "Fill_Level": [42]}
    ).to_csv(path, index=False)

    (only,) = load_bins(path)
    assert only.capacity == 100.0
    assert only.fill_level == 42.0


def test_load_bins_csv_missing_column(tmp_path):
    path = tmp_path / "bins.csv"
    path.write_text("Bin_ID,Latitude,Longitude\n1,51.5,-0.1\n")
    with pytest.raises(ValueError, match="Fill_Level"):
        load_bins(path)


def test_load_bins_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_bins(tmp_path / "nope.csv")


def test_load_bins_json_list(tmp_path):
    path = tmp_path / "bins.json"
    path.write_text(
        json.dumps([{"id": 3, "location": [51.5, -0.1], "fillLevel": 81, "capacity": 120}])
    )
    assert load_bins(path) == [Bin(3, (51.5, -0.1), 81.0, 120.0)]


def test_load_bins_json_snapshot(tmp_path, small_city_bins):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"bins": [b.to_dict() for b in small_city_bins]}))
    assert load_bins(path) == small_city_bins


def test_load_bins_json_without_bins_key(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"trucks": []}))
    with pytest.raises(ValueError, match="bins"):
        load_bins(path)


def test_load_bins_json_incomplete_record(tmp_path):
    path = tmp_path / "bins.json"
    path.write_text(json.dumps([{"id": 1, "location": [51.5, -0.1]}]))
    with pytest.raises(ValueError, match="missing"):
        load_bins(path)


def test_load_bins_invalid_json(tmp_path):
    path = tmp_path / "bins.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_bins(path)


def test_load_trucks_csv(trucks_csv):
    assert load_trucks(trucks_csv) == [Truck(1, 200.0, 0.0), Truck(2, 200.0, 0.0)]


def test_load_trucks_csv_without_load(tmp_path):
    path = tmp_path / "trucks.csv"
    path.write_text("Truck_ID,Capacity\n5,150\n")
    assert load_trucks(path) == [Truck(5, 150.0, 0.0)]


def test_load_trucks_json(tmp_path):
    path = tmp_path / "trucks.json"
    path.write_text(json.dumps([{"id": 1, "capacity": 100, "currentLoad": 20}]))
    assert load_trucks(path) == [Truck(1, 100.0, 20.0)]


def test_load_trucks_missing_capacity(tmp_path):
    path = tmp_path / "trucks.csv"
    path.write_text("Truck_ID\n1\n")
    with pytest.raises(ValueError, match="Capacity"):
        load_trucks(path)
