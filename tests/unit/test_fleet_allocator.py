"""Tests for splitting sequences across the fleet."""

import pytest

from binroute.allocation import flatten_with_priority, generate_truck_routes
from binroute.core_types import Truck


def _trucks(n, capacity=100):
    return [Truck(i + 1, capacity, 0) for i in range(n)]


def test_priority_bins_are_moved_to_front():
    flat = flatten_with_priority([[4, 2, 7], [1, 9]], [9, 7])
    assert flat == [9, 7, 4, 2, 1]


def test_even_split_by_count():
    routes = generate_truck_routes([[1, 2, 3, 4, 5]], _trucks(2), [])
    assert [r.bin_sequence for r in routes] == [[1, 2, 3], [4, 5]]
    assert [r.truck_id for r in routes] == [1, 2]


def test_placeholder_totals():
    routes = generate_truck_routes([[1, 2, 3, 4, 5]], _trucks(2), [])
    assert routes[0].total_distance == pytest.approx(1.5)
    assert routes[0].total_waste_collected == pytest.approx(3)
    assert routes[1].total_distance == pytest.approx(1.0)
    assert routes[1].total_waste_collected == pytest.approx(2)


def test_surplus_trucks_get_no_route():
    # ceil(5 / 4) = 2 per truck -> trucks 1..3 used, truck 4 starts past the end
    routes = generate_truck_routes([[1, 2, 3, 4, 5]], _trucks(4), [])
    assert [r.bin_sequence for r in routes] == [[1, 2], [3, 4], [5]]


def test_capacity_does_not_bound_slices():
    routes = generate_truck_routes([list(range(1, 11))], _trucks(1, capacity=1), [])
    assert len(routes) == 1
    assert len(routes[0].bin_sequence) == 10


@pytest.mark.parametrize(
    "clusters, n_trucks",
    [([], 3), ([[1, 2]], 0), ([], 0)],
)
def test_empty_inputs_give_no_routes(clusters, n_trucks):
    assert generate_truck_routes(clusters, _trucks(n_trucks), []) == []


def test_every_bin_assigned_once():
    clusters = [[5, 3, 8], [1], [9, 2, 7, 6]]
    routes = generate_truck_routes(clusters, _trucks(3), [2, 1])
    assigned = [b for r in routes for b in r.bin_sequence]
    assert sorted(assigned) == [1, 2, 3, 5, 6, 7, 8, 9]
    assert assigned[:2] == [2, 1]
