"""End-to-end runs of the routing pipeline on the demo cities."""

import pytest

from binroute import (
    calculate_distance,
    create_graph,
    find_bin_clusters,
    generate_truck_routes,
    optimize_sequence,
    recompute,
    run_kruskal,
)
from binroute.demo import load_demo
from binroute.fleet_state import FleetState


def test_six_bins_two_trucks(small_city_bins, two_trucks):
    routes, record = recompute(small_city_bins, two_trucks, threshold=80)

    assert len(routes) == 2
    assigned = [b for r in routes for b in r.bin_sequence]
    assert sorted(assigned) == [1, 2, 3, 4, 5, 6]
    assert len(assigned) == len(set(assigned))
    assert 1 in routes[0].bin_sequence
    assert record.high_priority_bins == 2


def test_stages_compose_by_hand(small_city_bins, two_trucks):
    graph = create_graph(small_city_bins)
    mst = run_kruskal(graph)
    clusters = find_bin_clusters(small_city_bins, mst)
    sequences = [optimize_sequence(c.bins, graph) for c in clusters]
    routes = generate_truck_routes(sequences, two_trucks, [1, 2])

    assert routes == recompute(small_city_bins, two_trucks, threshold=80)[0]


def test_reference_distance():
    assert calculate_distance((51.505, -0.09), (51.51, -0.1)) == pytest.approx(
        0.888, rel=0.01
    )


@pytest.mark.parametrize("name", ["small", "medium", "large"])
def test_demo_cities(name):
    dataset = load_demo(name)
    state = FleetState()
    state.set_bins(dataset.bins)
    state.set_trucks(dataset.trucks)

    result = state.calculate_routes()

    assert len(result.routes) == dataset.expected_routes
    assigned = sorted(b for r in result.routes for b in r.bin_sequence)
    assert assigned == [b.bin_id for b in dataset.bins]
    assert result.record.high_priority_bins == 2
