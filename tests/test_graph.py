import math

import pytest

from spinstep.graph import (
    LayerDefinition,
    NeighborDetail,
    RadialConnectionMode,
    SpinStepGraph,
    SpinStepResult,
    relative_spin_quaternion,
)
from spinstep.node import NodeId
from spinstep.orientations import get_number_of_nodes_at_tier
from spinstep.quaternion import Quaternion

LAYERS = [LayerDefinition(1.0, 0), LayerDefinition(1.5, 1)]


def _close(q1, q2, tol=1e-9):
    return q1.angular_distance(q2) < tol


def _sq_dist(a, b):
    return sum((p - q) ** 2 for p, q in zip(a, b))


@pytest.fixture(scope="module")
def graph():
    return SpinStepGraph(LAYERS, 4, RadialConnectionMode.CLOSEST_ORIENTATION, math.pi / 3.0)


@pytest.fixture(scope="module")
def match_graph():
    return SpinStepGraph(LAYERS, 3, RadialConnectionMode.MATCH_INDEX, math.pi / 4.0)


def test_relative_spin_maps_from_onto_to():
    a = Quaternion.from_axis_angle(0.3, (1.0, 2.0, 0.5))
    b = Quaternion.from_axis_angle(1.1, (0.0, 1.0, -1.0))
    r = relative_spin_quaternion(a, b)
    product = r * a
    assert (product.w, product.x, product.y, product.z) == pytest.approx(
        (b.w, b.x, b.y, b.z), abs=1e-9
    )


def test_relative_spin_of_same_orientation_is_identity():
    a = Quaternion.from_axis_angle(0.7, (0.0, 0.0, 1.0))
    r = relative_spin_quaternion(a, a)
    assert (r.w, r.x, r.y, r.z) == pytest.approx((1.0, 0.0, 0.0, 0.0), abs=1e-9)


def test_node_counts_follow_tiers(graph):
    layers = graph.layers
    assert len(layers) == 2
    assert len(layers[0]) == get_number_of_nodes_at_tier(0)
    assert len(layers[1]) == get_number_of_nodes_at_tier(1)
    assert len(graph.nodes_by_id) == len(layers[0]) + len(layers[1])


def test_nodes_carry_layer_radius(graph):
    for layer_def, layer in zip(LAYERS, graph.layers):
        for node in layer:
            assert node.radius == layer_def.radius
            assert math.isclose(math.sqrt(_sq_dist(node.position, (0, 0, 0))), layer_def.radius)


def test_get_node_by_id_and_tuple(graph):
    node = graph.get_node(NodeId(1, 5))
    assert node.id == NodeId(1, 5)
    assert graph.get_node((1, 5)) is node


def test_get_node_missing_returns_none(graph):
    assert graph.get_node(NodeId(2, 0)) is None
    assert graph.get_node(NodeId(0, 12)) is None


def test_tangential_neighbors_are_nearest_on_same_layer(graph):
    for layer in graph.layers:
        for node in layer:
            neighbors = [n for n, _ in node.tangential_neighbors]
            assert len(neighbors) == 4
            assert node not in neighbors
            assert all(n.id.layer_index == node.id.layer_index for n in neighbors)
            dists = [_sq_dist(node.position, n.position) for n in neighbors]
            assert dists == sorted(dists)
            rest = [o for o in layer if o is not node and o not in neighbors]
            assert all(_sq_dist(node.position, o.position) >= dists[-1] - 1e-12 for o in rest)


def test_tangential_spin_turns_node_onto_neighbor(graph):
    node = graph.get_node(NodeId(0, 3))
    assert len(node.tangential_neighbors) == 4
    for neighbor, spin in node.tangential_neighbors:
        turned = spin * node.orientation
        target = neighbor.orientation
        assert (turned.w, turned.x, turned.y, turned.z) == pytest.approx(
            (target.w, target.x, target.y, target.z), abs=1e-9
        )


def test_no_tangential_neighbors_when_zero_requested():
    g = SpinStepGraph([LayerDefinition(1.0, 0)], 0)
    assert all(not node.tangential_neighbors for node in g.layers[0])


def test_tangential_count_capped_by_layer_size():
    g = SpinStepGraph([LayerDefinition(2.0, 0)], 50)
    assert all(len(node.tangential_neighbors) == len(g.layers[0]) - 1 for node in g.layers[0])


def test_match_index_radial_links(match_graph):
    inner, outer = match_graph.layers
    for node in inner:
        assert node.radial_outward_neighbor.id == NodeId(1, node.id.node_index_on_layer)
        assert node.radial_inward_neighbor is None
    for node in outer:
        assert node.radial_outward_neighbor is None
        if node.id.node_index_on_layer < len(inner):
            assert node.radial_inward_neighbor.id == NodeId(0, node.id.node_index_on_layer)
        else:
            assert node.radial_inward_neighbor is None


def test_closest_orientation_picks_minimum_angle():
    g = SpinStepGraph(LAYERS, 2, RadialConnectionMode.CLOSEST_ORIENTATION, 4.0)
    inner, outer = g.layers
    for node in inner:
        best = node.radial_outward_neighbor
        best_angle = node.orientation.angular_distance(best.orientation)
        assert all(
            node.orientation.angular_distance(o.orientation) >= best_angle for o in outer
        )
    assert all(node.radial_inward_neighbor is not None for node in outer)


def test_closest_orientation_respects_threshold(graph):
    for node in graph.layers[0]:
        out = node.radial_outward_neighbor
        if out is not None:
            assert node.orientation.angular_distance(out.orientation) < math.pi / 3.0


def test_zero_threshold_links_nothing():
    g = SpinStepGraph(LAYERS, 2, RadialConnectionMode.CLOSEST_ORIENTATION, 0.0)
    for layer in g.layers:
        for node in layer:
            assert node.radial_outward_neighbor is None
            assert node.radial_inward_neighbor is None


def test_unknown_tier_raises():
    with pytest.raises(ValueError):
        SpinStepGraph([LayerDefinition(1.0, 9)])


def test_non_positive_radius_raises():
    with pytest.raises(ValueError):
        SpinStepGraph([LayerDefinition(0.0, 0)])


def test_tangential_neighbor_details(graph):
    node = graph.get_node(NodeId(0, 0))
    for index, (neighbor, spin) in enumerate(node.tangential_neighbors):
        detail = graph.tangential_neighbor_details(NodeId(0, 0), index)
        assert detail == NeighborDetail(neighbor.id, spin)


def test_tangential_neighbor_details_out_of_range(graph):
    assert graph.tangential_neighbor_details(NodeId(0, 0), 4) is None
    assert graph.tangential_neighbor_details(NodeId(0, 0), -1) is None
    assert graph.tangential_neighbor_details(NodeId(7, 0), 0) is None


def test_radial_neighbor_details(match_graph):
    detail = match_graph.radial_neighbor_details(NodeId(0, 2), "outward")
    assert detail.node_id == NodeId(1, 2)
    node = match_graph.get_node(NodeId(0, 2))
    target = match_graph.get_node(NodeId(1, 2))
    assert _close(detail.relative_spin * node.orientation, target.orientation)
    inward = match_graph.radial_neighbor_details(NodeId(1, 2), "inward")
    assert inward.node_id == NodeId(0, 2)


def test_radial_neighbor_details_absent(match_graph):
    assert match_graph.radial_neighbor_details(NodeId(0, 2), "inward") is None
    assert match_graph.radial_neighbor_details(NodeId(5, 2), "outward") is None


def test_radial_neighbor_details_bad_direction(match_graph):
    with pytest.raises(ValueError):
        match_graph.radial_neighbor_details(NodeId(0, 2), "sideways")


def test_spin_step_identity_stays_put(graph):
    node = graph.get_node(NodeId(0, 0))
    result = graph.initiate_spin_step(node.id, node.orientation, Quaternion.identity())
    assert result.best_next_node_id == node.id
    assert _close(result.new_absolute_orientation, node.orientation)
    assert result.applied_spin_instruction == Quaternion.identity()


def test_spin_step_chooses_closest_candidate(graph):
    node = graph.get_node(NodeId(0, 0))
    spin = Quaternion.from_axis_angle(math.pi / 2.0, (0.0, 0.0, 1.0))
    result = graph.initiate_spin_step(node.id, node.orientation, spin)
    assert isinstance(result, SpinStepResult)
    assert _close(result.new_absolute_orientation, spin * node.orientation)
    assert math.isclose(result.new_absolute_orientation.norm(), 1.0)
    candidates = [node] + [n for n, _ in node.tangential_neighbors]
    for extra in (node.radial_outward_neighbor, node.radial_inward_neighbor):
        if extra is not None:
            candidates.append(extra)
    assert result.best_next_node_id in {c.id for c in candidates}
    best = graph.get_node(result.best_next_node_id)
    best_angle = best.orientation.angular_distance(result.new_absolute_orientation)
    assert all(
        c.orientation.angular_distance(result.new_absolute_orientation) >= best_angle
        for c in candidates
    )


def test_spin_step_towards_neighbor_moves_there(match_graph):
    node = match_graph.get_node(NodeId(0, 4))
    neighbor, spin = node.tangential_neighbors[0]
    result = match_graph.initiate_spin_step(node.id, node.orientation, spin)
    assert result.best_next_node_id == neighbor.id


def test_spin_step_unknown_node(graph):
    assert graph.initiate_spin_step(NodeId(3, 0), Quaternion.identity(), Quaternion.identity()) is None