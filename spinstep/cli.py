"""Command that builds a small graph and reports on it."""

from __future__ import annotations

import argparse
import math
import sys
from typing import Sequence

from spinstep.graph import (
    LayerDefinition,
    NeighborDetail,
    RadialConnectionMode,
    SpinStepGraph,
)
from spinstep.node import NodeId
from spinstep.quaternion import Quaternion


def format_quaternion(q: Quaternion) -> str:
    """Render a quaternion as ``[w:…, x:…, y:…, z:…]`` with four decimals."""
    return f"[w:{q.w:.4f}, x:{q.x:.4f}, y:{q.y:.4f}, z:{q.z:.4f}]"


def format_node_id(node_id: NodeId) -> str:
    """Render a node id as ``{layer, index}``."""
    return f"{{{node_id.layer_index}, {node_id.node_index_on_layer}}}"


def _detail_check(detail: NeighborDetail) -> str:
    nid = detail.node_id
    spin = detail.relative_spin
    return (
        f"      (Detail Check) ID: {{{nid.layer_index},{nid.node_index_on_layer}}}, "
        f"Spin: [w:{spin.w:.4f},x:{spin.x:.4f}]"
    )


def _report(graph: SpinStepGraph, out) -> None:
    print("\n--- Graph Info ---", file=out)
    layers = graph.layers
    print(f"Total layers: {len(layers)}", file=out)
    for index, layer in enumerate(layers):
        print(f"Layer {index} has {len(layer)} nodes.", file=out)
    print(f"Total nodes in graph: {len(graph.nodes_by_id)}", file=out)

    test_id = NodeId(0, 0)
    node = graph.get_node(test_id)
    if node is None:
        print(f"Node {format_node_id(test_id)}\n not found!", file=out)
        return

    print(f"\n--- Details for Node {format_node_id(test_id)}\n---", file=out)
    print(node, file=out)

    print(f"  Tangential Neighbors ({len(node.tangential_neighbors)}):", file=out)
    for index, (neighbor, spin) in enumerate(node.tangential_neighbors):
        print(f"    Neighbor {index}: {format_node_id(neighbor.id)}", file=out)
        print(f"      Relative Spin: {format_quaternion(spin)}", file=out)
        detail = graph.tangential_neighbor_details(test_id, index)
        if detail is not None:
            print(_detail_check(detail), file=out)

    print("  Radial Neighbors:", file=out)
    for label, direction, neighbor in (
        ("Outward", "outward", node.radial_outward_neighbor),
        ("Inward", "inward", node.radial_inward_neighbor),
    ):
        if neighbor is None:
            print(f"    {label}: None", file=out)
            continue
        print(f"    {label}: {format_node_id(neighbor.id)}", file=out)
        detail = graph.radial_neighbor_details(test_id, direction)
        if detail is not None:
            print(_detail_check(detail), file=out)

    print("\n--- Testing initiate_spin_step ---", file=out)
    current = node.orientation
    spin_instruction = Quaternion.from_axis_angle(math.pi / 2.0, (0.0, 0.0, 1.0))
    print(f"Current Absolute Orientation: {format_quaternion(current)}", file=out)
    print(f"Spin Instruction: {format_quaternion(spin_instruction)}", file=out)

    result = graph.initiate_spin_step(test_id, current, spin_instruction)
    if result is None:
        print(
            f"initiate_spin_step failed to find a result for node {format_node_id(test_id)}",
            file=out,
        )
        return
    print("Spin Step Result:", file=out)
    print(f"  Best Next Node ID: {format_node_id(result.best_next_node_id)}", file=out)
    print(
        f"  New Absolute Orientation: {format_quaternion(result.new_absolute_orientation)}",
        file=out,
    )
    print(
        f"  Applied Spin Instruction: {format_quaternion(result.applied_spin_instruction)}",
        file=out,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Build a two-layer graph and print its structure and one spin step."""
    parser = argparse.ArgumentParser(
        prog="spinstep",
        description="Build a two-layer spin-step graph and print a report on it.",
    )
    parser.parse_args(argv)

    out = sys.stdout
    print("SpinStep Test Program", file=out)
    print("=========================", file=out)
    print("\n--- Initializing SpinStepGraph ---", file=out)

    layer_definitions = [LayerDefinition(1.0, 0), LayerDefinition(1.5, 1)]
    try:
        graph = SpinStepGraph(
            layer_definitions,
            num_tangential_neighbors=4,
            radial_connection_mode=RadialConnectionMode.CLOSEST_ORIENTATION,
            radial_angle_threshold=math.pi / 3.0,
        )
        print("Graph initialized successfully.", file=out)
        _report(graph, out)
    except (ValueError, IndexError, ZeroDivisionError) as exc:
        print(f"An exception occurred: {exc}", file=sys.stderr)
        return 1

    print("\nTest program finished.", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())