"""Layered graph of oriented nodes with tangential and radial links."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence, Union

from spinstep.node import Node, NodeId
from spinstep.orientations import (
    get_discrete_node_orientation,
    get_number_of_nodes_at_tier,
)
from spinstep.quaternion import Quaternion

NodeKey = Union[NodeId, Sequence[int]]


def relative_spin_quaternion(q_from: Quaternion, q_to: Quaternion) -> Quaternion:
    """Rotation ``r`` such that ``r * q_from == q_to``."""
    return q_to * q_from.inverse()


@dataclass(frozen=True)
class LayerDefinition:
    """A spherical shell: its radius and the resolution tier of its lattice."""

    radius: float
    resolution_tier: int


class RadialConnectionMode(Enum):
    """How nodes on adjacent layers are linked."""

    MATCH_INDEX = "match_index"
    CLOSEST_ORIENTATION = "closest_orientation"


@dataclass(frozen=True)
class NeighborDetail:
    """A neighbouring node and the spin that turns the current node onto it."""

    node_id: NodeId
    relative_spin: Quaternion


@dataclass(frozen=True)
class SpinStepResult:
    """Outcome of applying a spin instruction at a node."""

    best_next_node_id: NodeId
    new_absolute_orientation: Quaternion
    applied_spin_instruction: Quaternion


class SpinStepGraph:
    """Nodes on concentric shells, connected within and between layers."""

    def __init__(
        self,
        layer_definitions: Iterable[LayerDefinition],
        num_tangential_neighbors: int = 6,
        radial_connection_mode: RadialConnectionMode = RadialConnectionMode.CLOSEST_ORIENTATION,
        radial_angle_threshold: float = math.pi / 4.0,
    ) -> None:
        self.layer_definitions: tuple[LayerDefinition, ...] = tuple(layer_definitions)
        self.num_tangential_neighbors = num_tangential_neighbors
        self.radial_connection_mode = RadialConnectionMode(radial_connection_mode)
        self.radial_angle_threshold = radial_angle_threshold

        self._nodes_by_id: dict[NodeId, Node] = {}
        self._layers: list[list[Node]] = []
        self._build_graph()

    # --- construction -------------------------------------------------

    def _build_graph(self) -> None:
        self._create_nodes()
        self._connect_tangential()
        self._connect_radial()

    def _create_nodes(self) -> None:
        for layer_index, layer_def in enumerate(self.layer_definitions):
            count = get_number_of_nodes_at_tier(layer_def.resolution_tier)
            layer: list[Node] = []
            for node_index in range(count):
                orientation = get_discrete_node_orientation(
                    layer_def.resolution_tier, node_index
                )
                node = Node(
                    layer_index,
                    node_index,
                    layer_def.resolution_tier,
                    orientation,
                    layer_def.radius,
                )
                self._nodes_by_id[node.id] = node
                layer.append(node)
            self._layers.append(layer)

    def _connect_tangential(self) -> None:
        if self.num_tangential_neighbors <= 0:
            return
        for layer in self._layers:
            for node in layer:
                others = [other for other in layer if other is not node]
                others.sort(key=lambda other: _squared_distance(node.position, other.position))
                for neighbor in others[: self.num_tangential_neighbors]:
                    spin = relative_spin_quaternion(node.orientation, neighbor.orientation)
                    node.add_tangential_neighbor(neighbor, spin)

    def _connect_radial(self) -> None:
        layer_count = len(self._layers)
        for layer_index, layer in enumerate(self._layers):
            for node in layer:
                if layer_index + 1 < layer_count:
                    node.radial_outward_neighbor = self._radial_match(node, layer_index + 1)
                if layer_index > 0:
                    node.radial_inward_neighbor = self._radial_match(node, layer_index - 1)

    def _radial_match(self, node: Node, other_layer_index: int) -> Node | None:
        other_layer = self._layers[other_layer_index]
        if not other_layer:
            return None

        if self.radial_connection_mode is RadialConnectionMode.MATCH_INDEX:
            return self._nodes_by_id.get(
                NodeId(other_layer_index, node.id.node_index_on_layer)
            )

        best: Node | None = None
        min_angle = self.radial_angle_threshold
        for candidate in other_layer:
            angle = node.orientation.angular_distance(candidate.orientation)
            if angle < min_angle:
                min_angle = angle
                best = candidate
        return best

    # --- queries ------------------------------------------------------

    @property
    def layers(self) -> tuple[tuple[Node, ...], ...]:
        """Nodes grouped by layer, in layer order."""
        return tuple(tuple(layer) for layer in self._layers)

    @property
    def nodes_by_id(self) -> Mapping[NodeId, Node]:
        """Read-only view of every node keyed by its id."""
        return MappingProxyType(self._nodes_by_id)

    def get_node(self, node_id: NodeKey) -> Node | None:
        """The node with ``node_id``, or None if the graph has no such node."""
        return self._nodes_by_id.get(_as_node_id(node_id))

    def tangential_neighbor_details(self, node_id: NodeKey, index: int) -> NeighborDetail | None:
        """The ``index``-th tangential neighbour of a node, or None if absent."""
        node = self.get_node(node_id)
        if node is None or not 0 <= index < len(node.tangential_neighbors):
            return None
        neighbor, spin = node.tangential_neighbors[index]
        return NeighborDetail(neighbor.id, spin)

    def radial_neighbor_details(self, node_id: NodeKey, direction: str) -> NeighborDetail | None:
        """The radial neighbour of a node in ``direction`` ("inward" or "outward")."""
        if direction == "outward":
            attribute = "radial_outward_neighbor"
        elif direction == "inward":
            attribute = "radial_inward_neighbor"
        else:
            raise ValueError(f"direction must be 'inward' or 'outward', not {direction!r}")

        node = self.get_node(node_id)
        if node is None:
            return None
        neighbor: Node | None = getattr(node, attribute)
        if neighbor is None:
            return None
        return NeighborDetail(
            neighbor.id, relative_spin_quaternion(node.orientation, neighbor.orientation)
        )

    def initiate_spin_step(
        self,
        node_id: NodeKey,
        current_orientation: Quaternion,
        spin_instruction: Quaternion,
    ) -> SpinStepResult | None:
        """Apply a spin and pick the reachable node closest to the new orientation."""
        node = self.get_node(node_id)
        if node is None:
            return None

        new_orientation = (spin_instruction * current_orientation).normalized()

        candidates: list[Node] = [node]
        candidates.extend(neighbor for neighbor, _ in node.tangential_neighbors)
        if node.radial_outward_neighbor is not None:
            candidates.append(node.radial_outward_neighbor)
        if node.radial_inward_neighbor is not None:
            candidates.append(node.radial_inward_neighbor)

        best = node
        min_angle = node.orientation.angular_distance(new_orientation)
        for candidate in dict.fromkeys(candidates):
            angle = candidate.orientation.angular_distance(new_orientation)
            if angle < min_angle:
                min_angle = angle
                best = candidate

        return SpinStepResult(best.id, new_orientation, spin_instruction)


def _as_node_id(node_id: NodeKey) -> NodeId:
    if isinstance(node_id, NodeId):
        return node_id
    layer_index, node_index = node_id
    return NodeId(layer_index, node_index)


def _squared_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return sum((p - q) ** 2 for p, q in zip(a, b))