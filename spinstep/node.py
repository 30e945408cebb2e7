"""Graph nodes placed on spherical shells."""

from __future__ import annotations

from dataclasses import dataclass

from spinstep.quaternion import Quaternion, Vector3

_NORM_TOLERANCE = 1e-6
_LOCAL_Z: Vector3 = (0.0, 0.0, 1.0)


@dataclass(frozen=True)
class NodeId:
    """Identifies a node by its layer and its index on that layer."""

    layer_index: int
    node_index_on_layer: int


def calculate_position(orientation: Quaternion, radius: float) -> Vector3:
    """Point at ``radius`` along the local Z axis of ``orientation``."""
    dx, dy, dz = orientation.rotate(_LOCAL_Z)
    return (dx * radius, dy * radius, dz * radius)


class Node:
    """A node on a shell, with its orientation and links to neighbouring nodes."""

    def __init__(
        self,
        layer_index: int,
        node_index_on_layer: int,
        resolution_tier: int,
        orientation: Quaternion,
        radius: float,
    ) -> None:
        if layer_index < 0:
            raise ValueError("layer_index must be a non-negative integer.")
        if node_index_on_layer < 0:
            raise ValueError("node_index_on_layer must be a non-negative integer.")
        if radius <= 0:
            raise ValueError("radius must be a positive number.")

        if abs(orientation.norm() - 1.0) > _NORM_TOLERANCE:
            orientation = orientation.normalized()
            if abs(orientation.norm() - 1.0) > _NORM_TOLERANCE:
                raise ValueError(
                    "Orientation quaternion could not be normalized (is it zero?)."
                )

        self.id = NodeId(layer_index, node_index_on_layer)
        self.resolution_tier = resolution_tier
        self.orientation = orientation
        self.radius = radius
        self.position: Vector3 = calculate_position(orientation, radius)
        self.tangential_neighbors: list[tuple[Node, Quaternion]] = []
        self.radial_outward_neighbor: Node | None = None
        self.radial_inward_neighbor: Node | None = None

    def add_tangential_neighbor(self, neighbor: Node, relative_spin: Quaternion) -> None:
        """Link ``neighbor`` on the same layer, storing the normalized relative spin."""
        if neighbor is None:
            raise ValueError("neighbor_node cannot be null.")
        self.tangential_neighbors.append((neighbor, relative_spin.normalized()))

    def __str__(self) -> str:
        px, py, pz = self.position
        q = self.orientation
        return (
            f"Node(id={{{self.id.layer_index},{self.id.node_index_on_layer}}}, "
            f"tier={self.resolution_tier}, "
            f"r={self.radius:.2f}, "
            f"pos=({px:.2f},{py:.2f},{pz:.2f}), "
            f"ori_q=({q.x:.2f},{q.y:.2f},{q.z:.2f},{q.w:.2f}), "
            f"T_neigh={len(self.tangential_neighbors)}, "
            f"R_out={'Yes' if self.radial_outward_neighbor else 'No'}, "
            f"R_in={'Yes' if self.radial_inward_neighbor else 'No'})"
        )

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)