"""Discrete node orientations laid out on a Fibonacci sphere."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Sequence

from spinstep.quaternion import Quaternion, Vector3

TIER_TO_N_POINTS_MAP = MappingProxyType(
    {0: 12, 1: 48, 2: 192, 3: 768, 4: 3072}
)

_CANONICAL_Z: Vector3 = (0.0, 0.0, 1.0)


def get_number_of_nodes_at_tier(resolution_tier: int) -> int:
    """Number of nodes on a layer of the given resolution tier."""
    try:
        return TIER_TO_N_POINTS_MAP[resolution_tier]
    except KeyError:
        raise ValueError(
            f"Resolution tier {resolution_tier} is not defined."
        ) from None


def generate_fibonacci_sphere_point(index: int, num_points: int) -> Vector3:
    """Unit vector for point ``index`` of a Fibonacci lattice with Y as its pole."""
    if not 0 <= index < num_points:
        raise IndexError(
            f"Index {index} is out of bounds for {num_points} points."
        )
    golden_angle = math.pi * (3.0 - math.sqrt(5.0))

    y = 1.0 - (2.0 * (index + 0.5)) / num_points
    y = max(-1.0, min(1.0, y))
    radius_at_y = math.sqrt(max(0.0, 1.0 - y * y))
    phi = golden_angle * index

    return (math.cos(phi) * radius_at_y, y, math.sin(phi) * radius_at_y)


def calculate_node_orientation_from_vector_and_angles(
    theta_from_y_pole: float,
    phi_in_xz_plane: float,
    vec_er_local_z: Sequence[float],
) -> Quaternion:
    """Orientation whose local Z axis points along ``vec_er_local_z``.

    The polar angles describe the same direction and do not change the result.
    """
    return Quaternion.from_two_vectors(_CANONICAL_Z, vec_er_local_z)


def get_discrete_node_orientation(resolution_tier: int, node_index_at_tier: int) -> Quaternion:
    """Orientation of node ``node_index_at_tier`` on a layer of ``resolution_tier``."""
    num_points = get_number_of_nodes_at_tier(resolution_tier)
    if not 0 <= node_index_at_tier < num_points:
        raise IndexError(
            f"node_index_at_tier {node_index_at_tier} is out of bounds for "
            f"resolution_tier {resolution_tier} which has {num_points} nodes."
        )

    direction = generate_fibonacci_sphere_point(node_index_at_tier, num_points)
    fx, fy, fz = direction

    theta_from_y_pole = math.acos(max(-1.0, min(1.0, fy)))
    phi_in_xz_plane = math.atan2(fz, fx)
    if phi_in_xz_plane < 0:
        phi_in_xz_plane += 2.0 * math.pi

    return calculate_node_orientation_from_vector_and_angles(
        theta_from_y_pole, phi_in_xz_plane, direction
    )