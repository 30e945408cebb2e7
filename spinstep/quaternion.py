"""Unit quaternions for orientations and rotations in three dimensions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

Vector3 = tuple[float, float, float]

# Below -1 + this value, two directions are treated as opposite.
_OPPOSITE_EPSILON = 1e-12


def _dot3(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross3(a: Sequence[float], b: Sequence[float]) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _unit3(v: Sequence[float]) -> Vector3:
    length = math.sqrt(_dot3(v, v))
    if length == 0.0:
        raise ValueError("a zero-length vector has no direction")
    return (v[0] / length, v[1] / length, v[2] / length)


def _perpendicular(v: Vector3) -> Vector3:
    """Return a unit vector orthogonal to the unit vector ``v``."""
    magnitudes = [abs(c) for c in v]
    smallest = magnitudes.index(min(magnitudes))
    basis = tuple(1.0 if i == smallest else 0.0 for i in range(3))
    return _unit3(_cross3(v, basis))


@dataclass(frozen=True)
class Quaternion:
    """A quaternion ``w + xi + yj + zk``."""

    w: float
    x: float
    y: float
    z: float

    @classmethod
    def identity(cls) -> Quaternion:
        """The rotation that leaves every vector unchanged."""
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, angle: float, axis: Sequence[float]) -> Quaternion:
        """Rotation by ``angle`` radians about ``axis``."""
        ux, uy, uz = _unit3(axis)
        half = 0.5 * angle
        s = math.sin(half)
        return cls(math.cos(half), ux * s, uy * s, uz * s)

    @classmethod
    def from_two_vectors(
        cls, source: Sequence[float], target: Sequence[float]
    ) -> Quaternion:
        """Shortest rotation that turns the direction of ``source`` into that of ``target``."""
        v0 = _unit3(source)
        v1 = _unit3(target)
        c = _dot3(v1, v0)

        if c < -1.0 + _OPPOSITE_EPSILON:
            c = max(c, -1.0)
            ax, ay, az = _perpendicular(v0)
            w2 = (1.0 + c) * 0.5
            s = math.sqrt(1.0 - w2)
            return cls(math.sqrt(w2), ax * s, ay * s, az * s)

        ax, ay, az = _cross3(v0, v1)
        s = math.sqrt((1.0 + c) * 2.0)
        inv_s = 1.0 / s
        return cls(s * 0.5, ax * inv_s, ay * inv_s, az * inv_s)

    @property
    def _vec(self) -> Vector3:
        return (self.x, self.y, self.z)

    def _squared_norm(self) -> float:
        return self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        """Euclidean length of the four coefficients."""
        return math.sqrt(self._squared_norm())

    def normalized(self) -> Quaternion:
        """This quaternion scaled to unit length; a zero quaternion is returned unchanged."""
        n = self.norm()
        if n == 0.0:
            return self
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def conjugate(self) -> Quaternion:
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def inverse(self) -> Quaternion:
        """Multiplicative inverse; raises ZeroDivisionError for the zero quaternion."""
        n2 = self._squared_norm()
        if n2 == 0.0:
            raise ZeroDivisionError("the zero quaternion has no inverse")
        return Quaternion(self.w / n2, -self.x / n2, -self.y / n2, -self.z / n2)

    def dot(self, other: Quaternion) -> float:
        return self.w * other.w + self.x * other.x + self.y * other.y + self.z * other.z

    def rotate(self, vector: Sequence[float]) -> Vector3:
        """Apply this (unit) quaternion as a rotation to a 3-vector."""
        q = self._vec
        uv = _cross3(q, vector)
        uv = (2.0 * uv[0], 2.0 * uv[1], 2.0 * uv[2])
        quv = _cross3(q, uv)
        return (
            vector[0] + self.w * uv[0] + quv[0],
            vector[1] + self.w * uv[1] + quv[1],
            vector[2] + self.w * uv[2] + quv[2],
        )

    def angular_distance(self, other: Quaternion) -> float:
        """Smallest rotation angle, in radians, between two orientations."""
        d = self * other.conjugate()
        vec_norm = math.sqrt(d.x * d.x + d.y * d.y + d.z * d.z)
        return 2.0 * math.atan2(vec_norm, abs(d.w))

    def __mul__(self, other: object) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )