"""Layered spherical node graphs with quaternion orientations and spin-step traversal."""

__version__ = "0.1.0"
__all__ = ["quaternion", "node", "orientations", "graph", "cli"]