"""
trigeom Geometry Module

Single-triangle primitive with exact closed-form queries, plus packed-array
kernels that run the same queries in parallel.
"""

from trigeom.geometry.core import Vector2, Vector3
from trigeom.geometry.doctor import TriangleHealthReport, triangle_health_report
from trigeom.geometry.packed import TriangleArrayError, TriangleArrays, pack_triangles, unpack_triangles
from trigeom.geometry.ray_config import NO_HIT, RayPolicy, is_hit
from trigeom.geometry.triangle import Triangle

__all__ = [
    "Vector2",
    "Vector3",
    "Triangle",
    "NO_HIT",
    "RayPolicy",
    "is_hit",
    "TriangleArrays",
    "TriangleArrayError",
    "pack_triangles",
    "unpack_triangles",
    "TriangleHealthReport",
    "triangle_health_report",
]
