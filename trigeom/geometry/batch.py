"""
Data-parallel triangle queries.

Numpy-facing wrappers around the compiled kernels in ``_triangle_jit``. The
per-row functions pair query ``i`` with triangle ``i``; ``nearest_hit`` and
``batch_nearest_hit`` test rays against every triangle.
"""

from __future__ import annotations

from typing import Tuple, Union

import numpy as np

from trigeom.geometry import _triangle_jit as jit
from trigeom.geometry.core import Vector3
from trigeom.geometry.packed import TriangleArrayError, TriangleArrays, as_vec3_array
from trigeom.geometry.ray_config import RayPolicy

VecLike = Union[Vector3, np.ndarray, Tuple[float, float, float]]


def _as_vec3(value: VecLike, name: str) -> np.ndarray:
    if isinstance(value, Vector3):
        return value.to_array()
    arr = np.ascontiguousarray(value, dtype=np.float64)
    if arr.shape != (3,):
        raise TriangleArrayError(f"{name} must have shape (3,), got {arr.shape}")
    return arr


def _checked(arrays: TriangleArrays, rows: int, name: str) -> TriangleArrays:
    arrays.validate()
    if rows != len(arrays):
        raise TriangleArrayError(f"{name} has {rows} rows but there are {len(arrays)} triangles")
    return arrays


def surface_areas(arrays: TriangleArrays) -> np.ndarray:
    arrays.validate()
    return jit.batch_surface_area(arrays.v0, arrays.v1, arrays.v2)


def ray_intersect(arrays: TriangleArrays, origins: object, directions: object) -> np.ndarray:
    o = as_vec3_array(origins, "origins")
    d = as_vec3_array(directions, "directions")
    if o.shape != d.shape:
        raise TriangleArrayError(f"origins {o.shape} and directions {d.shape} differ")
    tris = _checked(arrays, o.shape[0], "origins")
    return jit.batch_ray_intersect(o, d, tris.v0, tris.v1, tris.v2)


def distance_sq(arrays: TriangleArrays, points: object) -> np.ndarray:
    p = as_vec3_array(points, "points")
    tris = _checked(arrays, p.shape[0], "points")
    return jit.batch_distance_sq(p, tris.v0, tris.v1, tris.v2)


def distance(arrays: TriangleArrays, points: object) -> np.ndarray:
    return np.sqrt(distance_sq(arrays, points))


def closest_point(arrays: TriangleArrays, points: object) -> np.ndarray:
    p = as_vec3_array(points, "points")
    tris = _checked(arrays, p.shape[0], "points")
    return jit.batch_closest_point(p, tris.v0, tris.v1, tris.v2)


def sample_uniform_position(arrays: TriangleArrays, samples: object) -> np.ndarray:
    s = np.ascontiguousarray(samples, dtype=np.float64)
    if s.ndim != 2 or s.shape[1] != 2:
        raise TriangleArrayError(f"samples must have shape (N, 2), got {s.shape}")
    tris = _checked(arrays, s.shape[0], "samples")
    return jit.batch_sample_uniform(s, tris.v0, tris.v1, tris.v2)


def nearest_hit(
    arrays: TriangleArrays,
    origin: VecLike,
    direction: VecLike,
    policy: RayPolicy = RayPolicy(),
) -> Tuple[float, int]:
    """Closest accepted hit over all triangles as ``(t, index)``; ``(NO_HIT, -1)`` on a miss."""
    arrays.validate()
    t, idx = jit.nearest_hit_flat(
        _as_vec3(origin, "origin"),
        _as_vec3(direction, "direction"),
        arrays.v0,
        arrays.v1,
        arrays.v2,
        float(policy.t_min),
        float(policy.t_max),
    )
    return float(t), int(idx)


def batch_nearest_hit(
    arrays: TriangleArrays,
    origins: object,
    directions: object,
    policy: RayPolicy = RayPolicy(),
) -> Tuple[np.ndarray, np.ndarray]:
    o = as_vec3_array(origins, "origins")
    d = as_vec3_array(directions, "directions")
    if o.shape != d.shape:
        raise TriangleArrayError(f"origins {o.shape} and directions {d.shape} differ")
    arrays.validate()
    return jit.batch_nearest_hit(o, d, arrays.v0, arrays.v1, arrays.v2, float(policy.t_min), float(policy.t_max))
