from __future__ import annotations

import numba
import numpy as np

from trigeom.geometry.ray_config import NO_HIT

# Every kernel mirrors the term order of trigeom.geometry.triangle so compiled
# and interpreted results agree. error_model="numpy" keeps x/0 as inf/nan.


@numba.njit(cache=True, error_model="numpy")
def _vec(arr: np.ndarray):
    return (arr[0], arr[1], arr[2])


@numba.njit(cache=True, error_model="numpy")
def _add(a, b):
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


@numba.njit(cache=True, error_model="numpy")
def _sub(a, b):
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


@numba.njit(cache=True, error_model="numpy")
def _scale(a, s: float):
    return (a[0] * s, a[1] * s, a[2] * s)


@numba.njit(cache=True, error_model="numpy")
def _neg(a):
    return (-a[0], -a[1], -a[2])


@numba.njit(cache=True, error_model="numpy")
def _dot(a, b) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@numba.njit(cache=True, error_model="numpy")
def _cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


@numba.njit(cache=True, error_model="numpy")
def _sign(x: float) -> float:
    if x > 0.0:
        return 1.0
    if x < 0.0:
        return -1.0
    return 0.0


@numba.njit(cache=True, error_model="numpy")
def _clamp(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


@numba.njit(cache=True, error_model="numpy")
def _segment_factor(edge, rel) -> float:
    len_sq = _dot(edge, edge)
    if len_sq == 0.0:
        return 0.0
    return _clamp(_dot(edge, rel) / len_sq, 0.0, 1.0)


@numba.njit(cache=True, error_model="numpy")
def _segment_distance_sq(edge, rel) -> float:
    diff = _sub(_scale(edge, _segment_factor(edge, rel)), rel)
    return _dot(diff, diff)


@numba.njit(cache=True, error_model="numpy")
def _closest_on_segment(start, end, point):
    edge = _sub(end, start)
    return _add(start, _scale(edge, _segment_factor(edge, _sub(point, start))))


# -----------------------------------------------------------------------------
# Single-triangle kernels
# -----------------------------------------------------------------------------


@numba.njit(cache=True, error_model="numpy")
def surface_area_tri(v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> float:
    a = _vec(v0)
    n = _cross(_sub(_vec(v1), a), _sub(_vec(v2), a))
    return 0.5 * np.sqrt(_dot(n, n))


@numba.njit(cache=True, error_model="numpy")
def ray_intersect_tri(
    origin: np.ndarray,
    direction: np.ndarray,
    v0: np.ndarray,
    v1: np.ndarray,
    v2: np.ndarray,
) -> float:
    a = _vec(v0)
    rd = _vec(direction)
    v1v0 = _sub(_vec(v1), a)
    v2v0 = _sub(_vec(v2), a)
    rov0 = _sub(_vec(origin), a)
    n = _cross(v1v0, v2v0)
    q = _cross(rov0, rd)
    d = 1.0 / _dot(rd, n)
    u = d * _dot(_neg(q), v2v0)
    v = d * _dot(q, v1v0)
    t = d * _dot(_neg(n), rov0)
    if 0.0 <= u <= 1.0 and 0.0 <= v <= 1.0 and u + v <= 1.0 and t >= 0.0:
        return t
    return NO_HIT


@numba.njit(cache=True, error_model="numpy")
def distance_sq_tri(point: np.ndarray, v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> float:
    a = _vec(v0)
    b = _vec(v1)
    c = _vec(v2)
    p = _vec(point)
    ba = _sub(b, a)
    pa = _sub(p, a)
    cb = _sub(c, b)
    pb = _sub(p, b)
    ac = _sub(a, c)
    pc = _sub(p, c)
    nor = _cross(ba, ac)

    inside = (
        _sign(_dot(_cross(ba, nor), pa))
        + _sign(_dot(_cross(cb, nor), pb))
        + _sign(_dot(_cross(ac, nor), pc))
    )
    if inside < 2.0:
        return min(
            _segment_distance_sq(ba, pa),
            _segment_distance_sq(cb, pb),
            _segment_distance_sq(ac, pc),
        )
    plane = _dot(nor, pa)
    return plane * plane / _dot(nor, nor)


@numba.njit(cache=True, error_model="numpy")
def point_in_triangle_tri(point: np.ndarray, v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> bool:
    p = _vec(point)
    pa = _sub(_vec(v0), p)
    pb = _sub(_vec(v1), p)
    pc = _sub(_vec(v2), p)
    u = _cross(pb, pc)
    v = _cross(pc, pa)
    w = _cross(pa, pb)
    return _dot(u, v) >= 0.0 and _dot(u, w) >= 0.0


@numba.njit(cache=True, error_model="numpy")
def closest_point_tri(point: np.ndarray, v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    a = _vec(v0)
    b = _vec(v1)
    c = _vec(v2)
    p = _vec(point)
    n = _cross(_sub(b, a), _sub(c, a))
    projected = _sub(p, _scale(n, _dot(_sub(p, a), n) / _dot(n, n)))
    out = np.empty(3, dtype=np.float64)

    pa = _sub(a, projected)
    pb = _sub(b, projected)
    pc = _sub(c, projected)
    u = _cross(pb, pc)
    if _dot(u, _cross(pc, pa)) >= 0.0 and _dot(u, _cross(pa, pb)) >= 0.0:
        best = projected
    else:
        best = _closest_on_segment(a, b, p)
        diff = _sub(p, best)
        best_d = _dot(diff, diff)
        cand = _closest_on_segment(b, c, p)
        diff = _sub(p, cand)
        d = _dot(diff, diff)
        if d < best_d:
            best = cand
            best_d = d
        cand = _closest_on_segment(c, a, p)
        diff = _sub(p, cand)
        d = _dot(diff, diff)
        if d < best_d:
            best = cand
    out[0] = best[0]
    out[1] = best[1]
    out[2] = best[2]
    return out


@numba.njit(cache=True, error_model="numpy")
def sample_uniform_tri(sample: np.ndarray, v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    sx = np.sqrt(sample[0])
    f0 = 1.0 - sx
    f1 = sx * (1.0 - sample[1])
    f2 = sx * sample[1]
    p = _add(_add(_scale(_vec(v0), f0), _scale(_vec(v1), f1)), _scale(_vec(v2), f2))
    out = np.empty(3, dtype=np.float64)
    out[0] = p[0]
    out[1] = p[1]
    out[2] = p[2]
    return out


# -----------------------------------------------------------------------------
# Batch kernels. Row i of every input belongs to the same query.
# -----------------------------------------------------------------------------


@numba.njit(cache=True, error_model="numpy", parallel=True)
def batch_surface_area(tri_v0: np.ndarray, tri_v1: np.ndarray, tri_v2: np.ndarray) -> np.ndarray:
    n = tri_v0.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in numba.prange(n):
        out[i] = surface_area_tri(tri_v0[i], tri_v1[i], tri_v2[i])
    return out


@numba.njit(cache=True, error_model="numpy", parallel=True)
def batch_ray_intersect(
    origins: np.ndarray,
    directions: np.ndarray,
    tri_v0: np.ndarray,
    tri_v1: np.ndarray,
    tri_v2: np.ndarray,
) -> np.ndarray:
    n = origins.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in numba.prange(n):
        out[i] = ray_intersect_tri(origins[i], directions[i], tri_v0[i], tri_v1[i], tri_v2[i])
    return out


@numba.njit(cache=True, error_model="numpy", parallel=True)
def batch_distance_sq(points: np.ndarray, tri_v0: np.ndarray, tri_v1: np.ndarray, tri_v2: np.ndarray) -> np.ndarray:
    n = points.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in numba.prange(n):
        out[i] = distance_sq_tri(points[i], tri_v0[i], tri_v1[i], tri_v2[i])
    return out


@numba.njit(cache=True, error_model="numpy", parallel=True)
def batch_closest_point(points: np.ndarray, tri_v0: np.ndarray, tri_v1: np.ndarray, tri_v2: np.ndarray) -> np.ndarray:
    n = points.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in numba.prange(n):
        out[i, :] = closest_point_tri(points[i], tri_v0[i], tri_v1[i], tri_v2[i])
    return out


@numba.njit(cache=True, error_model="numpy", parallel=True)
def batch_sample_uniform(samples: np.ndarray, tri_v0: np.ndarray, tri_v1: np.ndarray, tri_v2: np.ndarray) -> np.ndarray:
    n = samples.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in numba.prange(n):
        out[i, :] = sample_uniform_tri(samples[i], tri_v0[i], tri_v1[i], tri_v2[i])
    return out


@numba.njit(cache=True, error_model="numpy")
def nearest_hit_flat(
    origin: np.ndarray,
    direction: np.ndarray,
    tri_v0: np.ndarray,
    tri_v1: np.ndarray,
    tri_v2: np.ndarray,
    t_min: float,
    t_max: float,
):
    best_t = NO_HIT
    best_idx = -1
    for ti in range(tri_v0.shape[0]):
        t = ray_intersect_tri(origin, direction, tri_v0[ti], tri_v1[ti], tri_v2[ti])
        if t == NO_HIT or not np.isfinite(t) or t < t_min or t > t_max:
            continue
        # Strict compare: the lowest index wins on equal distances.
        if t < best_t:
            best_t = t
            best_idx = ti
    return best_t, best_idx


@numba.njit(cache=True, error_model="numpy", parallel=True)
def batch_nearest_hit(
    origins: np.ndarray,
    directions: np.ndarray,
    tri_v0: np.ndarray,
    tri_v1: np.ndarray,
    tri_v2: np.ndarray,
    t_min: float,
    t_max: float,
):
    n = origins.shape[0]
    ts = np.empty(n, dtype=np.float64)
    idxs = np.empty(n, dtype=np.int64)
    for i in numba.prange(n):
        t, idx = nearest_hit_flat(origins[i], directions[i], tri_v0, tri_v1, tri_v2, t_min, t_max)
        ts[i] = t
        idxs[i] = idx
    return ts, idxs
