"""
Triangle primitive.

A frozen three-vertex value with closed-form queries: ray intersection,
distance and closest point to the bounded surface, in-plane containment,
area-uniform sampling, area, normal and centroid. Queries never raise; a miss
is reported as ``NO_HIT`` and degenerate input propagates as nan/inf values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union, overload

from trigeom.geometry.core import Vector2, Vector3, clamp, ieee_divide, ieee_sqrt, sign
from trigeom.geometry.ray_config import NO_HIT
from trigeom.geometry.tolerance import EPS_AREA


def _segment_factor(edge: Vector3, rel: Vector3) -> float:
    # Zero-length edges collapse onto their start vertex.
    len_sq = edge.length_squared()
    if len_sq == 0.0:
        return 0.0
    return clamp(edge.dot(rel) / len_sq, 0.0, 1.0)


def _segment_distance_sq(edge: Vector3, rel: Vector3) -> float:
    return (edge * _segment_factor(edge, rel) - rel).length_squared()


def _closest_on_segment(start: Vector3, end: Vector3, point: Vector3) -> Vector3:
    edge = end - start
    return start + edge * _segment_factor(edge, point - start)


def _format_vertex(v: Vector3) -> str:
    return "[" + ",".join(repr(x) for x in v.to_tuple()) + "]"


@dataclass(frozen=True)
class Triangle:
    a: Vector3
    b: Vector3
    c: Vector3

    @classmethod
    def from_points(cls, a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> "Triangle":
        return cls(a=Vector3.from_array(a), b=Vector3.from_array(b), c=Vector3.from_array(c))

    def __str__(self) -> str:
        return f"[a={_format_vertex(self.a)}, b={_format_vertex(self.b)}, c={_format_vertex(self.c)}]"

    def get_vertices(self) -> Tuple[Vector3, Vector3, Vector3]:
        return (self.a, self.b, self.c)

    @overload
    def centroid(self) -> Vector3: ...

    @overload
    def centroid(self, axis: int) -> float: ...

    def centroid(self, axis: Optional[int] = None) -> Union[Vector3, float]:
        if axis is None:
            return Vector3(
                (self.a.x + self.b.x + self.c.x) / 3.0,
                (self.a.y + self.b.y + self.c.y) / 3.0,
                (self.a.z + self.b.z + self.c.z) / 3.0,
            )
        if not 0 <= axis <= 2:
            raise IndexError(f"axis must be 0, 1 or 2, got {axis}")
        return (self.a[axis] + self.b[axis] + self.c[axis]) / 3.0

    def surface_area(self) -> float:
        return 0.5 * (self.b - self.a).cross(self.c - self.a).length()

    def is_degenerate(self, area_eps: float = EPS_AREA) -> bool:
        return not self.surface_area() > area_eps

    def normal(self) -> Vector3:
        """Unit normal following the a->b->c winding. Non-finite for degenerate triangles."""
        return (self.b - self.a).cross(self.c - self.a).normalize()

    def sample_uniform_position(self, sample: Vector2) -> Vector3:
        """
        Map a unit-square sample to a point on the triangle.

        Uniformly distributed samples give points uniformly distributed over
        the triangle's area. (0, 0) maps to ``a`` and (1, 1) maps to ``c``.
        Samples outside [0, 1] x [0, 1] are not checked and extrapolate.
        """
        sx = ieee_sqrt(sample.x)
        f0 = 1.0 - sx
        f1 = sx * (1.0 - sample.y)
        f2 = sx * sample.y
        return self.a * f0 + self.b * f1 + self.c * f2

    def ray_intersect(self, origin: Vector3, direction: Vector3) -> float:
        """Distance along ``direction`` to the hit, or ``NO_HIT``. Both faces are hit."""
        t, _n = self.ray_intersect_with_normal(origin, direction)
        return t

    def ray_intersect_with_normal(
        self,
        origin: Vector3,
        direction: Vector3,
        normalized: bool = False,
    ) -> Tuple[float, Vector3]:
        """
        Ray intersection that also returns the geometric normal.

        The normal is ``(b - a) x (c - a)``: unnormalized unless ``normalized``
        is set, and not flipped toward the ray. It is returned for misses too.

        Barycentrics and distance come from a single division by
        ``dot(direction, n)``. A ray parallel to the plane divides by zero and
        the resulting inf/nan values fail the inclusive acceptance bounds.
        """
        v1v0 = self.b - self.a
        v2v0 = self.c - self.a
        rov0 = origin - self.a
        n = v1v0.cross(v2v0)
        q = rov0.cross(direction)
        d = ieee_divide(1.0, direction.dot(n))
        u = d * (-q).dot(v2v0)
        v = d * q.dot(v1v0)
        t = d * (-n).dot(rov0)
        if normalized:
            n = n.normalize()
        # Written as acceptance so nan comparisons fall through to a miss.
        if 0.0 <= u <= 1.0 and 0.0 <= v <= 1.0 and u + v <= 1.0 and t >= 0.0:
            return t, n
        return NO_HIT, n

    def distance_sq(self, point: Vector3) -> float:
        """Squared distance from ``point`` to the bounded triangle surface."""
        ba = self.b - self.a
        pa = point - self.a
        cb = self.c - self.b
        pb = point - self.b
        ac = self.a - self.c
        pc = point - self.c
        nor = ba.cross(ac)

        inside = sign(ba.cross(nor).dot(pa)) + sign(cb.cross(nor).dot(pb)) + sign(ac.cross(nor).dot(pc))
        if inside < 2.0:
            return min(
                _segment_distance_sq(ba, pa),
                _segment_distance_sq(cb, pb),
                _segment_distance_sq(ac, pc),
            )
        plane = nor.dot(pa)
        return ieee_divide(plane * plane, nor.length_squared())

    def distance(self, point: Vector3) -> float:
        return ieee_sqrt(self.distance_sq(point))

    def point_in_triangle(self, point: Vector3) -> bool:
        """
        Boundary-inclusive containment test for a point already lying in the
        triangle's plane. Off-plane points give meaningless answers.
        """
        pa = self.a - point
        pb = self.b - point
        pc = self.c - point
        u = pb.cross(pc)
        v = pc.cross(pa)
        w = pa.cross(pb)
        return u.dot(v) >= 0.0 and u.dot(w) >= 0.0

    def closest_point(self, point: Vector3) -> Vector3:
        """
        Nearest point on the bounded triangle.

        The plane projection is used when it lands inside. Otherwise the edges
        (a, b), (b, c), (c, a) are checked in that order and the first edge
        wins on exactly equal distances.
        """
        n = (self.b - self.a).cross(self.c - self.a)
        projected = point - n * ieee_divide((point - self.a).dot(n), n.length_squared())
        if self.point_in_triangle(projected):
            return projected

        best = _closest_on_segment(self.a, self.b, point)
        best_d = (point - best).length_squared()
        for start, end in ((self.b, self.c), (self.c, self.a)):
            cand = _closest_on_segment(start, end, point)
            d = (point - cand).length_squared()
            if d < best_d:
                best = cand
                best_d = d
        return best
