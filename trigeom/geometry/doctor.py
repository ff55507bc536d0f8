from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from trigeom.geometry.tolerance import EPS_AREA, EPS_HUGE_COORD, EPS_POS, EPS_SLIVER_RATIO
from trigeom.geometry.triangle import Triangle


@dataclass(frozen=True)
class TriangleHealthReport:
    counts: Dict[str, int] = field(default_factory=dict)
    severities: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, object]:
        return {
            "counts": dict(self.counts),
            "severities": dict(self.severities),
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }


def _edge_ratio(tri: Triangle) -> float:
    edges = sorted(
        [
            (tri.b - tri.a).length(),
            (tri.c - tri.b).length(),
            (tri.a - tri.c).length(),
        ]
    )
    if edges[-1] <= EPS_POS:
        return 0.0
    return edges[0] / edges[-1]


def triangle_health_report(
    triangles: Sequence[Triangle],
    *,
    area_eps: float = EPS_AREA,
    sliver_ratio: float = EPS_SLIVER_RATIO,
) -> TriangleHealthReport:
    counts: Dict[str, int] = {}
    severities: Dict[str, str] = {}
    warnings: List[str] = []
    errors: List[str] = []

    if not triangles:
        errors.append("No triangles.")

    non_finite: List[int] = []
    degenerate: List[int] = []
    sliver: List[int] = []
    huge = 0
    for i, tri in enumerate(triangles):
        coords = tri.a.to_tuple() + tri.b.to_tuple() + tri.c.to_tuple()
        if not all(math.isfinite(x) for x in coords):
            non_finite.append(i)
            continue
        huge += sum(1 for x in coords if abs(x) > EPS_HUGE_COORD)
        if tri.is_degenerate(area_eps=area_eps):
            degenerate.append(i)
            continue
        if _edge_ratio(tri) < sliver_ratio:
            sliver.append(i)

    counts["triangles"] = len(triangles)
    counts["non_finite_triangles"] = len(non_finite)
    counts["degenerate_triangles"] = len(degenerate)
    counts["sliver_triangles"] = len(sliver)
    counts["huge_coordinate_values"] = huge
    severities["non_finite_triangles"] = "error" if non_finite else "ok"
    severities["degenerate_triangles"] = "error" if degenerate else "ok"
    severities["sliver_triangles"] = "warn" if sliver else "ok"
    severities["huge_coordinate_values"] = "warn" if huge else "ok"

    if non_finite:
        errors.append(f"{len(non_finite)} triangle(s) with non-finite coordinates, first at index {non_finite[0]}.")
    if degenerate:
        errors.append(
            f"{len(degenerate)} degenerate triangle(s) (area <= {area_eps:g}), first at index {degenerate[0]}; "
            "normal() is undefined for these."
        )
    if sliver:
        warnings.append(f"{len(sliver)} sliver triangle(s) (edge ratio < {sliver_ratio:g}), first at index {sliver[0]}.")
    if huge:
        warnings.append(f"{huge} coordinate value(s) exceed {EPS_HUGE_COORD:g} in magnitude; expect precision loss.")

    return TriangleHealthReport(counts=counts, severities=severities, warnings=warnings, errors=errors)
