from __future__ import annotations

import math

from trigeom.geometry.core import Vector3
from trigeom.geometry.doctor import triangle_health_report
from trigeom.geometry.triangle import Triangle


def test_health_report_detects_common_triangle_issues() -> None:
    triangles = [
        Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0)),
        Triangle(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0)),  # degenerate
        Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 1.0, 1.0), Vector3(2.0, 2.0, 2.0)),  # collinear
        Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1000.0, 0.0, 0.0), Vector3(500.0, 0.5, 0.0)),  # flat, but edge ratio is fine
        Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 5000.0, 0.0)),  # sliver
        Triangle(Vector3(math.nan, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0)),  # non-finite
        Triangle(Vector3(2e6, 0.0, 0.0), Vector3(2e6 + 1.0, 0.0, 0.0), Vector3(2e6, 1.0, 0.0)),  # huge coords
    ]
    report = triangle_health_report(triangles)
    assert report.counts["triangles"] == 7
    assert report.counts["degenerate_triangles"] == 2
    assert report.counts["non_finite_triangles"] == 1
    assert report.counts["sliver_triangles"] == 1
    assert report.counts["huge_coordinate_values"] == 3
    assert report.severities["degenerate_triangles"] == "error"
    assert report.severities["sliver_triangles"] == "warn"
    assert not report.ok
    assert any("degenerate" in e for e in report.errors)
    assert any("sliver" in w for w in report.warnings)


def test_health_report_clean_input() -> None:
    report = triangle_health_report(
        [Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))]
    )
    assert report.ok
    assert report.warnings == []
    assert set(report.severities.values()) == {"ok"}
    d = report.to_dict()
    assert d["counts"]["degenerate_triangles"] == 0


def test_health_report_empty_input_is_an_error() -> None:
    report = triangle_health_report([])
    assert report.errors == ["No triangles."]
