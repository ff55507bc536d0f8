from __future__ import annotations

import inspect
import re
import sys
from pathlib import Path

from trigeom.geometry import doctor, ray_config, triangle
from trigeom.geometry.tolerance import EPS_AREA, EPS_HUGE_COORD, EPS_POS, EPS_SLIVER_RATIO


def test_tolerance_constants_exist() -> None:
    assert EPS_POS > 0.0
    assert EPS_AREA > 0.0
    assert 0.0 < EPS_SLIVER_RATIO < 1.0
    assert EPS_HUGE_COORD > 1.0


def test_key_geometry_functions_use_central_tolerance_defaults() -> None:
    assert inspect.signature(triangle.Triangle.is_degenerate).parameters["area_eps"].default == EPS_AREA
    assert inspect.signature(doctor.triangle_health_report).parameters["area_eps"].default == EPS_AREA
    assert inspect.signature(doctor.triangle_health_report).parameters["sliver_ratio"].default == EPS_SLIVER_RATIO


def test_no_hit_sentinel_is_max_finite_float() -> None:
    assert ray_config.NO_HIT == sys.float_info.max
    assert ray_config.RayPolicy().t_min == 0.0
    assert ray_config.RayPolicy().t_max == ray_config.NO_HIT
    assert not ray_config.is_hit(ray_config.NO_HIT)
    assert ray_config.is_hit(0.0)


def test_geometry_package_has_no_inline_scientific_epsilon_literals() -> None:
    root = Path(__file__).resolve().parents[1] / "trigeom" / "geometry"
    pattern = re.compile(r"\b1e-\d+\b")
    offenders: list[str] = []
    for p in sorted(root.rglob("*.py")):
        if p.name == "tolerance.py":
            continue
        text = p.read_text(encoding="utf-8")
        if pattern.search(text):
            offenders.append(str(p.relative_to(root.parent.parent)))
    assert offenders == []


def test_geometry_package_exports_resolve() -> None:
    import trigeom.geometry as geometry

    assert all(hasattr(geometry, name) for name in geometry.__all__)
    assert "Point3" not in geometry.__all__
    assert not hasattr(geometry.core, "Point3")
