from __future__ import annotations

import sys
from dataclasses import dataclass

# Returned by ray queries when nothing is hit. Compares greater than any hit.
NO_HIT = sys.float_info.max


def is_hit(t: float) -> bool:
    return t < NO_HIT


@dataclass(frozen=True)
class RayPolicy:
    """Inclusive hit-distance window applied on top of the triangle test."""
    t_min: float = 0.0
    t_max: float = NO_HIT
