"""
trigeom Geometry Core

Minimal vector math used by the triangle queries: 2D/3D value vectors plus
the scalar helpers (clamp, sign, IEEE-754 division and square root) that keep
every query free of Python arithmetic exceptions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


# =============================================================================
# Scalar helpers
# =============================================================================

def ieee_divide(num: float, den: float) -> float:
    """Float division with IEEE-754 semantics: x/0 -> +-inf, 0/0 -> nan."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(num) / np.float64(den))


def ieee_sqrt(value: float) -> float:
    """Square root that returns nan for negative input instead of raising."""
    with np.errstate(invalid="ignore"):
        return float(np.sqrt(np.float64(value)))


def clamp(value: float, lo: float, hi: float) -> float:
    # nan passes through unchanged
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def sign(value: float) -> float:
    # nan maps to 0.0
    if value > 0.0:
        return 1.0
    if value < 0.0:
        return -1.0
    return 0.0


# =============================================================================
# Vector Classes
# =============================================================================

@dataclass(frozen=True)
class Vector2:
    """2D vector, used for unit-square sample coordinates."""
    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @staticmethod
    def from_array(arr: Sequence[float]) -> 'Vector2':
        if len(arr) != 2:
            raise ValueError(f"Vector2 requires 2 components, got {len(arr)}")
        return Vector2(float(arr[0]), float(arr[1]))


@dataclass(frozen=True)
class Vector3:
    """3D vector for positions, directions and normals."""
    x: float
    y: float
    z: float

    def __add__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> 'Vector3':
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> 'Vector3':
        return self.__mul__(scalar)

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def __getitem__(self, axis: int) -> float:
        return (self.x, self.y, self.z)[axis]

    def dot(self, other: 'Vector3') -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        """Cross product."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        """Squared length (faster when comparing distances)."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalize(self) -> 'Vector3':
        """
        Return unit vector.

        A zero-length vector yields nan components rather than an error.
        """
        L = self.length()
        return Vector3(ieee_divide(self.x, L), ieee_divide(self.y, L), ieee_divide(self.z, L))

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def to_array(self) -> np.ndarray:
        """Convert to numpy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_array(arr: Sequence[float]) -> 'Vector3':
        if len(arr) != 3:
            raise ValueError(f"Vector3 requires 3 components, got {len(arr)}")
        return Vector3(float(arr[0]), float(arr[1]), float(arr[2]))

    @staticmethod
    def zero() -> 'Vector3':
        return Vector3(0.0, 0.0, 0.0)
