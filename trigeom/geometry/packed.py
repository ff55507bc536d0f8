from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from trigeom.geometry.core import Vector3
from trigeom.geometry.triangle import Triangle


class TriangleArrayError(ValueError):
    pass


def as_vec3_array(values: object, name: str) -> np.ndarray:
    arr = np.ascontiguousarray(values, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise TriangleArrayError(f"{name} must have shape (N, 3), got {arr.shape}")
    return arr


@dataclass(frozen=True)
class TriangleArrays:
    """Triangles as three parallel (N, 3) float64 vertex arrays."""
    v0: np.ndarray
    v1: np.ndarray
    v2: np.ndarray

    def validate(self) -> None:
        for name, arr in (("v0", self.v0), ("v1", self.v1), ("v2", self.v2)):
            if arr.dtype != np.float64:
                raise TriangleArrayError(f"{name} must be float64, got {arr.dtype}")
            if arr.ndim != 2 or arr.shape[1] != 3:
                raise TriangleArrayError(f"{name} must have shape (N, 3), got {arr.shape}")
        if not (self.v0.shape[0] == self.v1.shape[0] == self.v2.shape[0]):
            raise TriangleArrayError(
                f"Vertex array lengths differ: {self.v0.shape[0]}, {self.v1.shape[0]}, {self.v2.shape[0]}"
            )

    def __len__(self) -> int:
        return int(self.v0.shape[0])

    def triangle(self, index: int) -> Triangle:
        return Triangle(
            a=Vector3.from_array(self.v0[index]),
            b=Vector3.from_array(self.v1[index]),
            c=Vector3.from_array(self.v2[index]),
        )

    @classmethod
    def from_vertices(cls, v0: object, v1: object, v2: object) -> "TriangleArrays":
        arrays = cls(
            v0=as_vec3_array(v0, "v0"),
            v1=as_vec3_array(v1, "v1"),
            v2=as_vec3_array(v2, "v2"),
        )
        arrays.validate()
        return arrays


def pack_triangles(triangles: Sequence[Triangle]) -> TriangleArrays:
    if not triangles:
        return TriangleArrays(
            v0=np.zeros((0, 3), dtype=np.float64),
            v1=np.zeros((0, 3), dtype=np.float64),
            v2=np.zeros((0, 3), dtype=np.float64),
        )
    return TriangleArrays(
        v0=np.asarray([t.a.to_tuple() for t in triangles], dtype=np.float64),
        v1=np.asarray([t.b.to_tuple() for t in triangles], dtype=np.float64),
        v2=np.asarray([t.c.to_tuple() for t in triangles], dtype=np.float64),
    )


def unpack_triangles(arrays: TriangleArrays) -> List[Triangle]:
    arrays.validate()
    return [arrays.triangle(i) for i in range(len(arrays))]
