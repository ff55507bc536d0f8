from __future__ import annotations

import random
import time

import numpy as np

from trigeom.geometry import batch
from trigeom.geometry.core import Vector3
from trigeom.geometry.packed import pack_triangles
from trigeom.geometry.triangle import Triangle


def _random_triangles(n: int, seed: int = 11) -> list[Triangle]:
    rng = random.Random(seed)
    tris: list[Triangle] = []
    for _ in range(n):
        center = Vector3(rng.uniform(-20.0, 20.0), rng.uniform(-20.0, 20.0), rng.uniform(0.0, 8.0))
        size = rng.uniform(0.2, 1.2)
        # Arbitrary orientation: each vertex is an independent offset from the center.
        a, b, c = (
            center + Vector3(rng.gauss(0.0, 1.0), rng.gauss(0.0, 1.0), rng.gauss(0.0, 0.5)) * size
            for _ in range(3)
        )
        tris.append(Triangle(a=a, b=b, c=c))
    return tris


def _scalar_nearest(tris: list[Triangle], origin: Vector3, direction: Vector3) -> float:
    return min(tri.ray_intersect(origin, direction) for tri in tris)


def main() -> None:
    tris = _random_triangles(5000)
    arrays = pack_triangles(tris)
    rays: list[tuple[Vector3, Vector3]] = []
    for i in range(400):
        ox = -30.0 + (i % 40) * 1.5
        oy = -30.0 + (i // 40) * 6.0
        rays.append((Vector3(ox, oy, 12.0), Vector3(0.3, 0.2, -1.0)))
    origins = np.asarray([o.to_tuple() for o, _d in rays])
    directions = np.asarray([d.to_tuple() for _o, d in rays])

    # Compile before timing.
    batch.batch_nearest_hit(arrays, origins[:1], directions[:1])

    t0 = time.perf_counter()
    scalar = [_scalar_nearest(tris, o, d) for o, d in rays]
    t1 = time.perf_counter()
    ts, _idxs = batch.batch_nearest_hit(arrays, origins, directions)
    t2 = time.perf_counter()

    scalar_s = t1 - t0
    jit_s = t2 - t1
    speedup = scalar_s / jit_s if jit_s > 0 else float("inf")
    mismatches = int(np.sum(np.asarray(scalar) != ts))

    print("Triangle Query Benchmark")
    print(f"Triangles: {len(tris)}")
    print(f"Rays: {len(rays)}")
    print(f"Scalar:     {scalar_s:.4f}s")
    print(f"Parallel:   {jit_s:.4f}s")
    print(f"Speedup:    {speedup:.2f}x")
    print(f"Mismatches: {mismatches}")


if __name__ == "__main__":
    main()
