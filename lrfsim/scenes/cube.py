from __future__ import annotations

import numpy as np

from .polygons import PolygonGroup

# Corner order: origin, unit axes, pairwise sums, far corner
_CUBE_POINTS = np.array(
    [
        [0, 0, 0],
        [1, 0, 0],
        [0, 1, 0],
        [0, 0, 1],
        [0, 1, 1],
        [1, 0, 1],
        [1, 1, 0],
        [1, 1, 1],
    ],
    dtype=np.float64,
)

# x=0, y=0, z=0, x=1, y=1, z=1
_CUBE_FACES = (
    (0, 2, 4, 3),
    (0, 3, 5, 1),
    (0, 1, 6, 2),
    (1, 6, 7, 5),
    (2, 4, 7, 6),
    (3, 5, 7, 4),
)


def cube_geometry(size: float = 1.0) -> tuple[np.ndarray, tuple[tuple[int, int, int, int], ...]]:
    if size <= 0.0:
        raise ValueError("size must be positive.")
    return float(size) * _CUBE_POINTS, _CUBE_FACES


class Cube(PolygonGroup):
    """Axis-aligned cube spanning ``(0, 0, 0)`` to ``size * (1, 1, 1)``."""

    def __init__(self, size: float = 1.0) -> None:
        points, faces = cube_geometry(size)
        group = PolygonGroup.from_indexed(points, faces)
        super().__init__(polygons=group.polygons)
        object.__setattr__(self, "size", float(size))

    def __repr__(self) -> str:
        return f"Cube(size={self.size})"
