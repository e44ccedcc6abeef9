from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.exceptions import NotCoplanarError
from ..core.utils import as_points, dehomogenize, homogenize
from .pose import Pose, PoseLike

PLANE_TOLERANCE = 1e-6  # micron distance


def plane_in_frame(pose: PoseLike, plane_vector: np.ndarray) -> np.ndarray:
    """Express a world plane ``[n; d]`` in the frame located by ``pose``.

    Points map as ``X_world = T @ X_frame``, so plane coordinates map with the
    transpose: ``pi_frame = T.T @ pi_world``.
    """
    T = Pose.from_any(pose).T
    plane_vector = np.asarray(plane_vector, dtype=np.float64).reshape(4)
    return T.T @ plane_vector


def intersection_line(pose: PoseLike, plane_vector: np.ndarray) -> np.ndarray:
    """Homogeneous 2D line where a world plane cuts the z=0 plane of ``pose``.

    The line is scaled so its first two components have unit norm. A plane
    parallel to the z=0 plane yields NaNs.
    """
    M = Pose.from_any(pose).T[:, [0, 1, 3]]
    line = M.T @ np.asarray(plane_vector, dtype=np.float64).reshape(4)
    with np.errstate(divide="ignore", invalid="ignore"):
        return line / np.linalg.norm(line[:2])


@dataclass(frozen=True, eq=False)
class Plane:
    """Plane in 3D space, defined as the z=0 plane of ``pose``."""

    pose: Pose

    def __post_init__(self) -> None:
        object.__setattr__(self, "pose", Pose.from_any(self.pose))

    @property
    def normal(self) -> np.ndarray:
        return self.pose.R[:, 2]

    @property
    def offset(self) -> float:
        return float(-self.normal @ self.pose.t)

    @property
    def vector(self) -> np.ndarray:
        """Homogeneous plane vector ``[n; -n·t]``."""
        return np.append(self.normal, self.offset)

    @property
    def M(self) -> np.ndarray:
        """4x3 parameterization matrix mapping homogeneous local 2D points to 3D."""
        return self.pose.T[:, [0, 1, 3]]

    def distance(self, points: np.ndarray) -> np.ndarray:
        points = as_points(points, 3)
        return (points - self.pose.t) @ self.normal

    def world_to_local(self, points: np.ndarray) -> np.ndarray:
        """Project world points lying in the plane onto its local 2D frame."""
        points = as_points(points, 3)
        if points.shape[0] == 0:
            return np.zeros((0, 2))
        rel = points - self.pose.t
        max_dist = float(np.max(np.abs(rel @ self.normal)))
        if not max_dist <= PLANE_TOLERANCE:
            raise NotCoplanarError(max_dist, PLANE_TOLERANCE)
        return rel @ self.pose.R[:, :2]

    def local_to_world(self, points: np.ndarray) -> np.ndarray:
        points = as_points(points, 2)
        return dehomogenize(homogenize(points) @ self.M.T)
