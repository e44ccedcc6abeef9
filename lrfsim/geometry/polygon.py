from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.exceptions import InvalidPoseError, NotCoplanarError
from ..core.utils import as_points, get_logger
from .plane import PLANE_TOLERANCE, Plane
from .pose import Pose

_log = get_logger()

EDGE_TOLERANCE = 1e-9


def points_in_quad(points: np.ndarray, vertices: np.ndarray, eps: float = EDGE_TOLERANCE) -> np.ndarray:
    """Even-odd point-in-polygon test; points on the boundary count as inside."""
    px = points[:, 0][:, None]
    py = points[:, 1][:, None]
    a = vertices
    b = np.roll(vertices, -1, axis=0)
    ax, ay = a[:, 0][None, :], a[:, 1][None, :]
    ex, ey = (b[:, 0] - a[:, 0])[None, :], (b[:, 1] - a[:, 1])[None, :]

    # Boundary: distance to the edge line within eps and projection inside the segment
    seg_len2 = ex * ex + ey * ey
    cross = ex * (py - ay) - ey * (px - ax)
    dot = ex * (px - ax) + ey * (py - ay)
    on_edge = (np.abs(cross) <= eps * np.sqrt(seg_len2)) & (dot >= -eps) & (dot <= seg_len2 + eps)

    straddles = (ay > py) != ((ay + ey) > py)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_hit = ax + (py - ay) * ex / ey
    crossings = straddles & (px < x_hit)
    inside = (np.count_nonzero(crossings, axis=1) % 2) == 1
    return inside | np.any(on_edge, axis=1)


@dataclass(frozen=True, eq=False)
class Polygon(Plane):
    """Planar quadrilateral placed in 3D space.

    ``vertices`` holds the 4 ordered corners in the 2D frame of ``pose``.
    """

    vertices: np.ndarray  # (4,2)

    def __post_init__(self) -> None:
        super().__post_init__()
        vertices = np.array(self.vertices, dtype=np.float64)
        if vertices.shape != (4, 2):
            raise ValueError(f"Polygon requires 4 ordered 2D vertices, got shape {vertices.shape}.")
        vertices.setflags(write=False)
        object.__setattr__(self, "vertices", vertices)

    @classmethod
    def from_points(cls, points: np.ndarray) -> "Polygon":
        """Build a polygon from 4 coplanar world points.

        The local frame has its origin at the first point, X towards the second
        point and Z along the normal of the triangle formed by the first three.
        """
        points = np.asarray(points, dtype=np.float64)
        if points.shape != (4, 3):
            raise ValueError(f"Polygon requires 4 ordered 3D points, got shape {points.shape}.")
        v12 = points[1] - points[0]
        v13 = points[2] - points[0]
        normal = np.cross(v12, v13)
        if np.linalg.norm(v12) < EDGE_TOLERANCE or np.linalg.norm(normal) < EDGE_TOLERANCE:
            raise InvalidPoseError("First three polygon points are collinear or repeated.")
        Rx = v12 / np.linalg.norm(v12)
        Rz = normal / np.linalg.norm(normal)
        Ry = np.cross(Rz, Rx)
        R = np.column_stack([Rx, Ry, Rz])
        t = points[0]
        local = (points - t) @ R
        off_plane = float(np.max(np.abs(local[:, 2])))
        if off_plane > PLANE_TOLERANCE:
            _log.warning("Rejecting non-coplanar polygon: 4th point %.3e from plane.", off_plane)
            raise NotCoplanarError(off_plane, PLANE_TOLERANCE, "Polygon points are not coplanar")
        return cls(pose=Pose(R=R, t=t), vertices=local[:, :2])

    @property
    def vertices_3d(self) -> np.ndarray:
        return self.local_to_world(self.vertices)

    @property
    def centroid(self) -> np.ndarray:
        return self.vertices_3d.mean(axis=0)

    def contains(self, points: np.ndarray) -> np.ndarray:
        """Boolean mask of local 2D points lying inside (or on) the polygon."""
        points = as_points(points, 2)
        if points.shape[0] == 0:
            return np.zeros(0, dtype=bool)
        return points_in_quad(points, self.vertices)

    def contains_world(self, points: np.ndarray) -> np.ndarray:
        return self.contains(self.world_to_local(points))
