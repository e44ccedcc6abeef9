from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from ..core.exceptions import InvalidPoseError
from ..core.utils import as_points, dehomogenize, homogenize
from .rotations import is_rotation, rotation_from_rpy

ROTATION_TOL = 1e-9

PoseLike = Union["Pose", np.ndarray]


def is_pose_matrix(T: np.ndarray) -> bool:
    """True for a 4x4 or 3x4 rigid transform matrix."""
    T = np.asarray(T, dtype=np.float64)
    if T.ndim != 2 or T.shape not in {(3, 4), (4, 4)}:
        return False
    if not is_rotation(T[:3, :3], ROTATION_TOL) or not np.all(np.isfinite(T[:3, 3])):
        return False
    if T.shape[0] == 4 and not np.allclose(T[3], [0.0, 0.0, 0.0, 1.0], rtol=0.0, atol=ROTATION_TOL):
        return False
    return True


@dataclass(frozen=True, eq=False)
class Pose:
    """Rigid transform of a frame with respect to a reference (typically World).

    ``R`` is the orientation and ``t`` the position of the frame as seen from the
    reference. Poses are immutable: every operation returns a new value.
    """

    R: np.ndarray   # (3,3)
    t: np.ndarray   # (3,)

    def __post_init__(self) -> None:
        R = np.array(self.R, dtype=np.float64)
        t = np.array(self.t, dtype=np.float64)
        if t.size != 3:
            raise InvalidPoseError(f"Translation must have 3 elements, got shape {t.shape}.")
        t = t.reshape(3)
        if R.shape != (3, 3):
            raise InvalidPoseError(f"Rotation must be 3x3, got shape {R.shape}.")
        if not is_rotation(R, ROTATION_TOL):
            raise InvalidPoseError("Rotation matrix is not orthonormal with det = 1.")
        if not np.all(np.isfinite(t)):
            raise InvalidPoseError("Translation must be finite.")
        R.setflags(write=False)
        t.setflags(write=False)
        object.__setattr__(self, "R", R)
        object.__setattr__(self, "t", t)

    @staticmethod
    def identity() -> "Pose":
        return Pose(R=np.eye(3), t=np.zeros(3))

    @staticmethod
    def from_matrix(T: np.ndarray) -> "Pose":
        T = np.asarray(T, dtype=np.float64)
        if not is_pose_matrix(T):
            raise InvalidPoseError(f"Not a valid 3x4/4x4 pose matrix (shape {T.shape}).")
        return Pose(R=T[:3, :3], t=T[:3, 3])

    @staticmethod
    def from_any(obj: PoseLike) -> "Pose":
        if isinstance(obj, Pose):
            return obj
        if isinstance(obj, (np.ndarray, list, tuple)):
            return Pose.from_matrix(np.asarray(obj, dtype=np.float64))
        raise InvalidPoseError(f"Cannot interpret {type(obj).__name__} as a pose.")

    @staticmethod
    def from_xyz_rpy(xyz: tuple[float, float, float], rpy_deg: tuple[float, float, float]) -> "Pose":
        return Pose(R=rotation_from_rpy(rpy_deg), t=np.array(xyz, dtype=float))

    @property
    def T(self) -> np.ndarray:
        """4x4 homogeneous matrix."""
        T = np.eye(4)
        T[:3, :3] = self.R
        T[:3, 3] = self.t
        return T

    def apply(self, p_body: np.ndarray) -> np.ndarray:
        """Map ``(N, 3)`` points from this frame to the reference frame."""
        p_body = as_points(p_body, 3)
        return dehomogenize(homogenize(p_body) @ self.T.T)

    def inverse(self) -> "Pose":
        return Pose(R=self.R.T, t=-self.R.T @ self.t)

    def compose(self, other: PoseLike) -> "Pose":
        return compose(self, other)

    def __matmul__(self, other: PoseLike) -> "Pose":
        return compose(self, other)

    def inverse_compose(self, other: PoseLike) -> "Pose":
        return inverse_compose(self, other)

    def compose_inverse(self, other: PoseLike) -> "Pose":
        return compose_inverse(self, other)

    def isclose(self, other: PoseLike, atol: float = 1e-9) -> bool:
        other = Pose.from_any(other)
        return bool(np.allclose(self.T, other.T, rtol=0.0, atol=atol))

    def __repr__(self) -> str:
        return f"Pose(R={self.R.tolist()}, t={self.t.tolist()})"


def compose(a: PoseLike, b: PoseLike) -> Pose:
    """``a.T @ b.T``"""
    a, b = Pose.from_any(a), Pose.from_any(b)
    return Pose(R=a.R @ b.R, t=a.R @ b.t + a.t)


def inverse_compose(a: PoseLike, b: PoseLike) -> Pose:
    """``inv(a.T) @ b.T``: pose of ``b`` as seen from ``a``."""
    return compose(Pose.from_any(a).inverse(), b)


def compose_inverse(a: PoseLike, b: PoseLike) -> Pose:
    """``a.T @ inv(b.T)``"""
    return compose(a, Pose.from_any(b).inverse())


def transform_points(pose: PoseLike, points: np.ndarray) -> np.ndarray:
    return Pose.from_any(pose).apply(points)
