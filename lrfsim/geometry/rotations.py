from __future__ import annotations

import numpy as np


def rotation_x(theta: float) -> np.ndarray:
    """3D rotation around the X axis (radians)."""
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def rotation_y(theta: float) -> np.ndarray:
    """3D rotation around the Y axis (radians)."""
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def rotation_z(theta: float) -> np.ndarray:
    """3D rotation around the Z axis (radians)."""
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def rotation_from_rpy(rpy_deg: tuple[float, float, float]) -> np.ndarray:
    rx, ry, rz = np.deg2rad(rpy_deg)
    return rotation_z(rz) @ rotation_y(ry) @ rotation_x(rx)


def is_rotation(R: np.ndarray, tol: float = 1e-9) -> bool:
    R = np.asarray(R, dtype=np.float64)
    if R.shape != (3, 3) or not np.all(np.isfinite(R)):
        return False
    return bool(abs(np.linalg.det(R) - 1.0) < tol and np.all(np.abs(R.T @ R - np.eye(3)) < tol))
