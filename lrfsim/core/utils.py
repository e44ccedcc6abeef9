from __future__ import annotations
import numpy as np
import logging

def get_logger(name: str = "lrfsim") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger

def as_points(points: np.ndarray, dim: int) -> np.ndarray:
    """Coerce ``points`` to a float64 ``(N, dim)`` array (a single point is promoted)."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] != dim:
        raise ValueError(f"Expected points with shape (N, {dim}), got {arr.shape}.")
    return arr

def homogenize(points: np.ndarray) -> np.ndarray:
    """Append a unit coordinate to each row."""
    points = np.asarray(points, dtype=np.float64)
    return np.hstack([points, np.ones((points.shape[0], 1))])

def dehomogenize(points: np.ndarray) -> np.ndarray:
    """Divide each row by its last coordinate and drop it."""
    points = np.asarray(points, dtype=np.float64)
    return points[:, :-1] / points[:, -1:]

def make_3d(xy: np.ndarray) -> np.ndarray:
    # Scan plane is z=0 in the sensor frame
    xy = np.asarray(xy, dtype=np.float64)
    return np.hstack([xy, np.zeros((xy.shape[0], 1))])
