from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np

from ..core.exceptions import ScanTargetCapabilityError
from ..core.utils import get_logger, make_3d
from ..geometry.plane import intersection_line, plane_in_frame
from ..geometry.polygon import Polygon
from ..geometry.pose import Pose, PoseLike
from .base import OutputFormat, PolygonScan, Scannable, ScanOutput, check_output_format
from .config import LrfConfig
from .noise import GaussianRangeNoise

_log = get_logger()


@dataclass(frozen=True, eq=False)
class SimLrf:
    """Simulated 2D laser range finder.

    The scan plane is the z=0 plane of ``pose``; rays fan out around its X axis.
    Scans are pure: the noise source is passed in per call and the sensor is
    never mutated.
    """

    pose: Pose = field(default_factory=Pose.identity)
    config: LrfConfig = field(default_factory=LrfConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pose", Pose.from_any(self.pose))
        if not isinstance(self.config, LrfConfig):
            object.__setattr__(self, "config", LrfConfig.from_mapping(self.config))

    @property
    def noise(self) -> GaussianRangeNoise:
        return GaussianRangeNoise(self.config.sigma_range_m)

    @property
    def directions_2d(self) -> np.ndarray:
        """Unit ray directions ``(N, 2)`` in the sensor's 2D frame."""
        theta = self.config.angles
        return np.column_stack([np.cos(theta), np.sin(theta)])

    @property
    def scan_lines(self) -> np.ndarray:
        """Homogeneous 2D lines ``(N, 3)`` supporting each ray."""
        v = self.directions_2d
        return np.column_stack([-v[:, 1], v[:, 0], np.zeros(len(v))])

    @property
    def directions_3d(self) -> np.ndarray:
        """Ray directions ``(N, 3)`` in the world frame."""
        return make_3d(self.directions_2d) @ self.pose.R.T

    def rho_to_xy(self, rho: np.ndarray) -> np.ndarray:
        rho = np.asarray(rho, dtype=np.float64)
        if rho.shape != (self.config.num_rays,):
            raise ValueError(f"Expected {self.config.num_rays} ranges, got shape {rho.shape}.")
        return rho[:, None] * self.directions_2d

    def to_world(self, xy: np.ndarray) -> np.ndarray:
        """Lift sensor-frame 2D points to world 3D points."""
        return self.pose.apply(make_3d(np.asarray(xy, dtype=np.float64).reshape(-1, 2)))

    def rebased(self, parent: PoseLike) -> "SimLrf":
        """Copy of this sensor with its pose expressed in ``parent``'s reference frame."""
        return replace(self, pose=Pose.from_any(parent) @ self.pose)

    def intersect_plane(self, plane_vector: np.ndarray) -> np.ndarray:
        """Homogeneous line where a world plane cuts the scan plane."""
        return intersection_line(self.pose, plane_vector)

    def scan_plane(self, plane_vector: np.ndarray) -> np.ndarray:
        """Ranges ``(N,)`` along every ray to an infinite world plane.

        Rays that miss (parallel, behind the sensor, or outside the valid
        interval) are NaN.
        """
        local = plane_in_frame(self.pose, plane_vector)
        # Ray points are rho * [v, 0]: n_xy . (rho v) + d = 0
        denom = self.directions_2d @ local[:2]
        with np.errstate(divide="ignore", invalid="ignore"):
            rho = -local[3] / denom
        valid = (rho >= self.config.min_range) & (rho <= self.config.max_range)
        rho[~valid] = np.nan
        return rho

    def scan_polygon(self, polygon: Polygon, rng: Optional[np.random.Generator] = None) -> PolygonScan:
        """Noisy samples of ``polygon`` with the ray indices that hit it.

        Containment is decided on the noise-free ranges; noise only perturbs
        the reported measurements.
        """
        if rng is None:
            rng = np.random.default_rng()

        rho = self.scan_plane(polygon.vector)
        hit = np.isfinite(rho)
        inside = np.zeros(self.config.num_rays, dtype=bool)
        if np.any(hit):
            pts_3d = self.to_world(self.rho_to_xy(rho)[hit])
            inside[hit] = polygon.contains_world(pts_3d)

        noisy = self.noise.jitter_ranges(rho, rng)
        xy = self.rho_to_xy(noisy)

        idxs = np.flatnonzero(inside)
        return PolygonScan(points=xy[idxs], indices=idxs)

    def scan(
        self,
        target: Scannable,
        output_format: OutputFormat = "array",
        rng: Optional[np.random.Generator] = None,
    ) -> ScanOutput:
        """Simulate a scan of any object implementing ``get_scan_by``."""
        if not isinstance(target, Scannable):
            raise ScanTargetCapabilityError(
                f"{type(target).__name__} is not scannable; implement get_scan_by(sensor, output_format, rng)."
            )
        check_output_format(output_format)
        if rng is None:
            rng = np.random.default_rng()
        result = target.get_scan_by(self, output_format, rng)
        _log.debug("SimLrf: scanned %s (%s output).", type(target).__name__, output_format)
        return result
