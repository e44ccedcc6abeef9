from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from ..core.utils import get_logger
from ..geometry.polygon import Polygon
from ..sensors.base import (
    NO_OBJECT,
    OutputFormat,
    PolygonScan,
    ScanOutput,
    ScanResult,
    Sensor,
    check_output_format,
)

_log = get_logger()


@dataclass(frozen=True, eq=False)
class PolygonGroup:
    """Scene object made of planar quadrilaterals.

    Scanning fuses the samples of every polygon into one array per ray. When
    several polygons are hit by the same ray, the one declared last wins; there
    is no depth ordering, so callers that need occlusion must declare polygons
    back to front.
    """

    polygons: Sequence[Polygon] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        polygons = tuple(self.polygons)
        if not polygons:
            raise ValueError("PolygonGroup requires at least one polygon.")
        for pol in polygons:
            if not isinstance(pol, Polygon):
                raise TypeError(f"Expected Polygon, got {type(pol).__name__}.")
        object.__setattr__(self, "polygons", polygons)

    @classmethod
    def from_indexed(cls, points: np.ndarray, faces: Sequence[Sequence[int]]) -> "PolygonGroup":
        """Build polygons from a shared ``(M, 3)`` point set and 4-index faces."""
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError(f"Expected points with shape (M, 3), got {points.shape}.")
        polygons = []
        for k, face in enumerate(faces):
            idxs = np.asarray(face, dtype=np.int64)
            if idxs.shape != (4,):
                raise ValueError(f"Face {k} must list exactly 4 point indices, got {list(face)}.")
            if np.any(idxs < 0) or np.any(idxs >= len(points)):
                raise ValueError(f"Face {k} references points outside [0, {len(points)}).")
            polygons.append(Polygon.from_points(points[idxs]))
        return cls(polygons=polygons)

    def __len__(self) -> int:
        return len(self.polygons)

    def centroids(self) -> np.ndarray:
        return np.vstack([pol.centroid for pol in self.polygons])

    def get_scan_by(
        self,
        sensor: Sensor,
        output_format: OutputFormat = "array",
        rng: Optional[np.random.Generator] = None,
    ) -> ScanOutput:
        check_output_format(output_format)
        if rng is None:
            rng = np.random.default_rng()

        scans: List[PolygonScan] = [sensor.scan_polygon(pol, rng) for pol in self.polygons]
        if output_format == "sparse":
            return scans

        n_rays = sensor.config.num_rays
        points = np.full((n_rays, 2), np.nan)
        object_id = np.full(n_rays, NO_OBJECT, dtype=np.int64)
        for k, scan in enumerate(scans):
            points[scan.indices] = scan.points
            object_id[scan.indices] = k
        _log.debug(
            "PolygonGroup: %d/%d rays hit %d polygons.",
            int(np.count_nonzero(object_id != NO_OBJECT)), n_rays, len(scans),
        )
        return ScanResult(points=points, object_id=object_id)
