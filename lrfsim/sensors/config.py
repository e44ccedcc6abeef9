from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Tuple

import numpy as np

from ..core.exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class LrfConfig:
    """Intrinsic configuration of a 2D laser range finder.

    Defaults stand in for a common commodity scanner (Hokuyo UTM class).

    Parameters
    ----------
    num_rays:
        Number of rays sampled in one scan.
    fov_deg:
        Field of view in degrees, centred on the sensor's forward (X) axis.
    sigma_range_m:
        Standard deviation of the additive Gaussian range noise.
    range_m:
        ``(min, max)`` valid measurement distance.
    """

    num_rays: int = 1081
    fov_deg: float = 270.2
    sigma_range_m: float = 0.03
    range_m: Tuple[float, float] = (0.1, 30.0)

    def __post_init__(self) -> None:
        if isinstance(self.num_rays, bool) or not isinstance(self.num_rays, (int, np.integer)) or self.num_rays <= 0:
            raise InvalidConfigurationError(f"num_rays must be a positive integer, got {self.num_rays!r}.")
        try:
            fov_deg = float(self.fov_deg)
            sigma = float(self.sigma_range_m)
            lo, hi = (float(v) for v in self.range_m)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationError(f"Malformed LRF configuration: {exc}") from exc
        if not (0.0 < fov_deg <= 360.0):
            raise InvalidConfigurationError(f"fov_deg must lie in (0, 360], got {self.fov_deg!r}.")
        if not (sigma >= 0.0):
            raise InvalidConfigurationError(f"sigma_range_m must be non-negative, got {self.sigma_range_m!r}.")
        if not (0.0 <= lo < hi):
            raise InvalidConfigurationError(f"range_m must satisfy 0 <= min < max, got {self.range_m!r}.")
        object.__setattr__(self, "num_rays", int(self.num_rays))
        object.__setattr__(self, "fov_deg", fov_deg)
        object.__setattr__(self, "sigma_range_m", sigma)
        object.__setattr__(self, "range_m", (lo, hi))

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any] | object) -> "LrfConfig":
        """Build from a mapping or any object exposing the field names as attributes."""
        names = [f.name for f in fields(cls)]
        if isinstance(record, Mapping):
            unknown = sorted(set(record) - set(names))
            if unknown:
                raise InvalidConfigurationError(f"Unknown LRF configuration fields: {', '.join(unknown)}")
            values = {k: record[k] for k in names if k in record}
        else:
            values = {k: getattr(record, k) for k in names if hasattr(record, k)}
        return cls(**values)

    @property
    def angles(self) -> np.ndarray:
        """Ray angles (radians) in the sensor's 2D frame."""
        if self.num_rays == 1:
            return np.zeros(1)
        half = 0.5 * self.fov_rad
        return np.linspace(-half, half, self.num_rays)

    @property
    def fov_rad(self) -> float:
        return float(np.deg2rad(self.fov_deg))

    @property
    def angular_resolution_deg(self) -> float:
        # N rays span N-1 steps
        if self.num_rays == 1:
            return 0.0
        return self.fov_deg / (self.num_rays - 1)

    @property
    def angular_resolution_rad(self) -> float:
        return float(np.deg2rad(self.angular_resolution_deg))

    @property
    def min_range(self) -> float:
        return self.range_m[0]

    @property
    def max_range(self) -> float:
        return self.range_m[1]
