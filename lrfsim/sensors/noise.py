from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class NoiseModel:
    """Base class for range noise models."""

    def jitter_ranges(
        self,
        ranges: np.ndarray,
        rng: np.random.Generator,
        sigma_m: Optional[float] = None,
    ) -> np.ndarray:
        return ranges


class GaussianRangeNoise(NoiseModel):
    """Zero-mean additive Gaussian noise, drawn independently per ray."""

    def __init__(self, sigma_range_m: float = 0.0) -> None:
        self.sigma_range_m = float(max(0.0, sigma_range_m))

    def jitter_ranges(
        self,
        ranges: np.ndarray,
        rng: np.random.Generator,
        sigma_m: Optional[float] = None,
    ) -> np.ndarray:
        sigma = self.sigma_range_m if sigma_m is None else float(max(0.0, sigma_m))
        if sigma == 0.0:
            return ranges
        # Invalid (NaN) rays stay NaN
        noise = rng.normal(scale=sigma, size=ranges.shape)
        return ranges + noise
