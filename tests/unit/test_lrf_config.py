from types import SimpleNamespace

import numpy as np
import pytest

from lrfsim.core.exceptions import InvalidConfigurationError
from lrfsim.sensors.config import LrfConfig
from lrfsim.sensors.noise import GaussianRangeNoise, NoiseModel


def test_defaults_match_commodity_scanner() -> None:
    cfg = LrfConfig()
    assert cfg.num_rays == 1081
    assert cfg.fov_deg == pytest.approx(270.2)
    assert cfg.sigma_range_m == pytest.approx(0.03)
    assert cfg.range_m == (0.1, 30.0)
    assert cfg.min_range == 0.1 and cfg.max_range == 30.0


def test_angles_are_centred_on_forward_axis() -> None:
    cfg = LrfConfig(5, 90.0, 0.0, (0.5, 10.0))
    np.testing.assert_allclose(np.rad2deg(cfg.angles), [-45.0, -22.5, 0.0, 22.5, 45.0])
    assert cfg.angular_resolution_deg == pytest.approx(22.5)
    assert cfg.angular_resolution_rad == pytest.approx(np.deg2rad(22.5))
    assert cfg.fov_rad == pytest.approx(np.pi / 2)


def test_default_angular_resolution_uses_n_minus_one_steps() -> None:
    cfg = LrfConfig()
    assert cfg.angles.shape == (1081,)
    assert cfg.angular_resolution_deg == pytest.approx(270.2 / 1080)
    assert cfg.angles[540] == pytest.approx(0.0)


def test_single_ray_points_forward() -> None:
    cfg = LrfConfig(num_rays=1, fov_deg=10.0)
    np.testing.assert_array_equal(cfg.angles, [0.0])
    assert cfg.angular_resolution_deg == 0.0


def test_from_mapping_and_record() -> None:
    cfg = LrfConfig.from_mapping({"num_rays": 11, "fov_deg": 180.0})
    assert cfg.num_rays == 11 and cfg.fov_deg == 180.0
    assert cfg.sigma_range_m == pytest.approx(0.03)

    rec = SimpleNamespace(num_rays=3, fov_deg=60.0, sigma_range_m=0.0, range_m=[0.0, 5.0])
    cfg = LrfConfig.from_mapping(rec)
    assert cfg.range_m == (0.0, 5.0)

    with pytest.raises(InvalidConfigurationError):
        LrfConfig.from_mapping({"num_rays": 3, "beams": 2})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"num_rays": 0},
        {"num_rays": -3},
        {"num_rays": 2.5},
        {"fov_deg": 0.0},
        {"fov_deg": 360.5},
        {"sigma_range_m": -0.1},
        {"range_m": (5.0, 1.0)},
        {"range_m": (-1.0, 1.0)},
        {"range_m": (1.0, 1.0)},
        {"range_m": (1.0,)},
    ],
)
def test_invalid_configurations_raise(kwargs) -> None:
    with pytest.raises(InvalidConfigurationError):
        LrfConfig(**kwargs)


def test_full_circle_is_allowed() -> None:
    assert LrfConfig(fov_deg=360.0).fov_deg == 360.0


def test_base_noise_model_is_identity() -> None:
    ranges = np.array([1.0, 2.0])
    assert NoiseModel().jitter_ranges(ranges, np.random.default_rng(0)) is ranges


def test_gaussian_noise_statistics_and_nan_propagation() -> None:
    ranges = np.full(5000, 10.0)
    ranges[0] = np.nan
    noise = GaussianRangeNoise(sigma_range_m=0.05)
    jittered = noise.jitter_ranges(ranges, np.random.default_rng(7))
    assert np.isnan(jittered[0])
    assert abs(np.nanmean(jittered) - 10.0) < 0.01
    assert abs(np.nanstd(jittered) - 0.05) < 0.005


def test_zero_sigma_noise_is_exact() -> None:
    ranges = np.array([1.0, np.nan, 3.0])
    out = GaussianRangeNoise(0.0).jitter_ranges(ranges, np.random.default_rng(1))
    np.testing.assert_array_equal(out, ranges)
