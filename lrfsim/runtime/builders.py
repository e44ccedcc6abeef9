from __future__ import annotations

import numpy as np

from ..config import ScenarioConfig
from ..config.schema import (
    DeviceConfig,
    LrfIntrinsicsConfig,
    LrfSensorConfig,
    PoseConfig,
)
from ..geometry.pose import Pose
from ..scenes import Cube, PolygonGroup
from ..sensors.config import LrfConfig
from ..sensors.device import SimLrfDevice
from ..sensors.lrf import SimLrf


def build_pose(cfg: PoseConfig) -> Pose:
    if cfg.matrix is not None:
        return Pose.from_matrix(np.asarray(cfg.matrix, dtype=np.float64))
    return Pose.from_xyz_rpy(cfg.xyz, cfg.rpy_deg)


def build_lrf_config(cfg: LrfIntrinsicsConfig) -> LrfConfig:
    return LrfConfig.from_mapping(cfg)


def build_sensor(cfg: LrfSensorConfig) -> SimLrf:
    return SimLrf(pose=build_pose(cfg.pose), config=build_lrf_config(cfg.intrinsics))


def build_device(cfg: DeviceConfig) -> SimLrfDevice:
    return SimLrfDevice(
        pose=build_pose(cfg.pose),
        sensors=[build_sensor(sensor_cfg) for sensor_cfg in cfg.sensors],
    )


def build_scene(cfg: ScenarioConfig) -> PolygonGroup:
    scene_cfg = cfg.scene
    if scene_cfg.kind == "cube":
        return Cube(scene_cfg.size)
    if scene_cfg.kind == "polygons":
        return PolygonGroup.from_indexed(np.asarray(scene_cfg.points, dtype=np.float64), scene_cfg.faces)
    raise ValueError(f"Unsupported scene kind: {scene_cfg.kind}")
