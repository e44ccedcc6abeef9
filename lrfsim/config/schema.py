from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Optional, Union, List

import yaml
from pydantic import BaseModel, Field, model_validator


class PoseConfig(BaseModel):
    xyz: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rpy_deg: tuple[float, float, float] = (0.0, 0.0, 0.0)
    matrix: Optional[List[List[float]]] = None

    @model_validator(mode="after")
    def _validate_matrix(self) -> "PoseConfig":
        if self.matrix is not None:
            rows = len(self.matrix)
            if rows not in (3, 4) or any(len(row) != 4 for row in self.matrix):
                raise ValueError("pose matrix must be 3x4 or 4x4")
        return self


class LrfIntrinsicsConfig(BaseModel):
    num_rays: int = 1081
    fov_deg: float = 270.2
    sigma_range_m: float = 0.03
    range_m: tuple[float, float] = (0.1, 30.0)


class LrfSensorConfig(BaseModel):
    pose: PoseConfig = PoseConfig()
    intrinsics: LrfIntrinsicsConfig = LrfIntrinsicsConfig()


class DeviceConfig(BaseModel):
    pose: PoseConfig = PoseConfig()
    sensors: List[LrfSensorConfig] = Field(min_length=1)


class CubeSceneConfig(BaseModel):
    kind: Literal["cube"]
    size: float = 1.0


class PolygonsSceneConfig(BaseModel):
    kind: Literal["polygons"]
    points: List[tuple[float, float, float]]
    faces: List[tuple[int, int, int, int]] = Field(min_length=1)

    @model_validator(mode="after")
    def _validate_faces(self) -> "PolygonsSceneConfig":
        n = len(self.points)
        for k, face in enumerate(self.faces):
            if any(i < 0 or i >= n for i in face):
                raise ValueError(f"face {k} references points outside [0, {n})")
        return self


SceneConfig = Annotated[
    Union[CubeSceneConfig, PolygonsSceneConfig],
    Field(discriminator="kind"),
]


class ScenarioConfig(BaseModel):
    scene: SceneConfig
    device: DeviceConfig
    output_format: Literal["array", "sparse"] = "array"
    seed: Optional[int] = None


def load_config(path: str | Path) -> ScenarioConfig:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError("Configuration root must be a mapping.")
    return ScenarioConfig.model_validate(data)
