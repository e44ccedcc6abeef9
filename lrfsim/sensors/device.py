from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from ..geometry.pose import Pose
from ..core.utils import get_logger
from .base import OutputFormat, Scannable, ScanOutput, check_output_format
from .lrf import SimLrf

_log = get_logger()


@dataclass(frozen=True, eq=False)
class SimLrfDevice:
    """Rig of several LRFs sharing one device pose.

    Each sensor's pose is its extrinsic calibration relative to the device.
    """

    pose: Pose = field(default_factory=Pose.identity)
    sensors: Sequence[SimLrf] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pose", Pose.from_any(self.pose))
        sensors = tuple(self.sensors)
        for sensor in sensors:
            if not isinstance(sensor, SimLrf):
                raise TypeError(f"Device sensors must be SimLrf instances, got {type(sensor).__name__}.")
        object.__setattr__(self, "sensors", sensors)

    def world_sensors(self) -> List[SimLrf]:
        """Copies of the contained sensors with poses in the world frame."""
        return [sensor.rebased(self.pose) for sensor in self.sensors]

    def scan(
        self,
        target: Scannable,
        output_format: OutputFormat = "array",
        rng: Optional[np.random.Generator] = None,
    ) -> List[ScanOutput]:
        """One scan result per contained sensor, in declaration order."""
        check_output_format(output_format)
        if rng is None:
            rng = np.random.default_rng()
        results = [sensor.scan(target, output_format, rng) for sensor in self.world_sensors()]
        _log.debug("SimLrfDevice: %d sensors scanned %s.", len(results), type(target).__name__)
        return results
