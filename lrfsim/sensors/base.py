from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Literal, Optional, Protocol, Union, runtime_checkable
import numpy as np

from ..core.exceptions import UnsupportedOutputFormatError
from ..geometry.polygon import Polygon
from ..geometry.pose import Pose
from .config import LrfConfig

OutputFormat = Literal["array", "sparse"]
OUTPUT_FORMATS = ("array", "sparse")
NO_OBJECT = -1


def check_output_format(output_format: str) -> str:
    if output_format not in OUTPUT_FORMATS:
        raise UnsupportedOutputFormatError(output_format, OUTPUT_FORMATS)
    return output_format


@dataclass
class PolygonScan:
    """Samples of one polygon: contained points and the rays that produced them."""
    points: np.ndarray      # (K, 2) in the sensor frame
    indices: np.ndarray     # (K,) ray indices

    def __iter__(self) -> Iterator[np.ndarray]:
        yield self.points
        yield self.indices


@dataclass
class ScanResult:
    """Dense scan: one slot per ray, NaN points and ``-1`` ids where nothing was hit."""
    points: np.ndarray      # (N, 2) in the sensor frame
    object_id: np.ndarray   # (N,) ordinal of the object that produced each sample

    def __iter__(self) -> Iterator[np.ndarray]:
        yield self.points
        yield self.object_id

    @property
    def valid(self) -> np.ndarray:
        return self.object_id != NO_OBJECT

    @property
    def ranges(self) -> np.ndarray:
        return np.linalg.norm(self.points, axis=1)

    @property
    def count(self) -> int:
        return int(np.count_nonzero(self.valid))


ScanOutput = Union[ScanResult, List[PolygonScan]]


class Sensor(Protocol):
    pose: Pose
    config: LrfConfig

    @property
    def directions_2d(self) -> np.ndarray: ...

    def scan_polygon(self, polygon: Polygon, rng: Optional[np.random.Generator] = None) -> PolygonScan: ...

    def scan(
        self,
        target: "Scannable",
        output_format: OutputFormat = "array",
        rng: Optional[np.random.Generator] = None,
    ) -> ScanOutput: ...


@runtime_checkable
class Scannable(Protocol):
    def get_scan_by(
        self,
        sensor: Sensor,
        output_format: OutputFormat = "array",
        rng: Optional[np.random.Generator] = None,
    ) -> ScanOutput: ...
