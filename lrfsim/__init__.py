"""lrfsim – 2D laser range finder simulator for planar-polygon scenes.

Produces synthetic, noisy LRF scans against known ground truth for testing
perception and localization code:
- Pose algebra and elementary rotations (geometry.pose, geometry.rotations)
- Planes and quadrilateral polygons in 3D (geometry.plane, geometry.polygon)
- LRF intrinsics, range noise, single sensors and multi-sensor rigs (sensors.*)
- Scannable scenes built from polygons, including a cube preset (scenes)
- YAML scenario configuration and a one-call scan runner (config, sdk)
"""

from .core.exceptions import (
    LrfSimError,
    InvalidPoseError,
    NotCoplanarError,
    InvalidConfigurationError,
    UnsupportedOutputFormatError,
    ScanTargetCapabilityError,
)
from .geometry.pose import Pose, compose, inverse_compose, compose_inverse, transform_points
from .geometry.rotations import rotation_x, rotation_y, rotation_z
from .geometry.plane import Plane, plane_in_frame
from .geometry.polygon import Polygon
from .sensors.config import LrfConfig
from .sensors.noise import NoiseModel, GaussianRangeNoise
from .sensors.base import PolygonScan, ScanResult, Scannable, Sensor
from .sensors.lrf import SimLrf
from .sensors.device import SimLrfDevice
from .scenes import PolygonGroup, Cube
from .sdk import scan_from_config
