"""Exception hierarchy for lrfsim.

Geometry-breaking inputs raise at the point of violation. Numerically
degenerate rays (parallel to a plane, out of range) are not errors; they show
up as invalid samples in scan output.
"""


class LrfSimError(Exception):
    """Base class for all lrfsim errors."""


class InvalidPoseError(LrfSimError, ValueError):
    """Rotation is not orthonormal, or a pose matrix has the wrong shape or bottom row."""


class NotCoplanarError(LrfSimError, ValueError):
    """Points fail the plane-membership tolerance check.

    Attributes
    ----------
    max_distance : float
        Largest absolute distance from the plane among the checked points.
    tolerance : float
        Tolerance that was exceeded.
    """

    def __init__(self, max_distance: float, tolerance: float, message: str = "Points outside plane"):
        self.max_distance = float(max_distance)
        self.tolerance = float(tolerance)
        super().__init__(f"{message} (max |n·(p - t)| = {max_distance:.3e}, tolerance = {tolerance:.1e})")


class InvalidConfigurationError(LrfSimError, ValueError):
    """LRF intrinsic configuration is out of its valid domain."""


class UnsupportedOutputFormatError(LrfSimError, ValueError):
    """Requested scan output format is not recognised."""

    def __init__(self, output_format: object, supported: tuple[str, ...] = ("array", "sparse")):
        self.output_format = output_format
        self.supported = supported
        super().__init__(
            f"Unknown output format {output_format!r}; use one of {', '.join(supported)}"
        )


class ScanTargetCapabilityError(LrfSimError, TypeError):
    """Scan target does not implement ``get_scan_by``."""
