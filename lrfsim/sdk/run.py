from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from ..config import ScenarioConfig, load_config
from ..core.utils import get_logger
from ..runtime.builders import build_device, build_scene
from ..sensors.base import ScanOutput, check_output_format

_log = get_logger()


@dataclass(frozen=True)
class ConfigScanResult:
    """Scans produced by a scenario described by a configuration file."""

    scans: List[ScanOutput]
    config: ScenarioConfig


def scan_from_config(
    config: Union[str, Path, ScenarioConfig],
    *,
    seed: Optional[int] = None,
    output_format: Optional[str] = None,
) -> ConfigScanResult:
    """Scan the configured scene with every LRF of the configured device.

    Parameters
    ----------
    config:
        Path to a YAML file or a pre-loaded :class:`~lrfsim.config.schema.ScenarioConfig`.
    seed:
        Optional RNG seed. Falls back to the value in the config or ``12345``.
    output_format:
        Optional override for the result layout (``"array"`` or ``"sparse"``).

    Returns
    -------
    ConfigScanResult
        One scan per device sensor (declaration order) and the resolved
        configuration object used for the run.
    """

    cfg = load_config(config) if not isinstance(config, ScenarioConfig) else config.model_copy(deep=True)

    if output_format is not None:
        cfg.output_format = check_output_format(output_format)

    scene = build_scene(cfg)
    device = build_device(cfg.device)

    run_seed = seed if seed is not None else (cfg.seed if cfg.seed is not None else 12345)
    rng = np.random.default_rng(run_seed)

    scans = device.scan(scene, cfg.output_format, rng)
    _log.info(
        "Scenario finished: %d sensors, %d polygons, seed %d", len(scans), len(scene), run_seed
    )
    return ConfigScanResult(scans=scans, config=cfg)
