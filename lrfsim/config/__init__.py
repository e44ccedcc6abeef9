"""Configuration loading utilities for lrfsim."""

from .schema import (
    ScenarioConfig,
    load_config,
)

__all__ = ["ScenarioConfig", "load_config"]
