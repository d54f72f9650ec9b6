"""Pydantic configuration models and YAML I/O."""

from __future__ import annotations

from .core import DriverConfig, LabConfig, LoggingConfig, MazeConfig, SolverConfig
from .io import apply_overrides, load_lab_config, save_lab_config

__all__ = [
    "DriverConfig",
    "LabConfig",
    "LoggingConfig",
    "MazeConfig",
    "SolverConfig",
    "apply_overrides",
    "load_lab_config",
    "save_lab_config",
]
