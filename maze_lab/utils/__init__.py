"""Shared utilities: exceptions and logging."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    InvalidGridError,
    MazeGenerationError,
    MazeLabError,
    UnknownAlgorithmError,
)
from .lab_logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "InvalidGridError",
    "MazeGenerationError",
    "MazeLabError",
    "UnknownAlgorithmError",
    "configure_logging",
    "get_logger",
]
