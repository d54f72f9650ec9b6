"""
Logging utilities for maze_lab.

Usage:
    >>> from maze_lab.utils.lab_logging import get_logger, configure_logging
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("Racing solvers...")
"""

from __future__ import annotations

from .logger import (
    LabFormatter,
    LabLogger,
    configure_development_logging,
    configure_logging,
    get_logger,
)

__all__ = [
    "LabFormatter",
    "LabLogger",
    "configure_development_logging",
    "configure_logging",
    "get_logger",
]
