"""Stepping driver for generators and solvers."""

from __future__ import annotations

from .stepper import History, Race, RunStatistics, Stepper, speed_to_interval

__all__ = ["History", "Race", "RunStatistics", "Stepper", "speed_to_interval"]
