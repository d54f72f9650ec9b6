"""Grid model and the steppable algorithm protocol."""

from __future__ import annotations

from .grid import (
    PASSAGE,
    WALL,
    Coord,
    Direction,
    MazeGrid,
    default_endpoints,
    manhattan,
    punch_loops,
    verify_perfect_maze,
)
from .stepping import AlgorithmState, Outcome, SteppableAlgorithm, restore_rng

__all__ = [
    "PASSAGE",
    "WALL",
    "AlgorithmState",
    "Coord",
    "Direction",
    "MazeGrid",
    "Outcome",
    "SteppableAlgorithm",
    "default_endpoints",
    "manhattan",
    "punch_loops",
    "restore_rng",
    "verify_perfect_maze",
]
