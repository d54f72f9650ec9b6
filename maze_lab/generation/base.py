"""
Common machinery for steppable perfect-maze generators.

A generator starts from a fully blocked N x N grid (some algorithms open
every room up front) and carves connectors one step at a time until the open
cells form a spanning tree over all rooms.
"""

from __future__ import annotations

import random
from abc import abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, TypeVar

from maze_lab.core.grid import MazeGrid
from maze_lab.core.stepping import AlgorithmState, SteppableAlgorithm, restore_rng
from maze_lab.utils.exceptions import ConfigurationError
from maze_lab.utils.lab_logging import get_logger

logger = get_logger(__name__)

MIN_MAZE_SIZE = 5


@dataclass(frozen=True, kw_only=True)
class GenerationState(AlgorithmState):
    """State shared by all generators; ``rng_state`` is the serialized RNG."""

    rng_state: tuple[Any, ...] = field(repr=False)


G = TypeVar("G", bound=GenerationState)


def validate_maze_size(size: Any, algorithm_name: str | None = None) -> int:
    """
    Check that ``size`` is an odd integer of at least 5.

    Raises:
        ConfigurationError: If the size cannot hold a room lattice
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise ConfigurationError("size", size, expected_type=int, algorithm_name=algorithm_name)
    if size < MIN_MAZE_SIZE:
        raise ConfigurationError(
            "size",
            size,
            valid_range=(MIN_MAZE_SIZE, float("inf")),
            algorithm_name=algorithm_name,
            reason="maze too small",
        )
    if size % 2 == 0:
        raise ConfigurationError("size", size, algorithm_name=algorithm_name, reason="size must be odd")
    return size


class GenerationAlgorithm(SteppableAlgorithm[G]):
    """
    Base class for maze generators.

    Subclasses implement ``_initial_state`` and ``_advance``; the base class
    handles size validation, RNG restoration and step counting.
    """

    def init(self, size: int, seed: int | None = None) -> G:
        """
        Create the initial state for an N x N maze.

        Args:
            size: Odd side length, at least 5
            seed: Random seed for reproducibility

        Returns:
            Initial generation state
        """
        validate_maze_size(size, self.name)
        rng = random.Random(seed)
        state = self._initial_state(MazeGrid.blocked(size), rng)
        logger.debug("%s initialised: size=%d seed=%s", self.display_name, size, seed)
        return state

    def step(self, state: G) -> G:
        if state.is_complete:
            return state
        rng = restore_rng(state.rng_state)
        advanced = self._advance(state, rng)
        new_state = replace(advanced, step_count=state.step_count + 1, rng_state=rng.getstate())
        if new_state.is_complete:
            logger.debug("%s finished after %d steps", self.display_name, new_state.step_count)
        return new_state

    def generate(self, size: int, seed: int | None = None) -> MazeGrid:
        """Run the generator to completion and return the carved grid."""
        return self.run_to_completion(self.init(size, seed)).grid

    @abstractmethod
    def _initial_state(self, grid: MazeGrid, rng: random.Random) -> G:
        """Build the initial state; must record ``rng.getstate()``."""

    @abstractmethod
    def _advance(self, state: G, rng: random.Random) -> G:
        """Perform one carving step on a non-complete state."""
