"""
Common machinery for steppable maze solvers.

Solvers read the grid but never modify it; the grid in every solver state is
the one passed to ``init``, shared by reference.
"""

from __future__ import annotations

import random
from abc import abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, TypeVar

from maze_lab.core.grid import Coord, MazeGrid, default_endpoints
from maze_lab.core.stepping import AlgorithmState, SteppableAlgorithm, restore_rng
from maze_lab.utils.exceptions import ConfigurationError
from maze_lab.utils.lab_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, kw_only=True)
class SolverState(AlgorithmState):
    """
    Attributes:
        start: Start cell
        goal: Goal cell
        path: Found path (shortest-path family) or trail walked (robots)
        rng_state: Serialized random generator state
    """

    start: Coord
    goal: Coord
    path: tuple[Coord, ...] | None = None
    rng_state: tuple[Any, ...] = field(repr=False)


SS = TypeVar("SS", bound=SolverState)


def resolve_endpoint(grid: MazeGrid, cell: Any, default: Coord, parameter: str, algorithm_name: str) -> Coord:
    """Normalise an endpoint to a ``(row, col)`` tuple and check it is open."""
    if cell is None:
        cell = default
    try:
        resolved = (int(cell[0]), int(cell[1]))
    except (TypeError, ValueError, IndexError) as e:
        raise ConfigurationError(parameter, cell, expected_type=tuple, algorithm_name=algorithm_name) from e
    if not grid.is_open(resolved):
        raise ConfigurationError(
            parameter, resolved, algorithm_name=algorithm_name, reason="cell is a wall or out of bounds"
        )
    return resolved


class SolverAlgorithm(SteppableAlgorithm[SS]):
    """Base class for solvers; subclasses implement ``_initial_state`` and ``_advance``."""

    family: ClassVar[str] = ""

    def init(
        self,
        grid: MazeGrid,
        start: Coord | None = None,
        goal: Coord | None = None,
        seed: int | None = None,
    ) -> SS:
        """
        Create the initial state for solving ``grid``.

        Args:
            grid: Maze to solve
            start: Start cell, defaults to ``(1, 1)``
            goal: Goal cell, defaults to ``(N-2, N-2)``
            seed: Random seed for reproducibility

        Raises:
            ConfigurationError: If an endpoint is not an open in-bounds cell
        """
        default_start, default_goal = default_endpoints(grid.size)
        start = resolve_endpoint(grid, start, default_start, "start", self.name)
        goal = resolve_endpoint(grid, goal, default_goal, "goal", self.name)
        return self._initial_state(grid, start, goal, random.Random(seed))

    def step(self, state: SS) -> SS:
        if state.is_terminal:
            return state
        rng = restore_rng(state.rng_state)
        advanced = self._advance(state, rng)
        new_state = replace(advanced, step_count=state.step_count + 1, rng_state=rng.getstate())
        if new_state.is_terminal:
            logger.debug(
                "%s terminated after %d steps: %s", self.display_name, new_state.step_count, new_state.outcome.value
            )
        return new_state

    def solve(
        self,
        grid: MazeGrid,
        start: Coord | None = None,
        goal: Coord | None = None,
        seed: int | None = None,
    ) -> SS:
        """Initialise and run to a terminal state."""
        return self.run_to_completion(self.init(grid, start, goal, seed))

    @abstractmethod
    def _initial_state(self, grid: MazeGrid, start: Coord, goal: Coord, rng: random.Random) -> SS:
        """Build the initial state; must record ``rng.getstate()``."""

    @abstractmethod
    def _advance(self, state: SS, rng: random.Random) -> SS:
        """Perform one step on a non-terminal state."""
