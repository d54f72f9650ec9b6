"""
Shared pieces of the robot family.

A robot only senses the four cells around it and remembers how often it has
stood on each cell. It moves one cell per step, accumulating the trail it
walked in ``path``. Each run has a step budget of ``factor * N * N``; a robot
that exhausts it, or finds itself walled in, reports STUCK.
"""

from __future__ import annotations

import random
from abc import abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar

from maze_lab.core.grid import Coord, Direction, MazeGrid
from maze_lab.core.stepping import Outcome
from maze_lab.utils.exceptions import ConfigurationError

from .base import SolverAlgorithm, SolverState


@dataclass(frozen=True, kw_only=True)
class RobotState(SolverState):
    """
    Attributes:
        heading: Direction of the last move (east before the first one)
        visit_counts: Times the robot has stood on each cell, start included
        step_budget: Steps allowed before the robot gives up
        stuck: True once the robot has given up
    """

    heading: Direction = Direction.EAST
    visit_counts: Mapping[Coord, int]
    step_budget: int
    stuck: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.is_complete or self.stuck

    @property
    def outcome(self) -> Outcome:
        if self.is_complete:
            return Outcome.SUCCESS
        return Outcome.STUCK if self.stuck else Outcome.RUNNING

    @property
    def visited(self) -> frozenset[Coord]:
        return frozenset(self.visit_counts)

    def visits(self, cell: Coord) -> int:
        return self.visit_counts.get(cell, 0)


R = TypeVar("R", bound=RobotState)


class RobotSolver(SolverAlgorithm[R]):
    """
    Base class for robots.

    Subclasses implement ``_move`` and may extend the state through
    ``state_class`` and ``_initial_fields``.
    """

    family = "robot"
    state_class: ClassVar[type[RobotState]] = RobotState
    default_budget_factor: ClassVar[int] = 8

    def __init__(self, step_budget_factor: int | None = None):
        if step_budget_factor is None:
            step_budget_factor = self.default_budget_factor
        if isinstance(step_budget_factor, bool) or not isinstance(step_budget_factor, int) or step_budget_factor < 1:
            raise ConfigurationError(
                "step_budget_factor", step_budget_factor, expected_type=int, algorithm_name=self.name
            )
        self.step_budget_factor = step_budget_factor

    def _initial_fields(self) -> dict[str, Any]:
        return {}

    def _initial_state(self, grid: MazeGrid, start: Coord, goal: Coord, rng: random.Random) -> R:
        return self.state_class(
            grid=grid,
            start=start,
            goal=goal,
            current=start,
            path=(start,),
            visit_counts=MappingProxyType({start: 1}),
            step_budget=self.step_budget_factor * grid.size * grid.size,
            rng_state=rng.getstate(),
            **self._initial_fields(),
        )

    def _advance(self, state: R, rng: random.Random) -> R:
        if state.current == state.goal:
            return replace(state, is_complete=True)
        if state.step_count >= state.step_budget:
            return replace(state, stuck=True)
        return self._move(state, rng)

    @abstractmethod
    def _move(self, state: R, rng: random.Random) -> R:
        """Move one cell, or mark the robot stuck."""

    @staticmethod
    def _moved(state: R, cell: Coord, **changes: Any) -> R:
        """State after stepping onto ``cell``, with extra field ``changes``."""
        counts = dict(state.visit_counts)
        counts[cell] = counts.get(cell, 0) + 1
        changes.setdefault("heading", Direction.between(state.current, cell))
        return replace(
            state,
            current=cell,
            path=(*state.path, cell),
            visit_counts=MappingProxyType(counts),
            is_complete=cell == state.goal,
            **changes,
        )
