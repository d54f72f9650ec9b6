"""
Pledge algorithm: head for the goal, wall-follow around obstacles.

The robot tracks the signed sum of its turns (right +90, left -90, reverse
+180). Whenever the sum is exactly zero it may leave the wall and step along
the goal's dominant axis; otherwise it follows the right-hand wall. Counting
turns is what lets plain Pledge escape obstacles a pure goal-seeker would
circle forever.

Two extensions make it practical on looped grids:

- Loop escape: after ``loop_turn_threshold`` degrees of net turning on a
  cell already visited more than ``loop_revisit_threshold`` times, the
  goal-ward attempt is forced and a successful attempt resets the angle.
- Goal-ward budget: a goal-ward step into a cell visited
  ``max_goalward_visits`` times is refused, so greedy moves are finite and
  wall-following (which tours every corridor of a perfect maze) takes over.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from maze_lab.core.grid import Coord, Direction
from maze_lab.utils.exceptions import ConfigurationError

from .robot import RobotSolver, RobotState

# (turn, angle change) in wall-following priority order
WALL_FOLLOW_TURNS = (
    (Direction.turned_right, 90),
    (lambda heading: heading, 0),
    (Direction.turned_left, -90),
    (Direction.reversed, 180),
)


@dataclass(frozen=True, kw_only=True)
class PledgeState(RobotState):
    angle: int = 0


def goalward_direction(cell: Coord, goal: Coord) -> Direction:
    """Direction along the axis with the larger remaining distance; ties go vertical."""
    d_row = goal[0] - cell[0]
    d_col = goal[1] - cell[1]
    if abs(d_col) > abs(d_row):
        return Direction.EAST if d_col > 0 else Direction.WEST
    return Direction.SOUTH if d_row > 0 else Direction.NORTH


class Pledge(RobotSolver[PledgeState]):
    name = "pledge"
    display_name = "Pledge"
    description = "Goal-seeking with turn-counted right-hand wall following and loop escape"
    state_class = PledgeState

    def __init__(
        self,
        step_budget_factor: int | None = None,
        loop_turn_threshold: int | None = 720,
        loop_revisit_threshold: int = 3,
        max_goalward_visits: int | None = 2,
    ):
        super().__init__(step_budget_factor)
        if loop_turn_threshold is not None and loop_turn_threshold <= 0:
            raise ConfigurationError("loop_turn_threshold", loop_turn_threshold, algorithm_name=self.name)
        if max_goalward_visits is not None and max_goalward_visits < 1:
            raise ConfigurationError("max_goalward_visits", max_goalward_visits, algorithm_name=self.name)
        self.loop_turn_threshold = loop_turn_threshold
        self.loop_revisit_threshold = loop_revisit_threshold
        self.max_goalward_visits = max_goalward_visits

    def _in_loop(self, state: PledgeState) -> bool:
        if self.loop_turn_threshold is None:
            return False
        return abs(state.angle) >= self.loop_turn_threshold and state.visits(state.current) > self.loop_revisit_threshold

    def _move(self, state: PledgeState, rng: random.Random) -> PledgeState:
        current = state.current

        if state.angle == 0 or self._in_loop(state):
            preferred = goalward_direction(current, state.goal)
            target = preferred.step(current)
            if state.grid.is_open(target) and (
                self.max_goalward_visits is None or state.visits(target) < self.max_goalward_visits
            ):
                return self._moved(state, target, heading=preferred, angle=0)

        for turn, delta in WALL_FOLLOW_TURNS:
            heading = turn(state.heading)
            target = heading.step(current)
            if state.grid.is_open(target):
                return self._moved(state, target, heading=heading, angle=state.angle + delta)

        return replace(state, stuck=True)
