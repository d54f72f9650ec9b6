"""
Tremaux's algorithm: mark passages and avoid walking them more than twice.

Cell visit counts stand in for chalk marks. The robot prefers fresh ground,
then a once-visited cell it did not just leave, and otherwise backs out via
the least-visited neighbour. On a finite connected grid it always reaches
the goal, loops included.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from maze_lab.core.grid import Coord

from .robot import RobotSolver, RobotState


@dataclass(frozen=True, kw_only=True)
class TremauxState(RobotState):
    previous: Coord | None = None


class Tremaux(RobotSolver[TremauxState]):
    name = "tremaux"
    display_name = "Tremaux"
    description = "Marks visited cells; explores fresh ground first and backtracks out of dead ends"
    state_class = TremauxState

    def _move(self, state: TremauxState, rng: random.Random) -> TremauxState:
        neighbors = state.grid.open_neighbors(state.current)
        if not neighbors:
            return replace(state, stuck=True)

        unvisited = [n for n in neighbors if state.visits(n) == 0]
        if unvisited:
            chosen = rng.choice(unvisited)
        else:
            once = [n for n in neighbors if state.visits(n) == 1 and n != state.previous]
            chosen = once[0] if once else min(neighbors, key=state.visits)

        return self._moved(state, chosen, previous=state.current)
