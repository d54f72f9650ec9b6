"""Random walk: a uniformly random open neighbour every step. The baseline."""

from __future__ import annotations

import random
from dataclasses import replace

from .robot import RobotSolver, RobotState


class RandomWalk(RobotSolver[RobotState]):
    name = "random_walk"
    display_name = "Random Walk"
    description = "Memoryless uniform moves; slow but eventually succeeds on connected grids"
    default_budget_factor = 3

    def _move(self, state: RobotState, rng: random.Random) -> RobotState:
        neighbors = state.grid.open_neighbors(state.current)
        if not neighbors:
            return replace(state, stuck=True)
        return self._moved(state, rng.choice(neighbors))
