"""Solver registry: names, families and construction."""

from __future__ import annotations

from enum import Enum
from typing import Any

from maze_lab.utils.exceptions import UnknownAlgorithmError

from .astar import AStar
from .base import SolverAlgorithm
from .breadth_first import BreadthFirstSearch
from .depth_first import DepthFirstSearch
from .pledge import Pledge
from .random_walk import RandomWalk
from .tremaux import Tremaux


class SolverName(Enum):
    """Available maze solvers."""

    BFS = "bfs"
    DFS = "dfs"
    ASTAR = "astar"
    PLEDGE = "pledge"
    TREMAUX = "tremaux"
    RANDOM_WALK = "random_walk"


SOLVERS: dict[SolverName, type[SolverAlgorithm]] = {
    SolverName.BFS: BreadthFirstSearch,
    SolverName.DFS: DepthFirstSearch,
    SolverName.ASTAR: AStar,
    SolverName.PLEDGE: Pledge,
    SolverName.TREMAUX: Tremaux,
    SolverName.RANDOM_WALK: RandomWalk,
}

SHORTEST_PATH_SOLVERS = tuple(name.value for name, cls in SOLVERS.items() if cls.family == "shortest_path")
ROBOT_SOLVERS = tuple(name.value for name, cls in SOLVERS.items() if cls.family == "robot")


def _lookup(name: str | SolverName) -> type[SolverAlgorithm]:
    try:
        return SOLVERS[SolverName(name)]
    except ValueError as e:
        raise UnknownAlgorithmError(str(name), "solver", [s.value for s in SolverName]) from e


def create_solver(name: str | SolverName, **kwargs: Any) -> SolverAlgorithm:
    """
    Instantiate a solver by name.

    Keyword arguments are passed to the solver's constructor, e.g.
    ``step_budget_factor`` for robots.

    Raises:
        UnknownAlgorithmError: If the name is not registered
    """
    return _lookup(name)(**kwargs)


def solver_family(name: str | SolverName) -> str:
    """``"shortest_path"`` or ``"robot"``."""
    return _lookup(name).family
