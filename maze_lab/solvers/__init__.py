"""Steppable maze solvers: the shortest-path family and the robot family."""

from __future__ import annotations

from .astar import AStar, AStarState
from .base import SolverAlgorithm, SolverState
from .breadth_first import BreadthFirstSearch
from .depth_first import DepthFirstSearch
from .pledge import Pledge, PledgeState, goalward_direction
from .random_walk import RandomWalk
from .registry import ROBOT_SOLVERS, SHORTEST_PATH_SOLVERS, SOLVERS, SolverName, create_solver, solver_family
from .robot import RobotSolver, RobotState
from .search import FrontierSearch, SearchState, reconstruct_path
from .tremaux import Tremaux, TremauxState

__all__ = [
    "ROBOT_SOLVERS",
    "SHORTEST_PATH_SOLVERS",
    "SOLVERS",
    "AStar",
    "AStarState",
    "BreadthFirstSearch",
    "DepthFirstSearch",
    "FrontierSearch",
    "Pledge",
    "PledgeState",
    "RandomWalk",
    "RobotSolver",
    "RobotState",
    "SearchState",
    "SolverAlgorithm",
    "SolverName",
    "SolverState",
    "Tremaux",
    "TremauxState",
    "create_solver",
    "goalward_direction",
    "reconstruct_path",
    "solver_family",
]
