from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("maze-lab")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .core import Coord, Direction, MazeGrid, Outcome, punch_loops, verify_perfect_maze
from .driver import Race, RunStatistics, Stepper, speed_to_interval
from .generation import MazeAlgorithm, create_generator, generate_maze
from .solvers import ROBOT_SOLVERS, SHORTEST_PATH_SOLVERS, SolverName, create_solver, solver_family
from .utils import (
    ConfigurationError,
    InvalidGridError,
    MazeGenerationError,
    MazeLabError,
    UnknownAlgorithmError,
    configure_logging,
    get_logger,
)

__all__ = [
    "ROBOT_SOLVERS",
    "SHORTEST_PATH_SOLVERS",
    "ConfigurationError",
    "Coord",
    "Direction",
    "InvalidGridError",
    "MazeAlgorithm",
    "MazeGenerationError",
    "MazeGrid",
    "MazeLabError",
    "Outcome",
    "Race",
    "RunStatistics",
    "SolverName",
    "Stepper",
    "UnknownAlgorithmError",
    "__version__",
    "configure_logging",
    "create_generator",
    "create_solver",
    "generate_maze",
    "get_logger",
    "punch_loops",
    "solver_family",
    "speed_to_interval",
    "verify_perfect_maze",
]
