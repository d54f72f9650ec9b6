"""
Perfect maze generation registry.

All registered algorithms produce perfect mazes with two critical properties:
1. Fully Connected: a path exists between any two rooms
2. No Loops: exactly one simple path between any pair of rooms

Implemented Algorithms:
- Recursive Backtracker (DFS): long winding paths, few dead ends
- Prim's: frontier growth, many short dead ends
- Kruskal's: random edge merging with union-find, uniform texture
- Wilson's: loop-erased random walks, unbiased sampling
- Binary Tree: per-room coin flip, strong north-east bias

Mathematical Foundation:
Perfect mazes are spanning trees on the room lattice, ensuring:
- Connectivity: |V| rooms connected by |V|-1 connectors
- Acyclicity: no loops in the graph structure

Reference: Jamis Buck, "Mazes for Programmers" (2015)
"""

from __future__ import annotations

from enum import Enum

from maze_lab.core.grid import MazeGrid, punch_loops, verify_perfect_maze
from maze_lab.utils.exceptions import MazeGenerationError, UnknownAlgorithmError
from maze_lab.utils.lab_logging import get_logger

from .base import GenerationAlgorithm
from .binary_tree import BinaryTree
from .kruskals import Kruskals
from .prims import Prims
from .recursive_backtracker import RecursiveBacktracker
from .wilsons import Wilsons

logger = get_logger(__name__)


class MazeAlgorithm(Enum):
    """Available perfect maze generation algorithms."""

    RECURSIVE_BACKTRACKER = "recursive_backtracker"
    PRIMS = "prims"
    KRUSKALS = "kruskals"
    WILSONS = "wilsons"
    BINARY_TREE = "binary_tree"


GENERATORS: dict[MazeAlgorithm, type[GenerationAlgorithm]] = {
    MazeAlgorithm.RECURSIVE_BACKTRACKER: RecursiveBacktracker,
    MazeAlgorithm.PRIMS: Prims,
    MazeAlgorithm.KRUSKALS: Kruskals,
    MazeAlgorithm.WILSONS: Wilsons,
    MazeAlgorithm.BINARY_TREE: BinaryTree,
}


def create_generator(algorithm: str | MazeAlgorithm) -> GenerationAlgorithm:
    """
    Instantiate a generator by name.

    Raises:
        UnknownAlgorithmError: If the name is not registered
    """
    try:
        key = MazeAlgorithm(algorithm)
    except ValueError as e:
        raise UnknownAlgorithmError(str(algorithm), "generation", [a.value for a in MazeAlgorithm]) from e
    return GENERATORS[key]()


def generate_maze(
    size: int,
    algorithm: str | MazeAlgorithm = "recursive_backtracker",
    seed: int | None = None,
    extra_openings: int = 0,
) -> MazeGrid:
    """
    High-level function to generate a maze.

    Args:
        size: Odd side length of the grid, at least 5
        algorithm: Generator name (see ``MazeAlgorithm``)
        seed: Random seed for reproducibility
        extra_openings: Walls to punch after carving; any value above zero
            deliberately introduces loops

    Returns:
        Maze grid (1 = wall, 0 = passage)

    Raises:
        MazeGenerationError: If the carved maze is not perfect

    Example:
        >>> grid = generate_maze(21, algorithm="kruskals", seed=42)
        >>> grid.size
        21
    """
    generator = create_generator(algorithm)
    grid = generator.generate(size, seed=seed)

    verification = verify_perfect_maze(grid)
    if not verification["is_perfect"]:
        raise MazeGenerationError(generator.name, verification)

    if extra_openings > 0:
        grid = punch_loops(grid, count=extra_openings, seed=seed)
        logger.debug("Punched up to %d extra openings into %s maze", extra_openings, generator.name)

    return grid
