"""
Grid model shared by every maze algorithm.

A maze is a square matrix of side N whose cells are either walls (1) or
passages (0). Coordinates are ``(row, col)`` with row growing southward.

Generation convention:
- Room cells have both coordinates odd and lie strictly inside the border.
- Connector cells have exactly one even coordinate and join the two rooms on
  either side of them.
- Cells with both coordinates even (pillars) are never opened by a generator.

A perfect maze opens every room and exactly ``rooms - 1`` connectors so the
open cells form a spanning tree: one simple path between any two rooms.

Grids are immutable. ``with_opened`` returns a modified copy, so states that
share a grid by reference can never observe each other's changes.
"""

from __future__ import annotations

import random
from collections import deque
from enum import IntEnum
from typing import TYPE_CHECKING, Any

import numpy as np

from maze_lab.utils.exceptions import InvalidGridError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from numpy.typing import ArrayLike, NDArray

Coord = tuple[int, int]

WALL = 1
PASSAGE = 0
MIN_GRID_SIDE = 3


class Direction(IntEnum):
    """Cardinal directions in clockwise order, so +1 is a right turn."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]

    def turned_right(self) -> Direction:
        return Direction((self + 1) % 4)

    def turned_left(self) -> Direction:
        return Direction((self + 3) % 4)

    def reversed(self) -> Direction:
        return Direction((self + 2) % 4)

    def step(self, cell: Coord, distance: int = 1) -> Coord:
        """Cell reached by moving ``distance`` cells from ``cell`` in this direction."""
        dr, dc = _DELTAS[self]
        return (cell[0] + dr * distance, cell[1] + dc * distance)

    @classmethod
    def between(cls, origin: Coord, target: Coord) -> Direction:
        """Direction of an orthogonally adjacent ``target`` as seen from ``origin``."""
        delta = (target[0] - origin[0], target[1] - origin[1])
        for direction, direction_delta in _DELTAS.items():
            if direction_delta == delta:
                return direction
        raise ValueError(f"{target} is not orthogonally adjacent to {origin}")


_DELTAS: dict[Direction, Coord] = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}


def manhattan(a: Coord, b: Coord) -> int:
    """Manhattan distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def default_endpoints(size: int) -> tuple[Coord, Coord]:
    """Conventional start and goal: opposite interior corners."""
    return (1, 1), (size - 2, size - 2)


class MazeGrid:
    """
    Immutable square wall/passage grid.

    The cell data lives in a read-only ``int8`` numpy array. Out-of-range or
    malformed coordinates are reported as blocked instead of raising, so a
    single bad neighbour lookup cannot break a long step sequence.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: ArrayLike):
        """
        Build a grid from nested sequences or an array of 0/1 values.

        Args:
            cells: Square 2-D data, 1 = wall, 0 = passage

        Raises:
            InvalidGridError: If the data is ragged, not square, too small,
                or contains values other than 0 and 1
        """
        try:
            array = np.array(cells, dtype=np.int8)
        except (TypeError, ValueError) as e:
            raise InvalidGridError("cells are not a rectangular numeric array") from e

        if array.ndim != 2:
            raise InvalidGridError(f"expected 2 dimensions, got {array.ndim}", array.shape)
        if array.shape[0] != array.shape[1]:
            raise InvalidGridError("grid must be square", array.shape)
        if array.shape[0] < MIN_GRID_SIDE:
            raise InvalidGridError(f"side length must be at least {MIN_GRID_SIDE}", array.shape)
        if not np.isin(array, (WALL, PASSAGE)).all():
            raise InvalidGridError("cells must be 0 (passage) or 1 (wall)", array.shape)

        array.setflags(write=False)
        self._cells = array

    @classmethod
    def _wrap(cls, array: NDArray[np.int8]) -> MazeGrid:
        """Adopt an already validated array without copying or re-checking it."""
        grid = object.__new__(cls)
        array.setflags(write=False)
        grid._cells = array
        return grid

    @classmethod
    def blocked(cls, size: int) -> MazeGrid:
        """Grid of the given side length with every cell a wall."""
        if size < MIN_GRID_SIDE:
            raise InvalidGridError(f"side length must be at least {MIN_GRID_SIDE}", (size, size))
        return cls._wrap(np.ones((size, size), dtype=np.int8))

    @classmethod
    def from_text(cls, text: str | Iterable[str], wall: str = "#") -> MazeGrid:
        """
        Parse a grid drawn as text.

        Every ``wall`` character is a wall, every other character a passage.

        Example:
            >>> grid = MazeGrid.from_text(["#####", "#...#", "#####", "#####", "#####"])
            >>> grid.is_open((1, 2))
            True
        """
        lines = text.strip("\n").splitlines() if isinstance(text, str) else list(text)
        widths = {len(line) for line in lines}
        if len(widths) > 1:
            raise InvalidGridError(f"ragged rows with widths {sorted(widths)}")
        return cls([[WALL if ch == wall else PASSAGE for ch in line] for line in lines])

    # ------------------------------------------------------------------
    # Basic queries
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Side length N."""
        return self._cells.shape[0]

    @property
    def cells(self) -> NDArray[np.int8]:
        """Read-only view of the cell array."""
        return self._cells

    def in_bounds(self, cell: Any) -> bool:
        try:
            row, col = cell
        except (TypeError, ValueError):
            return False
        if not isinstance(row, (int, np.integer)) or not isinstance(col, (int, np.integer)):
            return False
        return 0 <= row < self.size and 0 <= col < self.size

    def is_open(self, cell: Any) -> bool:
        """True for an in-bounds passage; anything else counts as blocked."""
        if not self.in_bounds(cell):
            return False
        return bool(self._cells[cell[0], cell[1]] == PASSAGE)

    def open_neighbors(self, cell: Coord) -> list[Coord]:
        """Open orthogonal neighbours in N, E, S, W order."""
        return [n for n in (d.step(cell) for d in Direction) if self.is_open(n)]

    def open_cell_count(self) -> int:
        return int(np.count_nonzero(self._cells == PASSAGE))

    # ------------------------------------------------------------------
    # Room / connector convention
    # ------------------------------------------------------------------

    def is_room(self, cell: Any) -> bool:
        if not self.in_bounds(cell):
            return False
        row, col = cell
        return row % 2 == 1 and col % 2 == 1 and row < self.size - 1 and col < self.size - 1

    def room_cells(self) -> list[Coord]:
        """All room cells in row-major order."""
        return [(row, col) for row in range(1, self.size - 1, 2) for col in range(1, self.size - 1, 2)]

    def room_count(self) -> int:
        return ((self.size - 1) // 2) ** 2

    def room_neighbors(self, cell: Coord) -> list[Coord]:
        """Rooms two cells away in N, E, S, W order."""
        return [n for n in (d.step(cell, 2) for d in Direction) if self.is_room(n)]

    @staticmethod
    def connector_between(a: Coord, b: Coord) -> Coord:
        """Connector cell joining two rooms two cells apart."""
        return ((a[0] + b[0]) // 2, (a[1] + b[1]) // 2)

    # ------------------------------------------------------------------
    # Copy-on-write updates and conversion
    # ------------------------------------------------------------------

    def with_opened(self, *cells: Coord) -> MazeGrid:
        """Copy of this grid with the given cells turned into passages."""
        array = self._cells.copy()
        for row, col in cells:
            array[row, col] = PASSAGE
        return MazeGrid._wrap(array)

    def to_numpy(self) -> NDArray[np.int8]:
        """Writable copy of the cell array."""
        return self._cells.copy()

    def to_text(self, markers: Mapping[Coord, str] | None = None, wall: str = "#", passage: str = " ") -> str:
        """Render as text, overlaying single-character ``markers`` on cells."""
        markers = markers or {}
        rows = []
        for row in range(self.size):
            chars = []
            for col in range(self.size):
                mark = markers.get((row, col))
                if mark is not None:
                    chars.append(mark)
                else:
                    chars.append(wall if self._cells[row, col] == WALL else passage)
            rows.append("".join(chars))
        return "\n".join(rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MazeGrid):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self.size, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"MazeGrid(size={self.size}, open_cells={self.open_cell_count()})"


def verify_perfect_maze(grid: MazeGrid) -> dict[str, Any]:
    """
    Verify that a maze is perfect (every room connected, no loops).

    A perfect maze must satisfy:
    1. Every room cell is open
    2. Connectivity: every open cell is reachable from the first room
    3. Acyclicity: the open cells and their orthogonal adjacencies form a
       graph with exactly (open cells - 1) edges
    4. Exactly (rooms - 1) connectors are open

    Args:
        grid: Maze grid to verify

    Returns:
        Dictionary with verification results including:
        - is_perfect: Overall validity
        - is_connected: Connectivity check
        - is_no_loops: Acyclicity check
        - room_count: Number of room cells
        - open_cells: Number of passage cells
        - reachable_cells: Open cells reachable from the first room
        - passage_count: Number of open connectors
        - expected_passages: Expected connectors for a perfect maze
        - edge_count: Orthogonal open-open adjacencies
    """
    open_mask = grid.cells == PASSAGE
    open_cells = int(np.count_nonzero(open_mask))

    rows, cols = np.indices(open_mask.shape)
    connector_mask = (rows % 2 + cols % 2) == 1
    passage_count = int(np.count_nonzero(open_mask & connector_mask))

    edge_count = int(
        np.count_nonzero(open_mask[:, :-1] & open_mask[:, 1:]) + np.count_nonzero(open_mask[:-1, :] & open_mask[1:, :])
    )

    rooms = grid.room_cells()
    rooms_open = all(grid.is_open(room) for room in rooms)

    reachable = 0
    if rooms and grid.is_open(rooms[0]):
        seen = {rooms[0]}
        queue = deque([rooms[0]])
        while queue:
            cell = queue.popleft()
            for neighbor in grid.open_neighbors(cell):
                if neighbor not in seen:
                    seen.add(neighbor)
                    queue.append(neighbor)
        reachable = len(seen)

    expected_passages = len(rooms) - 1
    is_connected = rooms_open and reachable == open_cells
    is_no_loops = edge_count == open_cells - 1

    return {
        "is_perfect": is_connected and is_no_loops and passage_count == expected_passages,
        "is_connected": is_connected,
        "is_no_loops": is_no_loops,
        "room_count": len(rooms),
        "open_cells": open_cells,
        "reachable_cells": reachable,
        "passage_count": passage_count,
        "expected_passages": expected_passages,
        "edge_count": edge_count,
    }


def punch_loops(grid: MazeGrid, count: int = 6, seed: int | None = None) -> MazeGrid:
    """
    Open extra interior walls to deliberately create cycles.

    Candidates are wall cells at least two cells from the border with an open
    vertical neighbour and an open horizontal neighbour. In a perfect maze these
    are pillars at the corner of two open connectors, so every opening closes a
    small loop (often a 2x2 open block). Robot solvers that assume an acyclic
    maze are raced on such grids.

    Args:
        grid: Maze to modify (left untouched)
        count: Maximum number of openings
        seed: Random seed for reproducibility

    Returns:
        New grid with up to ``count`` additional passages
    """
    candidates = [
        (row, col)
        for row in range(2, grid.size - 2)
        for col in range(2, grid.size - 2)
        if not grid.is_open((row, col))
        and (grid.is_open((row - 1, col)) or grid.is_open((row + 1, col)))
        and (grid.is_open((row, col - 1)) or grid.is_open((row, col + 1)))
    ]
    rng = random.Random(seed)
    chosen = rng.sample(candidates, min(max(count, 0), len(candidates)))
    return grid.with_opened(*chosen)
