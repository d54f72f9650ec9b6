"""
Binary Tree algorithm.

Visits rooms in row-major order and opens the wall above or to the right of
each one. Fast and simple, with a strong north-east diagonal bias: the top row
and right column are always unbroken corridors.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from maze_lab.core.grid import Coord, MazeGrid

from .base import GenerationAlgorithm, GenerationState


@dataclass(frozen=True, kw_only=True)
class BinaryTreeState(GenerationState):
    cells: tuple[Coord, ...]
    cursor: int = 0


class BinaryTree(GenerationAlgorithm[BinaryTreeState]):
    name = "binary_tree"
    display_name = "Binary Tree"
    description = "Per-room coin flip between north and east; strong diagonal bias"

    def _initial_state(self, grid: MazeGrid, rng: random.Random) -> BinaryTreeState:
        rooms = tuple(grid.room_cells())
        return BinaryTreeState(
            grid=grid.with_opened(*rooms),
            cells=rooms,
            is_complete=not rooms,
            rng_state=rng.getstate(),
        )

    def _advance(self, state: BinaryTreeState, rng: random.Random) -> BinaryTreeState:
        row, col = state.cells[state.cursor]
        options = []
        if row > 1:
            options.append((row - 1, col))
        if col < state.grid.size - 2:
            options.append((row, col + 1))

        grid = state.grid.with_opened(rng.choice(options)) if options else state.grid
        cursor = state.cursor + 1
        return replace(state, grid=grid, cursor=cursor, current=(row, col), is_complete=cursor >= len(state.cells))
