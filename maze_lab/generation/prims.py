"""Randomised Prim's algorithm: grow the maze from a random frontier room."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from maze_lab.core.grid import Coord, MazeGrid

from .base import GenerationAlgorithm, GenerationState


@dataclass(frozen=True, kw_only=True)
class PrimsState(GenerationState):
    frontier: tuple[Coord, ...]
    visited: frozenset[Coord]


class Prims(GenerationAlgorithm[PrimsState]):
    name = "prims"
    display_name = "Prim's"
    description = "Random frontier growth; many short dead ends radiating from the start"

    def __init__(self, start: Coord = (1, 1)):
        self.start = start

    def _initial_state(self, grid: MazeGrid, rng: random.Random) -> PrimsState:
        start = self.start if grid.is_room(self.start) else (1, 1)
        frontier = tuple(grid.room_neighbors(start))
        return PrimsState(
            grid=grid.with_opened(start),
            current=start,
            frontier=frontier,
            visited=frozenset({start}),
            is_complete=not frontier,
            rng_state=rng.getstate(),
        )

    def _advance(self, state: PrimsState, rng: random.Random) -> PrimsState:
        index = rng.randrange(len(state.frontier))
        cell = state.frontier[index]
        remaining = state.frontier[:index] + state.frontier[index + 1 :]

        linked = [n for n in state.grid.room_neighbors(cell) if n in state.visited]
        if not linked:
            return replace(state, frontier=remaining, is_complete=not remaining)

        anchor = rng.choice(linked)
        visited = state.visited | {cell}
        pending = set(remaining)
        additions = tuple(n for n in state.grid.room_neighbors(cell) if n not in visited and n not in pending)
        frontier = remaining + additions

        return replace(
            state,
            grid=state.grid.with_opened(MazeGrid.connector_between(cell, anchor), cell),
            frontier=frontier,
            visited=visited,
            current=cell,
            is_complete=not frontier,
        )
