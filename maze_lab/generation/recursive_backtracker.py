"""
Recursive Backtracker (randomised depth-first search).

Produces long winding corridors with few dead ends. Each step either carves
into a random unvisited neighbouring room or backtracks one cell.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from maze_lab.core.grid import Coord, MazeGrid

from .base import GenerationAlgorithm, GenerationState


@dataclass(frozen=True, kw_only=True)
class BacktrackerState(GenerationState):
    stack: tuple[Coord, ...]
    visited: frozenset[Coord]


class RecursiveBacktracker(GenerationAlgorithm[BacktrackerState]):
    name = "recursive_backtracker"
    display_name = "Recursive Backtracker"
    description = "Depth-first carving; long corridors and a high river factor"

    def __init__(self, start: Coord = (1, 1)):
        self.start = start

    def _initial_state(self, grid: MazeGrid, rng: random.Random) -> BacktrackerState:
        start = self.start if grid.is_room(self.start) else (1, 1)
        return BacktrackerState(
            grid=grid.with_opened(start),
            current=start,
            stack=(start,),
            visited=frozenset({start}),
            rng_state=rng.getstate(),
        )

    def _advance(self, state: BacktrackerState, rng: random.Random) -> BacktrackerState:
        top = state.stack[-1]
        candidates = [n for n in state.grid.room_neighbors(top) if n not in state.visited]

        if not candidates:
            stack = state.stack[:-1]
            return replace(state, stack=stack, current=stack[-1] if stack else None, is_complete=not stack)

        chosen = rng.choice(candidates)
        return replace(
            state,
            grid=state.grid.with_opened(MazeGrid.connector_between(top, chosen), chosen),
            stack=(*state.stack, chosen),
            visited=state.visited | {chosen},
            current=chosen,
        )
