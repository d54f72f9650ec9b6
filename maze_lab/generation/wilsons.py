"""
Wilson's algorithm using loop-erased random walks.

Produces a uniform spanning tree: every perfect maze on the room lattice is
equally likely. Each step extends the current walk by one room, erasing any
loop it closes; when the walk hits the tree, the whole walk is carved.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from maze_lab.core.grid import Coord, MazeGrid

from .base import GenerationAlgorithm, GenerationState


@dataclass(frozen=True, kw_only=True)
class WilsonsState(GenerationState):
    """
    Attributes:
        in_tree: Rooms already part of the maze
        unvisited: Rooms not yet in the tree, in row-major order
        walk: Current loop-erased walk, newest room last
    """

    in_tree: frozenset[Coord]
    unvisited: tuple[Coord, ...]
    walk: tuple[Coord, ...]


class Wilsons(GenerationAlgorithm[WilsonsState]):
    name = "wilsons"
    display_name = "Wilson's"
    description = "Loop-erased random walks; unbiased uniform spanning tree"

    def _initial_state(self, grid: MazeGrid, rng: random.Random) -> WilsonsState:
        rooms = grid.room_cells()
        seed_room = rng.choice(rooms)
        unvisited = tuple(room for room in rooms if room != seed_room)
        walk = (rng.choice(unvisited),) if unvisited else ()

        return WilsonsState(
            grid=grid.with_opened(*rooms),
            in_tree=frozenset({seed_room}),
            unvisited=unvisited,
            walk=walk,
            current=walk[-1] if walk else None,
            is_complete=not unvisited,
            rng_state=rng.getstate(),
        )

    def _advance(self, state: WilsonsState, rng: random.Random) -> WilsonsState:
        head = state.walk[-1]

        if head in state.in_tree:
            connectors = [MazeGrid.connector_between(a, b) for a, b in zip(state.walk, state.walk[1:], strict=False)]
            in_tree = state.in_tree | set(state.walk)
            unvisited = tuple(room for room in state.unvisited if room not in in_tree)
            walk = (rng.choice(unvisited),) if unvisited else ()
            return replace(
                state,
                grid=state.grid.with_opened(*connectors),
                in_tree=in_tree,
                unvisited=unvisited,
                walk=walk,
                current=walk[-1] if walk else None,
                is_complete=not unvisited,
            )

        chosen = rng.choice(state.grid.room_neighbors(head))
        if chosen in state.walk:
            walk = state.walk[: state.walk.index(chosen) + 1]
        else:
            walk = (*state.walk, chosen)
        return replace(state, walk=walk, current=chosen)
