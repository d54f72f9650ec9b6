"""
Randomised Kruskal's algorithm.

Every room starts open and in its own set. Candidate connectors between
horizontally and vertically adjacent rooms are shuffled once; each step
inspects one and opens it only when the two rooms are still in different
sets, so no loop can ever form.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace

from maze_lab.core.grid import Coord, MazeGrid

from .base import GenerationAlgorithm, GenerationState
from .union_find import UnionFind

Edge = tuple[Coord, Coord, Coord]


@dataclass(frozen=True, kw_only=True)
class KruskalsState(GenerationState):
    """
    Attributes:
        edges: Shuffled (room_a, room_b, connector) triples
        processed: Number of edges already inspected
        sets: Room partition; replaced, never modified, on each union
    """

    edges: tuple[Edge, ...]
    processed: int = 0
    sets: UnionFind = field(compare=False)


def room_index(cell: Coord, size: int) -> int:
    """Dense index of a room cell in row-major room order."""
    rooms_per_side = (size - 1) // 2
    return (cell[0] - 1) // 2 * rooms_per_side + (cell[1] - 1) // 2


class Kruskals(GenerationAlgorithm[KruskalsState]):
    name = "kruskals"
    display_name = "Kruskal's"
    description = "Random edge merging with union-find; uniform texture, no directional bias"

    def _initial_state(self, grid: MazeGrid, rng: random.Random) -> KruskalsState:
        rooms = grid.room_cells()
        edges: list[Edge] = []
        for room in rooms:
            for neighbor in ((room[0], room[1] + 2), (room[0] + 2, room[1])):
                if grid.is_room(neighbor):
                    edges.append((room, neighbor, MazeGrid.connector_between(room, neighbor)))
        rng.shuffle(edges)

        return KruskalsState(
            grid=grid.with_opened(*rooms),
            edges=tuple(edges),
            sets=UnionFind(len(rooms)),
            is_complete=not edges,
            rng_state=rng.getstate(),
        )

    def _advance(self, state: KruskalsState, rng: random.Random) -> KruskalsState:
        room_a, room_b, connector = state.edges[state.processed]
        processed = state.processed + 1
        size = state.grid.size

        sets = state.sets.copy()
        grid = state.grid
        if sets.union(room_index(room_a, size), room_index(room_b, size)):
            grid = grid.with_opened(connector)

        return replace(
            state,
            grid=grid,
            sets=sets,
            processed=processed,
            current=connector,
            is_complete=processed >= len(state.edges),
        )
