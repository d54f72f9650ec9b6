"""
A* search with the Manhattan heuristic.

The heuristic is admissible and consistent on a 4-connected unit-cost grid,
so every expanded cell is final and the returned path is shortest. Heap
entries are ``(f, h, order, cell)``: ties on f prefer cells nearer the goal,
then insertion order. A cell re-queued with a better g leaves a stale entry
behind, which is skipped when popped.
"""

from __future__ import annotations

import heapq
import random
from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType

from maze_lab.core.grid import Coord, MazeGrid, manhattan

from .base import SolverAlgorithm
from .search import SearchState, reconstruct_path

HeapEntry = tuple[int, int, int, Coord]


@dataclass(frozen=True, kw_only=True)
class AStarState(SearchState):
    """
    ``frontier`` holds heap entries; ``visited`` is the closed set.

    Attributes:
        g_score: Best known distance from start for each discovered cell
        counter: Next insertion order for heap entries
    """

    g_score: Mapping[Coord, int]
    counter: int = 0

    @property
    def frontier_cells(self) -> tuple[Coord, ...]:
        return tuple(entry[3] for entry in self.frontier)


class AStar(SolverAlgorithm[AStarState]):
    name = "astar"
    display_name = "A*"
    description = "Best-first on g + Manhattan distance; shortest path, fewer expansions than BFS"
    family = "shortest_path"

    def _initial_state(self, grid: MazeGrid, start: Coord, goal: Coord, rng: random.Random) -> AStarState:
        h = manhattan(start, goal)
        return AStarState(
            grid=grid,
            start=start,
            goal=goal,
            current=start,
            frontier=((h, h, 0, start),),
            visited=frozenset(),
            parent=MappingProxyType({}),
            g_score=MappingProxyType({start: 0}),
            counter=1,
            rng_state=rng.getstate(),
        )

    def _advance(self, state: AStarState, rng: random.Random) -> AStarState:
        heap: list[HeapEntry] = list(state.frontier)
        g_score = state.g_score

        cell = None
        while heap:
            f, h, _, candidate = heapq.heappop(heap)
            if candidate in state.visited or f != g_score[candidate] + h:
                continue
            cell = candidate
            break

        if cell is None:
            return replace(state, frontier=(), current=None, exhausted=True, is_complete=True)

        if cell == state.goal:
            path = reconstruct_path(state.parent, state.start, cell)
            return replace(state, frontier=tuple(heap), current=cell, path=path, is_complete=True)

        closed = state.visited | {cell}
        new_g = dict(g_score)
        parent = dict(state.parent)
        counter = state.counter
        tentative = g_score[cell] + 1
        for neighbor in state.grid.open_neighbors(cell):
            if neighbor in closed or tentative >= new_g.get(neighbor, tentative + 1):
                continue
            new_g[neighbor] = tentative
            parent[neighbor] = cell
            h = manhattan(neighbor, state.goal)
            heapq.heappush(heap, (tentative + h, h, counter, neighbor))
            counter += 1

        return replace(
            state,
            frontier=tuple(heap),
            visited=closed,
            g_score=MappingProxyType(new_g),
            parent=MappingProxyType(parent),
            counter=counter,
            current=cell,
        )
