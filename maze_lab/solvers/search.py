"""
Shared pieces of the shortest-path family.

BFS and DFS differ only in which end of the frontier they pop from; both mark
a cell visited when it is pushed, so no cell is ever queued twice.
"""

from __future__ import annotations

import random
from abc import abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from maze_lab.core.grid import Coord, MazeGrid
from maze_lab.core.stepping import Outcome

from .base import SolverAlgorithm, SolverState


@dataclass(frozen=True, kw_only=True)
class SearchState(SolverState):
    """
    Attributes:
        frontier: Cells waiting to be expanded
        visited: Cells already discovered
        parent: Link from each discovered cell to the cell it was reached from
        exhausted: True when the frontier emptied without reaching the goal
    """

    frontier: tuple[Any, ...]
    visited: frozenset[Coord]
    parent: Mapping[Coord, Coord]
    exhausted: bool = False

    @property
    def frontier_cells(self) -> tuple[Coord, ...]:
        return self.frontier

    @property
    def outcome(self) -> Outcome:
        if not self.is_complete:
            return Outcome.RUNNING
        return Outcome.EXHAUSTED if self.exhausted else Outcome.SUCCESS


def reconstruct_path(parent: Mapping[Coord, Coord], start: Coord, goal: Coord) -> tuple[Coord, ...]:
    """Walk parent links back from ``goal`` and return the start-to-goal path."""
    path = [goal]
    cell = goal
    while cell != start:
        cell = parent[cell]
        path.append(cell)
    path.reverse()
    return tuple(path)


class FrontierSearch(SolverAlgorithm[SearchState]):
    """Uninformed search over a tuple frontier; subclasses choose the pop end."""

    family = "shortest_path"

    @abstractmethod
    def _pop(self, frontier: tuple[Coord, ...]) -> tuple[Coord, tuple[Coord, ...]]:
        """Return the next cell and the remaining frontier."""

    def _initial_state(self, grid: MazeGrid, start: Coord, goal: Coord, rng: random.Random) -> SearchState:
        return SearchState(
            grid=grid,
            start=start,
            goal=goal,
            current=start,
            frontier=(start,),
            visited=frozenset({start}),
            parent=MappingProxyType({}),
            rng_state=rng.getstate(),
        )

    def _advance(self, state: SearchState, rng: random.Random) -> SearchState:
        if not state.frontier:
            return replace(state, current=None, exhausted=True, is_complete=True)

        cell, rest = self._pop(state.frontier)
        if cell == state.goal:
            path = reconstruct_path(state.parent, state.start, cell)
            return replace(state, frontier=rest, current=cell, path=path, is_complete=True)

        discovered = [n for n in state.grid.open_neighbors(cell) if n not in state.visited]
        parent = dict(state.parent)
        parent.update((n, cell) for n in discovered)
        return replace(
            state,
            frontier=rest + tuple(discovered),
            visited=state.visited | set(discovered),
            parent=MappingProxyType(parent),
            current=cell,
        )
