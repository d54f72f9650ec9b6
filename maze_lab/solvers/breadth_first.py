"""Breadth-first search: expands in rings, so the first path found is shortest."""

from __future__ import annotations

from maze_lab.core.grid import Coord

from .search import FrontierSearch


class BreadthFirstSearch(FrontierSearch):
    name = "bfs"
    display_name = "Breadth-First Search"
    description = "FIFO frontier; guaranteed shortest path"

    def _pop(self, frontier: tuple[Coord, ...]) -> tuple[Coord, tuple[Coord, ...]]:
        return frontier[0], frontier[1:]
