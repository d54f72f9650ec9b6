"""Depth-first search: dives down one corridor at a time. Complete but not optimal."""

from __future__ import annotations

from maze_lab.core.grid import Coord

from .search import FrontierSearch


class DepthFirstSearch(FrontierSearch):
    name = "dfs"
    display_name = "Depth-First Search"
    description = "LIFO frontier; finds a path, not necessarily the shortest"

    def _pop(self, frontier: tuple[Coord, ...]) -> tuple[Coord, tuple[Coord, ...]]:
        return frontier[-1], frontier[:-1]
