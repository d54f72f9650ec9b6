"""
Pytest configuration and shared fixtures for the maze_lab test suite.

This module provides common fixtures, test configuration, and utilities
used across the entire test suite.
"""

from __future__ import annotations

import pytest

from maze_lab.core.grid import MazeGrid, punch_loops
from maze_lab.generation import generate_maze
from maze_lab.utils.lab_logging import configure_logging

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "slow: Slow tests (larger mazes run to completion)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)

        # Mark slow tests based on name patterns
        if "large" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def restore_logging():
    """Reset engine logging so no test leaves a handler on a replaced stdout."""
    yield
    configure_logging(level="WARNING", use_colors=False)


# =============================================================================
# Grid Fixtures
# =============================================================================


@pytest.fixture
def open_room():
    """5x5 grid whose whole 3x3 interior is open."""
    return MazeGrid.from_text(
        [
            "#####",
            "#...#",
            "#...#",
            "#...#",
            "#####",
        ]
    )


@pytest.fixture
def corridor():
    """7x7 grid with a single straight corridor along row 1."""
    return MazeGrid.from_text(
        [
            "#######",
            "#.....#",
            "#######",
            "#######",
            "#######",
            "#######",
            "#######",
        ]
    )


@pytest.fixture
def walled_goal():
    """7x7 grid whose goal corner is sealed off from the start."""
    return MazeGrid.from_text(
        [
            "#######",
            "#...#.#",
            "#...#.#",
            "#####.#",
            "#.....#",
            "#.....#",
            "#######",
        ]
    )


@pytest.fixture
def small_loop():
    """
    7x7 grid with one 2x2 open block next to the start.

    Start (1, 1) sits in the block; the goal (1, 5) is reached along row 2.
    A robot that keeps following the block's walls circles forever.
    """
    return MazeGrid.from_text(
        [
            "#######",
            "#..##.#",
            "#.....#",
            "#######",
            "#######",
            "#######",
            "#######",
        ]
    )


@pytest.fixture
def perfect_maze():
    """Seeded 21x21 perfect maze."""
    return generate_maze(21, algorithm="recursive_backtracker", seed=42)


@pytest.fixture
def looped_maze():
    """Seeded 21x21 maze with extra openings that create cycles."""
    return punch_loops(generate_maze(21, algorithm="kruskals", seed=7), count=6, seed=7)


@pytest.fixture(params=[3, 11, 42])
def seed(request):
    """Parametrized random seed."""
    return request.param
