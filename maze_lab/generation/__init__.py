"""Steppable perfect-maze generators."""

from __future__ import annotations

from .base import GenerationAlgorithm, GenerationState, validate_maze_size
from .binary_tree import BinaryTree, BinaryTreeState
from .kruskals import Kruskals, KruskalsState
from .maze_generator import GENERATORS, MazeAlgorithm, create_generator, generate_maze
from .prims import Prims, PrimsState
from .recursive_backtracker import BacktrackerState, RecursiveBacktracker
from .union_find import UnionFind
from .wilsons import Wilsons, WilsonsState

__all__ = [
    "GENERATORS",
    "BacktrackerState",
    "BinaryTree",
    "BinaryTreeState",
    "GenerationAlgorithm",
    "GenerationState",
    "Kruskals",
    "KruskalsState",
    "MazeAlgorithm",
    "Prims",
    "PrimsState",
    "RecursiveBacktracker",
    "UnionFind",
    "Wilsons",
    "WilsonsState",
    "create_generator",
    "generate_maze",
    "validate_maze_size",
]
