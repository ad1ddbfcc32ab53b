"""Motion: sliding-block boards measured by A* search."""

from __future__ import annotations

from .generator import MotionMetrics, MotionPuzzle, generate_puzzle
from .items import ItemKind, MotionItem, Orientation, Position
from .occupancy import Move, get_valid_moves, is_overlap
from .play import MotionBoard, attempt_move, is_solved
from .solver import SolveResult, astar_search, solve_astar

__all__ = [
    "ItemKind",
    "Move",
    "MotionBoard",
    "MotionItem",
    "MotionMetrics",
    "MotionPuzzle",
    "Orientation",
    "Position",
    "SolveResult",
    "astar_search",
    "attempt_move",
    "generate_puzzle",
    "get_valid_moves",
    "is_overlap",
    "is_solved",
    "solve_astar",
]
