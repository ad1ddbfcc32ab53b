"""Deduction-depth and anchor analysis for GeoSudo puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence

from .grid import Cell, candidates, known_in_col, known_in_row

DEPTH_ELIMINATION = 1
DEPTH_INTERSECTION = 2
DEPTH_STRATEGIC = 3

METHOD_LABELS = {
    DEPTH_ELIMINATION: "Row/Col Elimination",
    DEPTH_INTERSECTION: "Row-Col Intersection",
    DEPTH_STRATEGIC: "Strategic Deduction",
}


@dataclass(frozen=True)
class DeductionResult:
    depth: int
    method: str


@dataclass(frozen=True)
class DifficultyMetrics:
    """Difficulty summary attached to a generated puzzle."""

    depth: int
    method: str
    anchors: int
    empty_cells: int
    attempts: int
    relaxed: bool = False
    fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "depth": self.depth,
            "method": self.method,
            "anchors": self.anchors,
            "empty_cells": self.empty_cells,
            "attempts": self.attempts,
            "relaxed": self.relaxed,
            "fallback": self.fallback,
        }


def analyze_deduction(
    grid: Sequence[Sequence[Cell]], row: int, col: int, shapes: Sequence[str]
) -> DeductionResult:
    """Classify how much reasoning the blank at (row, col) needs.

    Depth 1 when the question's row or column already holds ``len(shapes) - 1``
    known cells, depth 2 when exactly one shape survives the combined row and
    column constraints, depth 3 otherwise.
    """

    forced_line = len(shapes) - 1
    if known_in_row(grid, row) == forced_line or known_in_col(grid, col) == forced_line:
        depth = DEPTH_ELIMINATION
    elif len(candidates(grid, row, col, shapes)) == 1:
        depth = DEPTH_INTERSECTION
    else:
        depth = DEPTH_STRATEGIC
    return DeductionResult(depth=depth, method=METHOD_LABELS[depth])


def count_anchors(grid: Sequence[Sequence[Cell]]) -> int:
    """Number of fully filled rows plus fully filled columns."""

    size = len(grid)
    rows = sum(1 for r in range(size) if all(v is not None for v in grid[r]))
    cols = sum(1 for c in range(size) if all(grid[r][c] is not None for r in range(size)))
    return rows + cols


def port_analyze(puzzle: Dict[str, Any]) -> Dict[str, Any]:
    """Analyze a puzzle payload and return its deduction metrics."""

    if not isinstance(puzzle, dict):
        raise TypeError("puzzle must be a mapping")
    grid = puzzle.get("grid")
    shapes = puzzle.get("shapes")
    row = puzzle.get("question_row")
    col = puzzle.get("question_col")
    if not (isinstance(grid, list) and isinstance(shapes, list)):
        raise ValueError("puzzle must contain grid and shapes lists")
    if not (isinstance(row, int) and isinstance(col, int)):
        raise ValueError("puzzle must define integer question_row and question_col")

    result = analyze_deduction(grid, row, col, shapes)
    return {"depth": result.depth, "method": result.method, "anchors": count_anchors(grid)}


__all__ = [
    "DEPTH_ELIMINATION",
    "DEPTH_INTERSECTION",
    "DEPTH_STRATEGIC",
    "DeductionResult",
    "DifficultyMetrics",
    "METHOD_LABELS",
    "analyze_deduction",
    "count_anchors",
    "port_analyze",
]
