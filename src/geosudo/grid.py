# grid.py
# Row/column constraint checks, seeded backtracking fill and the
# question-cell uniqueness counter for GeoSudo grids.

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from seeded_random import SeededRandom

Cell = Optional[str]
Grid = List[List[Cell]]
FrozenGrid = Tuple[Tuple[Cell, ...], ...]

# ---------- Utils ----------

def empty_grid(size: int) -> Grid:
    return [[None] * size for _ in range(size)]

def grid_copy(g: Sequence[Sequence[Cell]]) -> Grid:
    return [list(row) for row in g]

def freeze(g: Sequence[Sequence[Cell]]) -> FrozenGrid:
    return tuple(tuple(row) for row in g)

def count_empty(g: Sequence[Sequence[Cell]]) -> int:
    return sum(1 for row in g for v in row if v is None)

def known_in_row(g: Sequence[Sequence[Cell]], row: int) -> int:
    return sum(1 for v in g[row] if v is not None)

def known_in_col(g: Sequence[Sequence[Cell]], col: int) -> int:
    return sum(1 for row in g if row[col] is not None)

# ---------- Constraint checks ----------

def is_valid_placement(g: Sequence[Sequence[Cell]], row: int, col: int, shape: str) -> bool:
    """True iff ``shape`` appears nowhere else in ``row`` or ``col``."""
    for c, v in enumerate(g[row]):
        if c != col and v == shape:
            return False
    for r in range(len(g)):
        if r != row and g[r][col] == shape:
            return False
    return True

def is_grid_valid(g: Sequence[Sequence[Cell]]) -> bool:
    """Latin-square check over the non-empty cells of every row and column."""
    size = len(g)
    for r in range(size):
        seen = set()
        for c in range(size):
            v = g[r][c]
            if v is None:
                continue
            if v in seen:
                return False
            seen.add(v)
    for c in range(size):
        seen = set()
        for r in range(size):
            v = g[r][c]
            if v is None:
                continue
            if v in seen:
                return False
            seen.add(v)
    return True

def candidates(g: Sequence[Sequence[Cell]], row: int, col: int, shapes: Sequence[str]) -> List[str]:
    return [s for s in shapes if is_valid_placement(g, row, col, s)]

def _first_empty(g: Sequence[Sequence[Cell]]) -> Optional[Tuple[int, int]]:
    for r, row in enumerate(g):
        for c, v in enumerate(row):
            if v is None:
                return r, c
    return None

# ---------- Backtracking ----------

def fill_grid(g: Grid, shapes: Sequence[str], rng: SeededRandom) -> bool:
    """Fill every empty cell of ``g`` in place.

    Cells are visited in row-major order and the shapes are tried in an order
    shuffled by ``rng`` at each cell.  Returns ``False`` (leaving ``g`` as it
    was) when no completion exists from the current partial grid.
    """
    cell = _first_empty(g)
    if cell is None:
        return True
    r, c = cell
    for shape in rng.shuffled(shapes):
        if is_valid_placement(g, r, c, shape):
            g[r][c] = shape
            if fill_grid(g, shapes, rng):
                return True
            g[r][c] = None
    return False

def can_finish_grid(g: Grid, shapes: Sequence[str]) -> bool:
    """Deterministic completability check; ``g`` is restored before returning."""
    cell = _first_empty(g)
    if cell is None:
        return True
    r, c = cell
    for shape in shapes:
        if is_valid_placement(g, r, c, shape):
            g[r][c] = shape
            ok = can_finish_grid(g, shapes)
            g[r][c] = None
            if ok:
                return True
    return False

def count_solutions_for_target(
    g: Sequence[Sequence[Cell]], row: int, col: int, shapes: Sequence[str]
) -> int:
    """Count the shapes that can fill (row, col) with the rest still completable.

    Only the target cell's answer is counted: other blanks may admit several
    completions as long as the target value is forced.
    """
    work = grid_copy(g)
    work[row][col] = None
    count = 0
    for shape in shapes:
        if not is_valid_placement(work, row, col, shape):
            continue
        work[row][col] = shape
        if can_finish_grid(work, shapes):
            count += 1
        work[row][col] = None
    return count


__all__ = [
    "Cell",
    "FrozenGrid",
    "Grid",
    "candidates",
    "can_finish_grid",
    "count_empty",
    "count_solutions_for_target",
    "empty_grid",
    "fill_grid",
    "freeze",
    "grid_copy",
    "is_grid_valid",
    "is_valid_placement",
    "known_in_col",
    "known_in_row",
]
