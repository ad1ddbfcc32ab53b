# generator.py
# Fill complete Latin squares, blank cells under the question-cell uniqueness
# rule, and classify the result against the level's difficulty tier.

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from project_config import get_section
from seeded_random import MODULUS, SeededRandom, derive_seed

from .analyzer import DeductionResult, DifficultyMetrics, analyze_deduction, count_anchors
from .grid import (
    FrozenGrid,
    Grid,
    count_empty,
    count_solutions_for_target,
    empty_grid,
    fill_grid,
    freeze,
    grid_copy,
)
from .tiers import DifficultyTier, tier_for_level

_LOGGER = logging.getLogger(__name__)

GEOSUDO_CONFIG = get_section("geosudo", default={})

GRID_SIZE = int(GEOSUDO_CONFIG.get("grid_size", 4))
SHAPES: Tuple[str, ...] = tuple(
    GEOSUDO_CONFIG.get("shapes", ["circle", "plus", "triangle", "square"])
)[:GRID_SIZE]
MAX_TOTAL_ATTEMPTS = int(GEOSUDO_CONFIG.get("max_total_attempts", 500))
_thresholds = list(GEOSUDO_CONFIG.get("relax_thresholds", [200, 300]))
RELAX_DEPTH_THRESHOLD = int(_thresholds[0])
RELAX_FULL_THRESHOLD = int(_thresholds[1])


@dataclass(frozen=True)
class GeoSudoPuzzle:
    """Generated puzzle; the question cell is always empty in ``grid``."""

    level: int
    seed: int
    grid: FrozenGrid
    question_row: int
    question_col: int
    correct_answer: str
    shapes: Tuple[str, ...]
    difficulty_metrics: DifficultyMetrics

    @property
    def grid_size(self) -> int:
        return len(self.grid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "seed": self.seed,
            "grid_size": self.grid_size,
            "grid": [list(row) for row in self.grid],
            "question_row": self.question_row,
            "question_col": self.question_col,
            "correct_answer": self.correct_answer,
            "shapes": list(self.shapes),
            "difficulty_metrics": self.difficulty_metrics.to_dict(),
        }


# ---------- Attempt targets ----------

def attempt_targets(tier: DifficultyTier, attempt: int) -> Tuple[int, int, bool]:
    """Return (target depth, target anchors, relaxed) for a zero-based attempt."""
    if attempt >= RELAX_FULL_THRESHOLD:
        return 1, 2 * GRID_SIZE, True
    if attempt >= RELAX_DEPTH_THRESHOLD:
        return max(1, tier.min_depth - 1), tier.max_anchors + 1, True
    return tier.min_depth, tier.max_anchors, False

# ---------- Removal helpers ----------

def _breaks_anchor(puzzle: Grid, row: int, col: int) -> bool:
    return all(v is not None for v in puzzle[row]) or all(r[col] is not None for r in puzzle)

def _blank_line_mates(puzzle: Grid, qr: int, qc: int, rng: SeededRandom) -> bool:
    """Blank one other cell in the question's row and one in its column.

    Keeps the question from being a one-line giveaway.  Each removal must
    leave the question answer unique; returns ``False`` if a line has no
    removable cell.
    """
    row_mates = [(qr, c) for c in range(GRID_SIZE) if c != qc]
    col_mates = [(r, qc) for r in range(GRID_SIZE) if r != qr]
    for mates in (row_mates, col_mates):
        removed = False
        for r, c in rng.shuffled(mates):
            saved = puzzle[r][c]
            puzzle[r][c] = None
            if count_solutions_for_target(puzzle, qr, qc, SHAPES) == 1:
                removed = True
                break
            puzzle[r][c] = saved
        if not removed:
            return False
    return True

def _remove_cells(
    puzzle: Grid,
    qr: int,
    qc: int,
    target_empty: int,
    target_anchors: int,
    rng: SeededRandom,
) -> None:
    pending = rng.shuffled(
        [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE) if puzzle[r][c] is not None]
    )
    while pending and count_empty(puzzle) < target_empty:
        idx = 0
        # while anchors are over budget, take the next cell that breaks one
        if count_anchors(puzzle) > target_anchors:
            idx = next(
                (i for i, (r, c) in enumerate(pending) if _breaks_anchor(puzzle, r, c)),
                0,
            )
        r, c = pending.pop(idx)
        saved = puzzle[r][c]
        puzzle[r][c] = None
        if count_solutions_for_target(puzzle, qr, qc, SHAPES) != 1:
            puzzle[r][c] = saved

# ---------- Single attempt ----------

def _attempt(
    tier: DifficultyTier,
    rng: SeededRandom,
    target_anchors: int,
    enforce_line_rule: bool,
) -> Optional[Tuple[Grid, Grid, int, int]]:
    solution = empty_grid(GRID_SIZE)
    if not fill_grid(solution, SHAPES, rng):
        return None

    qr = rng.next_int(GRID_SIZE)
    qc = rng.next_int(GRID_SIZE)
    puzzle = grid_copy(solution)
    puzzle[qr][qc] = None

    if enforce_line_rule and not _blank_line_mates(puzzle, qr, qc, rng):
        return None

    target_empty = rng.randint(tier.min_empty, tier.max_empty)
    _remove_cells(puzzle, qr, qc, target_empty, target_anchors, rng)
    return puzzle, solution, qr, qc

def _fallback(level: int, seed: int, rng: SeededRandom, attempts: int) -> GeoSudoPuzzle:
    solution = empty_grid(GRID_SIZE)
    while not fill_grid(solution, SHAPES, rng):  # pragma: no cover - an empty square always fills
        solution = empty_grid(GRID_SIZE)
    qr = rng.next_int(GRID_SIZE)
    qc = rng.next_int(GRID_SIZE)
    puzzle = grid_copy(solution)
    puzzle[qr][qc] = None
    deduction = analyze_deduction(puzzle, qr, qc, SHAPES)
    metrics = DifficultyMetrics(
        depth=deduction.depth,
        method=deduction.method,
        anchors=count_anchors(puzzle),
        empty_cells=1,
        attempts=attempts,
        relaxed=True,
        fallback=True,
    )
    return GeoSudoPuzzle(
        level=level,
        seed=seed,
        grid=freeze(puzzle),
        question_row=qr,
        question_col=qc,
        correct_answer=str(solution[qr][qc]),
        shapes=SHAPES,
        difficulty_metrics=metrics,
    )

# ---------- Top-level generation ----------

def generate_puzzle(
    level: int,
    seed: Union[int, str],
    *,
    max_attempts: int = MAX_TOTAL_ATTEMPTS,
) -> GeoSudoPuzzle:
    """Generate the GeoSudo puzzle for ``level`` from ``seed``.

    Identical ``(level, seed)`` inputs always give the same puzzle.  The
    function never fails for valid arguments: once ``max_attempts`` is spent
    it returns a single-blank puzzle cut from a fresh complete grid.
    """
    tier = tier_for_level(level)
    numeric_seed = derive_seed(seed)
    rng = SeededRandom(numeric_seed)

    for attempt in range(max_attempts):
        target_depth, target_anchors, relaxed = attempt_targets(tier, attempt)
        enforce_line_rule = tier.forbid_three_known and not relaxed
        produced = _attempt(tier, rng, target_anchors, enforce_line_rule)
        if produced is None:
            continue
        puzzle, solution, qr, qc = produced

        deduction: DeductionResult = analyze_deduction(puzzle, qr, qc, SHAPES)
        anchors = count_anchors(puzzle)
        if deduction.depth < target_depth or anchors > target_anchors:
            continue

        if relaxed:
            _LOGGER.debug(
                "geosudo level %s accepted under relaxed targets at attempt %s",
                level,
                attempt + 1,
            )
        metrics = DifficultyMetrics(
            depth=deduction.depth,
            method=deduction.method,
            anchors=anchors,
            empty_cells=count_empty(puzzle),
            attempts=attempt + 1,
            relaxed=relaxed,
        )
        return GeoSudoPuzzle(
            level=level,
            seed=numeric_seed,
            grid=freeze(puzzle),
            question_row=qr,
            question_col=qc,
            correct_answer=str(solution[qr][qc]),
            shapes=SHAPES,
            difficulty_metrics=metrics,
        )

    _LOGGER.warning(
        "geosudo level %s seed %s exhausted %s attempts; returning single-blank fallback",
        level,
        numeric_seed,
        max_attempts,
    )
    return _fallback(level, numeric_seed, rng, max_attempts)


def port_generate(level: int, *, seed: Optional[Union[int, str]] = None) -> Dict[str, Any]:
    """Generate a puzzle payload; a missing seed is drawn from the system RNG
    and recorded in the payload."""

    if seed is None:
        seed = random.SystemRandom().randrange(MODULUS)
    return generate_puzzle(level, seed).to_dict()


__all__ = [
    "GRID_SIZE",
    "GeoSudoPuzzle",
    "MAX_TOTAL_ATTEMPTS",
    "RELAX_DEPTH_THRESHOLD",
    "RELAX_FULL_THRESHOLD",
    "SHAPES",
    "attempt_targets",
    "generate_puzzle",
    "port_generate",
]
