# generator.py
# Build random sliding-block boards, measure them with the A* solver and keep
# the first board that needs at least the level's minimum number of moves.

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from project_config import get_section
from seeded_random import MODULUS, SeededRandom, derive_seed

from .items import MotionItem, Position, block, target, wall
from .occupancy import in_bounds, is_overlap
from .solver import astar_search, manhattan

_LOGGER = logging.getLogger(__name__)

MOTION_CONFIG = get_section("motion", default={})

ATTEMPTS = int(MOTION_CONFIG.get("attempts", 15))
MOVE_CUSHION = int(MOTION_CONFIG.get("move_cushion", 20))
MIN_MOVES_BASE = int(MOTION_CONFIG.get("min_moves_base", 6))
MIN_MOVES_STEP = int(MOTION_CONFIG.get("min_moves_step", 2))
MIN_MOVES_CAP = int(MOTION_CONFIG.get("min_moves_cap", 30))
TRIVIAL_FLOOR = int(MOTION_CONFIG.get("trivial_floor", 3))
TARGET_TRIES = int(MOTION_CONFIG.get("target_tries", 20))
WALL_TRIES = int(MOTION_CONFIG.get("wall_tries", 20))
BLOCK_TRIES = int(MOTION_CONFIG.get("block_tries", 200))
DENSITY_BASE = float(MOTION_CONFIG.get("density_base", 0.35))
DENSITY_STEP = float(MOTION_CONFIG.get("density_step", 0.03))
DENSITY_CAP = float(MOTION_CONFIG.get("density_cap", 0.6))
BAR_RATE_BASE = float(MOTION_CONFIG.get("bar_rate_base", 0.4))
BAR_RATE_STEP = float(MOTION_CONFIG.get("bar_rate_step", 0.05))
BAR_RATE_CAP = float(MOTION_CONFIG.get("bar_rate_cap", 0.85))
WALL_DIVISOR = int(MOTION_CONFIG.get("wall_divisor", 3))
GRID_STEPS: Tuple[Tuple[int, int, int], ...] = tuple(
    (int(level), int(w), int(h))
    for level, w, h in MOTION_CONFIG.get("grid_steps", [[1, 4, 5], [4, 4, 6], [7, 5, 6], [10, 5, 7]])
)

OUTCOME_IDEAL = "ideal"
OUTCOME_BEST_EFFORT = "best_effort"
OUTCOME_FALLBACK = "fallback"


@dataclass(frozen=True)
class MotionMetrics:
    min_moves_threshold: int
    attempts: int
    nodes_expanded: int
    num_walls: int
    density: float
    outcome: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_moves_threshold": self.min_moves_threshold,
            "attempts": self.attempts,
            "nodes_expanded": self.nodes_expanded,
            "num_walls": self.num_walls,
            "density": self.density,
            "outcome": self.outcome,
        }


@dataclass(frozen=True)
class MotionPuzzle:
    """Accepted board; immutable once returned."""

    difficulty_level: int
    seed: int
    items: Tuple[MotionItem, ...]
    exit_pos: Position
    grid_w: int
    grid_h: int
    min_moves: int
    metrics: MotionMetrics

    @property
    def grid_size(self) -> Tuple[int, int]:
        return self.grid_w, self.grid_h

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty_level": self.difficulty_level,
            "seed": self.seed,
            "items": [item.to_dict() for item in self.items],
            "exit_pos": self.exit_pos.to_dict(),
            "grid_size": {"w": self.grid_w, "h": self.grid_h},
            "min_moves": self.min_moves,
            "metrics": self.metrics.to_dict(),
        }

# ---------- Level curves ----------

def grid_dimensions(level: int) -> Tuple[int, int]:
    w, h = GRID_STEPS[0][1], GRID_STEPS[0][2]
    for first_level, step_w, step_h in GRID_STEPS:
        if level >= first_level:
            w, h = step_w, step_h
    return w, h

def min_moves_threshold(level: int) -> int:
    return min(MIN_MOVES_BASE + MIN_MOVES_STEP * level, MIN_MOVES_CAP)

def density_ratio(level: int) -> float:
    return min(DENSITY_BASE + DENSITY_STEP * level, DENSITY_CAP)

def bar_rate(level: int) -> float:
    return min(BAR_RATE_BASE + BAR_RATE_STEP * level, BAR_RATE_CAP)

def wall_count(level: int) -> int:
    return level // WALL_DIVISOR

# ---------- Placement ----------

def perimeter_cells(grid_w: int, grid_h: int) -> List[Position]:
    cells = []
    for x in range(grid_w):
        cells.append(Position(x, 0))
        cells.append(Position(x, grid_h - 1))
    for y in range(1, grid_h - 1):
        cells.append(Position(0, y))
        cells.append(Position(grid_w - 1, y))
    return cells

def random_exit(grid_w: int, grid_h: int, rng: SeededRandom) -> Position:
    return rng.choice(perimeter_cells(grid_w, grid_h))

def far_quadrant(exit_pos: Position, grid_w: int, grid_h: int) -> Tuple[range, range]:
    """Column and row ranges of the grid quadrant farthest from the exit."""
    if exit_pos.x < grid_w / 2:
        xs = range(grid_w // 2, grid_w)
    else:
        xs = range(0, (grid_w + 1) // 2)
    if exit_pos.y < grid_h / 2:
        ys = range(grid_h // 2, grid_h)
    else:
        ys = range(0, (grid_h + 1) // 2)
    return xs, ys

def place_target(exit_pos: Position, grid_w: int, grid_h: int, rng: SeededRandom) -> MotionItem:
    xs, ys = far_quadrant(exit_pos, grid_w, grid_h)
    for _ in range(TARGET_TRIES):
        x = rng.choice(xs)
        y = rng.choice(ys)
        if (x, y) != (exit_pos.x, exit_pos.y):
            return target("target", x, y)
    # distinct from the exit whenever grid_w >= 3
    return target("target", (exit_pos.x + 2) % grid_w, exit_pos.y)

def place_walls(
    items: List[MotionItem], count: int, exit_pos: Position, grid_w: int, grid_h: int, rng: SeededRandom
) -> int:
    placed = 0
    for i in range(count):
        for _ in range(WALL_TRIES):
            candidate = wall(f"wall-{i}", rng.next_int(grid_w), rng.next_int(grid_h))
            if (candidate.x, candidate.y) == (exit_pos.x, exit_pos.y):
                continue
            if is_overlap(candidate, items):
                continue
            items.append(candidate)
            placed += 1
            break
    return placed

def fill_blocks(items: List[MotionItem], level: int, grid_w: int, grid_h: int, rng: SeededRandom) -> None:
    goal = math.ceil(density_ratio(level) * grid_w * grid_h)
    covered = sum(item.area for item in items)
    rate = bar_rate(level)
    serial = 0
    for _ in range(BLOCK_TRIES):
        if covered >= goal:
            break
        if rng.next() < rate:
            bw, bh = (2, 1) if rng.next() < 0.5 else (1, 2)
        else:
            bw, bh = 1, 1
        x = rng.next_int(grid_w - bw + 1)
        y = rng.next_int(grid_h - bh + 1)
        candidate = block(f"block-{serial}", x, y, bw, bh)
        if is_overlap(candidate, items):
            continue
        items.append(candidate)
        covered += candidate.area
        serial += 1

def build_board(
    level: int, exit_pos: Position, grid_w: int, grid_h: int, rng: SeededRandom
) -> Tuple[Tuple[MotionItem, ...], int]:
    """Random board for ``level``; returns the items and the walls placed."""
    items: List[MotionItem] = [place_target(exit_pos, grid_w, grid_h, rng)]
    walls = place_walls(items, wall_count(level), exit_pos, grid_w, grid_h, rng)
    fill_blocks(items, level, grid_w, grid_h, rng)
    return tuple(items), walls

# ---------- Fallback ----------

def fallback_board(exit_pos: Position, grid_w: int, grid_h: int) -> Tuple[MotionItem, ...]:
    """Fixed board: TARGET in the far corner and one loose block beside it."""
    tx = grid_w - 1 if exit_pos.x < grid_w / 2 else 0
    ty = grid_h - 1 if exit_pos.y < grid_h / 2 else 0
    hero = target("target", tx, ty)
    for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
        candidate = block("block-0", tx + dx, ty + dy)
        if not in_bounds(candidate, grid_w, grid_h):
            continue
        if (candidate.x, candidate.y) == (exit_pos.x, exit_pos.y):
            continue
        return hero, candidate
    return (hero,)  # pragma: no cover - a corner always has two in-bound neighbours

# ---------- Top-level generation ----------

def _puzzle(
    level: int,
    seed: int,
    items: Sequence[MotionItem],
    exit_pos: Position,
    grid_w: int,
    grid_h: int,
    min_moves: int,
    attempts: int,
    nodes: int,
    walls: int,
    outcome: str,
) -> MotionPuzzle:
    covered = sum(item.area for item in items)
    metrics = MotionMetrics(
        min_moves_threshold=min_moves_threshold(level),
        attempts=attempts,
        nodes_expanded=nodes,
        num_walls=walls,
        density=round(covered / (grid_w * grid_h), 4),
        outcome=outcome,
    )
    return MotionPuzzle(
        difficulty_level=level,
        seed=seed,
        items=tuple(items),
        exit_pos=exit_pos,
        grid_w=grid_w,
        grid_h=grid_h,
        min_moves=min_moves,
        metrics=metrics,
    )


def generate_puzzle(
    difficulty_level: int,
    seed: Optional[Union[int, str]] = None,
) -> MotionPuzzle:
    """Generate a solvable Motion board for ``difficulty_level``.

    ``seed`` makes the board reproducible; without one a seed is drawn from
    the operating system and recorded on the returned puzzle.  The function
    always returns a solvable board: the first random board that meets the
    move threshold, else the hardest solvable one seen (if it needs more than
    ``TRIVIAL_FLOOR`` moves), else a fixed fallback board.
    """
    if isinstance(difficulty_level, bool) or not isinstance(difficulty_level, int):
        raise TypeError("difficulty_level must be an integer")
    if difficulty_level < 1:
        raise ValueError("difficulty_level must be >= 1")

    numeric_seed = derive_seed(seed) if seed is not None else random.SystemRandom().randrange(MODULUS)
    rng = SeededRandom(numeric_seed)

    grid_w, grid_h = grid_dimensions(difficulty_level)
    exit_pos = random_exit(grid_w, grid_h, rng)
    threshold = min_moves_threshold(difficulty_level)
    limit = threshold + MOVE_CUSHION

    best: Optional[Tuple[Tuple[MotionItem, ...], int, int, int]] = None
    for attempt in range(ATTEMPTS):
        items, walls = build_board(difficulty_level, exit_pos, grid_w, grid_h, rng)
        result = astar_search(items, exit_pos, grid_w, grid_h, limit)
        if result.min_moves is None:
            continue
        if result.min_moves >= threshold:
            return _puzzle(
                difficulty_level, numeric_seed, items, exit_pos, grid_w, grid_h,
                result.min_moves, attempt + 1, result.nodes_expanded, walls, OUTCOME_IDEAL,
            )
        if best is None or result.min_moves > best[1]:
            best = (items, result.min_moves, result.nodes_expanded, walls)

    if best is not None and best[1] > TRIVIAL_FLOOR:
        items, moves, nodes, walls = best
        _LOGGER.debug(
            "motion level %s kept best-effort board with %s moves (threshold %s)",
            difficulty_level,
            moves,
            threshold,
        )
        return _puzzle(
            difficulty_level, numeric_seed, items, exit_pos, grid_w, grid_h,
            moves, ATTEMPTS, nodes, walls, OUTCOME_BEST_EFFORT,
        )

    _LOGGER.warning(
        "motion level %s seed %s produced no usable board in %s attempts; using fallback",
        difficulty_level,
        numeric_seed,
        ATTEMPTS,
    )
    items = fallback_board(exit_pos, grid_w, grid_h)
    result = astar_search(items, exit_pos, grid_w, grid_h, grid_w * grid_h + MOVE_CUSHION)
    moves = result.min_moves if result.min_moves is not None else manhattan(items[0], exit_pos)
    return _puzzle(
        difficulty_level, numeric_seed, items, exit_pos, grid_w, grid_h,
        moves, ATTEMPTS, result.nodes_expanded, 0, OUTCOME_FALLBACK,
    )


def port_generate(level: int, *, seed: Optional[Union[int, str]] = None) -> Dict[str, Any]:
    """Generate a board payload suitable for storage or transport."""

    return generate_puzzle(level, seed).to_dict()


__all__ = [
    "ATTEMPTS",
    "MOVE_CUSHION",
    "MotionMetrics",
    "MotionPuzzle",
    "OUTCOME_BEST_EFFORT",
    "OUTCOME_FALLBACK",
    "OUTCOME_IDEAL",
    "TRIVIAL_FLOOR",
    "bar_rate",
    "build_board",
    "density_ratio",
    "fallback_board",
    "far_quadrant",
    "generate_puzzle",
    "grid_dimensions",
    "min_moves_threshold",
    "perimeter_cells",
    "place_target",
    "port_generate",
    "random_exit",
    "wall_count",
]
