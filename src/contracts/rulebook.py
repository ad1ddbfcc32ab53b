"""Central registry of invariant rules for puzzle and session payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from geosudo.grid import count_solutions_for_target, is_grid_valid, is_valid_placement
from motion.items import ItemKind, MotionItem, Position
from motion.occupancy import boxes_intersect, in_bounds
from motion.solver import astar_search
from project_config import get_section

from .errors import ValidationIssue, make_error, make_warning
from .profiles import ProfileConfig

_MOVE_CUSHION = int(get_section("motion", default={}).get("move_cushion", 20))


@dataclass(frozen=True)
class InvariantRule:
    name: str
    check: Callable[[dict, ProfileConfig], Iterable[ValidationIssue]]


# ---------- GeoSudo ----------

def _geosudo_grid_shape(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    grid = payload.get("grid")
    shapes = payload.get("shapes")
    size = payload.get("grid_size")
    if not isinstance(grid, list) or not isinstance(shapes, list):
        return [make_error("type.mismatch", "grid and shapes must be arrays", "$.grid")]
    issues: List[ValidationIssue] = []
    if len(grid) != size or any(not isinstance(row, list) or len(row) != size for row in grid):
        issues.append(make_error("invariant.geosudo.grid_size", f"grid must be {size}x{size}", "$.grid"))
    if len(shapes) != size or len(set(shapes)) != len(shapes):
        issues.append(
            make_error("invariant.geosudo.shapes", "shapes must list grid_size distinct symbols", "$.shapes")
        )
    for r, row in enumerate(grid if not issues else []):
        for c, value in enumerate(row):
            if value is not None and value not in shapes:
                issues.append(
                    make_error("invariant.geosudo.unknown_shape", f"unknown shape {value!r}", f"$.grid[{r}][{c}]")
                )
    return issues


def _question_cell(payload: dict) -> tuple[int, int] | None:
    grid = payload.get("grid")
    row = payload.get("question_row")
    col = payload.get("question_col")
    if not isinstance(grid, list) or not isinstance(row, int) or not isinstance(col, int):
        return None
    if not (0 <= row < len(grid)) or not isinstance(grid[row], list) or not (0 <= col < len(grid[row])):
        return None
    return row, col


def _geosudo_latin_square(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    grid = payload.get("grid")
    if isinstance(grid, list) and not is_grid_valid(grid):
        return [make_error("invariant.geosudo.latin_square", "a shape repeats in a row or column", "$.grid")]
    return []


def _geosudo_question_empty(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    cell = _question_cell(payload)
    if cell is None:
        return [make_error("invariant.geosudo.question_bounds", "question cell is outside the grid", "$.question_row")]
    row, col = cell
    if payload["grid"][row][col] is not None:
        return [make_error("invariant.geosudo.question_filled", "question cell must be empty", f"$.grid[{row}][{col}]")]
    return []


def _geosudo_answer_consistent(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    cell = _question_cell(payload)
    answer = payload.get("correct_answer")
    shapes = payload.get("shapes")
    if cell is None or not isinstance(shapes, list):
        return []
    if answer not in shapes:
        return [make_error("invariant.geosudo.answer_unknown", f"correct_answer {answer!r} is not a shape", "$.correct_answer")]
    if not is_valid_placement(payload["grid"], cell[0], cell[1], answer):
        return [
            make_error(
                "invariant.geosudo.answer_conflict",
                f"correct_answer {answer!r} conflicts with its row or column",
                "$.correct_answer",
            )
        ]
    return []


def _geosudo_unique_answer(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    cell = _question_cell(payload)
    shapes = payload.get("shapes")
    if cell is None or not isinstance(shapes, list):
        return []
    count = count_solutions_for_target(payload["grid"], cell[0], cell[1], shapes)
    if count != 1:
        return [
            make_error(
                "invariant.geosudo.answer_not_unique",
                f"question cell admits {count} completable shapes",
                "$.grid",
            )
        ]
    return []


# ---------- Motion ----------

def _motion_items(payload: dict) -> List[MotionItem] | None:
    try:
        return [MotionItem.from_dict(entry) for entry in payload.get("items", [])]
    except (KeyError, TypeError, ValueError):
        return None


def _motion_grid(payload: dict) -> tuple[int, int] | None:
    size = payload.get("grid_size")
    if not isinstance(size, dict):
        return None
    w, h = size.get("w"), size.get("h")
    if not isinstance(w, int) or not isinstance(h, int):
        return None
    return w, h


def _motion_bounds(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    items = _motion_items(payload)
    grid = _motion_grid(payload)
    if items is None or grid is None:
        return [make_error("type.mismatch", "items and grid_size must be well formed", "$.items")]
    return [
        make_error("invariant.motion.out_of_bounds", f"item {item.id!r} leaves the grid", f"$.items[{index}]")
        for index, item in enumerate(items)
        if not in_bounds(item, *grid)
    ]


def _motion_disjoint(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    items = _motion_items(payload) or []
    issues: List[ValidationIssue] = []
    seen_ids = set()
    for index, item in enumerate(items):
        if item.id in seen_ids:
            issues.append(make_error("invariant.motion.duplicate_id", f"item id {item.id!r} repeats", f"$.items[{index}]"))
        seen_ids.add(item.id)
        for other in items[:index]:
            if boxes_intersect(item, other):
                issues.append(
                    make_error(
                        "invariant.motion.overlap",
                        f"items {other.id!r} and {item.id!r} overlap",
                        f"$.items[{index}]",
                    )
                )
    return issues


def _motion_single_target(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    items = _motion_items(payload) or []
    targets = [item for item in items if item.kind is ItemKind.TARGET]
    if len(targets) != 1:
        return [make_error("invariant.motion.target_count", f"expected one TARGET, found {len(targets)}", "$.items")]
    if (targets[0].w, targets[0].h) != (1, 1):
        return [make_error("invariant.motion.target_size", "TARGET must be 1x1", "$.items")]
    return []


def _motion_exit_on_perimeter(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    grid = _motion_grid(payload)
    exit_pos = payload.get("exit_pos")
    if grid is None or not isinstance(exit_pos, dict):
        return []
    w, h = grid
    x, y = exit_pos.get("x"), exit_pos.get("y")
    inside = isinstance(x, int) and isinstance(y, int) and 0 <= x < w and 0 <= y < h
    if not inside or not (x in (0, w - 1) or y in (0, h - 1)):
        return [make_error("invariant.motion.exit_position", "exit must be a perimeter cell", "$.exit_pos")]
    return []


def _motion_solvable(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    items = _motion_items(payload)
    grid = _motion_grid(payload)
    exit_pos = payload.get("exit_pos")
    min_moves = payload.get("min_moves")
    if items is None or grid is None or not isinstance(exit_pos, dict) or not isinstance(min_moves, int):
        return []
    if sum(1 for item in items if item.kind is ItemKind.TARGET) != 1:
        return []
    result = astar_search(
        items, Position(exit_pos["x"], exit_pos["y"]), grid[0], grid[1], min_moves + _MOVE_CUSHION
    )
    if result.reason == "exhausted":
        return [make_error("invariant.motion.unsolvable", "board cannot be solved within the move cushion", "$.items")]
    if result.reason == "node_limit":
        return [make_warning("invariant.motion.search_limit", "solvability not confirmed within the node limit", "$.items")]
    if result.min_moves != min_moves:
        return [
            make_warning(
                "invariant.motion.min_moves_mismatch",
                f"search found {result.min_moves} moves, payload records {min_moves}",
                "$.min_moves",
            )
        ]
    return []


# ---------- Session ----------

def _session_counts(payload: dict, _profile: ProfileConfig) -> Iterable[ValidationIssue]:
    metrics = payload.get("metrics")
    if not isinstance(metrics, dict):
        return []
    total = metrics.get("total_attempts")
    correct = metrics.get("correct_count")
    incorrect = metrics.get("incorrect_count")
    if all(isinstance(v, int) for v in (total, correct, incorrect)) and correct + incorrect != total:
        return [
            make_error(
                "invariant.session.attempt_counts",
                "correct_count + incorrect_count must equal total_attempts",
                "$.metrics.total_attempts",
            )
        ]
    return []


_RULES: Dict[str, List[InvariantRule]] = {
    "GeoSudoPuzzle": [
        InvariantRule("geosudo_grid_shape", _geosudo_grid_shape),
        InvariantRule("geosudo_latin_square", _geosudo_latin_square),
        InvariantRule("geosudo_question_empty", _geosudo_question_empty),
        InvariantRule("geosudo_answer_consistent", _geosudo_answer_consistent),
        InvariantRule("geosudo_unique_answer", _geosudo_unique_answer),
    ],
    "MotionPuzzle": [
        InvariantRule("motion_bounds", _motion_bounds),
        InvariantRule("motion_disjoint", _motion_disjoint),
        InvariantRule("motion_single_target", _motion_single_target),
        InvariantRule("motion_exit_on_perimeter", _motion_exit_on_perimeter),
        InvariantRule("motion_solvable", _motion_solvable),
    ],
    "SessionResult": [
        InvariantRule("session_counts", _session_counts),
    ],
}


def run_invariants(payload: dict, payload_type: str, profile: ProfileConfig) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for rule in _RULES.get(payload_type, []):
        if profile.is_invariant_enabled(payload_type, rule.name):
            issues.extend(rule.check(payload, profile))
    return issues


RULES = _RULES

__all__ = ["InvariantRule", "RULES", "run_invariants"]
