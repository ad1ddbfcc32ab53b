from __future__ import annotations

import pytest

from motion.generator import (
    MOVE_CUSHION,
    OUTCOME_FALLBACK,
    OUTCOME_IDEAL,
    TRIVIAL_FLOOR,
    density_ratio,
    fallback_board,
    far_quadrant,
    generate_puzzle,
    grid_dimensions,
    min_moves_threshold,
    perimeter_cells,
    port_generate,
    wall_count,
)
from motion.items import ItemKind, Position
from motion.occupancy import boxes_intersect, in_bounds
from motion.solver import astar_search


def _assert_board_invariants(puzzle) -> None:
    items = puzzle.items
    assert sum(1 for item in items if item.kind is ItemKind.TARGET) == 1
    assert all(in_bounds(item, puzzle.grid_w, puzzle.grid_h) for item in items)
    for i, a in enumerate(items):
        for b in items[i + 1:]:
            assert not boxes_intersect(a, b)
    assert puzzle.exit_pos in perimeter_cells(puzzle.grid_w, puzzle.grid_h)
    assert len({item.id for item in items}) == len(items)


def _search_limit(puzzle) -> int:
    if puzzle.metrics.outcome == OUTCOME_FALLBACK:
        return puzzle.grid_w * puzzle.grid_h + MOVE_CUSHION
    return min_moves_threshold(puzzle.difficulty_level) + MOVE_CUSHION


def test_level_curves() -> None:
    assert grid_dimensions(1) == (4, 5)
    assert grid_dimensions(3) == (4, 5)
    assert grid_dimensions(4) == (4, 6)
    assert grid_dimensions(7) == (5, 6)
    assert grid_dimensions(12) == (5, 7)
    assert min_moves_threshold(1) == 8
    assert min_moves_threshold(12) == 30
    assert min_moves_threshold(40) == 30
    assert density_ratio(1) == pytest.approx(0.38)
    assert density_ratio(20) == pytest.approx(0.6)
    assert wall_count(2) == 0
    assert wall_count(7) == 2


def test_far_quadrant_is_opposite_the_exit() -> None:
    xs, ys = far_quadrant(Position(0, 0), 4, 5)
    assert list(xs) == [2, 3]
    assert list(ys) == [2, 3, 4]
    xs, ys = far_quadrant(Position(3, 4), 4, 5)
    assert list(xs) == [0, 1]
    assert list(ys) == [0, 1, 2]


def test_fallback_board_is_solvable() -> None:
    exit_pos = Position(0, 0)
    items = fallback_board(exit_pos, 4, 5)
    assert items[0].kind is ItemKind.TARGET
    assert (items[0].x, items[0].y) == (3, 4)
    assert len(items) == 2
    assert astar_search(items, exit_pos, 4, 5, 40).min_moves == 7


@pytest.mark.parametrize("level", [1, 2, 5, 8, 12])
def test_generated_boards_are_legal_and_solvable(level: int) -> None:
    puzzle = generate_puzzle(level, seed=f"motion-{level}")
    _assert_board_invariants(puzzle)
    assert puzzle.grid_size == grid_dimensions(level)
    result = astar_search(puzzle.items, puzzle.exit_pos, puzzle.grid_w, puzzle.grid_h, _search_limit(puzzle))
    assert result.min_moves == puzzle.min_moves
    if puzzle.metrics.outcome == OUTCOME_IDEAL:
        assert puzzle.min_moves >= min_moves_threshold(level)
    elif puzzle.metrics.outcome != OUTCOME_FALLBACK:
        assert puzzle.min_moves > TRIVIAL_FLOOR


def test_level_one_has_no_walls() -> None:
    puzzle = generate_puzzle(1, seed=3)
    assert puzzle.grid_size == (4, 5)
    assert not any(item.kind is ItemKind.WALL for item in puzzle.items)
    assert puzzle.metrics.num_walls == 0


def test_seeded_generation_is_deterministic() -> None:
    assert generate_puzzle(4, seed="abc") == generate_puzzle(4, seed="abc")


def test_missing_seed_is_recorded() -> None:
    puzzle = generate_puzzle(2)
    assert isinstance(puzzle.seed, int)
    assert generate_puzzle(2, seed=puzzle.seed) == puzzle


def test_rejects_bad_levels() -> None:
    with pytest.raises(ValueError):
        generate_puzzle(0, seed=1)
    with pytest.raises(TypeError):
        generate_puzzle("1", seed=1)  # type: ignore[arg-type]


def test_port_generate_payload() -> None:
    payload = port_generate(3, seed=21)
    assert payload["difficulty_level"] == 3
    assert payload["grid_size"] == {"w": 4, "h": 5}
    assert set(payload["exit_pos"]) == {"x", "y"}
    assert sum(1 for item in payload["items"] if item["type"] == "TARGET") == 1
    assert payload["metrics"]["outcome"] in {"ideal", "best_effort", "fallback"}
