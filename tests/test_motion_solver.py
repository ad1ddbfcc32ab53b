from __future__ import annotations

from collections import deque

import pytest

from motion.items import Position, block, target, wall
from motion.occupancy import apply_move, get_valid_moves
from motion.solver import astar_search, port_analyze, solve_astar, target_index


def _bfs(items, exit_pos, grid_w, grid_h):
    start = tuple(items)
    ti = target_index(start)
    seen = {tuple((i.x, i.y) for i in start)}
    queue = deque([(start, 0)])
    while queue:
        state, depth = queue.popleft()
        if (state[ti].x, state[ti].y) == (exit_pos.x, exit_pos.y):
            return depth
        for move in get_valid_moves(state, grid_w, grid_h):
            nxt = apply_move(state, move)
            key = tuple((i.x, i.y) for i in nxt)
            if key not in seen:
                seen.add(key)
                queue.append((nxt, depth + 1))
    return None


BOARDS = [
    ((target("t", 0, 0),), Position(2, 2), 3, 3),
    ((target("t", 0, 0), wall("w0", 1, 0), wall("w1", 1, 1)), Position(2, 0), 3, 3),
    ((target("t", 0, 1), block("b0", 1, 0, 1, 2), block("b1", 2, 1)), Position(3, 1), 4, 3),
    (
        (target("t", 0, 2), block("b0", 1, 1, 1, 2), block("b1", 2, 2, 2, 1), wall("w0", 2, 0)),
        Position(3, 0),
        4,
        3,
    ),
    (
        (target("t", 3, 3), block("b0", 2, 2, 2, 1), block("b1", 1, 3), block("b2", 0, 0, 1, 2)),
        Position(0, 3),
        4,
        4,
    ),
]


@pytest.mark.parametrize("items, exit_pos, grid_w, grid_h", BOARDS)
def test_astar_matches_breadth_first_search(items, exit_pos, grid_w, grid_h) -> None:
    expected = _bfs(items, exit_pos, grid_w, grid_h)
    assert expected is not None
    assert solve_astar(items, exit_pos, grid_w, grid_h, 50) == expected


def test_known_move_counts() -> None:
    items, exit_pos, w, h = BOARDS[0]
    assert solve_astar(items, exit_pos, w, h, 50) == 4
    items, exit_pos, w, h = BOARDS[1]
    assert solve_astar(items, exit_pos, w, h, 50) == 6


def test_already_solved_board() -> None:
    result = astar_search((target("t", 1, 1),), Position(1, 1), 3, 3, 10)
    assert (result.min_moves, result.nodes_expanded, result.reason) == (0, 0, "solved")


def test_unsolvable_board_is_exhausted() -> None:
    items = (target("t", 0, 0), wall("w", 1, 0))
    result = astar_search(items, Position(2, 0), 3, 1, 20)
    assert result.min_moves is None
    assert result.reason == "exhausted"
    assert not result.solvable


def test_move_limit_prunes_longer_solutions() -> None:
    items, exit_pos, w, h = BOARDS[1]
    assert solve_astar(items, exit_pos, w, h, 5) is None
    assert solve_astar(items, exit_pos, w, h, 6) == 6


def test_node_limit() -> None:
    items, exit_pos, w, h = BOARDS[0]
    result = astar_search(items, exit_pos, w, h, 50, max_nodes=1)
    assert result.reason == "node_limit"
    assert result.min_moves is None


def test_target_required() -> None:
    with pytest.raises(ValueError):
        astar_search((block("b", 0, 0),), Position(1, 0), 2, 1, 5)


def test_port_analyze_payload() -> None:
    payload = {
        "items": [item.to_dict() for item in BOARDS[1][0]],
        "exit_pos": {"x": 2, "y": 0},
        "grid_size": {"w": 3, "h": 3},
        "min_moves": 6,
    }
    result = port_analyze(payload)
    assert result == {"min_moves": 6, "nodes_expanded": result["nodes_expanded"], "solvable": True, "reason": "solved"}
    with pytest.raises(ValueError):
        port_analyze({"items": []})
