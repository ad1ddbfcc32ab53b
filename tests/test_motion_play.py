from __future__ import annotations

import pytest

from motion.items import Position, block, target, wall
from motion.play import MotionBoard, attempt_move, is_solved, port_check_answer, replay


def _board() -> MotionBoard:
    items = (target("target", 0, 0), block("block-0", 1, 1), wall("wall-0", 2, 1))
    return MotionBoard(items=items, exit_pos=Position(2, 0), grid_w=3, grid_h=2)


def _payload() -> dict:
    board = _board()
    return {
        "items": [item.to_dict() for item in board.items],
        "exit_pos": {"x": 2, "y": 0},
        "grid_size": {"w": 3, "h": 2},
        "min_moves": 2,
    }


def test_attempt_move_advances_and_counts() -> None:
    board = _board()
    moved = attempt_move(board, "target", "RIGHT")
    assert moved is not None
    assert moved.moves == 1
    assert moved.items[0].x == 1
    assert board.items[0].x == 0
    assert not is_solved(moved)
    solved = attempt_move(moved, "target", "right")
    assert solved is not None
    assert is_solved(solved)


@pytest.mark.parametrize(
    "item_id, direction",
    [
        ("wall-0", "LEFT"),
        ("target", "UP"),
        ("target", "LEFT"),
        ("missing", "RIGHT"),
        ("target", "SIDEWAYS"),
    ],
)
def test_illegal_moves_return_none(item_id: str, direction: str) -> None:
    assert attempt_move(_board(), item_id, direction) is None


def test_replay_stops_at_first_illegal_move() -> None:
    final, illegal_at = replay(
        _board(),
        [
            {"item_id": "target", "direction": "RIGHT"},
            {"item_id": "target", "direction": "DOWN"},
        ],
    )
    assert illegal_at == 1
    assert final.moves == 1


def test_board_from_payload() -> None:
    board = MotionBoard.from_dict(_payload())
    assert board == _board()
    with pytest.raises(ValueError):
        MotionBoard.from_dict({"items": []})


def test_port_check_answer() -> None:
    answer = [
        {"item_id": "target", "direction": "RIGHT"},
        {"item_id": "target", "direction": "RIGHT"},
    ]
    verdict = port_check_answer(_payload(), answer)
    assert verdict == {
        "is_correct": True,
        "reason": "Target reached the exit.",
        "moves": 2,
        "min_moves": 2,
    }
    partial = port_check_answer(_payload(), answer[:1])
    assert partial["is_correct"] is False
    assert partial["reason"] == "Target did not reach the exit."
    illegal = port_check_answer(_payload(), [{"item_id": "block-0", "direction": "RIGHT"}])
    assert illegal["reason"] == "Move 1 is not legal."
