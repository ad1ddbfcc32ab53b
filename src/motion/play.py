"""Player-facing move application and replay of submitted Motion solutions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .items import ItemKind, MotionItem, Position
from .occupancy import DIRECTION_NAMES, Move, apply_move, can_move


@dataclass(frozen=True)
class MotionBoard:
    items: Tuple[MotionItem, ...]
    exit_pos: Position
    grid_w: int
    grid_h: int
    moves: int = 0

    @classmethod
    def from_puzzle(cls, puzzle: Any) -> "MotionBoard":
        return cls(puzzle.items, puzzle.exit_pos, puzzle.grid_w, puzzle.grid_h)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MotionBoard":
        try:
            items = tuple(MotionItem.from_dict(entry) for entry in payload["items"])
            exit_pos = Position(int(payload["exit_pos"]["x"]), int(payload["exit_pos"]["y"]))
            grid_w = int(payload["grid_size"]["w"])
            grid_h = int(payload["grid_size"]["h"])
        except (KeyError, TypeError) as exc:
            raise ValueError("board must define items, exit_pos and grid_size") from exc
        return cls(items, exit_pos, grid_w, grid_h)

    def index_of(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self.items):
            if item.id == item_id:
                return i
        return None


def is_solved(board: MotionBoard) -> bool:
    for item in board.items:
        if item.kind is ItemKind.TARGET:
            return item.x == board.exit_pos.x and item.y == board.exit_pos.y
    return False


def attempt_move(board: MotionBoard, item_id: str, direction: str) -> Optional[MotionBoard]:
    """Move ``item_id`` one cell in ``direction``; ``None`` if the move is illegal."""

    vector = DIRECTION_NAMES.get(str(direction).upper())
    index = board.index_of(item_id)
    if vector is None or index is None:
        return None
    dx, dy = vector
    if not can_move(board.items, index, dx, dy, board.grid_w, board.grid_h):
        return None
    return replace(
        board,
        items=apply_move(board.items, Move(index, dx, dy)),
        moves=board.moves + 1,
    )


def replay(board: MotionBoard, moves: Iterable[Mapping[str, Any]]) -> Tuple[MotionBoard, Optional[int]]:
    """Apply ``moves`` in order; returns the final board and the index of the
    first illegal move, if any."""

    current = board
    for step, move in enumerate(moves):
        nxt = attempt_move(current, str(move.get("item_id", "")), str(move.get("direction", "")))
        if nxt is None:
            return current, step
        current = nxt
        if is_solved(current):
            break
    return current, None


def port_check_answer(puzzle: Mapping[str, Any], answer: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Replay a submitted move list against a board payload."""

    if not isinstance(puzzle, Mapping):
        raise TypeError("puzzle must be a mapping")
    board = MotionBoard.from_dict(puzzle)
    final, illegal_at = replay(board, answer)
    solved = is_solved(final)
    if illegal_at is not None:
        reason = f"Move {illegal_at + 1} is not legal."
    elif solved:
        reason = "Target reached the exit."
    else:
        reason = "Target did not reach the exit."
    return {
        "is_correct": solved and illegal_at is None,
        "reason": reason,
        "moves": final.moves,
        "min_moves": puzzle.get("min_moves"),
    }


__all__ = ["MotionBoard", "attempt_move", "is_solved", "port_check_answer", "replay"]
