from __future__ import annotations

import pytest

from motion.heap import MinHeap
from motion.items import ItemKind, MotionItem, Orientation, Position, block, target, wall
from motion.occupancy import (
    Move,
    apply_move,
    can_move,
    get_valid_moves,
    in_bounds,
    is_overlap,
    leading_edge,
)


def _board():
    return (
        target("target", 0, 0),
        block("bar", 1, 0, 2, 1),
        wall("wall-0", 0, 1),
    )


def test_item_geometry() -> None:
    bar = block("bar", 1, 0, 2, 1)
    assert bar.orientation is Orientation.HORIZONTAL
    assert block("post", 0, 0, 1, 2).orientation is Orientation.VERTICAL
    assert target("t", 0, 0).orientation is Orientation.SQUARE
    assert bar.area == 2
    assert bar.covers(Position(2, 0))
    assert not bar.covers(Position(3, 0))
    assert not wall("w", 0, 0).movable


def test_item_dict_round_trip_keeps_kind() -> None:
    item = MotionItem.from_dict({"id": "b", "type": "block", "x": 1, "y": 2, "w": 1, "h": 2})
    assert item.kind is ItemKind.BLOCK
    assert item.to_dict() == {"id": "b", "type": "BLOCK", "x": 1, "y": 2, "w": 1, "h": 2}
    with pytest.raises(ValueError):
        MotionItem.from_dict({"id": "x", "type": "ghost", "x": 0, "y": 0})


def test_overlap_and_bounds() -> None:
    items = _board()
    assert is_overlap(block("probe", 2, 0), items)
    assert not is_overlap(block("probe", 3, 0), items)
    # an item never overlaps itself
    assert not is_overlap(items[1], items)
    assert in_bounds(items[1], 3, 2)
    assert not in_bounds(items[1], 2, 2)


def test_leading_edge() -> None:
    bar = block("bar", 1, 0, 2, 1)
    assert leading_edge(bar, 1, 0) == [(3, 0)]
    assert leading_edge(bar, -1, 0) == [(0, 0)]
    assert leading_edge(bar, 0, 1) == [(1, 1), (2, 1)]


def test_moves_respect_walls_items_and_edges() -> None:
    items = _board()
    assert not can_move(items, 0, 1, 0, 4, 4)
    assert not can_move(items, 0, 0, 1, 4, 4)
    assert not can_move(items, 0, -1, 0, 4, 4)
    assert can_move(items, 1, 1, 0, 4, 4)
    assert not can_move(items, 1, 1, 0, 3, 4)
    assert not can_move(items, 2, 1, 0, 4, 4)


def test_get_valid_moves_order_and_purity() -> None:
    items = _board()
    snapshot = tuple(items)
    assert get_valid_moves(items, 4, 4) == [Move(1, 0, 1), Move(1, 1, 0)]
    assert items == snapshot


def test_apply_move_returns_new_state() -> None:
    items = _board()
    moved = apply_move(items, Move(1, 1, 0))
    assert moved[1].x == 2
    assert items[1].x == 1
    assert moved[0] is items[0]


def test_heap_pops_smallest_then_fifo() -> None:
    heap: MinHeap[str] = MinHeap()
    heap.push(5, "a")
    heap.push(1, "b")
    heap.push(5, "c")
    heap.push(1, "d")
    assert len(heap) == 4
    assert [heap.pop()[1] for _ in range(4)] == ["b", "d", "a", "c"]
    assert not heap


def test_heap_never_compares_items() -> None:
    heap: MinHeap[dict] = MinHeap()
    heap.push(0, {"x": 1})
    heap.push(0, {"x": 2})
    assert heap.pop() == (0, {"x": 1})
