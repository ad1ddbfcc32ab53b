"""Collision detection and single-cell move enumeration for Motion boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Sequence, Set, Tuple

from .items import MotionItem

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Move:
    item_index: int
    dx: int
    dy: int


# up, down, left, right
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

DIRECTION_NAMES = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}


def boxes_intersect(a: MotionItem, b: MotionItem) -> bool:
    return a.x < b.x + b.w and a.x + a.w > b.x and a.y < b.y + b.h and a.y + a.h > b.y


def is_overlap(item: MotionItem, items: Iterable[MotionItem]) -> bool:
    """True if ``item`` intersects any other item (same id is ignored)."""

    return any(other.id != item.id and boxes_intersect(item, other) for other in items)


def in_bounds(item: MotionItem, grid_w: int, grid_h: int) -> bool:
    return item.x >= 0 and item.y >= 0 and item.x + item.w <= grid_w and item.y + item.h <= grid_h


def cells_of(item: MotionItem) -> Iterable[Cell]:
    for dy in range(item.h):
        for dx in range(item.w):
            yield item.x + dx, item.y + dy


def occupied_cells(items: Iterable[MotionItem]) -> FrozenSet[Cell]:
    occupied: Set[Cell] = set()
    for item in items:
        occupied.update(cells_of(item))
    return frozenset(occupied)


def leading_edge(item: MotionItem, dx: int, dy: int) -> List[Cell]:
    """Cells the item would newly enter when shifted by (dx, dy)."""

    if dx > 0:
        return [(item.x + item.w, item.y + k) for k in range(item.h)]
    if dx < 0:
        return [(item.x - 1, item.y + k) for k in range(item.h)]
    if dy > 0:
        return [(item.x + k, item.y + item.h) for k in range(item.w)]
    return [(item.x + k, item.y - 1) for k in range(item.w)]


def _edge_clear(edge: Sequence[Cell], occupied: FrozenSet[Cell], grid_w: int, grid_h: int) -> bool:
    for x, y in edge:
        if x < 0 or y < 0 or x >= grid_w or y >= grid_h:
            return False
        if (x, y) in occupied:
            return False
    return True


def can_move(
    items: Sequence[MotionItem], index: int, dx: int, dy: int, grid_w: int, grid_h: int
) -> bool:
    item = items[index]
    if not item.movable:
        return False
    return _edge_clear(leading_edge(item, dx, dy), occupied_cells(items), grid_w, grid_h)


def get_valid_moves(items: Sequence[MotionItem], grid_w: int, grid_h: int) -> List[Move]:
    """Every single-cell translation of a non-WALL item that stays legal.

    A move is legal when the translated box stays inside the grid and does not
    overlap another item.  ``items`` is never mutated.
    """

    occupied = occupied_cells(items)
    moves: List[Move] = []
    for index, item in enumerate(items):
        if not item.movable:
            continue
        for dx, dy in DIRECTIONS:
            if _edge_clear(leading_edge(item, dx, dy), occupied, grid_w, grid_h):
                moves.append(Move(index, dx, dy))
    return moves


def apply_move(items: Sequence[MotionItem], move: Move) -> Tuple[MotionItem, ...]:
    return tuple(
        item.translated(move.dx, move.dy) if i == move.item_index else item
        for i, item in enumerate(items)
    )


__all__ = [
    "DIRECTIONS",
    "DIRECTION_NAMES",
    "Move",
    "apply_move",
    "boxes_intersect",
    "can_move",
    "cells_of",
    "get_valid_moves",
    "in_bounds",
    "is_overlap",
    "leading_edge",
    "occupied_cells",
]
