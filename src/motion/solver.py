"""A* search for the minimum number of single-cell moves on a Motion board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from project_config import get_section

from .heap import MinHeap
from .items import ItemKind, MotionItem, Position
from .occupancy import apply_move, get_valid_moves

MOTION_CONFIG = get_section("motion", default={})
MAX_NODES = int(MOTION_CONFIG.get("max_nodes", 8000))

State = Tuple[MotionItem, ...]


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a search; ``min_moves`` is ``None`` when no solution was found."""

    min_moves: Optional[int]
    nodes_expanded: int
    reason: str

    @property
    def solvable(self) -> bool:
        return self.min_moves is not None


def target_index(items: Sequence[MotionItem]) -> int:
    indices = [i for i, item in enumerate(items) if item.kind is ItemKind.TARGET]
    if len(indices) != 1:
        raise ValueError(f"board must contain exactly one TARGET, found {len(indices)}")
    return indices[0]


def manhattan(item: MotionItem, exit_pos: Position) -> int:
    return abs(item.x - exit_pos.x) + abs(item.y - exit_pos.y)


def _key_order(items: Sequence[MotionItem]) -> List[int]:
    return sorted(range(len(items)), key=lambda i: items[i].id)


def state_key(state: State, order: Sequence[int]) -> Tuple[Tuple[int, int], ...]:
    """Canonical visited-set key: positions listed in item-id order."""

    return tuple((state[i].x, state[i].y) for i in order)


def astar_search(
    items: Sequence[MotionItem],
    exit_pos: Position,
    grid_w: int,
    grid_h: int,
    limit_moves: int,
    *,
    max_nodes: int = MAX_NODES,
) -> SolveResult:
    """Search for the fewest moves that bring the TARGET onto ``exit_pos``.

    Nodes are ordered by ``f = g + h`` with ``h`` the TARGET's Manhattan
    distance to the exit.  States whose ``g`` exceeds ``limit_moves`` are
    pruned and the search gives up after ``max_nodes`` expansions.
    """

    start: State = tuple(items)
    ti = target_index(start)
    if manhattan(start[ti], exit_pos) == 0:
        return SolveResult(0, 0, "solved")

    order = _key_order(start)
    best_g: Dict[Tuple[Tuple[int, int], ...], int] = {state_key(start, order): 0}
    frontier: MinHeap[Tuple[int, State]] = MinHeap()
    frontier.push(manhattan(start[ti], exit_pos), (0, start))
    expanded = 0

    while frontier:
        _, (g, state) = frontier.pop()
        if best_g.get(state_key(state, order), g) < g:
            continue
        if manhattan(state[ti], exit_pos) == 0:
            return SolveResult(g, expanded, "solved")
        if g > limit_moves:
            continue

        expanded += 1
        if expanded > max_nodes:
            return SolveResult(None, expanded, "node_limit")

        ng = g + 1
        if ng > limit_moves:
            continue
        for move in get_valid_moves(state, grid_w, grid_h):
            nxt = apply_move(state, move)
            key = state_key(nxt, order)
            seen = best_g.get(key)
            if seen is not None and seen <= ng:
                continue
            best_g[key] = ng
            frontier.push(ng + manhattan(nxt[ti], exit_pos), (ng, nxt))

    return SolveResult(None, expanded, "exhausted")


def solve_astar(
    items: Sequence[MotionItem],
    exit_pos: Position,
    grid_w: int,
    grid_h: int,
    limit_moves: int,
) -> Optional[int]:
    """Minimum move count, or ``None`` if unsolvable within the search budget."""

    return astar_search(items, exit_pos, grid_w, grid_h, limit_moves).min_moves


def port_analyze(puzzle: Dict[str, Any]) -> Dict[str, Any]:
    """Re-measure a board payload produced by ``port_generate``."""

    if not isinstance(puzzle, dict):
        raise TypeError("puzzle must be a mapping")
    try:
        items = [MotionItem.from_dict(entry) for entry in puzzle["items"]]
        exit_pos = Position(int(puzzle["exit_pos"]["x"]), int(puzzle["exit_pos"]["y"]))
        grid_w = int(puzzle["grid_size"]["w"])
        grid_h = int(puzzle["grid_size"]["h"])
    except (KeyError, TypeError) as exc:
        raise ValueError("puzzle must define items, exit_pos and grid_size") from exc

    baseline = puzzle.get("min_moves")
    if not isinstance(baseline, int):
        baseline = grid_w * grid_h
    limit = baseline + int(MOTION_CONFIG.get("move_cushion", 20))
    result = astar_search(items, exit_pos, grid_w, grid_h, limit)
    return {
        "min_moves": result.min_moves,
        "nodes_expanded": result.nodes_expanded,
        "solvable": result.solvable,
        "reason": result.reason,
    }


__all__ = [
    "MAX_NODES",
    "SolveResult",
    "astar_search",
    "manhattan",
    "port_analyze",
    "solve_astar",
    "state_key",
    "target_index",
]
